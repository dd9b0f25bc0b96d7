"""Default world and agent constants.

World units are the same as the cell size (one cell spans CELL_SIZE units).
"""

MAP_WIDTH = 160
MAP_HEIGHT = 160
CELL_SIZE = 10.0
SEED = 42
WALL_HEIGHT = 3.0
CORRIDOR_THRESHOLD = 0.45

# Noise sampling frequency: cells per noise unit
NOISE_SCALE = 20.0
# Weight of the per-cell random draw added to the noise value
RANDOM_WEIGHT = 0.6

AGENT_SPEED = 8.0
AGENT_RADIUS = 1.6
EYE_HEIGHT = 1.6
VELOCITY_SMOOTHING = 0.2

# Below this centre distance a wall push has no defined direction
PUSH_EPSILON = 1e-3
