"""Procedural maze-like grid generation.

Responsibilities:
- Build a deterministic occupancy grid from (width, height, seed).
- Border ring is always WALL; interior cells are thresholded from a simplex
  noise field plus one sequential random draw per cell.

Known limitation: there is no connectivity repair pass. Open cells may form
isolated pockets and no two open cells are guaranteed to be mutually
reachable. ``label_open_regions`` reports the fragmentation without fixing it.
"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from scipy import ndimage

from backrooms.constants import (
    CELL_SIZE,
    CORRIDOR_THRESHOLD,
    NOISE_SCALE,
    RANDOM_WEIGHT,
)
from backrooms.errors import InvalidConfiguration, InvalidDimensions
from backrooms.sim.coords import CoordinateMapping
from backrooms.sim.grid import Grid
from backrooms.sim.noise import SimplexNoise2D
from backrooms.sim.rng import Mulberry32

logger = logging.getLogger(__name__)


def generate(
    width: int,
    height: int,
    seed: int,
    *,
    cell_size: float = CELL_SIZE,
    corridor_threshold: float = CORRIDOR_THRESHOLD,
) -> Grid:
    """Generate a ``width x height`` grid for ``seed``.

    Interior cells are visited row-major (y outer, x inner) and each consumes
    exactly one value from the seeded random source, so the traversal order is
    part of the result for a given seed.

    Raises:
        InvalidDimensions: width or height below 3.
        InvalidConfiguration: non-positive cell size or threshold outside [0, 2].
    """
    if width < 3 or height < 3:
        raise InvalidDimensions(width, height)
    if not cell_size > 0.0:
        raise InvalidConfiguration(f"cell_size must be > 0, got {cell_size}")
    if not 0.0 <= corridor_threshold <= 2.0:
        raise InvalidConfiguration(
            f"corridor_threshold must be in [0, 2], got {corridor_threshold}"
        )

    seed = int(seed) & 0xFFFFFFFF
    walls = np.zeros((height, width), dtype=bool)
    walls[0, :] = True
    walls[-1, :] = True
    walls[:, 0] = True
    walls[:, -1] = True

    simplex = SimplexNoise2D(seed)
    rand = Mulberry32(seed)

    # Interior coordinates in row-major order; draws line up with ravel order
    ys, xs = np.mgrid[1 : height - 1, 1 : width - 1]
    n = simplex.noise2d(xs / NOISE_SCALE, ys / NOISE_SCALE) * 0.5 + 0.5
    r = rand.draw(xs.size).reshape(xs.shape)
    walls[1:-1, 1:-1] = (n + r * RANDOM_WEIGHT) > corridor_threshold

    grid = Grid(walls, CoordinateMapping(width, height, float(cell_size)), seed)
    logger.debug(
        "generated %dx%d grid seed=%d open=%.3f", width, height, seed, grid.open_fraction()
    )
    return grid


def label_open_regions(grid: Grid) -> Tuple[int, np.ndarray]:
    """Label 4-connected OPEN regions.

    Returns:
        (count, labels) where labels[y, x] is 0 for walls and 1..count otherwise.
    """
    if grid.is_empty:
        return 0, np.zeros(grid.walls.shape, dtype=np.int32)
    labels, count = ndimage.label(~grid.walls)
    return int(count), labels
