"""Simulation session: one generated grid plus the agent moving through it.

The session is what a frame driver talks to. It regenerates the grid
wholesale when the seed changes and exposes plain-data exports for a
renderer (wall instances, camera position, HUD text).
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from backrooms.config import SimConfig
from backrooms.sim.controller import AgentController, AgentState, MovementIntent
from backrooms.sim.grid import Grid
from backrooms.sim.map_gen import generate

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


class MazeSession:
    def __init__(self, config: Optional[SimConfig] = None) -> None:
        self.config = config or SimConfig()
        agent = self.config.agent
        self.controller = AgentController(
            grid=None,
            speed=agent.speed,
            radius=agent.radius,
            smoothing=agent.smoothing,
        )
        self._grid: Optional[Grid] = None
        self._seed = self.config.map.seed
        self.reseed(self._seed)

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> AgentState:
        return self.controller.get_state()

    def reseed(self, seed: int) -> Grid:
        """Replace the grid with a freshly generated one. The agent keeps its position."""
        m = self.config.map
        grid = generate(
            m.width,
            m.height,
            seed,
            cell_size=m.cell_size,
            corridor_threshold=m.corridor_threshold,
        )
        self._grid = grid
        self._seed = int(seed) & 0xFFFFFFFF
        self.controller.set_grid(grid)
        logger.info(
            "seed=%d map=%dx%d open=%.1f%%",
            self._seed,
            m.width,
            m.height,
            100.0 * grid.open_fraction(),
        )
        return grid

    def step(self, intent: MovementIntent, dt: float) -> AgentState:
        return self.controller.step(intent, dt)

    def camera_position(self) -> Vec3:
        s = self.controller.get_state()
        return (s.x, self.config.agent.eye_height, s.z)

    def wall_instances(self) -> Iterator[Tuple[Vec3, Vec3]]:
        """Yield (position, scale) of one box per wall cell, resting on the floor."""
        if self._grid is None:
            return
        m = self.config.map
        size = max(0.001, m.cell_size)
        mapping = self._grid.mapping
        for x, y, _ in self._grid.wall_cells():
            wx, wz = mapping.cell_to_world(x, y)
            yield (wx, m.wall_height / 2, wz), (size, m.wall_height, size)

    def hud_lines(self) -> List[str]:
        m = self.config.map
        return [
            f"seed: {self._seed}",
            f"map: {m.width} x {m.height} cells, cell size: {m.cell_size:g}",
            "WASD to move, arrows/mouse to look, R to reseed",
        ]
