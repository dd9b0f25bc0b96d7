"""Top-down pygame viewer for the backrooms grid.

Renders:
- Wall cells as squares centred on their mapped world position (the same
  point the collision push-back uses)
- Agent collision circle and facing direction
- HUD text lines

The view follows the agent. World x runs right, world z runs down the screen.
Supports windowed (interactive) and headless modes. Returns frames for recording.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence
import os

import numpy as np
import pygame

from backrooms.config import ViewerConfig
from backrooms.sim.grid import Grid


@dataclass
class Colors:
    background: tuple[int, int, int] = (28, 26, 18)
    floor: tuple[int, int, int] = (120, 110, 70)
    wall: tuple[int, int, int] = (214, 200, 130)
    agent: tuple[int, int, int] = (50, 180, 255)
    agent_heading: tuple[int, int, int] = (0, 255, 0)
    text: tuple[int, int, int] = (255, 255, 255)


@dataclass
class RenderOptions:
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    colors: Colors = field(default_factory=Colors)


class Renderer:
    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        display: bool = True,
    ) -> None:
        self.opts = options or RenderOptions()
        self.viz = self.opts.viewer
        self.colors = self.opts.colors
        self.width, self.height = self.viz.size_px
        self.scale = min(self.width, self.height) / self.viz.view_span
        self.display = bool(display)
        self._cx = 0.0
        self._cz = 0.0

        if not self.display:
            os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

        pygame.init()
        if self.display:
            self.screen = pygame.display.set_mode((self.width, self.height))
        else:
            self.screen = pygame.Surface((self.width, self.height))
        pygame.display.set_caption("Backrooms")
        self.clock = pygame.time.Clock()
        pygame.font.init()
        self.font = pygame.font.SysFont("Courier", 14)

    def world_to_screen(self, x: float, z: float) -> tuple[int, int]:
        sx = int(self.width / 2 + (x - self._cx) * self.scale)
        sy = int(self.height / 2 + (z - self._cz) * self.scale)
        return sx, sy

    def draw_grid(self, grid: Grid) -> None:
        mapping = grid.mapping
        cell = mapping.cell_size
        half_w = self.width / (2 * self.scale)
        half_h = self.height / (2 * self.scale)

        # Only the cells that can intersect the window
        x0, y0 = mapping.world_to_cell(self._cx - half_w - cell, self._cz - half_h - cell)
        x1, y1 = mapping.world_to_cell(self._cx + half_w + cell, self._cz + half_h + cell)
        x0, y0 = max(0, x0), max(0, y0)
        x1, y1 = min(grid.width - 1, x1), min(grid.height - 1, y1)
        if x0 > x1 or y0 > y1:
            return

        fw, fh = mapping.world_extent()
        fx, fz = self.world_to_screen(-(fw + cell) / 2, -(fh + cell) / 2)
        pygame.draw.rect(
            self.screen,
            self.colors.floor,
            pygame.Rect(fx, fz, int(fw * self.scale), int(fh * self.scale)),
        )

        size_px = int(np.ceil(cell * self.scale)) + 1
        window = grid.walls[y0 : y1 + 1, x0 : x1 + 1]
        ys, xs = np.nonzero(window)
        for y, x in zip(ys + y0, xs + x0):
            wx, wz = mapping.cell_to_world(int(x), int(y))
            sx, sy = self.world_to_screen(wx - cell / 2, wz - cell / 2)
            pygame.draw.rect(self.screen, self.colors.wall, pygame.Rect(sx, sy, size_px, size_px))

    def draw_agent(
        self, x: float, z: float, radius: float, facing: Optional[Sequence[float]] = None
    ) -> None:
        sx, sy = self.world_to_screen(x, z)
        r_px = max(2, int(radius * self.scale))
        pygame.draw.circle(self.screen, self.colors.agent, (sx, sy), r_px, width=2)
        if facing is not None:
            fx, fz = float(facing[0]), float(facing[2])
            norm = float(np.hypot(fx, fz))
            if norm > 0.0:
                hx = x + radius * 2.0 * fx / norm
                hz = z + radius * 2.0 * fz / norm
                pygame.draw.line(
                    self.screen,
                    self.colors.agent_heading,
                    (sx, sy),
                    self.world_to_screen(hx, hz),
                    width=2,
                )

    def draw_hud(self, lines: Sequence[str], y0: int = 10) -> None:
        x, y = 10, y0
        for line in lines:
            surf = self.font.render(line, True, self.colors.text)
            self.screen.blit(surf, (x, y))
            y += 18

    def render_frame(
        self,
        grid: Optional[Grid],
        position: tuple[float, float],
        radius: float,
        facing: Optional[Sequence[float]] = None,
        hud: Optional[Sequence[str]] = None,
    ) -> "pygame.Surface":
        self._cx, self._cz = float(position[0]), float(position[1])
        self.screen.fill(self.colors.background)

        if grid is not None and not grid.is_empty:
            self.draw_grid(grid)
        self.draw_agent(self._cx, self._cz, radius, facing)
        if hud and self.viz.show_hud:
            self.draw_hud(hud)

        if self.display:
            pygame.display.flip()
            self.clock.tick(self.viz.fps)
        return self.screen

    def close(self) -> None:
        if self.display:
            pygame.display.quit()
        pygame.quit()
