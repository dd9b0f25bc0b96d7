"""Shared mapping between grid cell indices and continuous world coordinates.

Design decisions:
- The grid is centred on the world origin: cell (x, y) maps to
  world ((x - W/2) * cell, (y - H/2) * cell) on the (x, z) ground plane.
- The inverse is the floor of the inverse transform. A small tolerance absorbs
  float rounding so that every integer cell survives a round trip.
- Generation, collision and rendering all go through this one type.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor
from typing import Tuple

_FLOOR_TOL = 1e-9


@dataclass(frozen=True)
class CoordinateMapping:
    """Affine cell <-> world transform for a ``width x height`` grid."""

    width: int
    height: int
    cell_size: float

    def cell_to_world(self, x: int, y: int) -> Tuple[float, float]:
        """World (x, z) of the cell anchor used for rendering and push-back."""
        return (
            (x - self.width / 2) * self.cell_size,
            (y - self.height / 2) * self.cell_size,
        )

    def world_to_cell(self, wx: float, wz: float) -> Tuple[int, int]:
        """Cell indices (cx, cy) under a world position. Not clipped."""
        cx = floor(wx / self.cell_size + self.width / 2 + _FLOOR_TOL)
        cy = floor(wz / self.cell_size + self.height / 2 + _FLOOR_TOL)
        return int(cx), int(cy)

    def in_outer_ring(self, cx: int, cy: int) -> bool:
        """True when the cell is on (or beyond) the border ring."""
        return cx < 1 or cy < 1 or cx >= self.width - 1 or cy >= self.height - 1

    def clamp_limits(self) -> Tuple[float, float]:
        """Half-extents of the safety box used when the agent reaches the ring.

        Grids narrower than 5 cells on an axis have no room for the box; the
        limit floors at 0 so the agent snaps to the centre line, not across it.
        """
        return (
            max(0.0, (self.width / 2 - 2) * self.cell_size),
            max(0.0, (self.height / 2 - 2) * self.cell_size),
        )

    def world_extent(self) -> Tuple[float, float]:
        """Size of the floor plane covered by the grid."""
        return self.width * self.cell_size, self.height * self.cell_size
