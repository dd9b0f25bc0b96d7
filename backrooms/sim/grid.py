"""Immutable occupancy grid.

Grid convention: walls[y, x] is True when cell (x, y) is a WALL. The array is
flagged read-only after construction; a new seed means a new Grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Tuple

import numpy as np

from backrooms.constants import CELL_SIZE
from backrooms.errors import InvalidDimensions
from backrooms.sim.coords import CoordinateMapping


class CellState(IntEnum):
    OPEN = 0
    WALL = 1


@dataclass(frozen=True, eq=False)
class Grid:
    """Read-only ``width x height`` table of OPEN/WALL cells."""

    walls: np.ndarray
    mapping: CoordinateMapping
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        walls = np.array(self.walls, dtype=bool, copy=True)
        if walls.ndim != 2:
            raise ValueError("walls must be 2D")
        if (self.mapping.width, self.mapping.height) != walls.shape[::-1]:
            raise ValueError(
                f"mapping is {self.mapping.width}x{self.mapping.height} "
                f"but walls are {walls.shape[1]}x{walls.shape[0]}"
            )
        walls.setflags(write=False)
        object.__setattr__(self, "walls", walls)

    @classmethod
    def from_walls(
        cls, walls: np.ndarray, cell_size: float = CELL_SIZE, seed: Optional[int] = None
    ) -> "Grid":
        """Wrap a copy of an existing boolean array (True = WALL)."""
        arr = np.asarray(walls, dtype=bool)
        if arr.ndim != 2:
            raise ValueError("walls must be 2D")
        h, w = arr.shape
        return cls(arr, CoordinateMapping(w, h, float(cell_size)), seed)

    @classmethod
    def enclosed(cls, width: int, height: int, cell_size: float = CELL_SIZE) -> "Grid":
        """Border ring of walls around an empty interior."""
        if width < 3 or height < 3:
            raise InvalidDimensions(width, height)
        arr = np.zeros((height, width), dtype=bool)
        arr[0, :] = True
        arr[-1, :] = True
        arr[:, 0] = True
        arr[:, -1] = True
        return cls(arr, CoordinateMapping(width, height, float(cell_size)))

    @property
    def width(self) -> int:
        return int(self.walls.shape[1])

    @property
    def height(self) -> int:
        return int(self.walls.shape[0])

    @property
    def cell_size(self) -> float:
        return self.mapping.cell_size

    @property
    def is_empty(self) -> bool:
        return self.walls.size == 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> CellState:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return CellState.WALL if self.walls[y, x] else CellState.OPEN

    def is_wall(self, x: int, y: int) -> bool:
        """Out-of-bounds cells are not walls; callers bound-check first."""
        return self.in_bounds(x, y) and bool(self.walls[y, x])

    def wall_cells(self) -> Iterator[Tuple[int, int, CellState]]:
        """Yield (x, y, WALL) for every wall, row-major. Read-only export for renderers."""
        ys, xs = np.nonzero(self.walls)
        for y, x in zip(ys, xs):
            yield int(x), int(y), CellState.WALL

    def open_fraction(self) -> float:
        if self.is_empty:
            return 0.0
        return float(1.0 - self.walls.mean())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.mapping == other.mapping and np.array_equal(self.walls, other.walls)

    def __hash__(self) -> int:
        return hash((self.mapping, self.walls.tobytes()))
