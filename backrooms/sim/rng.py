"""Seeded sequential random source for map generation.

Mulberry32: a 32-bit counter passed through an integer bit mixer. The state is
a single uint32 held on the instance, so two generators built from the same
seed always yield the same sequence and nothing leaks between runs.
"""

from __future__ import annotations

import numpy as np

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Deterministic uniform floats in [0, 1).

    Interface:
    - random() -> float, advances the state by one
    - draw(n) -> np.ndarray of the next n values
    - state: current uint32 state
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed) & _MASK32
        self.state = self.seed

    def random(self) -> float:
        t = (self.state + _INCREMENT) & _MASK32
        self.state = t
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / _TWO_POW_32

    def draw(self, n: int) -> np.ndarray:
        """Return the next ``n`` values in sequence order."""
        out = np.empty((int(n),), dtype=np.float64)
        for k in range(out.shape[0]):
            out[k] = self.random()
        return out
