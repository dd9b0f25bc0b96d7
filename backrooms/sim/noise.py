"""Seeded 2D simplex noise evaluated over numpy arrays.

Classic 2D simplex noise (skewed triangular lattice, 12 edge gradients,
radial falloff 0.5 - r^2). Output is scaled by 70 so values fall in about
[-1, 1]. The permutation table is shuffled from ``numpy.random.default_rng``
seeded with the map seed, so the field is reproducible from that one value.
"""

from __future__ import annotations

from math import sqrt

import numpy as np

_F2 = 0.5 * (sqrt(3.0) - 1.0)
_G2 = (3.0 - sqrt(3.0)) / 6.0

_GRAD3 = np.array(
    [
        (1, 1), (-1, 1), (1, -1), (-1, -1),
        (1, 0), (-1, 0), (1, 0), (-1, 0),
        (0, 1), (0, -1), (0, 1), (0, -1),
    ],
    dtype=np.float64,
)


class SimplexNoise2D:
    """Coherent 2D noise with a seed-derived permutation table.

    Args:
        seed: integer seed; identical seeds give identical fields.
    """

    def __init__(self, seed: int) -> None:
        rng = np.random.default_rng(int(seed) & 0xFFFFFFFF)
        p = rng.permutation(256).astype(np.int64)
        self._perm = np.concatenate([p, p])
        self._perm_mod12 = self._perm % 12

    def _corner(self, gi: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        t = 0.5 - dx * dx - dy * dy
        g = _GRAD3[gi]
        dot = g[..., 0] * dx + g[..., 1] * dy
        t2 = t * t
        return np.where(t < 0.0, 0.0, t2 * t2 * dot)

    def noise2d(self, x, y):
        """Noise value(s) at (x, y). Accepts scalars or broadcastable arrays."""
        xa = np.asarray(x, dtype=np.float64)
        ya = np.asarray(y, dtype=np.float64)
        xa, ya = np.broadcast_arrays(xa, ya)

        # Skew into simplex cell space
        s = (xa + ya) * _F2
        i = np.floor(xa + s).astype(np.int64)
        j = np.floor(ya + s).astype(np.int64)
        t = (i + j) * _G2
        x0 = xa - (i - t)
        y0 = ya - (j - t)

        # Lower or upper triangle of the rhombus
        i1 = (x0 > y0).astype(np.int64)
        j1 = 1 - i1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        perm = self._perm
        pm12 = self._perm_mod12
        gi0 = pm12[ii + perm[jj]]
        gi1 = pm12[ii + i1 + perm[jj + j1]]
        gi2 = pm12[ii + 1 + perm[jj + 1]]

        n = self._corner(gi0, x0, y0) + self._corner(gi1, x1, y1) + self._corner(gi2, x2, y2)
        out = 70.0 * n
        if out.ndim == 0:
            return float(out)
        return out
