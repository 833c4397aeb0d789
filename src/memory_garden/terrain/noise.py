"""Seeded gradient noise for terrain generation.

Provides a Perlin-style 2D gradient noise generator whose permutation
table is built from an integer seed, plus the shared smoothing curves.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

PERMUTATION_SIZE = 256

# Linear congruential generator constants for the permutation shuffle
_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280


def _lcg_stream(seed: int):
    """Yield uniform draws in [0, 1) from the seeded LCG."""
    state = seed
    while True:
        # Python's modulus is non-negative, so negative seeds stay in range
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        yield state / _LCG_MODULUS


def build_permutation(seed: int) -> NDArray[np.int64]:
    """Build the doubled permutation table for a seed.

    Shuffles 0..255 with Fisher-Yates driven by the LCG stream, then
    duplicates the table so corner lookups never need a modulo.

    Args:
        seed: Integer seed (any sign).

    Returns:
        Read-only array of length 512.
    """
    perm = list(range(PERMUTATION_SIZE))
    draws = _lcg_stream(seed)
    for i in range(PERMUTATION_SIZE - 1, 0, -1):
        j = math.floor(next(draws) * (i + 1))
        perm[i], perm[j] = perm[j], perm[i]

    table = np.array(perm + perm, dtype=np.int64)
    table.flags.writeable = False
    return table


def fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic smoothing curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t, a, b):
    return a + t * (b - a)


def _grad(hash_: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]):
    """Dot product with one of the hash-selected pseudo-gradients."""
    h = hash_ & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, 0.0))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


class TerrainNoise:
    """2D gradient noise with a seed-owned permutation table.

    Output is continuous, C1-smooth and periodic with period 256 on both
    axes. The table is built once and never mutated, so one instance can
    back any number of heightmaps generated from the same seed.
    """

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed
        self._perm = build_permutation(seed)

    @property
    def permutation(self) -> NDArray[np.int64]:
        """The doubled (512 entry) read-only permutation table."""
        return self._perm

    def noise_2d(self, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
        """Evaluate noise at arrays of coordinates.

        Args:
            x: X coordinates (any shape broadcastable with y).
            y: Y coordinates.

        Returns:
            Noise values in [-1, 1] with the broadcast shape.
        """
        x, y = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
        )
        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255

        xf = x - x_floor
        yf = y - y_floor
        u = fade(xf)
        v = fade(yf)

        p = self._perm
        a = p[xi] + yi
        aa = p[a]
        ab = p[a + 1]
        b = p[xi + 1] + yi
        ba = p[b]
        bb = p[b + 1]

        bottom = _lerp(u, _grad(p[aa], xf, yf), _grad(p[ba], xf - 1.0, yf))
        top = _lerp(u, _grad(p[ab], xf, yf - 1.0), _grad(p[bb], xf - 1.0, yf - 1.0))
        return _lerp(v, bottom, top)

    def sample_2d(self, x: float, y: float) -> float:
        """Evaluate noise at a single point, in [-1, 1]."""
        return float(self.noise_2d(x, y))


def smoothstep(edge0: float, edge1: float, x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Smooth Hermite interpolation between 0 and 1.

    Args:
        edge0: Lower edge of transition.
        edge1: Upper edge of transition.
        x: Input values.

    Returns:
        Smoothly interpolated values in [0, 1].
    """
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
