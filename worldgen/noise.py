from __future__ import annotations

"""Coherent 2D gradient noise built on a seeded permutation table."""

import math
from typing import List

from .rng import make_rng

# Tag separating permutation-table streams from every other RNG use.
_PERMUTATION_TAG = 0x9E37


def _fade(t: float) -> float:
    """Fade function for Perlin noise interpolation."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by t."""
    return a + t * (b - a)


def _grad(h: int, x: float, y: float) -> float:
    """Dot product of the hashed gradient direction with (x, y)."""
    h &= 7
    u = x if h < 4 else y
    v = y if h < 4 else x
    return (u if h & 1 == 0 else -u) + (2.0 * v if h & 2 == 0 else -2.0 * v)


class NoiseField:
    """
    Deterministic, continuous 2D Perlin noise.

    The permutation table is derived once from ``seed``; afterwards the field
    is a pure function of the sample coordinate and safe to share between threads.
    """

    __slots__ = ("seed", "_perm")

    def __init__(self, seed: int) -> None:
        self.seed = seed
        rng = make_rng(seed, _PERMUTATION_TAG)
        table = list(range(256))
        rng.shuffle(table)
        # Duplicate so index arithmetic never needs wrapping.
        self._perm: List[int] = table + table

    def sample(self, x: float, y: float) -> float:
        """Single-octave noise at (x, y), in [-1, 1]."""
        perm = self._perm
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255
        xf = x - fx
        yf = y - fy
        u = _fade(xf)
        v = _fade(yf)

        a = perm[xi] + yi
        b = perm[xi + 1] + yi
        n00 = _grad(perm[a], xf, yf)
        n10 = _grad(perm[b], xf - 1.0, yf)
        n01 = _grad(perm[a + 1], xf, yf - 1.0)
        n11 = _grad(perm[b + 1], xf - 1.0, yf - 1.0)

        value = _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)
        # Gradients of length sqrt(5) put the raw peak near 1.6.
        value *= 0.6
        return max(-1.0, min(1.0, value))

    def octave_sample(self, x: float, y: float, octaves: int, persistence: float) -> float:
        """
        Fractal noise: ``octaves`` samples at doubling frequency and decaying amplitude,
        normalised by the total amplitude so the result stays in [-1, 1].
        """
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0
        for _ in range(octaves):
            total += self.sample(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= 2.0
        return total / max_amplitude if max_amplitude > 0 else 0.0

    def __repr__(self) -> str:
        return f"NoiseField(seed={self.seed})"


__all__ = ["NoiseField"]
