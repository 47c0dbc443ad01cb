from __future__ import annotations

"""Stable hashing and seeded scalar streams."""

import random

_MASK = 0xFFFFFFFFFFFFFFFF


def stable_hash(*args: int) -> int:
    """
    Fold seeds, tags and coordinates into one 64-bit key. Each argument is
    avalanched before it is folded in, so nearby inputs give unrelated keys,
    and the result never depends on PYTHONHASHSEED.
    """
    x = 0x345678ABCDEF1234
    for a in args:
        a &= _MASK
        a ^= (a >> 33)
        a = (a * 0xFF51AFD7ED558CCD) & _MASK
        a ^= (a >> 33)
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & _MASK
    return x


def make_rng(seed: int, *tags: int) -> random.Random:
    """
    Return a deterministic RNG whose state depends on the world seed and purpose tags.

    Only used for decisions that need no spatial coherence (continent count,
    per-source draws, lake coin flips). Same arguments give the same stream.
    """
    return random.Random(stable_hash(seed, *tags))


def coord_unit(seed: int, x: int, y: int, tag: int) -> float:
    """Deterministic scalar in [0, 1) for a single coordinate."""
    return (stable_hash(x, y, seed, tag) >> 11) / float(1 << 53)


__all__ = ["coord_unit", "make_rng", "stable_hash"]
