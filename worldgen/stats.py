from __future__ import annotations

"""Summary statistics over rectangles of chunks."""

from collections import Counter
from typing import Dict

from .world import World


def _sampled_tiles(world: World, min_cx: int, min_cy: int, max_cx: int, max_cy: int, stride: int):
    # Sampling straight from the field model avoids assembling whole chunks.
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    size = world.chunk_size
    for y in range(min_cy * size, (max_cy + 1) * size, stride):
        for x in range(min_cx * size, (max_cx + 1) * size, stride):
            yield x, y


def ocean_fraction(
    world: World,
    min_cx: int,
    min_cy: int,
    max_cx: int,
    max_cy: int,
    stride: int = 1,
) -> float:
    """
    Fraction of ocean tiles in the inclusive chunk rectangle, sampling every
    ``stride``-th tile on both axes. Only elevation is evaluated.
    """
    fields = world.fields
    total = 0
    ocean = 0
    for x, y in _sampled_tiles(world, min_cx, min_cy, max_cx, max_cy, stride):
        total += 1
        if fields.elevation(x, y) < 0.5:
            ocean += 1
    return ocean / total if total else 0.0


def biome_histogram(
    world: World,
    min_cx: int,
    min_cy: int,
    max_cx: int,
    max_cy: int,
    stride: int = 1,
) -> Dict[str, int]:
    """Count of sampled tiles per biome name in the inclusive chunk rectangle."""
    counts: Counter = Counter()
    for x, y in _sampled_tiles(world, min_cx, min_cy, max_cx, max_cy, stride):
        counts[world.get(x, y).biome.value] += 1
    return dict(counts)


__all__ = ["biome_histogram", "ocean_fraction"]
