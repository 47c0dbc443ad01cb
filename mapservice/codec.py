from __future__ import annotations

"""
codec.py

Compact wire encoding of tiles and chunks.

Each tile becomes a small dict of integers:
  k  tile type index          (TILE_TYPES)
  e  elevation,   round(v * 255)
  t  temperature, round(v * 255)
  m  moisture,    round(v * 255)
  b  biome index              (BIOMES)
  r  river segment index      (RIVER_SEGMENTS)
  c  elevation category index (ELEVATION_CATEGORIES)
  l  lake flag, 0 or 1

The index tables are shared by encoder and decoder; categorical values round
trip exactly, continuous values to within 1/255.
"""

import json
from typing import Dict, List, Sequence, Tuple, TypeVar

from worldgen.biomes import Biome, ElevationCategory
from worldgen.tile import Coordinate, RiverSegment, Tile, TileType

from .settings import CHUNK_SIZE

CompactTile = Dict[str, int]
CompactChunk = List[List[CompactTile]]

E = TypeVar("E")

# Order is part of the wire format: append only.
TILE_TYPES: Tuple[TileType, ...] = (TileType.OCEAN, TileType.LAND)
BIOMES: Tuple[Biome, ...] = (
    Biome.DEEP_OCEAN,
    Biome.SHALLOW_OCEAN,
    Biome.ARCTIC,
    Biome.ALPINE,
    Biome.TUNDRA,
    Biome.TAIGA,
    Biome.GRASSLAND,
    Biome.FOREST,
    Biome.SWAMP,
    Biome.SAVANNA,
    Biome.DESERT,
    Biome.TROPICAL_FOREST,
)
RIVER_SEGMENTS: Tuple[RiverSegment, ...] = (
    RiverSegment.NONE,
    RiverSegment.HORIZONTAL,
    RiverSegment.VERTICAL,
    RiverSegment.BEND_NE,
    RiverSegment.BEND_NW,
    RiverSegment.BEND_SE,
    RiverSegment.BEND_SW,
)
ELEVATION_CATEGORIES: Tuple[ElevationCategory, ...] = (
    ElevationCategory.FLAT,
    ElevationCategory.HILLS,
    ElevationCategory.MOUNTAINS,
)


class EncodingError(Exception):
    """Raised when a value has no entry in the shared index tables."""


def _index(table: Sequence[E], value: E, kind: str) -> int:
    try:
        return table.index(value)
    except ValueError as e:
        raise EncodingError(f"Unknown {kind}: {value!r}") from e


def _lookup(table: Sequence[E], index: int, kind: str) -> E:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(table):
        raise EncodingError(f"Unknown {kind} index: {index!r}")
    return table[index]


def _quantize(value: float, kind: str) -> int:
    if not 0.0 <= value <= 1.0:
        raise EncodingError(f"{kind} {value!r} outside [0, 1]")
    return int(round(value * 255))


def encode_tile(tile: Tile) -> CompactTile:
    """
    Compact form of one tile.

    Raises:
        EncodingError: If a categorical field is missing from its index table.
    """
    return {
        "k": _index(TILE_TYPES, tile.tile_type, "tile type"),
        "e": _quantize(tile.elevation, "elevation"),
        "t": _quantize(tile.temperature, "temperature"),
        "m": _quantize(tile.moisture, "moisture"),
        "b": _index(BIOMES, tile.biome, "biome"),
        "r": _index(RIVER_SEGMENTS, tile.river, "river segment"),
        "c": _index(ELEVATION_CATEGORIES, tile.elevation_category, "elevation category"),
        "l": 1 if tile.lake else 0,
    }


def decode_tile(data: CompactTile, coord: Coordinate = (0, 0)) -> Tile:
    """
    Rebuild a Tile from its compact form. The continuous fields come back
    quantised to multiples of 1/255.

    Raises:
        EncodingError: If a key is missing or an index is out of range.
    """
    try:
        _lookup(TILE_TYPES, data["k"], "tile type")
        return Tile(
            coord=coord,
            elevation=data["e"] / 255.0,
            temperature=data["t"] / 255.0,
            moisture=data["m"] / 255.0,
            biome=_lookup(BIOMES, data["b"], "biome"),
            elevation_category=_lookup(ELEVATION_CATEGORIES, data["c"], "elevation category"),
            river=_lookup(RIVER_SEGMENTS, data["r"], "river segment"),
            lake=bool(data["l"]),
        )
    except KeyError as e:
        raise EncodingError(f"Compact tile missing key {e}") from e


def encode_chunk(chunk: List[List[Tile]]) -> CompactChunk:
    return [[encode_tile(tile) for tile in row] for row in chunk]


def decode_chunk(rows: CompactChunk, chunk_x: int, chunk_y: int, chunk_size: int = CHUNK_SIZE) -> List[List[Tile]]:
    """Decode a compact chunk, restoring absolute coordinates from the chunk position."""
    base_x = chunk_x * chunk_size
    base_y = chunk_y * chunk_size
    return [
        [decode_tile(data, (base_x + lx, base_y + ly)) for lx, data in enumerate(row)]
        for ly, row in enumerate(rows)
    ]


def dumps_chunk(rows: CompactChunk) -> bytes:
    """Canonical compact JSON bytes of an encoded chunk; equal chunks give equal bytes."""
    return json.dumps(rows, separators=(",", ":"), sort_keys=True).encode("utf-8")


__all__ = [
    "BIOMES",
    "CompactChunk",
    "CompactTile",
    "ELEVATION_CATEGORIES",
    "EncodingError",
    "RIVER_SEGMENTS",
    "TILE_TYPES",
    "decode_chunk",
    "decode_tile",
    "dumps_chunk",
    "encode_chunk",
    "encode_tile",
]
