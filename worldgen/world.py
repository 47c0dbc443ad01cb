from __future__ import annotations

"""
world.py

Chunk assembly on top of the per-seed models.

Key properties:
- Every tile is a pure function of (seed, settings, x, y); chunks can be built
  independently, in any order and from any thread.
- The only side effect of building a chunk is populating the per-seed caches
  in ``worldgen.cache``.
- Chunks are indexed ``chunk[ly][lx]``; local (lx, ly) of chunk (cx, cy) is the
  absolute tile (cx * chunk_size + lx, cy * chunk_size + ly).
"""

from typing import Iterator, List, Optional, Tuple

from .biomes import DEFAULT_THRESHOLDS, BiomeThresholds, classify_biome, elevation_category
from .cache import get_continents, get_fields, get_rivers
from .continents import ContinentModel
from .fields import TileFieldModel
from .rivers import RiverSystem
from .settings import DEFAULT_SETTINGS, WorldSettings
from .tile import Coordinate, RiverSegment, Tile

Chunk = List[List[Tile]]


class InvalidCoordinateError(ValueError):
    """Raised when a provided coordinate is not an integer."""


def _check_coordinate(**values: object) -> None:
    for name, value in values.items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidCoordinateError(f"{name} must be an int, got {value!r}")


def build_tile(
    x: int,
    y: int,
    fields: TileFieldModel,
    rivers: RiverSystem,
    thresholds: BiomeThresholds = DEFAULT_THRESHOLDS,
) -> Tile:
    """Assemble one tile from the field, river and biome layers."""
    elev = fields.elevation(x, y)
    temp = fields.temperature(x, y, elev)
    moist = fields.moisture(x, y)
    if elev >= 0.5:
        river = rivers.river_segment_at(x, y)
        lake = rivers.is_lake(x, y)
    else:
        river = RiverSegment.NONE
        lake = False
    return Tile(
        coord=(x, y),
        elevation=elev,
        temperature=temp,
        moisture=moist,
        biome=classify_biome(elev, temp, moist, thresholds),
        elevation_category=elevation_category(elev, thresholds),
        river=river,
        lake=lake,
    )


class World:
    """
    Read-only view of the world for one seed.

    A World holds no tiles of its own; every lookup goes through the shared
    per-seed caches, so two World objects with the same seed and settings
    always agree.
    """

    __slots__ = ("seed", "settings", "thresholds")

    def __init__(
        self,
        seed: int = 0,
        settings: Optional[WorldSettings] = None,
        thresholds: BiomeThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise TypeError(f"seed must be an int, got {seed!r}")
        self.seed = seed
        self.settings = settings or DEFAULT_SETTINGS
        self.thresholds = thresholds

    @property
    def chunk_size(self) -> int:
        return self.settings.chunk_size

    @property
    def continents(self) -> ContinentModel:
        return get_continents(self.seed, self.settings)

    @property
    def fields(self) -> TileFieldModel:
        return get_fields(self.seed, self.settings)

    @property
    def rivers(self) -> RiverSystem:
        return get_rivers(self.seed, self.settings)

    def chunk_of(self, x: int, y: int) -> Coordinate:
        """Chunk coordinate containing tile (x, y); floor division handles negatives."""
        _check_coordinate(x=x, y=y)
        size = self.chunk_size
        return (x // size, y // size)

    def get(self, x: int, y: int) -> Tile:
        """
        Return the tile at absolute (x, y).

        Raises:
            InvalidCoordinateError: If x or y is not an int.
        """
        _check_coordinate(x=x, y=y)
        return build_tile(x, y, self.fields, self.rivers, self.thresholds)

    def chunk(self, chunk_x: int, chunk_y: int) -> Chunk:
        """
        Build the chunk at (chunk_x, chunk_y) as rows of tiles, ``chunk[ly][lx]``.

        Raises:
            InvalidCoordinateError: If a chunk coordinate is not an int.
        """
        _check_coordinate(chunk_x=chunk_x, chunk_y=chunk_y)
        fields = self.fields
        rivers = self.rivers
        size = self.chunk_size
        base_x = chunk_x * size
        base_y = chunk_y * size
        return [
            [build_tile(base_x + lx, base_y + ly, fields, rivers, self.thresholds) for lx in range(size)]
            for ly in range(size)
        ]

    def iter_chunk_tiles(self, chunk_x: int, chunk_y: int) -> Iterator[Tile]:
        """Yield the tiles of one chunk in row-major order."""
        for row in self.chunk(chunk_x, chunk_y):
            for tile in row:
                yield tile

    def region(
        self, min_cx: int, min_cy: int, max_cx: int, max_cy: int
    ) -> Iterator[Tuple[Coordinate, Chunk]]:
        """Yield ((cx, cy), chunk) for every chunk in the inclusive rectangle, row by row."""
        _check_coordinate(min_cx=min_cx, min_cy=min_cy, max_cx=max_cx, max_cy=max_cy)
        for cy in range(min_cy, max_cy + 1):
            for cx in range(min_cx, max_cx + 1):
                yield (cx, cy), self.chunk(cx, cy)

    def __repr__(self) -> str:
        return f"World(seed={self.seed}, chunk_size={self.chunk_size})"


def generate_chunk(
    chunk_x: int,
    chunk_y: int,
    seed: int,
    settings: Optional[WorldSettings] = None,
) -> Chunk:
    """
    Generate the chunk at (chunk_x, chunk_y) for ``seed``.

    The result is identical whenever it is requested, whatever other chunks
    were generated before and whether or not the caches were cleared.
    """
    return World(seed, settings).chunk(chunk_x, chunk_y)


__all__ = [
    "Chunk",
    "InvalidCoordinateError",
    "World",
    "build_tile",
    "generate_chunk",
]
