from __future__ import annotations

"""
Data model for a single generated tile and the river-segment shapes it can carry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from .biomes import Biome, ElevationCategory

Coordinate = Tuple[int, int]


class TileType(Enum):
    LAND = "land"
    OCEAN = "ocean"


class RiverSegment(Enum):
    """Local shape of a river through a tile, named by the tile sides it touches."""

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BEND_NE = "bend_ne"
    BEND_NW = "bend_nw"
    BEND_SE = "bend_se"
    BEND_SW = "bend_sw"


@dataclass(frozen=True)
class Tile:
    """
    One generated tile. Every field is a pure function of (seed, coord), so a
    Tile is never mutated; asking for the same coordinate again recomputes an
    identical value.

    Core Attributes:
      coord: Absolute (x, y) coordinate.
      elevation: 0.0-1.0; land iff >= 0.5.
      temperature: 0.0 (coldest) to 1.0 (hottest).
      moisture: 0.0 (driest) to 1.0 (wettest).
      biome: Classified Biome.
      elevation_category: Flat, hills or mountains.
      river: RiverSegment shape, NONE where no river passes.
      lake: True if the tile belongs to a lake.
    """

    coord: Coordinate
    elevation: float
    temperature: float
    moisture: float
    biome: Biome
    elevation_category: ElevationCategory = ElevationCategory.FLAT
    river: RiverSegment = RiverSegment.NONE
    lake: bool = False

    @property
    def x(self) -> int:
        return self.coord[0]

    @property
    def y(self) -> int:
        return self.coord[1]

    @property
    def is_land(self) -> bool:
        return self.elevation >= 0.5

    @property
    def tile_type(self) -> TileType:
        return TileType.LAND if self.is_land else TileType.OCEAN

    @property
    def has_river(self) -> bool:
        return self.river is not RiverSegment.NONE

    def __repr__(self) -> str:
        base = f"Tile(coord={self.coord}, biome={self.biome.value}, elevation={self.elevation:.3f}"
        if self.has_river:
            base += f", river={self.river.value}"
        if self.lake:
            base += ", LAKE"
        return base + ")"

    def to_json(self) -> Dict[str, Union[str, float, bool, Dict[str, int]]]:
        """
        Serializes all attributes to a JSON-friendly dict.
        """
        return {
            "coord": {"x": self.coord[0], "y": self.coord[1]},
            "type": self.tile_type.value,
            "elevation": self.elevation,
            "temperature": self.temperature,
            "moisture": self.moisture,
            "biome": self.biome.value,
            "elevation_category": self.elevation_category.value,
            "river": self.river.value,
            "lake": self.lake,
        }


__all__ = ["Coordinate", "RiverSegment", "Tile", "TileType"]
