from __future__ import annotations

"""RGBA colours for tiles, for clients that draw the map."""

from typing import Dict, Tuple

from .biomes import Biome
from .tile import Tile

Color = Tuple[int, int, int, int]

BIOME_COLORS: Dict[Biome, Color] = {
    Biome.DEEP_OCEAN: (18, 52, 120, 255),
    Biome.SHALLOW_OCEAN: (65, 105, 225, 255),
    Biome.ARCTIC: (240, 248, 255, 255),
    Biome.ALPINE: (200, 200, 210, 255),
    Biome.TUNDRA: (220, 220, 220, 255),
    Biome.TAIGA: (70, 110, 80, 255),
    Biome.GRASSLAND: (110, 205, 88, 255),
    Biome.FOREST: (34, 139, 34, 255),
    Biome.SWAMP: (80, 100, 60, 255),
    Biome.SAVANNA: (190, 180, 90, 255),
    Biome.DESERT: (237, 201, 175, 255),
    Biome.TROPICAL_FOREST: (0, 100, 0, 255),
}

RIVER_COLOR: Color = (40, 90, 200, 255)
LAKE_COLOR: Color = (50, 120, 210, 255)


def register_biome_color(biome: Biome, color: Color) -> None:
    """
    Register or override the RGBA color for a given biome.
    """
    BIOME_COLORS[biome] = color


def tile_color(tile: Tile) -> Color:
    """
    Colour of one tile: lakes and rivers draw over the biome colour; land is
    darkened with height by ``1 - 0.4 * elevation``.
    """
    if tile.lake:
        return LAKE_COLOR
    if tile.has_river:
        return RIVER_COLOR
    r, g, b, a = BIOME_COLORS[tile.biome]
    if not tile.is_land:
        return (r, g, b, a)
    shade = 1.0 - 0.4 * tile.elevation
    return (int(r * shade), int(g * shade), int(b * shade), a)


__all__ = ["BIOME_COLORS", "LAKE_COLOR", "RIVER_COLOR", "register_biome_color", "tile_color"]
