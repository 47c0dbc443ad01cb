from __future__ import annotations

from .biomes import (
    Biome,
    BiomeThresholds,
    DEFAULT_THRESHOLDS,
    ElevationCategory,
    classify_biome,
    elevation_category,
)
from .cache import cache_stats, clear_caches
from .continents import ContinentModel
from .export import export_region_json, export_region_xml, export_rivers_json
from .fields import TileFieldModel
from .noise import NoiseField
from .palette import BIOME_COLORS, register_biome_color, tile_color
from .rivers import RiverSystem, RiverTier, StandaloneLake, build_river_system
from .rng import make_rng, stable_hash
from .settings import DEFAULT_SETTINGS, RiverSettings, WorldSettings
from .stats import biome_histogram, ocean_fraction
from .tile import Coordinate, RiverSegment, Tile, TileType
from .world import Chunk, InvalidCoordinateError, World, generate_chunk


# ``adjust_settings`` is a module-level helper that forwards to ``WorldSettings.replace``.
def adjust_settings(settings: WorldSettings, **kwargs) -> WorldSettings:
    return settings.replace(**kwargs)


__all__ = [
    "BIOME_COLORS",
    "Biome",
    "BiomeThresholds",
    "Chunk",
    "ContinentModel",
    "Coordinate",
    "DEFAULT_SETTINGS",
    "DEFAULT_THRESHOLDS",
    "ElevationCategory",
    "InvalidCoordinateError",
    "NoiseField",
    "RiverSegment",
    "RiverSettings",
    "RiverSystem",
    "RiverTier",
    "StandaloneLake",
    "Tile",
    "TileFieldModel",
    "TileType",
    "World",
    "WorldSettings",
    "adjust_settings",
    "biome_histogram",
    "build_river_system",
    "cache_stats",
    "classify_biome",
    "clear_caches",
    "elevation_category",
    "export_region_json",
    "export_region_xml",
    "export_rivers_json",
    "generate_chunk",
    "make_rng",
    "ocean_fraction",
    "register_biome_color",
    "stable_hash",
    "tile_color",
]
