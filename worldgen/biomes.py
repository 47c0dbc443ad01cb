from __future__ import annotations

"""Biome and elevation-category classification."""

from dataclasses import dataclass
from enum import Enum


class Biome(Enum):
    DEEP_OCEAN = "deep_ocean"
    SHALLOW_OCEAN = "shallow_ocean"
    ARCTIC = "arctic"
    ALPINE = "alpine"
    TUNDRA = "tundra"
    TAIGA = "taiga"
    GRASSLAND = "grassland"
    FOREST = "forest"
    SWAMP = "swamp"
    SAVANNA = "savanna"
    DESERT = "desert"
    TROPICAL_FOREST = "tropical_forest"

    @property
    def is_ocean(self) -> bool:
        return self in (Biome.DEEP_OCEAN, Biome.SHALLOW_OCEAN)


class ElevationCategory(Enum):
    FLAT = "flat"
    HILLS = "hills"
    MOUNTAINS = "mountains"


@dataclass(frozen=True)
class BiomeThresholds:
    """
    Cut points of the biome decision procedure. Values may be tuned, but the
    order of checks in ``classify_biome`` is fixed.
    """

    sea_level: float = 0.5
    deep_ocean: float = 0.35
    # Temperature bands, coldest first.
    very_cold: float = 0.12
    cold: float = 0.28
    temperate: float = 0.5
    warm: float = 0.65
    # Moisture sub-bands, driest first.
    dry: float = 0.42
    wet: float = 0.52
    very_wet: float = 0.6
    # Elevation tie-breaks.
    alpine_elevation: float = 0.8
    wetland_elevation: float = 0.6
    hills_elevation: float = 0.65
    mountains_elevation: float = 0.8


DEFAULT_THRESHOLDS = BiomeThresholds()


def classify_biome(
    elevation: float,
    temperature: float,
    moisture: float,
    thresholds: BiomeThresholds = DEFAULT_THRESHOLDS,
) -> Biome:
    """
    Determine a biome from elevation, temperature and moisture. First match wins:
      1. Below sea level → deep or shallow ocean by depth
      2. Temperature band (very cold, cold, temperate, warm, hot)
      3. Moisture sub-band within the temperature band
      4. Elevation tie-breaks: alpine over cold biomes on high ground,
         swamp versus forest in the wettest sub-band
    Every input combination yields exactly one biome.
    """
    t = thresholds
    if elevation < t.sea_level:
        return Biome.DEEP_OCEAN if elevation < t.deep_ocean else Biome.SHALLOW_OCEAN

    if temperature < t.very_cold:
        return Biome.ALPINE if elevation >= t.alpine_elevation else Biome.ARCTIC

    if temperature < t.cold:
        regular = Biome.TUNDRA if moisture < t.dry else Biome.TAIGA
        return Biome.ALPINE if elevation >= t.alpine_elevation else regular

    if temperature < t.temperate:
        if moisture < t.dry:
            return Biome.GRASSLAND
        if moisture < t.very_wet:
            return Biome.FOREST
        return Biome.SWAMP if elevation < t.wetland_elevation else Biome.FOREST

    if temperature < t.warm:
        if moisture < t.dry:
            return Biome.SAVANNA
        if moisture < t.very_wet:
            return Biome.FOREST
        return Biome.SWAMP if elevation < t.wetland_elevation else Biome.FOREST

    # Hot band.
    if moisture < t.dry:
        return Biome.DESERT
    if moisture < t.wet:
        return Biome.SAVANNA
    if moisture < t.very_wet:
        return Biome.TROPICAL_FOREST
    return Biome.SWAMP if elevation < t.wetland_elevation else Biome.TROPICAL_FOREST


def elevation_category(elevation: float, thresholds: BiomeThresholds = DEFAULT_THRESHOLDS) -> ElevationCategory:
    """Classify a tile as flat, hills or mountains solely based on elevation."""
    if elevation < thresholds.hills_elevation:
        return ElevationCategory.FLAT
    if elevation < thresholds.mountains_elevation:
        return ElevationCategory.HILLS
    return ElevationCategory.MOUNTAINS


__all__ = [
    "Biome",
    "BiomeThresholds",
    "DEFAULT_THRESHOLDS",
    "ElevationCategory",
    "classify_biome",
    "elevation_category",
]
