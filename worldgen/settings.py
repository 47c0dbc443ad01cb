from __future__ import annotations

"""Configuration dataclasses for chunked world generation."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RiverSettings:
    """Parameters of the per-seed river and lake build."""

    # Reference region scanned for river sources (half-open on both axes).
    region_min: int = -2500
    region_max: int = 2500
    source_stride: int = 32
    # Scores weigh a source's elevation rank among the scanned land samples.
    source_threshold: float = 0.55
    source_elevation_weight: float = 0.7
    source_spacing: int = 60
    max_sources: int = 150
    source_scale: float = 0.01
    meander_scale: float = 0.15
    meander_strength: float = 0.0005
    min_lake_path: int = 12
    mid_lake_interval: int = 20
    lake_max_elevation: float = 0.82
    lake_basin_bonus: float = 12.0
    standalone_lake_count: int = 40
    standalone_lake_attempts: int = 400
    standalone_lake_min_elev: float = 0.55
    standalone_lake_max_elev: float = 0.72
    standalone_lake_river_clearance: int = 20
    standalone_lake_spacing: int = 40
    standalone_lake_chance: float = 0.6


@dataclass(frozen=True)
class WorldSettings:
    """
    Every constant the generator depends on. Instances are frozen so they can
    key the per-seed caches; use ``replace`` to derive an adjusted copy.
    """

    chunk_size: int = 16

    # Reference frame for continents and latitude.
    frame_x: int = -500
    frame_y: int = -500
    frame_width: int = 1000
    frame_height: int = 1000

    # Land/ocean split.
    ocean_threshold: float = 0.495
    ocean_fraction: float = 0.30
    calibration_samples: int = 48

    # Continents.
    min_continents: int = 1
    max_continents: int = 3
    continent_separation: float = 0.05
    continent_radius: float = 0.3
    continent_falloff: float = 1.8
    placement_attempts: int = 100

    # Noise scales (cycles per tile).
    warp_scale: float = 0.004
    warp_strength: float = 60.0
    shape_scale: float = 0.0025
    medium_scale: float = 0.01
    detail_scale: float = 0.04
    terrain_scale: float = 0.05
    seafloor_scale: float = 0.03
    temperature_scale: float = 0.01
    moisture_scale: float = 0.02

    # Climate.
    terrain_detail: float = 0.15
    temperature_noise: float = 0.15
    lapse_rate: float = 0.3

    max_cached_seeds: int = 8
    rivers: RiverSettings = field(default_factory=RiverSettings)

    def replace(self, **kwargs: Any) -> "WorldSettings":
        """
        Return a copy with the given fields changed. Unknown keys are ignored;
        a value whose type does not match the existing field raises TypeError.
        """
        changes = {}
        for key, val in kwargs.items():
            if not hasattr(self, key):
                continue
            current = getattr(self, key)
            if isinstance(current, bool):
                ok = isinstance(val, bool)
            elif isinstance(current, float):
                ok = isinstance(val, (int, float)) and not isinstance(val, bool)
                if ok:
                    val = float(val)
            elif isinstance(current, int):
                ok = isinstance(val, int) and not isinstance(val, bool)
            else:
                ok = isinstance(val, type(current))
            if not ok:
                raise TypeError(f"Cannot assign value of type {type(val)} to setting '{key}'.")
            changes[key] = val
        return dataclasses.replace(self, **changes)


DEFAULT_SETTINGS = WorldSettings()


__all__ = ["DEFAULT_SETTINGS", "RiverSettings", "WorldSettings"]
