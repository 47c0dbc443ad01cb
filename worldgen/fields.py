from __future__ import annotations

"""Per-tile elevation, temperature and moisture synthesis."""

from .continents import LAND_MIN, OCEAN_MAX, ContinentModel
from .noise import NoiseField
from .rng import stable_hash
from .settings import WorldSettings

_TERRAIN_OFFSET = 5000
_SEAFLOOR_OFFSET = 6000
_TEMPERATURE_OFFSET = 7000
_MOISTURE_OFFSET = 8000

# Largest amount seafloor texture may raise an ocean tile.
SEAFLOOR_RANGE = 0.04


class TileFieldModel:
    """
    Climate and terrain layers for one seed, layered on its ContinentModel.

    All three fields are pure functions of (seed, x, y); the instance only holds
    the noise tables so they are not rebuilt for every tile.
    """

    __slots__ = ("seed", "settings", "continents", "terrain", "seafloor", "temperature_noise", "moisture_noise")

    def __init__(self, seed: int, settings: WorldSettings, continents: ContinentModel) -> None:
        self.seed = seed
        self.settings = settings
        self.continents = continents
        self.terrain = NoiseField(stable_hash(seed, _TERRAIN_OFFSET))
        self.seafloor = NoiseField(stable_hash(seed, _SEAFLOOR_OFFSET))
        self.temperature_noise = NoiseField(stable_hash(seed, _TEMPERATURE_OFFSET))
        self.moisture_noise = NoiseField(stable_hash(seed, _MOISTURE_OFFSET))

    def elevation(self, x: int, y: int) -> float:
        """
        Land strength plus texture. Land gets terrain detail scaled by its strength
        and never drops below 0.51; ocean gets a small positive seafloor term and
        never rises above 0.49.
        """
        s = self.settings
        strength = self.continents.land_strength(x, y)
        if strength >= 0.5:
            detail = self.terrain.octave_sample(x * s.terrain_scale, y * s.terrain_scale, 3, 0.5)
            elev = strength + detail * s.terrain_detail * strength
            return max(LAND_MIN, min(1.0, elev))
        floor = (self.seafloor.octave_sample(x * s.seafloor_scale, y * s.seafloor_scale, 2, 0.5) + 1.0) / 2.0
        return min(OCEAN_MAX, strength + floor * SEAFLOOR_RANGE)

    def temperature(self, x: int, y: int, elevation: float) -> float:
        """Latitude band peaking on the frame's equator row, cooled by altitude."""
        s = self.settings
        lat = (y - s.frame_y) / float(s.frame_height)
        base = 1.0 - 2.0 * abs(lat - 0.5)
        base += self.temperature_noise.octave_sample(
            x * s.temperature_scale, y * s.temperature_scale, 2, 0.5
        ) * s.temperature_noise
        base -= elevation * s.lapse_rate
        return max(0.0, min(1.0, base))

    def moisture(self, x: int, y: int) -> float:
        s = self.settings
        value = self.moisture_noise.octave_sample(x * s.moisture_scale, y * s.moisture_scale, 4, 0.5)
        return max(0.0, min(1.0, (value + 1.0) / 2.0))


__all__ = ["SEAFLOOR_RANGE", "TileFieldModel"]
