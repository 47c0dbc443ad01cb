from __future__ import annotations

"""
continents.py

Per-seed continent model: continent centre placement, domain-warped shape noise
and the land-strength signal that decides ocean versus land.

The model is built once per (seed, settings) and is read-only afterwards.
"""

import logging
import math
from typing import List, Tuple

from .noise import NoiseField
from .rng import make_rng, stable_hash
from .settings import WorldSettings

logger = logging.getLogger("worldgen.continents")
logger.addHandler(logging.NullHandler())

Point = Tuple[float, float]

# Fixed offsets mixed into the seed for each noise layer.
_SHAPE_OFFSET = 1000
_DETAIL_OFFSET = 2000
_WARP_X_OFFSET = 3000
_WARP_Y_OFFSET = 4000
_CONTINENT_TAG = 0xC0117

# Fractions of the reference frame used when random placement fails.
_FALLBACK_SLOTS: Tuple[Point, ...] = ((0.25, 0.25), (0.75, 0.75), (0.25, 0.75))

# Interior sub-rectangle (fraction of the frame) where centres may land.
_INTERIOR_MIN = 0.2
_INTERIOR_MAX = 0.8

LAND_MIN = 0.51
OCEAN_MIN = 0.1
OCEAN_MAX = 0.49


def fallback_centers(count: int, settings: WorldSettings) -> Tuple[Point, ...]:
    """Fixed, well separated continent centres at 25%/75% of the frame."""
    return tuple(
        (
            settings.frame_x + fx * settings.frame_width,
            settings.frame_y + fy * settings.frame_height,
        )
        for fx, fy in _FALLBACK_SLOTS[: max(1, min(count, len(_FALLBACK_SLOTS)))]
    )


def place_continent_centers(seed: int, settings: WorldSettings) -> Tuple[Point, ...]:
    """
    Draw 1-3 continent centres inside the interior of the reference frame by
    rejection sampling. A candidate closer than ``continent_separation`` of the
    frame width to an earlier centre is rejected; if a centre cannot be placed
    within ``placement_attempts`` draws, every centre moves to the fallback slots.
    """
    rng = make_rng(seed, _CONTINENT_TAG)
    count = rng.randint(settings.min_continents, settings.max_continents)
    min_sep = settings.continent_separation * settings.frame_width

    lo_x = settings.frame_x + _INTERIOR_MIN * settings.frame_width
    hi_x = settings.frame_x + _INTERIOR_MAX * settings.frame_width
    lo_y = settings.frame_y + _INTERIOR_MIN * settings.frame_height
    hi_y = settings.frame_y + _INTERIOR_MAX * settings.frame_height

    centers: List[Point] = []
    for _ in range(count):
        for _attempt in range(settings.placement_attempts):
            cx = rng.uniform(lo_x, hi_x)
            cy = rng.uniform(lo_y, hi_y)
            if all(math.hypot(cx - px, cy - py) >= min_sep for px, py in centers):
                centers.append((cx, cy))
                break
        else:
            logger.debug("Seed %d: continent placement failed, using fallback slots", seed)
            return fallback_centers(count, settings)
    return tuple(centers)


def remap_land_strength(value: float, threshold: float) -> float:
    """
    Split a normalised [0, 1] signal at ``threshold``: values below map linearly
    into [0.1, 0.49), values at or above into [0.51, 1.0]. Nothing lands in the
    gap, which is what keeps the 0.5 land/ocean boundary exact downstream.
    """
    value = max(0.0, min(1.0, value))
    if value < threshold:
        return OCEAN_MIN + (value / threshold) * (OCEAN_MAX - OCEAN_MIN)
    return LAND_MIN + (value - threshold) / (1.0 - threshold) * (1.0 - LAND_MIN)


class ContinentModel:
    """Land-strength field for one seed."""

    __slots__ = (
        "seed",
        "settings",
        "centers",
        "shape",
        "detail",
        "warp_x",
        "warp_y",
        "pivot",
    )

    def __init__(self, seed: int, settings: WorldSettings) -> None:
        self.seed = seed
        self.settings = settings
        self.centers: Tuple[Point, ...] = place_continent_centers(seed, settings)
        self.shape = NoiseField(stable_hash(seed, _SHAPE_OFFSET))
        self.detail = NoiseField(stable_hash(seed, _DETAIL_OFFSET))
        self.warp_x = NoiseField(stable_hash(seed, _WARP_X_OFFSET))
        self.warp_y = NoiseField(stable_hash(seed, _WARP_Y_OFFSET))
        self.pivot: float = self._calibrate()
        logger.debug(
            "Built continent model for seed %d: %d centres, sea-level pivot %.4f",
            seed,
            len(self.centers),
            self.pivot,
        )

    def center_influence(self, x: float, y: float) -> float:
        """Strongest smooth falloff over all continent centres, in [0, 1]."""
        s = self.settings
        radius = s.continent_radius * s.frame_width
        best = 0.0
        for cx, cy in self.centers:
            d = math.hypot(x - cx, y - cy) / radius
            if d < 1.0:
                best = max(best, (1.0 - d) ** s.continent_falloff)
        return best

    def blended(self, x: float, y: float) -> float:
        """Warped shape noise blended with continent influence, normalised to [0, 1]."""
        s = self.settings
        wx = self.warp_x.octave_sample(x * s.warp_scale, y * s.warp_scale, 2, 0.5)
        wy = self.warp_y.octave_sample(x * s.warp_scale, y * s.warp_scale, 2, 0.5)
        qx = x + wx * s.warp_strength
        qy = y + wy * s.warp_strength

        large = self.shape.octave_sample(qx * s.shape_scale, qy * s.shape_scale, 4, 0.5)
        # Offset so the medium layer does not line up with the large one.
        medium = self.shape.octave_sample(
            qx * s.medium_scale + 31.7, qy * s.medium_scale - 47.3, 3, 0.5
        )
        fine = self.detail.octave_sample(qx * s.detail_scale, qy * s.detail_scale, 2, 0.5)
        raw = 0.6 * large + 0.3 * medium + 0.1 * fine

        influence = self.center_influence(qx, qy)
        land_boost = 0.35 * influence
        value = raw * 0.65 + influence * 0.18 + land_boost
        # raw spans [-1, 1] and influence [0, 1], so value spans [-0.65, 1.18].
        return max(0.0, min(1.0, (value + 0.65) / 1.83))

    def drainage(self, x: float, y: float) -> float:
        """
        Low-pass companion of ``blended``: the two broadest shape octaves and
        the continent influence, with no medium or fine layer. Rivers descend
        this surface, which falls towards the coasts with few inland pits.
        """
        s = self.settings
        wx = self.warp_x.octave_sample(x * s.warp_scale, y * s.warp_scale, 2, 0.5)
        wy = self.warp_y.octave_sample(x * s.warp_scale, y * s.warp_scale, 2, 0.5)
        qx = x + wx * s.warp_strength
        qy = y + wy * s.warp_strength
        large = self.shape.octave_sample(qx * s.shape_scale, qy * s.shape_scale, 2, 0.5)
        return large * 0.65 + self.center_influence(qx, qy) * 0.53

    def _calibrate(self) -> float:
        """
        Sample the blended signal on a coarse grid over the reference frame and
        return the value below which ``ocean_fraction`` of the samples fall.
        """
        s = self.settings
        n = max(2, s.calibration_samples)
        step_x = s.frame_width / n
        step_y = s.frame_height / n
        values = sorted(
            self.blended(s.frame_x + (i + 0.5) * step_x, s.frame_y + (j + 0.5) * step_y)
            for j in range(n)
            for i in range(n)
        )
        idx = min(len(values) - 1, int(s.ocean_fraction * len(values)))
        return max(0.05, min(0.95, values[idx]))

    def land_strength(self, x: float, y: float) -> float:
        """
        Pre-detail elevation at (x, y), already remapped around the 0.5 boundary:
        ocean in [0.1, 0.49), land in [0.51, 1.0].
        """
        value = self.blended(x, y)
        threshold = self.settings.ocean_threshold
        pivot = self.pivot
        if value < pivot:
            normalised = threshold * value / pivot
        else:
            normalised = threshold + (1.0 - threshold) * (value - pivot) / (1.0 - pivot)
        return remap_land_strength(normalised, threshold)

    def is_land(self, x: float, y: float) -> bool:
        return self.land_strength(x, y) >= 0.5


__all__ = [
    "ContinentModel",
    "LAND_MIN",
    "OCEAN_MAX",
    "OCEAN_MIN",
    "fallback_centers",
    "place_continent_centers",
    "remap_land_strength",
]
