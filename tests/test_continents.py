import math

from worldgen.continents import (
    ContinentModel,
    fallback_centers,
    place_continent_centers,
    remap_land_strength,
)
from worldgen.settings import WorldSettings


def test_centres_are_separated_and_inside_frame():
    settings = WorldSettings()
    min_sep = settings.continent_separation * settings.frame_width
    for seed in range(20):
        centers = place_continent_centers(seed, settings)
        assert 1 <= len(centers) <= 3, f"Seed {seed} placed {len(centers)} continents"
        for x, y in centers:
            assert settings.frame_x <= x <= settings.frame_x + settings.frame_width
            assert settings.frame_y <= y <= settings.frame_y + settings.frame_height
        for i, (ax, ay) in enumerate(centers):
            for bx, by in centers[i + 1:]:
                assert math.hypot(ax - bx, ay - by) >= min_sep


def test_placement_is_deterministic():
    settings = WorldSettings()
    assert place_continent_centers(99, settings) == place_continent_centers(99, settings)


def test_impossible_separation_uses_fallback_slots():
    settings = WorldSettings(min_continents=2, max_continents=2, continent_separation=2.0)
    centers = place_continent_centers(3, settings)
    assert centers == fallback_centers(2, settings)
    assert centers == ((-250.0, -250.0), (250.0, 250.0))


def test_remap_leaves_a_gap_around_sea_level():
    threshold = 0.495
    assert remap_land_strength(0.0, threshold) == 0.1
    assert abs(remap_land_strength(1.0, threshold) - 1.0) < 1e-12
    assert remap_land_strength(threshold, threshold) == 0.51
    for i in range(101):
        v = remap_land_strength(i / 100.0, threshold)
        assert not 0.49 < v < 0.51, f"Remapped value {v} falls in the gap"


def test_land_strength_ranges():
    model = ContinentModel(11, WorldSettings())
    for y in range(-600, 600, 37):
        for x in range(-600, 600, 37):
            ls = model.land_strength(x, y)
            assert 0.1 <= ls <= 1.0
            assert ls <= 0.49 or ls >= 0.51, f"Land strength {ls} at ({x},{y}) inside the gap"
            assert model.is_land(x, y) == (ls >= 0.5)


def test_pivot_splits_frame_near_ocean_fraction():
    settings = WorldSettings()
    model = ContinentModel(2024, settings)
    n = settings.calibration_samples
    step = settings.frame_width / n
    ocean = sum(
        1
        for j in range(n)
        for i in range(n)
        if not model.is_land(settings.frame_x + (i + 0.5) * step, settings.frame_y + (j + 0.5) * step)
    )
    fraction = ocean / float(n * n)
    assert abs(fraction - settings.ocean_fraction) < 0.01, f"Calibration grid ocean fraction {fraction}"
