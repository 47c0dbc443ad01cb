from worldgen.biomes import (
    Biome,
    BiomeThresholds,
    ElevationCategory,
    classify_biome,
    elevation_category,
)


def test_ocean_depths():
    assert classify_biome(0.2, 0.5, 0.5) == Biome.DEEP_OCEAN
    assert classify_biome(0.45, 0.5, 0.5) == Biome.SHALLOW_OCEAN
    assert classify_biome(0.5, 0.5, 0.5) != Biome.SHALLOW_OCEAN


def test_cold_bands_and_alpine_tie_break():
    assert classify_biome(0.6, 0.05, 0.5) == Biome.ARCTIC
    assert classify_biome(0.85, 0.05, 0.5) == Biome.ALPINE
    assert classify_biome(0.6, 0.2, 0.3) == Biome.TUNDRA
    assert classify_biome(0.6, 0.2, 0.5) == Biome.TAIGA
    assert classify_biome(0.85, 0.2, 0.3) == Biome.ALPINE


def test_temperate_and_warm_bands():
    assert classify_biome(0.6, 0.4, 0.3) == Biome.GRASSLAND
    assert classify_biome(0.6, 0.4, 0.5) == Biome.FOREST
    assert classify_biome(0.55, 0.4, 0.7) == Biome.SWAMP
    assert classify_biome(0.7, 0.4, 0.7) == Biome.FOREST
    assert classify_biome(0.6, 0.6, 0.3) == Biome.SAVANNA
    assert classify_biome(0.6, 0.6, 0.5) == Biome.FOREST
    assert classify_biome(0.55, 0.6, 0.7) == Biome.SWAMP


def test_hot_band():
    assert classify_biome(0.6, 0.8, 0.3) == Biome.DESERT
    assert classify_biome(0.6, 0.8, 0.45) == Biome.SAVANNA
    assert classify_biome(0.6, 0.8, 0.55) == Biome.TROPICAL_FOREST
    assert classify_biome(0.55, 0.8, 0.7) == Biome.SWAMP
    assert classify_biome(0.7, 0.8, 0.7) == Biome.TROPICAL_FOREST


def test_every_input_has_exactly_one_biome():
    steps = [i / 20.0 for i in range(21)]
    for e in steps:
        for t in steps:
            for m in steps:
                biome = classify_biome(e, t, m)
                assert isinstance(biome, Biome)
                assert biome.is_ocean == (e < 0.5), f"Ocean mismatch for ({e},{t},{m}): {biome}"


def test_custom_thresholds():
    warm_world = BiomeThresholds(very_cold=0.0, cold=0.0, temperate=0.0, warm=0.0)
    assert classify_biome(0.6, 0.01, 0.3, warm_world) == Biome.DESERT


def test_elevation_category():
    assert elevation_category(0.2) == ElevationCategory.FLAT
    assert elevation_category(0.6) == ElevationCategory.FLAT
    assert elevation_category(0.65) == ElevationCategory.HILLS
    assert elevation_category(0.79) == ElevationCategory.HILLS
    assert elevation_category(0.8) == ElevationCategory.MOUNTAINS
