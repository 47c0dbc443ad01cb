import pytest

from worldgen.palette import BIOME_COLORS, LAKE_COLOR, RIVER_COLOR, register_biome_color, tile_color
from worldgen.biomes import Biome
from worldgen.settings import WorldSettings
from worldgen.stats import biome_histogram, ocean_fraction
from worldgen.tile import RiverSegment, Tile
from worldgen.world import World


def test_histogram_counts_every_sample(small_settings):
    world = World(12, small_settings)
    counts = biome_histogram(world, 0, 0, 1, 1, stride=4)
    assert sum(counts.values()) == (32 // 4) ** 2
    assert set(counts) <= {b.value for b in Biome}


def test_ocean_fraction_matches_tiles(small_settings):
    world = World(12, small_settings)
    fraction = ocean_fraction(world, 0, 0, 0, 0)
    ocean = sum(1 for tile in world.iter_chunk_tiles(0, 0) if not tile.is_land)
    assert fraction == ocean / 256.0
    with pytest.raises(ValueError):
        ocean_fraction(world, 0, 0, 0, 0, stride=0)


@pytest.mark.slow
def test_ocean_coverage_over_60_by_60_chunks():
    settings = WorldSettings()
    seeds = [1, 7, 42, 12345, 54321]
    within = 0
    fractions = []
    for seed in seeds:
        fraction = ocean_fraction(World(seed, settings), -30, -30, 29, 29, stride=8)
        fractions.append(fraction)
        if 0.25 <= fraction <= 0.35:
            within += 1
    assert within > len(seeds) // 2, f"Ocean fractions {fractions}"


def test_tile_colors():
    land = Tile(coord=(0, 0), elevation=0.5, temperature=0.5, moisture=0.3, biome=Biome.GRASSLAND)
    r, g, b, a = BIOME_COLORS[Biome.GRASSLAND]
    assert tile_color(land) == (int(r * 0.8), int(g * 0.8), int(b * 0.8), a)
    ocean = Tile(coord=(0, 0), elevation=0.2, temperature=0.5, moisture=0.3, biome=Biome.DEEP_OCEAN)
    assert tile_color(ocean) == BIOME_COLORS[Biome.DEEP_OCEAN]
    river = Tile(coord=(0, 0), elevation=0.6, temperature=0.5, moisture=0.3, biome=Biome.FOREST,
                 river=RiverSegment.VERTICAL)
    assert tile_color(river) == RIVER_COLOR
    lake = Tile(coord=(0, 0), elevation=0.6, temperature=0.5, moisture=0.3, biome=Biome.FOREST, lake=True)
    assert tile_color(lake) == LAKE_COLOR
    assert set(BIOME_COLORS) == set(Biome)


def test_register_biome_color(monkeypatch):
    monkeypatch.setitem(BIOME_COLORS, Biome.DESERT, BIOME_COLORS[Biome.DESERT])
    register_biome_color(Biome.DESERT, (1, 2, 3, 255))
    desert = Tile(coord=(0, 0), elevation=0.5, temperature=0.9, moisture=0.1, biome=Biome.DESERT)
    assert tile_color(desert) == (0, 1, 2, 255)
