import dataclasses

import pytest

from worldgen import adjust_settings
from worldgen.settings import DEFAULT_SETTINGS, RiverSettings, WorldSettings


def test_replace_changes_only_named_fields():
    adjusted = DEFAULT_SETTINGS.replace(ocean_fraction=0.4, chunk_size=8)
    assert adjusted.ocean_fraction == 0.4
    assert adjusted.chunk_size == 8
    assert adjusted.frame_width == DEFAULT_SETTINGS.frame_width
    assert DEFAULT_SETTINGS.chunk_size == 16


def test_replace_ignores_unknown_keys_and_coerces_ints():
    adjusted = adjust_settings(DEFAULT_SETTINGS, not_a_setting=5, warp_strength=10)
    assert adjusted.warp_strength == 10.0
    assert isinstance(adjusted.warp_strength, float)


def test_replace_rejects_wrong_types():
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.replace(chunk_size="16")
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.replace(ocean_fraction="0.3")
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.replace(chunk_size=True)
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.replace(rivers={"region_min": 0})


def test_settings_are_frozen_and_hashable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.chunk_size = 4
    assert hash(WorldSettings()) == hash(WorldSettings())
    small = WorldSettings(rivers=RiverSettings(region_min=-10, region_max=10))
    assert small != WorldSettings()
