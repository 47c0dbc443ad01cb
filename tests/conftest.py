import pytest

from worldgen.settings import RiverSettings, WorldSettings

# River build over a small region so tests stay fast; tile fields are unaffected.
SMALL_RIVERS = RiverSettings(
    region_min=-400,
    region_max=400,
    source_stride=20,
    max_sources=30,
    standalone_lake_count=8,
    standalone_lake_attempts=120,
)


@pytest.fixture
def small_settings():
    """World settings whose river network covers only x, y in [-400, 400)."""
    return WorldSettings(rivers=SMALL_RIVERS)
