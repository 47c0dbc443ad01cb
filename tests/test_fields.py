from worldgen.continents import ContinentModel
from worldgen.fields import TileFieldModel
from worldgen.settings import WorldSettings


def make_fields(seed=7, settings=None):
    settings = settings or WorldSettings()
    return TileFieldModel(seed, settings, ContinentModel(seed, settings))


def test_elevation_respects_land_ocean_split():
    fields = make_fields()
    continents = fields.continents
    for y in range(-500, 500, 29):
        for x in range(-500, 500, 29):
            elev = fields.elevation(x, y)
            assert 0.0 <= elev <= 1.0
            if continents.is_land(x, y):
                assert elev >= 0.51, f"Land tile ({x},{y}) has elevation {elev}"
            else:
                assert elev <= 0.49, f"Ocean tile ({x},{y}) has elevation {elev}"


def test_climate_fields_in_unit_range():
    fields = make_fields(seed=3)
    for y in range(-700, 700, 53):
        for x in range(-700, 700, 53):
            elev = fields.elevation(x, y)
            t = fields.temperature(x, y, elev)
            m = fields.moisture(x, y)
            assert 0.0 <= t <= 1.0, f"Temperature out of bounds at ({x},{y}): {t}"
            assert 0.0 <= m <= 1.0, f"Moisture out of bounds at ({x},{y}): {m}"


def test_equator_warmer_than_poles():
    settings = WorldSettings()
    fields = make_fields(settings=settings)
    equator = settings.frame_y + settings.frame_height // 2
    pole = settings.frame_y
    xs = range(-400, 400, 20)
    warm = sum(fields.temperature(x, equator, 0.5) for x in xs)
    cold = sum(fields.temperature(x, pole, 0.5) for x in xs)
    assert warm > cold


def test_altitude_cools():
    fields = make_fields()
    assert fields.temperature(10, 0, 0.9) < fields.temperature(10, 0, 0.5)


def test_fields_are_pure_functions():
    a = make_fields(seed=21)
    b = make_fields(seed=21)
    for x, y in [(0, 0), (-17, 250), (4000, -3999)]:
        assert a.elevation(x, y) == b.elevation(x, y)
        assert a.moisture(x, y) == b.moisture(x, y)
