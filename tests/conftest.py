import pytest

from exoforge.base.star import Star
from exoforge.generator.zones import calculate_star_zones
from exoforge.settings import GenerationSettings
from exoforge.util.dice import GenerationContext, SeededDiceRoller

SUN = {
    "id": 0,
    "name": "Sol",
    "mass": 1.0,
    "radius": 1.0,
    "luminosity": 1.0,
    "age": 4.6,
    "spectral_class": "G",
    "spectral_subtype": 2,
    "luminosity_class": "V",
    "population": "Dwarf",
}


@pytest.fixture
def sun_dict():
    return dict(SUN)


@pytest.fixture
def sun(sun_dict):
    star = Star(sun_dict)
    calculate_star_zones(star)
    return star


@pytest.fixture
def settings():
    return GenerationSettings(seed="test-seed")


@pytest.fixture
def context(settings):
    return GenerationContext(settings.seed, (0, 0, 0), 0, 0)


@pytest.fixture
def roller():
    return SeededDiceRoller("test-seed", "fixture")
