import pytest
from pydantic import ValidationError

from exoforge.base.traits import BodyTraitKind, StarTraitKind, TideLockTarget, Trait
from exoforge.base.types import GasGiantArrangement, LifeLevel
from exoforge.settings import CelestialBodySettings, GenerationSettings, SystemSettings


class TestSettings:
    """Validation of generation settings."""

    def test_defaults(self):
        settings = GenerationSettings()
        assert settings.seed == "default"
        assert settings.system.fixed_number_of_bodies is None
        assert settings.system.moon_placement_attempts == 50
        assert settings.celestial_body.harmonics_tolerance == pytest.approx(0.03)
        assert settings.celestial_body.assumed_life_level is LifeLevel.NONE

    def test_empty_seed(self):
        with pytest.raises(ValueError):
            GenerationSettings(seed="")

    def test_negative_body_count(self):
        with pytest.raises(ValidationError):
            SystemSettings(fixed_number_of_bodies=-1)

    def test_tolerance_bounds(self):
        with pytest.raises(ValidationError):
            CelestialBodySettings(harmonics_tolerance=0.0)
        with pytest.raises(ValidationError):
            CelestialBodySettings(harmonics_tolerance=0.5)

    def test_body_traits(self):
        trait = Trait(BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED)
        settings = CelestialBodySettings(fixed_special_traits=[trait])
        assert settings.fixed_special_traits == [trait]

    def test_non_body_trait_rejected(self):
        with pytest.raises(ValidationError):
            CelestialBodySettings(fixed_special_traits=[Trait(StarTraitKind.AGE_DIFFERENCE)])
        with pytest.raises(ValidationError):
            CelestialBodySettings(fixed_special_traits=["Tide Locked"])

    def test_frozen(self):
        settings = GenerationSettings(seed="x")
        with pytest.raises(ValidationError):
            settings.seed = "y"

    def test_fixed_arrangement(self):
        settings = SystemSettings(fixed_gas_giant_arrangement=GasGiantArrangement.NO_GAS_GIANT)
        assert settings.fixed_gas_giant_arrangement is GasGiantArrangement.NO_GAS_GIANT

    def test_with_body_settings(self):
        settings = GenerationSettings(seed="x")
        updated = settings.with_body_settings(do_not_generate_icy=True)
        assert updated.celestial_body.do_not_generate_icy
        assert not settings.celestial_body.do_not_generate_icy
        assert updated.seed == "x"
