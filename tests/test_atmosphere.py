import pytest

from exoforge.base.types import (
    CelestialBodyComposition,
    GasPresence,
    LifeLevel,
    MagneticFieldStrength,
    WorldType,
)
from exoforge.generator.atmosphere import (
    GAS_FAMILIES,
    add_gas_as,
    apply_persistence,
    calculate_escape_velocity,
    can_persist,
    generate_atmospheric_composition,
    is_gaseous,
    roll_percentages,
    select_gases,
)
from exoforge.util.elements import ChemicalComponent as C


class TestGasBookkeeping:
    """Adding gases to a composition."""

    def test_new_gas_is_set(self):
        gases = add_gas_as({}, C.NITROGEN, GasPresence.MINOR)
        assert gases == {C.NITROGEN: GasPresence.MINOR}

    def test_quirk_stronger_gas_upgrades_one_level(self):
        # A stronger addition climbs a single level, not to the requested one
        gases = {C.NITROGEN: GasPresence.MINOR}
        add_gas_as(gases, C.NITROGEN, GasPresence.MAJOR)
        assert gases[C.NITROGEN] is GasPresence.SIGNIFICANT

    def test_quirk_weaker_gas_leaves_presence(self):
        gases = {C.NITROGEN: GasPresence.MAJOR}
        add_gas_as(gases, C.NITROGEN, GasPresence.TRACE)
        assert gases[C.NITROGEN] is GasPresence.MAJOR

    def test_dominant_stays_dominant(self):
        gases = {C.NITROGEN: GasPresence.DOMINANT}
        add_gas_as(gases, C.NITROGEN, GasPresence.DOMINANT)
        assert gases[C.NITROGEN] is GasPresence.DOMINANT


class TestPersistence:
    """Which gases a body can hold."""

    def test_escape_velocity_of_earth(self):
        assert calculate_escape_velocity(1.0, 1.0) == pytest.approx(11186, rel=1e-2)

    def test_no_radius_no_escape_velocity(self):
        assert calculate_escape_velocity(1.0, 0.0) == 0.0

    def test_refractory_components(self):
        assert not is_gaseous(C.IRON, 300, 1.0)
        assert is_gaseous(C.IRON, 600, 1.0)

    def test_earth_keeps_nitrogen(self):
        assert can_persist(C.NITROGEN, 288, 1.0, 11186, MagneticFieldStrength.MODERATE)
        assert can_persist(C.NITROGEN, 288, 1.0, 11186, MagneticFieldStrength.NONE)

    def test_small_hot_body_loses_hydrogen(self):
        escape_velocity = calculate_escape_velocity(0.0123, 0.273)
        assert not can_persist(C.HYDROGEN, 400, 1.0, escape_velocity, MagneticFieldStrength.STRONG)

    def test_frozen_water_is_not_a_gas(self):
        assert not can_persist(C.WATER, 200, 1.0, 1e6, MagneticFieldStrength.STRONG)

    def test_no_escape_velocity_keeps_nothing(self):
        gases = {C.NITROGEN: GasPresence.DOMINANT, C.WATER: GasPresence.MAJOR}
        assert apply_persistence(gases, 288, 1.0, 0.0, MagneticFieldStrength.MODERATE) == {}

    def test_lost_gas_leaves_products(self):
        gases = {C.WATER: GasPresence.MAJOR}
        kept = apply_persistence(gases, 200, 1.0, 1e6, MagneticFieldStrength.STRONG)
        assert kept == {
            C.HYDROGEN: GasPresence.SIGNIFICANT,
            C.OXYGEN: GasPresence.SIGNIFICANT,
        }

    def test_lost_trace_gas_leaves_nothing(self):
        gases = {C.WATER: GasPresence.TRACE}
        assert apply_persistence(gases, 200, 1.0, 1e6, MagneticFieldStrength.STRONG) == {}


class TestComposition:
    """Gas families and percentages."""

    def test_chthonian_without_volcanism(self, roller):
        gases = select_gases(
            roller,
            WorldType.CHTHONIAN,
            CelestialBodyComposition.METALLIC,
            1200,
            4.6,
            0.0,
            LifeLevel.NONE,
            (),
        )
        assert gases == dict(GAS_FAMILIES["sodium_silicate"])

    def test_volcanic_outgassing(self, roller):
        gases = select_gases(
            roller,
            WorldType.CHTHONIAN,
            CelestialBodyComposition.METALLIC,
            1200,
            4.6,
            60.0,
            LifeLevel.NONE,
            (),
        )
        assert gases[C.SODIUM] is GasPresence.DOMINANT
        assert gases[C.CARBON_DIOXIDE] is GasPresence.SIGNIFICANT
        assert gases[C.HYDROGEN_SULFIDE] is GasPresence.TRACE
        assert C.CARBON_MONOXIDE not in gases

    def test_percentages(self, roller):
        gases = {
            C.NITROGEN: GasPresence.DOMINANT,
            C.OXYGEN: GasPresence.MAJOR,
            C.ARGON: GasPresence.MINOR,
        }
        composition = roll_percentages(roller, gases)
        assert len(composition) == 3
        assert sum(value for value, _ in composition) == pytest.approx(100.0)
        values = [value for value, _ in composition]
        assert values == sorted(values, reverse=True)
        assert {component for _, component in composition} == set(gases)

    def test_no_gases_no_percentages(self, roller):
        assert roll_percentages(roller, {}) == []

    def test_no_pressure_no_atmosphere(self, roller):
        composition = generate_atmospheric_composition(
            roller,
            WorldType.TERRESTRIAL,
            CelestialBodyComposition.ROCKY,
            1.0,
            1.0,
            288,
            0.0,
            MagneticFieldStrength.MODERATE,
            10.0,
            4.6,
        )
        assert composition == []

    def test_earth_like_atmosphere(self, roller):
        composition = generate_atmospheric_composition(
            roller,
            WorldType.TERRESTRIAL,
            CelestialBodyComposition.ROCKY,
            1.0,
            1.0,
            288,
            1.0,
            MagneticFieldStrength.MODERATE,
            10.0,
            4.6,
        )
        assert composition
        assert sum(value for value, _ in composition) == pytest.approx(100.0)
        assert C.NITROGEN in {component for _, component in composition}
