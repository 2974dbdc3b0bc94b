import pytest

from exoforge.base.body import CelestialBody, GaseousDetails, TelluricDetails
from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.star import Star
from exoforge.base.traits import (
    BodyTraitKind,
    CoreAnomaly,
    GeologicActivity,
    MetallicityDifference,
    StarTraitKind,
    Trait,
)
from exoforge.base.types import (
    CelestialBodyComposition,
    CelestialBodySize,
    ClimateType,
    CoreHeat,
    MagneticFieldStrength,
    ObjectKind,
    TemperatureCategory,
    WorldType,
    ZoneType,
)
from exoforge.generator.world import (
    assign_liquids,
    calculate_humidity,
    calculate_surface_temperature,
    generate_atmospheric_pressure,
    generate_core_heat,
    generate_hydrosphere,
    generate_magnetic_field,
    generate_tectonics,
    generate_volcanism,
    generate_world,
    get_atmospheric_mass_modifier,
    get_core_heat_modifier,
    get_greenhouse_factor,
    get_hydrosphere_ceiling,
    get_rotation_magnetic_modifier,
    needs_pressure_table,
    partition_surface,
    upgrade_world_type,
)
from exoforge.util.elements import ChemicalComponent


def make_world_point(world_type=WorldType.TERRESTRIAL, details=None, point_id=1):
    if details is None:
        details = TelluricDetails(CelestialBodyComposition.ROCKY, world_type)
    body = CelestialBody(
        point_id,
        "Terra",
        mass=1.0,
        radius=1.0,
        density=5.51,
        blackbody_temperature=278,
        size=CelestialBodySize.STANDARD,
        details=details,
    )
    orbit = Orbit(
        0,
        satellite_ids=[point_id],
        zone_type=ZoneType.BIO_ZONE,
        average_distance=1.0,
        average_distance_from_system_center=1.0,
        orbital_period=365.25,
        rotation=1.0,
    )
    orbit.set_eccentricity(0.02)
    return OrbitalPoint(point_id, orbit, body, ObjectKind.TELLURIC_BODY)


class TestCoreAndField:
    """Core heat and magnetic field."""

    def test_tiny_bodies_are_frozen(self, roller):
        heat = generate_core_heat(
            roller, CelestialBodySize.TINY, 5.5, CelestialBodyComposition.METALLIC, [], 0.1, 0.05
        )
        assert heat is CoreHeat.FROZEN

    def test_coreless_is_frozen(self, roller):
        traits = [Trait(BodyTraitKind.UNUSUAL_CORE, CoreAnomaly.CORELESS)]
        heat = generate_core_heat(
            roller, CelestialBodySize.LARGE, 5.5, CelestialBodyComposition.ROCKY, traits, 4.6, 1.0
        )
        assert heat is CoreHeat.FROZEN

    @pytest.mark.parametrize(
        "anomaly, change",
        [(CoreAnomaly.SMALLER, -2), (CoreAnomaly.CORELESS, -100)],
    )
    def test_core_anomaly_modifiers(self, anomaly, change):
        args = (CelestialBodySize.STANDARD, 5.5, CelestialBodyComposition.ROCKY)
        rest = (4.6, 1.0, 0.02, 1.0, 0)
        base = get_core_heat_modifier(*args, [], *rest)
        traits = [Trait(BodyTraitKind.UNUSUAL_CORE, anomaly)]
        assert get_core_heat_modifier(*args, traits, *rest) == base + change

    def test_quirk_larger_core_adds_nothing(self):
        args = (CelestialBodySize.STANDARD, 5.5, CelestialBodyComposition.ROCKY)
        rest = (4.6, 1.0, 0.02, 1.0, 0)
        traits = [Trait(BodyTraitKind.UNUSUAL_CORE, CoreAnomaly.LARGER)]
        assert get_core_heat_modifier(*args, traits, *rest) == get_core_heat_modifier(
            *args, [], *rest
        )

    def test_strong_tidal_heating_is_intense(self, roller):
        heat = generate_core_heat(
            roller,
            CelestialBodySize.STANDARD,
            5.5,
            CelestialBodyComposition.ROCKY,
            [],
            4.6,
            1.0,
            tidal_heating=50,
        )
        assert heat is CoreHeat.INTENSE

    def test_puny_frozen_body_has_no_field(self, roller):
        field = generate_magnetic_field(roller, CelestialBodySize.PUNY, 3.0, CoreHeat.FROZEN, [])
        assert field is MagneticFieldStrength.NONE

    @pytest.mark.parametrize(
        "rotation, modifier", [(0.5, 1), (-0.5, 1), (1.0, 0), (10.0, 0), (30.0, -2), (100.0, -4)]
    )
    def test_rotation_modifier(self, rotation, modifier):
        assert get_rotation_magnetic_modifier(rotation) == modifier


class TestHydrosphere:
    """Hydrosphere, volcanism and tectonics."""

    def test_ceiling_scenario(self, roller):
        hydrosphere = generate_hydrosphere(
            roller,
            WorldType.TERRESTRIAL,
            CelestialBodySize.STANDARD,
            5.5,
            MagneticFieldStrength.STRONG,
            [],
        )
        assert 40 <= hydrosphere <= 90

    @pytest.mark.parametrize(
        "density, ceiling", [(2.9, 100), (3.0, 95), (5.5, 90), (7.9, 75), (8.0, 50), (12.0, 50)]
    )
    def test_ceilings(self, density, ceiling):
        assert get_hydrosphere_ceiling(density) == ceiling

    def test_dry_world_types(self, roller):
        for world_type in (WorldType.ROCK, WorldType.HADEAN, WorldType.CHTHONIAN):
            hydrosphere = generate_hydrosphere(
                roller, world_type, CelestialBodySize.STANDARD, 5.5, MagneticFieldStrength.STRONG, []
            )
            assert hydrosphere == 0.0

    def test_tidal_heating_dries(self, roller):
        hydrosphere = generate_hydrosphere(
            roller,
            WorldType.TERRESTRIAL,
            CelestialBodySize.STANDARD,
            5.5,
            MagneticFieldStrength.STRONG,
            [],
            tidal_heating=50,
        )
        assert hydrosphere == 0.0

    def test_dead_world_has_no_volcanism(self, roller):
        traits = [Trait(BodyTraitKind.SPECIFIC_GEOLOGIC_ACTIVITY, GeologicActivity.DEAD)]
        assert generate_volcanism(roller, 1.0, 4.6, CoreHeat.INTENSE, traits) == 0.0

    def test_volcanism_range(self, roller):
        volcanism = generate_volcanism(roller, 3.0, 0.1, CoreHeat.INTENSE, [], 10, 3)
        assert volcanism == 100.0

    def test_puny_body_has_no_tectonics(self, roller):
        tectonics = generate_tectonics(
            roller, CelestialBodySize.PUNY, 80.0, 50.0, CoreHeat.INTENSE, []
        )
        assert tectonics == 0.0

    def test_tectonics_range(self, roller):
        tectonics = generate_tectonics(
            roller, CelestialBodySize.STANDARD, 30.0, 70.0, CoreHeat.ACTIVE, []
        )
        assert 0.0 <= tectonics <= 100.0


class TestWorldTypeUpgrade:
    """Ocean and geologically active upgrades."""

    def test_flooded_terrestrial(self):
        assert upgrade_world_type(WorldType.TERRESTRIAL, 95.0, 0.0, 0.0) is WorldType.OCEAN

    def test_active_rock(self):
        assert upgrade_world_type(WorldType.ROCK, 0.0, 60.0, 0.0) is WorldType.GEO_ACTIVE
        assert upgrade_world_type(WorldType.ICE, 10.0, 0.0, 56.0) is WorldType.GEO_ACTIVE

    def test_threshold_is_exclusive(self):
        assert upgrade_world_type(WorldType.ROCK, 0.0, 55.0, 55.0) is WorldType.ROCK

    @pytest.mark.parametrize(
        "world_type", [WorldType.TERRESTRIAL, WorldType.PROTO_WORLD, WorldType.VOLATILES_GIANT]
    )
    def test_protected_types(self, world_type):
        assert upgrade_world_type(world_type, 10.0, 90.0, 90.0) is world_type


class TestPressureAndTemperature:
    """Atmospheric pressure and surface temperature."""

    def test_greenhouse_pressure(self, roller, sun):
        pressure = generate_atmospheric_pressure(
            roller,
            WorldType.GREENHOUSE,
            CelestialBodySize.STANDARD,
            1.0,
            CelestialBodyComposition.ROCKY,
            0.7,
            sun,
        )
        assert 1.5 <= pressure <= 300.0

    @pytest.mark.parametrize(
        "world_type, size",
        [
            (WorldType.CHTHONIAN, CelestialBodySize.STANDARD),
            (WorldType.ROCK, CelestialBodySize.SMALL),
            (WorldType.ICE, CelestialBodySize.TINY),
            (WorldType.HADEAN, CelestialBodySize.STANDARD),
            (WorldType.TERRESTRIAL, CelestialBodySize.PUNY),
        ],
    )
    def test_airless(self, roller, sun, world_type, size):
        assert not needs_pressure_table(world_type, size)
        pressure = generate_atmospheric_pressure(
            roller, world_type, size, 0.1, CelestialBodyComposition.ROCKY, 1.0, sun
        )
        assert pressure == 0.0

    def test_terrestrial_pressure(self, roller, sun):
        pressure = generate_atmospheric_pressure(
            roller,
            WorldType.TERRESTRIAL,
            CelestialBodySize.STANDARD,
            1.0,
            CelestialBodyComposition.ROCKY,
            1.0,
            sun,
        )
        assert 0.5 <= pressure <= 1.5

    def test_quirk_star_traits_leave_pressure_modifier(self, sun_dict, sun):
        odd_sun = Star(
            dict(
                sun_dict,
                traits=[
                    Trait(StarTraitKind.UNUSUAL_METALLICITY, MetallicityDifference.MUCH_HIGHER),
                    Trait(StarTraitKind.EXCESSIVE_RADIATION),
                ],
            )
        )
        args = (1.0, 1.0, 4.6, CelestialBodyComposition.ROCKY)
        assert get_atmospheric_mass_modifier(
            *args, odd_sun, False, 0.0
        ) == get_atmospheric_mass_modifier(*args, sun, False, 0.0)

    def test_volcanism_thickens_atmosphere(self, sun):
        args = (1.0, 1.0, 4.6, CelestialBodyComposition.ROCKY, sun, False)
        assert get_atmospheric_mass_modifier(*args, 100.0) > get_atmospheric_mass_modifier(
            *args, 0.0
        )

    @pytest.mark.parametrize(
        "pressure, factor", [(0.0, 0.0), (0.01, 0.05), (1.0, 0.16), (50.0, 1.0), (150.0, 1.5)]
    )
    def test_greenhouse_factor(self, pressure, factor):
        assert get_greenhouse_factor(pressure) == factor

    def test_surface_temperature(self):
        # 278 * 0.88 * 1.16
        assert calculate_surface_temperature(
            278, WorldType.TERRESTRIAL, CelestialBodySize.STANDARD, 70.0, 1.0
        ) == 284
        assert calculate_surface_temperature(
            278, WorldType.ROCK, CelestialBodySize.SMALL, 0.0, 0.0
        ) == 267

    @pytest.mark.parametrize(
        "temperature, category",
        [
            (100, TemperatureCategory.FROZEN),
            (250, TemperatureCategory.VERY_COLD),
            (288, TemperatureCategory.COOL),
            (295, TemperatureCategory.IDEAL),
            (400, TemperatureCategory.INFERNAL),
        ],
    )
    def test_temperature_categories(self, temperature, category):
        assert TemperatureCategory.from_temperature(temperature) is category


class TestSurface:
    """Liquids, ice and humidity."""

    def test_water_oceans(self):
        world_type, traits, liquid = assign_liquids(WorldType.OCEAN, 95.0, 288, 1.0)
        assert world_type is WorldType.OCEAN
        assert liquid is ChemicalComponent.WATER
        assert traits == [Trait(BodyTraitKind.OCEANS, ChemicalComponent.WATER)]

    def test_lakes(self):
        _, traits, _ = assign_liquids(WorldType.TERRESTRIAL, 30.0, 288, 1.0)
        assert traits == [Trait(BodyTraitKind.LAKES, ChemicalComponent.WATER)]

    def test_ocean_without_liquid_downgraded(self):
        world_type, traits, liquid = assign_liquids(WorldType.OCEAN, 95.0, 40, 0.0)
        assert world_type is WorldType.TERRESTRIAL
        assert traits == []
        assert liquid is None

    @pytest.mark.parametrize(
        "hydrosphere, temperature, pressure, liquid_possible",
        [
            (70.0, 288, 1.0, True),
            (40.0, 240, 0.5, True),
            (95.0, 150, 0.2, False),
            (0.0, 250, 1.0, False),
            (30.0, 270, 1.0, True),
        ],
    )
    def test_partition_closes(self, roller, hydrosphere, temperature, pressure, liquid_possible):
        parts = partition_surface(roller, hydrosphere, temperature, pressure, liquid_possible)
        assert all(part >= 0 for part in parts)
        assert sum(parts) == pytest.approx(100.0, abs=0.05)

    def test_frozen_liquid(self, roller):
        hydrosphere, ice_over_water, _, _ = partition_surface(roller, 40.0, 100, 0.5, False)
        assert hydrosphere == 0.0
        assert ice_over_water == 40.0

    def test_boiled_off(self, roller):
        parts = partition_surface(roller, 40.0, 500, 0.005, False)
        assert parts == (0.0, 0.0, 0.0, 100.0)

    def test_ribbon_world_keeps_ice(self, roller):
        _, ice_over_water, ice_over_land, _ = partition_surface(
            roller, 50.0, 300, 1.0, True, ribbon_world=True
        )
        assert ice_over_water + ice_over_land >= 40.0 - 0.02

    @pytest.mark.parametrize("temperature, pressure", [(200, 1.0), (300, 0.005)])
    def test_no_humidity(self, roller, temperature, pressure):
        assert calculate_humidity(roller, temperature, pressure, 50.0, 0.0, 50.0) == 0.0

    def test_humidity_range(self, roller):
        humidity = calculate_humidity(roller, 300, 1.0, 70.0, 5.0, 25.0)
        assert 0.0 <= humidity <= 100.0


class TestGenerateWorld:
    """Whole world property cascade."""

    def test_earth_like_world(self, context, sun, settings):
        point = make_world_point()
        details = generate_world(context, point, sun, body_settings=settings.celestial_body)
        assert details.world_type in (WorldType.TERRESTRIAL, WorldType.OCEAN)
        assert details.core_heat is not None
        assert details.magnetic_field is not None
        assert details.surface_total == pytest.approx(100.0, abs=0.05)
        assert details.temperature_category is TemperatureCategory.from_temperature(
            details.temperature
        )
        assert (details.atmospheric_pressure == 0) == (details.atmospheric_composition == [])
        if details.atmospheric_composition:
            total = sum(share for share, _ in details.atmospheric_composition)
            assert total == pytest.approx(100.0)
        assert isinstance(details.climate, ClimateType)

    def test_deterministic(self, context, sun):
        first = generate_world(context, make_world_point(), sun)
        second = generate_world(context, make_world_point(), sun)
        assert first.dump_params() == second.dump_params()

    def test_proto_world(self, context, sun):
        details = generate_world(context, make_world_point(WorldType.PROTO_WORLD), sun)
        assert details.core_heat is CoreHeat.INTENSE
        assert details.magnetic_field is MagneticFieldStrength.NONE
        assert details.temperature == 1600
        assert details.volcanism == 100.0
        assert details.tectonic_activity == 100.0
        assert details.land_area == 100.0
        assert details.climate is ClimateType.DEAD

    def test_volatiles_giant(self, context, sun):
        details = generate_world(context, make_world_point(WorldType.VOLATILES_GIANT), sun)
        assert details.temperature == 278
        assert details.climate is ClimateType.DEAD

    def test_airless_world_has_bare_temperature(self, context, sun):
        point = make_world_point(WorldType.ICE)
        body = point.object
        # Far too light to hold any gas
        body.mass = 1e-5
        body.radius = 0.5
        body.density = 1.0
        body.solve_dependent_params()
        details = generate_world(context, point, sun)
        assert details.atmospheric_composition == []
        assert details.atmospheric_pressure == 0.0
        assert details.temperature == calculate_surface_temperature(
            278, details.world_type, CelestialBodySize.STANDARD, 0, 0.0
        )
        assert details.temperature < 278

    def test_gaseous_body_rejected(self, context, sun):
        point = make_world_point(details=GaseousDetails())
        with pytest.raises(TypeError):
            generate_world(context, point, sun)
