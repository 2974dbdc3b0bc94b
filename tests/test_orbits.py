import numpy as np
import pytest

from exoforge.base.body import CelestialBody, TelluricDetails
from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.traits import BodyTraitKind, RotationAnomaly, TideLockTarget, has_trait
from exoforge.base.types import (
    CelestialBodySize,
    GasGiantArrangement,
    MoonDistance,
    ObjectKind,
    ZoneType,
)
from exoforge.generator.orbits import (
    calculate_tidal_braking,
    complete_orbital_period_and_eccentricity,
    complete_rotation_and_axis,
    generate_axial_tilt,
    generate_eccentricity,
    generate_inclination,
    is_resonant,
)


def make_planet(distance, point_id=1):
    body = CelestialBody(
        point_id,
        "Terra",
        mass=1.0,
        radius=1.0,
        density=5.51,
        blackbody_temperature=278,
        size=CelestialBodySize.STANDARD,
        details=TelluricDetails(),
    )
    orbit = Orbit(
        0,
        satellite_ids=[point_id],
        zone_type=ZoneType.BIO_ZONE,
        average_distance=distance,
        average_distance_from_system_center=distance,
    )
    return OrbitalPoint(point_id, orbit, body, ObjectKind.TELLURIC_BODY)


class TestPeriodAndEccentricity:
    """Orbital period and eccentricity."""

    def test_earth_period(self, context):
        point = make_planet(1.0)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.NO_GAS_GIANT
        )
        assert point.own_orbit.orbital_period == pytest.approx(365.25, rel=1e-3)
        assert 0.0 <= point.own_orbit.eccentricity <= 0.8

    def test_separations_follow_eccentricity(self, context):
        point = make_planet(2.0)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.ECCENTRIC
        )
        orbit = point.own_orbit
        assert orbit.min_separation == pytest.approx((1 - orbit.eccentricity) * 2.0)
        assert orbit.max_separation == pytest.approx((1 + orbit.eccentricity) * 2.0)

    @pytest.mark.parametrize("modifier", [-20, -6, 0, 3, 20])
    def test_eccentricity_range(self, roller, modifier):
        assert 0.0 <= generate_eccentricity(roller, modifier) <= 0.8


class TestRotation:
    """Rotation, tide locking and axes."""

    def test_close_planet_is_tide_locked(self, context, sun):
        point = make_planet(0.05)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.NO_GAS_GIANT
        )
        braking = complete_rotation_and_axis(
            context, point, sun, GasGiantArrangement.NO_GAS_GIANT, []
        )
        orbit = point.own_orbit
        assert braking >= 50
        assert orbit.rotation == orbit.orbital_period
        assert np.isinf(orbit.day_length)
        assert has_trait(
            point.object.special_traits, BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED
        )

    def test_locked_to_closest_major_moon(self, context, sun):
        point = make_planet(0.05)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.NO_GAS_GIANT
        )
        moons = []
        for moon_id, distance, period in [(2, 0.003, 9.0), (3, 0.001, 2.5)]:
            moon = make_planet(distance, point_id=moon_id)
            moon.object.mass = 0.01
            moon.own_orbit.primary_body_id = point.id
            moon.own_orbit.orbital_period = period
            moon.own_orbit.distance_category = MoonDistance.MAJOR_PLANET_CLOSE
            moons.append(moon)
        braking = complete_rotation_and_axis(
            context, point, sun, GasGiantArrangement.NO_GAS_GIANT, [], moon_points=moons
        )
        assert braking >= 50
        assert point.own_orbit.rotation == 2.5
        assert has_trait(
            point.object.special_traits, BodyTraitKind.TIDE_LOCKED, TideLockTarget.SATELLITE
        )

    def test_minor_moon_does_not_hold_lock(self, context, sun):
        point = make_planet(0.05)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.NO_GAS_GIANT
        )
        moon = make_planet(0.002, point_id=2)
        moon.object.mass = 0.0001
        moon.own_orbit.primary_body_id = point.id
        moon.own_orbit.orbital_period = 4.0
        moon.own_orbit.distance_category = MoonDistance.MEDIUM
        complete_rotation_and_axis(
            context, point, sun, GasGiantArrangement.NO_GAS_GIANT, [], moon_points=[moon]
        )
        assert point.own_orbit.rotation == point.own_orbit.orbital_period
        assert has_trait(
            point.object.special_traits, BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED
        )

    def test_far_planet_rotates(self, context, sun):
        point = make_planet(1.0)
        complete_orbital_period_and_eccentricity(
            context, point, 1.0, GasGiantArrangement.NO_GAS_GIANT
        )
        braking = complete_rotation_and_axis(
            context, point, sun, GasGiantArrangement.NO_GAS_GIANT, []
        )
        orbit = point.own_orbit
        assert braking < 25
        assert not has_trait(point.object.special_traits, BodyTraitKind.TIDE_LOCKED)
        assert orbit.rotation != 0
        assert 0.0 <= orbit.axial_tilt <= 90.0
        assert 0.0 <= orbit.inclination <= 180.0

    def test_braking_without_mass(self):
        assert calculate_tidal_braking(0.0, 1.0, 4.6, star_mass=1.0, star_distance=1.0) == 0.0

    def test_braking_grows_with_age(self):
        young = calculate_tidal_braking(1.0, 1.0, 1.0, star_mass=1.0, star_distance=0.5)
        old = calculate_tidal_braking(1.0, 1.0, 4.0, star_mass=1.0, star_distance=0.5)
        assert old == pytest.approx(4 * young)

    @pytest.mark.parametrize(
        "braking, eccentricity",
        [(10.0, 0.3), (30.0, 0.05), (60.0, 0.3)],
    )
    def test_no_resonance(self, roller, braking, eccentricity):
        assert not is_resonant(roller, braking, eccentricity)

    def test_resonant_rotation(self, context, sun):
        # Find a body id whose resonance roll succeeds
        for point_id in range(1, 50):
            point = make_planet(0.5, point_id)
            point.own_orbit.orbital_period = 30.0
            point.own_orbit.set_eccentricity(0.3)
            braking = calculate_tidal_braking(1.0, 1.0, sun.age, 1.0, 0.5)
            assert 25 <= braking < 50
            if not is_resonant(context.roller(f"_bdy{point_id}_res"), braking, 0.3):
                continue
            complete_rotation_and_axis(context, point, sun, GasGiantArrangement.NO_GAS_GIANT, [])
            assert point.own_orbit.rotation == pytest.approx(20.0)
            assert has_trait(
                point.object.special_traits, BodyTraitKind.UNUSUAL_ROTATION, RotationAnomaly.RESONANT
            )
            break
        else:
            pytest.fail("no resonant body found")

    def test_axial_tilt_range(self, roller):
        for _ in range(20):
            assert 0.0 <= generate_axial_tilt(roller) <= 90.0

    def test_retrograde_inclination(self, roller):
        for _ in range(50):
            inclination, retrograde = generate_inclination(roller, 0, cataclysm_modifier=50)
            assert (inclination > 90.0) == retrograde
