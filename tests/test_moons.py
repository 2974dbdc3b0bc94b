import itertools

import pytest

from exoforge.base.body import CelestialBody, GaseousDetails
from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.types import (
    CelestialBodySize,
    DiskType,
    MoonDistance,
    ObjectKind,
    ZoneType,
)
from exoforge.generator.moons import (
    MoonPlacementContext,
    PlacedMoon,
    generate_moons,
    generate_planet_moon_counts,
    get_major_moon_size,
)
from exoforge.settings import CelestialBodySettings
from exoforge.util.misc import calculate_hill_sphere_radius, calculate_roche_limit


def make_jupiter():
    body = CelestialBody(
        1,
        "Jupiter",
        mass=318.0,
        radius=11.2,
        density=1.33,
        blackbody_temperature=122,
        size=CelestialBodySize.GIANT,
        details=GaseousDetails(),
    )
    orbit = Orbit(
        0,
        satellite_ids=[1],
        zone_type=ZoneType.OUTER_ZONE,
        average_distance=5.2,
        average_distance_from_system_center=5.2,
    )
    return OrbitalPoint(1, orbit, body, ObjectKind.GASEOUS_BODY)


class CountingRoller:
    def __init__(self):
        self.calls = 0

    def gen_range(self, low, high):
        self.calls += 1
        return (low + high) / 2


class AlwaysConflicting(MoonPlacementContext):
    def conflicts(self, candidate):
        return True


class TestMoonGeneration:
    """Moons and rings around a gas giant."""

    def generate(self, sun, context):
        planet_point = make_jupiter()
        allocate_id = itertools.count(100).__next__
        points = generate_moons(context, sun, planet_point, CelestialBodySettings(), allocate_id)
        return planet_point, points

    def test_moons_within_hill_sphere(self, sun, context):
        planet_point, points = self.generate(sun, context)
        hill = calculate_hill_sphere_radius(5.2, 318.0 / 333000.0, 1.0)
        for point in points:
            assert 0 < point.distance <= hill
            assert point.own_orbit.primary_body_id == planet_point.id

    def test_ring_first_then_sorted_moons(self, sun, context):
        _, points = self.generate(sun, context)
        moons = [point for point in points if point.kind.is_body]
        rings = [point for point in points if point.kind.is_disk]
        assert points == rings + moons
        assert len(rings) <= 1
        distances = [moon.distance for moon in moons]
        assert distances == sorted(distances)

    def test_moon_names(self, sun, context):
        _, points = self.generate(sun, context)
        moons = [point for point in points if point.kind.is_body]
        assert [moon.object.name for moon in moons] == [
            f"Jupiter{chr(98 + index)}" for index in range(len(moons))
        ]
        for ring in (point for point in points if point.kind.is_disk):
            assert ring.object.name == "Jupiter's ring"

    def test_planet_orbits_sorted(self, sun, context):
        planet_point, points = self.generate(sun, context)
        assert sorted(planet_point.satellite_ids) == sorted(point.id for point in points)
        distances = [orbit.average_distance for orbit in planet_point.orbits]
        assert distances == sorted(distances)

    def test_moons_respect_exclusion(self, sun, context):
        _, points = self.generate(sun, context)
        moons = [(point.object, point.distance) for point in points if point.kind.is_body]

        def excludes(first, second):
            (moon, distance), (other, other_distance) = first, second
            exclusion = max(
                calculate_roche_limit(moon.radius, moon.density, other.density),
                calculate_hill_sphere_radius(distance, moon.mass, 318.0),
            )
            return abs(distance - other_distance) <= exclusion

        for first, second in itertools.combinations(moons, 2):
            assert not excludes(first, second)
            assert not excludes(second, first)

    def test_deterministic(self, sun, context):
        _, first = self.generate(sun, context)
        _, second = self.generate(sun, context)
        assert [p.distance for p in first] == [p.distance for p in second]
        assert [p.id for p in first] == [p.id for p in second]

    def test_disk_has_no_moons(self, sun, context):
        disk = CelestialDisk(1, "belt", DiskType.BELT)
        point = OrbitalPoint(1, Orbit(0, average_distance=2.0), disk, ObjectKind.TELLURIC_DISK)
        assert generate_moons(context, sun, point, CelestialBodySettings(), lambda: 2) == []


class TestPlacement:
    """Bounded search for a moon distance."""

    def test_attempts_are_bounded(self):
        planet = make_jupiter().object
        placement = AlwaysConflicting(planet, 5.2, 1.0, attempts=50)
        roller = CountingRoller()
        assert placement.find_distance(roller, MoonDistance.CLOSE, 0.1, 3.0, 0.001) is None
        # Close, then medium, then far
        assert roller.calls == 150

    def test_conflicts_with_placed_moon(self):
        planet = make_jupiter().object
        placement = MoonPlacementContext(planet, 5.2, 1.0)
        placement.placed.append(PlacedMoon(0.01, 0.3, 3.0, 0.015))
        assert placement.conflicts(PlacedMoon(0.01, 0.3, 3.0, 0.015))
        assert not placement.conflicts(PlacedMoon(0.1, 0.3, 3.0, 0.015))

    def test_heavy_candidate_excludes_light_moon(self):
        planet = make_jupiter().object
        placement = MoonPlacementContext(planet, 5.2, 1.0)
        placement.placed.append(PlacedMoon(0.01, 0.01, 3.0, 1e-9))
        candidate = PlacedMoon(0.0101, 1.0, 3.0, 10.0)
        # The light moon alone reaches nowhere near the candidate
        existing = placement.placed[0]
        assert placement.get_exclusion_radius(existing, 3.0) < 1e-4
        assert placement.get_exclusion_radius(candidate, 3.0) > 1e-4
        assert placement.conflicts(candidate)

    def test_major_moon_blocks_inner_moonlets(self):
        planet = make_jupiter().object
        placement = MoonPlacementContext(planet, 5.2, 1.0)
        roller = CountingRoller()
        found = placement.find_distance(
            roller, MoonDistance.MAJOR_GIANT_CLOSE, 0.3, 3.0, 0.015, is_major=True
        )
        assert found is not None
        low, high = placement.get_bracket(MoonDistance.BEFORE_MAJOR, 3.0)
        assert high < found[0]


class TestMoonCounts:
    """Moon counts and sizes."""

    def test_close_tiny_planet_has_no_moons(self, roller):
        assert generate_planet_moon_counts(roller, 0.3, CelestialBodySize.TINY) == (0, 0)

    @pytest.mark.parametrize(
        "host", [CelestialBodySize.STANDARD, CelestialBodySize.GIANT, CelestialBodySize.HYPERGIANT]
    )
    def test_major_moon_smaller_than_host(self, roller, host):
        size = get_major_moon_size(roller, host)
        assert CelestialBodySize.PUNY <= size <= CelestialBodySize.LARGE
        assert size < host
