import pytest

from exoforge.base.types import ZoneType
from exoforge.generator.slots import (
    generate_orbits,
    generate_reference_orbit_radius,
    place_orbit_if_possible,
)


class TestOrbitSlots:
    """Candidate orbits around a single star."""

    @pytest.mark.parametrize("reference_radius", [0.5, 2.0, 10.0])
    def test_orbits_in_body_zones(self, sun, context, reference_radius):
        orbits = generate_orbits(sun.zones, sun, sun.id, context, reference_radius)
        assert orbits
        for orbit in orbits:
            assert orbit.zone_type.can_hold_bodies
            assert 0.1 <= orbit.average_distance <= 40.0
            assert orbit.primary_body_id == sun.id
            assert orbit.satellite_ids == []

    def test_orbits_sorted(self, sun, context):
        orbits = generate_orbits(sun.zones, sun, sun.id, context, 5.0)
        distances = [orbit.average_distance for orbit in orbits]
        assert distances == sorted(distances)

    def test_orbits_deterministic(self, sun, context):
        first = generate_orbits(sun.zones, sun, sun.id, context, 5.0)
        second = generate_orbits(sun.zones, sun, sun.id, context, 5.0)
        assert [o.average_distance for o in first] == [o.average_distance for o in second]

    def test_reference_radius_inside_outer_edge(self, sun, context):
        radius = generate_reference_orbit_radius(sun, context, 8)
        # 40 AU divided by 1.05 to 1.3
        assert 40.0 / 1.3 - 1e-9 <= radius <= 40.0 / 1.05 + 1e-9


class TestPlacement:
    """Whether a distance can take an orbit."""

    def test_body_zone(self, sun):
        orbit, done = place_orbit_if_possible(sun.zones, 0, 1.2, 1.2)
        assert not done
        assert orbit.zone_type is ZoneType.BIO_ZONE

    def test_inner_limit_stops(self, sun):
        orbit, done = place_orbit_if_possible(sun.zones, 0, 0.05, 0.05)
        assert orbit is None
        assert done

    def test_outside_all_zones_stops(self, sun):
        assert place_orbit_if_possible(sun.zones, 0, 80.0, 80.0) == (None, True)
