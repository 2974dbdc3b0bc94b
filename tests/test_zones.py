import pytest

from exoforge.base.orbit import Orbit
from exoforge.base.star import Star
from exoforge.base.types import ZoneType
from exoforge.base.zone import StarZone
from exoforge.generator.zones import (
    calculate_star_zones,
    collect_all_zones,
    find_zone,
    resolve_zones,
)


def assert_no_overlap(zones):
    for lower, upper in zip(zones, zones[1:]):
        assert lower.start <= upper.start
        assert lower.end <= upper.start + 1e-12


class TestStarZones:
    """Zones of a single star."""

    def test_sun_zone_sequence(self, sun):
        assert [zone.zone_type for zone in sun.zones] == [
            ZoneType.CORONA,
            ZoneType.INNER_LIMIT,
            ZoneType.INNER_ZONE,
            ZoneType.BIO_ZONE,
            ZoneType.INNER_ZONE,
            ZoneType.OUTER_ZONE,
        ]

    def test_sun_boundaries(self, sun):
        bio = sun.get_zone(ZoneType.BIO_ZONE)
        assert bio.start == pytest.approx(1.0)
        assert bio.end == pytest.approx(1.77)
        assert sun.snow_line == pytest.approx(4.85)
        assert sun.get_zone(ZoneType.OUTER_ZONE).end == pytest.approx(40.0)
        assert sun.corona_end == pytest.approx(0.00465, rel=1e-2)

    def test_no_overlap(self, sun):
        assert_no_overlap(sun.zones)

    def test_dim_star_has_no_bio_zone(self):
        star = Star({"name": "Dim", "mass": 0.5, "radius": 0.5, "luminosity": 0.0005})
        calculate_star_zones(star)
        # 1.77 * sqrt(L) stays under the 0.05 AU inner limit
        assert star.get_zone(ZoneType.BIO_ZONE) is None
        assert_no_overlap(star.zones)


class TestResolution:
    """Overlap resolution by priority."""

    def test_higher_priority_splits_lower(self):
        zones = resolve_zones(
            [
                StarZone(0.0, 10.0, ZoneType.INNER_ZONE),
                StarZone(2.0, 3.0, ZoneType.FORBIDDEN_ZONE),
            ]
        )
        assert [(z.start, z.end, z.zone_type) for z in zones] == [
            (0.0, 2.0, ZoneType.INNER_ZONE),
            (2.0, 3.0, ZoneType.FORBIDDEN_ZONE),
            (3.0, 10.0, ZoneType.INNER_ZONE),
        ]

    def test_same_type_neighbours_merge(self):
        zones = resolve_zones(
            [
                StarZone(0.0, 2.0, ZoneType.OUTER_ZONE),
                StarZone(2.0, 5.0, ZoneType.OUTER_ZONE),
            ]
        )
        assert len(zones) == 1
        assert (zones[0].start, zones[0].end) == (0.0, 5.0)

    def test_empty_zones_dropped(self):
        assert resolve_zones([StarZone(1.0, 1.0, ZoneType.BIO_ZONE)]) == []

    def test_subtract_truncates(self):
        zone = StarZone(0.0, 10.0, ZoneType.INNER_ZONE)
        assert zone.subtract(StarZone(8.0, 12.0, ZoneType.OUTER_ZONE)) == [
            StarZone(0.0, 8.0, ZoneType.INNER_ZONE)
        ]
        assert zone.subtract(StarZone(0.0, 10.0, ZoneType.BIO_ZONE)) == []


class TestBinaries:
    """Forbidden zones and system-wide zones."""

    def make_pair(self):
        primary = Star({"id": 0, "name": "A", "mass": 1.0, "radius": 1.0, "luminosity": 1.0})
        companion = Star(
            {
                "id": 1,
                "name": "B",
                "mass": 0.5,
                "radius": 0.5,
                "luminosity": 0.1,
                "orbit": Orbit(
                    0, average_distance=20.0, average_distance_from_system_center=20.0
                ),
            }
        )
        calculate_star_zones(primary, [companion])
        calculate_star_zones(companion, [primary])
        return primary, companion

    def test_forbidden_zone(self):
        primary, _ = self.make_pair()
        forbidden = primary.get_zone(ZoneType.FORBIDDEN_ZONE)
        assert forbidden.start == pytest.approx(20.0 / 3.0)
        assert forbidden.end == pytest.approx(60.0)
        assert_no_overlap(primary.zones)

    def test_all_zones_sorted_and_resolved(self):
        all_zones = collect_all_zones(self.make_pair())
        assert_no_overlap(all_zones)
        assert find_zone(all_zones, 10.0).zone_type is ZoneType.FORBIDDEN_ZONE

    def test_find_zone_outside(self, sun):
        assert find_zone(sun.zones, 100.0) is None
        assert find_zone(sun.zones, 1.5).zone_type is ZoneType.BIO_ZONE
