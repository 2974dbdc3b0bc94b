import pytest

from exoforge.base.body import CelestialBody, TelluricDetails
from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.types import CelestialBodySize, DiskType, ObjectKind
from exoforge.generator.harmonics import (
    apply_tidal_heating,
    calculate_gravitational_harmonics,
    calculate_step_modifier,
    evaluate_resonance,
    prepare_harmonics_array,
)


def make_body_point(point_id, period, size=CelestialBodySize.SMALL):
    body = CelestialBody(
        point_id, f"b{point_id}", mass=0.1, radius=0.5, density=3.0, size=size,
        details=TelluricDetails(),
    )
    orbit = Orbit(0, satellite_ids=[point_id], orbital_period=period)
    return OrbitalPoint(point_id, orbit, body, ObjectKind.TELLURIC_BODY)


class TestResonance:
    """Strength of a resonance between two periods."""

    @pytest.mark.parametrize(
        "period1, period2, expected",
        [
            (1.0, 1.0, 5.0),
            (2.0, 1.0, 4.5),
            (1.0, 2.0, 4.5),
            (3.0, 2.0, 3.5),
            (1.02, 1.0, 5.0),
            (10.0, 1.0, 0.0),
            (1.0, 0.0, 0.0),
        ],
    )
    def test_evaluate_resonance(self, period1, period2, expected):
        assert evaluate_resonance(period1, period2) == pytest.approx(expected)

    def test_lowest_numerator_wins(self):
        # 0.17576 matches 1/5 before 1/6
        assert evaluate_resonance(1.0, 5.6895) == pytest.approx(3.0)

    def test_step_modifier(self):
        assert calculate_step_modifier(1) == 1.0
        assert calculate_step_modifier(3) == pytest.approx(4.0 / 9.0)


class TestGravitationalHarmonics:
    """Tidal heating of ordered siblings."""

    def test_simple_chain(self):
        periods = [(1.0, 1.0), (2.0, 1.0), (4.0, 1.0)]
        assert calculate_gravitational_harmonics(periods, 0.03) == [7, 6, 2]

    def test_mixed_chain(self):
        periods = [(1.0, 1.0), (2.0, 1.0), (5.6895, 1.0), (6.0, 1.0)]
        assert calculate_gravitational_harmonics(periods, 0.03) == [6, 4, 2, 1]

    def test_no_resonance(self):
        periods = [(1.0, 1.0), (10.0, 1.0), (100.0, 1.0), (1000.0, 1.0)]
        assert calculate_gravitational_harmonics(periods, 0.03) == [0, 0, 0, 0]

    def test_empty(self):
        assert calculate_gravitational_harmonics([]) == []

    def test_weightless_siblings(self):
        periods = [(1.0, 0.0), (2.0, 0.0)]
        assert calculate_gravitational_harmonics(periods) == [0, 0]


class TestApplication:
    """Multipliers and stored tidal heating."""

    def test_prepare_planets(self):
        disk = CelestialDisk(2, "belt", DiskType.BELT)
        points = [
            make_body_point(1, 10.0, CelestialBodySize.STANDARD),
            OrbitalPoint(2, Orbit(0, orbital_period=20.0), disk, ObjectKind.TELLURIC_DISK),
            OrbitalPoint(3, None, None, ObjectKind.VOID),
        ]
        prepared = prepare_harmonics_array(points, are_moons=False)
        assert prepared[0] == (10.0, pytest.approx(0.45))
        assert prepared[1] == (20.0, 0.0)
        assert prepared[2] == (0.0, 0.0)

    def test_prepare_moons(self):
        prepared = prepare_harmonics_array(
            [make_body_point(1, 3.0, CelestialBodySize.LARGE)], are_moons=True
        )
        assert prepared == [(3.0, 3.0)]

    def test_apply_to_moons(self):
        points = [make_body_point(i, period) for i, period in enumerate((1.0, 2.0, 4.0), 1)]
        assert apply_tidal_heating(points, are_moons=True) == [7, 6, 2]
        assert [point.object.tidal_heating for point in points] == [7, 6, 2]
