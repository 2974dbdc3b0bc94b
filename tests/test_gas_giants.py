import pytest

from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.traits import StarTraitKind, Trait, has_trait
from exoforge.base.types import GasGiantArrangement, ObjectKind, ZoneType
from exoforge.generator.gas_giants import (
    generate_gas_giant_arrangement,
    generate_number_of_bodies,
    generate_proto_gas_giant_position,
    get_gas_giant_arrangement_weights,
    get_giant_gaps,
    get_spawn_chances,
    locate_proto_gas_giant,
    proto_gas_giant_cost,
    should_skip_gaseous,
)
from exoforge.settings import SystemSettings


class TestNumberOfBodies:
    """How many bodies a star holds."""

    def test_fixed_number(self, sun, context):
        settings = SystemSettings(fixed_number_of_bodies=3)
        assert generate_number_of_bodies(sun, context, settings) == 3

    def test_rolled_number_in_range(self, sun, context):
        count = generate_number_of_bodies(sun, context, SystemSettings())
        assert 0 <= count <= 18

    def test_disk_trait_only_with_one_body_slot(self, sun, context):
        for star_id in range(20):
            count = generate_number_of_bodies(sun, context.for_star(star_id), SystemSettings())
            if has_trait(sun.traits, StarTraitKind.CIRCUMSTELLAR_DISK):
                assert count in (0, 1)
                break


class TestArrangement:
    """Gas giant arrangement of a star."""

    def test_no_bodies(self, sun, context):
        arrangement = generate_gas_giant_arrangement(sun, 0, [], context, SystemSettings())
        assert arrangement is GasGiantArrangement.NO_GAS_GIANT

    def test_fixed_arrangement(self, sun, context):
        settings = SystemSettings(fixed_gas_giant_arrangement=GasGiantArrangement.EPISTELLAR)
        arrangement = generate_gas_giant_arrangement(sun, 0, [], context, settings)
        assert arrangement is GasGiantArrangement.EPISTELLAR

    def test_circumstellar_disk(self, sun, context):
        sun.traits.append(Trait(StarTraitKind.CIRCUMSTELLAR_DISK))
        arrangement = generate_gas_giant_arrangement(sun, 5, [], context, SystemSettings())
        assert arrangement is GasGiantArrangement.NO_GAS_GIANT

    def test_sun_weights(self, sun):
        assert get_gas_giant_arrangement_weights(sun, []) == [30, 60, 15, 5]

    def test_weights_clamped(self, sun):
        sun.traits.append(Trait(StarTraitKind.CIRCUMSTELLAR_DISK))
        assert get_gas_giant_arrangement_weights(sun, []) == [130, 0, 0, 0]


class TestProtoGasGiant:
    """Position of the first gas giant."""

    def test_conventional(self, sun, context):
        position = generate_proto_gas_giant_position(
            GasGiantArrangement.CONVENTIONAL, sun, context
        )
        assert 4.85 <= position <= 4.85 + 0.5 + 1e-9

    def test_eccentric(self, sun, context):
        position = generate_proto_gas_giant_position(GasGiantArrangement.ECCENTRIC, sun, context)
        assert 2 * 0.125 * 4.85 - 1e-9 <= position <= 12 * 0.125 * 4.85 + 1e-9

    def test_epistellar(self, sun, context):
        position = generate_proto_gas_giant_position(
            GasGiantArrangement.EPISTELLAR, sun, context
        )
        assert 0.3 + sun.corona_end - 1e-9 <= position <= 1.8 + sun.corona_end + 1e-9

    def test_no_gas_giant(self, sun, context):
        assert (
            generate_proto_gas_giant_position(GasGiantArrangement.NO_GAS_GIANT, sun, context)
            is None
        )

    def test_locate(self, sun):
        orbit = locate_proto_gas_giant(sun.zones, sun, sun.id, 5.0)
        assert orbit.zone_type is ZoneType.OUTER_ZONE
        assert orbit.average_distance == pytest.approx(5.0)
        assert locate_proto_gas_giant(sun.zones, sun, sun.id, 100.0) is None

    @pytest.mark.parametrize(
        "arrangement, cost",
        [
            (GasGiantArrangement.CONVENTIONAL, 1),
            (GasGiantArrangement.ECCENTRIC, 1),
            (GasGiantArrangement.EPISTELLAR, 2),
        ],
    )
    def test_cost(self, arrangement, cost):
        assert proto_gas_giant_cost(arrangement) == cost


class TestSlotRules:
    """Spawn chances and giant spacing."""

    def test_spawn_chances(self):
        assert get_spawn_chances(3, 6) == 50
        assert get_spawn_chances(0, 6) == 0
        assert get_spawn_chances(3, 0) == 0

    def test_skip_gaseous(self):
        assert should_skip_gaseous(1.0, 1.0)
        assert should_skip_gaseous(0.4, None)
        assert should_skip_gaseous(None, 0.2)
        assert not should_skip_gaseous(0.6, None)
        assert not should_skip_gaseous(None, None)

    def test_giant_gaps(self):
        orbits = [Orbit(0, average_distance=d) for d in (1.0, 2.0, 3.5)]
        orbits[0].satellite_ids.append(10)
        points = {10: OrbitalPoint(10, orbits[0], None, ObjectKind.GASEOUS_BODY)}
        assert get_giant_gaps(orbits, points, 1) == (1.0, None)
        assert get_giant_gaps(orbits, points, 2) == (2.5, None)
