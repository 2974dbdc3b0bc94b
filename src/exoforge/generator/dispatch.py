"""
Composition of each populated slot and the generation of its final object.
"""

import logging

from exoforge.base.body import CelestialBody, TelluricDetails
from exoforge.base.orbit import OrbitalPoint
from exoforge.base.types import (
    CelestialBodyComposition,
    ObjectKind,
    SpectralClass,
    ZoneType,
)
from exoforge.generator.icy import generate_icy_body
from exoforge.generator.telluric import generate_telluric_body
from exoforge.util.dice import RollToProcess
from exoforge.util.misc import number_to_lowercase_letter

logger = logging.getLogger(__name__)

INNER_BODY_TYPE_WEIGHTS = {
    CelestialBodyComposition.METALLIC: 3,
    CelestialBodyComposition.ROCKY: 5,
    CelestialBodyComposition.ICY: 2,
    CelestialBodyComposition.GASEOUS: 1,
}
OUTER_BODY_TYPE_WEIGHTS = {
    CelestialBodyComposition.METALLIC: 1,
    CelestialBodyComposition.ROCKY: 3,
    CelestialBodyComposition.ICY: 6,
    CelestialBodyComposition.GASEOUS: 6,
}

FORBIDDEN_EDGE_PROXIMITY = 0.5
SLOT_PROXIMITY = 2


def is_inner_zone(zone_type):
    return zone_type in (ZoneType.INNER_ZONE, ZoneType.BIO_ZONE)


def get_body_type_weights(zone_type, body_settings, disable_gaseous=False):
    """
    Composition weights of a slot, with the compositions turned off by the
    settings set to zero
    """
    base = INNER_BODY_TYPE_WEIGHTS if is_inner_zone(zone_type) else OUTER_BODY_TYPE_WEIGHTS
    disabled = {
        CelestialBodyComposition.METALLIC: body_settings.do_not_generate_metallic,
        CelestialBodyComposition.ROCKY: body_settings.do_not_generate_rocky,
        CelestialBodyComposition.ICY: body_settings.do_not_generate_icy,
        CelestialBodyComposition.GASEOUS: (
            body_settings.do_not_generate_gaseous or disable_gaseous
        ),
    }
    return {
        composition: 0 if disabled[composition] else weight
        for composition, weight in base.items()
    }


def generate_body_type(roller, zone_type, body_settings, disable_gaseous=False):
    """
    Draw the composition of a slot
    Args:
        roller (SeededDiceRoller):
            Roller of the slot
        zone_type (ZoneType):
            Zone of the slot, inner and bio zones use the inner weights
        body_settings (CelestialBodySettings):
            Can turn compositions off
        disable_gaseous (bool):
            Whether the slot cannot hold a gaseous body
    Returns:
        CelestialBodyComposition:
            The composition, None when every composition is turned off
    """
    weights = get_body_type_weights(zone_type, body_settings, disable_gaseous)
    return roller.get_result(RollToProcess.from_weights(weights))


def make_stub(point_id, orbit, composition):
    """
    Placeholder for a solid body whose final generation waits until every
    slot of the star is known
    """
    kind = (
        ObjectKind.ICY_BODY
        if composition is CelestialBodyComposition.ICY
        else ObjectKind.TELLURIC_BODY
    )
    body = CelestialBody(point_id, "", details=TelluricDetails(composition), stub=True)
    return OrbitalPoint(point_id, orbit, body, kind)


def get_nearest_forbidden_distance(all_zones, distance_from_center):
    """
    Distance in AU to the closest forbidden zone edge, None without
    forbidden zones
    """
    gaps = [
        min(abs(distance_from_center - zone.start), abs(distance_from_center - zone.end))
        for zone in all_zones
        if zone.zone_type is ZoneType.FORBIDDEN_ZONE
    ]
    return min(gaps) if gaps else None


def get_zone_change_gap(orbits, index):
    """
    Number of slots between a slot and the snow line boundary of the slot
    list, None when every slot is on the same side
    """
    boundary = next(
        (i for i, orbit in enumerate(orbits) if orbit.zone_type is ZoneType.OUTER_ZONE),
        len(orbits),
    )
    if boundary in (0, len(orbits)):
        return None
    if index < boundary:
        return boundary - index
    return index - boundary + 1


def get_giant_slot_gaps(orbits, points, index):
    """
    Number of slots to the closest gas giant further in and further out
    """

    def holds_giant(orbit):
        return any(
            points[sat_id].kind is ObjectKind.GASEOUS_BODY
            for sat_id in orbit.satellite_ids
            if sat_id in points
        )

    inward = next(
        (index - i for i in range(index - 1, -1, -1) if holds_giant(orbits[i])), None
    )
    outward = next(
        (i - index for i in range(index + 1, len(orbits)) if holds_giant(orbits[i])), None
    )
    return inward, outward


def get_spectral_size_modifier(star, roller):
    spectral_class = star.spectral_class
    if spectral_class.is_massive:
        return 0 if roller.roll(1, 50) == 1 else -int(star.mass * 5)
    if spectral_class is SpectralClass.F:
        return 10
    if spectral_class is SpectralClass.K:
        return -10
    if spectral_class is SpectralClass.M:
        return -20
    if spectral_class.is_brown_dwarf:
        return -50
    return 0


def get_body_size_modifier(
    star, roller, forbidden_distance, inward_giant_gap, outward_giant_gap, zone_change_gap
):
    """
    Modifier to the size roll of a solid body from its neighbourhood
    Args:
        star (Star):
            Host star
        roller (SeededDiceRoller):
            Roller of the slot
        forbidden_distance (float):
            Distance in AU to the closest forbidden zone edge, None if none
        inward_giant_gap (int):
            Slots to the closest gas giant further in, None if none
        outward_giant_gap (int):
            Slots to the closest gas giant further out, None if none
        zone_change_gap (int):
            Slots to the snow line boundary, None if none
    Returns:
        int:
            Size modifier
    """
    modifier = 0
    if forbidden_distance is not None and forbidden_distance < FORBIDDEN_EDGE_PROXIMITY:
        modifier -= 120
    if outward_giant_gap is not None and outward_giant_gap < SLOT_PROXIMITY:
        modifier -= 120
    if inward_giant_gap is not None and inward_giant_gap < SLOT_PROXIMITY:
        modifier -= 60
    if zone_change_gap is not None and zone_change_gap < SLOT_PROXIMITY:
        modifier -= 60
    return modifier + get_spectral_size_modifier(star, roller)


def generate_body(context, star, point_id, orbit, name, composition, body_settings, size_modifier=0, suffix=None):
    """
    Final object of a rocky, metallic or icy slot
    """
    if composition is CelestialBodyComposition.ICY:
        return generate_icy_body(
            context, star, point_id, orbit, name, body_settings, size_modifier, suffix
        )
    return generate_telluric_body(
        context, star, point_id, orbit, name, composition, body_settings, size_modifier, suffix
    )


def get_body_name(star, populated_index):
    return f"{star.name}{number_to_lowercase_letter(populated_index + 1)}"


def replace_stubs(context, star, orbits, points, all_zones, bodies_left, body_settings):
    """
    Name every populated slot and replace the stubs by their final objects
    Args:
        context (GenerationContext):
            Context of the star
        star (Star):
            The star
        orbits (list):
            Sorted orbits of the star
        points (dict):
            Orbital points by id, stubs are replaced in place
        all_zones (list):
            System-wide zones
        bodies_left (int):
            Remaining body quota, part of the roller labels
        body_settings (CelestialBodySettings):
            Trait overrides
    """
    populated_index = 0
    for index, orbit in enumerate(orbits):
        if not orbit.satellite_ids:
            continue
        name = get_body_name(star, populated_index)
        populated_index += 1
        for point_id in orbit.satellite_ids:
            point = points[point_id]
            body = point.object
            if not getattr(body, "stub", False):
                body.name = name
                continue

            roller = context.roller(f"_bdy{bodies_left}_orbit{index}_rep")
            inward_gap, outward_gap = get_giant_slot_gaps(orbits, points, index)
            size_modifier = get_body_size_modifier(
                star,
                roller,
                get_nearest_forbidden_distance(
                    all_zones, orbit.average_distance_from_system_center
                ),
                inward_gap,
                outward_gap,
                get_zone_change_gap(orbits, index),
            )
            points[point_id] = generate_body(
                context,
                star,
                point_id,
                orbit,
                name,
                body.composition,
                body_settings,
                size_modifier,
                suffix=f"_orbit{index}_bdy{point_id}",
            )
            logger.debug("Slot %d of %s: %s", index, star.name, points[point_id].kind)
