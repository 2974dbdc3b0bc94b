"""
Icy slots: frost and comet belts, comet clouds, ice worlds and ice giants.
"""

import logging

from exoforge.base.body import CelestialBody, TelluricDetails
from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import OrbitalPoint
from exoforge.base.types import (
    BeltType,
    CelestialBodyComposition,
    CelestialBodySize,
    DiskType,
    ObjectKind,
    WorldType,
    ZoneType,
)
from exoforge.generator.telluric import (
    apply_trait_settings,
    build_solid_point,
    generate_acceptable_telluric_parameters,
    lookup_table,
    roll_density,
)
from exoforge.util.misc import EARTH_DENSITY, calculate_blackbody_temperature

logger = logging.getLogger(__name__)

# Ice giants are not bound by the solid size constraints, radius in Earth radii
ICE_GIANT_RADII = {
    CelestialBodySize.GIANT: (3.5, 6.0),
    CelestialBodySize.SUPERGIANT: (6.0, 10.0),
}

ICY_TABLE = [
    (21, BeltType.FROST),
    (61, BeltType.COMET),
    (65, DiskType.SHELL),
    (105, (1.0, 1.83, CelestialBodySize.TINY)),
    (135, (1.63, 2.6, CelestialBodySize.TINY)),
    (140, (1.0, 1.5, CelestialBodySize.SMALL)),
    (170, (1.5, 3.9, CelestialBodySize.SMALL)),
    (175, (1.0, 1.5, CelestialBodySize.STANDARD)),
    (255, (1.5, 5.5, CelestialBodySize.STANDARD)),
]

# Only reachable past the snow line
OUTER_ICY_TABLE = [
    (305, (1.2, 1.6, CelestialBodySize.LARGE)),
    (395, (0.6, 1.3, CelestialBodySize.GIANT)),
    (None, (0.9, 1.6, CelestialBodySize.SUPERGIANT)),
]

INNER_ICY_FALLBACK = (1.5, 5.5, CelestialBodySize.STANDARD)


def get_icy_outcome(roll, beyond_snow_line):
    if roll <= ICY_TABLE[-1][0]:
        return lookup_table(ICY_TABLE, roll)
    if beyond_snow_line:
        return lookup_table(OUTER_ICY_TABLE, roll)
    return INNER_ICY_FALLBACK


def generate_ice_giant(roller, point_id, orbit, name, min_density, max_density, size, bb, body_settings):
    density = roll_density(roller, min_density, max_density)
    radius = roller.gen_range(*ICE_GIANT_RADII[size])
    mass = density / EARTH_DENSITY * radius**3
    details = TelluricDetails(
        body_type=CelestialBodyComposition.ICY,
        world_type=WorldType.VOLATILES_GIANT,
        special_traits=apply_trait_settings([], body_settings),
    )
    body = CelestialBody(
        point_id,
        name,
        mass=mass,
        radius=radius,
        density=density,
        blackbody_temperature=bb,
        size=size,
        details=details,
    )
    return OrbitalPoint(point_id, orbit, body, ObjectKind.ICY_BODY)


def generate_icy_body(
    context,
    star,
    point_id,
    orbit,
    name,
    body_settings,
    size_modifier=0,
    suffix=None,
):
    """
    Generate the object of an icy slot
    Args:
        context (GenerationContext):
            Context of the host star
        star (Star):
            Host star
        point_id (int):
            Id of the new orbital point
        orbit (Orbit):
            Orbit the object sits on
        name (str):
            Name of the object
        body_settings (CelestialBodySettings):
            Trait overrides
        size_modifier (int):
            Modifier to the size roll
        suffix (str):
            Label suffix of the roller, defaults to one built from the id
    Returns:
        OrbitalPoint:
            Icy body or icy disk point
    """
    roller = context.roller(suffix if suffix is not None else f"_bdy{point_id}")
    beyond_snow_line = orbit.zone_type is ZoneType.OUTER_ZONE
    outcome = get_icy_outcome(roller.roll(1, 400, size_modifier), beyond_snow_line)

    if isinstance(outcome, BeltType):
        disk = CelestialDisk(point_id, name, DiskType.BELT, belt_type=outcome)
        return OrbitalPoint(point_id, orbit, disk, ObjectKind.ICY_DISK)
    if outcome is DiskType.SHELL:
        disk = CelestialDisk(point_id, name, DiskType.SHELL, belt_type=BeltType.COMET)
        return OrbitalPoint(point_id, orbit, disk, ObjectKind.ICY_DISK)

    min_density, max_density, size = outcome
    bb = calculate_blackbody_temperature(star.luminosity, orbit.average_distance)
    if size.is_giant:
        logger.debug("%s is an ice giant", name)
        return generate_ice_giant(
            roller, point_id, orbit, name, min_density, max_density, size, bb, body_settings
        )

    density, size, radius, mass = generate_acceptable_telluric_parameters(
        roller, min_density, max_density, size, bb
    )
    return build_solid_point(
        point_id,
        orbit,
        name,
        CelestialBodyComposition.ICY,
        ObjectKind.ICY_BODY,
        density,
        size,
        radius,
        mass,
        bb,
        star,
        [],
        body_settings,
    )
