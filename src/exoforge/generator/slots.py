"""
Candidate orbits around a star, spreading inward and outward from a reference
radius with a randomized geometric progression.
"""

import logging

from exoforge.base.orbit import Orbit
from exoforge.base.types import ZoneType
from exoforge.generator.zones import find_zone
from exoforge.util.dice import RollToProcess

logger = logging.getLogger(__name__)

ORBIT_MULTIPLIERS = RollToProcess.from_weights(
    [(1.4, 1), (1.5, 7), (1.6, 16), (1.7, 48), (1.8, 16), (1.9, 7), (2.0, 1)]
)
MIN_INWARD_STEP = 0.15


def generate_reference_orbit_radius(star, context, bodies_left):
    """
    Radius both sequences start from, just inside the outer edge of the
    star's usable zones
    """
    roller = context.roller(f"_bdy{bodies_left}_loc")
    usable_ends = [
        zone.end for zone in star.zones if zone.zone_type is not ZoneType.FORBIDDEN_ZONE
    ]
    outer_edge = max(usable_ends) if usable_ends else 0.0
    return outer_edge / (roller.roll(1, 6) * 0.05 + 1.0)


def get_orbit_multiplier(roller):
    return roller.get_result(ORBIT_MULTIPLIERS)


def place_orbit_if_possible(all_zones, star_id, distance, distance_from_center):
    """
    Orbit for a candidate distance if it lands in a zone that can hold bodies
    Returns:
        tuple:
            (Orbit or None, whether the direction is done)
    """
    zone = find_zone(all_zones, distance_from_center)
    if zone is None:
        return None, True
    if zone.zone_type.can_hold_bodies:
        orbit = Orbit(
            star_id,
            zone_type=zone.zone_type,
            average_distance=distance,
            average_distance_from_system_center=distance_from_center,
        )
        return orbit, False
    if zone.zone_type is ZoneType.FORBIDDEN_ZONE:
        return None, False
    return None, True


def generate_inner_orbits(all_zones, star_id, center_offset, roller, reference_radius):
    orbits = []
    last_orbit = reference_radius
    done = False
    while not done:
        next_orbit = last_orbit / get_orbit_multiplier(roller)
        if last_orbit - next_orbit < MIN_INWARD_STEP:
            next_orbit = last_orbit - MIN_INWARD_STEP + roller.roll(1, 301, -151) / 10000.0
        if next_orbit <= 0.0:
            break
        last_orbit = next_orbit
        orbit, done = place_orbit_if_possible(
            all_zones, star_id, next_orbit, next_orbit + center_offset
        )
        if orbit is not None:
            orbits.append(orbit)
    return orbits


def generate_outer_orbits(all_zones, star_id, center_offset, roller, reference_radius):
    orbits = []
    last_orbit = reference_radius
    done = reference_radius <= 0.0
    while not done:
        last_orbit = last_orbit * get_orbit_multiplier(roller)
        orbit, done = place_orbit_if_possible(
            all_zones, star_id, last_orbit, last_orbit + center_offset
        )
        if orbit is not None:
            orbits.append(orbit)
    return orbits


def generate_orbits(all_zones, star, star_id, context, reference_radius):
    """
    Generate every candidate orbit of a star
    Args:
        all_zones (list):
            System-wide zones, distances from the system center
        star (Star):
            Star the orbits go around
        star_id (int):
            Orbital point id of the star
        context (GenerationContext):
            Context of the star
        reference_radius (float):
            Radius in AU both sequences start from
    Returns:
        list:
            Orbit list sorted by distance
    """
    roller = context.roller("_orbt_loc")
    center_offset = star.distance_from_system_center
    orbits = generate_inner_orbits(all_zones, star_id, center_offset, roller, reference_radius)
    orbits += generate_outer_orbits(all_zones, star_id, center_offset, roller, reference_radius)
    orbits.sort(key=lambda orbit: orbit.average_distance)
    logger.debug(
        "%d candidate orbits around star %d from %.3f AU",
        len(orbits),
        star_id,
        reference_radius,
    )
    return orbits
