"""
Orbital zones around each star and across the whole system.
"""

import logging

import numpy as np

from exoforge.base.types import ZoneType
from exoforge.base.zone import StarZone
from exoforge.util.misc import solar_radii_to_au

logger = logging.getLogger(__name__)


def calculate_star_zones(star, companions=()):
    """
    Compute, resolve and store the zones of one star
    Args:
        star (Star):
            Star to compute the zones of, its zones attribute is replaced
        companions (list):
            The other stars of the system
    Returns:
        list:
            Resolved StarZone list sorted by start
    """
    zones = []
    corona_end = solar_radii_to_au(star.radius)
    zones.append(StarZone(0.0, corona_end, ZoneType.CORONA))

    inner_limit = max(0.1 * star.mass, 0.01 * np.sqrt(star.luminosity))
    zones.append(StarZone(corona_end, inner_limit, ZoneType.INNER_LIMIT))

    snow_line = 4.85 * np.sqrt(star.luminosity)
    if snow_line > inner_limit:
        zones.append(StarZone(inner_limit, snow_line, ZoneType.INNER_ZONE))

    bio_end = 1.77 * np.sqrt(star.luminosity)
    if bio_end > inner_limit:
        bio_start = max(np.sqrt(star.luminosity), inner_limit)
        zones.append(StarZone(bio_start, bio_end, ZoneType.BIO_ZONE))

    outer_limit = 40.0 * star.mass
    if outer_limit > inner_limit and outer_limit > snow_line:
        zones.append(StarZone(max(snow_line, inner_limit), outer_limit, ZoneType.OUTER_ZONE))

    companion = get_closest_companion(star, companions)
    if companion is not None:
        zones.append(calculate_forbidden_zone(star, companion))

    star.zones = resolve_zones(zones)
    logger.debug("Zones of %s: %s", star.name, star.zones)
    return star.zones


def _orbit_elements(star):
    if star.orbit is None:
        return star.distance_from_system_center, 0.0
    return star.orbit.average_distance, star.orbit.eccentricity


def get_min_star_separation(star, companion):
    distance, eccentricity = _orbit_elements(star)
    companion_distance, companion_eccentricity = _orbit_elements(companion)
    return abs(
        (1 + companion_eccentricity) * companion_distance - (1 - eccentricity) * distance
    )


def get_max_star_separation(star, companion):
    distance, eccentricity = _orbit_elements(star)
    companion_distance, companion_eccentricity = _orbit_elements(companion)
    return abs(
        (1 + eccentricity) * distance - (1 - companion_eccentricity) * companion_distance
    )


def get_closest_companion(star, companions):
    others = [other for other in companions if other is not star and other.id != star.id]
    if not others:
        return None
    own_distance = star.distance_from_system_center
    return min(
        others, key=lambda other: abs(other.distance_from_system_center - own_distance)
    )


def calculate_forbidden_zone(star, companion):
    """
    Band where the companion's gravity prevents stable orbits around the star
    """
    min_separation = get_min_star_separation(star, companion)
    max_separation = get_max_star_separation(star, companion)
    return StarZone(min_separation / 3.0, max_separation * 3.0, ZoneType.FORBIDDEN_ZONE)


def resolve_zones(zones):
    """
    Remove overlaps between zones of different types. Higher priority zones
    keep their span, lower ones are truncated or split around them. Same type
    neighbours are merged afterwards.
    Args:
        zones (list):
            StarZone list, possibly overlapping
    Returns:
        list:
            Non-overlapping StarZone list sorted by start
    """
    accepted = []
    by_priority = sorted(zones, key=lambda zone: zone.zone_type.priority, reverse=True)
    for zone in by_priority:
        if zone.start >= zone.end:
            continue
        pieces = [StarZone(zone.start, zone.end, zone.zone_type)]
        for higher in accepted:
            if higher.zone_type.priority <= zone.zone_type.priority:
                continue
            pieces = [part for piece in pieces for part in piece.subtract(higher)]
        accepted.extend(pieces)

    return merge_same_zones(sort_zones(accepted))


def sort_zones(zones):
    return sorted(zones, key=lambda zone: (zone.start, zone.end))


def merge_same_zones(zones):
    merged = []
    for zone in zones:
        if (
            merged
            and merged[-1].zone_type is zone.zone_type
            and zone.start <= merged[-1].end
        ):
            merged[-1].end = max(merged[-1].end, zone.end)
        else:
            merged.append(StarZone(zone.start, zone.end, zone.zone_type))
    return merged


def collect_all_zones(stars):
    """
    Zones of every star expressed as distances from the system center. A star
    away from the center also projects its zones on the other side of the
    center.
    """
    all_zones = []
    for star in stars:
        center_distance = star.distance_from_system_center
        for zone in star.zones:
            all_zones.append(zone.shifted(center_distance))
            if center_distance > zone.end:
                all_zones.append(
                    StarZone(
                        center_distance - zone.end,
                        center_distance - zone.start,
                        zone.zone_type,
                    )
                )
    return resolve_zones(all_zones)


def find_zone(zones, distance):
    """
    First zone holding the distance, bounds included, None when there is none
    """
    for zone in zones:
        if zone.start <= distance <= zone.end:
            return zone
    return None
