"""
Moons and rings of planets.

Counts are rolled per body, then every moon gets its orbit from a bounded
search inside the distance bracket of its category. Each candidate is
checked against the exclusion radius of the moons already placed around the
same body, so placement order matters and is kept sequential.
"""

import logging

import numpy as np

from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import Orbit, OrbitalPoint
from exoforge.base.types import (
    CelestialBodyComposition,
    CelestialBodySize,
    DiskType,
    MoonDistance,
    ObjectKind,
    RingComposition,
    RingLevel,
    ZoneType,
)
from exoforge.generator.dispatch import generate_body_type
from exoforge.generator.telluric import generate_fixed_size_body
from exoforge.util.dice import RollToProcess
from exoforge.util.misc import (
    calculate_hill_sphere_radius,
    calculate_roche_limit,
    earth_mass_to_solar_mass,
    earth_radii_to_au,
    number_to_lowercase_letter,
)

logger = logging.getLogger(__name__)

RING_MASS_PER_MOONLET = 2e-7
RING_PARTICLE_RADIUS = 1e-10

# Next category tried once every attempt in a category failed
WIDENED_CATEGORIES = {
    MoonDistance.CLOSE: MoonDistance.MEDIUM,
    MoonDistance.MEDIUM: MoonDistance.FAR,
}


class PlacedMoon:
    def __init__(self, distance, radius, density, mass, is_major=False) -> None:
        # AU, Earth radii, g/cm3, Earth masses
        self.distance = distance
        self.radius = radius
        self.density = density
        self.mass = mass
        self.is_major = is_major

    def __repr__(self):
        return f"PlacedMoon({self.distance:.6f} AU, major={self.is_major})"


class MoonPlacementContext:
    """
    State of the moon placement around one body. Owned by a single placement
    loop and dropped once every moon of the body is placed.
    """

    def __init__(self, planet, star_distance, star_mass, attempts=50) -> None:
        """
        Args:
            planet (CelestialBody):
                Body the moons go around
            star_distance (float):
                Distance between the body and its star in AU
            star_mass (float):
                Mass of the star in solar masses
            attempts (int):
                Attempts per distance category
        """
        self.planet = planet
        self.star_distance = star_distance
        self.star_mass = star_mass
        self.attempts = attempts
        self.placed = []
        self.ring_distance = 0.0
        self.closest_major_distance = np.inf

    def get_exclusion_radius(self, moon, other_density):
        """
        Half-width of the band around a moon where a body of the other
        density can not orbit
        """
        return max(
            calculate_roche_limit(moon.radius, moon.density, other_density),
            calculate_hill_sphere_radius(moon.distance, moon.mass, self.planet.mass),
        )

    def conflicts(self, candidate):
        """
        Whether a candidate moon and any placed moon fall inside the
        exclusion band of one another
        """
        for existing in self.placed:
            exclusion = max(
                self.get_exclusion_radius(existing, candidate.density),
                self.get_exclusion_radius(candidate, existing.density),
            )
            if abs(candidate.distance - existing.distance) <= exclusion:
                return True
        return False

    def get_distance_brackets(self, moon_density):
        """
        Distances in AU bounding each category for a moon of the given
        density
        """
        planet = self.planet
        diameter = earth_radii_to_au(2 * planet.radius)
        low = max(
            calculate_roche_limit(planet.radius, planet.density, moon_density),
            self.ring_distance,
        )
        hill = calculate_hill_sphere_radius(
            self.star_distance, earth_mass_to_solar_mass(planet.mass), self.star_mass
        )

        def bound(value):
            return min(max(value, low), hill)

        return {
            "min": low,
            "hill": hill,
            "min_ring": min(diameter, hill),
            "max_ring": min(max(low, diameter) + 0.2 * diameter, hill),
            "major_giant_close": bound(2.5 * diameter),
            "major_planet_close": bound(5 * diameter),
            "close": bound(15 * diameter),
            "medium": bound(60 * diameter),
            "far": bound(180 * diameter),
        }

    def get_bracket(self, category, moon_density):
        """
        (lowest, highest) distance of a category
        """
        brackets = self.get_distance_brackets(moon_density)

        def first_above(start, keys):
            candidates = [brackets[key] for key in keys]
            for candidate in candidates:
                if candidate > start:
                    return candidate
            return candidates[-1]

        low = brackets["min"]
        if category is MoonDistance.ANY:
            return low, brackets["far"]
        if category is MoonDistance.RING:
            return brackets["min_ring"], brackets["max_ring"]
        if category is MoonDistance.BEFORE_MAJOR:
            if np.isinf(self.closest_major_distance):
                return low, first_above(low, ["close", "medium", "far", "hill"])
            return low, self.closest_major_distance
        if category is MoonDistance.CLOSE:
            return low, first_above(low, ["close", "medium", "far", "hill"])
        if category is MoonDistance.MAJOR_GIANT_CLOSE:
            start = brackets["major_giant_close"]
            return start, first_above(start, ["close", "medium", "far", "hill"])
        if category is MoonDistance.MAJOR_PLANET_CLOSE:
            start = brackets["major_planet_close"]
            return start, first_above(start, ["close", "medium", "far", "hill"])
        start = brackets["close"]
        if category is MoonDistance.MEDIUM:
            return start, first_above(start, ["medium", "far", "hill"])
        if category is MoonDistance.MEDIUM_OR_FAR:
            return start, first_above(start, ["far", "hill"])
        start = brackets["medium"]
        return start, first_above(start, ["far", "hill"])

    def find_distance(self, roller, category, radius, density, mass, is_major=False):
        """
        Search a collision-free distance for a new moon, widening close and
        medium categories once their attempts run out
        Args:
            roller (SeededDiceRoller):
                Roller of the moon
            category (MoonDistance):
                Starting category
            radius (float):
                Radius of the moon in Earth radii
            density (float):
                Density of the moon in g/cm3
            mass (float):
                Mass of the moon in Earth masses
            is_major (bool):
                Whether the moon bounds later "before major" moonlets
        Returns:
            tuple:
                (distance in AU, category it was placed with), None when no
                distance was found
        """
        while True:
            low, high = self.get_bracket(category, density)
            for _ in range(self.attempts):
                if not low < high:
                    break
                distance = roller.gen_range(low, high)
                moon = PlacedMoon(distance, radius, density, mass, is_major)
                if self.conflicts(moon):
                    continue
                self.placed.append(moon)
                if is_major:
                    blocking = calculate_hill_sphere_radius(distance, mass, self.planet.mass)
                    self.closest_major_distance = min(
                        self.closest_major_distance, distance - blocking
                    )
                return distance, category
            if category not in WIDENED_CATEGORIES:
                return None
            category = WIDENED_CATEGORIES[category]


def get_planet_distance_modifier(distance):
    if distance < 0.5:
        return -6
    if distance < 0.75:
        return -3
    if distance < 1.5:
        return -1
    return 0


PLANET_SIZE_MODIFIERS = {
    CelestialBodySize.TINY: -2,
    CelestialBodySize.SMALL: -1,
    CelestialBodySize.LARGE: 1,
}


def generate_planet_moon_counts(roller, distance, size):
    """
    Returns:
        tuple:
            (major moons, moonlets), moonlets only come without major moons
    """
    modifier = get_planet_distance_modifier(distance) + PLANET_SIZE_MODIFIERS.get(size, 0)
    majors = max(roller.roll(1, 6, -4 + modifier), 0)
    moonlets = 0 if majors > 0 else max(roller.roll(1, 6, -2 + modifier), 0)
    return majors, moonlets


GIANT_SIZE_MODIFIERS = {
    CelestialBodySize.HYPERGIANT: 0,
    CelestialBodySize.SUPERGIANT: -1,
    CelestialBodySize.GIANT: -2,
}


def _banded(distance, bands):
    for highest, modifier in bands:
        if distance < highest:
            return modifier
    return 0


def generate_giant_moon_counts(roller, distance, size):
    """
    Returns:
        tuple:
            (major moons, inner moonlets, outer moonlets)
    """
    size_modifier = GIANT_SIZE_MODIFIERS.get(size, -4)
    inner_modifier = _banded(distance, [(0.1, -12), (0.5, -9), (0.75, -6), (1.5, -3)])
    major_modifier = _banded(distance, [(0.1, -6), (0.5, -5), (0.75, -4), (1.5, -1)])
    outer_modifier = _banded(distance, [(0.5, -6), (0.75, -5), (1.5, -4), (3.0, -1)])
    inner = max(roller.roll(2, 8, inner_modifier + size_modifier), 0)
    majors = max(roller.roll(1, 8, major_modifier + size_modifier), 0)
    outer = max(roller.roll(1, 10, outer_modifier + size_modifier), 0)
    return majors, inner, outer


def get_major_moon_size(roller, host_size):
    """
    Size of a major moon from a 3d6 roll, larger hosts hold larger moons
    """
    roll = roller.roll(3, 6)
    if roll <= 11:
        steps = 4
    elif roll <= 14:
        steps = 3
    else:
        steps = 2
    size = min(host_size, CelestialBodySize.SUPERGIANT) - steps
    if host_size >= CelestialBodySize.SUPERGIANT and roll > 11:
        size = CelestialBodySize.LARGE
    return CelestialBodySize(min(max(size, CelestialBodySize.PUNY), CelestialBodySize.LARGE))


def generate_moon_composition(roller, host_blackbody_temperature, body_settings):
    zone_type = ZoneType.INNER_ZONE if host_blackbody_temperature >= 170 else ZoneType.OUTER_ZONE
    composition = generate_body_type(roller, zone_type, body_settings, disable_gaseous=True)
    if composition in (CelestialBodyComposition.METALLIC, CelestialBodyComposition.ICY):
        return composition
    return CelestialBodyComposition.ROCKY


def generate_ring_composition(roller, moonlets, blackbody_temperature):
    if moonlets < 4:
        return RingComposition.DUST
    bb = blackbody_temperature
    weights = [
        (RingComposition.ICE, 12 if bb < 241 else (1 if bb < 300 else 0)),
        (RingComposition.ROCK, 5 if bb < 241 else 12),
        (RingComposition.METAL, 1),
    ]
    return roller.get_result(RollToProcess.from_weights(weights))


def is_giant_host(point):
    return point.kind is ObjectKind.GASEOUS_BODY or point.object.size.is_giant


def generate_ring(context, planet_point, placement, moonlets, allocate_id):
    """
    Ring of a giant, placed with the ring distance category. Sets the ring
    distance of the placement context.
    Returns:
        OrbitalPoint:
            The ring, None when no distance fits it
    """
    planet = planet_point.object
    roller = context.roller(f"_gas_bdy{planet_point.id}_ring")
    composition = generate_ring_composition(roller, moonlets, planet.blackbody_temperature)
    mass = moonlets * RING_MASS_PER_MOONLET
    found = placement.find_distance(
        roller, MoonDistance.RING, RING_PARTICLE_RADIUS, composition.density, mass
    )
    if found is None or found[0] <= 0:
        return None

    point_id = allocate_id()
    placement.ring_distance = found[0]
    ring = CelestialDisk(
        point_id,
        f"{planet.name}'s ring",
        DiskType.RING,
        ring_level=RingLevel.from_moonlets(moonlets),
        ring_composition=composition,
        mass=mass,
        density=composition.density,
    )
    orbit = Orbit(
        planet_point.id,
        satellite_ids=[point_id],
        zone_type=planet_point.own_orbit.zone_type,
        average_distance=found[0],
        average_distance_from_system_center=planet_point.own_orbit.average_distance_from_system_center,
        distance_category=MoonDistance.RING,
    )
    kind = ObjectKind.ICY_DISK if composition is RingComposition.ICE else ObjectKind.TELLURIC_DISK
    return OrbitalPoint(point_id, orbit, ring, kind)


def get_moon_plan(context, planet_point):
    """
    Moons to place around a body, in placement order
    Returns:
        list:
            (MoonDistance, CelestialBodySize, is_major) per moon, and the
            number of moonlets feeding a ring (0 without ring)
    """
    planet = planet_point.object
    distance = planet_point.own_orbit.average_distance
    plan = []
    if is_giant_host(planet_point):
        roller = context.roller(f"_gas_bdy{planet_point.id}_moons")
        majors, inner, outer = generate_giant_moon_counts(roller, distance, planet.size)
        category = MoonDistance.MAJOR_GIANT_CLOSE
        plan += [(category, get_major_moon_size(roller, planet.size), True) for _ in range(majors)]
        inner_category = MoonDistance.BEFORE_MAJOR if majors > 0 else MoonDistance.CLOSE
        plan += [(inner_category, CelestialBodySize.PUNY, False) for _ in range(inner)]
        plan += [(MoonDistance.MEDIUM_OR_FAR, CelestialBodySize.PUNY, False) for _ in range(outer)]
        ring_moonlets = inner if planet.size.is_giant else 0
        return plan, ring_moonlets

    roller = context.roller(f"_bdy{planet_point.id}_moons")
    majors, moonlets = generate_planet_moon_counts(roller, distance, planet.size)
    category = MoonDistance.MAJOR_PLANET_CLOSE
    plan += [(category, get_major_moon_size(roller, planet.size), True) for _ in range(majors)]
    plan += [(MoonDistance.CLOSE, CelestialBodySize.PUNY, False) for _ in range(moonlets)]
    return plan, 0


def generate_moons(context, star, planet_point, body_settings, allocate_id, attempts=50):
    """
    Generate and place the moons and ring of a body
    Args:
        context (GenerationContext):
            Context of the host star
        star (Star):
            Host star
        planet_point (OrbitalPoint):
            Point of the body, its child orbits are filled
        body_settings (CelestialBodySettings):
            Composition and trait overrides
        allocate_id (callable):
            Returns the next free point id
        attempts (int):
            Placement attempts per distance category
    Returns:
        list:
            New OrbitalPoints, ring first then moons sorted by distance
    """
    planet = planet_point.object
    if not planet_point.kind.is_body or planet.mass <= 0:
        return []

    planet_orbit = planet_point.own_orbit
    placement = MoonPlacementContext(
        planet, planet_orbit.average_distance, star.mass, attempts=attempts
    )
    plan, ring_moonlets = get_moon_plan(context, planet_point)
    new_points = []
    if planet.size.is_giant and ring_moonlets > 0:
        ring_point = generate_ring(context, planet_point, placement, ring_moonlets, allocate_id)
        if ring_point is not None:
            new_points.append(ring_point)
            planet_point.orbits.append(ring_point.own_orbit)

    moons = []
    for category, size, is_major in plan:
        moon_id = allocate_id()
        composition = generate_moon_composition(
            context.roller(f"_bdy{moon_id}_type"), planet.blackbody_temperature, body_settings
        )
        orbit = Orbit(
            planet_point.id,
            satellite_ids=[moon_id],
            zone_type=planet_orbit.zone_type,
            average_distance_from_system_center=planet_orbit.average_distance_from_system_center,
        )
        roller = context.roller(f"_bdy{moon_id}")
        moon_point = generate_fixed_size_body(
            roller,
            star,
            moon_id,
            orbit,
            "",
            composition,
            size,
            planet.blackbody_temperature,
            body_settings,
        )
        moon = moon_point.object
        found = placement.find_distance(
            roller, category, moon.radius, moon.density, moon.mass, is_major
        )
        if found is None:
            logger.warning(
                "No orbit left for a %s moon of %s, dropping it", category.value, planet.name
            )
            continue
        orbit.average_distance, orbit.distance_category = found
        orbit.set_eccentricity(0.0)
        moons.append(moon_point)

    moons.sort(key=lambda point: point.own_orbit.average_distance)
    for moon_index, moon_point in enumerate(moons):
        moon_point.object.name = f"{planet.name}{number_to_lowercase_letter(moon_index + 1)}"
        planet_point.orbits.append(moon_point.own_orbit)
    planet_point.orbits.sort(key=lambda orbit: orbit.average_distance)
    logger.debug("%s holds %d moons", planet.name, len(moons))
    return new_points + moons
