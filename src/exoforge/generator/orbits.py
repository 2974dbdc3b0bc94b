"""
Orbital attributes of bodies and moons: period, eccentricity, rotation, day
length, axial tilt and inclination.

Periods and eccentricities are completed first, since moon placement and
orbital harmonics read them. Rotation and axes come once the moons of a body
are known, as they take part in its tidal braking.
"""

import logging

from exoforge.base.traits import (
    AxialTiltAnomaly,
    BodyTraitKind,
    CataclysmSeverity,
    RotationAnomaly,
    SystemTraitKind,
    TideLockTarget,
    Trait,
    find_trait,
)
from exoforge.base.types import (
    CelestialBodyComposition,
    CelestialBodySize,
    GasGiantArrangement,
    MoonDistance,
)
from exoforge.util.misc import (
    au_to_earth_diameters,
    calculate_day_length,
    calculate_orbital_period,
    calculate_orbital_period_from_earth_masses,
    earth_mass_to_solar_mass,
)

logger = logging.getLogger(__name__)

TIDE_LOCK_THRESHOLD = 50
RESONANCE_THRESHOLD = 25
RESONANCE_MIN_ECCENTRICITY = 0.1
FORBIDDEN_EDGE_PROXIMITY = 0.5
HOURS_PER_DAY = 24.0
MAJOR_MOON_CATEGORIES = (MoonDistance.MAJOR_GIANT_CLOSE, MoonDistance.MAJOR_PLANET_CLOSE)

# (highest 3d6 roll, eccentricity)
ECCENTRICITY_TABLE = [
    (3, 0.0),
    (6, 0.05),
    (9, 0.1),
    (11, 0.15),
    (12, 0.2),
    (13, 0.3),
    (14, 0.4),
    (15, 0.5),
    (16, 0.6),
    (17, 0.7),
    (None, 0.8),
]

# Added to the 3d6 hours of a rotation
ROTATION_SIZE_MODIFIERS = {
    CelestialBodySize.PUNY: 20,
    CelestialBodySize.TINY: 18,
    CelestialBodySize.SMALL: 14,
    CelestialBodySize.STANDARD: 10,
    CelestialBodySize.LARGE: 6,
    CelestialBodySize.GIANT: 0,
    CelestialBodySize.SUPERGIANT: 0,
    CelestialBodySize.HYPERGIANT: 0,
}

# (2d6 roll, multiplier of an unusually slow rotation)
SLOW_ROTATION_MULTIPLIERS = [(7, 2), (8, 5), (9, 10), (10, 20), (11, 50), (12, 100)]

# (highest 3d6 roll, lowest tilt) bands of 10 degrees, above 16 the
# extended table is read
AXIAL_TILT_BANDS = [(6, 0), (9, 10), (12, 20), (14, 30), (16, 40)]
EXTENDED_AXIAL_TILT_BANDS = [(2, 50), (4, 60), (5, 70), (6, 80)]

# (highest 3d6 roll, lowest inclination, highest inclination) in degrees
INCLINATION_BANDS = [
    (6, 0.0, 1.0),
    (9, 1.0, 3.0),
    (12, 3.0, 7.0),
    (14, 7.0, 15.0),
    (16, 15.0, 30.0),
    (18, 30.0, 60.0),
    (None, 60.0, 90.0),
]

INCLINATION_SIZE_MODIFIERS = {
    CelestialBodySize.PUNY: 3,
    CelestialBodySize.TINY: 2,
    CelestialBodySize.SMALL: 1,
    CelestialBodySize.GIANT: -1,
    CelestialBodySize.SUPERGIANT: -1,
    CelestialBodySize.HYPERGIANT: -1,
}

INCLINATION_DISTANCE_MODIFIERS = {
    MoonDistance.RING: -6,
    MoonDistance.BEFORE_MAJOR: -2,
    MoonDistance.CLOSE: -2,
    MoonDistance.MAJOR_GIANT_CLOSE: -3,
    MoonDistance.MAJOR_PLANET_CLOSE: -2,
    MoonDistance.MEDIUM: 2,
    MoonDistance.MEDIUM_OR_FAR: 3,
    MoonDistance.FAR: 4,
}

INCLINATION_ARRANGEMENT_MODIFIERS = {
    GasGiantArrangement.NO_GAS_GIANT: 0,
    GasGiantArrangement.CONVENTIONAL: -2,
    GasGiantArrangement.ECCENTRIC: 3,
    GasGiantArrangement.EPISTELLAR: 1,
}

CATACLYSM_MODIFIERS = {
    CataclysmSeverity.MINOR: 1,
    CataclysmSeverity.MAJOR: 2,
    CataclysmSeverity.EXTREME: 3,
    CataclysmSeverity.ULTIMATE: 4,
}

# Chances out of 100 for an orbit to be retrograde
RETROGRADE_ORBIT_CHANCES = {
    MoonDistance.MEDIUM: 5,
    MoonDistance.MEDIUM_OR_FAR: 15,
    MoonDistance.FAR: 30,
}


def lookup_band(table, roll):
    for highest, value in table:
        if highest is None or roll <= highest:
            return value
    return table[-1][1]


def get_cataclysm_modifier(system_traits):
    return sum(
        CATACLYSM_MODIFIERS[trait.detail]
        for trait in system_traits
        if trait.kind is SystemTraitKind.CATACLYSM
    )


def calculate_planet_orbital_period(distance, star_mass, body_mass):
    """
    Period in days of a body around its star
    Args:
        distance (float):
            Semi-major axis in AU
        star_mass (float):
            Mass of the star in solar masses
        body_mass (float):
            Mass of the body in Earth masses
    """
    return calculate_orbital_period(distance, star_mass, earth_mass_to_solar_mass(body_mass))


def get_eccentricity_modifier(
    arrangement, blackbody_temperature, composition, is_moon=False, forbidden_distance=None
):
    """
    Modifier to the eccentricity roll
    Args:
        arrangement (GasGiantArrangement):
            Gas giant arrangement of the star
        blackbody_temperature (int):
            Blackbody temperature of the body in K
        composition (CelestialBodyComposition):
            Composition of the body, None for disks
        is_moon (bool):
            Whether the body orbits another body
        forbidden_distance (float):
            Distance in AU to the closest forbidden zone edge, None if none
    Returns:
        int:
            Modifier
    """
    modifier = 0
    if arrangement is GasGiantArrangement.CONVENTIONAL:
        modifier -= 6
    elif (
        arrangement is GasGiantArrangement.ECCENTRIC
        and blackbody_temperature < 170
        and composition is CelestialBodyComposition.GASEOUS
    ):
        modifier -= 4
    if is_moon:
        modifier -= 6
    if forbidden_distance is not None and forbidden_distance < FORBIDDEN_EDGE_PROXIMITY:
        modifier += 3
    return modifier


def generate_eccentricity(roller, modifier=0):
    """
    Eccentricity between 0 and 0.8, read from a 3d6 table then jittered by
    up to 0.05
    """
    roll = roller.roll(3, 6, modifier)
    eccentricity = lookup_band(ECCENTRICITY_TABLE, roll) + roller.roll(1, 11, -6) * 0.01
    return float(min(max(eccentricity, 0.0), 0.8))


def complete_orbital_period_and_eccentricity(
    context,
    point,
    primary_mass,
    arrangement,
    is_moon=False,
    forbidden_distance=None,
):
    """
    Fill the period and eccentricity of a point's own orbit
    Args:
        context (GenerationContext):
            Context of the host star
        point (OrbitalPoint):
            Body or disk, its own orbit is updated
        primary_mass (float):
            Mass of what the point orbits, solar masses for a star and Earth
            masses for a body
        arrangement (GasGiantArrangement):
            Gas giant arrangement of the star
        is_moon (bool):
            Whether the point orbits a body
        forbidden_distance (float):
            Distance in AU to the closest forbidden zone edge, None if none
    """
    orbit = point.own_orbit
    obj = point.object
    mass = getattr(obj, "mass", 0.0)
    if is_moon:
        orbit.orbital_period = calculate_orbital_period_from_earth_masses(
            orbit.average_distance, primary_mass, mass
        )
    else:
        orbit.orbital_period = calculate_planet_orbital_period(
            orbit.average_distance, primary_mass, mass
        )

    modifier = get_eccentricity_modifier(
        arrangement,
        getattr(obj, "blackbody_temperature", 0),
        getattr(obj, "composition", None),
        is_moon,
        forbidden_distance,
    )
    roller = context.roller(f"_bdy{point.id}_ect")
    orbit.set_eccentricity(generate_eccentricity(roller, modifier))


def calculate_star_tide(star_mass, body_radius, distance):
    """
    Tidal force of a star on a body
    Args:
        star_mass (float):
            Solar masses
        body_radius (float):
            Earth radii
        distance (float):
            AU
    """
    return 0.46 * star_mass * (2 * body_radius) / distance**3


def calculate_body_tide(mass, body_radius, distance):
    """
    Tidal force of a body on another one, e.g. of a moon on its planet
    Args:
        mass (float):
            Mass of the body raising the tide in Earth masses
        body_radius (float):
            Radius of the body feeling the tide in Earth radii
        distance (float):
            Distance between both in AU
    """
    distance_in_diameters = au_to_earth_diameters(distance)
    return 2.23e6 * mass * (2 * body_radius) / distance_in_diameters**3


def calculate_tidal_braking(
    body_mass, body_radius, star_age, star_mass=None, star_distance=None, tides=()
):
    """
    Total tidal braking accumulated over the age of the system
    Args:
        body_mass (float):
            Mass of the braked body in Earth masses
        body_radius (float):
            Radius of the braked body in Earth radii
        star_age (float):
            Age of the star in Gyr
        star_mass (float):
            Mass of the star in solar masses, None when the star does not
            brake the body
        star_distance (float):
            Distance to the star in AU
        tides (list):
            (mass in Earth masses, distance in AU) of the other bodies
            braking it
    Returns:
        float:
            Tidal braking, bodies at 50 or more are tide-locked
    """
    if body_mass <= 0:
        return 0.0
    total = 0.0
    if star_mass is not None and star_distance:
        total += calculate_star_tide(star_mass, body_radius, star_distance)
    for mass, distance in tides:
        if distance > 0:
            total += calculate_body_tide(mass, body_radius, distance)
    return float(total * star_age / body_mass)


def get_major_moons(moon_points):
    return [
        point
        for point in moon_points
        if point.kind.is_body and point.own_orbit.distance_category in MAJOR_MOON_CATEGORIES
    ]


def get_closest_major_moon_orbit(moon_points):
    majors = [point.own_orbit for point in get_major_moons(moon_points)]
    if not majors:
        return None
    return min(majors, key=lambda orbit: orbit.average_distance)


def generate_rotation(roller, size, tidal_braking):
    """
    Sidereal rotation in days of a body that is not tide-locked
    Returns:
        tuple:
            (rotation, list of new traits)
    """
    traits = []
    hours = roller.roll(3, 6, ROTATION_SIZE_MODIFIERS[size] + int(tidal_braking))
    slow_check = roller.roll(3, 6)
    special = roller.roll(2, 6)
    if hours > 36 or slow_check >= 16:
        multiplier = dict(SLOW_ROTATION_MULTIPLIERS).get(special)
        if multiplier is not None:
            hours *= multiplier
            traits.append(Trait(BodyTraitKind.UNUSUAL_ROTATION, RotationAnomaly.SLOW))
    elif hours < 8 and size < CelestialBodySize.GIANT:
        traits.append(Trait(BodyTraitKind.UNUSUAL_ROTATION, RotationAnomaly.FAST))

    rotation = max(hours, 1) / HOURS_PER_DAY
    if roller.roll(3, 6) >= 17:
        rotation = -rotation
        traits.append(Trait(BodyTraitKind.UNUSUAL_ROTATION, RotationAnomaly.RETROGRADE))
    return rotation, traits


def is_resonant(roller, tidal_braking, eccentricity):
    """
    Whether a body close to being tide-locked on an eccentric orbit falls in
    a 3:2 spin-orbit resonance instead
    """
    if not RESONANCE_THRESHOLD <= tidal_braking < TIDE_LOCK_THRESHOLD:
        return False
    if eccentricity < RESONANCE_MIN_ECCENTRICITY:
        return False
    return roller.roll(1, 6) >= 4


def generate_axial_tilt(roller, traits=()):
    """
    Axial tilt in degrees, between 0 and 90
    """
    modifier = 0
    anomaly = find_trait(traits, BodyTraitKind.UNUSUAL_AXIAL_TILT)
    if anomaly is not None:
        modifier = -6 if anomaly.detail is AxialTiltAnomaly.MINIMAL else 6
    roll = roller.roll(3, 6, modifier)
    if roll <= AXIAL_TILT_BANDS[-1][0]:
        base = lookup_band(AXIAL_TILT_BANDS, roll)
    else:
        base = lookup_band(EXTENDED_AXIAL_TILT_BANDS, roller.roll(1, 6))
    tilt = base + roller.roll(2, 6, -2) + roller.gen_range(0.0, 1.0)
    return float(min(max(tilt, 0.0), 90.0))


def get_inclination_modifier(size, distance_category, arrangement, system_traits):
    modifier = INCLINATION_SIZE_MODIFIERS.get(size, 0) if size is not None else 0
    if distance_category is not None:
        modifier += INCLINATION_DISTANCE_MODIFIERS.get(distance_category, 0)
    modifier += INCLINATION_ARRANGEMENT_MODIFIERS[arrangement]
    modifier += get_cataclysm_modifier(system_traits)
    return modifier


def generate_inclination(roller, modifier, distance_category=None, cataclysm_modifier=0):
    """
    Inclination in degrees, possibly retrograde
    Returns:
        tuple:
            (inclination, whether the orbit is retrograde)
    """
    low, high = lookup_band(
        [(highest, (low, high)) for highest, low, high in INCLINATION_BANDS],
        roller.roll(3, 6, modifier),
    )
    inclination = roller.gen_range(low, high)
    chances = RETROGRADE_ORBIT_CHANCES.get(distance_category, 1) + cataclysm_modifier
    retrograde = roller.roll(1, 100) <= chances
    if retrograde:
        inclination = 180.0 - inclination
    return float(inclination), retrograde


def complete_rotation_and_axis(
    context,
    point,
    star,
    arrangement,
    system_traits,
    is_moon=False,
    primary_point=None,
    moon_points=(),
):
    """
    Fill the rotation, day length, axial tilt and inclination of a point's
    own orbit. Traits from tide-locking, resonance, unusual rotations and
    retrograde orbits are added to the body.
    Args:
        context (GenerationContext):
            Context of the host star
        point (OrbitalPoint):
            Body or disk whose period is already known
        star (Star):
            Host star
        arrangement (GasGiantArrangement):
            Gas giant arrangement of the star
        system_traits (list):
            System traits
        is_moon (bool):
            Whether the point orbits a body
        primary_point (OrbitalPoint):
            Point of the orbited body, moons only
        moon_points (list):
            Moons of the point, bodies only
    Returns:
        float:
            Tidal braking of the body, 0 for disks
    """
    orbit = point.own_orbit
    obj = point.object
    roller = context.roller(f"_bdy{point.id}_rot")
    new_traits = []
    tidal_braking = 0.0

    if point.kind.is_body:
        if is_moon:
            planet = primary_point.object
            tidal_braking = calculate_tidal_braking(
                obj.mass,
                obj.radius,
                star.age,
                tides=[(planet.mass, orbit.average_distance)],
            )
        else:
            tidal_braking = calculate_tidal_braking(
                obj.mass,
                obj.radius,
                star.age,
                star_mass=star.mass,
                star_distance=orbit.average_distance,
                tides=[
                    (moon.object.mass, moon.own_orbit.average_distance)
                    for moon in moon_points
                    if moon.kind.is_body
                ],
            )

        closest_major = None if is_moon else get_closest_major_moon_orbit(moon_points)
        if tidal_braking >= TIDE_LOCK_THRESHOLD:
            if closest_major is not None and not obj.size.is_giant:
                orbit.rotation = closest_major.orbital_period
                new_traits.append(Trait(BodyTraitKind.TIDE_LOCKED, TideLockTarget.SATELLITE))
            else:
                orbit.rotation = orbit.orbital_period
                new_traits.append(Trait(BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED))
        elif is_resonant(
            context.roller(f"_bdy{point.id}_res"), tidal_braking, orbit.eccentricity
        ):
            orbit.rotation = orbit.orbital_period * 2.0 / 3.0
            new_traits.append(Trait(BodyTraitKind.UNUSUAL_ROTATION, RotationAnomaly.RESONANT))
        else:
            orbit.rotation, rotation_traits = generate_rotation(roller, obj.size, tidal_braking)
            new_traits += rotation_traits
        orbit.day_length = calculate_day_length(orbit.orbital_period, orbit.rotation)
        orbit.axial_tilt = generate_axial_tilt(
            context.roller(f"_bdy{point.id}_tilt"), obj.special_traits
        )
    else:
        orbit.rotation = 0.0
        orbit.day_length = 0.0

    size = obj.size if point.kind.is_body else None
    modifier = get_inclination_modifier(
        size, orbit.distance_category, arrangement, system_traits
    )
    orbit.inclination, retrograde = generate_inclination(
        context.roller(f"_bdy{point.id}_incl"),
        modifier,
        orbit.distance_category,
        get_cataclysm_modifier(system_traits),
    )
    if retrograde:
        new_traits.append(Trait(BodyTraitKind.RETROGRADE_ORBIT))

    if point.kind.is_body and obj.details is not None:
        for trait in new_traits:
            if trait not in obj.details.special_traits:
                obj.details.special_traits.append(trait)
    logger.debug(
        "Orbit of %s: period %.3f d, rotation %.3f d, braking %.2f",
        getattr(obj, "name", point.id),
        orbit.orbital_period,
        orbit.rotation,
        tidal_braking,
    )
    return tidal_braking
