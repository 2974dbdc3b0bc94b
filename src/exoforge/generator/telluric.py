"""
Solid bodies: size constraints, the density and radius search, world types and
the composition tables of rocky and metallic slots.
"""

import logging

import numpy as np

from exoforge.base.body import CelestialBody, TelluricDetails
from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import OrbitalPoint
from exoforge.base.traits import BodyTraitKind, CoreAnomaly, Trait
from exoforge.base.types import (
    BeltType,
    CelestialBodyComposition,
    CelestialBodySize,
    DiskType,
    ObjectKind,
    WorldType,
)
from exoforge.exceptions import UnsatisfiableConstraintError
from exoforge.util.misc import (
    EARTH_DENSITY,
    EARTH_MASS_G,
    EARTH_RADIUS_CM,
    calculate_blackbody_temperature,
)

logger = logging.getLogger(__name__)

MAX_TELLURIC_MASS = 10.0
MAX_SEARCH_LOOPS = 1000
LOOPS_BEFORE_DOWNSIZE = 100

# Radius factor ranges per size, scaled by the blackbody temperature and
# density afterwards
SIZE_CONSTRAINTS = {
    CelestialBodySize.LARGE: (0.065, 0.0915),
    CelestialBodySize.STANDARD: (0.030, 0.065),
    CelestialBodySize.SMALL: (0.024, 0.030),
    CelestialBodySize.TINY: (0.004, 0.024),
    CelestialBodySize.PUNY: (0.000003, 0.004),
}

# Density ranges for bodies whose size is already known, e.g. moons
DEFAULT_DENSITY_RANGES = {
    CelestialBodyComposition.ROCKY: (3.0, 5.5),
    CelestialBodyComposition.METALLIC: (5.5, 8.0),
    CelestialBodyComposition.ICY: (1.0, 2.5),
}

# (highest roll, outcome). Outcomes are a belt type, or
# (min density, max density, size, coreless)
ROCKY_TABLE = [
    (21, BeltType.DEBRIS),
    (86, BeltType.ASTEROID),
    (96, BeltType.ASH),
    (161, (3.3, 5.5, CelestialBodySize.TINY, False)),
    (163, (3.0, 4.5, CelestialBodySize.TINY, True)),
    (235, (3.3, 5.5, CelestialBodySize.SMALL, False)),
    (237, (3.0, 4.5, CelestialBodySize.SMALL, True)),
    (240, (3.0, 4.5, CelestialBodySize.STANDARD, True)),
    (318, (4.4, 6.2, CelestialBodySize.STANDARD, False)),
    (None, (4.9, 7.0, CelestialBodySize.LARGE, False)),
]

METALLIC_TABLE = [
    (61, BeltType.DUST),
    (131, BeltType.METEOROID),
    (141, BeltType.ORE),
    (221, (5.0, 7.0, CelestialBodySize.TINY, False)),
    (301, (7.0, 15.0, CelestialBodySize.TINY, False)),
    (311, (6.0, 8.0, CelestialBodySize.SMALL, False)),
    (321, (7.0, 15.0, CelestialBodySize.SMALL, False)),
    (391, (6.0, 8.0, CelestialBodySize.STANDARD, False)),
    (393, (7.0, 15.0, CelestialBodySize.STANDARD, False)),
    # Metal "giants" stay within the largest solid size
    (None, (6.0, 9.0, CelestialBodySize.LARGE, False)),
]


def lookup_table(table, roll):
    for highest, outcome in table:
        if highest is None or roll <= highest:
            return outcome
    raise ValueError(f"Roll {roll} is outside of the table")


def apply_trait_settings(traits, body_settings):
    """
    Add the traits every body must have and drop the forbidden ones
    """
    traits = list(traits)
    for trait in body_settings.fixed_special_traits:
        if trait not in traits:
            traits.append(trait)
    return [
        trait for trait in traits if trait.kind not in body_settings.forbidden_special_traits
    ]


def get_size_constraint(size, roller):
    """
    Radius factor for a solid body of the given size
    Args:
        size (CelestialBodySize):
            Size of the body, Puny to Large
        roller (SeededDiceRoller):
            Roller of the body
    Returns:
        float:
            Factor the radius is computed from
    """
    if size not in SIZE_CONSTRAINTS:
        raise ValueError(f"{size} is not a valid size for a solid body")
    low, high = SIZE_CONSTRAINTS[size]
    return roller.gen_range(low, high)


def calculate_mass(density, radius):
    """
    Mass in Earth masses of a sphere of the given density (g/cm3) and radius
    (Earth radii)
    """
    volume = 4.0 / 3.0 * np.pi * (radius * EARTH_RADIUS_CM) ** 3
    return float(density * volume / EARTH_MASS_G)


def calculate_radius(size_constraint, blackbody_temperature, density):
    return float(
        size_constraint * np.sqrt(blackbody_temperature / (density / EARTH_DENSITY))
    )


def roll_density(roller, min_density, max_density):
    if min_density > max_density:
        min_density, max_density = max_density, min_density
    low = int(round(min_density * 1000))
    high = int(round(max_density * 1000))
    return max(roller.roll(1, high - low + 1, low - 1) / 1000.0, 1.0)


def generate_acceptable_telluric_parameters(
    roller, min_density, max_density, size, blackbody_temperature
):
    """
    Draw density and radius until the resulting mass fits a solid body,
    shrinking the size every hundred attempts
    Args:
        roller (SeededDiceRoller):
            Roller of the body
        min_density (float):
            Lowest density in g/cm3
        max_density (float):
            Highest density in g/cm3
        size (CelestialBodySize):
            Starting size
        blackbody_temperature (int):
            Blackbody temperature of the body in K
    Returns:
        tuple:
            (density, size, radius, mass)
    """
    blackbody_temperature = max(blackbody_temperature, 1)
    for loop in range(1, MAX_SEARCH_LOOPS + 1):
        density = roll_density(roller, min_density, max_density)
        radius = calculate_radius(
            get_size_constraint(size, roller), blackbody_temperature, density
        )
        mass = calculate_mass(density, radius)
        if mass < MAX_TELLURIC_MASS:
            return density, size, radius, mass
        if loop % LOOPS_BEFORE_DOWNSIZE == 0:
            logger.warning(
                "No acceptable %s body after %d tries, downsizing", size, loop
            )
            size = size.downsize()
    raise UnsatisfiableConstraintError(
        f"No solid body parameters found in {MAX_SEARCH_LOOPS} tries "
        f"({min_density}-{max_density} g/cm3, {blackbody_temperature} K)"
    )


def get_world_type(size, composition, blackbody_temperature, star_mass, star_age=None):
    """
    World type from size, composition and temperature
    Args:
        size (CelestialBodySize):
            Size of the body
        composition (CelestialBodyComposition):
            Body composition
        blackbody_temperature (int):
            Blackbody temperature in K
        star_mass (float):
            Mass of the host star in solar masses
        star_age (float):
            Age of the host star in Gyr, very young systems only hold
            proto-worlds
    Returns:
        WorldType:
            World type
    """
    if star_age is not None and star_age < 0.01:
        return WorldType.PROTO_WORLD

    bb = blackbody_temperature
    is_icy = composition is CelestialBodyComposition.ICY
    if size <= CelestialBodySize.TINY:
        if bb <= 140:
            return WorldType.ICE if is_icy else WorldType.DIRTY_SNOWBALL
        return WorldType.ROCK
    if size is CelestialBodySize.SMALL:
        if bb <= 80:
            return WorldType.HADEAN
        if bb <= 140:
            return WorldType.ICE if is_icy else WorldType.DIRTY_SNOWBALL
        return WorldType.ROCK
    if size in (CelestialBodySize.STANDARD, CelestialBodySize.LARGE):
        if size is CelestialBodySize.STANDARD and bb <= 80:
            return WorldType.HADEAN
        if 151 < bb <= 230 and star_mass < 0.65:
            return WorldType.AMMONIA
        if bb <= 240:
            return WorldType.ICE if is_icy else WorldType.DIRTY_SNOWBALL
        if bb <= 320:
            if size is CelestialBodySize.STANDARD and is_icy:
                return WorldType.OCEAN
            return WorldType.TERRESTRIAL
        if bb <= 500:
            return WorldType.GREENHOUSE
        return WorldType.CHTHONIAN
    return WorldType.VOLATILES_GIANT


def build_solid_point(
    point_id,
    orbit,
    name,
    composition,
    kind,
    density,
    size,
    radius,
    mass,
    blackbody_temperature,
    star,
    traits,
    body_settings,
):
    details = TelluricDetails(
        body_type=composition,
        world_type=get_world_type(size, composition, blackbody_temperature, star.mass, star.age),
        special_traits=apply_trait_settings(traits, body_settings),
    )
    body = CelestialBody(
        point_id,
        name,
        mass=mass,
        radius=radius,
        density=density,
        blackbody_temperature=blackbody_temperature,
        size=size,
        details=details,
    )
    return OrbitalPoint(point_id, orbit, body, kind)


def generate_telluric_body(
    context,
    star,
    point_id,
    orbit,
    name,
    composition,
    body_settings,
    size_modifier=0,
    suffix=None,
):
    """
    Generate the object of a rocky or metallic slot
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
        composition (CelestialBodyComposition):
            Rocky or metallic
        body_settings (CelestialBodySettings):
            Trait overrides
        size_modifier (int):
            Modifier to the size roll
        suffix (str):
            Label suffix of the roller, defaults to one built from the id
    Returns:
        OrbitalPoint:
            Telluric body or telluric belt point
    """
    roller = context.roller(suffix if suffix is not None else f"_bdy{point_id}")
    table = METALLIC_TABLE if composition is CelestialBodyComposition.METALLIC else ROCKY_TABLE
    outcome = lookup_table(table, roller.roll(1, 400, size_modifier))

    if isinstance(outcome, BeltType):
        disk = CelestialDisk(point_id, name, DiskType.BELT, belt_type=outcome)
        return OrbitalPoint(point_id, orbit, disk, ObjectKind.TELLURIC_DISK)

    min_density, max_density, size, coreless = outcome
    bb = calculate_blackbody_temperature(star.luminosity, orbit.average_distance)
    density, size, radius, mass = generate_acceptable_telluric_parameters(
        roller, min_density, max_density, size, bb
    )
    traits = [Trait(BodyTraitKind.UNUSUAL_CORE, CoreAnomaly.CORELESS)] if coreless else []
    return build_solid_point(
        point_id,
        orbit,
        name,
        composition,
        ObjectKind.TELLURIC_BODY,
        density,
        size,
        radius,
        mass,
        bb,
        star,
        traits,
        body_settings,
    )


def generate_fixed_size_body(
    roller, star, point_id, orbit, name, composition, size, blackbody_temperature, body_settings
):
    """
    Solid body of a known size, used for moons
    """
    min_density, max_density = DEFAULT_DENSITY_RANGES[composition]
    density, size, radius, mass = generate_acceptable_telluric_parameters(
        roller, min_density, max_density, size, blackbody_temperature
    )
    kind = (
        ObjectKind.ICY_BODY
        if composition is CelestialBodyComposition.ICY
        else ObjectKind.TELLURIC_BODY
    )
    return build_solid_point(
        point_id,
        orbit,
        name,
        composition,
        kind,
        density,
        size,
        radius,
        mass,
        blackbody_temperature,
        star,
        [],
        body_settings,
    )
