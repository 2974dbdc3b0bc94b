"""
How many bodies a star gets, how its gas giants are arranged and which slots
end up populated.
"""

import logging

from exoforge.base.orbit import Orbit
from exoforge.base.traits import (
    CataclysmSeverity,
    DebrisDensity,
    MetallicityDifference,
    RotationAnomalySpeed,
    StarAgeDifference,
    StarTraitKind,
    SystemTraitKind,
    Trait,
    VariableStarInterval,
    has_trait,
)
from exoforge.base.types import (
    CelestialBodyComposition,
    GasGiantArrangement,
    ObjectKind,
    SpectralClass,
    StellarEvolution,
    ZoneType,
)
from exoforge.generator.dispatch import generate_body_type, is_inner_zone, make_stub
from exoforge.generator.gaseous import generate_gas_giant, get_gas_body_size_modifier
from exoforge.generator.zones import find_zone
from exoforge.util.dice import PreparedRoll, RollToProcess

logger = logging.getLogger(__name__)

ARRANGEMENTS = (
    GasGiantArrangement.NO_GAS_GIANT,
    GasGiantArrangement.CONVENTIONAL,
    GasGiantArrangement.ECCENTRIC,
    GasGiantArrangement.EPISTELLAR,
)
BASE_ARRANGEMENT_WEIGHTS = (50, 30, 15, 5)
MIN_GIANT_SEPARATION = 0.5

# Weight changes as (nothing, conventional, eccentric, epistellar)
STAR_TRAIT_MODIFIERS = {
    (StarTraitKind.CHAOTIC_ORBITS, None): (0, -20, 20, 0),
    (StarTraitKind.EXCESSIVE_RADIATION, None): (5, 0, 0, -5),
    (StarTraitKind.AGE_DIFFERENCE, StarAgeDifference.MUCH_YOUNGER): (20, -10, -6, -4),
    (StarTraitKind.AGE_DIFFERENCE, StarAgeDifference.YOUNGER): (10, -5, -2, -3),
    (StarTraitKind.AGE_DIFFERENCE, StarAgeDifference.OLDER): (-10, 7, 2, 1),
    (StarTraitKind.AGE_DIFFERENCE, StarAgeDifference.MUCH_OLDER): (-20, 15, 4, 1),
    (StarTraitKind.ROTATION_ANOMALY, RotationAnomalySpeed.MUCH_FASTER): (20, -20, 10, -10),
    (StarTraitKind.ROTATION_ANOMALY, RotationAnomalySpeed.FASTER): (10, -10, 5, -5),
    (StarTraitKind.ROTATION_ANOMALY, RotationAnomalySpeed.SLOWER): (-5, 10, 0, 0),
    (StarTraitKind.ROTATION_ANOMALY, RotationAnomalySpeed.MUCH_SLOWER): (-10, 20, 0, 0),
    (StarTraitKind.UNUSUAL_METALLICITY, MetallicityDifference.MUCH_HIGHER): (-30, 20, 0, 10),
    (StarTraitKind.UNUSUAL_METALLICITY, MetallicityDifference.HIGHER): (-20, 15, 0, 5),
    (StarTraitKind.UNUSUAL_METALLICITY, MetallicityDifference.LOWER): (10, -15, 0, -5),
    (StarTraitKind.UNUSUAL_METALLICITY, MetallicityDifference.MUCH_LOWER): (20, -20, 0, -10),
    (StarTraitKind.POWERFUL_STELLAR_WINDS, None): (10, -10, 10, -10),
    (StarTraitKind.STRONG_MAGNETIC_FIELD, None): (10, -10, 10, -10),
    (StarTraitKind.VARIABLE_STAR, VariableStarInterval.MINUTES): (30, -25, 20, -10),
    (StarTraitKind.VARIABLE_STAR, VariableStarInterval.HOURS): (25, -20, 15, -8),
    (StarTraitKind.VARIABLE_STAR, VariableStarInterval.DAYS): (15, -15, 10, -5),
    (StarTraitKind.VARIABLE_STAR, VariableStarInterval.MONTHS): (5, -5, 5, -3),
    (StarTraitKind.CIRCUMSTELLAR_DISK, None): (100, -100, -100, -100),
}

SYSTEM_TRAIT_MODIFIERS = {
    (SystemTraitKind.CATACLYSM, CataclysmSeverity.MINOR): (10, -10, 12, -5),
    (SystemTraitKind.CATACLYSM, CataclysmSeverity.MAJOR): (20, -20, 10, -5),
    (SystemTraitKind.CATACLYSM, CataclysmSeverity.EXTREME): (30, -25, 5, -5),
    (SystemTraitKind.CATACLYSM, CataclysmSeverity.ULTIMATE): (40, -30, 0, -10),
    (SystemTraitKind.UNUSUAL_DEBRIS_DENSITY, DebrisDensity.MUCH_LOWER): (20, -10, -10, 0),
    (SystemTraitKind.UNUSUAL_DEBRIS_DENSITY, DebrisDensity.LOWER): (10, -5, -5, 0),
    (SystemTraitKind.UNUSUAL_DEBRIS_DENSITY, DebrisDensity.HIGHER): (-20, 10, 10, 0),
    (SystemTraitKind.UNUSUAL_DEBRIS_DENSITY, DebrisDensity.MUCH_HIGHER): (-40, 20, 20, 0),
}
NEBULAE_MODIFIER = (5, 0, 0, 0)

POPULATION_MODIFIERS = {
    StellarEvolution.PALEODWARF: (45, -28, -13, -8),
    StellarEvolution.SUBDWARF: (14, -17, 10, -7),
    StellarEvolution.DWARF: (0, 10, 0, 0),
    StellarEvolution.SUPERDWARF: (0, 10, 0, 0),
    StellarEvolution.HYPERDWARF: (-35, 20, 10, 5),
}

POPULATION_BODY_MODIFIERS = {
    StellarEvolution.PALEODWARF: -10,
    StellarEvolution.SUBDWARF: -5,
    StellarEvolution.DWARF: 0,
    StellarEvolution.SUPERDWARF: 5,
    StellarEvolution.HYPERDWARF: 10,
}


def get_spectral_class_modifier(spectral_class):
    if spectral_class is SpectralClass.M:
        return (19, -10, -5, -4)
    if spectral_class is SpectralClass.G:
        return (-20, 20, 0, 0)
    if spectral_class.is_massive:
        return (20, 0, 20, -20)
    if spectral_class.is_remnant:
        return (37, -25, -12, -100)
    if spectral_class.is_white_dwarf:
        return (10, 0, 20, -10)
    if spectral_class.is_brown_dwarf:
        return (0, 10, 0, -5)
    return (0, 0, 0, 0)


def get_number_of_bodies_modifier(star):
    modifier = POPULATION_BODY_MODIFIERS[star.population]
    if star.age < 0.1:
        modifier += int(-15 + star.age * 150)
    if star.mass < 0.08:
        modifier -= 5
    elif star.mass > 4:
        modifier += int(-star.mass * 0.2)
    return modifier


def generate_number_of_bodies(star, context, system_settings):
    """
    Number of bodies a star holds. A circumstellar disk result tags the star
    with the CircumstellarDisk trait.
    Args:
        star (Star):
            The star
        context (GenerationContext):
            Context of the star
        system_settings (SystemSettings):
            Can fix the number of bodies
    Returns:
        int:
            Number of bodies
    """
    if system_settings.fixed_number_of_bodies is not None:
        return system_settings.fixed_number_of_bodies

    roller = context.roller("_nbr_bdy")
    # Every candidate count is rolled up front, the index roll picks one
    counts = [
        0,
        0 if roller.roll(1, 8) == 1 else 1,
        roller.roll(1, 4, 2),
        roller.roll(1, 4, 5),
        roller.roll(1, 4, 10),
    ]
    index = roller.get_result(
        RollToProcess.from_weights(
            [(0, 2), (1, 2), (2, 4), (3, 7), (4, 2)],
            PreparedRoll(2, 8, get_number_of_bodies_modifier(star)),
        )
    )
    count = counts[index]
    if index == 1:
        star.traits.append(Trait(StarTraitKind.CIRCUMSTELLAR_DISK))
    elif (index == 3 and count == 9) or (index == 4 and count == 14):
        count += roller.roll(1, 4)
    logger.debug("%s holds %d bodies", star.name, count)
    return count


def _add(weights, modifier):
    return [weight + change for weight, change in zip(weights, modifier)]


def get_gas_giant_arrangement_weights(star, system_traits):
    """
    Arrangement weights after every star, system, spectral class and
    population modifier, clamped at zero
    Returns:
        list:
            Weights ordered as no gas giant, conventional, eccentric,
            epistellar
    """
    weights = list(BASE_ARRANGEMENT_WEIGHTS)
    for trait in star.traits:
        modifier = STAR_TRAIT_MODIFIERS.get((trait.kind, trait.detail))
        if modifier is None:
            modifier = STAR_TRAIT_MODIFIERS.get((trait.kind, None))
        if modifier is not None:
            weights = _add(weights, modifier)
    for trait in system_traits:
        if trait.kind is SystemTraitKind.NEBULAE:
            weights = _add(weights, NEBULAE_MODIFIER)
            continue
        modifier = SYSTEM_TRAIT_MODIFIERS.get((trait.kind, trait.detail))
        if modifier is not None:
            weights = _add(weights, modifier)
    weights = _add(weights, get_spectral_class_modifier(star.spectral_class))
    weights = _add(weights, POPULATION_MODIFIERS[star.population])
    return [max(weight, 0) for weight in weights]


def generate_gas_giant_arrangement(star, number_of_bodies, system_traits, context, system_settings):
    """
    Pick how the gas giants of a star are arranged
    Args:
        star (Star):
            The star
        number_of_bodies (int):
            Bodies the star holds
        system_traits (list):
            System traits
        context (GenerationContext):
            Context of the star
        system_settings (SystemSettings):
            Can fix the arrangement
    Returns:
        GasGiantArrangement:
            The arrangement
    """
    if system_settings.fixed_gas_giant_arrangement is not None:
        return system_settings.fixed_gas_giant_arrangement
    if number_of_bodies == 0 or has_trait(star.traits, StarTraitKind.CIRCUMSTELLAR_DISK):
        return GasGiantArrangement.NO_GAS_GIANT

    weights = get_gas_giant_arrangement_weights(star, system_traits)
    arrangement = context.roller("_gas_arr").get_result(
        RollToProcess.from_weights(list(zip(ARRANGEMENTS, weights)))
    )
    if arrangement is None:
        arrangement = GasGiantArrangement.NO_GAS_GIANT
    logger.debug("%s arrangement: %s", star.name, arrangement)
    return arrangement


def generate_proto_gas_giant_position(arrangement, star, context):
    """
    Distance to the star of the first gas giant, None when the arrangement
    has no gas giant or the star has no snow line to place it from
    """
    roller = context.roller("_gas_pos")
    outer_zone = star.get_zone(ZoneType.OUTER_ZONE)
    snow_line = outer_zone.start if outer_zone is not None else None
    if arrangement is GasGiantArrangement.CONVENTIONAL and snow_line is not None:
        return roller.roll(2, 6, -2) * 0.05 + snow_line
    if arrangement is GasGiantArrangement.ECCENTRIC and snow_line is not None:
        return roller.roll(2, 6) * 0.125 * snow_line
    if arrangement is GasGiantArrangement.EPISTELLAR:
        return roller.roll(3, 6) * 0.1 + star.corona_end
    return None


def locate_proto_gas_giant(all_zones, star, star_id, distance):
    """
    Orbit of the proto gas giant, None when the position is in no zone or in
    a forbidden zone
    """
    distance_from_center = distance + star.distance_from_system_center
    zone = find_zone(all_zones, distance_from_center)
    if zone is None or zone.zone_type is ZoneType.FORBIDDEN_ZONE:
        logger.debug("No room for the proto gas giant of %s at %.3f AU", star.name, distance)
        return None
    return Orbit(
        star_id,
        zone_type=zone.zone_type,
        average_distance=distance,
        average_distance_from_system_center=distance_from_center,
    )


def place_proto_gas_giant(context, star, orbit, point_id, body_settings):
    orbit.satellite_ids.append(point_id)
    roller = context.roller(f"_gas_bdy{point_id}_size")
    size_modifier = get_gas_body_size_modifier(star, roller, is_proto_giant=True)
    return generate_gas_giant(
        context,
        star,
        point_id,
        orbit,
        "",
        body_settings,
        size_modifier=size_modifier,
        is_proto_giant=True,
    )


def proto_gas_giant_cost(arrangement):
    return 2 if arrangement is GasGiantArrangement.EPISTELLAR else 1


def get_spawn_chances(bodies, number_of_orbits):
    if bodies <= 0 or number_of_orbits <= 0:
        return 0
    return int(bodies / number_of_orbits * 100)


def should_spawn(roller, spawn_chances):
    if spawn_chances > 100:
        probability = 100
    elif spawn_chances < 0:
        probability = 0
    else:
        probability = 10 + int(spawn_chances * 0.9)
    return roller.get_result(
        RollToProcess.from_weights([(False, 100 - probability), (True, probability)])
    )


def should_skip_gaseous(inward_gap, outward_gap):
    """
    Whether a slot is too crowded for another gaseous body
    Args:
        inward_gap (float):
            Distance in AU to the closest giant further in, None if none
        outward_gap (float):
            Distance in AU to the closest giant further out, None if none
    """
    if inward_gap is not None and outward_gap is not None:
        return True
    if inward_gap is not None and inward_gap < MIN_GIANT_SEPARATION:
        return True
    return outward_gap is not None and outward_gap < MIN_GIANT_SEPARATION


def is_gas_giant_point(point):
    return point is not None and point.kind is ObjectKind.GASEOUS_BODY


def get_giant_gaps(orbits, points, index):
    """
    Distances in AU to the closest gas giant slot further in and further out
    """
    distance = orbits[index].average_distance
    inward_gap = None
    for orbit in reversed(orbits[:index]):
        if any(is_gas_giant_point(points.get(sat_id)) for sat_id in orbit.satellite_ids):
            inward_gap = distance - orbit.average_distance
            break
    outward_gap = None
    for orbit in orbits[index + 1 :]:
        if any(is_gas_giant_point(points.get(sat_id)) for sat_id in orbit.satellite_ids):
            outward_gap = orbit.average_distance - distance
            break
    return inward_gap, outward_gap


def is_gaseous_disabled(arrangement, zone_type, inward_gap, outward_gap):
    if arrangement is GasGiantArrangement.NO_GAS_GIANT:
        return True
    if arrangement is GasGiantArrangement.CONVENTIONAL and is_inner_zone(zone_type):
        return True
    return should_skip_gaseous(inward_gap, outward_gap)


def place_body_stubs(
    context,
    star,
    orbits,
    points,
    arrangement,
    bodies_left,
    body_settings,
    allocate_id,
):
    """
    Visit the empty slots in distance order and populate some of them. Gas
    giants are generated right away, other bodies get a stub to be replaced
    once every slot is known.
    Args:
        context (GenerationContext):
            Context of the star
        star (Star):
            The star
        orbits (list):
            Sorted orbits of the star, populated ones get a satellite id
        points (dict):
            Orbital points by id, new points are added to it
        arrangement (GasGiantArrangement):
            Gas giant arrangement of the star
        bodies_left (int):
            Remaining body quota
        body_settings (CelestialBodySettings):
            Composition and trait overrides
        allocate_id (callable):
            Returns the next free point id
    Returns:
        int:
            Remaining body quota
    """
    empty_indices = [i for i, orbit in enumerate(orbits) if not orbit.satellite_ids]
    spawn_chances = get_spawn_chances(bodies_left, len(empty_indices))

    for index in empty_indices:
        orbit = orbits[index]
        roller = context.roller(f"_bdy{bodies_left}_orbit{index}_gen")
        if bodies_left <= 0 or not should_spawn(roller, spawn_chances):
            continue

        inward_gap, outward_gap = get_giant_gaps(orbits, points, index)
        disable_gaseous = is_gaseous_disabled(arrangement, orbit.zone_type, inward_gap, outward_gap)
        composition = generate_body_type(roller, orbit.zone_type, body_settings, disable_gaseous)
        if composition is None:
            continue

        point_id = allocate_id()
        orbit.satellite_ids.append(point_id)
        if composition is CelestialBodyComposition.GASEOUS:
            points[point_id] = generate_gas_giant(
                context,
                star,
                point_id,
                orbit,
                "",
                body_settings,
                size_modifier=get_gas_body_size_modifier(star, roller),
            )
            bodies_left -= 2 if is_inner_zone(orbit.zone_type) else 1
        else:
            points[point_id] = make_stub(point_id, orbit, composition)
            bodies_left -= 1

    return bodies_left
