"""
World properties of solid bodies.

Runs once per telluric planet or moon, after its orbit and tidal heating are
known. Each stage reads what the previous ones produced, in this order: core
heat, magnetic field, hydrosphere, volcanism, tectonics, atmospheric
pressure, surface temperature, liquids, subsurface oceans, cryosphere,
humidity, atmospheric composition and climate.
"""

import logging

from exoforge.base.body import TelluricDetails
from exoforge.base.traits import (
    BodyTraitKind,
    CoreAnomaly,
    GeologicActivity,
    MagneticFieldAnomaly,
    Trait,
    VolatileDensity,
    find_trait,
)
from exoforge.base.types import (
    CelestialBodyComposition,
    CelestialBodySize,
    ClimateType,
    CoreHeat,
    LifeLevel,
    LuminosityClass,
    MagneticFieldStrength,
    SpectralClass,
    TemperatureCategory,
    VolcanicActivity,
    WorldType,
)
from exoforge.generator.atmosphere import generate_atmospheric_composition
from exoforge.generator.climate import classify_climate, is_ribbon_world
from exoforge.generator.orbits import get_major_moons
from exoforge.util.dice import PreparedRoll, RollToProcess
from exoforge.util.elements import (
    ChemicalComponent,
    components_liquid_at,
    liquid_majority_composition_likelihood,
)

logger = logging.getLogger(__name__)

GEO_ACTIVE_THRESHOLD = 55
OCEAN_HYDROSPHERE = 90
LAKES_HYDROSPHERE = 50
ICING_TEMPERATURE = 273
HUMIDITY_MIN_TEMPERATURE = 223
HUMIDITY_MIN_PRESSURE = 0.01
PROTO_WORLD_TEMPERATURE = 1600

# core heat

CORE_SIZE_MODIFIERS = {
    CelestialBodySize.PUNY: -100,
    CelestialBodySize.TINY: -5,
    CelestialBodySize.SMALL: -2,
    CelestialBodySize.STANDARD: 2,
    CelestialBodySize.LARGE: 3,
}
CORE_TRAIT_MODIFIERS = {
    CoreAnomaly.CORELESS: -100,
    CoreAnomaly.SMALLER: -2,
    # Never matched, a larger core leaves the heat unchanged
    CoreAnomaly.LARGER: 0,
}
# (star age upper bound in Gyr, modifier)
CORE_AGE_MODIFIERS = [
    (0.703, 5),
    (1.251, 3),
    (1.6, 1),
    (2.0, 0),
    (5.730, -1),
    (7.0, -2),
    (10.0, -3),
    (14.05, -4),
    (20.0, -5),
    (25.0, -6),
    (30.0, -7),
    (35.0, -8),
]
CORE_COMPOSITION_MODIFIERS = {
    CelestialBodyComposition.METALLIC: 1,
    CelestialBodyComposition.ROCKY: 0,
}
# (distance to the star upper bound in AU, modifier)
CORE_DISTANCE_MODIFIERS = [(0.1, 2), (0.5, 1), (1.5, 0), (5.0, -1)]
CORE_HEAT_WEIGHTS = [
    (CoreHeat.FROZEN, 1),
    (CoreHeat.WARM, 4),
    (CoreHeat.ACTIVE, 4),
    (CoreHeat.INTENSE, 1),
]

# magnetic field

MAGNETIC_SIZE_MODIFIERS = {
    CelestialBodySize.PUNY: -10,
    CelestialBodySize.TINY: -4,
    CelestialBodySize.SMALL: -2,
    CelestialBodySize.LARGE: 2,
}
MAGNETIC_TRAIT_MODIFIERS = {
    MagneticFieldAnomaly.MUCH_WEAKER: -6,
    MagneticFieldAnomaly.WEAKER: -3,
    MagneticFieldAnomaly.STRONGER: 3,
    MagneticFieldAnomaly.MUCH_STRONGER: 6,
}
MAGNETIC_CORE_MODIFIERS = {
    CoreHeat.FROZEN: -10,
    CoreHeat.WARM: -2,
    CoreHeat.ACTIVE: 1,
    CoreHeat.INTENSE: 3,
}
# (highest total, strength)
MAGNETIC_FIELD_BANDS = [
    (5, MagneticFieldStrength.NONE),
    (8, MagneticFieldStrength.WEAK),
    (11, MagneticFieldStrength.MODERATE),
    (16, MagneticFieldStrength.STRONG),
    (21, MagneticFieldStrength.VERY_STRONG),
]

# hydrosphere

HYDROSPHERE_MAGNETIC_MULTIPLIERS = {
    MagneticFieldStrength.NONE: 0.5,
    MagneticFieldStrength.WEAK: 0.8,
    MagneticFieldStrength.MODERATE: 0.95,
}
HYDROSPHERE_VOLATILE_MULTIPLIERS = {
    VolatileDensity.POOR: 0.5,
    VolatileDensity.RICH: 1.5,
}
# (density upper bound in g/cm3, highest hydrosphere %)
HYDROSPHERE_CEILINGS = [(3.0, 100), (4.5, 95), (6.0, 90), (8.0, 75)]
DENSE_HYDROSPHERE_CEILING = 50

# volcanism and tectonics

VOLCANISM_CORE_MODIFIERS = {
    CoreHeat.FROZEN: -10,
    CoreHeat.WARM: 0,
    CoreHeat.ACTIVE: 5,
    CoreHeat.INTENSE: 10,
}
VOLCANISM_GEOLOGIC_MODIFIERS = {
    GeologicActivity.DEAD: -100,
    GeologicActivity.EXTINCT: -10,
    GeologicActivity.ACTIVE: 10,
}
TECTONICS_VOLCANISM_MODIFIERS = {
    VolcanicActivity.NONE: -8,
    VolcanicActivity.LIGHT: -4,
    VolcanicActivity.MODERATE: 0,
    VolcanicActivity.HEAVY: 4,
    VolcanicActivity.EXTREME: 8,
}
TECTONICS_CORE_MODIFIERS = {
    CoreHeat.FROZEN: -8,
    CoreHeat.WARM: -2,
    CoreHeat.ACTIVE: 0,
    CoreHeat.INTENSE: 2,
}
TECTONICS_SIZE_MODIFIERS = {
    CelestialBodySize.PUNY: -100,
    CelestialBodySize.TINY: -100,
    CelestialBodySize.SMALL: -4,
}

# atmospheric pressure

PRESSURE_SPECTRAL_MODIFIERS = {
    SpectralClass.WR: -5,
    SpectralClass.O: -4,
    SpectralClass.B: -3,
}
PRESSURE_LUMINOSITY_MODIFIERS = {
    LuminosityClass.O: -5,
    LuminosityClass.IA: -5,
    LuminosityClass.IB: -5,
    LuminosityClass.II: -4,
    LuminosityClass.III: -3,
    LuminosityClass.XNS: -5,
}
PRESSURE_VOLCANISM_MODIFIERS = {
    VolcanicActivity.HEAVY: 1,
    VolcanicActivity.EXTREME: 2,
}

RANDOM_PRESSURE_TABLE = [
    (0.0, 0.01),
    (0.0, 0.01),
    (0.01, 0.5),
    (0.01, 0.5),
    (0.01, 0.5),
    (0.5, 0.8),
    (0.5, 0.8),
    (0.8, 1.2),
    (0.8, 1.2),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.5, 10.0),
    (1.5, 10.0),
    (10.0, 300.0),
]
GENERIC_PRESSURE_TABLE = [
    (0.01, 0.5),
    (0.01, 0.5),
    (0.01, 0.5),
    (0.5, 0.8),
    (0.5, 0.8),
    (0.5, 0.8),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.5, 10.0),
    (1.5, 10.0),
]
TERRESTRIAL_PRESSURE_TABLE = [
    (0.5, 0.8),
    (0.5, 0.8),
    (0.5, 0.8),
    (0.5, 0.8),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (0.8, 1.2),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.2, 1.5),
    (1.2, 1.5),
]

# temperature

ABSORPTION_FACTORS = {
    WorldType.ICE: 0.86,
    WorldType.DIRTY_SNOWBALL: 0.9,
    WorldType.ROCK: 0.96,
    WorldType.HADEAN: 0.67,
    WorldType.AMMONIA: 0.84,
    WorldType.GREENHOUSE: 0.77,
    WorldType.CHTHONIAN: 0.97,
    WorldType.GEO_ACTIVE: 0.9,
}
SMALL_ICE_ABSORPTION = 0.93
# (hydrosphere upper bound in %, absorption) of ocean and terrestrial worlds
WET_ABSORPTION_BANDS = [(20, 0.95), (50, 0.92), (90, 0.88)]
FLOODED_ABSORPTION = 0.84
# (pressure upper bound in atm, greenhouse factor)
GREENHOUSE_BANDS = [
    (0.01, 0.0),
    (0.5, 0.05),
    (0.8, 0.10),
    (1.2, 0.16),
    (1.5, 0.20),
    (10.0, 0.40),
    (100.0, 1.0),
]
CRUSHING_GREENHOUSE_FACTOR = 1.5

# subsurface oceans and cryosphere

SUBSURFACE_OCEAN_WORLDS = (
    WorldType.ICE,
    WorldType.DIRTY_SNOWBALL,
    WorldType.HADEAN,
    WorldType.AMMONIA,
)
SUBSURFACE_OCEAN_CHANCES = {
    CoreHeat.WARM: 20,
    CoreHeat.ACTIVE: 40,
    CoreHeat.INTENSE: 60,
}
# Dice (dice, sides, modifier) giving twice the ice cover in %
CRYOSPHERE_ROLLS = {
    TemperatureCategory.FROZEN: (1, 51, 149),
    TemperatureCategory.VERY_COLD: (1, 61, 99),
    TemperatureCategory.COLD: (1, 61, 59),
    TemperatureCategory.CHILLY: (1, 41, 29),
    TemperatureCategory.COOL: (1, 31, 9),
    TemperatureCategory.IDEAL: (1, 21, -1),
    TemperatureCategory.WARM: (1, 11, -1),
}
RIBBON_ICE_ROLL = (1, 21, 39)

ICE_HUMIDITY = 5.0
LAND_HUMIDITY_RATIO = 0.3


def lookup_threshold(table, value, default, inclusive=True):
    """
    Value of the first (bound, value) band holding `value`
    """
    for bound, result in table:
        if value <= bound if inclusive else value < bound:
            return result
    return default


def get_trait_detail(traits, kind):
    trait = find_trait(traits, kind)
    return trait.detail if trait is not None else None


def get_core_heat_modifier(
    size,
    density,
    composition,
    traits,
    star_age,
    distance_from_star,
    eccentricity,
    rotation,
    tidal_heating,
):
    modifier = CORE_SIZE_MODIFIERS.get(size, 5)
    modifier += CORE_TRAIT_MODIFIERS.get(get_trait_detail(traits, BodyTraitKind.UNUSUAL_CORE), 0)
    geologic_activity = get_trait_detail(traits, BodyTraitKind.SPECIFIC_GEOLOGIC_ACTIVITY)
    if geologic_activity in (GeologicActivity.DEAD, GeologicActivity.EXTINCT):
        modifier -= 100
    elif geologic_activity is GeologicActivity.ACTIVE:
        modifier += 5
    modifier += lookup_threshold(CORE_AGE_MODIFIERS, star_age, -9, inclusive=False)
    modifier += CORE_COMPOSITION_MODIFIERS.get(composition, -1)
    if density < 3.0:
        modifier -= 1
    elif density > 5.0:
        modifier += 1
    modifier += lookup_threshold(CORE_DISTANCE_MODIFIERS, distance_from_star, -2)
    if eccentricity > 0.3:
        modifier += 2
    elif eccentricity >= 0.1:
        modifier += 1
    # Fast spinners keep a more active core
    if abs(rotation) < 0.5:
        modifier += 1
    elif abs(rotation) > 10:
        modifier -= 1
    modifier += tidal_heating
    return modifier


def generate_core_heat(
    roller,
    size,
    density,
    composition,
    traits,
    star_age,
    distance_from_star,
    eccentricity=0.0,
    rotation=1.0,
    tidal_heating=0,
):
    """
    Heat of the body's core
    Args:
        roller (SeededDiceRoller):
            Roller of the "_core" decision
        size (CelestialBodySize):
            Size of the body
        density (float):
            Density in g/cm3
        composition (CelestialBodyComposition):
            Body composition
        traits (list):
            Special traits of the body
        star_age (float):
            Age of the star in Gyr
        distance_from_star (float):
            Distance to the star in AU
        eccentricity (float):
            Eccentricity of the body's orbit
        rotation (float):
            Rotation period in days
        tidal_heating (int):
            Tidal heating from orbital resonances
    Returns:
        CoreHeat:
            Core heat, always Frozen for tiny bodies
    """
    if size is CelestialBodySize.TINY:
        return CoreHeat.FROZEN
    modifier = get_core_heat_modifier(
        size,
        density,
        composition,
        traits,
        star_age,
        distance_from_star,
        eccentricity,
        rotation,
        tidal_heating,
    )
    return roller.get_result(
        RollToProcess.from_weights(CORE_HEAT_WEIGHTS, PreparedRoll(2, 6, modifier))
    )


def get_rotation_magnetic_modifier(rotation):
    rotation = abs(rotation)
    if rotation < 1:
        return 1
    if rotation <= 10:
        return 0
    if rotation <= 50:
        return -2
    return -4


def generate_magnetic_field(roller, size, density, core_heat, traits, rotation=1.0):
    """
    Strength of the body's magnetic field, from 3d6 and modifiers
    """
    total = roller.roll(3, 6)
    total += MAGNETIC_SIZE_MODIFIERS.get(size, 0)
    total += MAGNETIC_TRAIT_MODIFIERS.get(
        get_trait_detail(traits, BodyTraitKind.UNUSUAL_MAGNETIC_FIELD), 0
    )
    total += get_rotation_magnetic_modifier(rotation)
    if density > 5.0:
        total += 1
    elif density < 3.0:
        total -= 2
    total += MAGNETIC_CORE_MODIFIERS[core_heat]
    for highest, strength in MAGNETIC_FIELD_BANDS:
        if total <= highest:
            return strength
    return MagneticFieldStrength.EXTREME


def roll_hydrosphere_bracket(roller, world_type, size):
    """
    Raw hydrosphere % of a world type, before modifiers
    """
    standard_or_large = size in (CelestialBodySize.STANDARD, CelestialBodySize.LARGE)
    if world_type in (WorldType.ICE, WorldType.DIRTY_SNOWBALL):
        if size is CelestialBodySize.SMALL:
            return roller.roll(1, 6000, 2499) / 100.0
        if standard_or_large:
            return max(roller.roll(2, 6000, -10000), 0) / 100.0
        return 0.0
    if world_type is WorldType.AMMONIA:
        return roller.roll(2, 6000) / 100.0
    if world_type in (WorldType.TERRESTRIAL, WorldType.OCEAN):
        if size is CelestialBodySize.LARGE:
            return roller.roll(1, 6000, 5999) / 100.0
        return roller.roll(1, 6000, 3999) / 100.0
    if world_type is WorldType.GREENHOUSE:
        return max(roller.roll(2, 6000, -7000), 0) / 100.0
    # Rock, Hadean and Chthonian worlds are dry
    return 0.0


def get_hydrosphere_ceiling(density):
    return lookup_threshold(
        HYDROSPHERE_CEILINGS, density, DENSE_HYDROSPHERE_CEILING, inclusive=False
    )


def generate_hydrosphere(roller, world_type, size, density, magnetic_field, traits, tidal_heating=0):
    """
    Share of the surface covered by liquids or their ice, in %
    Args:
        roller (SeededDiceRoller):
            Roller of the "_hydr" decision
        world_type (WorldType):
            World type of the body
        size (CelestialBodySize):
            Size of the body
        density (float):
            Density in g/cm3, denser bodies hold less volatiles
        magnetic_field (MagneticFieldStrength):
            Weak fields let the stellar wind strip volatiles
        traits (list):
            Special traits of the body
        tidal_heating (int):
            Tidal heating from orbital resonances
    Returns:
        float:
            Hydrosphere in %
    """
    hydrosphere = roll_hydrosphere_bracket(roller, world_type, size)
    if hydrosphere <= 0:
        return 0.0
    hydrosphere *= HYDROSPHERE_MAGNETIC_MULTIPLIERS.get(magnetic_field, 1.0)
    hydrosphere *= HYDROSPHERE_VOLATILE_MULTIPLIERS.get(
        get_trait_detail(traits, BodyTraitKind.UNUSUAL_VOLATILE_DENSITY), 1.0
    )
    hydrosphere -= tidal_heating * 2
    hydrosphere = min(max(hydrosphere, 0.0), get_hydrosphere_ceiling(density))
    return round(hydrosphere, 2)


def get_geologic_modifier(traits):
    return VOLCANISM_GEOLOGIC_MODIFIERS.get(
        get_trait_detail(traits, BodyTraitKind.SPECIFIC_GEOLOGIC_ACTIVITY), 0
    )


def generate_volcanism(roller, gravity, star_age, core_heat, traits, tidal_heating=0, major_moons=0):
    """
    Volcanic activity in %
    """
    score = roller.roll(3, 6)
    score += gravity / max(star_age, 0.1) * 40
    score += VOLCANISM_CORE_MODIFIERS[core_heat]
    score += get_geologic_modifier(traits)
    score += tidal_heating * 2
    score += major_moons * 2
    return round(min(max(score - 16, 0.0), 100.0), 2)


def generate_tectonics(
    roller, size, volcanism, hydrosphere, core_heat, traits, tidal_heating=0, major_moons=0
):
    """
    Tectonic activity in %
    """
    score = roller.roll(3, 6)
    score += TECTONICS_VOLCANISM_MODIFIERS[VolcanicActivity.from_percentage(volcanism)]
    if hydrosphere <= 0:
        score -= 4
    elif hydrosphere <= 50:
        score -= 2
    score += TECTONICS_CORE_MODIFIERS[core_heat]
    score += TECTONICS_SIZE_MODIFIERS.get(size, 0)
    score += get_geologic_modifier(traits) // 2
    score += tidal_heating + major_moons
    return round(min(max((score - 6) * 4, 0.0), 100.0), 2)


def upgrade_world_type(world_type, hydrosphere, volcanism, tectonics):
    """
    Flooded terrestrial worlds become oceans and very active worlds become
    geologically active ones
    """
    if world_type is WorldType.TERRESTRIAL and hydrosphere >= OCEAN_HYDROSPHERE:
        world_type = WorldType.OCEAN
    if world_type not in (
        WorldType.OCEAN,
        WorldType.TERRESTRIAL,
        WorldType.PROTO_WORLD,
        WorldType.VOLATILES_GIANT,
    ) and (volcanism > GEO_ACTIVE_THRESHOLD or tectonics > GEO_ACTIVE_THRESHOLD):
        world_type = WorldType.GEO_ACTIVE
    return world_type


def get_atmospheric_mass_modifier(
    distance, mass, star_age, composition, star, is_moon, volcanism
):
    modifier = 0
    if distance <= 0.2:
        modifier -= 2
    elif distance <= 2.0:
        modifier -= 1

    if mass >= 20.0:
        modifier += 5
    elif mass >= 10.0:
        modifier += 4
    elif mass >= 6.0:
        modifier += 3
    elif mass >= 3.0:
        modifier += 2
    elif mass >= 1.0:
        modifier += 1
    elif mass < 0.1:
        modifier -= 1

    if star_age <= 0.1:
        modifier += 1
    elif star_age >= 10.0:
        modifier -= 2
    elif star_age >= 5.0:
        modifier -= 1

    if composition is CelestialBodyComposition.ICY:
        modifier += 2
    modifier += PRESSURE_SPECTRAL_MODIFIERS.get(star.spectral_class, 0)
    modifier += PRESSURE_LUMINOSITY_MODIFIERS.get(star.luminosity_class, 0)
    if is_moon:
        modifier -= 2
    # Star traits leave the atmospheric mass unchanged
    modifier += PRESSURE_VOLCANISM_MODIFIERS.get(VolcanicActivity.from_percentage(volcanism), 0)
    return modifier


def needs_pressure_table(world_type, size):
    """
    False when the world type fixes the pressure on its own
    """
    if size is CelestialBodySize.PUNY:
        return False
    if world_type in (WorldType.ICE, WorldType.DIRTY_SNOWBALL):
        return size is not CelestialBodySize.TINY
    if world_type is WorldType.ROCK:
        return size not in (CelestialBodySize.TINY, CelestialBodySize.SMALL)
    if world_type is WorldType.HADEAN:
        return size not in (
            CelestialBodySize.TINY,
            CelestialBodySize.SMALL,
            CelestialBodySize.STANDARD,
        )
    return world_type not in (WorldType.CHTHONIAN, WorldType.GREENHOUSE)


def generate_atmospheric_pressure(
    roller,
    world_type,
    size,
    mass,
    composition,
    distance,
    star,
    is_moon=False,
    volcanism=0.0,
):
    """
    Surface pressure in atm
    Args:
        roller (SeededDiceRoller):
            Roller of the "_atmo" decision
        world_type (WorldType):
            World type of the body
        size (CelestialBodySize):
            Size of the body
        mass (float):
            Mass in Earth masses
        composition (CelestialBodyComposition):
            Body composition
        distance (float):
            Distance to what the body orbits, in AU
        star (Star):
            Host star
        is_moon (bool):
            Whether the body is a moon
        volcanism (float):
            Volcanism in %, outgassing thickens the atmosphere
    Returns:
        float:
            Pressure in atm
    """
    if world_type is WorldType.GREENHOUSE and size is not CelestialBodySize.PUNY:
        return roller.gen_range(1.5, 300.0)
    if not needs_pressure_table(world_type, size):
        return 0.0

    modifier = get_atmospheric_mass_modifier(
        distance, mass, star.age, composition, star, is_moon, volcanism
    )
    if world_type is WorldType.AMMONIA:
        table = GENERIC_PRESSURE_TABLE
    elif world_type in (WorldType.OCEAN, WorldType.TERRESTRIAL):
        table = TERRESTRIAL_PRESSURE_TABLE
    else:
        table = RANDOM_PRESSURE_TABLE
    index = min(max(roller.roll(1, 10, modifier), 0), len(table) - 1)
    low, high = table[index]
    return roller.gen_range(low, high)


def get_absorption_factor(world_type, size, hydrosphere):
    if world_type in (WorldType.OCEAN, WorldType.TERRESTRIAL):
        return lookup_threshold(WET_ABSORPTION_BANDS, hydrosphere, FLOODED_ABSORPTION)
    if world_type is WorldType.ICE and size <= CelestialBodySize.SMALL:
        return SMALL_ICE_ABSORPTION
    return ABSORPTION_FACTORS.get(world_type, 1.0)


def get_greenhouse_factor(pressure):
    return lookup_threshold(
        GREENHOUSE_BANDS, pressure, CRUSHING_GREENHOUSE_FACTOR, inclusive=False
    )


def calculate_surface_temperature(blackbody_temperature, world_type, size, hydrosphere, pressure):
    """
    Surface temperature in K, from the blackbody temperature corrected by
    the surface absorption and the atmosphere's greenhouse effect
    """
    absorption = get_absorption_factor(world_type, size, hydrosphere)
    return int(round(blackbody_temperature * absorption * (1 + get_greenhouse_factor(pressure))))


def find_main_liquid(temperature, pressure, star_traits=()):
    """
    Most plausible component for a world's surface liquids, None if nothing
    can be liquid there
    """
    liquids = components_liquid_at(temperature, pressure)
    if not liquids:
        return None
    return max(
        liquids,
        key=lambda component: liquid_majority_composition_likelihood(component, star_traits),
    )


def assign_liquids(world_type, hydrosphere, temperature, pressure, star_traits=()):
    """
    Oceans or lakes of the body
    Returns:
        tuple:
            (world type, list of new traits, main liquid or None). Ocean
            worlds without enough liquid are downgraded to terrestrial
    """
    liquid = find_main_liquid(temperature, pressure, star_traits) if hydrosphere > 0 else None
    traits = []
    if liquid is not None:
        kind = BodyTraitKind.OCEANS if hydrosphere >= LAKES_HYDROSPHERE else BodyTraitKind.LAKES
        traits.append(Trait(kind, liquid))
    if world_type is WorldType.OCEAN and (liquid is None or hydrosphere < OCEAN_HYDROSPHERE):
        world_type = WorldType.TERRESTRIAL
    return world_type, traits, liquid


def has_subsurface_ocean(roller, world_type, core_heat, tidal_heating, star_traits=()):
    if core_heat < CoreHeat.WARM or world_type not in SUBSURFACE_OCEAN_WORLDS:
        return False
    chance = SUBSURFACE_OCEAN_CHANCES[core_heat] + tidal_heating * 5
    chance *= liquid_majority_composition_likelihood(ChemicalComponent.WATER, star_traits)
    return roller.roll(1, 100) <= chance


def partition_surface(roller, hydrosphere, temperature, pressure, liquid_possible, ribbon_world=False):
    """
    Split the surface into open liquid, ice over liquid, ice over land and
    bare land
    Args:
        roller (SeededDiceRoller):
            Roller of the "_cryo" decision
        hydrosphere (float):
            Hydrosphere in %, liquid and frozen
        temperature (float):
            Surface temperature in K
        pressure (float):
            Surface pressure in atm
        liquid_possible (bool):
            Whether anything can be liquid on the surface
        ribbon_world (bool):
            Planets tide-locked to their star keep ice on their night side
    Returns:
        tuple:
            (hydrosphere, ice_over_water, ice_over_land, land_area) in %,
            adding up to 100
    """
    if not liquid_possible and temperature >= ICING_TEMPERATURE:
        # Boiled off
        hydrosphere = 0.0
    land = 100.0 - hydrosphere
    if hydrosphere <= 0 and pressure < HUMIDITY_MIN_PRESSURE:
        # No volatiles to freeze
        return 0.0, 0.0, 0.0, 100.0

    dice = CRYOSPHERE_ROLLS.get(TemperatureCategory.from_temperature(temperature))
    cover = roller.roll(*dice) / 2.0 if dice is not None else 0.0
    if ribbon_world:
        cover = max(cover, float(roller.roll(*RIBBON_ICE_ROLL)))
    cover = min(max(cover, 0.0), 100.0)

    water_cover = 100.0 if not liquid_possible else cover
    ice_over_water = round(hydrosphere * water_cover / 100.0, 2)
    ice_over_land = round(land * cover / 100.0, 2)
    hydrosphere = round(hydrosphere - ice_over_water, 2)
    land = max(round(100.0 - hydrosphere - ice_over_water - ice_over_land, 2), 0.0)
    return hydrosphere, ice_over_water, ice_over_land, land


def calculate_humidity(roller, temperature, pressure, hydrosphere, ice, land):
    """
    Humidity in %, blended from the humidity over liquids, ice and land
    """
    if temperature <= HUMIDITY_MIN_TEMPERATURE or pressure <= HUMIDITY_MIN_PRESSURE:
        return 0.0
    water_humidity = min(max(temperature - HUMIDITY_MIN_TEMPERATURE, 0.0), 100.0)
    humidity = (
        hydrosphere * water_humidity
        + ice * ICE_HUMIDITY
        + land * water_humidity * LAND_HUMIDITY_RATIO
    ) / 100.0
    humidity += roller.roll(1, 11, -6)
    return round(min(max(humidity, 0.0), 100.0), 2)


def apply_proto_world(details):
    details.core_heat = CoreHeat.INTENSE
    details.magnetic_field = MagneticFieldStrength.NONE
    details.atmospheric_pressure = 0.0
    details.atmospheric_composition = []
    details.hydrosphere = 0.0
    details.ice_over_water = 0.0
    details.ice_over_land = 0.0
    details.land_area = 100.0
    details.volcanism = 100.0
    details.tectonic_activity = 100.0
    details.humidity = 0.0
    details.temperature = PROTO_WORLD_TEMPERATURE
    details.temperature_category = TemperatureCategory.from_temperature(PROTO_WORLD_TEMPERATURE)
    details.climate = ClimateType.DEAD


def add_traits(details, traits):
    for trait in traits:
        if trait not in details.special_traits:
            details.special_traits.append(trait)


def generate_world(
    context,
    point,
    star,
    system_traits=(),
    body_settings=None,
    is_moon=False,
    moon_points=(),
    distance_from_star=None,
):
    """
    Fill the world properties of a solid body
    Args:
        context (GenerationContext):
            Context of the host star
        point (OrbitalPoint):
            Point of the body, its orbit, rotation and tidal heating are
            already known
        star (Star):
            Host star
        system_traits (list):
            System traits
        body_settings (CelestialBodySettings):
            Body settings, for the assumed life level
        is_moon (bool):
            Whether the body is a moon
        moon_points (list):
            Moons of the body
        distance_from_star (float):
            Distance to the star in AU, defaults to the body's orbit radius.
            Moons use their planet's
    Returns:
        TelluricDetails:
            The body's details, updated in place
    """
    body = point.object
    details = body.details
    if not isinstance(details, TelluricDetails):
        raise TypeError(f"{body.name} has no telluric details, got {type(details).__name__}")

    world_type = details.world_type
    if world_type is WorldType.VOLATILES_GIANT:
        details.temperature = int(body.blackbody_temperature)
        details.temperature_category = TemperatureCategory.from_temperature(details.temperature)
        details.climate = ClimateType.DEAD
        return details
    if world_type is WorldType.PROTO_WORLD:
        apply_proto_world(details)
        return details

    orbit = point.own_orbit
    if distance_from_star is None:
        distance_from_star = orbit.average_distance
    traits = details.special_traits
    life_level = body_settings.assumed_life_level if body_settings is not None else LifeLevel.NONE
    prefix = f"_bdy{point.id}"
    tidal_heating = body.tidal_heating
    major_moons = len(get_major_moons(moon_points))

    details.core_heat = generate_core_heat(
        context.roller(f"{prefix}_core"),
        body.size,
        body.density,
        details.body_type,
        traits,
        star.age,
        distance_from_star,
        orbit.eccentricity,
        orbit.rotation,
        tidal_heating,
    )
    details.magnetic_field = generate_magnetic_field(
        context.roller(f"{prefix}_mag"),
        body.size,
        body.density,
        details.core_heat,
        traits,
        orbit.rotation,
    )
    hydrosphere = generate_hydrosphere(
        context.roller(f"{prefix}_hydr"),
        world_type,
        body.size,
        body.density,
        details.magnetic_field,
        traits,
        tidal_heating,
    )
    details.volcanism = generate_volcanism(
        context.roller(f"{prefix}_volc"),
        body.gravity,
        star.age,
        details.core_heat,
        traits,
        tidal_heating,
        major_moons,
    )
    details.tectonic_activity = generate_tectonics(
        context.roller(f"{prefix}_tect"),
        body.size,
        details.volcanism,
        hydrosphere,
        details.core_heat,
        traits,
        tidal_heating,
        major_moons,
    )
    world_type = upgrade_world_type(
        world_type, hydrosphere, details.volcanism, details.tectonic_activity
    )

    pressure = generate_atmospheric_pressure(
        context.roller(f"{prefix}_atmo"),
        world_type,
        body.size,
        body.mass,
        details.body_type,
        orbit.average_distance,
        star,
        is_moon,
        details.volcanism,
    )
    temperature = calculate_surface_temperature(
        body.blackbody_temperature, world_type, body.size, hydrosphere, pressure
    )
    composition = generate_atmospheric_composition(
        context.roller(f"{prefix}_comp"),
        world_type,
        details.body_type,
        body.mass,
        body.radius,
        temperature,
        pressure,
        details.magnetic_field,
        details.volcanism,
        star.age,
        life_level,
        system_traits,
    )
    if not composition and pressure > 0:
        # Every gas escaped, the surface sees no greenhouse effect
        pressure = 0.0
        temperature = calculate_surface_temperature(
            body.blackbody_temperature, world_type, body.size, hydrosphere, pressure
        )
    temperature_category = TemperatureCategory.from_temperature(temperature)

    world_type, liquid_traits, liquid = assign_liquids(
        world_type, hydrosphere, temperature, pressure, star.traits
    )
    add_traits(details, liquid_traits)
    if has_subsurface_ocean(
        context.roller(f"{prefix}_subo"), world_type, details.core_heat, tidal_heating, star.traits
    ):
        add_traits(details, [Trait(BodyTraitKind.SUBSURFACE_OCEANS, ChemicalComponent.WATER)])

    ribbon_world = is_ribbon_world(traits, is_moon)
    (
        details.hydrosphere,
        details.ice_over_water,
        details.ice_over_land,
        details.land_area,
    ) = partition_surface(
        context.roller(f"{prefix}_cryo"),
        hydrosphere,
        temperature,
        pressure,
        liquid is not None,
        ribbon_world,
    )
    details.humidity = calculate_humidity(
        context.roller(f"{prefix}_humi"),
        temperature,
        pressure,
        details.hydrosphere,
        details.ice_over_water + details.ice_over_land,
        details.land_area,
    )

    details.world_type = world_type
    details.atmospheric_pressure = round(pressure, 4)
    details.atmospheric_composition = composition
    details.temperature = temperature
    details.temperature_category = temperature_category
    details.climate = classify_climate(
        world_type,
        temperature_category,
        details.hydrosphere,
        details.ice_over_water + details.ice_over_land,
        details.humidity,
        life_level,
        traits,
        is_moon,
    )
    if details.body_type is CelestialBodyComposition.ICY and body.blackbody_temperature >= 170:
        details.body_type = CelestialBodyComposition.ROCKY

    logger.debug(
        "World %s: %s, %s core, %s field, %.2f atm, %d K, %s",
        body.name,
        world_type,
        details.core_heat,
        details.magnetic_field,
        details.atmospheric_pressure,
        temperature,
        details.climate,
    )
    return details
