"""
Atmospheric composition of solid worlds.

A dominant gas family is picked from the world type, temperature and system
traits, volcanic outgassing is layered on top, and every gas that cannot be
held by the body is swapped for what it breaks down into.
"""

import logging

import astropy.constants as const
import numpy as np

from exoforge.base.traits import SystemTraitKind, has_trait
from exoforge.base.types import (
    CelestialBodyComposition,
    GasPresence,
    LifeLevel,
    MagneticFieldStrength,
    VolcanicActivity,
    WorldType,
)
from exoforge.util.dice import RollToProcess
from exoforge.util.elements import ChemicalComponent as C

logger = logging.getLogger(__name__)

G = const.G.value
K_B = const.k_B.value
M_EARTH_KG = const.M_earth.value
R_EARTH_M = const.R_earth.value

# Components without phase data are only gaseous on very hot worlds
REFRACTORY_GAS_TEMPERATURE = 500

# Presence of the gases of each family when it dominates
GAS_FAMILIES = {
    "reducing": [
        (C.HYDROGEN, GasPresence.DOMINANT),
        (C.HELIUM, GasPresence.MAJOR),
        (C.METHANE, GasPresence.MINOR),
        (C.AMMONIA, GasPresence.TRACE),
    ],
    "nitrogen_oxygen": [
        (C.NITROGEN, GasPresence.DOMINANT),
        (C.OXYGEN, GasPresence.MAJOR),
        (C.ARGON, GasPresence.MINOR),
        (C.WATER, GasPresence.MINOR),
        (C.CARBON_DIOXIDE, GasPresence.TRACE),
    ],
    "nitrogen": [
        (C.NITROGEN, GasPresence.DOMINANT),
        (C.CARBON_DIOXIDE, GasPresence.SIGNIFICANT),
        (C.ARGON, GasPresence.MINOR),
        (C.WATER, GasPresence.TRACE),
    ],
    "carbon_dioxide": [
        (C.CARBON_DIOXIDE, GasPresence.DOMINANT),
        (C.NITROGEN, GasPresence.SIGNIFICANT),
        (C.SULFUR_DIOXIDE, GasPresence.MINOR),
        (C.ARGON, GasPresence.TRACE),
    ],
    "methane_nitrogen": [
        (C.NITROGEN, GasPresence.DOMINANT),
        (C.METHANE, GasPresence.SIGNIFICANT),
        (C.HYDROGEN, GasPresence.MINOR),
        (C.ETHANE, GasPresence.TRACE),
    ],
    "ammonia_methane": [
        (C.AMMONIA, GasPresence.MAJOR),
        (C.METHANE, GasPresence.MAJOR),
        (C.NITROGEN, GasPresence.SIGNIFICANT),
        (C.HYDROGEN, GasPresence.MINOR),
    ],
    "volcanic": [
        (C.CARBON_DIOXIDE, GasPresence.MAJOR),
        (C.WATER, GasPresence.SIGNIFICANT),
        (C.SULFUR_DIOXIDE, GasPresence.SIGNIFICANT),
        (C.HYDROGEN_SULFIDE, GasPresence.MINOR),
        (C.CARBON_MONOXIDE, GasPresence.TRACE),
    ],
    "sodium_silicate": [
        (C.SODIUM, GasPresence.DOMINANT),
        (C.SILICATES, GasPresence.MAJOR),
        (C.POTASSIUM, GasPresence.MINOR),
        (C.OXYGEN, GasPresence.TRACE),
    ],
    "steam": [
        (C.WATER, GasPresence.DOMINANT),
        (C.CARBON_DIOXIDE, GasPresence.MAJOR),
        (C.NITROGEN, GasPresence.MINOR),
    ],
}

# What a gas leaves behind when the body cannot hold it
DISSOCIATION_PRODUCTS = {
    C.WATER: (C.HYDROGEN, C.OXYGEN),
    C.AMMONIA: (C.NITROGEN, C.HYDROGEN),
    C.METHANE: (C.ETHANE, C.HYDROGEN),
    C.CARBON_DIOXIDE: (C.CARBON_MONOXIDE, C.OXYGEN),
    C.CARBON_MONOXIDE: (C.CARBON, C.OXYGEN),
    C.HYDROGEN_SULFIDE: (C.SULFUR, C.HYDROGEN),
    C.SULFUR_DIOXIDE: (C.SULFUR, C.OXYGEN),
    C.NITROGEN_DIOXIDE: (C.NITRIC_OXIDE, C.OXYGEN),
    C.NITRIC_OXIDE: (C.NITROGEN, C.OXYGEN),
    C.ETHANE: (C.ETHYLENE, C.HYDROGEN),
}

# Escape velocity needed, in multiples of the thermal velocity
JEANS_FACTORS = {
    MagneticFieldStrength.NONE: 8.0,
    MagneticFieldStrength.WEAK: 7.0,
    MagneticFieldStrength.MODERATE: 7.0,
}
SHIELDED_JEANS_FACTOR = 6.0

# Presence levels the volcanic family loses before being added
OUTGASSING_DOWNGRADES = {
    VolcanicActivity.MODERATE: 3,
    VolcanicActivity.HEAVY: 2,
    VolcanicActivity.EXTREME: 1,
}


def calculate_escape_velocity(mass, radius):
    """
    Escape velocity in m/s of a body given in Earth masses and radii
    """
    if radius <= 0:
        return 0.0
    return float(np.sqrt(2 * G * mass * M_EARTH_KG / (radius * R_EARTH_M)))


def calculate_thermal_velocity(component, temperature):
    """
    Root mean square speed in m/s of a component's molecules
    """
    return float(np.sqrt(3 * K_B * max(temperature, 1) / component.molecular_weight_kg))


def is_gaseous(component, temperature, pressure):
    if component.triple_point is None:
        return temperature >= REFRACTORY_GAS_TEMPERATURE
    # Vapour above a liquid counts as gas
    return component.can_exist_as_gas(temperature, pressure) or component.can_exist_as_liquid(
        temperature, pressure
    )


def can_persist(component, temperature, pressure, escape_velocity, magnetic_field):
    """
    Whether the body keeps a gas over geological time
    Args:
        component (ChemicalComponent):
            Gas to check
        temperature (float):
            Surface temperature in K
        pressure (float):
            Surface pressure in atm
        escape_velocity (float):
            Escape velocity of the body in m/s
        magnetic_field (MagneticFieldStrength):
            Field shielding the atmosphere from the stellar wind
    Returns:
        bool:
            True if the gas stays
    """
    if not is_gaseous(component, temperature, pressure):
        return False
    factor = JEANS_FACTORS.get(magnetic_field, SHIELDED_JEANS_FACTOR)
    return escape_velocity >= factor * calculate_thermal_velocity(component, temperature)


def add_gas_as(gases, component, presence):
    """
    Add a gas to a {component: presence} mapping. A gas already present is
    upgraded by one level if the incoming presence is at least as strong,
    and left alone otherwise.
    """
    existing = gases.get(component)
    if existing is None:
        gases[component] = presence
    elif presence >= existing:
        gases[component] = existing.upgraded()
    return gases


def get_family_weights(world_type, composition, temperature, star_age, life_level, system_traits):
    weights = {}
    if world_type in (WorldType.TERRESTRIAL, WorldType.OCEAN):
        if life_level >= LifeLevel.PLANT_LIKE:
            weights["nitrogen_oxygen"] = 10
        weights["nitrogen"] = 6
        weights["carbon_dioxide"] = 3
        if temperature > 340:
            weights["steam"] = 4
    elif world_type is WorldType.GREENHOUSE:
        weights["carbon_dioxide"] = 10
        weights["steam"] = 3
        weights["volcanic"] = 2
    elif world_type is WorldType.AMMONIA:
        weights["ammonia_methane"] = 10
        weights["methane_nitrogen"] = 3
    elif world_type in (WorldType.ICE, WorldType.DIRTY_SNOWBALL, WorldType.HADEAN):
        weights["methane_nitrogen"] = 6
        weights["nitrogen"] = 4
        if temperature > 150:
            weights["carbon_dioxide"] = 2
    elif world_type is WorldType.GEO_ACTIVE:
        weights["volcanic"] = 10
        weights["carbon_dioxide"] = 3
    elif world_type is WorldType.CHTHONIAN:
        weights["sodium_silicate"] = 10
    else:
        weights["carbon_dioxide"] = 5
        weights["nitrogen"] = 3
        weights["volcanic"] = 2

    if star_age < 0.1:
        weights["reducing"] = weights.get("reducing", 0) + 8
    if composition is CelestialBodyComposition.ICY:
        weights["methane_nitrogen"] = weights.get("methane_nitrogen", 0) + 2
    if has_trait(system_traits, SystemTraitKind.CARBON_RICH):
        for family in ("carbon_dioxide", "methane_nitrogen"):
            if family in weights:
                weights[family] *= 2
    return weights


def select_gases(roller, world_type, composition, temperature, star_age, volcanism, life_level, system_traits):
    """
    Gases the body starts with, before persistence is checked
    """
    weights = get_family_weights(
        world_type, composition, temperature, star_age, life_level, system_traits
    )
    family = roller.get_result(RollToProcess.from_weights(weights))
    gases = {}
    for component, presence in GAS_FAMILIES[family]:
        add_gas_as(gases, component, presence)

    downgrade = OUTGASSING_DOWNGRADES.get(VolcanicActivity.from_percentage(volcanism))
    if downgrade is not None and family != "volcanic":
        for component, presence in GAS_FAMILIES["volcanic"]:
            if presence - downgrade >= GasPresence.TRACE:
                add_gas_as(gases, component, GasPresence(presence - downgrade))
    logger.debug("Atmosphere family %s: %s", family, gases)
    return gases


def apply_persistence(gases, temperature, pressure, escape_velocity, magnetic_field):
    """
    Swap the gases the body cannot hold for their dissociation products, one
    presence level lower. Products are not broken down further.
    """
    kept = {}
    products = []
    for component, presence in gases.items():
        if can_persist(component, temperature, pressure, escape_velocity, magnetic_field):
            add_gas_as(kept, component, presence)
        elif presence > GasPresence.TRACE:
            for product in DISSOCIATION_PRODUCTS.get(component, ()):
                products.append((product, GasPresence(presence - 1)))
    for product, presence in products:
        if can_persist(product, temperature, pressure, escape_velocity, magnetic_field):
            add_gas_as(kept, product, presence)
    return kept


def roll_percentages(roller, gases):
    """
    Percentages of each gas, rolled within the range of its presence level
    and rescaled to add up to 100, highest first
    """
    if not gases:
        return []
    raw = [(roller.gen_range(*presence.percentage_range), component) for component, presence in gases.items()]
    total = sum(value for value, _ in raw)
    composition = [(value / total * 100.0, component) for value, component in raw]
    composition.sort(key=lambda item: item[0], reverse=True)
    return composition


def generate_atmospheric_composition(
    roller,
    world_type,
    composition,
    mass,
    radius,
    temperature,
    pressure,
    magnetic_field,
    volcanism,
    star_age,
    life_level=LifeLevel.NONE,
    system_traits=(),
):
    """
    Gas composition of a world's atmosphere
    Args:
        roller (SeededDiceRoller):
            Roller of the "_comp" decision
        world_type (WorldType):
            World type of the body
        composition (CelestialBodyComposition):
            Body composition
        mass (float):
            Mass in Earth masses
        radius (float):
            Radius in Earth radii
        temperature (float):
            Surface temperature in K
        pressure (float):
            Surface pressure in atm
        magnetic_field (MagneticFieldStrength):
            Magnetic field of the body
        volcanism (float):
            Volcanism in %
        star_age (float):
            Age of the star in Gyr
        life_level (LifeLevel):
            Life assumed on the body
        system_traits (list):
            System traits
    Returns:
        list:
            (percentage, ChemicalComponent), highest first. Empty when the
            body holds no atmosphere
    """
    if pressure <= 0:
        return []
    gases = select_gases(
        roller, world_type, composition, temperature, star_age, volcanism, life_level, system_traits
    )
    gases = apply_persistence(
        gases, temperature, pressure, calculate_escape_velocity(mass, radius), magnetic_field
    )
    return roll_percentages(roller, gases)
