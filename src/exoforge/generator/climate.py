"""
Climate classification of solid worlds.
"""

from enum import IntEnum

from exoforge.base.traits import BodyTraitKind, TideLockTarget, has_trait
from exoforge.base.types import ClimateType, LifeLevel, TemperatureCategory, WorldType

VEGETATION_LIFE_LEVEL = LifeLevel.PLANT_LIKE
OCEAN_HYDROSPHERE = 90


class Rating(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @classmethod
    def from_percentage(cls, percentage):
        if percentage <= 33:
            return cls.LOW
        if percentage <= 66:
            return cls.MEDIUM
        return cls.HIGH


def is_ribbon_world(traits, is_moon):
    """
    A planet tide-locked to its star, with one face always lit
    """
    return not is_moon and has_trait(traits, BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED)


def classify_climate(
    world_type,
    temperature_category,
    hydrosphere,
    cryosphere,
    humidity,
    life_level=LifeLevel.NONE,
    traits=(),
    is_moon=False,
):
    """
    Climate of a world
    Args:
        world_type (WorldType):
            World type of the body
        temperature_category (TemperatureCategory):
            Category of the surface temperature
        hydrosphere (float):
            Liquid surface in %
        cryosphere (float):
            Ice covered surface in %
        humidity (float):
            Humidity in %
        life_level (LifeLevel):
            Life assumed on the body, plant-like life or more means
            vegetation
        traits (list):
            Special traits of the body
        is_moon (bool):
            Whether the body is a moon
    Returns:
        ClimateType:
            Climate, Dead when no branch applies
    """
    if world_type not in (WorldType.TERRESTRIAL, WorldType.OCEAN):
        return ClimateType.DEAD
    if is_ribbon_world(traits, is_moon):
        return ClimateType.RIBBON

    h = Rating.from_percentage(humidity)
    w = Rating.from_percentage(hydrosphere)
    c = Rating.from_percentage(cryosphere)
    vegetated = life_level >= VEGETATION_LIFE_LEVEL
    t = temperature_category

    if hydrosphere >= OCEAN_HYDROSPHERE and c is Rating.LOW:
        return ClimateType.OCEAN
    if t <= TemperatureCategory.VERY_COLD or c is Rating.HIGH:
        return ClimateType.ARCTIC
    if t in (TemperatureCategory.COLD, TemperatureCategory.CHILLY):
        # Always true, cold vegetated worlds are never tundra
        if vegetated and (c is not Rating.LOW or c is not Rating.HIGH):
            return ClimateType.TAIGA
        return ClimateType.TUNDRA
    if t in (TemperatureCategory.COOL, TemperatureCategory.IDEAL):
        if w is Rating.LOW and h is Rating.LOW:
            return ClimateType.DESERT
        if w is Rating.LOW:
            return ClimateType.STEPPE
        if vegetated:
            return ClimateType.TERRESTRIAL
        return ClimateType.STEPPE
    if t in (TemperatureCategory.WARM, TemperatureCategory.TROPICAL):
        if w is Rating.LOW and h is Rating.LOW:
            return ClimateType.DESERT
        if vegetated:
            if h is Rating.HIGH:
                if t is TemperatureCategory.TROPICAL:
                    return ClimateType.RAINFOREST
                return ClimateType.JUNGLE
            return ClimateType.SAVANNA
        # Reduces to h being high, the hydrosphere plays no part
        if (w is Rating.HIGH and h is Rating.HIGH) or h is Rating.HIGH:
            return ClimateType.MUD_BALL
        return ClimateType.TROPICAL
    if w is Rating.LOW and h is Rating.LOW:
        return ClimateType.DESERT
    if h is Rating.HIGH and w is not Rating.LOW:
        return ClimateType.MUD_BALL
    return ClimateType.DEAD
