"""
Gas giants, gas belts and gas clouds.
"""

import logging

import numpy as np

from exoforge.base.body import CelestialBody, GaseousDetails
from exoforge.base.disk import CelestialDisk
from exoforge.base.orbit import OrbitalPoint
from exoforge.base.traits import BodyTraitKind, Trait
from exoforge.base.types import (
    BeltType,
    CelestialBodySize,
    DiskType,
    ObjectKind,
    SpectralClass,
)
from exoforge.generator.telluric import apply_trait_settings
from exoforge.util.misc import EARTH_DENSITY, calculate_blackbody_temperature

logger = logging.getLogger(__name__)

# (mass in Earth masses, density in g/cm3), ascending in mass
MASS_TO_DENSITY = np.array(
    [
        (0.0, 0.687),
        (10.0, 2.31),
        (15.0, 1.43),
        (20.0, 1.21),
        (30.0, 1.05),
        (40.0, 0.94),
        (80.0, 0.94),
        (100.0, 0.99),
        (150.0, 1.05),
        (200.0, 1.1),
        (250.0, 1.21),
        (300.0, 1.32),
        (350.0, 1.38),
        (400.0, 1.43),
        (450.0, 1.49),
        (500.0, 1.6),
        (600.0, 1.7),
        (800.0, 1.93),
        (1000.0, 2.2),
        (1500.0, 3.3),
        (2000.0, 4.41),
        (2500.0, 5.51),
        (3000.0, 6.62),
        (3500.0, 7.72),
        (4000.0, 8.82),
        (4131.0, 6.0),
        (25440.0, 60.0),
        (np.finfo(np.float32).max, 11.02),
    ]
)

PROTO_GIANT_SIZE_MODIFIER = 100


def interpolate_gas_density(mass):
    """
    Density of a gaseous body from its mass, linear between the reference
    points
    """
    return float(np.interp(mass, MASS_TO_DENSITY[:, 0], MASS_TO_DENSITY[:, 1]))


def get_gas_body_size_modifier(star, roller, is_proto_giant=False):
    """
    Modifier to the gas giant size roll from the spectral class of the star
    """
    modifier = PROTO_GIANT_SIZE_MODIFIER if is_proto_giant else 0
    spectral_class = star.spectral_class
    if spectral_class.is_massive:
        if roller.roll(1, 50) != 1:
            modifier -= int(star.mass * 10)
    elif spectral_class is SpectralClass.F:
        modifier += 20
    elif spectral_class is SpectralClass.K:
        modifier -= 20
    elif spectral_class is SpectralClass.M:
        modifier -= 40
    elif spectral_class.is_brown_dwarf:
        modifier -= 100
    return modifier


def _roll_gas_mass(roller, size_modifier, is_proto_giant):
    """
    Returns:
        tuple:
            (BeltType, None, None) for belts and clouds, (None, mass, size)
            for bodies
    """
    roll = roller.roll(1, 400, size_modifier)
    if roll <= 2 and not is_proto_giant:
        return BeltType.GAS_CLOUD, None, None
    if roll <= 6 and not is_proto_giant:
        return BeltType.GAS, None, None
    if roll <= 106:
        return None, roller.roll(1, 1402, 199) / 100.0, CelestialBodySize.LARGE
    if roll <= 326:
        return None, roller.roll(1, 14601, 1599) / 100.0, CelestialBodySize.GIANT
    if roll <= 386:
        return None, roller.roll(1, 183801, 16199) / 100.0, CelestialBodySize.SUPERGIANT
    if 397 <= roll <= 400:
        # Brown dwarf
        return None, roller.roll(1, 386861, 413139) / 100.0, CelestialBodySize.HYPERGIANT
    return None, roller.roll(1, 213101, 199999) / 100.0, CelestialBodySize.HYPERGIANT


def generate_gas_giant(
    context,
    star,
    point_id,
    orbit,
    name,
    body_settings,
    size_modifier=0,
    is_proto_giant=False,
):
    """
    Generate the gaseous object of a slot
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
        is_proto_giant (bool):
            Whether this is the first giant of the system, which is never
            a belt or a cloud
    Returns:
        OrbitalPoint:
            Gaseous body or gaseous disk point
    """
    roller = context.roller(f"_gas_bdy{point_id}")
    belt_type, mass, size = _roll_gas_mass(roller, size_modifier, is_proto_giant)

    if belt_type is not None:
        disk = CelestialDisk(point_id, name, DiskType.BELT, belt_type=belt_type)
        logger.debug("%s is a %s belt", name, belt_type)
        return OrbitalPoint(point_id, orbit, disk, ObjectKind.GASEOUS_DISK)

    density = round(interpolate_gas_density(mass) + roller.roll(1, 61, -31) / 100.0, 4)
    radius = float(np.cbrt(mass / (density / EARTH_DENSITY)))
    traits = [Trait(BodyTraitKind.PROTO_GIANT)] if is_proto_giant else []
    body = CelestialBody(
        point_id,
        name,
        mass=mass,
        radius=radius,
        density=density,
        blackbody_temperature=calculate_blackbody_temperature(
            star.luminosity, orbit.average_distance
        ),
        size=size,
        details=GaseousDetails(apply_trait_settings(traits, body_settings)),
    )
    return OrbitalPoint(point_id, orbit, body, ObjectKind.GASEOUS_BODY)
