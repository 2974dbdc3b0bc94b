"""
Peculiarities of stars, systems and bodies.

A trait is a kind plus an optional detail, e.g.
Trait(BodyTraitKind.TIDE_LOCKED, TideLockTarget.ORBITED). Kinds are closed
enums so every decision point that reads traits has a finite list to match.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Trait:
    kind: Enum
    detail: Any = None

    def __str__(self):
        if self.detail is None:
            return self.kind.value
        return f"{self.kind.value} ({self.detail})"


def find_trait(traits, kind):
    """
    First trait of the given kind, None if there is none
    """
    for trait in traits:
        if trait.kind is kind:
            return trait
    return None


def has_trait(traits, kind, detail=None):
    for trait in traits:
        if trait.kind is kind and (detail is None or trait.detail == detail):
            return True
    return False


def trait_details(traits, kind):
    return [trait.detail for trait in traits if trait.kind is kind]


class StarTraitKind(Enum):
    AGE_DIFFERENCE = "Age Difference"
    CHAOTIC_ORBITS = "Chaotic Orbits"
    CIRCUMSTELLAR_DISK = "Circumstellar Disk"
    EXCESSIVE_RADIATION = "Excessive Radiation"
    NO_METALS = "No Metals"
    POWERFUL_STELLAR_WINDS = "Powerful Stellar Winds"
    ROTATION_ANOMALY = "Rotation Anomaly"
    STRONG_MAGNETIC_FIELD = "Strong Magnetic Field"
    UNUSUAL_ELEMENT_PRESENCE = "Unusual Element Presence"
    UNUSUAL_METALLICITY = "Unusual Metallicity"
    VARIABLE_STAR = "Variable Star"


class StarAgeDifference(Enum):
    MUCH_YOUNGER = "Much Younger"
    YOUNGER = "Younger"
    OLDER = "Older"
    MUCH_OLDER = "Much Older"


class RotationAnomalySpeed(Enum):
    MUCH_FASTER = "Much Faster"
    FASTER = "Faster"
    SLOWER = "Slower"
    MUCH_SLOWER = "Much Slower"


class MetallicityDifference(Enum):
    MUCH_LOWER = "Much Lower"
    LOWER = "Lower"
    HIGHER = "Higher"
    MUCH_HIGHER = "Much Higher"


class VariableStarInterval(Enum):
    MINUTES = "Minutes"
    HOURS = "Hours"
    DAYS = "Days"
    MONTHS = "Months"


class SystemTraitKind(Enum):
    CARBON_RICH = "Carbon Rich"
    CATACLYSM = "Cataclysm"
    NEBULAE = "Nebulae"
    UNUSUAL_DEBRIS_DENSITY = "Unusual Debris Density"


class CataclysmSeverity(Enum):
    MINOR = "Minor"
    MAJOR = "Major"
    EXTREME = "Extreme"
    ULTIMATE = "Ultimate"


class DebrisDensity(Enum):
    MUCH_LOWER = "Much Lower"
    LOWER = "Lower"
    HIGHER = "Higher"
    MUCH_HIGHER = "Much Higher"


class NebulaeApparentSize(Enum):
    TINY = "Tiny"
    SMALL = "Small"
    LARGE = "Large"
    DOMINANT = "Dominant"


class BodyTraitKind(Enum):
    PROTO_GIANT = "Proto Giant"
    RETROGRADE_ORBIT = "Retrograde Orbit"
    SPECIFIC_GEOLOGIC_ACTIVITY = "Specific Geologic Activity"
    SPECIFIC_TERRAIN_RELIEF = "Specific Terrain Relief"
    TIDE_LOCKED = "Tide Locked"
    UNUSUAL_AXIAL_TILT = "Unusual Axial Tilt"
    UNUSUAL_CORE = "Unusual Core"
    UNUSUAL_MAGNETIC_FIELD = "Unusual Magnetic Field"
    UNUSUAL_ROTATION = "Unusual Rotation"
    UNUSUAL_VOLATILE_DENSITY = "Unusual Volatile Density"
    OCEANS = "Oceans"
    LAKES = "Lakes"
    SUBSURFACE_OCEANS = "Subsurface Oceans"


class GeologicActivity(Enum):
    DEAD = "Dead"
    EXTINCT = "Extinct"
    ACTIVE = "Active"


class TerrainRelief(Enum):
    FLAT = "Flat"
    VARIED = "Varied"
    EQUATORIAL_RIDGE = "Equatorial Ridge"


class TideLockTarget(Enum):
    ORBITED = "Orbited"
    SATELLITE = "Satellite"


class VolatileDensity(Enum):
    POOR = "Poor"
    RICH = "Rich"


class MagneticFieldAnomaly(Enum):
    MUCH_WEAKER = "Much Weaker"
    WEAKER = "Weaker"
    STRONGER = "Stronger"
    MUCH_STRONGER = "Much Stronger"


class AxialTiltAnomaly(Enum):
    MINIMAL = "Minimal"
    EXTREME = "Extreme"


class RotationAnomaly(Enum):
    SLOW = "Slow"
    FAST = "Fast"
    RETROGRADE = "Retrograde"
    RESONANT = "Resonant"


class CoreAnomaly(Enum):
    CORELESS = "Coreless"
    SMALLER = "Smaller"
    LARGER = "Larger"
