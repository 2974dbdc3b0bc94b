__all__ = [
    "CelestialBody",
    "CelestialDisk",
    "GaseousDetails",
    "Orbit",
    "OrbitalPoint",
    "Star",
    "StarSystem",
    "StarZone",
    "TelluricDetails",
    "Trait",
    "Universe",
]

from .body import CelestialBody, GaseousDetails, TelluricDetails
from .disk import CelestialDisk
from .orbit import Orbit, OrbitalPoint
from .star import Star
from .system import StarSystem
from .traits import Trait
from .universe import Universe
from .zone import StarZone
