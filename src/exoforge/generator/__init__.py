__all__ = [
    "SystemGenerator",
    "calculate_star_zones",
    "collect_all_zones",
    "calculate_gravitational_harmonics",
    "generate_world",
]

from .harmonics import calculate_gravitational_harmonics
from .system import SystemGenerator
from .world import generate_world
from .zones import calculate_star_zones, collect_all_zones
