__version__ = "0.1.0"

__all__ = [
    "GenerationSettings",
    "SystemGenerator",
    "Universe",
    "GenerationError",
    "InvalidInputError",
    "UnsatisfiableConstraintError",
]

from .base import Universe
from .exceptions import GenerationError, InvalidInputError, UnsatisfiableConstraintError
from .generator import SystemGenerator
from .settings import GenerationSettings
