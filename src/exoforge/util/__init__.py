__all__ = [
    "rng",
    "SeededDiceRoller",
    "GenerationContext",
    "RollToProcess",
    "WeightedResult",
    "SimpleRoll",
    "PreparedRoll",
    "ChemicalComponent",
    "ElementPresenceOccurrence",
    "components_liquid_at",
    "liquid_majority_composition_likelihood",
    "calculate_blackbody_temperature",
    "calculate_roche_limit",
    "calculate_hill_sphere_radius",
    "calculate_orbital_period",
    "calculate_day_length",
    "number_to_lowercase_letter",
]

from .dice import (
    rng,
    SeededDiceRoller,
    GenerationContext,
    RollToProcess,
    WeightedResult,
    SimpleRoll,
    PreparedRoll,
)
from .elements import (
    ChemicalComponent,
    ElementPresenceOccurrence,
    components_liquid_at,
    liquid_majority_composition_likelihood,
)
from .misc import (
    calculate_blackbody_temperature,
    calculate_roche_limit,
    calculate_hill_sphere_radius,
    calculate_orbital_period,
    calculate_day_length,
    number_to_lowercase_letter,
)
