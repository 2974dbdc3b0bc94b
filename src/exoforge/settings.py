"""Generation settings, validated with pydantic."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exoforge.base.traits import BodyTraitKind, Trait
from exoforge.base.types import GasGiantArrangement, LifeLevel


class SystemSettings(BaseModel):
    """Overrides for the layout of a star's bodies."""

    model_config = ConfigDict(frozen=True)

    fixed_gas_giant_arrangement: Optional[GasGiantArrangement] = None
    fixed_number_of_bodies: Optional[int] = Field(default=None, ge=0)
    moon_placement_attempts: int = Field(default=50, ge=1, le=1000)


class CelestialBodySettings(BaseModel):
    """Overrides for body composition, traits and climate."""

    model_config = ConfigDict(frozen=True)

    do_not_generate_gaseous: bool = False
    do_not_generate_icy: bool = False
    do_not_generate_rocky: bool = False
    do_not_generate_metallic: bool = False
    fixed_special_traits: List[Any] = Field(default_factory=list)
    forbidden_special_traits: List[BodyTraitKind] = Field(default_factory=list)
    assumed_life_level: LifeLevel = LifeLevel.NONE
    harmonics_tolerance: float = Field(default=0.03, gt=0.0, lt=0.5)

    @field_validator("fixed_special_traits")
    @classmethod
    def _check_traits(cls, traits: List[Any]) -> List[Any]:
        for trait in traits:
            if not isinstance(trait, Trait) or not isinstance(trait.kind, BodyTraitKind):
                raise ValueError(f"{trait!r} is not a body trait")
        return traits


class GenerationSettings(BaseModel):
    """Top level settings of a generation run."""

    model_config = ConfigDict(frozen=True)

    seed: str = "default"
    system: SystemSettings = Field(default_factory=SystemSettings)
    celestial_body: CelestialBodySettings = Field(default_factory=CelestialBodySettings)

    @field_validator("seed")
    @classmethod
    def _check_seed(cls, value: str) -> str:
        if not value:
            raise ValueError("seed must not be empty")
        return value

    def with_body_settings(self, **updates) -> "GenerationSettings":
        """Copy of the settings with some celestial body options replaced."""
        return self.model_copy(
            update={"celestial_body": self.celestial_body.model_copy(update=updates)}
        )
