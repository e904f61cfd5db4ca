"""Nutrition domain models."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

NUMERIC_FIELDS = ("calories", "sodium", "sugar", "carbs", "protein", "fiber")
DEFAULT_FOOD_NAME = "Unknown Food"
DEFAULT_HEALTH_SCORE = 50
MIN_HEALTH_SCORE = 10
MAX_HEALTH_SCORE = 100


def clamp_health_score(value: float) -> int:
    """Clamp a raw score into the supported health score range."""
    return max(MIN_HEALTH_SCORE, min(MAX_HEALTH_SCORE, round(value)))


class NutritionRecord(BaseModel):
    """Nutrient values plus derived score and alerts for one analyzed food."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    food_name: str = DEFAULT_FOOD_NAME
    calories: float = 0
    sodium: float = 0
    sugar: float = 0
    carbs: float = 0
    protein: float = 0
    fiber: float = 0
    health_score: int = DEFAULT_HEALTH_SCORE
    risks: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @field_validator("health_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return clamp_health_score(value)
        return value


class ParseSource(StrEnum):
    """Which strategy produced a parsed nutrition record."""

    JSON = "json"
    HEURISTIC = "heuristic"
    DEFAULT = "default"


@dataclass(frozen=True)
class ParsedNutrition:
    """Decoded nutrition record with a report of what was actually found."""

    record: NutritionRecord
    source: ParseSource
    fields_found: frozenset[str]
    # Score, risks and warnings the reply supplied itself.
    derived_found: frozenset[str] = frozenset()

    @property
    def confidence(self) -> float:
        """Share of numeric fields present in the AI reply."""
        return len(self.fields_found) / len(NUMERIC_FIELDS)

    @property
    def is_valid(self) -> bool:
        """True when at least one numeric field came from the reply."""
        return bool(self.fields_found)

    def was_reported(self, field_name: str) -> bool:
        """Distinguish a reported zero from a missing field."""
        return field_name in self.fields_found
