"""Alternative food suggestion models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AlternativeFood(BaseModel):
    """Catalog entry for a healthier meal option."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str
    health_score: int
    calories: float
    sodium: float
    sugar: float
    benefits: tuple[str, ...]
    description: str


class AlternativeSuggestions(BaseModel):
    """Filtered alternatives for the current food."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    alternatives: tuple[AlternativeFood, ...]
    no_alternatives_needed: bool
