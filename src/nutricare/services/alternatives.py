"""Healthier alternative suggestions."""

from dataclasses import dataclass
from typing import Protocol

from nutricare.domain.alternatives import AlternativeFood, AlternativeSuggestions
from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import (
    HEART_DISEASE,
    HIGH_BLOOD_PRESSURE,
    TYPE_2_DIABETES,
    Profile,
)

_CONDITION_BENEFITS = (
    (HIGH_BLOOD_PRESSURE, "Blood pressure friendly"),
    (TYPE_2_DIABETES, "Diabetic friendly"),
    (HEART_DISEASE, "Heart healthy"),
)


class AlternativeCatalog(Protocol):
    """Source of candidate alternative foods."""

    def list_candidates(self) -> list[AlternativeFood]:
        """Return candidates in display order."""


@dataclass
class AlternativeService:
    """Filter catalog foods that score better than the current one."""

    catalog: AlternativeCatalog
    limit: int = 3

    def suggest(
        self, current: NutritionRecord, profile: Profile
    ) -> AlternativeSuggestions:
        """Return up to `limit` better-scoring foods in catalog order."""
        better = [
            candidate
            for candidate in self.catalog.list_candidates()
            if candidate.health_score > current.health_score
        ]
        alternatives = tuple(
            candidate.model_copy(
                update={"benefits": customize_benefits(candidate.benefits, profile)}
            )
            for candidate in better[: self.limit]
        )
        return AlternativeSuggestions(
            alternatives=alternatives,
            no_alternatives_needed=not alternatives,
        )


def customize_benefits(benefits: tuple[str, ...], profile: Profile) -> tuple[str, ...]:
    """Append condition-specific benefit tags."""
    extra = tuple(
        tag for condition, tag in _CONDITION_BENEFITS if profile.has_condition(condition)
    )
    return benefits + extra
