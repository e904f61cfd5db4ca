"""Medical profile domain models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HIGH_BLOOD_PRESSURE = "High Blood Pressure"
TYPE_2_DIABETES = "Type 2 Diabetes"
HEART_DISEASE = "Heart Disease"

COMMON_CONDITIONS = (
    "Type 1 Diabetes",
    TYPE_2_DIABETES,
    HIGH_BLOOD_PRESSURE,
    "Kidney Disease",
    HEART_DISEASE,
    "High Cholesterol",
    "Obesity",
)
COMMON_ALLERGIES = ("Nuts", "Dairy", "Gluten", "Shellfish", "Eggs", "Soy")
COMMON_RESTRICTIONS = (
    "Vegetarian",
    "Vegan",
    "Low Sodium",
    "Low Sugar",
    "Low Carb",
    "Halal",
    "Kosher",
)


class Language(StrEnum):
    """Supported interface languages."""

    EN = "en"
    UR = "ur"


class Profile(BaseModel):
    """User-entered medical and dietary attributes for one session."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    conditions: frozenset[str] = frozenset()
    medications: tuple[str, ...] = ()
    allergies: frozenset[str] = frozenset()
    dietary_restrictions: frozenset[str] = frozenset()
    target_calories: int = Field(default=2000, gt=0)
    sodium_limit: int = Field(default=2300, gt=0)
    sugar_limit: int = Field(default=50, gt=0)
    age: int = Field(default=30, ge=0)
    weight: float = Field(default=70, gt=0)
    height: float = Field(default=170, gt=0)

    def has_condition(self, condition: str) -> bool:
        """Return true when the profile lists the exact condition name."""
        return condition in self.conditions

    @property
    def bmi(self) -> float:
        """Body mass index from weight (kg) and height (cm)."""
        meters = self.height / 100
        return self.weight / (meters * meters)

    def conditions_label(self, empty: str = "None") -> str:
        """Return conditions as a stable, comma-separated string."""
        return ", ".join(sorted(self.conditions)) or empty
