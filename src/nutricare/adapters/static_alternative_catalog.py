"""Built-in catalog of healthier meal options."""

from dataclasses import dataclass

from nutricare.domain.alternatives import AlternativeFood
from nutricare.services.alternatives import AlternativeCatalog

DEFAULT_ALTERNATIVES: tuple[AlternativeFood, ...] = (
    AlternativeFood(
        name="Grilled Chicken Salad",
        health_score=85,
        calories=320,
        sodium=480,
        sugar=4,
        benefits=("High protein", "Low sodium", "Rich in fiber"),
        description=(
            "Fresh greens with grilled chicken breast, cherry tomatoes, "
            "and light vinaigrette"
        ),
    ),
    AlternativeFood(
        name="Quinoa Buddha Bowl",
        health_score=88,
        calories=380,
        sodium=290,
        sugar=6,
        benefits=("Complete protein", "High fiber", "Low sodium"),
        description="Quinoa with roasted vegetables, avocado, and tahini dressing",
    ),
    AlternativeFood(
        name="Baked Salmon with Vegetables",
        health_score=92,
        calories=420,
        sodium=350,
        sugar=3,
        benefits=("Omega-3 fatty acids", "Heart healthy", "Anti-inflammatory"),
        description="Fresh salmon fillet with steamed broccoli and sweet potato",
    ),
    AlternativeFood(
        name="Turkey and Avocado Wrap",
        health_score=78,
        calories=340,
        sodium=520,
        sugar=5,
        benefits=("Lean protein", "Healthy fats", "Balanced nutrients"),
        description="Whole wheat wrap with sliced turkey, avocado, and mixed greens",
    ),
    AlternativeFood(
        name="Vegetable Stir-Fry with Brown Rice",
        health_score=82,
        calories=290,
        sodium=380,
        sugar=8,
        benefits=("High fiber", "Low calorie", "Nutrient dense"),
        description="Mixed vegetables stir-fried with minimal oil over brown rice",
    ),
)


@dataclass
class StaticAlternativeCatalog(AlternativeCatalog):
    """Catalog backed by a fixed in-memory list."""

    foods: tuple[AlternativeFood, ...] = DEFAULT_ALTERNATIVES

    def list_candidates(self) -> list[AlternativeFood]:
        """Return the fixed candidates in catalog order."""
        return list(self.foods)
