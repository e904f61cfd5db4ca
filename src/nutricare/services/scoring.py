"""Health score, risk and warning heuristics."""

from nutricare.domain.health import NutrientAlert, ScoreBand
from nutricare.domain.nutrition import NutritionRecord, clamp_health_score
from nutricare.domain.profile import HIGH_BLOOD_PRESSURE, TYPE_2_DIABETES, Profile

_MEAL_CALORIE_SHARE = 0.4
_RISK_LIMIT_SHARE = 0.5

_PRESSURE_SODIUM_MG = 600
_DIABETES_SUGAR_G = 25
_SUGAR_SPIKE_G = 20
_PRESSURE_SPIKE_SODIUM_MG = 800

_HEALTHY_SCORE = 70
_MODERATE_SCORE = 40


def calculate_health_score(nutrition: NutritionRecord, profile: Profile) -> int:
    """Score a food from 10 to 100 against the profile using hard cutoffs."""
    score = 100
    if profile.has_condition(HIGH_BLOOD_PRESSURE) and (
        nutrition.sodium > _PRESSURE_SODIUM_MG
    ):
        score -= 30
    if profile.has_condition(TYPE_2_DIABETES) and nutrition.sugar > _DIABETES_SUGAR_G:
        score -= 25
    if _exceeds_meal_calories(nutrition, profile):
        score -= 20
    return clamp_health_score(score)


def generate_risks(nutrition: NutritionRecord, profile: Profile) -> list[str]:
    """Return soft flags for nutrients above a share of personal limits."""
    risks: list[str] = []
    if nutrition.sodium > profile.sodium_limit * _RISK_LIMIT_SHARE:
        risks.append("High sodium content")
    if nutrition.sugar > profile.sugar_limit * _RISK_LIMIT_SHARE:
        risks.append("High sugar content")
    if _exceeds_meal_calories(nutrition, profile):
        risks.append("High calorie content")
    return risks


def generate_warnings(nutrition: NutritionRecord, profile: Profile) -> list[str]:
    """Return condition-specific alerts about likely physiological impact."""
    warnings: list[str] = []
    if profile.has_condition(TYPE_2_DIABETES) and nutrition.sugar > _SUGAR_SPIKE_G:
        warnings.append("May cause blood sugar spike")
    if profile.has_condition(HIGH_BLOOD_PRESSURE) and (
        nutrition.sodium > _PRESSURE_SPIKE_SODIUM_MG
    ):
        warnings.append("May increase blood pressure")
    return warnings


def nutrient_alerts(nutrition: NutritionRecord, profile: Profile) -> list[NutrientAlert]:
    """Return alerts for nutrients exceeding the user's daily limits."""
    alerts: list[NutrientAlert] = []
    if nutrition.sodium > profile.sodium_limit:
        alerts.append(
            NutrientAlert(
                type="sodium",
                message=(
                    f"Sodium ({nutrition.sodium:g}mg) exceeds your daily limit "
                    f"of {profile.sodium_limit}mg"
                ),
                severity="high",
            )
        )
    if nutrition.sugar > profile.sugar_limit:
        alerts.append(
            NutrientAlert(
                type="sugar",
                message=(
                    f"Sugar ({nutrition.sugar:g}g) exceeds your daily limit "
                    f"of {profile.sugar_limit}g"
                ),
                severity="high",
            )
        )
    if _exceeds_meal_calories(nutrition, profile):
        alerts.append(
            NutrientAlert(
                type="calories",
                message=(
                    f"High calorie content ({nutrition.calories:g}) "
                    "for a single meal"
                ),
                severity="medium",
            )
        )
    return alerts


def score_band(score: int) -> ScoreBand:
    """Map a health score onto its display band."""
    if score >= _HEALTHY_SCORE:
        return ScoreBand.HEALTHY
    if score >= _MODERATE_SCORE:
        return ScoreBand.MODERATE
    return ScoreBand.HIGH_RISK


def with_derived_fields(
    nutrition: NutritionRecord, profile: Profile, *, keep: frozenset[str] = frozenset()
) -> NutritionRecord:
    """Recompute score, risks and warnings, except for fields listed in keep."""
    update: dict[str, object] = {}
    if "health_score" not in keep:
        update["health_score"] = calculate_health_score(nutrition, profile)
    if "risks" not in keep:
        update["risks"] = tuple(generate_risks(nutrition, profile))
    if "warnings" not in keep:
        update["warnings"] = tuple(generate_warnings(nutrition, profile))
    return nutrition.model_copy(update=update)


def _exceeds_meal_calories(nutrition: NutritionRecord, profile: Profile) -> bool:
    return nutrition.calories > profile.target_calories * _MEAL_CALORIE_SHARE
