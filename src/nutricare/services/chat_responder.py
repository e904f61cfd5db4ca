"""Offline chat responder built from canned, profile-aware templates.

Intents are listed in priority order. The first intent with any keyword in
the question wins.
"""

from collections.abc import Callable
from dataclasses import dataclass

from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import (
    HEART_DISEASE,
    HIGH_BLOOD_PRESSURE,
    TYPE_2_DIABETES,
    Profile,
)

Template = Callable[[Profile, NutritionRecord | None], str]

_MEAL_SPLIT = (
    ("Breakfast", 0.25, "oatmeal with berries and a boiled egg"),
    ("Lunch", 0.35, "grilled chicken salad with whole grain bread"),
    ("Dinner", 0.30, "baked salmon with steamed vegetables and brown rice"),
    ("Snack", 0.10, "a handful of unsalted nuts or fresh fruit"),
)


@dataclass(frozen=True)
class ChatIntent:
    """Keyword-triggered response template."""

    name: str
    keywords: tuple[str, ...]
    template: Template


def bmi_category(bmi: float) -> str:
    """Return the standard adult BMI category."""
    if bmi < 18.5:  # noqa: PLR2004
        return "underweight"
    if bmi < 25:  # noqa: PLR2004
        return "in the normal range"
    if bmi < 30:  # noqa: PLR2004
        return "overweight"
    return "obese"


def _condition_note(profile: Profile) -> str:
    notes = []
    if profile.has_condition(HIGH_BLOOD_PRESSURE):
        notes.append("keep salt low to support blood pressure control")
    if profile.has_condition(TYPE_2_DIABETES):
        notes.append("pair carbohydrates with protein to limit blood sugar spikes")
    if profile.has_condition(HEART_DISEASE):
        notes.append("favor unsaturated fats and limit fried foods")
    if not notes:
        return ""
    return "\n\nWith your conditions, " + "; ".join(notes) + "."


def _meal_plan(profile: Profile, analysis: NutritionRecord | None) -> str:
    lines = [f"Here's a sample meal plan for about {profile.target_calories} calories:"]
    for meal, share, suggestion in _MEAL_SPLIT:
        calories = round(profile.target_calories * share)
        lines.append(f"• {meal} (~{calories} kcal): {suggestion}")
    lines.append(
        f"\nKeep the day under {profile.sodium_limit}mg sodium "
        f"and {profile.sugar_limit}g sugar."
    )
    return "\n".join(lines) + _condition_note(profile)


def _sodium(profile: Profile, analysis: NutritionRecord | None) -> str:
    text = (
        f"Your daily sodium limit is {profile.sodium_limit}mg. To stay under it:\n"
        "• Cook at home using fresh herbs and spices\n"
        "• Read nutrition labels - look for <140mg per serving\n"
        "• Choose fresh vegetables over canned\n"
        "• Limit processed and restaurant foods"
    )
    if analysis is not None:
        share = analysis.sodium / profile.sodium_limit * 100
        text += (
            f"\n\nYour last meal ({analysis.food_name}) used about {share:.0f}% "
            "of that limit."
        )
    if profile.has_condition(HIGH_BLOOD_PRESSURE):
        text += "\n\nThis is especially important for blood pressure management."
    return text


def _sugar(profile: Profile, analysis: NutritionRecord | None) -> str:
    text = (
        f"Aim to keep added sugar below {profile.sugar_limit}g per day:\n"
        "• Swap sugary drinks for water or unsweetened tea\n"
        "• Choose whole fruit instead of juice\n"
        "• Check labels for hidden sugars such as syrups and dextrose"
    )
    if profile.has_condition(TYPE_2_DIABETES):
        text += (
            "\n\nWith Type 2 Diabetes, spreading carbohydrates evenly across "
            "meals helps keep blood sugar stable."
        )
    return text


def _weight(profile: Profile, analysis: NutritionRecord | None) -> str:
    bmi = profile.bmi
    return (
        f"Your BMI is {bmi:.1f}, which is {bmi_category(bmi)}. "
        f"A daily target of {profile.target_calories} calories with regular "
        "activity supports gradual, sustainable change of about 0.5kg per week. "
        "Prioritize protein and fiber to stay full longer."
    )


def _avoid(profile: Profile, analysis: NutritionRecord | None) -> str:
    avoid = ["heavily processed snacks", "sugary drinks"]
    if profile.has_condition(HIGH_BLOOD_PRESSURE):
        avoid.extend(["pickles", "instant noodles", "salty sauces"])
    if profile.has_condition(TYPE_2_DIABETES):
        avoid.extend(["white bread", "sweets and desserts"])
    if profile.has_condition(HEART_DISEASE):
        avoid.extend(["fried foods", "fatty red meat"])
    text = "Based on your profile, try to limit: " + ", ".join(avoid) + "."
    if profile.allergies:
        allergies = ", ".join(sorted(profile.allergies))
        text += f"\n\nAlways avoid foods containing your allergens: {allergies}."
    return text


def _healthy(profile: Profile, analysis: NutritionRecord | None) -> str:
    text = (
        "Healthy options that fit your profile include grilled chicken salad, "
        "quinoa bowls with roasted vegetables, and baked fish with greens."
    )
    if analysis is not None:
        text += (
            f"\n\nYour last meal, {analysis.food_name}, scored "
            f"{analysis.health_score}/100. Any of these would be a good swap."
        )
    return text + _condition_note(profile)


def _exercise(profile: Profile, analysis: NutritionRecord | None) -> str:
    return (
        f"At age {profile.age}, aim for at least 150 minutes of moderate activity "
        "per week, such as brisk walking, cycling or swimming, plus two sessions "
        "of strength training. Check with your doctor before starting a new "
        "routine, especially with "
        f"{profile.conditions_label('no known conditions')}."
    )


def generic_response(
    question: str, profile: Profile, analysis: NutritionRecord | None
) -> str:
    """Profile summary used when no intent matches."""
    context = (
        f"your food analysis of {analysis.food_name}"
        if analysis is not None
        else "your health profile"
    )
    return (
        f'Based on your question about "{question}" and {context}, considering '
        f"your health profile (age {profile.age}, weight {profile.weight:g}kg, "
        f"height {profile.height:g}cm, conditions: {profile.conditions_label()}), "
        "I recommend consulting with your healthcare provider for personalized "
        "medical advice."
    )


INTENTS: tuple[ChatIntent, ...] = (
    ChatIntent("meal_plan", ("meal plan", "plan for today", "menu"), _meal_plan),
    ChatIntent("sodium", ("sodium", "salt"), _sodium),
    ChatIntent("sugar", ("sugar", "sweet", "glucose"), _sugar),
    ChatIntent("weight", ("weight", "bmi", "lose"), _weight),
    ChatIntent("avoid", ("avoid", "stay away"), _avoid),
    ChatIntent("healthy", ("healthy", "alternative"), _healthy),
    ChatIntent("exercise", ("exercise", "workout", "activity"), _exercise),
)


@dataclass
class ChatResponder:
    """Pick the first matching intent and render its template."""

    intents: tuple[ChatIntent, ...] = INTENTS

    def select_intent(self, question: str) -> ChatIntent | None:
        """Return the highest-priority intent mentioned in the question, or None."""
        lowered = question.lower()
        for intent in self.intents:
            if any(keyword in lowered for keyword in intent.keywords):
                return intent
        return None

    def respond(
        self,
        question: str,
        profile: Profile,
        analysis: NutritionRecord | None = None,
    ) -> str:
        """Answer a question from templates interpolated with the profile."""
        intent = self.select_intent(question)
        if intent is None:
            return generic_response(question, profile, analysis)
        return intent.template(profile, analysis)
