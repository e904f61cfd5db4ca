"""Tests for the offline chat responder."""

from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import HIGH_BLOOD_PRESSURE, TYPE_2_DIABETES, Profile
from nutricare.services.chat_responder import ChatResponder, bmi_category


def test_sodium_question_mentions_personal_limit() -> None:
    reply = ChatResponder().respond(
        "How can I reduce sodium in my diet?", Profile(sodium_limit=1500)
    )

    assert "1500" in reply


def test_sodium_reply_mentions_blood_pressure_and_last_meal() -> None:
    profile = Profile(conditions={HIGH_BLOOD_PRESSURE}, sodium_limit=2000)
    analysis = NutritionRecord(food_name="Ramen", sodium=1000)

    reply = ChatResponder().respond("too much salt?", profile, analysis)

    assert "Ramen" in reply
    assert "50%" in reply
    assert "blood pressure" in reply


def test_meal_plan_splits_target_calories() -> None:
    reply = ChatResponder().respond(
        "Give me a personalized meal plan for today", Profile(target_calories=2000)
    )

    assert "2000 calories" in reply
    assert "~500 kcal" in reply
    assert "~700 kcal" in reply


def test_weight_reply_includes_bmi() -> None:
    reply = ChatResponder().respond(
        "Is my weight ok?", Profile(weight=90, height=180)
    )

    assert "27.8" in reply
    assert "overweight" in reply


def test_avoid_reply_lists_condition_foods_and_allergies() -> None:
    profile = Profile(conditions={TYPE_2_DIABETES}, allergies={"Nuts"})

    reply = ChatResponder().respond("What should I avoid?", profile)

    assert "white bread" in reply
    assert "Nuts" in reply


def test_sodium_outranks_weight_keywords() -> None:
    reply = ChatResponder().respond(
        "Will sodium affect my weight loss? I want to lose weight, what is my bmi?",
        Profile(sodium_limit=1500),
    )

    assert "Your daily sodium limit is 1500mg" in reply
    assert "BMI" not in reply


def test_first_matching_intent_in_priority_order_wins() -> None:
    responder = ChatResponder()

    sugar = responder.select_intent("sugar and sweet snacks for weight")
    meal_plan = responder.select_intent("lose weight with a meal plan and less salt")

    assert sugar is not None
    assert sugar.name == "sugar"
    assert meal_plan is not None
    assert meal_plan.name == "meal_plan"


def test_unmatched_question_gets_profile_summary() -> None:
    profile = Profile(age=52, weight=90, height=170, conditions={HIGH_BLOOD_PRESSURE})

    reply = ChatResponder().respond("Tell me something", profile)

    assert '"Tell me something"' in reply
    assert "age 52" in reply
    assert "weight 90kg" in reply
    assert "High Blood Pressure" in reply
    assert "your health profile" in reply


def test_unmatched_question_mentions_current_analysis() -> None:
    reply = ChatResponder().respond(
        "Thoughts?", Profile(), NutritionRecord(food_name="Pasta")
    )

    assert "your food analysis of Pasta" in reply


def test_bmi_categories() -> None:
    assert bmi_category(17.0) == "underweight"
    assert bmi_category(22.0) == "in the normal range"
    assert bmi_category(27.5) == "overweight"
    assert bmi_category(31.0) == "obese"
