"""Localized prompts for the nutrition assistant."""

from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import Language, Profile


def system_prompt(
    profile: Profile,
    language: Language,
    *,
    analysis: NutritionRecord | None = None,
    has_image: bool = False,
) -> str:
    """Build the assistant instructions with the user's medical profile."""
    if language == Language.UR:
        return _urdu_system_prompt(profile, analysis, has_image)
    return _english_system_prompt(profile, analysis, has_image)


def compose_prompt(
    question: str,
    profile: Profile,
    language: Language,
    *,
    analysis: NutritionRecord | None = None,
    has_image: bool = False,
) -> str:
    """Append the user's question to the system prompt."""
    instructions = system_prompt(
        profile, language, analysis=analysis, has_image=has_image
    )
    return f"{instructions}\n\nUser Question: {question}"


def analysis_prompt(language: Language) -> str:
    """Return the meal photo analysis request asking for JSON output."""
    if language == Language.UR:
        return _URDU_ANALYSIS_PROMPT
    return _ENGLISH_ANALYSIS_PROMPT


def _english_system_prompt(
    profile: Profile, analysis: NutritionRecord | None, has_image: bool
) -> str:
    lines = [
        "You are a helpful AI nutrition assistant. Provide personalized nutrition "
        "advice based on the user's medical profile. Be concise, helpful, and "
        "focus on practical advice.",
        "",
        "User's Medical Profile:",
        f"- Age: {profile.age} years",
        f"- Weight: {profile.weight:g} kg",
        f"- Height: {profile.height:g} cm",
        f"- Target Calories: {profile.target_calories}/day",
        f"- Sodium Limit: {profile.sodium_limit}mg/day",
        f"- Sugar Limit: {profile.sugar_limit}g/day",
        f"- Health Conditions: {profile.conditions_label()}",
        f"- Allergies: {_join(profile.allergies, 'None')}",
        f"- Dietary Restrictions: {_join(profile.dietary_restrictions, 'None')}",
        f"- Medications: {', '.join(profile.medications) or 'None'}",
    ]
    if analysis is not None:
        lines.append(
            f"- Recent Food Analysis: {analysis.food_name} "
            f"({analysis.calories:g} calories, "
            f"{analysis.health_score}/100 health score)"
        )
    if has_image:
        lines.append("- User has uploaded an image for analysis")
        closing = (
            "Analyze the food in the uploaded image and provide personalized "
            "advice based on their medical profile."
        )
    else:
        closing = "Provide advice in English."
    lines.extend(
        [
            "",
            f"{closing} Keep responses under 300 words and focus on actionable "
            "recommendations.",
        ]
    )
    return "\n".join(lines)


def _urdu_system_prompt(
    profile: Profile, analysis: NutritionRecord | None, has_image: bool
) -> str:
    lines = [
        "آپ ایک مددگار اے آئی غذائی مشیر ہیں۔ صارف کے طبی پروفائل کی بنیاد پر ذاتی "
        "غذائی مشورہ فراہم کریں۔ مختصر، مددگار رہیں اور عملی مشورے پر توجہ دیں۔",
        "",
        "صارف کا طبی پروفائل:",
        f"- عمر: {profile.age} سال",
        f"- وزن: {profile.weight:g} کلو",
        f"- قد: {profile.height:g} سینٹی میٹر",
        f"- ہدف کیلوریز: {profile.target_calories}/دن",
        f"- سوڈیم کی حد: {profile.sodium_limit}mg/دن",
        f"- چینی کی حد: {profile.sugar_limit}g/دن",
        f"- صحت کی حالات: {profile.conditions_label('کوئی نہیں')}",
        f"- الرجی: {_join(profile.allergies, 'کوئی نہیں')}",
    ]
    if analysis is not None:
        lines.append(
            f"- حالیہ کھانے کا تجزیہ: {analysis.food_name} "
            f"({analysis.calories:g} کیلوریز، {analysis.health_score}/100 صحت کا اسکور)"
        )
    if has_image:
        lines.append("- صارف نے تجزیے کے لیے ایک تصویر اپ لوڈ کی ہے")
        closing = (
            "اپ لوڈ کی گئی تصویر میں موجود کھانے کا تجزیہ کریں اور ان کے طبی پروفائل "
            "کی بنیاد پر ذاتی مشورہ فراہم کریں۔"
        )
    else:
        closing = "اردو میں مشورہ فراہم کریں۔"
    lines.extend(
        [
            "",
            f"{closing} جوابات 300 الفاظ سے کم رکھیں اور قابل عمل سفارشات پر توجہ دیں۔",
        ]
    )
    return "\n".join(lines)


def _join(values: frozenset[str], empty: str) -> str:
    return ", ".join(sorted(values)) or empty


_ENGLISH_ANALYSIS_PROMPT = """\
Please analyze this food image and provide detailed nutritional information. \
Return the analysis in this exact JSON format:

{
  "foodName": "Name of the food item",
  "calories": estimated_calories_number,
  "sodium": estimated_sodium_in_mg,
  "sugar": estimated_sugar_in_grams,
  "carbs": estimated_carbs_in_grams,
  "protein": estimated_protein_in_grams,
  "fiber": estimated_fiber_in_grams
}

Be as accurate as possible with the nutritional estimates based on what you can \
see in the image. If you can see multiple food items, provide the total for the \
entire meal."""

_URDU_ANALYSIS_PROMPT = """\
براہ کرم اس کھانے کی تصویر کا تجزیہ کریں اور تفصیلی غذائی معلومات فراہم کریں۔ \
تجزیہ اس بالکل JSON فارمیٹ میں واپس کریں:

{
  "foodName": "کھانے کی اشیاء کا نام",
  "calories": estimated_calories_number,
  "sodium": estimated_sodium_in_mg,
  "sugar": estimated_sugar_in_grams,
  "carbs": estimated_carbs_in_grams,
  "protein": estimated_protein_in_grams,
  "fiber": estimated_fiber_in_grams
}

تصویر میں جو کچھ آپ دیکھ سکتے ہیں اس کی بنیاد پر غذائی تخمینے میں جتنا درست ہو سکیں۔ \
اگر آپ متعدد کھانے کی اشیاء دیکھ سکتے ہیں تو پورے کھانے کا کل فراہم کریں۔"""
