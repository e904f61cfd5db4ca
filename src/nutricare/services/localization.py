"""User-facing notices and fallback advice in English and Urdu."""

from nutricare.domain.profile import Language, Profile

NOTICES: dict[Language, dict[str, str]] = {
    Language.EN: {
        "upload_first": "Please upload an image first",
        "analysis_complete": "Food analysis complete!",
        "analysis_error": "Failed to analyze food. Please try again.",
        "analysis_required": "Analyze a food before requesting alternatives.",
        "no_alternatives": (
            "This food aligns well with your health goals. Keep up the good work!"
        ),
        "session_busy": "Please wait for the current request to finish.",
        "session_not_found": "Session not found or expired.",
    },
    Language.UR: {
        "upload_first": "براہ کرم پہلے تصویر اپ لوڈ کریں",
        "analysis_complete": "کھانے کا تجزیہ مکمل!",
        "analysis_error": "کھانے کا تجزیہ نہیں ہو سکا۔ براہ کرم دوبارہ کوشش کریں۔",
        "analysis_required": "متبادل دیکھنے سے پہلے کھانے کا تجزیہ کریں۔",
        "no_alternatives": "یہ کھانا آپ کے صحت کے اہداف کے مطابق ہے۔ بہت خوب!",
        "session_busy": "براہ کرم موجودہ درخواست مکمل ہونے کا انتظار کریں۔",
        "session_not_found": "سیشن نہیں ملا یا ختم ہو گیا۔",
    },
}

SUGGESTED_QUESTIONS: dict[Language, tuple[str, ...]] = {
    Language.EN: (
        "What are healthy meal alternatives for my condition?",
        "How can I reduce sodium in my diet?",
        "What foods should I avoid with my health profile?",
        "Give me a personalized meal plan for today",
    ),
    Language.UR: (
        "میری حالت کے لیے صحت مند کھانے کے متبادل کیا ہیں؟",
        "میں اپنی خوراک میں سوڈیم کیسے کم کروں؟",
        "میرے صحت پروفائل کے ساتھ مجھے کون سے کھانے سے بچنا چاہیے؟",
        "آج کے لیے مجھے ذاتی کھانے کا منصوبہ دیں",
    ),
}


def notice(key: str, language: Language) -> str:
    """Return a localized notice, falling back to English."""
    return NOTICES[language].get(key) or NOTICES[Language.EN][key]


def credentials_fallback(question: str, profile: Profile, language: Language) -> str:
    """Advice returned when the assistant rejects or lacks an API key."""
    if language == Language.UR:
        return (
            "API key کا مسئلہ ہے۔ برائے کرم اپنی API key کی configuration چیک کریں۔\n\n"
            f'آپ کے سوال "{question}" کے لیے عمومی مشورہ:\n\n'
            f"سوڈیم کمی کے لیے (آپ کی حد: {profile.sodium_limit}mg/دن):\n"
            "• گھر میں تازہ جڑی بوٹیوں کا استعمال کریں\n"
            "• غذائی لیبل پڑھیں\n\n"
            "برائے کرم اپنی API key چیک کرکے دوبارہ کوشش کریں۔"
        )
    return (
        "API key issue detected. Please check your API key configuration. "
        "The system is currently unable to connect to the AI service.\n\n"
        f'For immediate help with your question "{question}", '
        "here's general advice:\n\n"
        f"For sodium reduction (your limit: {profile.sodium_limit}mg/day):\n"
        "• Cook at home using fresh herbs and spices\n"
        "• Read nutrition labels - look for <140mg per serving\n"
        "• Choose fresh vegetables over canned\n\n"
        "Please verify your API key and try again."
    )


def connection_fallback(question: str, profile: Profile, language: Language) -> str:
    """Advice returned when the assistant cannot be reached."""
    if language == Language.UR:
        return (
            f'کنکٹیویٹی کا مسئلہ ہے۔ "{question}" کے لیے عمومی مشورہ:\n\n'
            f"سوڈیم کمی کے لیے (آپ کی حد: {profile.sodium_limit}mg/دن):\n"
            "• گھر میں تازہ جڑی بوٹیوں کا استعمال کریں\n"
            "• غذائی لیبل پڑھیں\n"
            "• تازہ سبزیاں منتخب کریں\n\n"
            "برائے کرم ایک لمحے میں دوبارہ کوشش کریں۔"
        )
    lines = [
        "Connection issue detected. While I'm having connectivity problems, "
        f'here\'s some general advice for "{question}":',
        "",
        f"For sodium reduction (your limit: {profile.sodium_limit}mg/day):",
        "• Cook at home using fresh herbs and spices",
        "• Read nutrition labels - look for <140mg per serving",
        "• Choose fresh vegetables over canned",
        "• Limit processed and restaurant foods",
        "• Use lemon, garlic, and herbs for flavor",
    ]
    if any("pressure" in condition.lower() for condition in profile.conditions):
        lines.extend(
            ["", "This is especially important for blood pressure management."]
        )
    lines.extend(["", "Please try your question again in a moment."])
    return "\n".join(lines)
