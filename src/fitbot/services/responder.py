"""Keyword-driven fitness replies that need no network access."""

from dataclasses import dataclass

from fitbot.domain.chat import ResponderResult
from fitbot.domain.health import (
    ACTIVITY_LEVELS,
    bmi,
    bmi_advice,
    bmi_category,
    nutrition_advice,
)
from fitbot.domain.models import UserProfile

GREETING = (
    "Hello! I'm Fit Bot, your personal nutrition and fitness assistant. "
    "I can help you track your daily nutrient intake and provide personalized "
    "advice based on your BMI and activity level. What would you like to know?"
)
BMI_NEEDS_MEASUREMENTS = (
    "I need your weight (in kg) and height (in cm) to calculate your BMI. "
    "Please provide these details."
)
ADVICE_NEEDS_PROFILE = (
    "I need your complete profile (weight, height, age, gender, and activity "
    "level) to provide personalized nutrition advice. Please provide these details."
)
HELP_TEXT = (
    "I can help you with:\n"
    "• Calculate your BMI\n"
    "• Provide personalized nutrition advice\n"
    "• Explain activity levels\n"
    "• Track your daily nutrient intake\n\n"
    "Just ask me about any of these topics!"
)
DEFAULT_RESPONSE = (
    "I'm here to help with your nutrition and fitness goals! You can ask me "
    "about BMI calculation, nutrition advice, activity levels, or general "
    "fitness tips. What would you like to know?"
)

_GREETING_KEYWORDS = ("hello", "hi", "hey")
_BMI_KEYWORDS = ("bmi", "calculate")
_ADVICE_KEYWORDS = ("nutrition", "diet", "calories", "advice")
_ACTIVITY_KEYWORDS = ("activity", "exercise")
_HELP_KEYWORDS = ("help", "what can you do")


@dataclass
class RuleBasedResponder:
    """Match a message against fixed intents in priority order."""

    def reply(self, message: str, profile: UserProfile) -> ResponderResult:
        """Return the first matching canned or templated reply."""
        text = message.lower()
        if _contains_any(text, _GREETING_KEYWORDS):
            return ResponderResult(GREETING, matched=True)
        if _contains_any(text, _BMI_KEYWORDS):
            return ResponderResult(_bmi_reply(profile), matched=True)
        if _contains_any(text, _ADVICE_KEYWORDS):
            return ResponderResult(_advice_reply(profile), matched=True)
        if _contains_any(text, _ACTIVITY_KEYWORDS):
            return ResponderResult(_activity_reply(), matched=True)
        if _contains_any(text, _HELP_KEYWORDS):
            return ResponderResult(HELP_TEXT, matched=True)
        return ResponderResult(DEFAULT_RESPONSE, matched=False)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _bmi_reply(profile: UserProfile) -> str:
    if not profile.has_measurements():
        return BMI_NEEDS_MEASUREMENTS
    value = bmi(float(profile.weight_kg), float(profile.height_cm))
    category = bmi_category(value)
    return f"Your BMI is {value:.1f} ({category}). {bmi_advice(category)}"


def _advice_reply(profile: UserProfile) -> str:
    if not profile.is_complete():
        return ADVICE_NEEDS_PROFILE
    advice = nutrition_advice(profile)
    lines = [
        "Based on your profile:",
        f"• Daily calorie needs: {advice.daily_calories} calories",
        f"• BMI: {advice.bmi:.1f} ({advice.bmi_category})",
        "",
        "Recommendations:",
    ]
    lines.extend(f"• {item}" for item in advice.recommendations)
    return "\n".join(lines) + "\n"


def _activity_reply() -> str:
    lines = ["Activity levels and their multipliers:"]
    for level in ACTIVITY_LEVELS.values():
        lines.append(f"• {level.name}: {level.description} ({level.multiplier}x BMR)")
    return "\n".join(lines) + "\n"
