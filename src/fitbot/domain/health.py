"""Health metric formulas: BMI, BMR, daily calories and macro advice."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from fitbot.domain.models import UserProfile


@dataclass(frozen=True)
class ActivityLevel:
    """Activity level multiplier applied to BMR."""

    name: str
    multiplier: float
    description: str


@dataclass(frozen=True)
class BmiRange:
    """Half-open BMI range [minimum, maximum) with its headline advice."""

    category: str
    minimum: float
    maximum: float
    advice: str

    def contains(self, value: float) -> bool:
        return self.minimum <= value < self.maximum


ACTIVITY_LEVELS: dict[str, ActivityLevel] = {
    "sedentary": ActivityLevel("sedentary", 1.2, "Little or no exercise"),
    "lightlyActive": ActivityLevel(
        "lightlyActive", 1.375, "Light exercise 1-3 days/week"
    ),
    "moderatelyActive": ActivityLevel(
        "moderatelyActive", 1.55, "Moderate exercise 3-5 days/week"
    ),
    "veryActive": ActivityLevel("veryActive", 1.725, "Hard exercise 6-7 days/week"),
    "extremelyActive": ActivityLevel(
        "extremelyActive", 1.9, "Very hard exercise, physical job"
    ),
}
DEFAULT_ACTIVITY_LEVEL = "sedentary"

BMI_RANGES: tuple[BmiRange, ...] = (
    BmiRange("underweight", 0, 18.5, "Focus on healthy weight gain"),
    BmiRange("normal", 18.5, 25, "Maintain current healthy weight"),
    BmiRange("overweight", 25, 30, "Focus on gradual weight loss"),
    BmiRange(
        "obese",
        30,
        float("inf"),
        "Focus on significant weight loss and health improvement",
    ),
)
_FALLBACK_CATEGORY = "normal"

# grams of protein per kg of body weight
_PROTEIN_PER_KG = {
    "sedentary": 1.2,
    "lightlyActive": 1.4,
    "moderatelyActive": 1.6,
    "veryActive": 1.8,
}
_PROTEIN_PER_KG_DEFAULT = 2.2
_FAT_CALORIE_SHARE = 0.25

_CATEGORY_TIPS = {
    "underweight": (
        "Focus on nutrient-dense foods like nuts, avocados, and lean proteins",
        "Consider adding healthy snacks between meals",
    ),
    "normal": (
        "Maintain a balanced diet with plenty of fruits and vegetables",
        "Stay hydrated with at least 8 glasses of water daily",
    ),
    "overweight": (
        "Create a moderate calorie deficit (300-500 calories below maintenance)",
        "Focus on whole foods and limit processed foods",
    ),
    "obese": (
        "Work with a healthcare provider for a safe weight loss plan",
        "Start with small, sustainable changes to diet and activity",
    ),
}
_SEDENTARY_TIPS = (
    "Start with 10-15 minutes of daily walking",
    "Consider standing desk or regular movement breaks",
)
_HIGH_ACTIVITY_TIPS = (
    "Ensure adequate recovery with proper sleep and nutrition",
    "Consider electrolyte replacement during intense workouts",
)


@dataclass(frozen=True)
class NutritionAdvice:
    """Personalised calorie target, macro split and advice bullets."""

    bmi: float
    bmr: float
    daily_calories: int
    bmi_category: str
    protein_g: int
    fat_g: int
    fat_calories: int
    carbs_g: int
    carb_calories: int
    recommendations: tuple[str, ...]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going away from zero instead of to even."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def bmi(weight_kg: float, height_cm: float) -> float:
    """Return body mass index rounded to one decimal."""
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender.lower() == "male" else base - 161


def bmi_category(value: float) -> str:
    """Return the BMI category whose range contains the value."""
    for bmi_range in BMI_RANGES:
        if bmi_range.contains(value):
            return bmi_range.category
    return _FALLBACK_CATEGORY


def bmi_advice(category: str) -> str:
    """Return the headline advice for a BMI category."""
    for bmi_range in BMI_RANGES:
        if bmi_range.category == category:
            return bmi_range.advice
    return ""


def activity_multiplier(activity_level: str | None) -> float:
    """Return the BMR multiplier, defaulting to sedentary for unknown levels."""
    level = ACTIVITY_LEVELS.get(activity_level or "")
    if level is None:
        level = ACTIVITY_LEVELS[DEFAULT_ACTIVITY_LEVEL]
    return level.multiplier


def daily_calories(bmr_value: float, activity_level: str | None) -> int:
    """Return total daily energy expenditure in whole calories."""
    return int(round_half_up(bmr_value * activity_multiplier(activity_level)))


def nutrition_advice(profile: UserProfile) -> NutritionAdvice:
    """Build the macro split and advice bullets for a complete profile."""
    weight = float(profile.weight_kg or 0)
    height = float(profile.height_cm or 0)
    activity_level = profile.activity_level or DEFAULT_ACTIVITY_LEVEL
    bmi_value = bmi(weight, height)
    bmr_value = bmr(weight, height, int(profile.age or 0), profile.gender or "")
    calories = daily_calories(bmr_value, activity_level)
    category = bmi_category(bmi_value)

    protein_g = int(
        round_half_up(
            weight * _PROTEIN_PER_KG.get(activity_level, _PROTEIN_PER_KG_DEFAULT)
        )
    )
    fat_calories = int(round_half_up(calories * _FAT_CALORIE_SHARE))
    fat_g = int(round_half_up(fat_calories / 9))
    carb_calories = calories - protein_g * 4 - fat_calories
    carbs_g = int(round_half_up(carb_calories / 4))

    recommendations = [
        f"Protein: {protein_g}g per day ({protein_g * 4} calories)",
        f"Fat: {fat_g}g per day ({fat_calories} calories)",
        f"Carbohydrates: {carbs_g}g per day ({carb_calories} calories)",
        *_CATEGORY_TIPS.get(category, ()),
    ]
    if activity_level == "sedentary":
        recommendations.extend(_SEDENTARY_TIPS)
    elif activity_level in {"veryActive", "extremelyActive"}:
        recommendations.extend(_HIGH_ACTIVITY_TIPS)

    return NutritionAdvice(
        bmi=bmi_value,
        bmr=bmr_value,
        daily_calories=calories,
        bmi_category=category,
        protein_g=protein_g,
        fat_g=fat_g,
        fat_calories=fat_calories,
        carbs_g=carbs_g,
        carb_calories=carb_calories,
        recommendations=tuple(recommendations),
    )
