"""Food log and nutrition goal models with daily aggregation."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from fitbot.domain.foods import NutritionFacts
from fitbot.domain.health import bmr, daily_calories, round_half_up
from fitbot.domain.models import UserProfile

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
GOAL_TYPES = ("maintain", "lose", "gain")

DEFAULT_PROTEIN_PER_KG = 1.6
DEFAULT_FAT_SHARE = 0.25
DEFAULT_FIBER_G = 25
DEFAULT_SODIUM_MG = 2300


@dataclass(frozen=True)
class ServingSize:
    """Logged serving amount and unit."""

    amount: float
    unit: str = "g"


@dataclass(frozen=True)
class FoodSnapshot:
    """Point-in-time copy of the food shown to the user when logging."""

    name: str
    food_id: str | None = None
    brand: str = ""
    image_url: str | None = None


@dataclass(frozen=True)
class FoodLogEntry:
    """A logged serving with absolute nutrient amounts."""

    id: UUID
    user_id: UUID
    logged_on: date
    logged_at: datetime
    meal_type: str
    food: FoodSnapshot
    nutrition: NutritionFacts
    serving_size: ServingSize

    def to_payload(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "date": self.logged_on.isoformat(),
            "loggedAt": self.logged_at.isoformat(),
            "mealType": self.meal_type,
            "food": {
                "id": self.food.food_id,
                "name": self.food.name,
                "brand": self.food.brand,
                "imageUrl": self.food.image_url,
            },
            "nutrition": self.nutrition.to_payload(),
            "servingSize": {
                "amount": self.serving_size.amount,
                "unit": self.serving_size.unit,
            },
        }


@dataclass(frozen=True)
class NutrientTotals:
    """Daily sums of the tracked nutrients."""

    energy: float = 0
    protein: float = 0
    fat: float = 0
    carbohydrates: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0

    def to_payload(self) -> dict[str, float]:
        return {
            "energy": self.energy,
            "protein": self.protein,
            "fat": self.fat,
            "carbohydrates": self.carbohydrates,
            "fiber": self.fiber,
            "sugar": self.sugar,
            "sodium": self.sodium,
        }


@dataclass(frozen=True)
class MealGroup:
    """Entries logged for one meal type and their calorie sum."""

    items: list[FoodLogEntry] = field(default_factory=list)
    total_calories: float = 0

    def to_payload(self) -> dict[str, object]:
        return {
            "foods": [
                {
                    "id": str(entry.id),
                    "name": entry.food.name,
                    "calories": entry.nutrition.energy or 0,
                    "servingSize": {
                        "amount": entry.serving_size.amount,
                        "unit": entry.serving_size.unit,
                    },
                }
                for entry in self.items
            ],
            "totalCalories": self.total_calories,
        }


@dataclass(frozen=True)
class DailyGoals:
    """Daily nutrient targets."""

    calories: float
    protein: float | None = None
    fat: float | None = None
    carbohydrates: float | None = None
    fiber: float | None = None
    sodium: float | None = None

    def to_payload(self) -> dict[str, float | None]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "fat": self.fat,
            "carbohydrates": self.carbohydrates,
            "fiber": self.fiber,
            "sodium": self.sodium,
        }


@dataclass(frozen=True)
class NutritionGoal:
    """Per-user nutrition goal, either stored or derived from the profile."""

    user_id: UUID
    daily_goals: DailyGoals
    goal_type: str = "maintain"
    weekly_weight_goal: float = 0
    activity_level: str = "moderatelyActive"
    is_default: bool = False

    def to_payload(self) -> dict[str, object]:
        return {
            "dailyGoals": self.daily_goals.to_payload(),
            "goalType": self.goal_type,
            "weeklyWeightGoal": self.weekly_weight_goal,
            "activityLevel": self.activity_level,
            "isDefault": self.is_default,
        }


def entries_for_day(entries: list[FoodLogEntry], day: date) -> list[FoodLogEntry]:
    """Return the entries logged on a calendar day."""
    return [entry for entry in entries if entry.logged_on == day]


def daily_totals(entries: list[FoodLogEntry], day: date) -> NutrientTotals:
    """Sum nutrients for the entries logged on a calendar day."""
    sums = dict.fromkeys(NutrientTotals().to_payload(), 0.0)
    for entry in entries_for_day(entries, day):
        nutrition = entry.nutrition
        sums["energy"] += nutrition.energy or 0
        sums["protein"] += nutrition.protein or 0
        sums["fat"] += nutrition.fat or 0
        sums["carbohydrates"] += nutrition.carbohydrates or 0
        sums["fiber"] += nutrition.fiber or 0
        sums["sugar"] += nutrition.sugar or 0
        sums["sodium"] += nutrition.sodium or 0
    return NutrientTotals(**sums)


def meal_breakdown(entries: list[FoodLogEntry]) -> dict[str, MealGroup]:
    """Group entries by meal type; every meal type is always present."""
    breakdown: dict[str, MealGroup] = {}
    for meal_type in MEAL_TYPES:
        items = [entry for entry in entries if entry.meal_type == meal_type]
        breakdown[meal_type] = MealGroup(
            items=items,
            total_calories=sum(entry.nutrition.energy or 0 for entry in items),
        )
    return breakdown


def default_goals(profile: UserProfile) -> DailyGoals:
    """Derive daily goals from a complete profile."""
    weight = float(profile.weight_kg or 0)
    bmr_value = bmr(
        weight,
        float(profile.height_cm or 0),
        int(profile.age or 0),
        profile.gender or "",
    )
    calories = daily_calories(bmr_value, profile.activity_level)
    protein_calories = weight * DEFAULT_PROTEIN_PER_KG * 4
    fat_calories = calories * DEFAULT_FAT_SHARE
    return DailyGoals(
        calories=calories,
        protein=round_half_up(weight * DEFAULT_PROTEIN_PER_KG),
        fat=round_half_up(fat_calories / 9),
        carbohydrates=round_half_up((calories - protein_calories - fat_calories) / 4),
        fiber=DEFAULT_FIBER_G,
        sodium=DEFAULT_SODIUM_MG,
    )


def goal_progress(totals: NutrientTotals, goals: DailyGoals) -> dict[str, int]:
    """Return consumed amounts as whole percentages of each goal."""
    pairs = {
        "calories": (totals.energy, goals.calories),
        "protein": (totals.protein, goals.protein),
        "fat": (totals.fat, goals.fat),
        "carbohydrates": (totals.carbohydrates, goals.carbohydrates),
        "fiber": (totals.fiber, goals.fiber),
        # logged sodium is in grams, the goal in milligrams
        "sodium": (totals.sodium * 1000, goals.sodium),
    }
    progress: dict[str, int] = {}
    for name, (consumed, target) in pairs.items():
        if not target:
            progress[name] = 0
            continue
        progress[name] = int(round_half_up(consumed / target * 100))
    return progress
