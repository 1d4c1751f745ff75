"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitbot.domain.nutrition import DailyGoals, NutritionGoal
from fitbot.services.nutrition import NutritionGoalRepository


@dataclass
class SupabaseNutritionGoalRepository(NutritionGoalRepository):
    """Supabase implementation for nutrition goals, one row per user."""

    client: Client

    def get_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the stored goal for a user."""
        response = (
            self.client.table("nutrition_goals")
            .select(
                "user_id, calories, protein, fat, carbohydrates, fiber, sodium, "
                "goal_type, weekly_weight_goal, activity_level"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def upsert_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Insert or replace the user's goal row."""
        goals = goal.daily_goals
        response = (
            self.client.table("nutrition_goals")
            .upsert(
                {
                    "user_id": str(goal.user_id),
                    "calories": goals.calories,
                    "protein": goals.protein,
                    "fat": goals.fat,
                    "carbohydrates": goals.carbohydrates,
                    "fiber": goals.fiber,
                    "sodium": goals.sodium,
                    "goal_type": goal.goal_type,
                    "weekly_weight_goal": goal.weekly_weight_goal,
                    "activity_level": goal.activity_level,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save nutrition goals")
        return _parse_goal(response.data[0])


def _parse_goal(row: dict[str, object]) -> NutritionGoal:
    return NutritionGoal(
        user_id=UUID(str(row["user_id"])),
        daily_goals=DailyGoals(
            calories=float(row.get("calories") or 0),
            protein=_optional_float(row.get("protein")),
            fat=_optional_float(row.get("fat")),
            carbohydrates=_optional_float(row.get("carbohydrates")),
            fiber=_optional_float(row.get("fiber")),
            sodium=_optional_float(row.get("sodium")),
        ),
        goal_type=str(row.get("goal_type") or "maintain"),
        weekly_weight_goal=float(row.get("weekly_weight_goal") or 0),
        activity_level=str(row.get("activity_level") or "moderatelyActive"),
    )


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
