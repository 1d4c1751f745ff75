"""Daily nutrition summaries and goals."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitbot.domain.errors import NotFoundError, ValidationError
from fitbot.domain.models import UserProfile
from fitbot.domain.nutrition import (
    GOAL_TYPES,
    DailyGoals,
    MealGroup,
    NutrientTotals,
    NutritionGoal,
    daily_totals,
    default_goals,
    entries_for_day,
    goal_progress,
    meal_breakdown,
)
from fitbot.services.food_log import FoodLogRepository

DEFAULT_GOAL_ACTIVITY_LEVEL = "moderatelyActive"


class NutritionGoalRepository(Protocol):
    """Persistence interface for per-user nutrition goals."""

    def get_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the stored goal for a user, if any."""

    def upsert_goal(self, goal: NutritionGoal) -> NutritionGoal:
        """Create or replace the user's goal."""


@dataclass(frozen=True)
class DailySummary:
    """Totals, per-meal breakdown and goal progress for one day."""

    day: date
    totals: NutrientTotals
    meals: dict[str, MealGroup]
    total_entries: int
    goals: NutritionGoal | None = None
    progress: dict[str, int] | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "date": self.day.isoformat(),
            "totalNutrition": self.totals.to_payload(),
            "mealBreakdown": {
                meal_type: group.to_payload() for meal_type, group in self.meals.items()
            },
            "totalEntries": self.total_entries,
            "goals": self.goals.daily_goals.to_payload() if self.goals else None,
            "progress": self.progress,
        }


@dataclass
class NutritionService:
    """Aggregate logged food against the user's goals."""

    food_log_repository: FoodLogRepository
    goal_repository: NutritionGoalRepository

    def daily_summary(
        self, user_id: UUID, day: date, profile: UserProfile | None = None
    ) -> DailySummary:
        """Build the summary for a calendar day."""
        entries = entries_for_day(
            self.food_log_repository.list_entries(user_id, day), day
        )
        totals = daily_totals(entries, day)
        goal = self._resolve_goal(user_id, profile or UserProfile())
        return DailySummary(
            day=day,
            totals=totals,
            meals=meal_breakdown(entries),
            total_entries=len(entries),
            goals=goal,
            progress=goal_progress(totals, goal.daily_goals) if goal else None,
        )

    def get_goals(self, user_id: UUID, profile: UserProfile) -> NutritionGoal:
        """Return stored goals, or goals derived from a complete profile."""
        goal = self._resolve_goal(user_id, profile)
        if goal is None:
            raise NotFoundError("No nutrition goals set and no profile available")
        return goal

    def set_goals(
        self,
        user_id: UUID,
        daily_goals: DailyGoals,
        goal_type: str = "maintain",
        weekly_weight_goal: float = 0,
        profile: UserProfile | None = None,
    ) -> NutritionGoal:
        """Create or replace the user's goals."""
        if not daily_goals.calories:
            raise ValidationError("Daily calorie goal is required")
        if goal_type not in GOAL_TYPES:
            raise ValidationError(f"Goal type must be one of: {', '.join(GOAL_TYPES)}")
        activity_level = (profile.activity_level if profile else None) or (
            DEFAULT_GOAL_ACTIVITY_LEVEL
        )
        return self.goal_repository.upsert_goal(
            NutritionGoal(
                user_id=user_id,
                daily_goals=daily_goals,
                goal_type=goal_type,
                weekly_weight_goal=weekly_weight_goal,
                activity_level=activity_level,
            )
        )

    def _resolve_goal(self, user_id: UUID, profile: UserProfile) -> NutritionGoal | None:
        stored = self.goal_repository.get_goal(user_id)
        if stored is not None:
            return stored
        if not profile.is_complete():
            return None
        return NutritionGoal(
            user_id=user_id,
            daily_goals=default_goals(profile),
            activity_level=profile.activity_level or DEFAULT_GOAL_ACTIVITY_LEVEL,
            is_default=True,
        )
