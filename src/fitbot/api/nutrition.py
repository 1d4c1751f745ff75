"""Nutrition goals and daily summary endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fitbot.api.auth import current_user
from fitbot.api.models import NutritionGoalsRequest  # noqa: TC001
from fitbot.domain.models import UserRecord  # noqa: TC001
from fitbot.domain.nutrition import DailyGoals

if TYPE_CHECKING:
    from fitbot.containers import AppContainer

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.post("/goals")
async def set_goals(
    body: NutritionGoalsRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Create or replace the user's goals."""
    container: AppContainer = request.app.state.container
    goal = container.nutrition_service.set_goals(
        user.id,
        DailyGoals(
            calories=body.calories,
            protein=body.protein,
            fat=body.fat,
            carbohydrates=body.carbohydrates,
            fiber=body.fiber,
            sodium=body.sodium,
        ),
        goal_type=body.goal_type,
        weekly_weight_goal=body.weekly_weight_goal,
        profile=user.profile,
    )
    return {
        "message": "Nutrition goals updated successfully",
        "goals": goal.to_payload(),
    }


@router.get("/goals")
async def get_goals(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return stored goals or defaults derived from the profile."""
    container: AppContainer = request.app.state.container
    return container.nutrition_service.get_goals(user.id, user.profile).to_payload()


@router.get("/daily")
async def daily_today(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return today's nutrition summary."""
    container: AppContainer = request.app.state.container
    summary = container.nutrition_service.daily_summary(
        user.id, datetime.now(tz=UTC).date(), user.profile
    )
    return summary.to_payload()


@router.get("/daily/{day}")
async def daily_for_day(
    day: date, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the nutrition summary for a calendar day."""
    container: AppContainer = request.app.state.container
    return container.nutrition_service.daily_summary(
        user.id, day, user.profile
    ).to_payload()
