"""Profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fitbot.api.auth import current_user
from fitbot.api.models import ProfileRequest  # noqa: TC001
from fitbot.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from fitbot.containers import AppContainer

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(user: UserRecord = Depends(current_user)) -> dict[str, object]:
    """Return the stored profile."""
    return {"profile": user.profile.to_payload()}


@router.post("")
async def update_profile(
    body: ProfileRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Store the profile and return BMI and daily calories."""
    container: AppContainer = request.app.state.container
    updated, stats = container.user_service.update_profile(user.id, body.to_profile())
    return {
        "message": "Profile updated successfully",
        "profile": updated.profile.to_payload(),
        "stats": {"bmi": stats.bmi, "dailyCalories": stats.daily_calories},
    }
