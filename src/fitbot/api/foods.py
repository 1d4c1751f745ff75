"""Food search, details and logging endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from fitbot.api.auth import current_user
from fitbot.api.models import FoodLogRequest, FoodSearchRequest  # noqa: TC001
from fitbot.domain.foods import NutritionFacts, parse_food_ref
from fitbot.domain.models import UserRecord  # noqa: TC001
from fitbot.domain.nutrition import MEAL_TYPES, FoodSnapshot, daily_totals

if TYPE_CHECKING:
    from fitbot.containers import AppContainer

router = APIRouter(prefix="/api/food", tags=["food"])


@router.post("/search")
async def search_foods(
    body: FoodSearchRequest,
    request: Request,
    user: UserRecord = Depends(current_user),  # noqa: ARG001
) -> dict[str, object]:
    """Search local foods first, then Open Food Facts."""
    container: AppContainer = request.app.state.container
    items = await container.food_catalog.search(body.query, body.limit)
    container.metrics.record_food_search()
    return {"products": [item.to_payload() for item in items]}


@router.post("/log")
async def log_food(
    body: FoodLogRequest,
    request: Request,
    user: UserRecord = Depends(current_user),
) -> dict[str, object]:
    """Log a serving of a food."""
    container: AppContainer = request.app.state.container
    service = container.food_log_service
    if body.nutrition is not None and body.food_name:
        entry = service.log_custom(
            user_id=user.id,
            food=FoodSnapshot(
                name=body.food_name,
                food_id=body.food_id,
                brand=body.brand or "",
                image_url=body.image_url,
            ),
            meal_type=body.meal_type,
            nutrition=NutritionFacts.from_payload(
                body.nutrition.model_dump(by_alias=True)
            ),
            amount=body.serving_amount,
            unit=body.serving_unit,
        )
    else:
        entry = await service.log_food(
            user_id=user.id,
            ref=parse_food_ref(body.food_id),
            meal_type=body.meal_type,
            amount=body.serving_amount,
            unit=body.serving_unit,
        )
    return {"message": "Food logged successfully", "entry": entry.to_payload()}


@router.get("/log")
async def food_log_today(
    request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return today's food log."""
    return _food_log_payload(request, user, datetime.now(tz=UTC).date())


@router.get("/log/{day}")
async def food_log_for_day(
    day: date, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, object]:
    """Return the food log for a calendar day."""
    return _food_log_payload(request, user, day)


@router.delete("/log/{entry_id}")
async def delete_food_entry(
    entry_id: UUID, request: Request, user: UserRecord = Depends(current_user)
) -> dict[str, str]:
    """Delete one of the user's entries."""
    container: AppContainer = request.app.state.container
    container.food_log_service.delete(user.id, entry_id)
    return {"message": "Food entry deleted successfully"}


@router.get("/{food_id}")
async def food_details(
    food_id: str,
    request: Request,
    user: UserRecord = Depends(current_user),  # noqa: ARG001
) -> dict[str, object]:
    """Return details for a local id or an Open Food Facts barcode."""
    container: AppContainer = request.app.state.container
    details = await container.food_catalog.get_details(parse_food_ref(food_id))
    return {"food": details.to_payload()}


def _food_log_payload(request: Request, user: UserRecord, day: date) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    entries = container.food_log_service.list_for_day(user.id, day)
    return {
        "date": day.isoformat(),
        "dailyTotals": daily_totals(entries, day).to_payload(),
        "mealGroups": {
            meal_type: [
                entry.to_payload() for entry in entries if entry.meal_type == meal_type
            ]
            for meal_type in MEAL_TYPES
        },
        "totalEntries": len(entries),
    }
