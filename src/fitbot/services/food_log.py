"""Food logging service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from fitbot.domain.errors import NotFoundError, ValidationError
from fitbot.domain.foods import SERVING_UNITS, FoodRef, NutritionFacts
from fitbot.domain.nutrition import (
    MEAL_TYPES,
    FoodLogEntry,
    FoodSnapshot,
    ServingSize,
)
from fitbot.services.foods import FoodCatalogService
from fitbot.services.metrics import MetricsCollector


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        logged_at: datetime,
        meal_type: str,
        food: FoodSnapshot,
        nutrition: NutritionFacts,
        serving_size: ServingSize,
    ) -> FoodLogEntry:
        """Persist a new entry and return it."""

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return a user's entries for one calendar day, oldest first."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry owned by the user; return False when absent."""


@dataclass
class FoodLogService:
    """Create, list and delete food log entries."""

    catalog: FoodCatalogService
    repository: FoodLogRepository
    metrics: MetricsCollector

    async def log_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        ref: FoodRef,
        meal_type: str,
        amount: float,
        unit: str = "g",
        logged_at: datetime | None = None,
    ) -> FoodLogEntry:
        """Look up a food, scale it to the serving and log it."""
        serving = _validated_serving(meal_type, amount, unit)
        details = await self.catalog.get_details(ref)
        item = details.item
        nutrition = self.catalog.scale_serving(item, serving.amount, serving.unit)
        snapshot = FoodSnapshot(
            name=item.name,
            food_id=item.id,
            brand=item.brand,
            image_url=item.image_url,
        )
        return self._create(user_id, meal_type, snapshot, nutrition, serving, logged_at)

    def log_custom(  # noqa: PLR0913
        self,
        user_id: UUID,
        food: FoodSnapshot,
        meal_type: str,
        nutrition: NutritionFacts,
        amount: float,
        unit: str = "g",
        logged_at: datetime | None = None,
    ) -> FoodLogEntry:
        """Log a serving whose nutrition was computed by the client."""
        if not food.name.strip():
            raise ValidationError("Food name is required")
        serving = _validated_serving(meal_type, amount, unit)
        return self._create(user_id, meal_type, food, nutrition, serving, logged_at)

    def list_for_day(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return the user's entries for a calendar day."""
        return self.repository.list_entries(user_id, day)

    def delete(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete one of the user's entries."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise NotFoundError("Food entry not found")

    def _create(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        food: FoodSnapshot,
        nutrition: NutritionFacts,
        serving: ServingSize,
        logged_at: datetime | None,
    ) -> FoodLogEntry:
        entry = self.repository.create_entry(
            user_id=user_id,
            logged_at=logged_at or datetime.now(tz=UTC),
            meal_type=meal_type,
            food=food,
            nutrition=nutrition,
            serving_size=serving,
        )
        self.metrics.record_food_entry()
        return entry


def _validated_serving(meal_type: str, amount: float, unit: str) -> ServingSize:
    if meal_type not in MEAL_TYPES:
        raise ValidationError(f"Meal type must be one of: {', '.join(MEAL_TYPES)}")
    if amount <= 0:
        raise ValidationError("Serving amount must be positive")
    if unit not in SERVING_UNITS:
        raise ValidationError(f"Serving unit must be one of: {', '.join(SERVING_UNITS)}")
    return ServingSize(amount=amount, unit=unit)
