"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fitbot.domain.foods import NutritionFacts
from fitbot.domain.nutrition import FoodLogEntry, FoodSnapshot, ServingSize
from fitbot.services.food_log import FoodLogRepository

_COLUMNS = (
    "id, user_id, logged_on, logged_at, meal_type, food_id, food_name, food_brand, "
    "food_image_url, nutrition, serving_amount, serving_unit"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food log entries."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        logged_at: datetime,
        meal_type: str,
        food: FoodSnapshot,
        nutrition: NutritionFacts,
        serving_size: ServingSize,
    ) -> FoodLogEntry:
        """Insert an entry row and return it."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "logged_on": logged_at.date().isoformat(),
                    "logged_at": logged_at.isoformat(),
                    "meal_type": meal_type,
                    "food_id": food.food_id,
                    "food_name": food.name,
                    "food_brand": food.brand,
                    "food_image_url": food.image_url,
                    "nutrition": nutrition.to_payload(),
                    "serving_amount": serving_size.amount,
                    "serving_unit": serving_size.unit,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return entries for a day in logging order."""
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("logged_on", day.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry only when it belongs to the user."""
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    nutrition = row.get("nutrition")
    return FoodLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        logged_on=date.fromisoformat(str(row["logged_on"])),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        meal_type=str(row.get("meal_type", "")),
        food=FoodSnapshot(
            name=str(row.get("food_name", "")),
            food_id=row.get("food_id"),
            brand=str(row.get("food_brand") or ""),
            image_url=row.get("food_image_url"),
        ),
        nutrition=NutritionFacts.from_payload(
            nutrition if isinstance(nutrition, dict) else None
        ),
        serving_size=ServingSize(
            amount=float(row.get("serving_amount", 0.0)),
            unit=str(row.get("serving_unit") or "g"),
        ),
    )
