"""Food search merging the local dataset with Open Food Facts."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fitbot.adapters.open_food_facts_client import FoodDatabaseClient
from fitbot.domain.errors import NotFoundError, TransportError, ValidationError
from fitbot.domain.foods import (
    FoodDetails,
    FoodItem,
    FoodRef,
    LocalFoodDataset,
    LocalFoodRef,
    NutritionFacts,
    RemoteFoodRef,
    parse_amount,
)
from fitbot.domain.health import round_half_up

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

MIN_QUERY_LENGTH = 2
DEFAULT_BASE_GRAMS = 100.0
UNIT_TO_GRAMS = {"oz": 28.35, "cup": 240.0, "ml": 1.0}

_PARENTHETICAL_GRAMS = re.compile(r"\((\d+)g\)")
_BARE_GRAMS = re.compile(r"(\d+)g")

# Open Food Facts nutriment keys, per 100g
_NUTRIMENT_KEYS = {
    "protein": "proteins_100g",
    "fat": "fat_100g",
    "carbohydrates": "carbohydrates_100g",
    "fiber": "fiber_100g",
    "sugar": "sugars_100g",
    "sodium": "sodium_100g",
    "salt": "salt_100g",
    "saturated_fat": "saturated-fat_100g",
}

_logger = logging.getLogger(__name__)


@dataclass
class FoodCatalogService:
    """Search and look up foods across the local and remote catalogs."""

    dataset: LocalFoodDataset
    remote_client: FoodDatabaseClient
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 10) -> list[FoodItem]:
        """Return local matches first, then remote matches, up to the limit."""
        term = query.strip()
        if len(term) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
            )
        local_items = self.dataset.search(term, limit // 2)
        remote_limit = limit - len(local_items)
        remote_items: list[FoodItem] = []
        if remote_limit > 0:
            products = await self._call_with_retry(
                lambda: self.remote_client.search_products(term, page_size=remote_limit),
                action="search",
            )
            remote_items = [remote_food_item(product) for product in products]
        _logger.info(
            "Food search %r: %s local, %s remote",
            term,
            len(local_items),
            len(remote_items),
        )
        return [*local_items, *remote_items]

    async def get_details(self, ref: FoodRef) -> FoodDetails:
        """Return details for a local or remote food."""
        if isinstance(ref, LocalFoodRef):
            item = self.dataset.get(ref)
            if item is None:
                raise NotFoundError(f"Local food {ref.id} not found")
            return FoodDetails(item=item)
        product = await self._call_with_retry(
            lambda: self.remote_client.get_product(ref.code),
            action=f"get_product:{ref.code}",
        )
        return FoodDetails(
            item=remote_food_item(product),
            quantity=_optional_text(product.get("quantity")),
            ingredients=_optional_text(product.get("ingredients_text")),
            nutrition_grade=_optional_text(product.get("nutrition_grades")),
            labels=str(product.get("labels") or ""),
        )

    def scale_serving(self, item: FoodItem, amount: float, unit: str) -> NutritionFacts:
        """Scale an item's nutrition to a logged serving."""
        return scale_serving(item, amount, unit)

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[object]]", *, action: str
    ) -> object:
        """Call the remote database with a short retry on transport failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except TransportError as exc:
                attempt += 1
                _logger.warning(
                    "Open Food Facts %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def remote_food_item(product: dict[str, object]) -> FoodItem:
    """Normalize an Open Food Facts product; absent nutrients become 0."""
    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    energy = nutriments.get("energy-kcal_100g") or nutriments.get("energy_100g")
    values = {
        name: parse_amount(nutriments.get(key))
        for name, key in _NUTRIMENT_KEYS.items()
    }
    return FoodItem(
        ref=RemoteFoodRef(str(product.get("code") or "")),
        name=str(product.get("product_name") or "Unknown Product"),
        brand=str(product.get("brands") or "Unknown Brand"),
        image_url=_optional_text(product.get("image_url")),
        serving_size_text=_optional_text(product.get("serving_size")),
        category=_optional_text(product.get("categories")),
        nutrition_per_100g=NutritionFacts(energy=parse_amount(energy), **values),
    )


def serving_grams(amount: float, unit: str) -> float:
    """Convert a serving amount to grams; unknown units count as grams."""
    return amount * UNIT_TO_GRAMS.get(unit, 1.0)


def base_grams(item: FoodItem) -> float:
    """Return the gram weight the item's nutrition values refer to.

    Local rows describe one serving, so a "(150g)" or "150g" hint in the
    serving text is used. Remote values are always per 100g.
    """
    if isinstance(item.ref, RemoteFoodRef) or not item.serving_size_text:
        return DEFAULT_BASE_GRAMS
    match = _PARENTHETICAL_GRAMS.search(item.serving_size_text) or _BARE_GRAMS.search(
        item.serving_size_text
    )
    if match is None or int(match.group(1)) == 0:
        return DEFAULT_BASE_GRAMS
    return float(match.group(1))


def scale_serving(item: FoodItem, amount: float, unit: str) -> NutritionFacts:
    """Scale nutrition by logged grams over the item's base grams."""
    ratio = serving_grams(amount, unit) / base_grams(item)
    facts = item.nutrition_per_100g
    return NutritionFacts(
        energy=round_half_up(facts.energy * ratio),
        protein=round_half_up(facts.protein * ratio, 1),
        fat=round_half_up(facts.fat * ratio, 1),
        carbohydrates=round_half_up(facts.carbohydrates * ratio, 1),
        fiber=round_half_up(facts.fiber * ratio, 1),
        sugar=round_half_up(facts.sugar * ratio, 1),
        sodium=round_half_up(facts.sodium * ratio, 2),
        salt=round_half_up(facts.salt * ratio, 2),
        saturated_fat=round_half_up(facts.saturated_fat * ratio, 1),
    )


def _optional_text(raw: object) -> str | None:
    if raw is None or raw == "":
        return None
    return str(raw)
