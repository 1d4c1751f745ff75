"""Loader for the bundled local food table (CSV)."""

import csv
import io
import logging
from pathlib import Path

from fitbot.domain.foods import (
    LOCAL_ID_PREFIX,
    FoodItem,
    LocalFoodDataset,
    LocalFoodRef,
    NutritionFacts,
    parse_amount,
)

LOCAL_BRAND = "Local Database"
LOCAL_CATEGORY = "Indian Food"
_MIN_COLUMNS = 6

_logger = logging.getLogger(__name__)


def load_local_food_dataset(path: str | Path) -> LocalFoodDataset:
    """Load the dataset from disk; a missing or unreadable file yields no foods."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        _logger.warning("Local food database not loaded from %s: %s", path, exc)
        return LocalFoodDataset()
    dataset = parse_local_foods(text)
    _logger.info("Local food database loaded: %s items", len(dataset))
    return dataset


def parse_local_foods(text: str) -> LocalFoodDataset:
    """Parse CSV text into an immutable dataset with sequential local ids.

    The first row is a header. Blank rows, category header rows (a name with
    every other column empty) and rows with too few columns are skipped.
    Columns: name, serving size, calories, protein, carbohydrates, fat, fiber.
    """
    reader = csv.reader(io.StringIO(text))
    next(reader, None)
    items: list[FoodItem] = []
    for row in reader:
        values = [value.strip() for value in row]
        if len(values) < _MIN_COLUMNS or not values[0]:
            continue
        if not any(values[1:]):
            continue
        items.append(
            FoodItem(
                ref=LocalFoodRef(f"{LOCAL_ID_PREFIX}{len(items) + 1}"),
                name=values[0],
                brand=LOCAL_BRAND,
                serving_size_text=values[1] or None,
                category=LOCAL_CATEGORY,
                nutrition_per_100g=NutritionFacts(
                    energy=_number(values, 2),
                    protein=_number(values, 3),
                    carbohydrates=_number(values, 4),
                    fat=_number(values, 5),
                    fiber=_number(values, 6),
                ),
            )
        )
    return LocalFoodDataset(items=tuple(items))


def _number(values: list[str], index: int) -> float:
    if index >= len(values):
        return 0.0
    return parse_amount(values[index])
