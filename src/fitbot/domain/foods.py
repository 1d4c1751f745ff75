"""Food catalog domain models."""

from dataclasses import dataclass, field, fields

LOCAL_ID_PREFIX = "local_"
SERVING_UNITS = ("g", "ml", "oz", "cup", "piece", "slice")


@dataclass(frozen=True)
class LocalFoodRef:
    """Reference to an item in the local food dataset."""

    id: str

    @property
    def source(self) -> str:
        return "local"


@dataclass(frozen=True)
class RemoteFoodRef:
    """Reference to an Open Food Facts product by barcode."""

    code: str

    @property
    def id(self) -> str:
        return self.code

    @property
    def source(self) -> str:
        return "remote"


FoodRef = LocalFoodRef | RemoteFoodRef


def parse_food_ref(raw_id: str) -> FoodRef:
    """Turn a client-supplied food id back into a typed reference."""
    value = raw_id.strip()
    if value.startswith(LOCAL_ID_PREFIX):
        return LocalFoodRef(value)
    return RemoteFoodRef(value)


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient amounts; missing values are always 0, never None."""

    energy: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbohydrates: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    salt: float = 0.0
    saturated_fat: float = 0.0

    def to_payload(self) -> dict[str, float]:
        """Serialize using the client-facing nutrient names."""
        return {
            "energy": self.energy,
            "protein": self.protein,
            "fat": self.fat,
            "carbohydrates": self.carbohydrates,
            "fiber": self.fiber,
            "sugar": self.sugar,
            "sodium": self.sodium,
            "salt": self.salt,
            "saturatedFat": self.saturated_fat,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, object] | None) -> "NutritionFacts":
        """Parse client-facing nutrient names, treating gaps as 0."""
        payload = payload or {}
        aliases = {"saturated_fat": "saturatedFat"}
        values: dict[str, float] = {}
        for item in fields(cls):
            raw = payload.get(aliases.get(item.name, item.name))
            values[item.name] = parse_amount(raw)
        return cls(**values)


@dataclass(frozen=True)
class FoodItem:
    """A food from either the local dataset or the remote database."""

    ref: FoodRef
    name: str
    brand: str
    nutrition_per_100g: NutritionFacts
    serving_size_text: str | None = None
    image_url: str | None = None
    category: str | None = None

    @property
    def id(self) -> str:
        return self.ref.id

    @property
    def source(self) -> str:
        return self.ref.source

    def to_payload(self) -> dict[str, object]:
        """Serialize the unified search-result shape."""
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "imageUrl": self.image_url,
            "servingSize": self.serving_size_text,
            "source": self.source,
            "category": self.category,
            "nutrition": self.nutrition_per_100g.to_payload(),
        }


@dataclass(frozen=True)
class FoodDetails:
    """Food item with the extra metadata a detail lookup returns."""

    item: FoodItem
    quantity: str | None = None
    ingredients: str | None = None
    nutrition_grade: str | None = None
    labels: str = ""

    def to_payload(self) -> dict[str, object]:
        payload = self.item.to_payload()
        payload.update(
            {
                "quantity": self.quantity,
                "ingredients": self.ingredients,
                "nutritionGrade": self.nutrition_grade,
                "labels": self.labels,
            }
        )
        return payload


@dataclass(frozen=True)
class LocalFoodDataset:
    """Immutable snapshot of the local food table, loaded once at startup."""

    items: tuple[FoodItem, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.items)

    def search(self, query: str, limit: int) -> list[FoodItem]:
        """Return the first matches by case-insensitive name substring."""
        term = query.strip().lower()
        if len(term) < 2 or limit <= 0:  # noqa: PLR2004
            return []
        matches: list[FoodItem] = []
        for item in self.items:
            if term in item.name.lower():
                matches.append(item)
                if len(matches) >= limit:
                    break
        return matches

    def get(self, ref: LocalFoodRef) -> FoodItem | None:
        """Return the item with the given local id, if present."""
        for item in self.items:
            if item.ref == ref:
                return item
        return None


def parse_amount(raw: object) -> float:
    """Read a nutrient amount; blanks and unparseable values count as 0."""
    if raw is None or raw == "":
        return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0
