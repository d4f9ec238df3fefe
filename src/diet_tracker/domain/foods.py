"""Food domain models and per-source conversions.

Every food shown to the user is a ``NormalizedFood`` with nutrients per the
stated serving. Foods cached from a remote database are stored as
``CachedFoodRecord`` rows with nutrients per 100 g and converted on the way
out by ``normalize``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from diet_tracker.domain.nutrition import NutrientValues, round_calories

DEFAULT_SERVING_WEIGHT_G = 100.0
DEFAULT_MAX_AGE = timedelta(days=7)
CUSTOM_ID_PREFIX = "custom-"
UNKNOWN_PRODUCT_NAME = "Unknown Product"


class FoodSource(StrEnum):
    """Where a food record came from."""

    LOCAL = "local"
    OPENFOODFACTS = "openfoodfacts"
    USDA = "usda"
    CUSTOM = "custom"


@dataclass(frozen=True)
class NormalizedFood:
    """Source-agnostic food with nutrients per serving."""

    id: str
    name: str
    source: FoodSource
    nutrients: NutrientValues
    serving: str
    brand: str | None = None
    barcode: str | None = None
    image: str | None = None

    @property
    def has_persisted_identity(self) -> bool:
        """Whether the id refers to a stored row rather than a draft."""
        return not (
            self.source == FoodSource.CUSTOM and self.id.startswith(CUSTOM_ID_PREFIX)
        )

    def dedupe_key(self) -> tuple[str, str]:
        """Case-insensitive ``(name, brand)`` identity used when merging."""
        return (self.name.casefold(), (self.brand or "").casefold())


@dataclass(frozen=True)
class CachedFoodRecord:
    """Persisted food row with nutrients per 100 g."""

    id: str | None
    name: str
    source: FoodSource
    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: float | None = None
    sugar_per_100g: float | None = None
    sodium_per_100g: float | None = None
    serving_size: str = "100g"
    serving_weight_g: float = DEFAULT_SERVING_WEIGHT_G
    brand: str | None = None
    barcode: str | None = None
    external_id: str | None = None
    image_url: str | None = None
    ingredients: str | None = None
    category: str | None = None
    last_fetched: datetime | None = None
    updated_at: datetime | None = None

    def per_100g(self) -> NutrientValues:
        """Return the stored per-100 g nutrients."""
        return NutrientValues(
            calories=self.calories_per_100g,
            protein=self.protein_per_100g,
            carbs=self.carbs_per_100g,
            fat=self.fat_per_100g,
            fiber=self.fiber_per_100g,
            sugar=self.sugar_per_100g,
            sodium=self.sodium_per_100g,
        )

    def natural_key(self) -> tuple[str | None, str]:
        """Return the ``(external_id, source)`` upsert key."""
        return (self.external_id, self.source.value)


def is_stale(
    record: CachedFoodRecord, now: datetime, max_age: timedelta = DEFAULT_MAX_AGE
) -> bool:
    """Return True when the record is older than ``max_age``.

    A record that was never fetched counts as stale.
    """
    if record.last_fetched is None:
        return True
    return now - record.last_fetched > max_age


def normalize(record: CachedFoodRecord) -> NormalizedFood:
    """Convert a per-100 g cache record into a per-serving food."""
    if record.id is None:
        raise ValueError("Cannot normalize a food record without an id")
    weight = record.serving_weight_g or DEFAULT_SERVING_WEIGHT_G
    nutrients = record.per_100g().scaled(weight / 100)
    return NormalizedFood(
        id=record.id,
        name=record.name,
        brand=record.brand,
        source=record.source,
        nutrients=nutrients,
        serving=record.serving_size,
        image=record.image_url,
        barcode=record.barcode,
    )


def record_from_off_product(
    product: dict[str, object], fetched_at: datetime
) -> CachedFoodRecord:
    """Convert an Open Food Facts product payload into a cache record.

    Raises ``ValueError`` when the product has no code to key it by.
    """
    code = product.get("code")
    if not code:
        raise ValueError("Open Food Facts product without a code")
    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    return CachedFoodRecord(
        id=None,
        name=_text(product.get("product_name")) or UNKNOWN_PRODUCT_NAME,
        source=FoodSource.OPENFOODFACTS,
        calories_per_100g=round_calories(
            _number(nutriments.get("energy-kcal_100g")) or 0.0
        ),
        protein_per_100g=_number(nutriments.get("proteins_100g")) or 0.0,
        carbs_per_100g=_number(nutriments.get("carbohydrates_100g")) or 0.0,
        fat_per_100g=_number(nutriments.get("fat_100g")) or 0.0,
        fiber_per_100g=_number(nutriments.get("fiber_100g")) or None,
        sugar_per_100g=_number(nutriments.get("sugars_100g")) or None,
        sodium_per_100g=_number(nutriments.get("sodium_100g")) or None,
        serving_size=_text(product.get("serving_size")) or "100g",
        serving_weight_g=DEFAULT_SERVING_WEIGHT_G,
        brand=_text(product.get("brands")),
        barcode=str(code),
        external_id=str(code),
        image_url=_text(product.get("image_url")),
        ingredients=_text(product.get("ingredients_text")),
        category=_text(product.get("categories")),
        last_fetched=fetched_at,
    )


def custom_food_record(food: NormalizedFood) -> CachedFoodRecord:
    """Convert a user-entered food into a cache record.

    The stated per-serving nutrients are stored as the per-100 g columns with
    a fixed 100 g serving weight, so ``normalize`` returns them unchanged.
    """
    nutrients = food.nutrients
    return CachedFoodRecord(
        id=None,
        name=food.name,
        brand=food.brand,
        source=FoodSource.CUSTOM,
        calories_per_100g=round_calories(nutrients.calories),
        protein_per_100g=nutrients.protein,
        carbs_per_100g=nutrients.carbs,
        fat_per_100g=nutrients.fat,
        fiber_per_100g=nutrients.fiber,
        sugar_per_100g=nutrients.sugar,
        sodium_per_100g=nutrients.sodium,
        serving_size=food.serving or "1 serving",
        serving_weight_g=DEFAULT_SERVING_WEIGHT_G,
        barcode=food.barcode,
        image_url=food.image,
    )


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
