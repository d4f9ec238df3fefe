"""Supabase repository for the foods cache table."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_tracker.domain.foods import (
    DEFAULT_SERVING_WEIGHT_G,
    CachedFoodRecord,
    FoodSource,
)
from diet_tracker.services.food_cache import FoodRepository

_FOOD_COLUMNS = (
    "id, name, brand, source, barcode, external_id, calories_per_100g, "
    "protein_per_100g, carbs_per_100g, fat_per_100g, fiber_per_100g, "
    "sugar_per_100g, sodium_per_100g, serving_size, serving_weight_g, "
    "image_url, ingredients, category, last_fetched, updated_at"
)
_RECENT_SOURCES = (FoodSource.OPENFOODFACTS.value, FoodSource.CUSTOM.value)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for cached foods."""

    client: Client

    def search(self, query: str, limit: int) -> list[CachedFoodRecord]:
        """Return foods whose name or brand contains ``query``."""
        pattern = _escape_like(query)
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .or_(f"name.ilike.%{pattern}%,brand.ilike.%{pattern}%")
            .order("name")
            .limit(limit)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: str) -> CachedFoodRecord | None:
        """Return a food by id."""
        return self._first("id", food_id)

    def get_by_external_id(
        self, external_id: str, source: str
    ) -> CachedFoodRecord | None:
        """Return the food stored under a remote natural key."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq("external_id", external_id)
            .eq("source", source)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_by_barcode(self, barcode: str) -> CachedFoodRecord | None:
        """Return a food by barcode."""
        return self._first("barcode", barcode)

    def upsert(self, record: CachedFoodRecord) -> CachedFoodRecord:
        """Insert or replace a remote food keyed by ``(external_id, source)``."""
        payload = _food_payload(record)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("foods")
            .upsert(payload, on_conflict="external_id,source")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert food")
        return _parse_food(response.data[0])

    def create_custom(self, record: CachedFoodRecord) -> CachedFoodRecord:
        """Insert a user-entered food."""
        response = self.client.table("foods").insert(_food_payload(record)).execute()
        if not response.data:
            raise RuntimeError("Failed to create custom food")
        return _parse_food(response.data[0])

    def list_recent(self, limit: int) -> list[CachedFoodRecord]:
        """Return recently updated remote and custom foods."""
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .in_("source", list(_RECENT_SOURCES))
            .order("updated_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def _first(self, column: str, value: str) -> CachedFoodRecord | None:
        response = (
            self.client.table("foods")
            .select(_FOOD_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])


def _escape_like(query: str) -> str:
    # PostgREST filter syntax reserves commas and parentheses.
    cleaned = query.strip()
    for char in ",()":
        cleaned = cleaned.replace(char, " ")
    return cleaned


def _food_payload(record: CachedFoodRecord) -> dict[str, object]:
    return {
        "name": record.name,
        "brand": record.brand,
        "source": record.source.value,
        "barcode": record.barcode,
        "external_id": record.external_id,
        "calories_per_100g": record.calories_per_100g,
        "protein_per_100g": record.protein_per_100g,
        "carbs_per_100g": record.carbs_per_100g,
        "fat_per_100g": record.fat_per_100g,
        "fiber_per_100g": record.fiber_per_100g,
        "sugar_per_100g": record.sugar_per_100g,
        "sodium_per_100g": record.sodium_per_100g,
        "serving_size": record.serving_size,
        "serving_weight_g": record.serving_weight_g,
        "image_url": record.image_url,
        "ingredients": record.ingredients,
        "category": record.category,
        "last_fetched": (
            record.last_fetched.isoformat() if record.last_fetched else None
        ),
    }


def _parse_food(row: dict[str, object]) -> CachedFoodRecord:
    return CachedFoodRecord(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        brand=row.get("brand"),
        source=FoodSource(row.get("source") or FoodSource.CUSTOM.value),
        barcode=row.get("barcode"),
        external_id=row.get("external_id"),
        calories_per_100g=float(row.get("calories_per_100g") or 0.0),
        protein_per_100g=float(row.get("protein_per_100g") or 0.0),
        carbs_per_100g=float(row.get("carbs_per_100g") or 0.0),
        fat_per_100g=float(row.get("fat_per_100g") or 0.0),
        fiber_per_100g=_optional_float(row.get("fiber_per_100g")),
        sugar_per_100g=_optional_float(row.get("sugar_per_100g")),
        sodium_per_100g=_optional_float(row.get("sodium_per_100g")),
        serving_size=str(row.get("serving_size") or "100g"),
        serving_weight_g=float(
            row.get("serving_weight_g") or DEFAULT_SERVING_WEIGHT_G
        ),
        image_url=row.get("image_url"),
        ingredients=row.get("ingredients"),
        category=row.get("category"),
        last_fetched=_parse_timestamp(row.get("last_fetched")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
