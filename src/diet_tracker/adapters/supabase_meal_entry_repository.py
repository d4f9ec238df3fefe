"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_tracker.domain.foods import FoodSource
from diet_tracker.domain.meals import (
    MealEntry,
    MealEntryChanges,
    MealType,
    NewMealEntry,
)
from diet_tracker.domain.nutrition import NutrientValues
from diet_tracker.services.meals import MealEntryRepository

_ENTRY_COLUMNS = (
    "id, user_id, food_id, food_name, food_brand, food_source, food_image, "
    "meal_type, serving_size, serving_unit, calories, protein, carbs, fat, "
    "fiber, sugar, sodium, logged_at, ist_date, created_at, food_snapshot"
)


@dataclass
class SupabaseMealEntryRepository(MealEntryRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def create_entry(self, entry: NewMealEntry) -> MealEntry:
        """Insert an entry and return the stored row."""
        payload: dict[str, object] = {
            "user_id": entry.user_id,
            "food_id": entry.food_id,
            "food_name": entry.food_name,
            "food_brand": entry.food_brand,
            "food_source": entry.food_source.value,
            "food_image": entry.food_image,
            "meal_type": entry.meal_type.value,
            "serving_size": entry.serving_size,
            "serving_unit": entry.serving_unit,
            "logged_at": entry.logged_at.isoformat(),
            "ist_date": entry.ist_date,
            "food_snapshot": entry.food_snapshot,
        }
        payload.update(entry.nutrients.as_dict())
        response = self.client.table("meal_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: str) -> MealEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("meal_entries")
            .select(_ENTRY_COLUMNS)
            .eq("id", entry_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries_for_day(self, user_id: str, ist_date: str) -> list[MealEntry]:
        """Return a user's entries for a civil date, oldest first."""
        response = (
            self.client.table("meal_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", user_id)
            .eq("ist_date", ist_date)
            .order("logged_at")
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(
        self,
        entry_id: str,
        changes: MealEntryChanges,
        nutrients: NutrientValues | None,
    ) -> MealEntry | None:
        """Apply changes to an entry and return the updated row."""
        payload: dict[str, object] = {}
        if changes.serving_size is not None:
            payload["serving_size"] = changes.serving_size
        if changes.serving_unit is not None:
            payload["serving_unit"] = changes.serving_unit.strip()
        if changes.meal_type is not None:
            payload["meal_type"] = changes.meal_type.value
        if nutrients is not None:
            payload.update(nutrients.as_dict())
        response = (
            self.client.table("meal_entries")
            .update(payload)
            .eq("id", entry_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry by id."""
        self.client.table("meal_entries").delete().eq("id", entry_id).execute()


def _parse_entry(row: dict[str, object]) -> MealEntry:
    snapshot = row.get("food_snapshot")
    return MealEntry(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        food_id=str(row.get("food_id") or ""),
        food_name=str(row.get("food_name") or ""),
        food_brand=row.get("food_brand"),
        food_source=FoodSource(row.get("food_source") or FoodSource.LOCAL.value),
        food_image=row.get("food_image"),
        meal_type=MealType(row["meal_type"]),
        serving_size=float(row.get("serving_size") or 0.0),
        serving_unit=str(row.get("serving_unit") or "serving"),
        nutrients=NutrientValues.from_dict(row),
        logged_at=_parse_timestamp(row["logged_at"]),
        ist_date=str(row["ist_date"]),
        created_at=(
            _parse_timestamp(row["created_at"]) if row.get("created_at") else None
        ),
        food_snapshot=snapshot if isinstance(snapshot, dict) else {},
    )


def _parse_timestamp(value: object) -> datetime:
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
