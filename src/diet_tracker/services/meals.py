"""Meal logging service."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from diet_tracker.domain.foods import FoodSource, NormalizedFood
from diet_tracker.domain.meals import (
    MealEntry,
    MealEntryChanges,
    MealType,
    NewMealEntry,
)
from diet_tracker.domain.nutrition import NutrientValues
from diet_tracker.domain.results import WriteFailure
from diet_tracker.services.civil_time import as_utc, civil_date_key
from diet_tracker.services.food_cache import FoodCacheService

_logger = logging.getLogger(__name__)

DEFAULT_SERVING_UNIT = "serving"
MAX_SERVING_SIZE = 100


class MealEntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def create_entry(self, entry: NewMealEntry) -> MealEntry:
        """Insert an entry and return the stored row."""

    def get_entry(self, entry_id: str) -> MealEntry | None:
        """Return an entry by id."""

    def list_entries_for_day(self, user_id: str, ist_date: str) -> list[MealEntry]:
        """Return a user's entries for a civil date, oldest first."""

    def update_entry(
        self,
        entry_id: str,
        changes: MealEntryChanges,
        nutrients: NutrientValues | None,
    ) -> MealEntry | None:
        """Apply changes and return the row, or None if it no longer exists."""

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry; deleting a missing entry is not an error."""


@dataclass
class MealLogService:
    """Scales foods into meal entries and persists them."""

    repository: MealEntryRepository
    food_cache: FoodCacheService
    timezone: ZoneInfo

    def log_meal(  # noqa: PLR0913
        self,
        user_id: str,
        food: NormalizedFood,
        meal_type: MealType,
        serving_size: float,
        serving_unit: str = DEFAULT_SERVING_UNIT,
        logged_at: datetime | None = None,
    ) -> MealEntry | WriteFailure:
        """Log ``serving_size`` servings of ``food`` for the user."""
        failure = _validate_food(food) or _validate_serving_size(serving_size)
        if failure:
            return failure

        if not food.has_persisted_identity:
            try:
                food = replace(food, id=self.food_cache.add_custom(food).id)
            except Exception:
                _logger.exception("Failed to store custom food %r", food.name)
                return WriteFailure.storage("Could not save the custom food")

        moment = as_utc(logged_at) if logged_at else datetime.now(tz=UTC)
        entry = NewMealEntry(
            user_id=user_id,
            food_id=food.id,
            food_name=food.name,
            food_brand=food.brand,
            food_source=food.source,
            food_image=food.image,
            meal_type=meal_type,
            serving_size=serving_size,
            serving_unit=serving_unit.strip() or DEFAULT_SERVING_UNIT,
            nutrients=food.nutrients.scaled(serving_size),
            logged_at=moment,
            ist_date=civil_date_key(moment, self.timezone),
            food_snapshot=_food_snapshot(food),
        )
        try:
            return self.repository.create_entry(entry)
        except Exception:
            _logger.exception("Failed to log meal entry", extra={"user_id": user_id})
            return WriteFailure.storage("Could not save the meal entry")

    def get_entries_for_day(self, user_id: str, ist_date: str) -> list[MealEntry]:
        """Return the user's entries for a civil date, oldest first."""
        try:
            entries = self.repository.list_entries_for_day(user_id, ist_date)
        except Exception as exc:
            _logger.warning("Failed to load entries for %s: %s", ist_date, exc)
            return []
        return sorted(entries, key=lambda entry: entry.logged_at)

    def update_entry(
        self,
        entry_id: str,
        changes: MealEntryChanges,
        user_id: str | None = None,
    ) -> MealEntry | WriteFailure:
        """Correct serving size, unit or meal type of an entry.

        A new serving size rescales the stored nutrients from the food
        snapshot taken at logging time. With ``user_id`` set, entries owned
        by someone else are reported as not found.
        """
        if changes.is_empty():
            return WriteFailure.invalid("changes", "Nothing to update")
        if changes.serving_size is not None:
            failure = _validate_serving_size(changes.serving_size)
            if failure:
                return failure
        if changes.serving_unit is not None and not changes.serving_unit.strip():
            return WriteFailure.invalid("serving_unit", "Serving unit is empty")

        try:
            current = self.repository.get_entry(entry_id)
            if current is None or (user_id and current.user_id != user_id):
                return WriteFailure.not_found("Meal entry not found")
            nutrients = None
            if (
                changes.serving_size is not None
                and changes.serving_size != current.serving_size
            ):
                nutrients = rescale_entry(current, changes.serving_size)
            updated = self.repository.update_entry(entry_id, changes, nutrients)
        except Exception:
            _logger.exception("Failed to update meal entry %s", entry_id)
            return WriteFailure.storage("Could not update the meal entry")
        if updated is None:
            return WriteFailure.not_found("Meal entry not found")
        return updated

    def delete_entry(self, entry_id: str, user_id: str | None = None) -> bool:
        """Delete an entry. Returns False only when storage failed.

        Entries owned by another user are left alone and count as missing.
        """
        try:
            if user_id:
                current = self.repository.get_entry(entry_id)
                if current is None or current.user_id != user_id:
                    return True
            self.repository.delete_entry(entry_id)
        except Exception:
            _logger.exception("Failed to delete meal entry %s", entry_id)
            return False
        return True


def rescale_entry(entry: MealEntry, serving_size: float) -> NutrientValues:
    """Recompute an entry's nutrients for a new serving size."""
    if entry.food_snapshot:
        base = NutrientValues.from_dict(entry.food_snapshot)
        return base.scaled(serving_size)
    # Rows written without a snapshot can only be scaled proportionally.
    return entry.nutrients.scaled(serving_size / entry.serving_size)


def _food_snapshot(food: NormalizedFood) -> dict[str, object]:
    snapshot: dict[str, object] = dict(food.nutrients.as_dict())
    snapshot["serving"] = food.serving
    return snapshot


def _validate_serving_size(serving_size: float) -> WriteFailure | None:
    if not math.isfinite(serving_size) or serving_size <= 0:
        return WriteFailure.invalid("serving_size", "Serving size must be positive")
    if serving_size > MAX_SERVING_SIZE:
        return WriteFailure.invalid(
            "serving_size", f"Serving size cannot exceed {MAX_SERVING_SIZE}"
        )
    return None


def _validate_food(food: NormalizedFood) -> WriteFailure | None:
    if not food.name.strip():
        return WriteFailure.invalid("food.name", "Food name is required")
    invalid = food.nutrients.invalid_fields()
    if invalid:
        return WriteFailure.invalid(
            f"food.{invalid[0]}",
            f"{invalid[0].capitalize()} must be a non-negative number",
        )
    if food.source == FoodSource.CUSTOM and food.nutrients.calories <= 0:
        return WriteFailure.invalid("food.calories", "Calories are required")
    return None
