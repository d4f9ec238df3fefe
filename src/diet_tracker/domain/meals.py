"""Domain models for meal logging and daily summaries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from diet_tracker.domain.foods import FoodSource
from diet_tracker.domain.nutrition import NutrientValues


class MealType(StrEnum):
    """Closed set of meal slots in a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class NewMealEntry:
    """Meal entry ready to be persisted."""

    user_id: str
    food_id: str
    food_name: str
    food_brand: str | None
    food_source: FoodSource
    food_image: str | None
    meal_type: MealType
    serving_size: float
    serving_unit: str
    nutrients: NutrientValues
    logged_at: datetime
    ist_date: str
    food_snapshot: dict[str, object]


@dataclass(frozen=True)
class MealEntry:
    """Persisted quantity of a food eaten at a point in time.

    Food fields are a snapshot taken at logging time and do not follow later
    edits of the food row.
    """

    id: str
    user_id: str
    food_id: str
    food_name: str
    food_brand: str | None
    food_source: FoodSource
    food_image: str | None
    meal_type: MealType
    serving_size: float
    serving_unit: str
    nutrients: NutrientValues
    logged_at: datetime
    ist_date: str
    created_at: datetime | None = None
    food_snapshot: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class MealEntryChanges:
    """Fields a caller may correct on an existing entry."""

    serving_size: float | None = None
    serving_unit: str | None = None
    meal_type: MealType | None = None

    def is_empty(self) -> bool:
        """Return True when no field is being changed."""
        return (
            self.serving_size is None
            and self.serving_unit is None
            and self.meal_type is None
        )


@dataclass(frozen=True)
class NutrientTotals:
    """Summed nutrients over a set of entries."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0


def _zero_counts() -> dict[MealType, int]:
    return {meal_type: 0 for meal_type in MealType}


def _zero_totals() -> dict[MealType, NutrientTotals]:
    return {meal_type: NutrientTotals() for meal_type in MealType}


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Derived totals for one user on one civil date; never stored."""

    day: date
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0
    total_fiber: float = 0
    total_sugar: float = 0
    total_sodium: float = 0
    meal_count: int = 0
    meals_by_type: dict[MealType, int] = field(default_factory=_zero_counts)
    totals_by_type: dict[MealType, NutrientTotals] = field(
        default_factory=_zero_totals
    )


@dataclass(frozen=True)
class PeriodAverages:
    """Average daily intake over a run of daily summaries."""

    days: int
    avg_calories: float
    avg_protein: float
    avg_carbs: float
    avg_fat: float
    logged_days: int
