"""Request models and response serializers for the HTTP API."""

from datetime import date, datetime
from typing import NoReturn

from fastapi import HTTPException
from pydantic import BaseModel, Field

from diet_tracker.domain.feedback import FeedbackStats, FeedbackType, StoredFeedback
from diet_tracker.domain.foods import NormalizedFood
from diet_tracker.domain.meals import (
    DailyNutritionSummary,
    MealEntry,
    MealType,
    NutrientTotals,
    PeriodAverages,
)
from diet_tracker.domain.profiles import ActivityLevel, GoalType, UserProfile
from diet_tracker.domain.results import FailureKind, WriteFailure


class CustomFoodIn(BaseModel):
    """User-entered food, nutrients per serving."""

    name: str
    brand: str | None = None
    serving: str = "1 serving"
    calories: float = Field(allow_inf_nan=False)
    protein: float = Field(default=0, allow_inf_nan=False)
    carbs: float = Field(default=0, allow_inf_nan=False)
    fat: float = Field(default=0, allow_inf_nan=False)
    fiber: float | None = Field(default=None, allow_inf_nan=False)
    sugar: float | None = Field(default=None, allow_inf_nan=False)
    sodium: float | None = Field(default=None, allow_inf_nan=False)


class MealEntryCreate(BaseModel):
    """Payload for logging a meal."""

    food_id: str | None = None
    custom_food: CustomFoodIn | None = None
    meal_type: MealType
    serving_size: float = Field(allow_inf_nan=False)
    serving_unit: str = "serving"
    logged_at: datetime | None = None


class MealEntryUpdate(BaseModel):
    """Payload for correcting a meal entry."""

    serving_size: float | None = Field(default=None, allow_inf_nan=False)
    serving_unit: str | None = None
    meal_type: MealType | None = None


class ProfileUpdate(BaseModel):
    """Editable personal details."""

    full_name: str | None = None
    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None
    dietary_restrictions: str | None = None


class GoalsUpdate(BaseModel):
    """Calorie target and goal type."""

    calories: int
    goal_type: GoalType


class WaterUpdate(BaseModel):
    """Glasses of water for a day; today when no date is given."""

    glasses: int
    day: date | None = Field(default=None, alias="date")


class FeedbackIn(BaseModel):
    """Feedback form payload."""

    rating: int
    category: str
    message: str
    feedback_type: FeedbackType = FeedbackType.GENERAL
    email: str | None = None
    metadata: dict[str, object] = Field(default_factory=dict)


def raise_for_failure(failure: WriteFailure) -> NoReturn:
    """Raise the HTTP error matching a failed write."""
    status_code = {
        FailureKind.VALIDATION: 422,
        FailureKind.NOT_FOUND: 404,
        FailureKind.STORAGE: 503,
    }[failure.kind]
    raise HTTPException(
        status_code=status_code,
        detail={
            "kind": failure.kind.value,
            "reason": failure.reason,
            "field": failure.field,
            "retryable": failure.retryable,
        },
    )


def food_to_dict(food: NormalizedFood) -> dict[str, object]:
    """Serialize a food."""
    return {
        "id": food.id,
        "name": food.name,
        "brand": food.brand,
        "source": food.source.value,
        "serving": food.serving,
        "barcode": food.barcode,
        "image": food.image,
        **food.nutrients.as_dict(),
    }


def entry_to_dict(entry: MealEntry) -> dict[str, object]:
    """Serialize a meal entry."""
    return {
        "id": entry.id,
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
        **entry.nutrients.as_dict(),
    }


def _totals_to_dict(totals: NutrientTotals) -> dict[str, float]:
    return {
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fat": totals.fat,
        "fiber": totals.fiber,
        "sugar": totals.sugar,
        "sodium": totals.sodium,
    }


def summary_to_dict(summary: DailyNutritionSummary) -> dict[str, object]:
    """Serialize a daily summary."""
    return {
        "date": summary.day.isoformat(),
        "total_calories": summary.total_calories,
        "total_protein": summary.total_protein,
        "total_carbs": summary.total_carbs,
        "total_fat": summary.total_fat,
        "total_fiber": summary.total_fiber,
        "total_sugar": summary.total_sugar,
        "total_sodium": summary.total_sodium,
        "meal_count": summary.meal_count,
        "meals_by_type": {
            meal_type.value: count
            for meal_type, count in summary.meals_by_type.items()
        },
        "totals_by_type": {
            meal_type.value: _totals_to_dict(totals)
            for meal_type, totals in summary.totals_by_type.items()
        },
    }


def averages_to_dict(averages: PeriodAverages) -> dict[str, object]:
    """Serialize period averages."""
    return {
        "days": averages.days,
        "logged_days": averages.logged_days,
        "avg_calories": averages.avg_calories,
        "avg_protein": averages.avg_protein,
        "avg_carbs": averages.avg_carbs,
        "avg_fat": averages.avg_fat,
    }


def profile_to_dict(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile."""
    return {
        "user_id": profile.user_id,
        "full_name": profile.full_name,
        "age": profile.age,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level": (
            profile.activity_level.value if profile.activity_level else None
        ),
        "dietary_restrictions": profile.dietary_restrictions,
        "goal_type": profile.goal_type.value,
        "daily_calories": profile.targets.calories,
        "daily_protein": profile.targets.protein_g,
        "daily_carbs": profile.targets.carbs_g,
        "daily_fat": profile.targets.fat_g,
    }


def feedback_to_dict(feedback: StoredFeedback) -> dict[str, object]:
    """Serialize a stored feedback row."""
    return {
        "id": feedback.id,
        "rating": feedback.rating,
        "category": feedback.category,
        "ist_date": feedback.ist_date,
    }


def stats_to_dict(stats: FeedbackStats) -> dict[str, object]:
    """Serialize feedback stats."""
    return {
        "total": stats.total,
        "average_rating": stats.average_rating,
        "by_category": stats.by_category,
    }
