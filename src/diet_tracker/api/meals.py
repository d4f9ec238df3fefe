"""Meal logging endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from diet_tracker.api.deps import require_user, resolve_day
from diet_tracker.api.schemas import (
    CustomFoodIn,
    MealEntryCreate,
    MealEntryUpdate,
    entry_to_dict,
    raise_for_failure,
)
from diet_tracker.domain.foods import CUSTOM_ID_PREFIX, FoodSource, NormalizedFood
from diet_tracker.domain.meals import MealEntryChanges
from diet_tracker.domain.nutrition import NutrientValues
from diet_tracker.domain.results import WriteFailure

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/meals", tags=["meals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_meal(
    payload: MealEntryCreate, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Log a serving of a known or user-entered food."""
    container: AppContainer = request.app.state.container
    if payload.custom_food is not None:
        food = _custom_food(payload.custom_food)
    elif payload.food_id:
        food = container.search_service.get_food(payload.food_id)
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
            )
    else:
        raise_for_failure(
            WriteFailure.invalid("food_id", "A food id or custom food is required")
        )
    result = container.meal_log_service.log_meal(
        user_id=user_id,
        food=food,
        meal_type=payload.meal_type,
        serving_size=payload.serving_size,
        serving_unit=payload.serving_unit,
        logged_at=payload.logged_at,
    )
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return entry_to_dict(result)


@router.get("")
async def list_meals(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Return the user's entries for one civil date."""
    container: AppContainer = request.app.state.container
    resolved = resolve_day(request, day)
    entries = container.meal_log_service.get_entries_for_day(
        user_id, resolved.isoformat()
    )
    return {
        "date": resolved.isoformat(),
        "entries": [entry_to_dict(entry) for entry in entries],
    }


@router.patch("/{entry_id}")
async def update_meal(
    entry_id: str,
    payload: MealEntryUpdate,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Correct an entry's serving size, unit or meal type."""
    container: AppContainer = request.app.state.container
    changes = MealEntryChanges(
        serving_size=payload.serving_size,
        serving_unit=payload.serving_unit,
        meal_type=payload.meal_type,
    )
    result = container.meal_log_service.update_entry(
        entry_id, changes, user_id=user_id
    )
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return entry_to_dict(result)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    entry_id: str, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Delete an entry; deleting a missing entry succeeds."""
    container: AppContainer = request.app.state.container
    if not container.meal_log_service.delete_entry(entry_id, user_id=user_id):
        raise_for_failure(WriteFailure.storage("Could not delete the meal entry"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _custom_food(payload: CustomFoodIn) -> NormalizedFood:
    return NormalizedFood(
        id=f"{CUSTOM_ID_PREFIX}{uuid4().hex}",
        name=payload.name.strip(),
        brand=payload.brand,
        source=FoodSource.CUSTOM,
        serving=payload.serving,
        nutrients=NutrientValues(
            calories=payload.calories,
            protein=payload.protein,
            carbs=payload.carbs,
            fat=payload.fat,
            fiber=payload.fiber,
            sugar=payload.sugar,
            sodium=payload.sodium,
        ),
    )
