"""Food search endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from diet_tracker.api.deps import require_user
from diet_tracker.api.schemas import food_to_dict

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("/search")
async def search_foods(
    request: Request,
    q: str = "",
    request_id: int | None = None,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Search foods; a request overtaken by a newer one returns no results."""
    container: AppContainer = request.app.state.container
    outcome = await container.search_coordinator.search(
        user_id, q, request_id=request_id
    )
    return {
        "request_id": outcome.request_id,
        "query": outcome.query,
        "superseded": outcome.superseded,
        "results": [food_to_dict(food) for food in outcome.results],
    }


@router.get("/barcode/{barcode}")
async def lookup_barcode(
    barcode: str, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Return the food for a barcode."""
    container: AppContainer = request.app.state.container
    food = await container.search_service.lookup_barcode(barcode)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return food_to_dict(food)


@router.get("/{food_id}")
async def get_food(
    food_id: str, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Return a curated or cached food by id."""
    container: AppContainer = request.app.state.container
    food = container.search_service.get_food(food_id)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return food_to_dict(food)
