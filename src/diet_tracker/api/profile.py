"""Profile and goal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from diet_tracker.api.deps import require_user
from diet_tracker.api.schemas import (
    GoalsUpdate,
    ProfileUpdate,
    profile_to_dict,
    raise_for_failure,
)
from diet_tracker.domain.results import WriteFailure

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Return the user's profile, creating it with default goals."""
    container: AppContainer = request.app.state.container
    result = container.profile_service.get_or_create_profile(user_id, full_name="")
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return profile_to_dict(result)


@router.put("")
async def update_profile(
    payload: ProfileUpdate, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Update personal details."""
    container: AppContainer = request.app.state.container
    changes = payload.model_dump(exclude_unset=True, mode="json")
    if not changes:
        raise_for_failure(WriteFailure.invalid("profile", "Nothing to update"))
    result = container.profile_service.update_profile(user_id, changes)
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return profile_to_dict(result)


@router.put("/goals")
async def update_goals(
    payload: GoalsUpdate, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Set the calorie target and derive macro targets from the goal type."""
    container: AppContainer = request.app.state.container
    result = container.profile_service.update_goals(
        user_id, payload.calories, payload.goal_type
    )
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return profile_to_dict(result)
