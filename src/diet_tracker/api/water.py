"""Water intake endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request

from diet_tracker.api.deps import require_user, resolve_day
from diet_tracker.api.schemas import WaterUpdate, raise_for_failure
from diet_tracker.domain.results import WriteFailure

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/water", tags=["water"])


@router.get("")
async def get_water(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Return glasses of water for a day."""
    container: AppContainer = request.app.state.container
    resolved = resolve_day(request, day)
    glasses = container.water_service.get_intake(user_id, resolved)
    return {"date": resolved.isoformat(), "glasses": glasses}


@router.put("")
async def set_water(
    payload: WaterUpdate, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Set glasses of water for a day."""
    container: AppContainer = request.app.state.container
    resolved = resolve_day(request, payload.day)
    result = container.water_service.log_intake(user_id, payload.glasses, resolved)
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    return {"date": result.day.isoformat(), "glasses": result.glasses_consumed}
