"""Nutrition summary endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request

from diet_tracker.api.deps import require_user, resolve_day
from diet_tracker.api.schemas import averages_to_dict, summary_to_dict
from diet_tracker.services.summaries import weekly_averages

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/daily")
async def daily_summary(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Return totals for one civil date."""
    container: AppContainer = request.app.state.container
    summary = container.summary_service.get_daily_summary(
        user_id, resolve_day(request, day)
    )
    return summary_to_dict(summary)


@router.get("/weekly")
async def weekly_summary(
    request: Request,
    end_date: date | None = None,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Return the seven days ending at ``end_date`` with their averages."""
    container: AppContainer = request.app.state.container
    days = container.summary_service.get_weekly_summary(
        user_id, resolve_day(request, end_date)
    )
    return {
        "days": [summary_to_dict(summary) for summary in days],
        "averages": averages_to_dict(weekly_averages(days)),
    }
