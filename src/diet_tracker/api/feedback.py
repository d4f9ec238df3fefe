"""Feedback endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from diet_tracker.api.deps import optional_user
from diet_tracker.api.schemas import FeedbackIn, feedback_to_dict, raise_for_failure
from diet_tracker.domain.feedback import (
    FEEDBACK_CATEGORIES,
    EmailFallback,
    FeedbackSubmission,
    WidgetHandle,
)
from diet_tracker.domain.results import WriteFailure

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("")
async def submit_feedback(
    payload: FeedbackIn,
    request: Request,
    user_id: str | None = Depends(optional_user),
) -> JSONResponse:
    """Store feedback, or hand back an email draft when storage fails."""
    container: AppContainer = request.app.state.container
    result = container.feedback_service.submit(
        user_id,
        FeedbackSubmission(
            rating=payload.rating,
            category=payload.category,
            message=payload.message,
            feedback_type=payload.feedback_type,
            email=payload.email,
            metadata=payload.metadata,
        ),
    )
    if isinstance(result, WriteFailure):
        raise_for_failure(result)
    if isinstance(result, EmailFallback):
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content={
                "status": "email_fallback",
                "mailto_url": result.mailto_url,
                "reason": result.reason,
            },
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"status": "stored", "feedback": feedback_to_dict(result)},
    )


@router.get("/categories")
async def feedback_categories() -> dict[str, list[str]]:
    """Return the categories a submission may use."""
    return {"categories": list(FEEDBACK_CATEGORIES)}


@router.get("/widget")
async def feedback_widget(request: Request) -> dict[str, object]:
    """Return how the client should collect feedback."""
    container: AppContainer = request.app.state.container
    if container.widget is None:
        container.widget = await container.widget_service.initialize()
    widget = container.widget
    if isinstance(widget, WidgetHandle):
        return {
            "available": True,
            "token": widget.token,
            "script_url": widget.script_url,
        }
    return {
        "available": False,
        "reason": widget.reason,
        "support_email": widget.support_email,
    }
