"""Request dependencies shared by the routers."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from diet_tracker.config import parse_bearer_token
from diet_tracker.services.civil_time import civil_today

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


async def optional_user(
    request: Request, authorization: str | None = Header(default=None)
) -> str | None:
    """Resolve the bearer token to a user id, if one is present and valid."""
    container = get_container(request)
    user_id = container.auth_service.get_current_user_id(
        parse_bearer_token(authorization)
    )
    return str(user_id) if user_id else None


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> str:
    """Resolve the bearer token to a user id or reject the request."""
    user_id = await optional_user(request, authorization)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def resolve_day(request: Request, day: date | None) -> date:
    """Default a missing date to today in the configured zone."""
    return day or civil_today(get_container(request).timezone)
