"""Bounded exponential backoff for readiness checks."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)


async def wait_until_ready(
    check: Callable[[], Awaitable[bool]],
    *,
    attempts: int = 4,
    initial_delay_seconds: float = 0.25,
    factor: float = 2.0,
    max_delay_seconds: float = 2.0,
) -> bool:
    """Await ``check`` until it returns True or the attempts run out.

    A check that raises counts as not ready. Returns whether the check
    succeeded; the wait never raises.
    """
    delay = initial_delay_seconds
    for attempt in range(1, attempts + 1):
        try:
            if await check():
                return True
        except Exception as exc:
            _logger.debug("Readiness check failed (attempt %s): %s", attempt, exc)
        if attempt < attempts:
            await asyncio.sleep(delay)
            delay = min(delay * factor, max_delay_seconds)
    return False
