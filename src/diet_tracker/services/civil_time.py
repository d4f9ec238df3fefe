"""Fixed-timezone civil date helpers.

A meal belongs to the calendar day of its timestamp in one configured zone,
never to the UTC day.
"""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo


def as_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def civil_date(moment: datetime, tz: ZoneInfo) -> date:
    """Return the calendar date of ``moment`` in ``tz``."""
    return as_utc(moment).astimezone(tz).date()


def civil_date_key(moment: datetime, tz: ZoneInfo) -> str:
    """Return the ``YYYY-MM-DD`` grouping key for ``moment`` in ``tz``."""
    return civil_date(moment, tz).isoformat()


def civil_today(tz: ZoneInfo, now: datetime | None = None) -> date:
    """Return today's date in ``tz``."""
    return civil_date(now or datetime.now(tz=UTC), tz)


def trailing_days(end: date, days: int) -> list[date]:
    """Return ``days`` consecutive dates ending at ``end``, oldest first."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
