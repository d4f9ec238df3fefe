"""Tests for civil date helpers."""

from datetime import UTC, date, datetime, timedelta, timezone

from diet_tracker.services.civil_time import (
    as_utc,
    civil_date,
    civil_date_key,
    civil_today,
    trailing_days,
)
from tests.conftest import IST


def test_ist_day_starts_at_1830_utc() -> None:
    assert civil_date_key(datetime(2024, 1, 1, 18, 29, 59, tzinfo=UTC), IST) == (
        "2024-01-01"
    )
    assert civil_date_key(datetime(2024, 1, 1, 18, 30, tzinfo=UTC), IST) == (
        "2024-01-02"
    )


def test_offsets_are_normalized_before_bucketing() -> None:
    new_york = timezone(timedelta(hours=-5))

    assert civil_date(datetime(2024, 1, 1, 14, 0, tzinfo=new_york), IST) == date(
        2024, 1, 2
    )


def test_naive_datetimes_are_utc() -> None:
    assert as_utc(datetime(2024, 1, 1, 12, 0)).tzinfo is UTC
    assert civil_today(IST, now=datetime(2024, 6, 30, 19, 0)) == date(2024, 7, 1)


def test_trailing_days_are_oldest_first() -> None:
    assert trailing_days(date(2024, 3, 2), 3) == [
        date(2024, 2, 29),
        date(2024, 3, 1),
        date(2024, 3, 2),
    ]
