"""Clock and date helpers shared by eligibility and grant comparison."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Protocol

DATE_SKEW_TOLERANCE = timedelta(days=1)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_date(value: datetime) -> date:
    return ensure_utc(value).date()


def dates_equal_ignoring_timezone(a: datetime | None, b: datetime | None) -> bool:
    """Compare two optional timestamps by their date, allowing one day of skew.

    The Target stores window endpoints in its own time zone, so a date can be
    reported one day either side of the one we sent.
    """

    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return abs(a.date() - b.date()) <= DATE_SKEW_TOLERANCE


__all__ = [
    "DATE_SKEW_TOLERANCE",
    "Clock",
    "dates_equal_ignoring_timezone",
    "ensure_utc",
    "utc_date",
    "utcnow",
]
