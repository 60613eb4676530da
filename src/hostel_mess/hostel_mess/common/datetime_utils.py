from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

from ..core.constants import MONTH_YEAR_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current UTC time (timezone-aware).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def to_calendar_date(value: Any) -> date:
    """Normalize a date-like value to a UTC calendar date.

    Accepts ``date``, naive ``datetime`` (taken as UTC), aware ``datetime``
    (converted to UTC first) and ISO-8601 strings of either form.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        if len(text) == 10:
            return parse_iso_date(text)
        # fromisoformat does not accept a trailing 'Z' before Python 3.11
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_calendar_date(datetime.fromisoformat(text))
    raise TypeError(f"Unsupported date value type: {type(value)!r}")


def to_utc_datetime(value: Any) -> datetime:
    """Normalize a timestamp-like value to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc_datetime(datetime.fromisoformat(text))
    raise TypeError(f"Unsupported datetime value type: {type(value)!r}")


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end]; 0 when end < start."""
    if end < start:
        return 0
    return (end - start).days + 1


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def month_year(day: date | datetime) -> str:
    """Billing cycle key, e.g. '10-2025'."""
    return day.strftime(MONTH_YEAR_FORMAT)


def is_month_year(value: str) -> bool:
    try:
        datetime.strptime(value, MONTH_YEAR_FORMAT)
    except (TypeError, ValueError):
        return False
    return len(value) == 7
