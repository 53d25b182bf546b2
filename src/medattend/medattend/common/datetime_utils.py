from __future__ import annotations

import time
from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value) -> date:
    """Parse YYYY-MM-DD string into date (date objects pass through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}") from None


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def now_millis() -> int:
    return int(time.time() * 1000)


def days_between(start: date, end: date) -> int:
    return (end - start).days
