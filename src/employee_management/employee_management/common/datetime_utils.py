from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.exceptions import ValidationError

MONTH_NAMES = tuple(calendar.month_name[1:])


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Please provide a valid date in YYYY-MM-DD format")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_name(month_index: int) -> str:
    """0-based month index -> English month name."""
    return MONTH_NAMES[month_index]


def current_month_year(today: date | None = None) -> tuple[str, int]:
    today = today or now_local().date()
    return month_name(today.month - 1), today.year


def normalize_month(value: str) -> str:
    """Accept 'march', 'Mar' or '3' and return 'March'."""
    v = str(value or "").strip()
    if v.isdigit() and 1 <= int(v) <= 12:
        return month_name(int(v) - 1)
    for name in MONTH_NAMES:
        if v.lower() in (name.lower(), name[:3].lower()):
            return name
    raise ValidationError("Month is not valid")
