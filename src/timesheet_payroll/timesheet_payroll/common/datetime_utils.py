from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def parse_time_of_day(value: Any) -> Optional[time]:
    """Parse a clock value into a time of day.

    Accepts "HH:MM", "HH:MM:SS", datetime.time and the timedelta values the
    MySQL driver returns for TIME columns. Empty values give None; anything
    else that cannot be read raises ValueError.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds())
        if total_seconds < 0 or total_seconds >= 86400:
            raise ValueError(f"Time out of range: {value!r}")
        return time(total_seconds // 3600, (total_seconds % 3600) // 60, total_seconds % 60)

    text = str(value).strip()
    if not text:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time string: {value!r}")


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def month_bounds(reference: date) -> tuple[date, date]:
    """First and last day (inclusive) of the month containing `reference`."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
