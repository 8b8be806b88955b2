"""Worked-time resolution from clock-in/out values.

Clock values carry no date. Both are placed on one reference date; when the
end is not after the start the shift is taken to end on the following day.
Unreadable values resolve to zero rather than raising, since the results only
feed display aggregates.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from ..common.datetime_utils import parse_time_of_day
from ..core.constants import REFERENCE_DATE
from ..core.enums import WorkKind

logger = logging.getLogger(__name__)


def _is_day_off(work_kind: Any) -> bool:
    try:
        return WorkKind(work_kind) == WorkKind.DAY_OFF
    except ValueError:
        return False


def _span(clock_in: Any, clock_out: Any) -> Optional[tuple[datetime, datetime]]:
    """Start/end instants on the reference date, or None when unusable."""
    try:
        t_in = parse_time_of_day(clock_in)
        t_out = parse_time_of_day(clock_out)
    except (TypeError, ValueError):
        logger.warning("Unreadable clock values in=%r out=%r; counting 0 hours", clock_in, clock_out)
        return None
    if t_in is None or t_out is None:
        return None
    return datetime.combine(REFERENCE_DATE, t_in), datetime.combine(REFERENCE_DATE, t_out)


def compute_minutes(clock_in: Any, clock_out: Any, work_kind: Any = WorkKind.REGULAR) -> int:
    if _is_day_off(work_kind):
        return 0

    span = _span(clock_in, clock_out)
    if span is None:
        return 0

    start, end = span
    if end <= start:
        end += timedelta(days=1)

    minutes = int((end - start).total_seconds() // 60)
    return minutes if minutes > 0 else 0


def compute_hours(clock_in: Any, clock_out: Any, work_kind: Any = WorkKind.REGULAR) -> float:
    """Worked hours for one entry (0.0 for day-off, missing or bad times)."""
    return compute_minutes(clock_in, clock_out, work_kind) / 60


def is_night_shift(clock_in: Any, clock_out: Any) -> bool:
    span = _span(clock_in, clock_out)
    if span is None:
        return False
    start, end = span
    return end <= start


def format_hours(clock_in: Any, clock_out: Any, work_kind: Any = WorkKind.REGULAR) -> str:
    if _is_day_off(work_kind):
        return "day off"
    return f"{compute_hours(clock_in, clock_out, work_kind):.2f}"
