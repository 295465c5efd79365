# backend/minibnb/utils/date_ranges.py
"""
Date-interval helpers shared by availability reporting and booking guards.

Reservation periods are closed intervals [check_in, check_out]. Two periods
that merely touch (one checks out the day the other checks in) overlap.
"""

import calendar
from datetime import date, datetime, timezone
import math
from typing import Any, Optional, Union

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

DateLike = Union[date, str]


def to_date(value: DateLike) -> date:
    """Coerce a date or a YYYY-MM-DD string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def periods_overlap(
    start_a: DateLike,
    end_a: DateLike,
    start_b: DateLike,
    end_b: DateLike,
) -> bool:
    """
    Closed-interval overlap test.

    True iff start_a <= end_b and end_a >= start_b. Boundary-equal dates
    count as overlapping.
    """
    return to_date(start_a) <= to_date(end_b) and to_date(end_a) >= to_date(start_b)


def overlap_clause(
    start_column: Any, end_column: Any, start: DateLike, end: DateLike
) -> ColumnElement[bool]:
    """SQL form of periods_overlap for a stored period against [start, end]."""
    return and_(start_column <= to_date(end), end_column >= to_date(start))


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def add_months(value: date, months: int) -> date:
    """Shift a date by calendar months, clamping to the last day of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def nights_between(check_in: DateLike, check_out: DateLike) -> int:
    """Number of billable nights; partial days round up."""
    start = to_date(check_in)
    end = to_date(check_out)
    seconds = (
        datetime.combine(end, datetime.min.time()) - datetime.combine(start, datetime.min.time())
    ).total_seconds()
    return math.ceil(seconds / 86400)


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a strict YYYY-MM-DD calendar date.

    Returns None for None; raises ValueError for malformed or impossible dates
    such as 2024-02-30.
    """
    if value is None:
        return None
    parts = value.split("-")
    if [len(p) for p in parts] != [4, 2, 2] or not all(p.isdigit() for p in parts):
        raise ValueError("Format YYYY-MM-DD")
    try:
        return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError as exc:
        raise ValueError("Invalid calendar date") from exc
