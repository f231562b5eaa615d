from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def is_weekend(day: date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def ceil_days_between(
    start: Optional[Union[date, datetime]],
    end: Optional[Union[date, datetime]],
) -> Optional[int]:
    """Whole days from start to end, rounded up; None when either side is missing."""
    if start is None or end is None:
        return None
    if not isinstance(start, datetime):
        start = datetime.combine(start, datetime.min.time())
    if not isinstance(end, datetime):
        end = datetime.combine(end, datetime.min.time())
    return math.ceil((end - start).total_seconds() / 86400)


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)
