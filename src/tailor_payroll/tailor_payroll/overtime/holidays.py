from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError


class NoHolidays:
    """Default calendar: no day is a holiday, so the holiday bucket stays zero."""

    def is_holiday(self, day: date) -> bool:
        return False


class FixedHolidayCalendar:
    def __init__(self, days: Iterable[date]):
        self._days = frozenset(days)

    def is_holiday(self, day: date) -> bool:
        return day in self._days
