from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records with start_date <= attendance_date <= end_date, ascending by date."""

        raise NotImplementedError

    def update_hours(
        self,
        *,
        employee_id: str,
        attendance_date: date,
        regular_hours: float,
        overtime_hours: float,
    ) -> int:
        raise NotImplementedError
