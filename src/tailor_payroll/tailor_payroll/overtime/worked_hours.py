from __future__ import annotations

from abc import ABC, abstractmethod

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import hours_between
from ..core.enums import AttendanceStatus


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_hours(self, record: AttendanceRecord) -> float:
        raise NotImplementedError


class StandardWorkedHoursCalculator(WorkedHoursCalculator):
    """Standard rule: (out - in) - break, only for PRESENT days with both punches."""

    def worked_hours(self, record: AttendanceRecord) -> float:
        if record.status != AttendanceStatus.PRESENT:
            return 0.0
        if not record.clock_in_time or not record.clock_out_time:
            return 0.0
        hours = hours_between(record.clock_in_time, record.clock_out_time)
        hours -= int(record.total_break_minutes or 0) / 60
        return hours
