from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DailyHours:
    date: date
    regular_hours: float
    overtime_hours: float
    weekend_hours: float
    holiday_hours: float
    status: AttendanceStatus


@dataclass(frozen=True)
class OvertimeTrace:
    """Policy echo carried verbatim into the payroll audit trail."""

    employee_id: str
    start_date: date
    end_date: date
    standard_hours: float
    hourly_rate: float
    overtime_rate: float
    weekend_rate: float
    holiday_rate: float
    daily_breakdown: tuple[DailyHours, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = "overtime"
        data["daily_breakdown"] = [asdict(d) for d in self.daily_breakdown]
        return data


@dataclass(frozen=True)
class OvertimeResult:
    total_regular_hours: float
    total_overtime_hours: float
    total_weekend_hours: float
    total_holiday_hours: float
    daily_breakdown: list[DailyHours] = field(default_factory=list)
    trace: Optional[OvertimeTrace] = None
