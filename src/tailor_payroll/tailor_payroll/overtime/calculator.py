from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import is_weekend
from ..core.exceptions import ConfigurationError
from ..salary.model import SalaryStructure
from ..salary.repository import SalaryStructureRepository
from .holidays import HolidayCalendar, NoHolidays
from .model import DailyHours, OvertimeResult, OvertimeTrace
from .worked_hours import StandardWorkedHoursCalculator, WorkedHoursCalculator

logger = logging.getLogger(__name__)


class OvertimeCalculator:
    """Splits attendance into regular / overtime / weekend / holiday hours.

    A day's excess over ``standard_hours`` lands in exactly one bucket:
    holiday if the calendar says so, else weekend on Saturday/Sunday, else
    overtime.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        structures: SalaryStructureRepository,
        *,
        hours: Optional[WorkedHoursCalculator] = None,
        holidays: Optional[HolidayCalendar] = None,
    ):
        self._attendance = attendance
        self._structures = structures
        self._hours = hours or StandardWorkedHoursCalculator()
        self._holidays = holidays or NoHolidays()

    def calculate(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        *,
        structure: Optional[SalaryStructure] = None,
    ) -> OvertimeResult:
        structure = structure or self._structures.get_active_for_employee(employee_id)
        if not structure:
            raise ConfigurationError(f"No salary structure found for employee: {employee_id}")

        records = self._attendance.list_for_range(employee_id=employee_id, start_date=start_date, end_date=end_date)
        standard = float(structure.standard_hours)

        daily: list[DailyHours] = []
        totals = {"regular": 0.0, "overtime": 0.0, "weekend": 0.0, "holiday": 0.0}

        for record in sorted(records, key=lambda r: r.attendance_date):
            buckets = {"regular": 0.0, "overtime": 0.0, "weekend": 0.0, "holiday": 0.0}
            worked = self._hours.worked_hours(record)

            if worked > 0:
                if worked <= standard:
                    buckets["regular"] = worked
                else:
                    buckets["regular"] = standard
                    extra = worked - standard
                    if self._holidays.is_holiday(record.attendance_date):
                        buckets["holiday"] = extra
                    elif is_weekend(record.attendance_date):
                        buckets["weekend"] = extra
                    else:
                        buckets["overtime"] = extra

            for k, v in buckets.items():
                totals[k] += v

            daily.append(
                DailyHours(
                    date=record.attendance_date,
                    regular_hours=buckets["regular"],
                    overtime_hours=buckets["overtime"],
                    weekend_hours=buckets["weekend"],
                    holiday_hours=buckets["holiday"],
                    status=record.status,
                )
            )

        trace = OvertimeTrace(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            standard_hours=standard,
            hourly_rate=float(structure.hourly_rate),
            overtime_rate=float(structure.overtime_rate),
            weekend_rate=float(structure.weekend_rate),
            holiday_rate=float(structure.holiday_rate),
            daily_breakdown=tuple(daily),
        )

        logger.debug(
            "overtime for %s %s..%s: regular=%.2f overtime=%.2f weekend=%.2f holiday=%.2f",
            employee_id, start_date, end_date,
            totals["regular"], totals["overtime"], totals["weekend"], totals["holiday"],
        )

        return OvertimeResult(
            total_regular_hours=totals["regular"],
            total_overtime_hours=totals["overtime"],
            total_weekend_hours=totals["weekend"],
            total_holiday_hours=totals["holiday"],
            daily_breakdown=daily,
            trace=trace,
        )

    def update_attendance_with_overtime(self, employee_id: str, start_date: date, end_date: date) -> OvertimeResult:
        """Recalculate the window and write each day's regular/overtime hours back."""
        result = self.calculate(employee_id, start_date, end_date)
        for day in result.daily_breakdown:
            self._attendance.update_hours(
                employee_id=employee_id,
                attendance_date=day.date,
                regular_hours=day.regular_hours,
                overtime_hours=day.overtime_hours,
            )
        return result


def calculate_overtime_pay(result: OvertimeResult, structure: SalaryStructure) -> float:
    rate = float(structure.hourly_rate)
    return (
        result.total_regular_hours * rate
        + result.total_overtime_hours * rate * float(structure.overtime_rate)
        + result.total_weekend_hours * rate * float(structure.weekend_rate)
        + result.total_holiday_hours * rate * float(structure.holiday_rate)
    )
