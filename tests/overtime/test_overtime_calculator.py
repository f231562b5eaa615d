from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.tailor_payroll.tailor_payroll.core.enums import AttendanceStatus
from src.tailor_payroll.tailor_payroll.core.exceptions import ConfigurationError
from src.tailor_payroll.tailor_payroll.overtime.calculator import OvertimeCalculator, calculate_overtime_pay
from src.tailor_payroll.tailor_payroll.overtime.holidays import FixedHolidayCalendar
from tests.fakes import InMemoryAttendance, InMemorySalaryStructures, make_structure, worked_day

TUESDAY = date(2025, 1, 7)
SATURDAY = date(2025, 1, 11)
WINDOW = (date(2025, 1, 1), date(2025, 1, 31))


def _calc(records, *, holidays=None, structures=None):
    attendance = InMemoryAttendance(records)
    structures = structures or InMemorySalaryStructures([make_structure()])
    return OvertimeCalculator(attendance, structures, holidays=holidays), attendance


def test_ten_hour_tuesday_splits_into_regular_and_overtime():
    calc, _ = _calc([worked_day(TUESDAY, 10)])

    result = calc.calculate("E1", *WINDOW)

    assert result.total_regular_hours == pytest.approx(8)
    assert result.total_overtime_hours == pytest.approx(2)
    assert result.total_weekend_hours == 0
    assert result.total_holiday_hours == 0


def test_weekend_excess_goes_to_weekend_bucket_not_overtime():
    calc, _ = _calc([worked_day(SATURDAY, 11)])

    result = calc.calculate("E1", *WINDOW)

    assert result.total_regular_hours == pytest.approx(8)
    assert result.total_weekend_hours == pytest.approx(3)
    assert result.total_overtime_hours == 0


def test_short_day_is_all_regular():
    calc, _ = _calc([worked_day(TUESDAY, 6.5), worked_day(SATURDAY, 4)])

    result = calc.calculate("E1", *WINDOW)

    assert result.total_regular_hours == pytest.approx(10.5)
    assert result.total_overtime_hours == 0
    assert result.total_weekend_hours == 0


def test_break_minutes_are_subtracted_before_classifying():
    calc, _ = _calc([worked_day(TUESDAY, 8, break_minutes=60)])

    result = calc.calculate("E1", *WINDOW)

    assert result.total_regular_hours == pytest.approx(8)
    assert result.total_overtime_hours == 0


def test_days_without_worked_hours_still_appear_in_breakdown():
    missing_out = replace(worked_day(date(2025, 1, 8), 9), clock_out_time=None)
    absent = worked_day(date(2025, 1, 9), 9, status=AttendanceStatus.ABSENT)
    calc, _ = _calc([missing_out, absent])

    result = calc.calculate("E1", *WINDOW)

    assert [d.date for d in result.daily_breakdown] == [date(2025, 1, 8), date(2025, 1, 9)]
    assert all(d.regular_hours == 0 and d.overtime_hours == 0 for d in result.daily_breakdown)
    assert result.daily_breakdown[1].status == AttendanceStatus.ABSENT


def test_holiday_calendar_takes_precedence_over_weekend_and_overtime():
    holidays = FixedHolidayCalendar([TUESDAY, SATURDAY])
    calc, _ = _calc([worked_day(TUESDAY, 10), worked_day(SATURDAY, 9)], holidays=holidays)

    result = calc.calculate("E1", *WINDOW)

    assert result.total_holiday_hours == pytest.approx(3)
    assert result.total_overtime_hours == 0
    assert result.total_weekend_hours == 0


def test_records_outside_window_are_ignored():
    calc, _ = _calc([worked_day(date(2025, 2, 3), 10)])

    result = calc.calculate("E1", *WINDOW)

    assert result.daily_breakdown == []
    assert result.total_regular_hours == 0


def test_missing_salary_structure_raises():
    calc, _ = _calc([worked_day(TUESDAY, 10)], structures=InMemorySalaryStructures())

    with pytest.raises(ConfigurationError):
        calc.calculate("E1", *WINDOW)


def test_overtime_pay_uses_rate_multipliers():
    structure = make_structure()
    calc, _ = _calc([worked_day(TUESDAY, 10), worked_day(SATURDAY, 9)])

    result = calc.calculate("E1", *WINDOW, structure=structure)

    # 16 regular * 50 + 2 overtime * 50 * 1.5 + 1 weekend * 50 * 2.0
    assert calculate_overtime_pay(result, structure) == pytest.approx(800 + 150 + 100)


def test_trace_echoes_policy_and_serializes():
    calc, _ = _calc([worked_day(TUESDAY, 10)])

    trace = calc.calculate("E1", *WINDOW).trace
    data = trace.to_dict()

    assert data["kind"] == "overtime"
    assert data["standard_hours"] == 8.0
    assert data["overtime_rate"] == 1.5
    assert data["daily_breakdown"][0]["overtime_hours"] == pytest.approx(2)


def test_update_attendance_with_overtime_writes_hours_back():
    calc, attendance = _calc([worked_day(TUESDAY, 10), worked_day(date(2025, 1, 8), 7)])

    calc.update_attendance_with_overtime("E1", *WINDOW)

    by_day = {r.attendance_date: r for r in attendance.records}
    assert by_day[TUESDAY].regular_hours == pytest.approx(8)
    assert by_day[TUESDAY].overtime_hours == pytest.approx(2)
    assert by_day[date(2025, 1, 8)].overtime_hours == 0
    assert len(attendance.updates) == 2
