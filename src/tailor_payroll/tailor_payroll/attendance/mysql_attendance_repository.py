from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, opt_float
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, attendance_date, clock_in_time, clock_out_time,
                       total_break_minutes, status, regular_hours, overtime_hours
                FROM attendance
                WHERE employee_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date ASC
                """,
                (employee_id, start_date, end_date),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=str(r["employee_id"]),
                    attendance_date=r["attendance_date"],
                    clock_in_time=r.get("clock_in_time"),
                    clock_out_time=r.get("clock_out_time"),
                    status=AttendanceStatus(r["status"]),
                    total_break_minutes=int(r.get("total_break_minutes") or 0),
                    regular_hours=opt_float(r.get("regular_hours")),
                    overtime_hours=opt_float(r.get("overtime_hours")),
                )
                for r in rows
            ]

    def update_hours(
        self,
        *,
        employee_id: str,
        attendance_date: date,
        regular_hours: float,
        overtime_hours: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET regular_hours=%s, overtime_hours=%s
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (regular_hours, overtime_hours, employee_id, attendance_date),
            )
            return int(cur.rowcount)
