from __future__ import annotations

from typing import Optional

from ..core.enums import PayPeriod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SalaryStructure
from .repository import SalaryStructureRepository


class MySQLSalaryStructureRepository(SalaryStructureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_employee(self, employee_id: str) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT salary_structure_id, employee_id, name, description, base_salary, pay_period,
                       standard_hours, hourly_rate, overtime_rate, weekend_rate, holiday_rate,
                       effective_from, effective_to, is_active
                FROM salary_structures
                WHERE employee_id=%s AND is_active=1
                ORDER BY effective_from DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SalaryStructure(
                salary_structure_id=int(r["salary_structure_id"]),
                employee_id=str(r["employee_id"]),
                name=r["name"],
                description=r.get("description"),
                base_salary=float(r["base_salary"]),
                pay_period=PayPeriod(r["pay_period"]),
                standard_hours=float(r["standard_hours"]),
                hourly_rate=float(r["hourly_rate"]),
                overtime_rate=float(r["overtime_rate"]),
                weekend_rate=float(r["weekend_rate"]),
                holiday_rate=float(r["holiday_rate"]),
                effective_from=r["effective_from"],
                effective_to=r.get("effective_to"),
                is_active=bool(r["is_active"]),
            )

    def create(self, structure: SalaryStructure) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_structures(
                    employee_id, name, description, base_salary, pay_period, standard_hours, hourly_rate,
                    overtime_rate, weekend_rate, holiday_rate, effective_from, effective_to, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    structure.employee_id,
                    structure.name,
                    structure.description,
                    structure.base_salary,
                    structure.pay_period.value,
                    structure.standard_hours,
                    structure.hourly_rate,
                    structure.overtime_rate,
                    structure.weekend_rate,
                    structure.holiday_rate,
                    structure.effective_from,
                    structure.effective_to,
                    int(structure.is_active),
                ),
            )
            return int(cur.lastrowid)
