from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayrollStatus, PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_json, to_json
from ..tax.model import NewTaxDeductionEntry, TaxDeductionEntry
from .model import NewPayroll, Payroll
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, period, period_type, start_date, end_date,
    base_salary, overtime_pay, commission_pay, bonus_pay, total_earnings,
    tax_deductions, other_deductions, total_deductions, net_pay, status,
    salary_structure_id, calculation_details, tax_calculation_details, created_at
"""


def _to_payroll(r: Dict[str, Any]) -> Payroll:
    return Payroll(
        payroll_id=int(r["payroll_id"]),
        employee_id=str(r["employee_id"]),
        period=r["period"],
        period_type=PeriodType(r["period_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        base_salary=float(r["base_salary"]),
        overtime_pay=float(r["overtime_pay"]),
        commission_pay=float(r["commission_pay"]),
        bonus_pay=float(r["bonus_pay"]),
        total_earnings=float(r["total_earnings"]),
        tax_deductions=float(r["tax_deductions"]),
        other_deductions=float(r["other_deductions"]),
        total_deductions=float(r["total_deductions"]),
        net_pay=float(r["net_pay"]),
        status=PayrollStatus(r["status"]),
        salary_structure_id=r.get("salary_structure_id"),
        calculation_details=from_json(r.get("calculation_details")) or {},
        tax_calculation_details=from_json(r.get("tax_calculation_details")),
        created_at=r.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, new: NewPayroll) -> Payroll:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(
                    employee_id, period, period_type, start_date, end_date,
                    base_salary, overtime_pay, commission_pay, bonus_pay, total_earnings,
                    tax_deductions, other_deductions, total_deductions, net_pay, status,
                    salary_structure_id, calculation_details, tax_calculation_details
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.employee_id,
                    new.period,
                    new.period_type.value,
                    new.start_date,
                    new.end_date,
                    new.base_salary,
                    new.overtime_pay,
                    new.commission_pay,
                    new.bonus_pay,
                    new.total_earnings,
                    new.tax_deductions,
                    new.other_deductions,
                    new.total_deductions,
                    new.net_pay,
                    PayrollStatus.DRAFT.value,
                    new.salary_structure_id,
                    to_json(new.calculation_details),
                    to_json(new.tax_calculation_details),
                ),
            )
            payroll_id = int(cur.lastrowid)

        return Payroll(
            payroll_id=payroll_id,
            employee_id=new.employee_id,
            period=new.period,
            period_type=new.period_type,
            start_date=new.start_date,
            end_date=new.end_date,
            base_salary=new.base_salary,
            overtime_pay=new.overtime_pay,
            commission_pay=new.commission_pay,
            bonus_pay=new.bonus_pay,
            total_earnings=new.total_earnings,
            tax_deductions=new.tax_deductions,
            other_deductions=new.other_deductions,
            total_deductions=new.total_deductions,
            net_pay=new.net_pay,
            status=PayrollStatus.DRAFT,
            salary_structure_id=new.salary_structure_id,
            calculation_details=new.calculation_details,
            tax_calculation_details=new.tax_calculation_details,
        )

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_payroll(r) if r else None

    def update_status(self, *, payroll_id: int, status: PayrollStatus, expected: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payrolls SET status=%s WHERE payroll_id=%s AND status=%s",
                (status.value, int(payroll_id), expected.value),
            )
            return cur.rowcount > 0

    def replace_tax_deductions(
        self,
        *,
        payroll_id: int,
        tax_deductions: float,
        total_deductions: float,
        net_pay: float,
        tax_calculation_details: Optional[dict],
        entries: Sequence[NewTaxDeductionEntry],
    ) -> Optional[list[TaxDeductionEntry]]:
        payroll_id = int(payroll_id)
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock holds the DRAFT check until commit.
            cur.execute("SELECT status FROM payrolls WHERE payroll_id=%s FOR UPDATE", (payroll_id,))
            r = fetchone(cur)
            if not r or r["status"] != PayrollStatus.DRAFT.value:
                return None

            cur.execute("DELETE FROM tax_deduction_entries WHERE payroll_id=%s", (payroll_id,))
            stored: list[TaxDeductionEntry] = []
            for entry in entries:
                cur.execute(
                    """
                    INSERT INTO tax_deduction_entries(payroll_id, tax_deduction_id, amount, calculation_basis)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (payroll_id, int(entry.tax_deduction_id), entry.amount, to_json(entry.calculation_basis)),
                )
                stored.append(
                    TaxDeductionEntry(
                        entry_id=int(cur.lastrowid),
                        payroll_id=payroll_id,
                        tax_deduction_id=int(entry.tax_deduction_id),
                        tax_type=entry.tax_type,
                        amount=entry.amount,
                        calculation_basis=entry.calculation_basis,
                    )
                )

            cur.execute(
                """
                UPDATE payrolls
                SET tax_deductions=%s, total_deductions=%s, net_pay=%s, tax_calculation_details=%s
                WHERE payroll_id=%s
                """,
                (tax_deductions, total_deductions, net_pay, to_json(tax_calculation_details), payroll_id),
            )
            return stored

    def list_paid_for_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payrolls
                WHERE employee_id=%s AND status=%s AND start_date >= %s AND end_date <= %s
                ORDER BY start_date ASC
                """,
                (employee_id, PayrollStatus.PAID.value, start_date, end_date),
            )
            return [_to_payroll(r) for r in fetchall(cur)]
