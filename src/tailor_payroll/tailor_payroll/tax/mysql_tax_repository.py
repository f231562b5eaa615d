from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import TaxType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_json, opt_float
from .model import TaxDeduction, TaxDeductionEntry
from .repository import TaxDeductionEntryRepository, TaxDeductionRepository

_DEDUCTION_COLUMNS = """
    tax_deduction_id, name, tax_type, rate, fixed_amount, min_income, max_income,
    effective_from, effective_to, is_active
"""


def _to_deduction(r: Dict[str, Any]) -> TaxDeduction:
    return TaxDeduction(
        tax_deduction_id=int(r["tax_deduction_id"]),
        name=r["name"],
        tax_type=TaxType(r["tax_type"]),
        rate=opt_float(r.get("rate")),
        fixed_amount=opt_float(r.get("fixed_amount")),
        min_income=opt_float(r.get("min_income")),
        max_income=opt_float(r.get("max_income")),
        effective_from=r.get("effective_from"),
        effective_to=r.get("effective_to"),
        is_active=bool(r["is_active"]),
    )


class MySQLTaxDeductionRepository(TaxDeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_for_year(self, tax_year: int) -> Sequence[TaxDeduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DEDUCTION_COLUMNS}
                FROM tax_deductions
                WHERE is_active=1
                  AND (effective_from IS NULL OR effective_from <= %s)
                  AND (effective_to IS NULL OR effective_to >= %s)
                ORDER BY tax_deduction_id ASC
                """,
                (f"{int(tax_year)}-12-31", f"{int(tax_year)}-01-01"),
            )
            return [_to_deduction(r) for r in fetchall(cur)]

    def find_active_by_type(self, tax_type: TaxType) -> Optional[TaxDeduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DEDUCTION_COLUMNS}
                FROM tax_deductions
                WHERE tax_type=%s AND is_active=1
                ORDER BY tax_deduction_id ASC
                LIMIT 1
                """,
                (tax_type.value,),
            )
            r = fetchone(cur)
            return _to_deduction(r) if r else None

    def create(self, *, name: str, tax_type: TaxType, rate: Optional[float], is_active: bool = True) -> TaxDeduction:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tax_deductions(name, tax_type, rate, is_active)
                VALUES(%s,%s,%s,%s)
                """,
                (name, tax_type.value, rate, int(is_active)),
            )
            new_id = int(cur.lastrowid)
        return TaxDeduction(tax_deduction_id=new_id, name=name, tax_type=tax_type, rate=rate, is_active=is_active)


class MySQLTaxDeductionEntryRepository(TaxDeductionEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_payrolls(self, payroll_ids: Sequence[int]) -> Sequence[TaxDeductionEntry]:
        ids = [int(i) for i in payroll_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.entry_id, e.payroll_id, e.tax_deduction_id, e.amount, e.calculation_basis, td.tax_type
                FROM tax_deduction_entries e
                JOIN tax_deductions td ON td.tax_deduction_id = e.tax_deduction_id
                WHERE e.payroll_id IN ({placeholders})
                ORDER BY e.entry_id ASC
                """,
                tuple(ids),
            )
            return [
                TaxDeductionEntry(
                    entry_id=int(r["entry_id"]),
                    payroll_id=int(r["payroll_id"]),
                    tax_deduction_id=int(r["tax_deduction_id"]),
                    tax_type=TaxType(r["tax_type"]),
                    amount=float(r["amount"]),
                    calculation_basis=from_json(r.get("calculation_basis")) or {},
                )
                for r in fetchall(cur)
            ]
