from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_CURRENCY
from ..core.enums import BonusStatus, BonusType, PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_json, to_json
from .model import Bonus
from .repository import BonusRepository


class MySQLBonusRepository(BonusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved(self, *, employee_id: str, period: str, period_type: PeriodType) -> Sequence[Bonus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT bonus_id, employee_id, bonus_type, amount, currency, period, period_type, status,
                       commission_rule_id, performance_metric_id, calculation_basis
                FROM bonuses
                WHERE employee_id=%s AND period=%s AND period_type=%s AND status=%s
                ORDER BY bonus_id ASC
                """,
                (employee_id, period, period_type.value, BonusStatus.APPROVED.value),
            )
            rows = fetchall(cur)
            return [
                Bonus(
                    bonus_id=int(r["bonus_id"]),
                    employee_id=str(r["employee_id"]),
                    bonus_type=BonusType(r["bonus_type"]),
                    amount=float(r["amount"]),
                    currency=r.get("currency") or DEFAULT_CURRENCY,
                    period=r["period"],
                    period_type=PeriodType(r["period_type"]),
                    status=BonusStatus(r["status"]),
                    commission_rule_id=r.get("commission_rule_id"),
                    performance_metric_id=r.get("performance_metric_id"),
                    calculation_basis=from_json(r.get("calculation_basis")),
                )
                for r in rows
            ]

    def create(
        self,
        *,
        employee_id: str,
        bonus_type: BonusType,
        amount: float,
        currency: str,
        period: str,
        period_type: PeriodType,
        status: BonusStatus,
        commission_rule_id: Optional[int] = None,
        calculation_basis: Optional[dict] = None,
    ) -> Bonus:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO bonuses(employee_id, bonus_type, amount, currency, period, period_type, status,
                                    commission_rule_id, calculation_basis)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    bonus_type.value,
                    amount,
                    currency,
                    period,
                    period_type.value,
                    status.value,
                    commission_rule_id,
                    to_json(calculation_basis),
                ),
            )
            bonus_id = int(cur.lastrowid)

        return Bonus(
            bonus_id=bonus_id,
            employee_id=employee_id,
            bonus_type=bonus_type,
            amount=amount,
            currency=currency,
            period=period,
            period_type=period_type,
            status=status,
            commission_rule_id=commission_rule_id,
            calculation_basis=calculation_basis,
        )
