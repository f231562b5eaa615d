from __future__ import annotations

from typing import Sequence

from ..core.enums import CalculationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_json, opt_float, to_json
from .model import CommissionRule
from .repository import CommissionRuleRepository


class MySQLCommissionRuleRepository(CommissionRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_for_order_type(self, order_type: str) -> Sequence[CommissionRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, name, description, order_type, calculation_type, base_percentage, fixed_amount,
                       complexity_multiplier_min, complexity_multiplier_max, time_bonus_early,
                       time_penalty_delay, quality_bonus, conditions, is_active, created_at,
                       effective_from, effective_to
                FROM commission_rules
                WHERE order_type=%s AND is_active=1
                ORDER BY created_at DESC
                """,
                (order_type,),
            )
            rows = fetchall(cur)
            return [
                CommissionRule(
                    rule_id=int(r["rule_id"]),
                    name=r["name"],
                    description=r.get("description"),
                    order_type=r["order_type"],
                    calculation_type=CalculationType(r["calculation_type"]),
                    base_percentage=opt_float(r.get("base_percentage")),
                    fixed_amount=opt_float(r.get("fixed_amount")),
                    complexity_multiplier_min=float(r["complexity_multiplier_min"]),
                    complexity_multiplier_max=float(r["complexity_multiplier_max"]),
                    time_bonus_early=float(r["time_bonus_early"]),
                    time_penalty_delay=float(r["time_penalty_delay"]),
                    quality_bonus=float(r["quality_bonus"]),
                    conditions=from_json(r.get("conditions")),
                    is_active=bool(r["is_active"]),
                    created_at=r["created_at"],
                    effective_from=r.get("effective_from"),
                    effective_to=r.get("effective_to"),
                )
                for r in rows
            ]

    def create(self, rule: CommissionRule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO commission_rules(
                    name, description, order_type, calculation_type, base_percentage, fixed_amount,
                    complexity_multiplier_min, complexity_multiplier_max, time_bonus_early, time_penalty_delay,
                    quality_bonus, conditions, is_active, created_at, effective_from, effective_to
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    rule.name,
                    rule.description,
                    rule.order_type,
                    rule.calculation_type.value,
                    rule.base_percentage,
                    rule.fixed_amount,
                    rule.complexity_multiplier_min,
                    rule.complexity_multiplier_max,
                    rule.time_bonus_early,
                    rule.time_penalty_delay,
                    rule.quality_bonus,
                    to_json(rule.conditions),
                    int(rule.is_active),
                    rule.created_at,
                    rule.effective_from,
                    rule.effective_to,
                ),
            )
            return int(cur.lastrowid)
