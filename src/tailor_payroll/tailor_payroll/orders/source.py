from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..commission.model import CommissionInput
from ..common.datetime_utils import ceil_days_between
from ..core.constants import DEFAULT_COMPLEXITY_FACTOR, DEFAULT_DELIVERY_DAYS, DEFAULT_QUALITY_SCORE
from .model import OrderSummary


class OrderCompletionSource(Protocol):
    def get_completed_orders(self, employee_id: str, start_date: date, end_date: date) -> Sequence[OrderSummary]:
        raise NotImplementedError


class NoCompletedOrders:
    """Default adapter until the order -> employee assignment store is wired in."""

    def get_completed_orders(self, employee_id: str, start_date: date, end_date: date) -> Sequence[OrderSummary]:
        return []


def to_commission_input(order: OrderSummary, employee_id: str) -> CommissionInput:
    meta = order.completion_metadata or {}

    completion_days = ceil_days_between(order.order_date, order.completed_at)
    delivery_days = ceil_days_between(order.order_date, order.delivery_date)

    return CommissionInput(
        order_id=order.order_id,
        employee_id=employee_id,
        order_type=order.order_type,
        order_amount=float(order.total_amount or 0),
        complexity_factor=float(meta.get("complexity_factor", DEFAULT_COMPLEXITY_FACTOR)),
        completion_days=completion_days if completion_days is not None else 0,
        delivery_days=delivery_days if delivery_days is not None else DEFAULT_DELIVERY_DAYS,
        quality_score=float(meta.get("quality_score", DEFAULT_QUALITY_SCORE)),
        order_date=order.order_date,
    )
