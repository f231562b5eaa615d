from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class OrderSummary:
    """Read-model of a completed order, as supplied by the order store."""

    order_id: str
    order_type: str
    total_amount: Optional[float]
    order_date: Optional[date]
    delivery_date: Optional[date]
    completed_at: Optional[datetime] = None
    completion_metadata: dict = field(default_factory=dict)
