from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..model import CommissionRule


@dataclass(frozen=True)
class BaseCommission:
    amount: float
    percentage_part: Optional[float] = None
    fixed_part: Optional[float] = None


class CommissionStrategy(ABC):
    """Strategy Pattern: encapsulate how base commission is derived from a rule."""

    @abstractmethod
    def base_commission(self, *, order_amount: float, rule: CommissionRule) -> BaseCommission:
        raise NotImplementedError
