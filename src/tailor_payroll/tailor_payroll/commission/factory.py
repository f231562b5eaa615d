from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CalculationType
from ..core.exceptions import ValidationError
from .strategies.base import CommissionStrategy
from .strategies.fixed_strategy import FixedStrategy
from .strategies.hybrid_strategy import HybridStrategy
from .strategies.percentage_strategy import PercentageStrategy
from .strategies.tiered_strategy import TieredStrategy


@dataclass
class CommissionStrategyFactory:
    """Factory Pattern: choose the base-commission strategy for a rule."""

    def for_calculation_type(self, calculation_type: CalculationType) -> CommissionStrategy:
        if calculation_type == CalculationType.PERCENTAGE:
            return PercentageStrategy()
        if calculation_type == CalculationType.FIXED:
            return FixedStrategy()
        if calculation_type == CalculationType.TIERED:
            return TieredStrategy()
        if calculation_type == CalculationType.HYBRID:
            return HybridStrategy()
        raise ValidationError(f"Unknown calculation type: {calculation_type}")
