from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Determines how a building's cost changes with owned count."""

    def __init__(self, fn: Callable[[float, int], float]) -> None:
        self._fn = fn

    def compute(self, base_cost: float, current_count: int) -> float:
        """Raw (unrounded, unmultiplied) cost of the next unit."""
        return self._fn(base_cost, current_count)

    def price(self, base_cost: float, current_count: int, cost_mul: float = 1.0) -> int:
        """Cost actually charged: ceil(raw * cost_mul)."""
        return math.ceil(self.compute(base_cost, current_count) * cost_mul)

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = base * growth_rate^count."""
        gr = growth_rate  # capture

        def _compute(base: float, count: int) -> float:
            return base * gr ** count

        return cls(_compute)

    @classmethod
    def custom(cls, fn: Callable[[float, int], float]) -> CostScaling:
        """Arbitrary cost function."""
        return cls(fn)
