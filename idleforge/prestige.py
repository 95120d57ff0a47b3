from __future__ import annotations

import math
from dataclasses import dataclass


def prestige_reward(total_coins: float, divisor: float) -> int:
    """Prestige points a reset would award: floor(total_coins / divisor)."""
    return max(0, math.floor(total_coins / divisor))


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige attempt."""

    success: bool
    earned: int = 0
    prestige_points: float = 0.0
    reason: str = ""
