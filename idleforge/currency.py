from __future__ import annotations

from enum import Enum


class Currency(str, Enum):
    """Currencies an upgrade can be priced in."""

    COINS = "coins"
    PRESTIGE = "prestige"

    @property
    def label(self) -> str:
        return "coins" if self is Currency.COINS else "prestige points"
