from __future__ import annotations

from dataclasses import dataclass

from idleforge.currency import Currency
from idleforge.effect import EffectDef
from idleforge.requirement import Requirement


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a one-time permanent upgrade."""

    id: str
    effect: EffectDef
    display_name: str = ""
    description: str = ""
    cost: float = 0.0
    currency: Currency = Currency.COINS
    unlock: Requirement | None = None

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)
        if not self.description:
            object.__setattr__(self, "description", self.effect.describe())


@dataclass
class UpgradeState:
    """Mutable runtime state for an upgrade."""

    bought: bool = False


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only snapshot of an upgrade for query results."""

    id: str
    display_name: str
    description: str
    cost: float
    currency: Currency
    bought: bool
    unlocked: bool
    affordable: bool
