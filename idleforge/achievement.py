from __future__ import annotations

from dataclasses import dataclass

from idleforge.requirement import Requirement


@dataclass(frozen=True)
class AchievementDef:
    """A named one-time milestone that pays out when its check is met."""

    id: str
    display_name: str = ""
    check: Requirement | None = None
    reward_coins: float = 0.0

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass
class AchievementState:
    got: bool = False


@dataclass(frozen=True)
class AchievementStatus:
    id: str
    display_name: str
    got: bool
    reward_coins: float
