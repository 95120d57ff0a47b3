from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from idleforge.achievement import AchievementState
from idleforge.building import BuildingState
from idleforge.upgrade import UpgradeState

if TYPE_CHECKING:
    from idleforge.definition import GameDefinition


class EconomyState:
    """Mutable save-data record: balances, owned counts, flags, timestamps.

    The three containers are keyed by exactly the ids of the definition
    tables the state was built from.
    """

    def __init__(self, definition: GameDefinition, now: float | None = None) -> None:
        self.coins: float = 0.0
        self.total_coins: float = 0.0
        self.click_power_base: float = 1.0
        self.prestige_points: float = 0.0
        self.buildings: dict[str, BuildingState] = {}
        self.upgrades: dict[str, UpgradeState] = {}
        self.achievements: dict[str, AchievementState] = {}
        self.last_tick: float = time.time() if now is None else now
        self.version: int = definition.config.state_version

        for bdef in definition.buildings:
            self.buildings[bdef.id] = BuildingState()

        for udef in definition.upgrades:
            self.upgrades[udef.id] = UpgradeState()

        for adef in definition.achievements:
            self.achievements[adef.id] = AchievementState()

    def building_count(self, id: str) -> int:
        bs = self.buildings.get(id)
        return bs.count if bs else 0

    def total_buildings(self) -> int:
        return sum(bs.count for bs in self.buildings.values())

    def has_upgrade(self, id: str) -> bool:
        us = self.upgrades.get(id)
        return us.bought if us else False

    def has_achievement(self, id: str) -> bool:
        ast = self.achievements.get(id)
        return ast.got if ast else False

    def earn(self, amount: float) -> None:
        """Credit *amount* to both the spendable and lifetime balances."""
        self.coins += amount
        self.total_coins += amount

    def to_dict(self) -> dict[str, Any]:
        """Structured record using the persisted field names."""
        return {
            "coins": self.coins,
            "totalCoins": self.total_coins,
            "clickPowerBase": self.click_power_base,
            "prestigePoints": self.prestige_points,
            "buildings": {k: {"count": v.count} for k, v in self.buildings.items()},
            "upgrades": {k: {"bought": v.bought} for k, v in self.upgrades.items()},
            "achievements": {k: {"got": v.got} for k, v in self.achievements.items()},
            "lastTick": int(round(self.last_tick * 1000)),
            "version": self.version,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EconomyState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"EconomyState(coins={self.coins!r}, total_coins={self.total_coins!r}, "
            f"prestige_points={self.prestige_points!r}, "
            f"buildings={self.total_buildings()})"
        )
