from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from idleforge._types import compare

if TYPE_CHECKING:
    from idleforge.state import EconomyState


class Requirement(ABC):
    """Base class for all requirements: boolean conditions on economy state."""

    @abstractmethod
    def evaluate(self, state: EconomyState) -> bool: ...

    def __call__(self, state: EconomyState) -> bool:
        return self.evaluate(state)

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _AlwaysRequirement(Requirement):
    def evaluate(self, state: EconomyState) -> bool:
        return True


class _CoinsRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.coins, self.op, self.threshold)


class _TotalCoinsRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.total_coins, self.op, self.threshold)


class _PrestigeRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.prestige_points, self.op, self.threshold)


class _OwnsRequirement(Requirement):
    def __init__(self, building_id: str) -> None:
        self.building_id = building_id

    def evaluate(self, state: EconomyState) -> bool:
        return state.building_count(self.building_id) >= 1


class _CountRequirement(Requirement):
    def __init__(self, building_id: str, op: str, threshold: int) -> None:
        self.building_id = building_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.building_count(self.building_id), self.op, self.threshold)


class _TotalBuildingsRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: EconomyState) -> bool:
        return compare(state.total_buildings(), self.op, self.threshold)


class _UpgradeRequirement(Requirement):
    def __init__(self, upgrade_id: str) -> None:
        self.upgrade_id = upgrade_id

    def evaluate(self, state: EconomyState) -> bool:
        return state.has_upgrade(self.upgrade_id)


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: EconomyState) -> bool:
        return all(r.evaluate(state) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: EconomyState) -> bool:
        return any(r.evaluate(state) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[EconomyState], bool]) -> None:
        self.fn = fn

    def evaluate(self, state: EconomyState) -> bool:
        return bool(self.fn(state))


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def always() -> Requirement:
        return _AlwaysRequirement()

    @staticmethod
    def coins(op: str, threshold: float) -> Requirement:
        return _CoinsRequirement(op, threshold)

    @staticmethod
    def total_coins(op: str, threshold: float) -> Requirement:
        return _TotalCoinsRequirement(op, threshold)

    @staticmethod
    def prestige_points(op: str, threshold: float) -> Requirement:
        return _PrestigeRequirement(op, threshold)

    @staticmethod
    def owns(building_id: str) -> Requirement:
        return _OwnsRequirement(building_id)

    @staticmethod
    def count(building_id: str, op: str, threshold: int) -> Requirement:
        return _CountRequirement(building_id, op, threshold)

    @staticmethod
    def total_buildings(op: str, threshold: int) -> Requirement:
        return _TotalBuildingsRequirement(op, threshold)

    @staticmethod
    def upgrade(upgrade_id: str) -> Requirement:
        return _UpgradeRequirement(upgrade_id)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[EconomyState], bool]) -> Requirement:
        return _CustomRequirement(fn)
