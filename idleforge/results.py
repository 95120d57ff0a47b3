from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a building or upgrade purchase."""

    success: bool
    id: str
    purchased: int = 0
    spent: float = 0.0
    reason: str = ""


@dataclass(frozen=True)
class ImportResult:
    success: bool
    reason: str = ""


@dataclass(frozen=True)
class OfflineReport:
    """What a catch-up tick credited for time spent away."""

    elapsed: float
    credited_seconds: float
    earned: float

    @property
    def capped(self) -> bool:
        return self.credited_seconds < self.elapsed


@dataclass(frozen=True)
class GameStats:
    coins: float
    total_coins: float
    total_buildings: int
    prestige_points: float
    version: int
