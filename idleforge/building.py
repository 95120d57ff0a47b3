from __future__ import annotations

from dataclasses import dataclass, field

from idleforge.cost_scaling import CostScaling


@dataclass(frozen=True)
class BuildingDef:
    """Static definition of a purchasable production building."""

    id: str
    display_name: str = ""
    base_cost: float = 0.0
    base_cps: float = 0.0
    emoji: str = ""
    cost_scaling: CostScaling | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)


@dataclass
class BuildingState:
    """Mutable runtime state for a building."""

    count: int = 0


@dataclass(frozen=True)
class BuildingStatus:
    """Read-only snapshot of a building for query results."""

    id: str
    display_name: str
    owned: int
    cost: int
    produced_per_unit: float
    affordable: bool
    emoji: str = ""
