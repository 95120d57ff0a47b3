from __future__ import annotations

from dataclasses import dataclass, field

from idleforge.achievement import AchievementDef
from idleforge.building import BuildingDef
from idleforge.cost_scaling import CostScaling
from idleforge.currency import Currency
from idleforge.effect import MULTIPLICATIVE, EffectType
from idleforge.upgrade import UpgradeDef


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Untitled"
    tick_interval: float = 1.0
    offline_cap_seconds: float = 3600.0
    save_debounce_seconds: float = 0.8
    autosave_interval: float = 30.0
    cost_growth: float = 1.15
    prestige_divisor: float = 100_000
    prestige_bonus_per_point: float = 0.01
    save_key: str = "idleforge.save.v2"
    state_version: int = 2


@dataclass
class GameDefinition:
    """Complete static definition of an idle game."""

    config: GameConfig = field(default_factory=GameConfig)
    buildings: list[BuildingDef] = field(default_factory=list)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _buildings_by_id: dict[str, BuildingDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _default_scaling: CostScaling = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._buildings_by_id = {b.id: b for b in self.buildings}
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._achievements_by_id = {a.id: a for a in self.achievements}
        self._default_scaling = CostScaling.exponential(self.config.cost_growth)

    def get_building(self, id: str) -> BuildingDef | None:
        return self._buildings_by_id.get(id)

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def building_ids(self) -> list[str]:
        return [b.id for b in self.buildings]

    def upgrade_ids(self) -> list[str]:
        return [u.id for u in self.upgrades]

    def achievement_ids(self) -> list[str]:
        return [a.id for a in self.achievements]

    def cost_scaling_for(self, building: BuildingDef) -> CostScaling:
        return building.cost_scaling or self._default_scaling

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []
        building_ids = {b.id for b in self.buildings}

        # Check for duplicate IDs
        for kind, ids in (
            ("building", [b.id for b in self.buildings]),
            ("upgrade", [u.id for u in self.upgrades]),
            ("achievement", [a.id for a in self.achievements]),
        ):
            seen: set[str] = set()
            for id in ids:
                if id in seen:
                    errors.append(f"Duplicate {kind} ID: {id!r}")
                seen.add(id)

        for b in self.buildings:
            if b.base_cost <= 0:
                errors.append(f"Building {b.id!r} has non-positive base_cost {b.base_cost}")
            if b.base_cps < 0:
                errors.append(f"Building {b.id!r} has negative base_cps {b.base_cps}")

        for u in self.upgrades:
            if u.cost < 0:
                errors.append(f"Upgrade {u.id!r} has negative cost {u.cost}")
            if not isinstance(u.currency, Currency):
                errors.append(f"Upgrade {u.id!r} uses unknown currency {u.currency!r}")
            eff = u.effect
            if eff.type is EffectType.MUL_BUILDING and eff.target not in building_ids:
                errors.append(
                    f"Upgrade {u.id!r} has effect targeting unknown building {eff.target!r}"
                )
            if isinstance(eff.value, bool) or not isinstance(eff.value, (int, float)):
                errors.append(f"Upgrade {u.id!r} has non-numeric effect value {eff.value!r}")
            elif eff.type in MULTIPLICATIVE and eff.value <= 0:
                errors.append(
                    f"Upgrade {u.id!r} has non-positive {eff.type.name} factor {eff.value}"
                )

        for a in self.achievements:
            if a.check is None:
                errors.append(f"Achievement {a.id!r} has no check")
            if a.reward_coins < 0:
                errors.append(f"Achievement {a.id!r} has negative reward {a.reward_coins}")

        cfg = self.config
        if cfg.offline_cap_seconds < 0:
            errors.append("offline_cap_seconds must not be negative")
        if cfg.prestige_divisor <= 0:
            errors.append("prestige_divisor must be positive")
        if cfg.cost_growth < 1:
            errors.append("cost_growth must be at least 1")

        return errors
