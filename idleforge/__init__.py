# idleforge: Idle Forge incremental game economy engine

from idleforge._types import compare
from idleforge.requirement import Requirement, Req
from idleforge.cost_scaling import CostScaling
from idleforge.effect import EffectType, EffectDef, Effect
from idleforge.currency import Currency
from idleforge.building import BuildingDef, BuildingState, BuildingStatus
from idleforge.upgrade import UpgradeDef, UpgradeState, UpgradeStatus
from idleforge.achievement import AchievementDef, AchievementState, AchievementStatus
from idleforge.definition import GameDefinition, GameConfig
from idleforge.state import EconomyState
from idleforge.multipliers import Multipliers, resolve_multipliers
from idleforge.pipeline import ProductionPipeline
from idleforge.prestige import PrestigeResult
from idleforge.results import PurchaseResult, ImportResult, OfflineReport, GameStats
from idleforge.runtime import GameRuntime
from idleforge.persistence import (
    SaveStore,
    MemorySaveStore,
    FileSaveStore,
    PersistenceAdapter,
    SaveStatus,
    reconcile,
)
from idleforge.autosave import DebouncedSaver
from idleforge.session import GameSession
from idleforge.formatting import format_number, format_status

__all__ = [
    # Types
    "compare",
    # Requirements
    "Requirement",
    "Req",
    # Cost
    "CostScaling",
    # Effects
    "EffectType",
    "EffectDef",
    "Effect",
    # Data model
    "Currency",
    "BuildingDef",
    "BuildingState",
    "BuildingStatus",
    "UpgradeDef",
    "UpgradeState",
    "UpgradeStatus",
    "AchievementDef",
    "AchievementState",
    "AchievementStatus",
    # Definition
    "GameDefinition",
    "GameConfig",
    # State
    "EconomyState",
    # Multipliers & pipeline
    "Multipliers",
    "resolve_multipliers",
    "ProductionPipeline",
    # Runtime
    "GameRuntime",
    "PrestigeResult",
    "PurchaseResult",
    "ImportResult",
    "OfflineReport",
    "GameStats",
    # Persistence
    "SaveStore",
    "MemorySaveStore",
    "FileSaveStore",
    "PersistenceAdapter",
    "SaveStatus",
    "reconcile",
    "DebouncedSaver",
    "GameSession",
    # Formatting
    "format_number",
    "format_status",
]
