"""The Idle Forge definition tables."""
from __future__ import annotations

from idleforge.achievement import AchievementDef
from idleforge.building import BuildingDef
from idleforge.currency import Currency
from idleforge.definition import GameConfig, GameDefinition
from idleforge.effect import Effect
from idleforge.requirement import Req
from idleforge.upgrade import UpgradeDef


def define_game(config: GameConfig | None = None) -> GameDefinition:
    return GameDefinition(
        config=config or GameConfig(name="Idle Forge"),
        buildings=[
            BuildingDef("cursor", "Worker", base_cost=15, base_cps=0.1, emoji="🪚"),
            BuildingDef("miner", "Miner", base_cost=100, base_cps=1, emoji="⛏️"),
            BuildingDef("factory", "Factory", base_cost=1100, base_cps=8, emoji="🏭"),
            BuildingDef("bank", "Bank", base_cost=12_000, base_cps=47, emoji="🏦"),
            BuildingDef("lab", "Research Lab", base_cost=130_000, base_cps=260, emoji="🔬"),
            BuildingDef("foundry", "Foundry", base_cost=1_400_000, base_cps=1400, emoji="⚙️"),
        ],
        upgrades=[
            UpgradeDef(
                id="click1",
                display_name="Sharper Tools",
                description="+1 per click",
                cost=50,
                effect=Effect.add_click(1),
            ),
            UpgradeDef(
                id="click2",
                display_name="Master Hammer",
                description="x2 click power",
                cost=400,
                effect=Effect.mul_click(2),
            ),
            UpgradeDef(
                id="auto1",
                display_name="Mining Shift",
                description="Miners +50% CPS",
                cost=1500,
                unlock=Req.owns("miner"),
                effect=Effect.mul_building("miner", 1.5),
            ),
            UpgradeDef(
                id="factory_boost",
                display_name="Assembly Line",
                description="Factories +100% CPS",
                cost=10_000,
                unlock=Req.owns("factory"),
                effect=Effect.mul_building("factory", 2),
            ),
            UpgradeDef(
                id="global1",
                display_name="Public Funding",
                description="All building CPS +10%",
                cost=50_000,
                effect=Effect.mul_global(1.1),
            ),
            UpgradeDef(
                id="click3",
                display_name="Precision Strike",
                description="+10 per click",
                cost=200_000,
                effect=Effect.add_click(10),
            ),
            UpgradeDef(
                id="eff1",
                display_name="Efficiency Research",
                description="All building costs -5%",
                cost=1_000_000,
                effect=Effect.mul_cost(0.95),
            ),
            UpgradeDef(
                id="multi1",
                display_name="Prestige Core",
                description="Prestige points give +1% CPS each",
                cost=5,
                currency=Currency.PRESTIGE,
                effect=Effect.enable_prestige(),
            ),
        ],
        achievements=[
            AchievementDef(
                "first_click", "First Click",
                check=Req.total_coins(">=", 1), reward_coins=5,
            ),
            AchievementDef(
                "100_coins", "100 Coins",
                check=Req.total_coins(">=", 100), reward_coins=25,
            ),
            AchievementDef(
                "10_buildings", "Manager",
                check=Req.total_buildings(">=", 10), reward_coins=100,
            ),
            AchievementDef(
                "1000_total", "Industrialist",
                check=Req.total_coins(">=", 1000), reward_coins=500,
            ),
        ],
    )
