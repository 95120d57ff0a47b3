"""Tests for state module."""
from idleforge.achievement import AchievementDef
from idleforge.building import BuildingDef
from idleforge.definition import GameConfig, GameDefinition
from idleforge.effect import Effect
from idleforge.requirement import Req
from idleforge.state import EconomyState
from idleforge.upgrade import UpgradeDef


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test"),
        buildings=[
            BuildingDef("farm", base_cost=10, base_cps=1),
            BuildingDef("mine", base_cost=20, base_cps=2),
        ],
        upgrades=[UpgradeDef("boost", effect=Effect.mul_global(2), cost=5)],
        achievements=[AchievementDef("first", check=Req.total_coins(">=", 1))],
    )


def test_initialization():
    state = EconomyState(_make_definition(), now=123.0)
    assert state.coins == 0.0
    assert state.total_coins == 0.0
    assert state.click_power_base == 1.0
    assert state.prestige_points == 0.0
    assert set(state.buildings) == {"farm", "mine"}
    assert set(state.upgrades) == {"boost"}
    assert set(state.achievements) == {"first"}
    assert state.last_tick == 123.0
    assert state.version == 2


def test_building_count():
    state = EconomyState(_make_definition(), now=0)
    assert state.building_count("farm") == 0
    state.buildings["farm"].count = 5
    state.buildings["mine"].count = 2
    assert state.building_count("farm") == 5
    assert state.building_count("nonexistent") == 0
    assert state.total_buildings() == 7


def test_flags():
    state = EconomyState(_make_definition(), now=0)
    assert not state.has_upgrade("boost")
    assert not state.has_achievement("first")
    state.upgrades["boost"].bought = True
    state.achievements["first"].got = True
    assert state.has_upgrade("boost")
    assert state.has_achievement("first")
    assert not state.has_upgrade("nonexistent")


def test_earn():
    state = EconomyState(_make_definition(), now=0)
    state.earn(12.5)
    assert state.coins == 12.5
    assert state.total_coins == 12.5


def test_to_dict_field_names():
    state = EconomyState(_make_definition(), now=1.5)
    state.buildings["farm"].count = 3
    record = state.to_dict()
    assert record == {
        "coins": 0.0,
        "totalCoins": 0.0,
        "clickPowerBase": 1.0,
        "prestigePoints": 0.0,
        "buildings": {"farm": {"count": 3}, "mine": {"count": 0}},
        "upgrades": {"boost": {"bought": False}},
        "achievements": {"first": {"got": False}},
        "lastTick": 1500,
        "version": 2,
    }


def test_equality():
    defn = _make_definition()
    a = EconomyState(defn, now=0)
    b = EconomyState(defn, now=0)
    assert a == b
    b.coins = 1
    assert a != b
