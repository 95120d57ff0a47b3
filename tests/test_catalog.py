"""Tests for the Idle Forge catalog."""
import pytest

from idleforge.catalog import define_game
from idleforge.currency import Currency
from idleforge.definition import GameConfig
from idleforge.runtime import GameRuntime


def _runtime() -> GameRuntime:
    return GameRuntime(define_game(), clock=lambda: 0.0)


def test_definition_is_valid():
    assert define_game().validate() == []


def test_tables():
    defn = define_game()
    assert defn.building_ids() == ["cursor", "miner", "factory", "bank", "lab", "foundry"]
    assert defn.upgrade_ids() == [
        "click1", "click2", "auto1", "factory_boost",
        "global1", "click3", "eff1", "multi1",
    ]
    assert defn.achievement_ids() == ["first_click", "100_coins", "10_buildings", "1000_total"]
    assert defn.get_building("lab").display_name == "Research Lab"
    assert defn.get_upgrade("multi1").currency is Currency.PRESTIGE


def test_custom_config():
    defn = define_game(GameConfig(name="Short", offline_cap_seconds=60))
    assert defn.config.offline_cap_seconds == 60
    assert defn.get_building("cursor").base_cost == 15


def test_first_click_reward():
    rt = _runtime()
    rt.manual_click()
    assert rt.get_state().has_achievement("first_click")
    assert rt.get_coins() == 6


def test_opening_moves():
    rt = _runtime()
    rt.state.coins = 50
    assert rt.purchase_upgrade("click1").success
    assert rt.get_per_click() == 2
    rt.state.coins = 15
    assert rt.purchase_building("cursor").success
    assert rt.get_cps() == pytest.approx(0.1)
    assert rt.get_buildings()[0].cost == 18


def test_mining_shift_needs_a_miner():
    rt = _runtime()
    rt.state.coins = 5_000
    assert rt.purchase_upgrade("auto1").reason == "Upgrade locked"
    rt.purchase_building("miner")
    assert rt.purchase_upgrade("auto1").success
    assert rt.get_cps() == pytest.approx(1.5)


def test_manager_achievement():
    rt = _runtime()
    rt.state.coins = 1_000
    rt.purchase_building("cursor", 10)
    state = rt.get_state()
    assert state.total_buildings() == 10
    assert state.has_achievement("10_buildings")


def test_prestige_core_bonus():
    rt = _runtime()
    rt.state.total_coins = 1_000_000
    assert rt.prestige().earned == 10
    assert rt.purchase_upgrade("multi1").success
    assert rt.get_prestige_points() == 5
    rt.state.buildings["miner"].count = 10
    assert rt.get_cps() == pytest.approx(10 * 1.05)
