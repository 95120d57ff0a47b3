"""Tests for pipeline module."""
import pytest

from idleforge.building import BuildingDef
from idleforge.cost_scaling import CostScaling
from idleforge.definition import GameConfig, GameDefinition
from idleforge.effect import Effect
from idleforge.multipliers import Multipliers
from idleforge.pipeline import ProductionPipeline
from idleforge.state import EconomyState
from idleforge.upgrade import UpgradeDef


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test"),
        buildings=[
            BuildingDef("cursor", base_cost=15, base_cps=0.1),
            BuildingDef("miner", base_cost=100, base_cps=1),
            BuildingDef("flat", base_cost=50, base_cps=2, cost_scaling=CostScaling.custom(
                lambda base, count: base
            )),
        ],
        upgrades=[
            UpgradeDef("shift", effect=Effect.mul_building("miner", 1.5), cost=1),
            UpgradeDef("fund", effect=Effect.mul_global(2), cost=1),
            UpgradeDef("eff", effect=Effect.mul_cost(0.5), cost=1),
            UpgradeDef("tools", effect=Effect.add_click(1), cost=1),
            UpgradeDef("hammer", effect=Effect.mul_click(2), cost=1),
        ],
    )


def _setup():
    defn = _make_definition()
    return ProductionPipeline(defn), EconomyState(defn, now=0), defn


def test_cost_of_grows_per_unit_owned():
    p, state, defn = _setup()
    miner = defn.get_building("miner")
    assert p.cost_of(miner, 0, state) == 100
    assert p.cost_of(miner, 1, state) == 115
    assert p.cost_of(miner, 2, state) == 133  # 132.25


def test_cost_of_uses_cost_multiplier():
    p, state, defn = _setup()
    state.upgrades["eff"].bought = True
    cursor = defn.get_building("cursor")
    assert p.cost_of(cursor, 0, state) == 8  # ceil(7.5)


def test_cost_of_with_threaded_multipliers():
    p, state, defn = _setup()
    m = Multipliers(cost_mul=2.0)
    assert p.cost_of(defn.get_building("miner"), 0, state, m) == 200


def test_custom_building_scaling():
    p, state, defn = _setup()
    flat = defn.get_building("flat")
    assert p.cost_of(flat, 0, state) == p.cost_of(flat, 40, state) == 50


def test_production_per_unit():
    p, state, _ = _setup()
    assert p.production_per_unit("miner", state) == 1.0
    state.upgrades["shift"].bought = True
    state.upgrades["fund"].bought = True
    assert p.production_per_unit("miner", state) == pytest.approx(3.0)
    assert p.production_per_unit("cursor", state) == pytest.approx(0.2)


def test_production_per_unit_unknown_building():
    p, state, _ = _setup()
    assert p.production_per_unit("nonexistent", state) == 0.0


def test_total_rate():
    p, state, _ = _setup()
    assert p.total_rate(state) == 0.0
    state.buildings["cursor"].count = 10
    state.buildings["miner"].count = 5
    assert p.total_rate(state) == pytest.approx(6.0)
    state.upgrades["shift"].bought = True
    assert p.total_rate(state) == pytest.approx(8.5)


def test_click_value():
    p, state, _ = _setup()
    assert p.click_value(state) == 1.0
    state.upgrades["tools"].bought = True
    assert p.click_value(state) == 2.0
    state.upgrades["hammer"].bought = True
    assert p.click_value(state) == 4.0
    state.click_power_base = 3
    assert p.click_value(state) == 8.0


def test_results_follow_state_changes():
    """No stale multipliers: buying an upgrade shows up on the next call."""
    p, state, _ = _setup()
    state.buildings["miner"].count = 1
    before = p.total_rate(state)
    state.upgrades["fund"].bought = True
    assert p.total_rate(state) == pytest.approx(before * 2)
