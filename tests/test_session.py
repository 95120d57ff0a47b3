"""Tests for session module."""
import json

import pytest

from idleforge.achievement import AchievementDef
from idleforge.building import BuildingDef
from idleforge.definition import GameConfig, GameDefinition
from idleforge.persistence import MemorySaveStore, SaveStatus
from idleforge.requirement import Req
from idleforge.session import GameSession
from idleforge.state import EconomyState

KEY = "test.save"


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Test", save_key=KEY),
        buildings=[BuildingDef("farm", base_cost=10, base_cps=1)],
        achievements=[AchievementDef("rich", check=Req.total_coins(">=", 3))],
    )


def _saved(store: MemorySaveStore) -> dict:
    return json.loads(store.blobs[KEY])


def _seed(store: MemorySaveStore, last_tick: float, farms: int) -> None:
    defn = _make_definition()
    state = EconomyState(defn, now=last_tick)
    state.buildings["farm"].count = farms
    store.write(KEY, json.dumps(state.to_dict()))


def test_fresh_session_starts_from_defaults():
    clock = FakeClock()
    session = GameSession(_make_definition(), MemorySaveStore(), clock=clock)
    report = session.start()
    assert report.earned == 0
    assert session.runtime.get_coins() == 0


def test_loads_existing_save_and_credits_offline_time():
    store = MemorySaveStore()
    _seed(store, last_tick=1_000.0, farms=2)
    clock = FakeClock(1_100.0)
    session = GameSession(_make_definition(), store, clock=clock)
    report = session.start()
    assert report.credited_seconds == 100
    assert report.earned == 200
    assert session.runtime.get_state().building_count("farm") == 2
    assert session.runtime.get_state().last_tick == 1_100.0


def test_offline_credit_is_capped():
    store = MemorySaveStore()
    _seed(store, last_tick=0.0, farms=1)
    session = GameSession(_make_definition(), store, clock=FakeClock(7_200.0))
    report = session.start()
    assert report.capped
    assert report.earned == 3_600


def test_step_ticks_on_interval():
    clock = FakeClock(0.0)
    session = GameSession(_make_definition(), MemorySaveStore(), clock=clock)
    session.start()
    session.runtime.state.buildings["farm"].count = 1
    assert session.step(0.5) == 0
    assert session.step(1.0) == pytest.approx(1.0)
    assert session.step(3.0) == pytest.approx(2.0)


def test_mutations_are_debounced():
    clock = FakeClock(0.0)
    store = MemorySaveStore()
    session = GameSession(_make_definition(), store, clock=clock)
    session.start()
    session.runtime.manual_click()
    assert KEY not in store.blobs
    assert session.saver.status is SaveStatus.PENDING
    session.step(0.5)
    assert KEY not in store.blobs
    session.step(1.0)
    assert _saved(store)["coins"] == 1


def test_prestige_is_written_through():
    clock = FakeClock(0.0)
    store = MemorySaveStore()
    session = GameSession(_make_definition(), store, clock=clock)
    session.start()
    session.runtime.state.total_coins = 200_000
    assert session.runtime.prestige().success
    assert _saved(store)["prestigePoints"] == 2


def test_hard_reset_replaces_save():
    store = MemorySaveStore()
    _seed(store, last_tick=0.0, farms=5)
    session = GameSession(_make_definition(), store, clock=FakeClock(0.0))
    session.start()
    session.hard_reset()
    assert _saved(store)["buildings"]["farm"]["count"] == 0


def test_import_is_written_through():
    store = MemorySaveStore()
    session = GameSession(_make_definition(), store, clock=FakeClock(0.0))
    session.start()
    assert session.runtime.import_state('{"coins": 9}').success
    assert _saved(store)["coins"] == 9


def test_wait_runs_tick_slices():
    session = GameSession(_make_definition(), MemorySaveStore(), clock=FakeClock(0.0))
    session.start()
    session.runtime.state.buildings["farm"].count = 1
    gained, unlocked = session.wait(2.5)
    assert gained == pytest.approx(2.5)
    assert unlocked == []
    gained, unlocked = session.wait(1)
    assert unlocked == ["rich"]


def test_close_flushes_once():
    store = MemorySaveStore()
    session = GameSession(_make_definition(), store, clock=FakeClock(0.0))
    session.start()
    session.runtime.manual_click()
    session.close()
    session.close()
    assert session.saver.writes == 1
    assert _saved(store)["coins"] == 1


def test_context_manager():
    store = MemorySaveStore()
    with GameSession(_make_definition(), store, clock=FakeClock(0.0)) as session:
        session.runtime.manual_click()
    assert _saved(store)["totalCoins"] == 1
