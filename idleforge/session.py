from __future__ import annotations

import atexit
import logging
import time
from typing import Callable

from idleforge.autosave import DebouncedSaver
from idleforge.definition import GameDefinition
from idleforge.persistence import PersistenceAdapter, SaveStore
from idleforge.results import OfflineReport
from idleforge.runtime import GameRuntime

logger = logging.getLogger(__name__)

# Mutations that are written through immediately rather than debounced.
_WRITE_THROUGH = frozenset({"prestige", "hard_reset", "import"})


class GameSession:
    """Host loop glue: load, catch up, tick on the clock, autosave, flush.

    Owns a GameRuntime plus the persistence and debounced saver around
    it. Single-threaded; the host calls ``step`` from its timer.
    """

    def __init__(
        self,
        definition: GameDefinition,
        store: SaveStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        cfg = definition.config
        self.definition = definition
        self.clock = clock
        self.persistence = PersistenceAdapter(definition, store)
        self.runtime = GameRuntime(definition, state=self.persistence.load(), clock=clock)
        self.saver = DebouncedSaver(
            self.persistence,
            lambda: self.runtime.state,
            debounce=cfg.save_debounce_seconds,
            autosave_interval=cfg.autosave_interval,
            clock=clock,
        )
        self.runtime.add_listener(self._on_event)
        self.offline: OfflineReport | None = None
        self._next_tick: float | None = None
        self._closed = False

    def __enter__(self) -> GameSession:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def start(self, now: float | None = None, register_exit: bool = False) -> OfflineReport:
        """Credit time spent away and arm the recurring tick."""
        now = self.clock() if now is None else now
        self.offline = self.runtime.catch_up(now)
        self._next_tick = now + self.definition.config.tick_interval
        if register_exit:
            atexit.register(self.close)
        return self.offline

    def step(self, now: float | None = None) -> float:
        """Run the recurring tick if due, then give the saver a chance to write."""
        now = self.clock() if now is None else now
        gained = 0.0
        if self._next_tick is None or now >= self._next_tick:
            gained = self.runtime.advance_clock(now)
            self._next_tick = now + self.definition.config.tick_interval
        self.saver.poll(now)
        return gained

    def wait(self, seconds: float) -> tuple[float, list[str]]:
        """Play *seconds* of in-game time in tick-sized slices.

        Used by playtesting surfaces; wall-clock bookkeeping is untouched.
        Returns coins gained and achievements unlocked along the way.
        """
        step = self.definition.config.tick_interval
        before = {a.id for a in self.runtime.get_achievements() if a.got}
        gained = 0.0
        remaining = seconds
        while remaining > 0:
            dt = min(step, remaining)
            gained += self.runtime.tick(dt)
            remaining -= dt
        after = {a.id for a in self.runtime.get_achievements() if a.got}
        return gained, sorted(after - before)

    def hard_reset(self) -> None:
        self.runtime.hard_reset()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.saver.flush()

    def _on_event(self, event: str) -> None:
        if event == "hard_reset":
            self.persistence.discard()
        if event in _WRITE_THROUGH:
            self.saver.flush()
        else:
            self.saver.mark_dirty()
