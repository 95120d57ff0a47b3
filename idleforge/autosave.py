from __future__ import annotations

import logging
import time
from typing import Callable

from idleforge.persistence import PersistenceAdapter, SaveStatus
from idleforge.state import EconomyState

logger = logging.getLogger(__name__)


class DebouncedSaver:
    """Coalesces bursts of mutations into a single write.

    Driven cooperatively: the host calls ``mark_dirty`` after each
    mutation and ``poll`` from its loop. A mutation inside the debounce
    window pushes the deadline back instead of queueing another write.
    ``poll`` also writes every ``autosave_interval`` seconds, and
    ``flush`` writes unconditionally (used on exit).
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        state_source: Callable[[], EconomyState],
        debounce: float = 0.8,
        autosave_interval: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.persistence = persistence
        self.state_source = state_source
        self.debounce = debounce
        self.autosave_interval = autosave_interval
        self.clock = clock
        self.deadline: float | None = None
        self.last_save: float = clock()
        self.writes = 0

    @property
    def dirty(self) -> bool:
        return self.deadline is not None

    @property
    def status(self) -> SaveStatus:
        if self.dirty and self.persistence.status is not SaveStatus.FAILED:
            return SaveStatus.PENDING
        return self.persistence.status

    def mark_dirty(self, now: float | None = None) -> None:
        now = self.clock() if now is None else now
        self.deadline = now + self.debounce

    def poll(self, now: float | None = None) -> bool:
        """Write if the debounce window or autosave interval has elapsed."""
        now = self.clock() if now is None else now
        if self.deadline is not None and now >= self.deadline:
            return self._write(now)
        if now - self.last_save >= self.autosave_interval:
            return self._write(now)
        return False

    def flush(self, now: float | None = None) -> bool:
        return self._write(self.clock() if now is None else now)

    def _write(self, now: float) -> bool:
        self.last_save = now
        ok = self.persistence.save(self.state_source())
        self.writes += 1
        if ok:
            self.deadline = None
        else:
            # Stay dirty; the next poll retries.
            self.deadline = now + self.debounce
            logger.warning("Save will be retried in %.1fs", self.debounce)
        return ok
