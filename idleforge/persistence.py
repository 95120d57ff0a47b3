"""Serialization, blob stores and schema-aware reconciliation of saves."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from idleforge._types import as_float
from idleforge.state import EconomyState

if TYPE_CHECKING:
    from idleforge.definition import GameDefinition

logger = logging.getLogger(__name__)

# Top-level fields a save may carry. Anything else is ignored.
RECOGNIZED_FIELDS = frozenset({
    "coins",
    "totalCoins",
    "clickPowerBase",
    "prestigePoints",
    "buildings",
    "upgrades",
    "achievements",
    "lastTick",
    "version",
})


class SaveStatus(Enum):
    IDLE = "Idle"
    PENDING = "Saving..."
    SAVED = "Saved"
    FAILED = "Save failed"


class SaveStore(ABC):
    """Keyed storage for a single serialized blob."""

    @abstractmethod
    def read(self, key: str) -> str | None: ...

    @abstractmethod
    def write(self, key: str, blob: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class MemorySaveStore(SaveStore):
    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self.blobs[key] = blob

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


class FileSaveStore(SaveStore):
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, blob: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()


# ── Codec ────────────────────────────────────────────────────────────


def serialize(state: EconomyState) -> str:
    """Exact serialized form of *state*."""
    return json.dumps(state.to_dict(), separators=(",", ":"))


def parse(text: str) -> dict[str, Any]:
    """Parse save text into a record. Raises ValueError if it is not one."""
    try:
        parsed = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValueError(f"not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _entry(container: Any, id: str) -> dict[str, Any]:
    if not isinstance(container, dict):
        return {}
    entry = container.get(id)
    return entry if isinstance(entry, dict) else {}


def reconcile(
    partial: dict[str, Any],
    definition: GameDefinition,
    now: float | None = None,
) -> EconomyState:
    """Build a complete EconomyState from a possibly partial record.

    Starts from fresh defaults, overlays only recognized fields, then
    completes each container against the definition tables: missing ids
    get defaults and ids the definition does not know are dropped.
    """
    state = EconomyState(definition, now=now)

    unknown = sorted(k for k in partial if k not in RECOGNIZED_FIELDS)
    if unknown:
        logger.debug("Ignoring unrecognized save fields: %s", ", ".join(unknown))

    state.coins = max(0.0, as_float(partial.get("coins"), state.coins))
    state.total_coins = max(0.0, as_float(partial.get("totalCoins"), state.total_coins))
    state.click_power_base = max(
        1.0, as_float(partial.get("clickPowerBase"), state.click_power_base)
    )
    state.prestige_points = max(
        0.0, as_float(partial.get("prestigePoints"), state.prestige_points)
    )

    last_tick_ms = as_float(partial.get("lastTick"), -1.0)
    if last_tick_ms > 0:
        state.last_tick = last_tick_ms / 1000.0

    version = partial.get("version")
    if isinstance(version, int) and not isinstance(version, bool) and version > 0:
        state.version = version

    buildings = partial.get("buildings")
    for id, bs in state.buildings.items():
        bs.count = max(0, int(as_float(_entry(buildings, id).get("count"), 0.0)))

    upgrades = partial.get("upgrades")
    for id, us in state.upgrades.items():
        us.bought = _entry(upgrades, id).get("bought") is True

    achievements = partial.get("achievements")
    for id, ast in state.achievements.items():
        ast.got = _entry(achievements, id).get("got") is True

    return state


# ── Adapter ──────────────────────────────────────────────────────────


class PersistenceAdapter:
    """Reads and writes EconomyState under the definition's fixed save key."""

    def __init__(self, definition: GameDefinition, store: SaveStore) -> None:
        self.definition = definition
        self.store = store
        self.key = definition.config.save_key
        self.status = SaveStatus.IDLE

    def load(self) -> EconomyState | None:
        """Return the reconciled saved state, or None if absent or unreadable."""
        try:
            raw = self.store.read(self.key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Load failed: %s", exc)
            return None
        if not raw:
            return None
        try:
            record = parse(raw)
        except ValueError as exc:
            logger.warning("Load failed, ignoring save %r: %s", self.key, exc)
            return None
        return self.reconcile(record)

    def save(self, state: EconomyState) -> bool:
        """Write *state*. Failures are logged and reported, never raised."""
        try:
            self.store.write(self.key, serialize(state))
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Save failed: %s", exc)
            self.status = SaveStatus.FAILED
            return False
        self.status = SaveStatus.SAVED
        return True

    def discard(self) -> None:
        try:
            self.store.delete(self.key)
        except OSError as exc:
            logger.error("Could not remove save %r: %s", self.key, exc)

    def reconcile(self, partial: dict[str, Any], now: float | None = None) -> EconomyState:
        return reconcile(partial, self.definition, now=now)
