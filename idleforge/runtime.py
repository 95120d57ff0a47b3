from __future__ import annotations

import logging
import time
from typing import Callable

from idleforge.achievement import AchievementStatus
from idleforge.building import BuildingStatus
from idleforge.currency import Currency
from idleforge.definition import GameDefinition
from idleforge.multipliers import Multipliers
from idleforge.persistence import parse, reconcile, serialize
from idleforge.pipeline import ProductionPipeline
from idleforge.prestige import PrestigeResult, prestige_reward
from idleforge.results import GameStats, ImportResult, OfflineReport, PurchaseResult
from idleforge.state import EconomyState
from idleforge.upgrade import UpgradeStatus

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class GameRuntime:
    """Authoritative economy processor owning a single EconomyState.

    Every mutation runs to completion and leaves the state consistent
    before returning. Listeners are told the name of each mutation that
    changed something (``"click"``, ``"building"``, ``"upgrade"``,
    ``"tick"``, ``"achievement"``, ``"prestige"``, ``"hard_reset"``,
    ``"import"``).
    """

    def __init__(
        self,
        definition: GameDefinition,
        state: EconomyState | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.pipeline = ProductionPipeline(definition)
        self.clock = clock
        self.state = state if state is not None else EconomyState(definition, now=clock())
        self._listeners: list[Listener] = []

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta: float) -> float:
        """Accrue *delta* seconds of production. Returns coins gained."""
        if delta <= 0:
            return 0.0
        gained = self.pipeline.total_rate(self.state) * delta
        self.state.earn(gained)
        self.evaluate_achievements()
        self._notify("tick")
        return gained

    def advance_clock(self, now: float | None = None) -> float:
        """Credit production for wall-clock time since the last tick."""
        now = self.clock() if now is None else now
        credited = self._credit_window(now)
        gained = self.tick(credited) if credited > 0 else 0.0
        self.state.last_tick = now
        return gained

    def catch_up(self, now: float | None = None) -> OfflineReport:
        """One-time offline credit at session start."""
        now = self.clock() if now is None else now
        elapsed = max(0.0, now - self.state.last_tick)
        credited = self._credit_window(now)
        earned = self.tick(credited) if credited > 0 else 0.0
        self.state.last_tick = now
        if earned > 0:
            logger.info(
                "Offline for %.0fs, credited %.0fs: +%.2f coins",
                elapsed, credited, earned,
            )
        return OfflineReport(elapsed=elapsed, credited_seconds=credited, earned=earned)

    # ── Player actions ───────────────────────────────────────────────

    def manual_click(self) -> float:
        """Process one click. Returns the amount added."""
        value = self.pipeline.click_value(self.state)
        self.state.earn(value)
        self.evaluate_achievements()
        self._notify("click")
        return value

    def purchase_building(self, building_id: str, quantity: int = 1) -> PurchaseResult:
        """Buy up to *quantity* units, stopping at the first one not affordable."""
        bdef = self.definition.get_building(building_id)
        if bdef is None:
            return PurchaseResult(False, building_id, reason="Unknown building")
        if quantity < 1:
            return PurchaseResult(False, building_id, reason="Quantity must be at least 1")

        bs = self.state.buildings[building_id]
        purchased = 0
        spent = 0.0
        for _ in range(quantity):
            cost = self.pipeline.cost_of(bdef, bs.count, self.state)
            if self.state.coins < cost:
                break
            self.state.coins -= cost
            bs.count += 1
            purchased += 1
            spent += cost

        if purchased == 0:
            return PurchaseResult(False, building_id, reason="Not enough coins")

        logger.info("Bought %d x %s for %d coins", purchased, building_id, spent)
        self._notify("building")
        return PurchaseResult(True, building_id, purchased=purchased, spent=spent)

    def purchase_upgrade(self, upgrade_id: str) -> PurchaseResult:
        udef = self.definition.get_upgrade(upgrade_id)
        if udef is None:
            return PurchaseResult(False, upgrade_id, reason="Unknown upgrade")

        us = self.state.upgrades[upgrade_id]
        if us.bought:
            return PurchaseResult(False, upgrade_id, reason="Already bought")
        if udef.unlock is not None and not udef.unlock.evaluate(self.state):
            return PurchaseResult(False, upgrade_id, reason="Upgrade locked")

        if udef.currency is Currency.PRESTIGE:
            if self.state.prestige_points < udef.cost:
                return PurchaseResult(False, upgrade_id, reason="Not enough prestige points")
            self.state.prestige_points -= udef.cost
        else:
            if self.state.coins < udef.cost:
                return PurchaseResult(False, upgrade_id, reason="Not enough coins")
            self.state.coins -= udef.cost

        # Effects are picked up by the next multiplier resolution.
        us.bought = True
        logger.info("Purchased upgrade %s", udef.display_name)
        self._notify("upgrade")
        return PurchaseResult(True, upgrade_id, purchased=1, spent=udef.cost)

    def evaluate_achievements(self) -> list[str]:
        """Grant every achievement whose check now holds. Returns new ids.

        Repeats until nothing new is granted, so a reward that satisfies an
        earlier achievement is picked up in the same call.
        """
        granted: list[str] = []
        changed = True
        while changed:
            changed = False
            for adef in self.definition.achievements:
                ast = self.state.achievements[adef.id]
                if ast.got or adef.check is None:
                    continue
                if adef.check.evaluate(self.state):
                    ast.got = True
                    if adef.reward_coins:
                        self.state.earn(adef.reward_coins)
                    granted.append(adef.id)
                    changed = True
                    logger.info("Achievement unlocked: %s", adef.display_name)
        if granted:
            self._notify("achievement")
        return granted

    def prestige(self) -> PrestigeResult:
        """Convert lifetime coins into prestige points and start a new run."""
        cfg = self.definition.config
        earned = prestige_reward(self.state.total_coins, cfg.prestige_divisor)
        if earned <= 0:
            return PrestigeResult(
                success=False,
                prestige_points=self.state.prestige_points,
                reason="You need more total coins to gain prestige points",
            )

        # Everything but prestige points is wiped, including bought
        # prestige-priced upgrades.
        kept = self.state.prestige_points + earned
        fresh = EconomyState(self.definition, now=self.clock())
        fresh.prestige_points = kept
        self.state = fresh

        logger.info("Prestiged: +%d points (total %g)", earned, kept)
        self._notify("prestige")
        return PrestigeResult(success=True, earned=earned, prestige_points=kept)

    def hard_reset(self) -> None:
        """Discard all progress, prestige included."""
        self.state = EconomyState(self.definition, now=self.clock())
        logger.info("Game reset")
        self._notify("hard_reset")

    # ── Import / export ──────────────────────────────────────────────

    def export_state(self) -> str:
        return serialize(self.state)

    def import_state(self, text: str) -> ImportResult:
        """Replace the state with an imported save. Invalid input changes nothing."""
        try:
            record = parse(text)
        except ValueError as exc:
            logger.warning("Rejected import: %s", exc)
            return ImportResult(success=False, reason=f"Invalid save data: {exc}")

        now = self.clock()
        state = reconcile(record, self.definition, now=now)
        state.last_tick = now
        self.state = state
        self._notify("import")
        return ImportResult(success=True)

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> EconomyState:
        """Return live reference to economy state."""
        return self.state

    def get_multipliers(self) -> Multipliers:
        return self.pipeline.resolve(self.state)

    def get_coins(self) -> float:
        return self.state.coins

    def get_per_click(self) -> float:
        return self.pipeline.click_value(self.state)

    def get_cps(self) -> float:
        return self.pipeline.total_rate(self.state)

    def get_prestige_points(self) -> float:
        return self.state.prestige_points

    def prestige_available(self) -> int:
        """Points a prestige right now would award."""
        return prestige_reward(
            self.state.total_coins, self.definition.config.prestige_divisor
        )

    def get_buildings(self) -> list[BuildingStatus]:
        m = self.pipeline.resolve(self.state)
        result: list[BuildingStatus] = []
        for bdef in self.definition.buildings:
            owned = self.state.building_count(bdef.id)
            cost = self.pipeline.cost_of(bdef, owned, self.state, m)
            result.append(
                BuildingStatus(
                    id=bdef.id,
                    display_name=bdef.display_name,
                    owned=owned,
                    cost=cost,
                    produced_per_unit=self.pipeline.production_per_unit(
                        bdef.id, self.state, m
                    ),
                    affordable=self.state.coins >= cost,
                    emoji=bdef.emoji,
                )
            )
        return result

    def get_upgrades(self) -> list[UpgradeStatus]:
        result: list[UpgradeStatus] = []
        for udef in self.definition.upgrades:
            if udef.currency is Currency.PRESTIGE:
                balance = self.state.prestige_points
            else:
                balance = self.state.coins
            result.append(
                UpgradeStatus(
                    id=udef.id,
                    display_name=udef.display_name,
                    description=udef.description,
                    cost=udef.cost,
                    currency=udef.currency,
                    bought=self.state.has_upgrade(udef.id),
                    unlocked=udef.unlock is None or udef.unlock.evaluate(self.state),
                    affordable=balance >= udef.cost,
                )
            )
        return result

    def get_achievements(self) -> list[AchievementStatus]:
        return [
            AchievementStatus(
                id=adef.id,
                display_name=adef.display_name,
                got=self.state.has_achievement(adef.id),
                reward_coins=adef.reward_coins,
            )
            for adef in self.definition.achievements
        ]

    def get_stats(self) -> GameStats:
        return GameStats(
            coins=self.state.coins,
            total_coins=self.state.total_coins,
            total_buildings=self.state.total_buildings(),
            prestige_points=self.state.prestige_points,
            version=self.state.version,
        )

    # ── Extension points ─────────────────────────────────────────────

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # ── Private helpers ──────────────────────────────────────────────

    def _credit_window(self, now: float) -> float:
        """Seconds since last_tick, clamped to [0, offline cap]."""
        delta = now - self.state.last_tick
        if delta <= 0:
            return 0.0
        return min(delta, self.definition.config.offline_cap_seconds)

    def _notify(self, event: str) -> None:
        for listener in self._listeners:
            listener(event)
