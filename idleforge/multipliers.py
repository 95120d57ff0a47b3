"""Resolution of bought upgrades into the effective multiplier set."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from idleforge.effect import EffectDef, EffectType

if TYPE_CHECKING:
    from idleforge.definition import GameDefinition
    from idleforge.state import EconomyState

logger = logging.getLogger(__name__)


@dataclass
class Multipliers:
    """Accumulated additive/multiplicative modifiers.

    Each field is an independent accumulator, so folding effects in any
    order gives the same result.
    """

    click_add: float = 0.0
    click_mul: float = 1.0
    global_mul: float = 1.0
    building_mul: dict[str, float] = field(default_factory=dict)
    cost_mul: float = 1.0
    prestige_effect_active: bool = False

    def building_factor(self, building_id: str) -> float:
        return self.building_mul.get(building_id, 1.0)


def apply_effect(eff: EffectDef, m: Multipliers) -> None:
    """Fold a single effect into the accumulator.

    Raises ValueError for an effect the resolver cannot interpret.
    """
    if eff.type is EffectType.ENABLE_PRESTIGE:
        m.prestige_effect_active = True
        return

    value = eff.value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"non-numeric effect value {value!r}")

    if eff.type is EffectType.ADD_CLICK:
        m.click_add += value
    elif eff.type is EffectType.MUL_CLICK:
        m.click_mul *= value
    elif eff.type is EffectType.MUL_GLOBAL:
        m.global_mul *= value
    elif eff.type is EffectType.MUL_COST:
        m.cost_mul *= value
    elif eff.type is EffectType.MUL_BUILDING:
        if not eff.target:
            raise ValueError("MUL_BUILDING effect without a target building")
        m.building_mul[eff.target] = m.building_factor(eff.target) * value
    else:
        raise ValueError(f"unsupported effect type {eff.type!r}")


def fold_effects(
    effects: Iterable[tuple[str, EffectDef]],
    prestige_points: float = 0.0,
    bonus_per_point: float = 0.01,
) -> Multipliers:
    """Fold ``(upgrade_id, effect)`` pairs into a fresh Multipliers.

    A malformed effect is logged and skipped; it never aborts resolution.
    """
    m = Multipliers()
    for upgrade_id, eff in effects:
        try:
            apply_effect(eff, m)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Upgrade effect error for %r: %s", upgrade_id, exc)

    if m.prestige_effect_active:
        bonus = 1.0 + bonus_per_point * prestige_points
        m.global_mul *= bonus
        m.click_mul *= bonus

    return m


def resolve_multipliers(state: EconomyState, definition: GameDefinition) -> Multipliers:
    """Compute the current multiplier set from bought upgrades and prestige."""
    bought = (
        (udef.id, udef.effect)
        for udef in definition.upgrades
        if state.has_upgrade(udef.id)
    )
    return fold_effects(
        bought,
        prestige_points=state.prestige_points,
        bonus_per_point=definition.config.prestige_bonus_per_point,
    )
