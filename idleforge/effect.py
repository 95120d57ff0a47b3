from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class EffectType(Enum):
    ADD_CLICK = auto()
    MUL_CLICK = auto()
    MUL_BUILDING = auto()
    MUL_GLOBAL = auto()
    MUL_COST = auto()
    ENABLE_PRESTIGE = auto()


# Effect types that fold into a product; their identity value is 1.0.
MULTIPLICATIVE: frozenset[EffectType] = frozenset({
    EffectType.MUL_CLICK,
    EffectType.MUL_BUILDING,
    EffectType.MUL_GLOBAL,
    EffectType.MUL_COST,
})


@dataclass(frozen=True)
class EffectDef:
    """A single upgrade effect, expressed as a tagged variant.

    ``target`` is only meaningful for ``MUL_BUILDING`` (the building id).
    ``value`` is ignored by ``ENABLE_PRESTIGE``.
    """

    type: EffectType
    value: float = 0.0
    target: str = ""

    def describe(self) -> str:
        if self.type is EffectType.ADD_CLICK:
            return f"+{self.value:g} per click"
        if self.type is EffectType.MUL_CLICK:
            return f"x{self.value:g} click power"
        if self.type is EffectType.MUL_BUILDING:
            return f"{self.target} CPS x{self.value:g}"
        if self.type is EffectType.MUL_GLOBAL:
            return f"all building CPS x{self.value:g}"
        if self.type is EffectType.MUL_COST:
            return f"building costs x{self.value:g}"
        return "prestige points boost CPS and clicks"


class Effect:
    """Convenience constructors for the supported effect variants."""

    @staticmethod
    def add_click(amount: float) -> EffectDef:
        return EffectDef(EffectType.ADD_CLICK, value=amount)

    @staticmethod
    def mul_click(factor: float) -> EffectDef:
        return EffectDef(EffectType.MUL_CLICK, value=factor)

    @staticmethod
    def mul_building(building_id: str, factor: float) -> EffectDef:
        return EffectDef(EffectType.MUL_BUILDING, value=factor, target=building_id)

    @staticmethod
    def mul_global(factor: float) -> EffectDef:
        return EffectDef(EffectType.MUL_GLOBAL, value=factor)

    @staticmethod
    def mul_cost(factor: float) -> EffectDef:
        return EffectDef(EffectType.MUL_COST, value=factor)

    @staticmethod
    def enable_prestige() -> EffectDef:
        return EffectDef(EffectType.ENABLE_PRESTIGE)
