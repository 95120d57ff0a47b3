from __future__ import annotations

from typing import TYPE_CHECKING

from idleforge.multipliers import Multipliers, resolve_multipliers

if TYPE_CHECKING:
    from idleforge.building import BuildingDef
    from idleforge.definition import GameDefinition
    from idleforge.state import EconomyState


class ProductionPipeline:
    """Computes building costs, production rates and click value.

    Every method takes an optional, explicitly threaded ``Multipliers``.
    When it is omitted a fresh set is resolved from the given state, so
    results never depend on a stale cache.
    """

    def __init__(self, definition: GameDefinition) -> None:
        self.definition = definition

    def resolve(self, state: EconomyState) -> Multipliers:
        return resolve_multipliers(state, self.definition)

    def cost_of(
        self,
        building: BuildingDef,
        owned: int,
        state: EconomyState,
        multipliers: Multipliers | None = None,
    ) -> int:
        """ceil(base_cost * growth^owned * cost_mul)."""
        m = multipliers or self.resolve(state)
        scaling = self.definition.cost_scaling_for(building)
        return scaling.price(building.base_cost, owned, m.cost_mul)

    def production_per_unit(
        self,
        building_id: str,
        state: EconomyState,
        multipliers: Multipliers | None = None,
    ) -> float:
        bdef = self.definition.get_building(building_id)
        if bdef is None:
            return 0.0
        m = multipliers or self.resolve(state)
        return bdef.base_cps * m.building_factor(building_id) * m.global_mul

    def total_rate(
        self,
        state: EconomyState,
        multipliers: Multipliers | None = None,
    ) -> float:
        """Coins per second across all owned buildings."""
        m = multipliers or self.resolve(state)
        rate = 0.0
        for bdef in self.definition.buildings:
            count = state.building_count(bdef.id)
            if count <= 0:
                continue
            rate += count * self.production_per_unit(bdef.id, state, m)
        return rate

    def click_value(
        self,
        state: EconomyState,
        multipliers: Multipliers | None = None,
    ) -> float:
        m = multipliers or self.resolve(state)
        return (state.click_power_base + m.click_add) * m.click_mul
