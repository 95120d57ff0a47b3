"""MCP server wrapping a GameSession for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from idleforge.definition import GameDefinition
from idleforge.persistence import MemorySaveStore, SaveStore
from idleforge.session import GameSession

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000
# Maximum units per buy_building() call
_MAX_QUANTITY = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition and session."""

    definition: GameDefinition
    session: GameSession

    @property
    def runtime(self):
        return self.session.runtime


def _make_holder(
    definition: GameDefinition,
    store: SaveStore | None = None,
    register_exit: bool = False,
) -> _GameHolder:
    session = GameSession(definition, store or MemorySaveStore())
    session.start(register_exit=register_exit)
    return _GameHolder(definition=definition, session=session)


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    rt = holder.runtime
    stats = rt.get_stats()
    return {
        "coins": round(stats.coins, 2),
        "total_coins": round(stats.total_coins, 2),
        "per_click": round(rt.get_per_click(), 4),
        "cps": round(rt.get_cps(), 4),
        "prestige_points": stats.prestige_points,
        "prestige_available": rt.prestige_available(),
        "total_buildings": stats.total_buildings,
        "version": stats.version,
        "save_status": holder.session.saver.status.value,
    }


def _tool_get_buildings(holder: _GameHolder) -> dict[str, Any]:
    return {
        "buildings": [
            {
                "id": b.id,
                "display_name": b.display_name,
                "owned": b.owned,
                "cost": b.cost,
                "produced_per_unit": round(b.produced_per_unit, 4),
                "affordable": b.affordable,
            }
            for b in holder.runtime.get_buildings()
        ]
    }


def _tool_get_upgrades(holder: _GameHolder) -> dict[str, Any]:
    return {
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "description": u.description,
                "cost": u.cost,
                "currency": u.currency.value,
                "bought": u.bought,
                "unlocked": u.unlocked,
                "affordable": u.affordable,
            }
            for u in holder.runtime.get_upgrades()
        ]
    }


def _tool_get_achievements(holder: _GameHolder) -> dict[str, Any]:
    return {
        "achievements": [
            {"id": a.id, "display_name": a.display_name, "got": a.got}
            for a in holder.runtime.get_achievements()
        ]
    }


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    for _ in range(count):
        total += holder.runtime.manual_click()
    return {
        "clicks": count,
        "total_earned": round(total, 2),
        "new_balance": round(holder.runtime.get_coins(), 2),
    }


def _tool_buy_building(
    holder: _GameHolder, building_id: str, quantity: int = 1
) -> dict[str, Any]:
    if holder.definition.get_building(building_id) is None:
        return {"error": f"Unknown building: {building_id!r}"}
    if quantity > _MAX_QUANTITY:
        return {"error": f"Quantity cannot exceed {_MAX_QUANTITY}"}

    result = holder.runtime.purchase_building(building_id, quantity)
    if result.success:
        return {
            "success": True,
            "building_id": building_id,
            "purchased": result.purchased,
            "spent": result.spent,
            "new_count": holder.runtime.get_state().building_count(building_id),
        }
    return {"success": False, "reason": result.reason}


def _tool_buy_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    if holder.definition.get_upgrade(upgrade_id) is None:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}

    result = holder.runtime.purchase_upgrade(upgrade_id)
    if result.success:
        return {"success": True, "upgrade_id": upgrade_id}
    return {"success": False, "reason": result.reason}


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    gained, unlocked = holder.session.wait(seconds)
    result: dict[str, Any] = {
        "waited": seconds,
        "earned": round(gained, 2),
        "coins": round(holder.runtime.get_coins(), 2),
        "cps": round(holder.runtime.get_cps(), 4),
    }
    if unlocked:
        result["new_achievements"] = unlocked
    return result


def _tool_prestige(holder: _GameHolder) -> dict[str, Any]:
    result = holder.runtime.prestige()
    if result.success:
        return {
            "success": True,
            "earned": result.earned,
            "prestige_points": result.prestige_points,
        }
    return {"success": False, "reason": result.reason}


def _tool_export_save(holder: _GameHolder) -> dict[str, Any]:
    return {"save": holder.runtime.export_state()}


def _tool_import_save(holder: _GameHolder, data: str) -> dict[str, Any]:
    result = holder.runtime.import_state(data)
    if result.success:
        return {"success": True}
    return {"success": False, "reason": result.reason}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.session.hard_reset()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(definition: GameDefinition, store: SaveStore | None = None) -> FastMCP:
    """Create an MCP server wrapping a GameSession for the given definition."""
    holder = _make_holder(definition, store, register_exit=store is not None)

    def _saved(result: dict[str, Any]) -> dict[str, Any]:
        holder.session.saver.poll()
        return result

    mcp = FastMCP(
        name=f"Idle Forge: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get coins, per-click value, CPS, prestige points and aggregate stats."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_buildings() -> dict[str, Any]:
        """Get every building with owned count, next cost and CPS per unit."""
        return _tool_get_buildings(holder)

    @mcp.tool()
    def get_upgrades() -> dict[str, Any]:
        """Get every upgrade with bought/unlocked/affordable flags."""
        return _tool_get_upgrades(holder)

    @mcp.tool()
    def get_achievements() -> dict[str, Any]:
        """Get every achievement and whether it has been unlocked."""
        return _tool_get_achievements(holder)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click N times (max 1000). Returns total earned."""
        return _saved(_tool_click(holder, count))

    @mcp.tool()
    def buy_building(building_id: str, quantity: int = 1) -> dict[str, Any]:
        """Buy up to N units of a building; stops at the first unit you cannot afford."""
        return _saved(_tool_buy_building(holder, building_id, quantity))

    @mcp.tool()
    def buy_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy an upgrade. Returns success/failure with reason."""
        return _saved(_tool_buy_upgrade(holder, upgrade_id))

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400), in 1s ticks."""
        return _saved(_tool_wait(holder, seconds))

    @mcp.tool()
    def prestige() -> dict[str, Any]:
        """Reset progress in exchange for prestige points."""
        return _saved(_tool_prestige(holder))

    @mcp.tool()
    def export_save() -> dict[str, Any]:
        """Return the serialized save data."""
        return _tool_export_save(holder)

    @mcp.tool()
    def import_save(data: str) -> dict[str, Any]:
        """Replace the game with previously exported save data."""
        return _saved(_tool_import_save(holder, data))

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state, prestige included."""
        return _saved(_tool_new_game(holder))

    return mcp
