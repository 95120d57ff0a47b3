from __future__ import annotations

import math

from idleforge.currency import Currency
from idleforge.runtime import GameRuntime

_UNITS = ["", "K", "M", "B", "T", "Qa", "Qi"]


def format_number(n: float) -> str:
    """Short human form: 2 decimals below 1000, then K/M/B/T/Qa/Qi."""
    if not math.isfinite(n):
        return "0"
    a = abs(n)
    if a < 1000:
        text = f"{round(n, 2):.2f}".rstrip("0").rstrip(".")
        return "0" if text in ("", "-0") else text
    idx = min(int(math.floor(math.log10(a) / 3)), len(_UNITS) - 1)
    scaled = n / 1000 ** idx
    decimals = 0 if abs(scaled) >= 100 else 1 if abs(scaled) >= 10 else 2
    return f"{scaled:.{decimals}f}{_UNITS[idx]}"


def format_status(runtime: GameRuntime) -> str:
    """Format the full game state for console output."""
    lines: list[str] = []
    name = runtime.definition.config.name

    lines.append("=" * 20 + f" {name} " + "=" * 20)
    lines.append(f"Coins: {format_number(runtime.get_coins())}")
    lines.append(f"Per click: {format_number(runtime.get_per_click())}")
    lines.append(f"CPS: {format_number(runtime.get_cps())}")
    lines.append(f"Prestige points: {format_number(runtime.get_prestige_points())}")
    lines.append("")

    lines.append("BUILDINGS:")
    for b in runtime.get_buildings():
        marker = "  *" if b.affordable else "   "
        lines.append(
            f"{marker} {b.display_name:.<22s} x{b.owned:<4d} "
            f"cost {format_number(b.cost):>8s}  "
            f"{format_number(b.produced_per_unit)} CPS each"
        )
    lines.append("")

    lines.append("UPGRADES:")
    for u in runtime.get_upgrades():
        if u.bought:
            marker = "  [BOUGHT]"
        elif not u.unlocked:
            marker = "  [LOCKED]"
        elif u.affordable:
            marker = "  [BUY]   "
        else:
            marker = "  [      ]"
        cost = (
            f"{format_number(u.cost)} pp"
            if u.currency is Currency.PRESTIGE
            else format_number(u.cost)
        )
        lines.append(f"{marker} {u.id}: {u.display_name} ({u.description}) - {cost}")
    lines.append("")

    lines.append("ACHIEVEMENTS:")
    for a in runtime.get_achievements():
        marker = "  *" if a.got else "   "
        state = "Unlocked" if a.got else "Locked"
        lines.append(f"{marker} {a.display_name:.<22s} {state}")
    lines.append("")

    stats = runtime.get_stats()
    lines.append("STATS:")
    lines.append(f"  Total coins: {format_number(stats.total_coins)}")
    lines.append(f"  Total buildings: {stats.total_buildings}")
    lines.append(f"  Prestige available: {runtime.prestige_available()}")
    lines.append(f"  Game version: {stats.version}")

    return "\n".join(lines)
