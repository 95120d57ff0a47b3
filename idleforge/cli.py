from __future__ import annotations

import argparse
import importlib
import sys

from idleforge.config import Settings, setup_logging
from idleforge.definition import GameDefinition
from idleforge.formatting import format_number, format_status
from idleforge.persistence import FileSaveStore
from idleforge.session import GameSession

# Maximum seconds per idle command (24 hours)
_MAX_IDLE = 86400


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idleforge",
        description="Idle Forge: an incremental game in your terminal",
    )
    parser.add_argument("--save-dir", default=None, help="Directory holding the save file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")
    parser.add_argument(
        "--game",
        default="idleforge.catalog",
        help="Python module with define_game() (default: idleforge.catalog)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show coins, buildings, upgrades and achievements")

    click = sub.add_parser("click", help="Click the forge")
    click.add_argument("-n", "--count", type=int, default=1, help="Number of clicks")

    buy = sub.add_parser("buy", help="Buy buildings")
    buy.add_argument("building", help="Building id")
    buy.add_argument("-q", "--quantity", type=int, default=1, help="How many to buy")

    upgrade = sub.add_parser("upgrade", help="Buy an upgrade")
    upgrade.add_argument("upgrade", help="Upgrade id")

    prestige = sub.add_parser("prestige", help="Reset progress for prestige points")
    prestige.add_argument("--yes", action="store_true", help="Confirm the reset")

    reset = sub.add_parser("reset", help="Completely reset the game")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")

    sub.add_parser("export", help="Print the save data")

    imp = sub.add_parser("import", help="Load save data from a file ('-' for stdin)")
    imp.add_argument("file", help="Path to save data")

    idle = sub.add_parser("idle", help="Let production run for some in-game seconds")
    idle.add_argument("seconds", type=float, help="Seconds to simulate")

    return parser


def load_game(module_path: str) -> GameDefinition:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    settings = Settings()
    setup_logging(args.log_level or settings.log_level)
    save_dir = args.save_dir or settings.save_dir

    definition = load_game(args.game)
    session = GameSession(definition, FileSaveStore(save_dir))
    offline = session.start(register_exit=True)
    if offline.earned > 0:
        print(f"Welcome back! You earned {format_number(offline.earned)} coins while away.")

    try:
        _dispatch(session, args)
    finally:
        session.close()


def _dispatch(session: GameSession, args: argparse.Namespace) -> None:
    runtime = session.runtime

    if args.command == "status":
        print(format_status(runtime))

    elif args.command == "click":
        if args.count < 1:
            print("Count must be at least 1")
            return
        total = sum(runtime.manual_click() for _ in range(args.count))
        print(f"+{format_number(total)} coins ({format_number(runtime.get_coins())} total)")

    elif args.command == "buy":
        result = runtime.purchase_building(args.building, args.quantity)
        if result.success:
            print(
                f"Bought {result.purchased} x {args.building} "
                f"for {format_number(result.spent)} coins"
            )
        else:
            print(result.reason)

    elif args.command == "upgrade":
        result = runtime.purchase_upgrade(args.upgrade)
        if result.success:
            udef = runtime.definition.get_upgrade(args.upgrade)
            print(f"Purchased: {udef.display_name if udef else args.upgrade}")
        else:
            print(result.reason)

    elif args.command == "prestige":
        earned = runtime.prestige_available()
        if earned <= 0:
            print("You need more total coins to gain prestige points. Earn more and try again.")
        elif not args.yes:
            print(
                f"Prestiging will reset most progress but award {earned} prestige points. "
                "Re-run with --yes to continue."
            )
        else:
            result = runtime.prestige()
            print(f"Prestiged: +{result.earned} ({format_number(result.prestige_points)} total)")

    elif args.command == "reset":
        if not args.yes:
            print("This deletes all progress, prestige included. Re-run with --yes to continue.")
        else:
            session.hard_reset()
            print("Game reset")

    elif args.command == "export":
        print(runtime.export_state())

    elif args.command == "import":
        if args.file == "-":
            text = sys.stdin.read()
        else:
            try:
                with open(args.file, encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as exc:
                print(f"Could not read {args.file}: {exc}")
                return
        result = runtime.import_state(text)
        print("Imported save successfully." if result.success else result.reason)

    elif args.command == "idle":
        if not args.seconds > 0:
            print("Seconds must be positive")
            return
        if args.seconds > _MAX_IDLE:
            print(f"Cannot idle more than {_MAX_IDLE} seconds (24h) at a time")
            return
        gained, unlocked = session.wait(args.seconds)
        print(f"+{format_number(gained)} coins over {args.seconds:g}s")
        for aid in unlocked:
            adef = runtime.definition.get_achievement(aid)
            print(f"Achievement unlocked: {adef.display_name if adef else aid}")


if __name__ == "__main__":
    main()
