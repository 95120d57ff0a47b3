"""CLI entry point: python -m idleforge.mcp [game_module]"""

from __future__ import annotations

import sys


def main() -> None:
    module_path = sys.argv[1] if len(sys.argv) > 1 else "idleforge.catalog"

    # Redirect stdout to stderr during module loading in case define_game() prints
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        from idleforge.cli import load_game
        from idleforge.config import Settings, setup_logging

        settings = Settings()
        setup_logging(settings.log_level)
        definition = load_game(module_path)
    finally:
        sys.stdout = real_stdout

    from idleforge.mcp.server import create_server
    from idleforge.persistence import FileSaveStore

    server = create_server(definition, FileSaveStore(settings.save_dir))
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
