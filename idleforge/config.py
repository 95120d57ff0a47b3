"""Host settings and logging setup for the command line and MCP surfaces."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path


def _env_path(name: str, default: str) -> Path:
    return Path(os.getenv(name, default)).expanduser()


@dataclass
class Settings:
    """Environment driven settings; command line flags override them."""

    save_dir: Path = field(default_factory=lambda: _env_path("IDLEFORGE_SAVE_DIR", "~/.idleforge"))
    log_level: str = field(default_factory=lambda: os.getenv("IDLEFORGE_LOG_LEVEL", "WARNING"))


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Configure application wide logging."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
