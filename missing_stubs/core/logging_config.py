"""Logging setup for processes that record translation stubs."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from .config import Settings

# core.fallback logs every stub write at INFO; that trail is the backlog
# history and stays visible whatever the package level is.
LOG_LEVELS = {
    "missing_stubs": logging.INFO,
    "missing_stubs.core.fallback": logging.INFO,
    "missing_stubs.infra": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"
LOG_FILE_NAME = "missing_stubs.log"

# ANSI colour per level; INFO stays uncoloured
LEVEL_COLORS = {
    logging.DEBUG: "36",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "35",
}


class ConsoleFormatter(logging.Formatter):
    """Colours whole lines by level when the console is a terminal."""

    def __init__(self, color: bool) -> None:
        super().__init__(CONSOLE_FORMAT, datefmt="%H:%M:%S")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        code = LEVEL_COLORS.get(record.levelno)
        if not self.color or code is None:
            return line
        return f"\033[{code}m{line}\033[0m"


def setup_logging(settings: Settings, log_dir: Path | str = "logs") -> None:
    level = logging.DEBUG if settings.DEBUG else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ConsoleFormatter(color=sys.stdout.isatty()))
    handlers: list[logging.Handler] = [console]

    if settings.LOG_FILE:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(level)

    for name, name_level in LOG_LEVELS.items():
        if name.startswith("missing_stubs"):
            name_level = min(name_level, level)
        logging.getLogger(name).setLevel(name_level)

    logging.getLogger(__name__).debug(
        "Logging configured (level=%s, file=%s)",
        logging.getLevelName(level),
        log_dir if settings.LOG_FILE else "-",
    )
