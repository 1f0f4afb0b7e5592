# src/day_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILENAME = "day_planner.log"

# Minimum level per logger prefix for the console; first match wins.
_CONSOLE_FLOORS: tuple[tuple[str, int], ...] = (
    ("day_planner.planner.timers", logging.WARNING),
    ("day_planner.", logging.NOTSET),
    ("py.warnings", logging.ERROR),
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console shares the terminal with the REPL prompt, so it only gets:
    our own logs, timer logs from WARNING up (they fire every minute),
    and ERROR+ from everything else (httpx, asyncio, captured warnings).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for prefix, floor in _CONSOLE_FLOORS:
            if record.name.startswith(prefix):
                return record.levelno >= floor
        return record.levelno >= logging.ERROR


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = RotatingFileHandler(str(path), maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/day_planner",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to a filtered stderr handler and a rotating log file.

    Replaces whatever handlers the root logger had, so calling it twice
    does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(_console_handler(console_level))
    root.addHandler(_file_handler(log_file, file_level))

    logging.captureWarnings(True)

    # One INFO line per weather request is enough; httpcore's DEBUG is wire-level.
    logging.getLogger("httpx").setLevel(logging.INFO)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return log_file
