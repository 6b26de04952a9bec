from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

_LEVEL_COLORS = {
    "TRACE": "\033[32m",  # green
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[37m",  # light gray
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[41m",  # red background
}
_RESET = "\033[0m"
_DIM = "\033[2m"

# Per-poll diagnostics sit below DEBUG; at 1 Hz per view they drown everything else
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class AnsiColorFormatter(logging.Formatter):
    """
    Compact `HH:MM:SS LEVEL logger: msg` lines.

    On a terminal the timestamp is dimmed and the level name colored; the
    NO_COLOR convention turns coloring off.
    """

    def __init__(self, colored: bool = True, stream: TextIO | None = None) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
        target = stream if stream is not None else sys.stderr
        self.colored = colored and target.isatty() and "NO_COLOR" not in os.environ

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        ts = super().formatTime(record, datefmt)
        return f"{_DIM}{ts}{_RESET}" if self.colored else ts

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname) if self.colored else None
        if not color:
            return super().formatMessage(record)
        # Color a copy so other handlers still see the plain level name
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{_RESET}"
        return super().formatMessage(tinted)


def _have_console_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and isinstance(h.formatter, AnsiColorFormatter)
        for h in logger.handlers
    )


def configure_logging(level: int = logging.INFO, use_color: bool = True) -> logging.Logger:
    """
    Configure the root logger with an ANSI-colored stderr handler.
    Idempotent across multiple calls; later calls only adjust the level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    if not _have_console_handler(logger):
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(AnsiColorFormatter(colored=use_color, stream=sys.stderr))
        logger.addHandler(console)

    # httpx logs every request at INFO; keep that out unless tracing
    logging.getLogger("httpx").setLevel(logging.DEBUG if level <= TRACE else logging.WARNING)
    return logger
