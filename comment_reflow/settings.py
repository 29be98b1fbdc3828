"""Logging for comment reflow.

Records go to stderr so the reflowed text on stdout can be piped back into an
editor. Colors are only used when stderr is a terminal and ``NO_COLOR`` is
not set.
"""

import logging
import os
import sys
from typing import Dict, Optional, Set, TextIO

LOG_LEVEL_ENV = "COMMENT_REFLOW_LOG_LEVEL"
NO_COLOR_ENV = "NO_COLOR"

_LOG_FORMAT = "comment-reflow: %(levelname)s [%(name)s] %(message)s"
_RESET = "\033[0m"
_LEVEL_COLORS: Dict[int, str] = {
    logging.DEBUG: "\033[2;37m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[1;31m",
    logging.CRITICAL: "\033[1;35m",
}

_LOGGERS: Set[logging.Logger] = set()


class ReflowFormatter(logging.Formatter):
    """One line per record, wrapped in the level's color when enabled."""

    def __init__(self, use_color: bool = False) -> None:
        super().__init__(_LOG_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno) if self.use_color else None
        return f"{color}{line}{_RESET}" if color else line


def _use_color(stream: TextIO) -> bool:
    if os.getenv(NO_COLOR_ENV):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _level_from_env() -> Optional[int]:
    name = os.getenv(LOG_LEVEL_ENV, "").strip()
    if not name:
        return None
    # getLevelName maps known names to numbers and anything else to a string
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


def comment_reflow_logger(name: str, stream: Optional[TextIO] = None) -> logging.Logger:
    """Return the logger *name* with a stderr handler attached once.

    *stream* only matters the first time a logger is requested.
    """

    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(ReflowFormatter(use_color=_use_color(handler.stream)))
        logger.addHandler(handler)

    level = _level_from_env()
    if level is not None:
        logger.setLevel(level)
    _LOGGERS.add(logger)

    return logger


def set_comment_reflow_log_level(level_name: str) -> None:
    """Apply *level_name* to every comment reflow logger, now and later."""

    os.environ[LOG_LEVEL_ENV] = level_name
    level = _level_from_env()

    for logger in _LOGGERS:
        logger.setLevel(logging.NOTSET if level is None else level)
