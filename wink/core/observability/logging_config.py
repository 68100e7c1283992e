"""
Logging setup for the wink CLI.

Everything wink reports that is not command output goes through
``logging``: catalog conflicts and conflicting launch flags at WARNING,
override loading at INFO, every spawned argv at DEBUG.  At the default
level a warning reaches stderr as a bare line, e.g.

    Command code word defined for both Microsoft Office ... and Mine ...

Level precedence:  --debug  >  WINK_LOG_LEVEL  >  WARNING
A copy can also go to WINK_LOG_FILE (at WINK_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "WINK_LOG_LEVEL"
FILE_ENV = "WINK_LOG_FILE"
FILE_LEVEL_ENV = "WINK_LOG_FILE_LEVEL"

# Console format per tier: (threshold, format, datefmt)
_CONSOLE_TIERS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
]
_CONSOLE_DEFAULT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Route all wink loggers to stderr (and optionally a file).

    Safe to call more than once; earlier handlers are replaced.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level or level)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def setup_from_env(debug: bool = False) -> None:
    """setup_logging() driven by the WINK_LOG_* environment variables."""
    setup_logging(
        level="DEBUG" if debug else os.environ.get(LEVEL_ENV, "WARNING"),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_TIERS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_DEFAULT)


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
