"""
Logging configuration — set up once by main.py.

Every module does ``logger = logging.getLogger(__name__)`` and
inherits this config.  Levels resolve in precedence order:

    --debug  >  --verbose  >  --quiet  >  RVMSH_LOG_LEVEL  >  WARNING

Optional file output via RVMSH_LOG_FILE / RVMSH_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

# Console format by threshold; above INFO only the message is shown
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s"),
)
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s"

# Third-party loggers kept at WARNING unless we are debugging
_NOISY_LOGGERS = ("urllib3", "bs4", "charset_normalizer")


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get("RVMSH_LOG_LEVEL", "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Separate level for the file; defaults to ``level``.
        quiet_third_party: Keep noisy library loggers at WARNING unless
            the console is at DEBUG.
    """
    numeric_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(_console_formatter(numeric_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        root.addHandler(fh)

    root.setLevel(effective_level)

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt="%H:%M:%S")
    return logging.Formatter("%(message)s")


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
