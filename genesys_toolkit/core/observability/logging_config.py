"""
Logging configuration — central setup for the installer entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Console output carries a colored severity prefix (``INFO:``, ``WARN:``,
``ERROR:``).  Info and warnings go to stdout, errors to stderr.

Levels are resolved in precedence order:
    CLI flag  >  GTI_LOG_LEVEL env var  >  INFO (default)

Optional file output via GTI_LOG_FILE / GTI_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import sys

import click

# ── Format strings ──────────────────────────────────────────────

# Console — the severity prefix is added by SeverityFormatter
_FMT_CONSOLE = "%(message)s"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# levelno → (prefix, color)
_SEVERITY_STYLES: dict[int, tuple[str, str]] = {
    logging.DEBUG: ("DEBUG: ", "bright_black"),
    logging.INFO: ("INFO: ", "bright_white"),
    logging.WARNING: ("WARN: ", "bright_yellow"),
    logging.ERROR: ("ERROR: ", "bright_red"),
    logging.CRITICAL: ("ERROR: ", "bright_red"),
}


class SeverityFormatter(logging.Formatter):
    """Prefix each console line with its severity, optionally colored."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        color: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix, fg = _SEVERITY_STYLES.get(
            record.levelno, (f"{record.levelname}: ", "white")
        )
        if self.color:
            prefix = click.style(prefix, fg=fg, bold=True)
        return f"{prefix}{message}"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
    color: bool | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        color: Force colored prefixes on or off.  Defaults to coloring
            only when stdout is a terminal.
    """
    numeric_level = _parse_level(level)
    if color is None:
        color = sys.stdout.isatty()

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    else:
        fmt, datefmt = _FMT_CONSOLE, None

    # ── Console handlers (stdout below ERROR, stderr from ERROR) ─
    out = logging.StreamHandler(sys.stdout)
    out.setLevel(numeric_level)
    out.addFilter(_BelowLevelFilter(logging.ERROR))
    out.setFormatter(SeverityFormatter(fmt, datefmt=datefmt, color=color))

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(max(numeric_level, logging.ERROR))
    err.setFormatter(SeverityFormatter(fmt, datefmt=datefmt, color=color))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(out)
    root.addHandler(err)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
