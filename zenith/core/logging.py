"""Logging for the Zenith API.

One line per record, aligned into columns:
  14:02:11 INFO    │ listing_service    │   ✓ listing #12 pending → active (admin #1)

Colour is used on a terminal, when FORCE_COLOR=1, or when LOG_COLOUR is set.
"""

import logging
import os
import sys
import time
from typing import Any, Optional

from zenith.core.config import settings

_ANSI = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "reset": "\033[0m",
    "red": "\033[91m",
    "green": "\033[92m",
    "yellow": "\033[93m",
    "cyan": "\033[96m",
}

_LEVEL_STYLES = {
    "DEBUG": ("dim",),
    "INFO": ("cyan",),
    "WARNING": ("yellow",),
    "ERROR": ("red",),
    "CRITICAL": ("bold", "red"),
}

_NAME_WIDTH = 18

# Paths whose access-log lines are dropped
_QUIET_PATHS = ("/api/v1/health", "/health")


def _colour_enabled() -> bool:
    if settings.LOG_COLOUR is not None:
        return settings.LOG_COLOUR
    return sys.stdout.isatty() or os.environ.get("FORCE_COLOR", "") == "1"


class _HealthCheckFilter(logging.Filter):
    """Drop successful health-probe access lines from uvicorn."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not (any(path in msg for path in _QUIET_PATHS) and " 200" in msg)


class ZenithFormatter(logging.Formatter):
    """Format records as ``HH:MM:SS │ LEVEL │ module │ message``."""

    def __init__(self, colour: bool = False):
        super().__init__()
        self.colour = colour

    def _paint(self, text: str, *styles: str) -> str:
        if not self.colour or not styles:
            return text
        return "".join(_ANSI[s] for s in styles) + text + _ANSI["reset"]

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        level = f"{record.levelname:<7}"

        # "zenith.services.listing_service" → "listing_service"
        name = record.name.rsplit(".", 1)[-1][:_NAME_WIDTH]

        msg = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            msg = f"{msg}\n{record.exc_text}"

        bar = self._paint("│", "dim")
        return (
            f"{self._paint(ts, 'dim')} "
            f"{self._paint(level, *_LEVEL_STYLES.get(record.levelname, ()))} {bar} "
            f"{self._paint(f'{name:<{_NAME_WIDTH}}', 'bold')} {bar} {msg}"
        )


def setup_logging() -> None:
    """Configure application logging. Call once at startup."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ZenithFormatter(colour=_colour_enabled()))
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("uvicorn.access").addFilter(_HealthCheckFilter())

    # SQL echo stays off regardless of LOG_LEVEL
    for noisy in ("sqlalchemy", "sqlalchemy.engine", "aiosqlite", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


# ── Outcome helpers used by the workflow services ──────────────────────────

def _mark(symbol: str, style: str) -> str:
    if _colour_enabled():
        return f"{_ANSI[style]}{symbol}{_ANSI['reset']}"
    return symbol


def log_success(logger: logging.Logger, msg: str) -> None:
    logger.info(f"  {_mark('✓', 'green')} {msg}")


def log_warn(logger: logging.Logger, msg: str) -> None:
    logger.warning(f"  {_mark('⚠', 'yellow')} {msg}")


def log_fail(logger: logging.Logger, msg: str) -> None:
    logger.error(f"  {_mark('✗', 'red')} {msg}")


def log_transition(
    logger: logging.Logger,
    entity: str,
    entity_id: Any,
    old: str,
    new: str,
    actor_id: Optional[int] = None,
) -> None:
    """Record a workflow state change, e.g. a listing going live."""
    by = f" (admin #{actor_id})" if actor_id is not None else ""
    log_success(logger, f"{entity} #{entity_id} {old} → {new}{by}")
