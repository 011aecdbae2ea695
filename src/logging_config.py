"""structlog configuration shared by both transports."""

import logging
import sys
from typing import TextIO

import structlog

_configured = False


def _level_to_int(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = "INFO", stream: TextIO | None = None, force: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ERROR).
        stream: Output stream. The stdio transport passes stderr because
            stdout carries protocol frames.
        force: Reconfigure even if already configured (tests only).
    """
    global _configured

    if _configured and not force:
        return

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """Forget the configured state so the next call reconfigures."""
    global _configured
    _configured = False
