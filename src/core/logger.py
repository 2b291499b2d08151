"""
Logging setup for login_sentinel.

Two streams share the console:
- module loggers (``get_logger(__name__)``) for server lifecycle messages
- the ``auth.events`` logger, where the log sinks mirror every
  authentication event as one JSON line

The event stream has its own level so it can be silenced or made more
verbose without touching the rest of the server output.
"""

import logging
import sys
from typing import Optional

EVENT_LOGGER = "auth.events"


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(level: str = "INFO", event_level: Optional[str] = None) -> None:
    """
    Setup logging configuration for the application.

    Args:
        level: Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        event_level: Level for authentication events, defaults to ``level``
    """
    logging.basicConfig(
        level=_level(level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from verbose libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    set_log_level(event_level or level, EVENT_LOGGER)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def set_log_level(level: str, name: Optional[str] = None) -> int:
    """
    Change a log level at runtime.

    Args:
        level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger to change, the root logger when omitted

    Returns:
        The numeric level applied
    """
    numeric_level = _level(level)
    logging.getLogger(name).setLevel(numeric_level)
    return numeric_level
