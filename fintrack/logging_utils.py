"""Mini README: Application-wide logging helpers for fintrack.

Structure:
    * configure_root_logger - installs the shared handler and level once.
    * get_logger - module logger factory used across the package.

Usage:
    Every module declares ``LOGGER = get_logger(__name__)``. Ledger and
    settlement computations log at debug level, mutations at info level and
    storage fallbacks at warning level. The root handler is installed exactly
    once so reloading modules under uvicorn does not duplicate output.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger with a readable, timestamped formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
