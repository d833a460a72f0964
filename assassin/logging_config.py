"""Logging setup shared by the demo entry points."""

from __future__ import annotations

import logging
import os
from typing import Iterable

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LEVEL_ENV_VAR = "ASSASSIN_LOG_LEVEL"

# Plotting and image-writing libraries that flood DEBUG output.
NOISY_LOGGERS = ("matplotlib", "PIL")


def resolve_level(level: str | None = None) -> str:
    """Explicit level, else $ASSASSIN_LOG_LEVEL, else INFO."""
    raw = level if level is not None else os.getenv(LEVEL_ENV_VAR)
    return (raw or "INFO").upper()


def configure_logging(level: str | None = None, quiet: Iterable[str] = NOISY_LOGGERS) -> logging.Logger:
    """Set up root handlers and the ``assassin`` logger tree.

    Loggers named in `quiet` are held at INFO or above even when the
    package runs at DEBUG.
    """
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    pkg_logger = logging.getLogger("assassin")
    pkg_logger.setLevel(resolved)

    floor = max(logging.getLevelName(resolved), logging.INFO)
    for name in quiet:
        logging.getLogger(name).setLevel(floor)

    pkg_logger.debug("logging at %s", resolved)
    return pkg_logger
