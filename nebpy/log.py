"""
Logging helpers.

nebpy logs through the standard library. Four severities are used: DEBUG,
VERBOSE (a level between DEBUG and INFO), WARNING and ERROR. Callers can
inject their own logger into a connection; otherwise the ``nebpy`` logger
is used.
"""

from __future__ import annotations

import logging

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("nebpy")


def get_logger(custom: logging.Logger | None = None) -> logging.Logger:
    """Return the injected logger, or the package logger."""
    return custom if custom is not None else logger


def verbose(log: logging.Logger, message: str) -> None:
    """Log at VERBOSE severity."""
    log.log(VERBOSE, message)
