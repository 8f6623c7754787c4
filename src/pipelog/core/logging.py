"""Loguru setup for pipelog's own diagnostics.

The package never writes through loguru unless the host opts in: records coming
from ``pipelog.*`` modules are disabled on import and ``configure_logging``
turns them back on. Each module binds its short name as the ``module`` extra so
the diagnostics say which part of the engine spoke.
"""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

PACKAGE = "pipelog"
DIAGNOSTIC_FORMAT = (
    "{time:HH:mm:ss.SSS} | {level: <8} | pipelog.{extra[module]: <9} | {function}:{line} | {message}"
)

logger.disable(PACKAGE)


def configure_logging(level: str = "WARNING") -> None:
    """Send pipelog diagnostics to stderr and enable them."""

    logger.remove()
    logger.configure(extra={"module": "-"})
    logger.add(sys.stderr, level=level, format=DIAGNOSTIC_FORMAT)
    logger.enable(PACKAGE)


def get_logger(module: str, **extra: Any):
    """Return the package logger bound to one engine module."""

    return logger.bind(module=module, **extra)
