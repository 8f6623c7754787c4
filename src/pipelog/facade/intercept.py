"""Routing of standard library ``logging`` records into pipelog loggers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pipelog.facade.logger import Logger

# Level methods in descending stdlib severity. ``log`` is the debug alias
# that does not depend on the debug option; stdlib filtering already ran.
LEVEL_METHODS = (
    (logging.CRITICAL, "critical"),
    (logging.ERROR, "error"),
    (logging.WARNING, "warn"),
    (logging.INFO, "info"),
    (logging.DEBUG, "log"),
)


def level_method(levelno: int) -> str:
    for threshold, method in LEVEL_METHODS:
        if levelno >= threshold:
            return method
    return "trace"


class InterceptHandler(logging.Handler):
    """Handler that re-emits stdlib records through a pipelog logger.

    Call-site attribution still points at the code that called the stdlib
    logger: the frames of the ``logging`` module between this handler and
    that code are counted and skipped.
    """

    def __init__(self, target: "Logger", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        frame, depth = sys._getframe(1), 1
        try:
            while frame is not None and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1
        finally:
            del frame

        args = [record.getMessage()]
        if record.exc_info and record.exc_info[1] is not None:
            args.append(record.exc_info[1])
        base_skip = self.target.options.skip_levels or 0
        emitter = self.target.derive(skip_levels=base_skip + depth, meta={"logger": record.name})
        getattr(emitter, level_method(record.levelno))(*args)


def install(target: "Logger", name: str | None = None, level: int = logging.NOTSET) -> InterceptHandler:
    """Replace the handlers of the stdlib logger ``name`` (root by default)."""

    handler = InterceptHandler(target)
    std_logger = logging.getLogger(name)
    std_logger.handlers = [handler]
    std_logger.setLevel(level)
    return handler
