"""Logger façade: option inheritance, level methods and record dispatch."""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import Any, Callable, ClassVar, Mapping, Optional, Sequence, Type

from pipelog.core.levels import Level
from pipelog.facade.handlers import null_handler
from pipelog.facade.intercept import InterceptHandler, install as install_intercept
from pipelog.models.options import LoggerOptions
from pipelog.models.record import FormatSpec, Meta, Pipes, Record

Handler = Callable[[Record], Any]
ExceptHook = Callable[[Type[BaseException], BaseException, Optional[TracebackType]], Any]


def dispatch(
    name: str | None,
    formats: Sequence[FormatSpec],
    pipes: Pipes,
    meta: Meta,
    level: Level,
    args: Sequence[Any],
    handler: Handler = null_handler,
    skip_levels: int = 0,
    max_callers: int | None = None,
) -> None:
    """Build a record and hand it to ``handler`` exactly once."""

    record = Record(name, formats, pipes, meta, level, args, skip_levels, max_callers)
    handler(record)


class Logger:
    """Leveled logger.

    The class holds the global options snapshot (see ``configure``); each
    instance holds only its own overrides. Both are merged every time a record
    is dispatched, so later ``configure`` calls reach existing loggers.
    """

    _global: ClassVar[Optional[LoggerOptions]] = None

    @classmethod
    def global_options(cls) -> LoggerOptions:
        if Logger._global is None:
            Logger._global = LoggerOptions.from_settings()
        return Logger._global

    @classmethod
    def configure(cls, **options: Any) -> None:
        """Set global options shared by every logger."""

        Logger._global = cls.global_options().merge(LoggerOptions(**options))

    @classmethod
    def reset(cls) -> None:
        """Drop global options; they are rebuilt from settings on next use."""

        Logger._global = None

    @classmethod
    def use_name(cls, name: str) -> "Logger":
        return cls(name=name)

    @classmethod
    def with_meta(cls, meta: Mapping[str, Any]) -> "Logger":
        return cls(meta=dict(meta))

    @classmethod
    def install_excepthook(cls, target: "Logger | None" = None, chain: bool = True) -> ExceptHook:
        """Log uncaught exceptions at ``critical`` level; returns the replaced hook."""

        target = target or logger
        previous = sys.excepthook

        def hook(exc_type, exc, tb) -> None:
            target.critical(exc)
            if chain:
                previous(exc_type, exc, tb)

        sys.excepthook = hook
        return previous

    @classmethod
    def intercept_logging(
        cls, target: "Logger | None" = None, name: str | None = None, level: int = logging.NOTSET
    ) -> InterceptHandler:
        """Route standard library logging (the root logger by default) into ``target``."""

        return install_intercept(target or logger, name, level)

    def __init__(self, options: LoggerOptions | None = None, **overrides: Any) -> None:
        base = options or LoggerOptions()
        self._options = base.merge(LoggerOptions(**overrides)) if overrides else base

    @property
    def options(self) -> LoggerOptions:
        """Effective options: global snapshot with this logger's overrides on top."""

        return self.global_options().merge(self._options)

    def name(self, name: str) -> "Logger":
        """Return a child logger whose name is appended to the current one."""

        current = self.options.name
        full_name = f"{current}.{name}" if current and name else (name or current)
        return self.derive(name=full_name)

    def derive(self, **overrides: Any) -> "Logger":
        """Return a new logger with ``overrides`` layered on this one's options."""

        return type(self)(self._options.merge(LoggerOptions(**overrides)))

    def meta(self, meta: Mapping[str, Any]) -> None:
        """Add metadata to this logger."""

        self._options = self._options.merge(LoggerOptions(meta=dict(meta)))

    def clone(self) -> "Logger":
        return type(self)(self._options)

    def _handle(self, level: Level, args: Sequence[Any]) -> None:
        options = self.options
        dispatch(
            options.name,
            options.formats or (),
            options.pipes or {},
            options.meta or {},
            level,
            args,
            handler=options.handler or null_handler,
            skip_levels=options.skip_levels or 0,
            max_callers=options.max_callers,
        )

    def log(self, *args: Any) -> None:
        self._handle("debug", args)

    def debug(self, *args: Any) -> None:
        """Emit at ``debug`` level; only active when the ``debug`` option is on."""

        if self.options.debug:
            self._handle("debug", args)

    def info(self, *args: Any) -> None:
        self._handle("info", args)

    def warn(self, *args: Any) -> None:
        self._handle("warn", args)

    def error(self, *args: Any) -> None:
        self._handle("error", args)

    def critical(self, *args: Any) -> None:
        self._handle("critical", args)

    def verbose(self, *args: Any) -> None:
        self._handle("verbose", args)

    def dir(self, *args: Any) -> None:
        self._handle("verbose", args)

    def trace(self, *args: Any) -> None:
        self._handle("trace", args)

    def __repr__(self) -> str:
        return f"Logger(name={self._options.name!r})"


logger = Logger()
