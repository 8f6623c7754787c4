"""Record handlers: what happens to a record once it has been built."""

from __future__ import annotations

import sys
from typing import Any, List, TextIO

from pipelog.core.logging import get_logger
from pipelog.models.record import Record
from pipelog.render.renderer import FormatRenderer

logger = get_logger(module="handlers")

ERROR_LEVELS = frozenset({"error", "critical"})


def null_handler(record: Record) -> None:
    """Default handler; drops the record."""


class ConsoleHandler:
    """Render records and write each output on its own line.

    ``error`` and ``critical`` records go to ``error_stream``. A format that
    fails to render is reported through the package logger and skipped, or
    raised when ``strict`` is set.
    """

    def __init__(
        self,
        renderer: FormatRenderer | None = None,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        strict: bool = False,
    ) -> None:
        self.renderer = renderer or FormatRenderer.from_settings()
        self.stream = stream
        self.error_stream = error_stream
        self.strict = strict

    def __call__(self, record: Record) -> None:
        target = self._target(record)
        for outcome in self.renderer.render_outcomes(record):
            if outcome.error is not None:
                if self.strict:
                    raise outcome.error
                self._report(outcome.format, outcome.error)
                continue
            target.write(f"{outcome.value}\n")
        target.flush()

    def _report(self, specifier: Any, error: Exception) -> None:
        # Package diagnostics are off unless configure_logging() ran, so the
        # failure is always written to the error stream as well.
        logger.error("Skipping format {specifier!r}: {error}", specifier=specifier, error=error)
        stream = self._error_target()
        stream.write(f"pipelog: skipped format {specifier!r}: {error}\n")
        stream.flush()

    def _target(self, record: Record) -> TextIO:
        if record.level in ERROR_LEVELS:
            return self._error_target()
        # Looked up per call: sys.stdout and sys.stderr may be swapped at runtime.
        return self.stream or sys.stdout

    def _error_target(self) -> TextIO:
        return self.error_stream or sys.stderr


class MemoryHandler:
    """Keep records in memory, optionally rendering them as they arrive."""

    def __init__(self, renderer: FormatRenderer | None = None) -> None:
        self.renderer = renderer
        self.records: List[Record] = []
        self.outputs: List[List[Any]] = []

    def __call__(self, record: Record) -> None:
        self.records.append(record)
        if self.renderer is not None:
            self.outputs.append(self.renderer.render(record))

    def clear(self) -> None:
        self.records.clear()
        self.outputs.clear()
