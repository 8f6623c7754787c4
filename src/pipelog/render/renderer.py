"""Rendering of records through template, function and JSON formats."""

from __future__ import annotations

import re
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Callable, Iterator, List, Mapping, NamedTuple, Optional

from pipelog.core.config import Settings, get_settings
from pipelog.core.errors import InvalidFormatError, MissingPipeError
from pipelog.core.logging import get_logger
from pipelog.models.record import FormatSpec, Message, Pipes, Record
from pipelog.render.encode import dumps
from pipelog.render.wrap import DEFAULT_SEPARATOR, resolve_separators, terminal_width

logger = get_logger(module="renderer")

JSON_FORMAT = "json"
PLACEHOLDER = re.compile(
    r"\{\{\s*([A-Za-z_$][0-9A-Za-z_$]*)(?:\s*\|\s*([A-Za-z_$][0-9A-Za-z_$]*))?\s*\}\}"
)

_EMPTY_PIPES: Pipes = MappingProxyType({})
_current_pipes: ContextVar[Pipes] = ContextVar("pipelog_current_pipes", default=_EMPTY_PIPES)


def current_pipes() -> Pipes:
    """Pipes of the record whose format function is being called."""

    return _current_pipes.get()


@contextmanager
def _bound_pipes(pipes: Pipes) -> Iterator[None]:
    token = _current_pipes.set(pipes)
    try:
        yield
    finally:
        _current_pipes.reset(token)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return " ".join(to_text(item) for item in value)
    return str(value)


class Outcome(NamedTuple):
    format: FormatSpec
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FormatRenderer:
    """Turn a record into one output per configured format specifier."""

    def __init__(
        self,
        separator: str | None = DEFAULT_SEPARATOR,
        width_source: Callable[[], int] = terminal_width,
        line_width: int | None = None,
    ) -> None:
        self.separator = separator or ""
        self.width_source = width_source
        self.line_width = line_width
        self.last_width = 0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "FormatRenderer":
        settings = settings or get_settings()
        return cls(separator=settings.separator, line_width=settings.line_width)

    def render(self, record: Record) -> List[Any]:
        """Render every format; the first failure is raised after all were tried."""

        outcomes = self.render_outcomes(record)
        for outcome in outcomes:
            if outcome.error is not None:
                raise outcome.error
        return [outcome.value for outcome in outcomes]

    def render_outcomes(self, record: Record) -> List[Outcome]:
        """Render every format, keeping failures scoped to their own specifier."""

        message = record.to_message()
        self.last_width = self._query_width()
        outcomes: List[Outcome] = []
        for specifier in record.formats:
            try:
                value = self.render_one(specifier, message, record.pipes, self.last_width)
            except (MissingPipeError, InvalidFormatError) as exc:
                logger.debug("Format specifier failed", specifier=repr(specifier), error=str(exc))
                outcomes.append(Outcome(specifier, error=exc))
            else:
                outcomes.append(Outcome(specifier, value=value))
        return outcomes

    def render_one(self, specifier: FormatSpec, message: Message, pipes: Pipes, width: int) -> Any:
        if specifier == JSON_FORMAT:
            return dumps(message)
        if callable(specifier):
            with _bound_pipes(pipes):
                return specifier(message)
        if isinstance(specifier, str):
            return self.render_template(specifier, message, pipes, width)
        raise InvalidFormatError(specifier)

    def render_template(self, template: str, message: Mapping[str, Any], pipes: Pipes, width: int) -> str:
        def substitute(match: re.Match) -> str:
            prop_name, pipe_name = match.group(1), match.group(2)
            value = message.get(prop_name)
            if pipe_name is None:
                return to_text(value)
            pipe = pipes.get(pipe_name)
            if not callable(pipe):
                raise MissingPipeError(pipe_name, template)
            return to_text(pipe(value))

        text = PLACEHOLDER.sub(substitute, template)
        if not self.separator or self.separator not in text:
            return text
        return resolve_separators(text, self.separator, width)

    def _query_width(self) -> int:
        if self.line_width is not None:
            return self.line_width
        return self.width_source() or 0
