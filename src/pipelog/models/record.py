"""Immutable log record created once per log call."""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, List, Mapping, Optional, Sequence, Tuple, TypedDict, Union

from pipelog.core.levels import LEVELS, Level, is_level
from pipelog.models.callsite import CallSite
from pipelog.stack.caller import Caller
from pipelog.stack.capture import Frame, RawFrame, capture_raw_frames, describe

if TYPE_CHECKING:
    from pipelog.render.renderer import FormatRenderer

PipeFn = Callable[[Any], Any]
Pipes = Mapping[str, PipeFn]
Meta = Mapping[str, Any]


class Message(TypedDict):
    """Flat projection of a record used by templates, format functions and JSON."""

    args: Tuple[Any, ...]
    caller: Optional[CallSite]
    date: int
    level: str
    meta: Meta
    name: Optional[str]


FormatFn = Callable[[Message], Any]
FormatSpec = Union[str, FormatFn]

_UNRESOLVED = object()


class Record:
    """One log event.

    Everything is fixed at construction except the call site. Only raw
    frames are captured eagerly; they are described and resolved the first
    time the call site is read, and the result is cached.
    """

    __slots__ = ("name", "formats", "pipes", "meta", "level", "args", "date", "_raw_frames", "_frames", "_skip_levels", "_max_callers", "_caller")

    def __init__(
        self,
        name: str | None,
        formats: Sequence[FormatSpec],
        pipes: Pipes,
        meta: Meta,
        level: Level,
        args: Sequence[Any],
        skip_levels: int = 0,
        max_callers: int | None = None,
    ) -> None:
        if not is_level(level):
            raise ValueError(f"Unknown level {level!r}; expected one of {', '.join(LEVELS)}")
        if skip_levels < 0:
            raise ValueError("skip_levels must be non-negative")
        assign = object.__setattr__
        assign(self, "date", int(time.time() * 1000))
        assign(self, "name", name)
        assign(self, "formats", tuple(formats))
        assign(self, "pipes", MappingProxyType(dict(pipes)))
        assign(self, "meta", MappingProxyType(dict(meta)))
        assign(self, "level", level)
        assign(self, "args", tuple(args))
        assign(self, "_skip_levels", skip_levels)
        assign(self, "_max_callers", Caller.MAX_CALLERS_COUNT if max_callers is None else max_callers)
        assign(self, "_raw_frames", tuple(capture_raw_frames(Caller.STACK_LIMIT)))
        assign(self, "_frames", _UNRESOLVED)
        assign(self, "_caller", _UNRESOLVED)

    @property
    def caller(self) -> CallSite | None:
        if self._caller is _UNRESOLVED:
            resolved = Caller.resolve(self.frames, self._skip_levels, self._max_callers)
            object.__setattr__(self, "_caller", resolved)
        return self._caller

    @property
    def frames(self) -> Tuple[Frame, ...]:
        """Captured frames, described on first access."""

        if self._frames is _UNRESOLVED:
            object.__setattr__(self, "_frames", tuple(describe(raw) for raw in self._raw_frames))
        return self._frames

    @property
    def raw_frames(self) -> Tuple[RawFrame, ...]:
        return self._raw_frames

    def to_message(self) -> Message:
        return Message(
            args=self.args,
            caller=self.caller,
            date=self.date,
            level=self.level,
            meta=self.meta,
            name=self.name,
        )

    def messages(self, renderer: "FormatRenderer | None" = None) -> List[Any]:
        """Render every configured format, using a default renderer if none is given."""

        if renderer is None:
            from pipelog.render.renderer import FormatRenderer

            renderer = FormatRenderer.from_settings()
        return renderer.render(self)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Record is immutable; cannot set {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Record is immutable; cannot delete {key!r}")

    def __repr__(self) -> str:
        return f"Record(level={self.level!r}, name={self.name!r}, args={self.args!r})"
