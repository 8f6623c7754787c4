"""Pydantic model describing where a log call was issued."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from pipelog.stack.capture import Frame


class CallSite(BaseModel):
    """One resolved stack frame plus a bounded trace of its callers."""

    model_config = ConfigDict(frozen=True)

    file_name: Optional[str] = None
    method_name: Optional[str] = None
    function_name: Optional[str] = None
    type_name: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    trace: Tuple[CallSite, ...] = ()

    @classmethod
    def from_frame(cls, frame: Frame | None, parents: Iterable[Frame] = ()) -> "CallSite":
        """Build a call site; ancestors never carry a nested trace."""

        trace = tuple(cls.from_frame(parent) for parent in parents)
        if frame is None:
            return cls(trace=trace)
        return cls(
            file_name=frame.file_name,
            method_name=frame.method_name,
            function_name=frame.function_name,
            type_name=frame.type_name,
            line=frame.line,
            column=frame.column,
            trace=trace,
        )

    @property
    def is_empty(self) -> bool:
        return self.file_name is None and self.line is None and self.function_name is None

    def to_json(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude_none=True, exclude={"trace"})
        if self.trace:
            payload["trace"] = [parent.to_json() for parent in self.trace]
        return payload

    def __str__(self) -> str:
        parts = [str(part) for part in (self.file_name, self.line, self.column) if part is not None]
        return ":".join(parts)
