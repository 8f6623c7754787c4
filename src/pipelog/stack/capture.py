"""Raw stack frame capture.

Capturing keeps only the code object, line and instruction offset of each
frame, so nothing downstream holds a live frame object and no locals are
read. ``describe`` turns those into ``Frame`` descriptors when a call site is
actually needed.
"""

from __future__ import annotations

import sys
from itertools import islice
from types import CodeType, FrameType
from typing import List, NamedTuple, Optional

RECEIVER_NAMES = ("self", "cls")


class RawFrame(NamedTuple):
    code: CodeType
    line: Optional[int]
    lasti: int


class Frame(NamedTuple):
    """Structured description of one interpreter frame (1-based positions)."""

    file_name: Optional[str]
    line: Optional[int]
    column: Optional[int]
    function_name: Optional[str]
    method_name: Optional[str]
    type_name: Optional[str]


def capture_raw_frames(limit: int | None = None, skip: int = 0) -> List[RawFrame]:
    """Return raw frames of the caller's stack, innermost first.

    ``skip`` drops that many frames above the caller. The live frame
    reference is released on every exit path.
    """

    frame: FrameType | None = sys._getframe(1 + skip)
    try:
        frames: List[RawFrame] = []
        while frame is not None and (limit is None or len(frames) < limit):
            frames.append(RawFrame(frame.f_code, frame.f_lineno, frame.f_lasti))
            frame = frame.f_back
        return frames
    finally:
        del frame


def capture_frames(limit: int | None = None) -> List[Frame]:
    """Return descriptors for the caller's stack, innermost frame first."""

    return [describe(raw) for raw in capture_raw_frames(limit, skip=1)]


def describe(raw: RawFrame) -> Frame:
    code = raw.code
    is_method = code.co_argcount > 0 and code.co_varnames[0] in RECEIVER_NAMES
    return Frame(
        file_name=code.co_filename or None,
        line=raw.line or None,
        column=_column(code, raw.lasti),
        function_name=code.co_name or None,
        method_name=code.co_name if is_method else None,
        type_name=_owner_name(code) if is_method else None,
    )


def _owner_name(code: CodeType) -> str | None:
    # Defining class from the qualified name, e.g. "Logger._handle" or
    # "factory.<locals>.Local.grab".
    parts = code.co_qualname.split(".")
    if len(parts) < 2 or parts[-2] == "<locals>":
        return None
    return parts[-2]


def _column(code: CodeType, lasti: int) -> int | None:
    if lasti < 0:
        return None
    # One position entry per 2-byte code unit.
    entry = next(islice(code.co_positions(), lasti // 2, None), None)
    if entry is None or entry[2] is None:
        return None
    return entry[2] + 1
