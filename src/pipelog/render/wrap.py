"""Width-aware wrapping at separator tokens."""

from __future__ import annotations

import os
import sys
from typing import List, TextIO

DEFAULT_SEPARATOR = "<-|->"


def terminal_width(stream: TextIO | None = None) -> int:
    """Return the column count of ``stream`` (stdout by default), 0 when unknown."""

    stream = stream if stream is not None else sys.stdout
    try:
        if not stream.isatty():
            return 0
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return 0


def resolve_separators(text: str, separator: str, width: int) -> str:
    """Break ``text`` at ``separator`` so lines fit ``width`` columns.

    With no known width every separator becomes a newline. Otherwise segments
    are packed onto as few lines as possible with at least one space between
    neighbours, and the spare columns of each line are spread evenly across
    its gaps. A segment wider than ``width`` is kept whole on its own line.
    """

    segments = text.split(separator)
    if width <= 0:
        return "\n".join(segments)

    lines: List[List[str]] = []
    current: List[str] = []
    used = 0
    for segment in segments:
        needed = len(segment) if not current else used + 1 + len(segment)
        if current and needed > width:
            lines.append(current)
            current, used = [segment], len(segment)
        else:
            current.append(segment)
            used = needed
    lines.append(current)
    return "\n".join(_justify(line, width) for line in lines)


def _justify(segments: List[str], width: int) -> str:
    if len(segments) == 1:
        return segments[0]
    gaps = len(segments) - 1
    spare = max(width - sum(len(segment) for segment in segments), gaps)
    base, extra = divmod(spare, gaps)
    pieces = [segments[0]]
    for index, segment in enumerate(segments[1:]):
        pieces.append(" " * (base + (1 if index < extra else 0)))
        pieces.append(segment)
    return "".join(pieces)
