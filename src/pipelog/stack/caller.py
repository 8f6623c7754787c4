"""Call-site resolution over captured stack frames.

The resolver is the only place that knows how the logging machinery looks on
the stack: it matches frames by method name against the dispatch sentinel and
the level method names, then hands back the first frame outside of them.
"""

from __future__ import annotations

from typing import FrozenSet, Sequence

from pipelog.core.levels import LEVELS
from pipelog.core.logging import get_logger
from pipelog.models.callsite import CallSite
from pipelog.stack.capture import Frame, capture_frames

logger = get_logger(module="caller")

HANDLE_METHOD_NAME = "_handle"
# Level methods plus the façade aliases that dispatch without a level name.
BOUNDARY_METHOD_NAMES: FrozenSet[str] = frozenset(LEVELS) | {"log", "dir"}


class Caller:
    MAX_CALLERS_COUNT = 1
    STACK_LIMIT = 64

    @classmethod
    def create(cls, skip_levels: int = 0, max_callers: int | None = None) -> CallSite | None:
        """Capture the current stack and resolve the call site from it."""

        frames = capture_frames(cls.STACK_LIMIT)
        return cls.resolve(frames, skip_levels, max_callers)

    @classmethod
    def resolve(
        cls,
        frames: Sequence[Frame],
        skip_levels: int = 0,
        max_callers: int | None = None,
    ) -> CallSite | None:
        """Locate the frame that issued a log call.

        ``frames`` run innermost first and index 0 is the capturing frame.
        After the dispatch sentinel is seen, the next frame named after a
        level method marks the edge of the logging machinery; ``skip_levels``
        further frames are stepped over and the one after that is the call
        site. The ``max_callers`` frames beyond it become the trace.

        Indexing is total: a target beyond the captured stack yields an empty
        ``CallSite`` and the trace is whatever is left, possibly nothing. When
        no sentinel/boundary pair exists the innermost frame is returned.
        """

        if max_callers is None:
            max_callers = cls.MAX_CALLERS_COUNT
        if skip_levels < 0 or max_callers < 0:
            raise ValueError("skip_levels and max_callers must be non-negative")
        if not frames:
            return None

        found_handle = False
        for index in range(1, len(frames)):
            method_name = frames[index].method_name
            if not found_handle and method_name == HANDLE_METHOD_NAME:
                found_handle = True
                continue
            if found_handle and method_name in BOUNDARY_METHOD_NAMES:
                target = index + skip_levels + 1
                frame = frames[target] if target < len(frames) else None
                parents = frames[target + 1 : target + 1 + max_callers]
                return CallSite.from_frame(frame, parents)

        logger.debug("No dispatch boundary on the stack, using the innermost frame", frames=len(frames))
        return CallSite.from_frame(frames[0])
