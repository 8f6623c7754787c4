"""JSON encoding of record messages with protection against reference cycles."""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, Dict, Mapping, Set

from pydantic import BaseModel

from pipelog.models.callsite import CallSite

CIRCULAR_MARKER = "[circular]"

_SCALARS = (str, int, float, bool, type(None))


def to_jsonable(value: Any, _path: Set[int] | None = None) -> Any:
    """Convert ``value`` into JSON compatible data.

    Containers already on the current traversal path are replaced by
    ``CIRCULAR_MARKER`` instead of being walked again. NaN and infinities
    have no JSON spelling and become ``None``.
    """

    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"

    path = _path if _path is not None else set()
    marker = id(value)
    if marker in path:
        return CIRCULAR_MARKER
    path.add(marker)
    try:
        if isinstance(value, CallSite):
            return value.to_json()
        if isinstance(value, BaseModel):
            return to_jsonable(value.model_dump(), path)
        if isinstance(value, Mapping):
            return {str(key): to_jsonable(item, path) for key, item in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [to_jsonable(item, path) for item in value]
        return str(value)
    finally:
        path.discard(marker)


def dumps(message: Mapping[str, Any]) -> str:
    """Serialize a record message; absent top-level fields are omitted."""

    payload: Dict[str, Any] = {key: value for key, value in message.items() if value is not None}
    return json.dumps(to_jsonable(payload), ensure_ascii=False, allow_nan=False)
