"""Level vocabulary shared by records, the caller resolver, and the façade."""

from __future__ import annotations

from typing import Any, Literal, Tuple

Level = Literal["debug", "info", "warn", "error", "critical", "verbose", "trace"]

# Categorical only: the order carries no severity ranking.
LEVELS: Tuple[str, ...] = ("debug", "info", "warn", "error", "critical", "verbose", "trace")


def is_level(value: Any) -> bool:
    return isinstance(value, str) and value in LEVELS
