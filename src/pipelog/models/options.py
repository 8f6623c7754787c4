"""Immutable logger configuration snapshots."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from pipelog.core.config import Settings, get_settings

_MERGED_MAPPINGS = ("meta", "pipes")


class LoggerOptions(BaseModel):
    """Options of one logger; ``None`` means inherit from the snapshot below."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    pipes: Optional[Dict[str, Callable[..., Any]]] = None
    formats: Optional[Tuple[Union[str, Callable[..., Any]], ...]] = None
    handler: Optional[Callable[..., Any]] = None
    debug: Optional[bool] = None
    skip_levels: Optional[int] = Field(default=None, ge=0)
    max_callers: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LoggerOptions":
        settings = settings or get_settings()
        return cls(
            name=settings.name,
            meta={},
            pipes={},
            formats=tuple(settings.formats),
            debug=settings.debug,
            skip_levels=0,
            max_callers=settings.max_callers,
        )

    def merge(self, overrides: "LoggerOptions") -> "LoggerOptions":
        """Return a new snapshot with ``overrides`` layered on top of this one.

        ``meta`` and ``pipes`` merge key by key; every other field is replaced
        when the override sets it.
        """

        values: Dict[str, Any] = {}
        for field in type(self).model_fields:
            base, override = getattr(self, field), getattr(overrides, field)
            if field in _MERGED_MAPPINGS and base is not None and override is not None:
                values[field] = {**base, **override}
            else:
                values[field] = override if override is not None else base
        return type(self)(**values)
