"""Environment driven defaults for loggers and the format renderer.

Every tunable value lives here so the rest of the package can stay free of
environment lookups. Settings are validated through Pydantic to guard against
malformed environment variables; a ``.env`` file in the working directory is
loaded first so local overrides do not need to be exported.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pipelog.render.wrap import DEFAULT_SEPARATOR

ENV_PATH = Path.cwd() / ".env"
load_dotenv(ENV_PATH)

DEFAULT_FORMAT = "{{ level }} {{ args }}"
FORMATS_DELIMITER = ";;"
LOG_LEVEL_NAMES = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _str_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    return value if value is not None else default


def _int_env(key: str, default: int | None) -> int | None:
    value = os.getenv(key)
    return int(value) if value else default


def _bool_env(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _formats_env(key: str) -> List[str]:
    value = os.getenv(key)
    if not value:
        return [DEFAULT_FORMAT]
    return [part for part in value.split(FORMATS_DELIMITER) if part]


class Settings(BaseModel):
    """Typed representation of environment configuration."""

    model_config = ConfigDict(validate_default=True)

    name: str | None = Field(
        default_factory=lambda: _str_env("PIPELOG_NAME") or None,
        description="Name given to the root logger",
    )
    formats: List[str] = Field(default_factory=lambda: _formats_env("PIPELOG_FORMATS"))
    separator: str = Field(
        default_factory=lambda: _str_env("PIPELOG_SEPARATOR", DEFAULT_SEPARATOR),
        description="Line break marker used by width-aware wrapping; empty disables it",
    )
    line_width: int | None = Field(
        default_factory=lambda: _int_env("PIPELOG_LINE_WIDTH", None),
        description="Fixed viewport width; unset means query the terminal",
    )
    max_callers: int = Field(default_factory=lambda: _int_env("PIPELOG_MAX_CALLERS", 1), ge=0)
    debug: bool = Field(default_factory=lambda: _bool_env("PIPELOG_DEBUG"))
    log_level: str = Field(default_factory=lambda: _str_env("PIPELOG_LOG_LEVEL", "WARNING"))

    @field_validator("line_width")
    @classmethod
    def ensure_width(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            msg = "PIPELOG_LINE_WIDTH must be zero or a positive number of columns"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def ensure_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LOG_LEVEL_NAMES:
            msg = f"PIPELOG_LOG_LEVEL must be one of {', '.join(LOG_LEVEL_NAMES)}"
            raise ValueError(msg)
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per interpreter for reuse across modules."""

    return Settings()
