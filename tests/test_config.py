"""Unit tests for environment driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pipelog.core.config import DEFAULT_FORMAT, Settings, get_settings
from pipelog.render.wrap import DEFAULT_SEPARATOR

ENV_KEYS = (
    "PIPELOG_NAME",
    "PIPELOG_FORMATS",
    "PIPELOG_SEPARATOR",
    "PIPELOG_LINE_WIDTH",
    "PIPELOG_MAX_CALLERS",
    "PIPELOG_DEBUG",
    "PIPELOG_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env):
    settings = Settings()
    assert settings.name is None
    assert settings.formats == [DEFAULT_FORMAT]
    assert settings.separator == DEFAULT_SEPARATOR
    assert settings.line_width is None
    assert settings.max_callers == 1
    assert settings.debug is False
    assert settings.log_level == "WARNING"


def test_environment_overrides(clean_env):
    clean_env.setenv("PIPELOG_NAME", "svc")
    clean_env.setenv("PIPELOG_FORMATS", "json;;{{ level }}")
    clean_env.setenv("PIPELOG_SEPARATOR", "")
    clean_env.setenv("PIPELOG_LINE_WIDTH", "120")
    clean_env.setenv("PIPELOG_MAX_CALLERS", "3")
    clean_env.setenv("PIPELOG_DEBUG", "yes")
    clean_env.setenv("PIPELOG_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.name == "svc"
    assert settings.formats == ["json", "{{ level }}"]
    assert settings.separator == ""
    assert settings.line_width == 120
    assert settings.max_callers == 3
    assert settings.debug is True
    assert settings.log_level == "DEBUG"


def test_negative_width_is_rejected(clean_env):
    clean_env.setenv("PIPELOG_LINE_WIDTH", "-1")
    with pytest.raises(ValidationError):
        Settings()


def test_unknown_log_level_is_rejected(clean_env):
    clean_env.setenv("PIPELOG_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings()


def test_negative_max_callers_is_rejected(clean_env):
    clean_env.setenv("PIPELOG_MAX_CALLERS", "-2")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
