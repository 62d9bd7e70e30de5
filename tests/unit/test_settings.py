"""
Unit tests for library settings
"""

import pytest
from pydantic import ValidationError

from commonlogger.core.config.settings import Settings


def test_defaults():
    settings = Settings()
    assert settings.APP_NAME == "CommonLogger"
    assert settings.LOGGING_ASPECT_ENABLED is True
    assert settings.LOGGING_ASPECT_BASE_PACKAGE is None
    assert settings.SQL_LOGGING_ENABLED is False
    assert settings.SQL_LOGGING_SHOW_PARAMETERS is False
    assert settings.active_profiles == []
    assert settings.exclude_packages == []


def test_csv_lists_are_trimmed():
    settings = Settings(
        ACTIVE_PROFILES=" dev , ,local",
        LOGGING_EXCLUDE_PACKAGES="myapp.health,",
    )
    assert settings.active_profiles == ["dev", "local"]
    assert settings.exclude_packages == ["myapp.health"]


def test_log_level_and_format_normalized():
    settings = Settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT")
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


@pytest.mark.parametrize("field, value", [("LOG_LEVEL", "LOUD"), ("LOG_FORMAT", "xml")])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SQL_LOGGING_ENABLED", "true")
    monkeypatch.setenv("ACTIVE_PROFILES", "prod")
    monkeypatch.setenv("LOGGING_ASPECT_BASE_PACKAGE", "myapp.services")

    settings = Settings()
    assert settings.SQL_LOGGING_ENABLED is True
    assert settings.active_profiles == ["prod"]
    assert settings.LOGGING_ASPECT_BASE_PACKAGE == "myapp.services"
