"""
Unit tests for call scope matching
"""

import pytest

from commonlogger.core.config.settings import Settings
from commonlogger.interception.scope import ScopeConfig, is_in_scope


@pytest.mark.parametrize("base_package", [None, "", "   "])
def test_everything_in_scope_without_base_package(base_package):
    config = ScopeConfig.of(base_package)
    assert not config.has_base_package
    assert is_in_scope("com.app.service.UserService", config)
    assert is_in_scope("anything", config)


def test_prefix_match():
    config = ScopeConfig.of("com.app.service")
    assert is_in_scope("com.app.service.UserService", config)
    assert not is_in_scope("com.other.Foo", config)


def test_prefix_match_is_not_segment_aware():
    """A sibling package sharing the prefix text is matched too"""
    config = ScopeConfig.of("com.app.service")
    assert is_in_scope("com.app.serviceX.Thing", config)

    dotted = ScopeConfig.of("com.app.service.")
    assert not is_in_scope("com.app.serviceX.Thing", dotted)


def test_excluded_prefixes_win():
    config = ScopeConfig.of("com.app", exclude=["com.app.internal"])
    assert is_in_scope("com.app.api.Controller", config)
    assert not is_in_scope("com.app.internal.Cache", config)

    everything = ScopeConfig.of(exclude=["com.app.internal"])
    assert not is_in_scope("com.app.internal.Cache", everything)
    assert is_in_scope("org.lib.Thing", everything)


def test_scope_from_settings():
    settings = Settings(
        LOGGING_ASPECT_BASE_PACKAGE="myapp",
        LOGGING_EXCLUDE_PACKAGES="myapp.health, myapp.metrics",
    )
    config = ScopeConfig.from_settings(settings)
    assert config.base_package_prefix == "myapp"
    assert config.exclude_prefixes == ("myapp.health", "myapp.metrics")
    assert not is_in_scope("myapp.metrics.Exporter", config)


def test_prefixes_are_stripped():
    config = ScopeConfig.of(" com.app ", exclude=[" com.app.internal", "  "])
    assert config.base_package_prefix == "com.app"
    assert config.exclude_prefixes == ("com.app.internal",)
    assert is_in_scope("com.app.api.Controller", config)
    assert not is_in_scope("com.app.internal.Cache", config)


def test_padded_base_package_setting_matches():
    settings = Settings(LOGGING_ASPECT_BASE_PACKAGE="  myapp.services ")
    config = ScopeConfig.from_settings(settings)
    assert is_in_scope("myapp.services.UserService", config)
