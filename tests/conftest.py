"""
Pytest configuration and fixtures for CommonLogger tests
"""

import logging
from typing import Callable, List
from unittest.mock import MagicMock

import pytest

from commonlogger.core.config.settings import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Settings with SQL logging on in a dev profile"""
    return Settings(
        ENVIRONMENT="testing",
        LOG_LEVEL="DEBUG",
        SQL_LOGGING_ENABLED=True,
        SQL_LOGGING_SHOW_PARAMETERS=True,
        ACTIVE_PROFILES="dev",
    )


@pytest.fixture
def make_logger() -> Callable[..., MagicMock]:
    """Factory for mock loggers enabled from a given level upwards"""

    def factory(level: int = logging.INFO) -> MagicMock:
        logger = MagicMock()
        logger.isEnabledFor.side_effect = lambda lvl: lvl >= level
        return logger

    return factory


@pytest.fixture
def lines() -> Callable[[MagicMock], List[str]]:
    """Messages passed to one mock logger method, in call order"""

    def collect(method: MagicMock) -> List[str]:
        return [call.args[0] for call in method.call_args_list]

    return collect
