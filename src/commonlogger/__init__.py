"""
CommonLogger - zero-instrumentation call and SQL query logging.

CommonLogger gives application developers observability without touching
business logic. Two independent engines share one philosophy: cheap when
disabled, precise when enabled, never leak secrets.

Key Features:
    - Entry/exit/failure logging for observed classes, functions and objects
    - Redacted INFO argument summaries (password/secret members omitted)
    - Scope selection by dotted base package prefix
    - SQL query logging for SQLAlchemy engines with timing and row counts
    - Parameter inlining, restricted to dev/local profiles

Modules:
    core: Configuration, logging and exceptions
    interception: Call interception engine and wrappers
    sql: Query logging engine and SQLAlchemy integration
    cli: Command-line tools

Example:
    >>> from commonlogger import enable_logging, enable_sql_logging
    >>> calls = enable_logging(base_package="myapp.services")
    >>> @calls.observe
    ... class UserService:
    ...     def find(self, user_id):
    ...         ...
    >>> enable_sql_logging(engine)
"""

__version__ = "1.0.0"
__author__ = "CommonLogger"
__description__ = (
    "Cross-cutting diagnostic logging for application calls and executed "
    "SQL queries, with redaction and profile-aware parameter inlining."
)

from typing import Any, Optional

from commonlogger.core.config.settings import Settings
from commonlogger.core.config.settings import settings as default_settings
from commonlogger.core.logging.logger import get_logger
from commonlogger.interception import CallInterceptor, ScopeConfig
from commonlogger.interception.summarizer import ArgumentSummarizer
from commonlogger.sql import enable_sql_logging


def enable_logging(
    base_package: Optional[str] = None,
    settings: Optional[Settings] = None,
    logger: Optional[Any] = None,
    summarizer: Optional[ArgumentSummarizer] = None,
) -> CallInterceptor:
    """
    Build the call interceptor from settings.

    Args:
        base_package: Overrides LOGGING_ASPECT_BASE_PACKAGE when given
        settings: Settings to read (module settings by default)
        logger: Logger for call lines
        summarizer: Summarizer with caller-registered views

    Returns:
        CallInterceptor: Interceptor to observe classes/functions with. It is
            disabled, leaving targets untouched, when LOGGING_ASPECT_ENABLED
            is false.
    """
    settings = settings or default_settings
    scope = ScopeConfig.from_settings(settings)
    if base_package is not None:
        scope = ScopeConfig(base_package, scope.exclude_prefixes)
    return CallInterceptor(
        scope,
        logger=logger,
        summarizer=summarizer,
        enabled=settings.LOGGING_ASPECT_ENABLED,
    )


__all__ = [
    "CallInterceptor",
    "ScopeConfig",
    "Settings",
    "enable_logging",
    "enable_sql_logging",
    "get_logger",
]
