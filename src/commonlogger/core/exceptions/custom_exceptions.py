"""
Custom exception hierarchy for CommonLogger error handling.

The logging layer is strictly observational: failures raised by intercepted
calls are re-raised unchanged and never wrapped in these types. The
exceptions defined here are raised only while wiring the library into a host
application, for example when asked to observe something that cannot be
wrapped or to attach query logging to an object that is not an engine.

Exception Hierarchy:
    CommonLoggerError (base)
    └── ConfigurationError: Wiring and setup issues

Example:
    >>> raise ConfigurationError(
    ...     "SQL logging requires a SQLAlchemy Engine or Connection",
    ...     error_code="SQL_LOGGING_UNSUPPORTED_TARGET",
    ...     details={"target_type": "builtins.str"}
    ... )
"""

from typing import Any, Dict, Optional


class CommonLoggerError(Exception):
    """
    Base exception class for all CommonLogger errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name if not specified.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(CommonLoggerError):
    """
    Raised when the library cannot be wired as requested.

    Common scenarios:
        - Observing an object that is neither a class nor a callable
        - Attaching SQL logging to something other than a SQLAlchemy
          Engine, AsyncEngine or Connection
        - Requesting an unknown DB-API paramstyle for SQL formatting
    """

    pass
