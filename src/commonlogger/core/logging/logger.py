"""
Structured logging configuration for CommonLogger.

This module wires the output side of the library: the call interception and
query logging engines only decide WHAT to log and WHEN, while the handlers
configured here decide where the lines go. It integrates structlog for
rendering while staying compatible with standard Python logging, so host
applications can route the output with their own handlers.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance

Configuration:
    Logging behavior is controlled by environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG: Enable development mode with rich formatting

Example:
    >>> from commonlogger.core.logging.logger import get_logger, setup_logging
    >>> setup_logging()  # applications only; libraries keep their handlers
    >>> logger = get_logger(__name__)
    >>> logger.info("Logging will apply to base package: myapp.services")

Level gating:
    The engines ask ``logger.isEnabledFor(logging.DEBUG)`` before rendering
    anything expensive. structlog's stdlib BoundLogger answers from the
    underlying ``logging.Logger``, so the usual ``logging`` level setup
    controls verbosity.
"""

import logging
import logging.config
import sys
from pathlib import Path

import structlog
from rich.console import Console
from rich.logging import RichHandler

from commonlogger.core.config.settings import settings


def setup_logging() -> None:
    """
    Initialize logging configuration.

    Sets up structured logging with configurable output formats, handlers,
    and processing pipelines. Configures both structlog for rendering and
    standard library logging for level filtering and output.

    Features configured:
        - Configurable output format (JSON/text)
        - Rich console formatting for development
        - File output support (if LOG_FILE_PATH set)
        - Exception stack trace formatting
        - Timestamp normalization (ISO format)

    The function automatically selects appropriate handlers:
        - Development: Rich console handler with colors and formatting
        - Production: stream handler on stdout for log aggregation
        - File: Optional file handler when LOG_FILE_PATH is configured

    Example:
        >>> from commonlogger.core.logging.logger import setup_logging
        >>> setup_logging()  # Call once at application startup
    """

    # Configure structlog processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    handlers = []

    # Console handler with Rich formatting
    if settings.DEBUG or settings.ENVIRONMENT == "development":
        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(rich_handler)
    else:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(stream_handler)

    # File handler if specified
    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(file_handler)

    # Root logger configuration
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=handlers,
        format="%(message)s",
    )


# Used while structlog is unconfigured: lines reach the stdlib logger as-is.
HANDOFF_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.stdlib.render_to_log_kwargs,
]


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Creates and returns a structlog stdlib BoundLogger with the specified
    name. Once setup_logging() (or the host application) has configured
    structlog, the logger follows that configuration. Before that, lines
    are forwarded to ``logging.getLogger(name)`` as plain messages.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Logger instance

    Example:
        >>> from commonlogger.core.logging.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.warning("SQL logging is ENABLED in non-dev environment [prod]")

    Note:
        This function never configures logging itself. Libraries embedding
        CommonLogger keep their own handlers; applications that want the
        rich/JSON output call setup_logging() once at startup.
    """
    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=HANDOFF_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
