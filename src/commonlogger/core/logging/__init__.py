"""
CommonLogger Logging Module - Structured Library Logging.

This module provides the logging infrastructure shared by the call
interception and query logging engines. The engines decide which lines to
emit and at which level; this module decides how they are rendered and where
they are written.

Components:
    - logger: Main logging configuration and factory functions

Output Formats:
    - JSON: Structured format for log aggregation systems
    - Text: Human-readable format for development and console output
    - Rich: Enhanced console output with colors and formatting

setup_logging() configures output based on environment:
    - Development: Rich console output with debug information
    - Production: JSON structured logs for aggregation

Example:
    >>> from commonlogger.core.logging.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Logging will apply to base package: myapp")
"""
