"""
Core configuration management for CommonLogger.

This module provides centralized configuration management using Pydantic settings
with support for environment variables, type validation, and computed properties.
All settings consumed by the call interception and SQL query logging engines
are defined here with sensible defaults and validation.

Classes:
    Settings: Main configuration class with all library settings

Environment Variables:
    Settings can be overridden using environment variables with the same names
    as the class attributes (case-sensitive).

Example:
    >>> from commonlogger.core.config.settings import Settings
    >>> settings = Settings(ACTIVE_PROFILES="dev,local")
    >>> print(settings.active_profiles)
    ['dev', 'local']

Configuration Sections:
    - Application: Basic identification (name, version, environment)
    - Logging: Log level, output format and optional file output
    - Call Logging: Enable flag, base package scope and excluded packages
    - SQL Logging: Enable flag, inline parameter flag and active profiles
"""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    All settings can be overridden via environment variables using the
    same name as the attribute. For example, the SQL_LOGGING_ENABLED
    environment variable turns on query logging.

    Attributes:
        APP_NAME: Application name identifier
        APP_VERSION: Current library version
        ENVIRONMENT: Deployment environment (affects log handler selection)
        DEBUG: Enable rich console logging regardless of environment

        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        LOG_FORMAT: Log format (json/text)
        LOG_FILE_PATH: Path for log file output (optional)

        LOGGING_ASPECT_ENABLED: Enable call interception logging
        LOGGING_ASPECT_BASE_PACKAGE: Dotted prefix limiting which targets are
            logged. Empty means every observed target is in scope.
        LOGGING_EXCLUDE_PACKAGES: Comma-separated prefixes never logged

        SQL_LOGGING_ENABLED: Attach the query logging listener to engines
        SQL_LOGGING_SHOW_PARAMETERS: Inline bound parameter values into the
            logged SQL (honored only in dev/local profiles)
        ACTIVE_PROFILES: Comma-separated list of active deployment profiles

    Properties:
        active_profiles: Parsed list of ACTIVE_PROFILES
        exclude_packages: Parsed list of LOGGING_EXCLUDE_PACKAGES
    """

    # Application
    APP_NAME: str = "CommonLogger"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    LOG_FILE_PATH: Optional[str] = None

    # Call Logging
    LOGGING_ASPECT_ENABLED: bool = True
    LOGGING_ASPECT_BASE_PACKAGE: Optional[str] = None
    LOGGING_EXCLUDE_PACKAGES: str = ""

    # SQL Logging
    SQL_LOGGING_ENABLED: bool = False
    SQL_LOGGING_SHOW_PARAMETERS: bool = False
    ACTIVE_PROFILES: str = ""

    @property
    def active_profiles(self) -> List[str]:
        """
        Active deployment profiles.

        Returns:
            List[str]: Trimmed, non-empty entries of ACTIVE_PROFILES in
                their configured order.
        """
        return _split_csv(self.ACTIVE_PROFILES)

    @property
    def exclude_packages(self) -> List[str]:
        """Prefixes excluded from call logging."""
        return _split_csv(self.LOGGING_EXCLUDE_PACKAGES)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate logging level is a supported value.

        Ensures the log level is one of the standard Python logging
        levels. Converts to uppercase for consistency.

        Args:
            v (str): The log level value to validate

        Returns:
            str: The validated and normalized log level

        Raises:
            ValueError: If log level is not supported
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["json", "text"]
        if v.lower() not in valid_formats:
            raise ValueError(f"LOG_FORMAT must be one of: {valid_formats}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # This will ignore extra fields from environment
    )


def get_settings() -> Settings:
    """Get library settings instance"""
    return Settings()


settings = Settings()
