"""
SQL logging policy derived from the deployment environment.

Inline parameter values can expose personal data and credentials, so they
are written to the log only when BOTH ``SQL_LOGGING_SHOW_PARAMETERS`` is set
AND one of the active profiles is ``dev`` or ``local`` (case-insensitive).
A request for inlining outside those profiles is refused with a warning, and
SQL logging itself raises a warning whenever it runs outside them.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple

from commonlogger.core.config.settings import Settings
from commonlogger.core.logging.logger import get_logger

SAFE_PROFILES = frozenset({"dev", "local"})


def is_safe_profile(profiles: Iterable[str]) -> bool:
    return any(profile.strip().lower() in SAFE_PROFILES for profile in profiles)


@dataclass(frozen=True)
class SqlLoggingPolicy:
    """
    Immutable policy, derived once when query logging is wired.

    Attributes:
        parameter_inlining_enabled: Inline bound values into logged SQL
        profiles: Active profiles the decision was based on
        safe_profile: Whether any active profile is dev/local
        warnings: Warning lines emitted while deriving the policy
    """

    parameter_inlining_enabled: bool = False
    profiles: Tuple[str, ...] = field(default_factory=tuple)
    safe_profile: bool = False
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def profiles_label(self) -> str:
        return ",".join(self.profiles)

    @classmethod
    def derive(
        cls,
        profiles: Iterable[str],
        show_parameters: bool,
        logger: Optional[Any] = None,
    ) -> "SqlLoggingPolicy":
        """
        Apply the profile safety rule.

        Args:
            profiles: Active deployment profiles
            show_parameters: Explicit request to inline parameter values
            logger: Logger receiving the warnings (module logger by default)

        Returns:
            SqlLoggingPolicy: Policy with inlining forced off outside dev/local
        """
        log = logger if logger is not None else get_logger(__name__)
        profiles = tuple(p.strip() for p in profiles if p and p.strip())
        label = ",".join(profiles)
        safe = is_safe_profile(profiles)
        warnings = []

        if not safe:
            if show_parameters:
                warnings.append(
                    f"Parameter logging is ENABLED in non-dev environment [{label}]; "
                    "ignoring inline parameters for safety."
                )
            warnings.append(
                f"SQL logging is ENABLED in non-dev environment [{label}]; "
                "consider disabling before production."
            )
        for warning in warnings:
            log.warning(warning)

        return cls(
            parameter_inlining_enabled=safe and show_parameters,
            profiles=profiles,
            safe_profile=safe,
            warnings=tuple(warnings),
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, logger: Optional[Any] = None
    ) -> "SqlLoggingPolicy":
        return cls.derive(
            settings.active_profiles,
            settings.SQL_LOGGING_SHOW_PARAMETERS,
            logger=logger,
        )
