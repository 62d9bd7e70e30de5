"""
Scope matching for call interception.

Decides whether an intercepted call target is eligible for logging. The rule
is a plain string prefix match on the dotted target type, so a base package
of ``myapp.service`` also matches ``myapp.serviceX.Thing``. Callers that need
segment-aware matching should configure the prefix with a trailing dot.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from commonlogger.core.config.settings import Settings


@dataclass(frozen=True)
class ScopeConfig:
    """
    Immutable scope configuration, built once at startup.

    Attributes:
        base_package_prefix: Prefix a target type must start with, stripped of
            surrounding whitespace. ``None`` or an empty/blank string puts
            every observed target in scope.
        exclude_prefixes: Prefixes that are never in scope
    """

    base_package_prefix: Optional[str] = None
    exclude_prefixes: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        base = (self.base_package_prefix or "").strip() or None
        excluded = tuple(p.strip() for p in self.exclude_prefixes if p and p.strip())
        object.__setattr__(self, "base_package_prefix", base)
        object.__setattr__(self, "exclude_prefixes", excluded)

    @property
    def has_base_package(self) -> bool:
        return self.base_package_prefix is not None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScopeConfig":
        return cls(
            base_package_prefix=settings.LOGGING_ASPECT_BASE_PACKAGE,
            exclude_prefixes=tuple(settings.exclude_packages),
        )

    @classmethod
    def of(
        cls, base_package: Optional[str] = None, exclude: Iterable[str] = ()
    ) -> "ScopeConfig":
        return cls(base_package_prefix=base_package, exclude_prefixes=tuple(exclude))


def is_in_scope(target_type: str, config: ScopeConfig) -> bool:
    """
    Check whether a call target should be logged.

    Args:
        target_type: Dotted identity of the call owner
        config: Active scope configuration

    Returns:
        bool: True when no base package is configured, or when target_type
            starts with the configured prefix. Excluded prefixes always win.
    """
    if any(target_type.startswith(prefix) for prefix in config.exclude_prefixes):
        return False
    if not config.has_base_package:
        return True
    return target_type.startswith(config.base_package_prefix)
