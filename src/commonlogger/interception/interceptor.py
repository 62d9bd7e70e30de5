"""
Call interception engine.

Wraps the invocation of an observed unit with entry, exit and failure
logging. Each call runs the same state machine::

    ENTER -> PROCEED -> EXIT
                     -> FAIL

Logging behavior depends on the enabled log level:
    - INFO: ``Executing: T.m() with args summary: ...`` with a redacted summary
    - DEBUG: additionally ``Enter:`` with the full argument list and
      ``Exit:`` with the result
    - ERROR: failures, classified as invalid-argument (``ValueError``) or
      unexpected, followed by the root-cause line

Calls whose target is out of scope go straight to PROCEED with no logging.
Failures are always re-raised unchanged after logging.

Note:
    The DEBUG ``Enter:`` line renders arguments verbatim and does NOT apply
    the password/secret redaction used for the INFO summary. Keep DEBUG off
    for call logging wherever arguments may carry credentials.
"""

import logging
from typing import Any, Callable, Optional, TypeVar, Union

from commonlogger.core.logging.logger import get_logger
from commonlogger.interception.events import CallEvent
from commonlogger.interception.proxy import LoggedProxy, observe_target
from commonlogger.interception.scope import ScopeConfig, is_in_scope
from commonlogger.interception.summarizer import (
    ArgumentSummarizer,
    safe_repr,
    safe_str,
)

F = TypeVar("F", bound=Callable[..., Any])


def root_cause(exc: BaseException) -> BaseException:
    """
    Walk the cause chain to its deepest exception.

    Follows ``__cause__``, or ``__context__`` when the context was not
    suppressed. Stops at a missing or self-referential cause and never
    revisits an exception, so cyclic chains terminate.
    """
    root = exc
    seen = {id(exc)}
    while True:
        cause = root.__cause__
        if cause is None and not root.__suppress_context__:
            cause = root.__context__
        if cause is None or cause is root or id(cause) in seen:
            return root
        seen.add(id(cause))
        root = cause


def qualified_name(type_: type) -> str:
    module = type_.__module__
    if module in (None, "builtins"):
        return type_.__qualname__
    return f"{module}.{type_.__qualname__}"


class CallInterceptor:
    """
    Logs entry, exit and failures of calls within a configured scope.

    Args:
        scope: Immutable scope configuration
        logger: Logger used for call lines. Its ``isEnabledFor`` answers
            decide which views are rendered.
        summarizer: Summarizer for INFO argument summaries
        enabled: When False, ``observe`` and ``wrap`` return targets unchanged

    Example:
        >>> interceptor = CallInterceptor(ScopeConfig.of("myapp.services"))
        >>> @interceptor.observe
        ... class UserService:
        ...     def find(self, name):
        ...         return name.upper()
    """

    def __init__(
        self,
        scope: Optional[ScopeConfig] = None,
        logger: Optional[Any] = None,
        summarizer: Optional[ArgumentSummarizer] = None,
        enabled: bool = True,
    ):
        self.scope = scope or ScopeConfig()
        self.logger = logger if logger is not None else get_logger(__name__)
        self.summarizer = summarizer or ArgumentSummarizer()
        self.enabled = enabled

        if self.scope.has_base_package:
            self.logger.info(
                f"Logging will apply to base package: {self.scope.base_package_prefix}"
            )
        else:
            self.logger.warning(
                "No base package provided. Defaulting to log all observed components."
            )

    def in_scope(self, event: CallEvent) -> bool:
        return is_in_scope(event.target_type, self.scope)

    def intercept(self, event: CallEvent) -> Any:
        """Run ``event.proceed`` once, logging around it when in scope."""
        if not self.in_scope(event):
            return event.proceed()

        self._log_enter(event)
        try:
            result = event.proceed()
        except Exception as exc:
            self._log_failure(event, exc)
            raise
        self._log_exit(event, result)
        return result

    async def intercept_async(self, event: CallEvent) -> Any:
        """Coroutine variant of ``intercept``; ``proceed`` returns an awaitable."""
        if not self.in_scope(event):
            return await event.proceed()

        self._log_enter(event)
        try:
            result = await event.proceed()
        except Exception as exc:
            self._log_failure(event, exc)
            raise
        self._log_exit(event, result)
        return result

    def _log_enter(self, event: CallEvent) -> None:
        if self.logger.isEnabledFor(logging.INFO):
            summary = self.summarizer.summarize(event.arguments)
            self.logger.info(
                f"Executing: {event.signature}() with args summary: {summary}"
            )
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Enter: {event.signature}() with full arguments: "
                f"{safe_repr(list(event.arguments))}"
            )

    def _log_exit(self, event: CallEvent, result: Any) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Exit: {event.signature}() with result: {safe_str(result)}"
            )

    def _log_failure(self, event: CallEvent, exc: Exception) -> None:
        if isinstance(exc, ValueError):
            self.logger.error(
                f"Illegal argument in {event.signature}(): "
                f"args = {safe_repr(list(event.arguments))}, error: {safe_str(exc)}",
                exc_info=exc,
            )
        else:
            self.logger.error(
                f"Unexpected error in {event.signature}(): {safe_str(exc)}",
                exc_info=exc,
            )
        self.log_after_throwing(event, exc)

    def log_after_throwing(self, event: CallEvent, exc: BaseException) -> None:
        """Log the root cause type of a failure; the trace only at DEBUG."""
        cause = qualified_name(type(root_cause(exc)))
        line = (
            f"Exception in {event.signature}(): "
            f"cause = {cause}, message = {safe_str(exc)}"
        )
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.error(f"{line}, stacktrace:", exc_info=exc)
        else:
            self.logger.error(line)

    def observe(self, target: Union[type, F]) -> Union[type, F]:
        """Class/function decorator installing logging wrappers."""
        return observe_target(self, target)

    def wrap(self, instance: Any) -> Any:
        """Return a proxy that logs calls to the public methods of ``instance``."""
        if not self.enabled:
            return instance
        return LoggedProxy(instance, self)
