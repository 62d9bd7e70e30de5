"""
Explicit wrappers that route calls through a ``CallInterceptor``.

Nothing is proxied implicitly: the host application decides what to observe.

    - ``observe_target(interceptor, cls)`` replaces every public function,
      staticmethod and classmethod declared on ``cls`` with a wrapper.
    - ``observe_target(interceptor, func)`` wraps a single function.
    - ``LoggedProxy(instance, interceptor)`` wraps an existing object and
      logs calls made through the proxy to its public methods.

Coroutine functions get async wrappers so the awaited result, not the
coroutine object, is what gets logged.

Example:
    >>> interceptor = CallInterceptor(ScopeConfig.of("myapp"))
    >>> @interceptor.observe
    ... class OrderService:
    ...     def place(self, order):
    ...         ...
    >>> repo = interceptor.wrap(OrderRepository())
"""

import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from commonlogger.core.exceptions.custom_exceptions import ConfigurationError
from commonlogger.interception.events import CallEvent
from commonlogger.interception.scope import is_in_scope

if TYPE_CHECKING:
    from commonlogger.interception.interceptor import CallInterceptor

OBSERVED_MARKER = "__commonlogger_observed__"


def type_name(type_: type) -> str:
    return f"{type_.__module__}.{type_.__qualname__}"


def _signature_or_none(func: Callable[..., Any]) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def call_arguments(
    signature: Optional[inspect.Signature],
    args: Tuple[Any, ...],
    kwargs: Dict[str, Any],
    skip_first: bool = False,
) -> Tuple[Any, ...]:
    """
    Flatten a call into argument values in declaration order.

    Keyword arguments are bound to their parameter position. When the call
    does not match the signature, positional values are followed by keyword
    values in the order given.
    """
    if signature is not None:
        try:
            bound = signature.bind(*args, **kwargs)
        except TypeError:
            pass
        else:
            values = tuple(bound.arguments.values())
            return values[1:] if skip_first else values
    return tuple(args[1:] if skip_first else args) + tuple(kwargs.values())


def make_wrapper(
    interceptor: "CallInterceptor",
    func: Callable[..., Any],
    target_type: str,
    method_name: Optional[str] = None,
    skip_first: bool = False,
) -> Callable[..., Any]:
    """
    Build a wrapper that delivers each call to ``interceptor`` as a CallEvent.

    Args:
        interceptor: Interceptor receiving the events
        func: Callable to wrap
        target_type: Owner identity used for scope matching and log lines
        method_name: Name used in log lines (defaults to ``func.__name__``)
        skip_first: Drop the receiver (``self``/``cls``) from the arguments
    """
    name = method_name or getattr(func, "__name__", repr(func))
    signature = _signature_or_none(func)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            if not is_in_scope(target_type, interceptor.scope):
                return await func(*args, **kwargs)
            event = CallEvent(
                target_type=target_type,
                method_name=name,
                arguments=call_arguments(signature, args, kwargs, skip_first),
                proceed=lambda: func(*args, **kwargs),
            )
            return await interceptor.intercept_async(event)

        setattr(async_wrapper, OBSERVED_MARKER, True)
        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not is_in_scope(target_type, interceptor.scope):
            return func(*args, **kwargs)
        event = CallEvent(
            target_type=target_type,
            method_name=name,
            arguments=call_arguments(signature, args, kwargs, skip_first),
            proceed=lambda: func(*args, **kwargs),
        )
        return interceptor.intercept(event)

    setattr(wrapper, OBSERVED_MARKER, True)
    return wrapper


def _is_observed(func: Any) -> bool:
    return bool(getattr(func, OBSERVED_MARKER, False))


def _observe_class(interceptor: "CallInterceptor", cls: type) -> type:
    owner = type_name(cls)
    for name, attr in list(vars(cls).items()):
        if name.startswith("_"):
            continue
        if isinstance(attr, staticmethod):
            if not _is_observed(attr.__func__):
                wrapped = make_wrapper(interceptor, attr.__func__, owner, name)
                setattr(cls, name, staticmethod(wrapped))
        elif isinstance(attr, classmethod):
            if not _is_observed(attr.__func__):
                wrapped = make_wrapper(
                    interceptor, attr.__func__, owner, name, skip_first=True
                )
                setattr(cls, name, classmethod(wrapped))
        elif inspect.isfunction(attr) and not _is_observed(attr):
            setattr(
                cls, name, make_wrapper(interceptor, attr, owner, name, skip_first=True)
            )
    return cls


def observe_target(interceptor: "CallInterceptor", target: Any) -> Any:
    """
    Install logging wrappers on a class or function.

    Returns the target unchanged when the interceptor is disabled or the
    target is already observed.

    Raises:
        ConfigurationError: If target is neither a class nor a callable
    """
    if not interceptor.enabled:
        return target
    if isinstance(target, type):
        return _observe_class(interceptor, target)
    if callable(target):
        if _is_observed(target):
            return target
        return make_wrapper(interceptor, target, target.__module__)
    raise ConfigurationError(
        "Only classes and callables can be observed",
        error_code="OBSERVE_UNSUPPORTED_TARGET",
        details={"target_type": type_name(type(target))},
    )


class LoggedProxy:
    """
    Wrapper object exposing the same public methods as its target.

    Attribute reads are forwarded to the target. Public callables come back
    wrapped, so calls made through the proxy are logged with the target's
    type as owner. Private and dunder attributes, and non-callable values,
    are returned as-is.
    """

    def __init__(self, target: Any, interceptor: "CallInterceptor"):
        object.__setattr__(self, "_logged_target", target)
        object.__setattr__(self, "_logged_interceptor", interceptor)
        object.__setattr__(self, "_logged_type", type_name(type(target)))

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._logged_target, name)
        if name.startswith("_") or not callable(attr) or isinstance(attr, type):
            return attr
        if _is_observed(attr):
            return attr
        return make_wrapper(self._logged_interceptor, attr, self._logged_type, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._logged_target, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self._logged_target, name)

    def __repr__(self) -> str:
        return f"LoggedProxy({self._logged_target!r})"
