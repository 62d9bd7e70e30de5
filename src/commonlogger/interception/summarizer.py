"""
Argument summarization for concise call logging.

Renders an argument list as a single line for INFO-level output. Scalars are
printed as ``argN=value``. Composite values are expanded into their members
as ``name=value`` pairs, and any member whose name contains ``password`` or
``secret`` (case-insensitive) is left out entirely.

Members are discovered through, in order:
    1. A view function registered for the value's type
    2. Dataclass fields
    3. Pydantic model fields
    4. Mapping keys
    5. Instance ``__dict__``, then ``__slots__``

When none of these apply, or reading a member fails, the value falls back to
``argN=str(value)``. Summarization never raises: it runs on the path of the
call being observed and must not destabilize it.

Example:
    >>> summarize([None, "John", 30])
    'arg0=null, arg1=John, arg2=30'
    >>> @dataclass
    ... class Login:
    ...     user: str
    ...     password: str
    >>> summarize([Login("john", "hunter2")])
    'user=john'
"""

import dataclasses
import enum
import numbers
import types
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

NO_ARGUMENTS = "no arguments"
SEPARATOR = ", "
SENSITIVE_MARKERS = ("password", "secret")

LoggableView = Callable[[Any], Iterable[Tuple[str, Any]]]


def is_sensitive(member_name: str) -> bool:
    lowered = str(member_name).lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


def safe_str(value: Any) -> str:
    """str() that degrades to the default object repr instead of raising."""
    if value is None:
        return "null"
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return object.__repr__(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, numbers.Number, bool, enum.Enum))


# Rendered whole; their attributes are not members of the argument.
_OPAQUE_TYPES = (
    type,
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.ModuleType,
)


class ArgumentSummarizer:
    """
    Builds redacted one-line summaries of argument lists.

    Args:
        views: Optional mapping of type to a function returning the
            ``(name, value)`` members to log for instances of that type.
            Lookup follows the value's MRO, so a view registered for a base
            class applies to subclasses.
    """

    def __init__(self, views: Optional[Dict[type, LoggableView]] = None):
        self.views: Dict[type, LoggableView] = dict(views or {})

    def register(self, type_: type, view: LoggableView) -> None:
        self.views[type_] = view

    def summarize(self, values: Optional[Sequence[Any]]) -> str:
        if not values:
            return NO_ARGUMENTS

        fragments: List[str] = []
        for index, value in enumerate(values):
            fragments.extend(self._render(index, value))
        return SEPARATOR.join(fragment for fragment in fragments if fragment)

    def _render(self, index: int, value: Any) -> List[str]:
        if value is None:
            return [f"arg{index}=null"]
        if _is_scalar(value) or isinstance(value, _OPAQUE_TYPES):
            return [f"arg{index}={safe_str(value)}"]
        try:
            return [
                f"{name}={safe_str(member)}"
                for name, member in self._members(value)
                if not is_sensitive(name)
            ]
        except Exception:
            return [f"arg{index}={safe_str(value)}"]

    def _members(self, value: Any) -> List[Tuple[str, Any]]:
        view = self._find_view(type(value))
        if view is not None:
            return list(view(value))
        if dataclasses.is_dataclass(value):
            return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
        if isinstance(value, BaseModel):
            return [(name, getattr(value, name)) for name in type(value).model_fields]
        if isinstance(value, Mapping):
            return [(str(key), item) for key, item in value.items()]
        if hasattr(value, "__dict__"):
            return list(vars(value).items())
        slots = _declared_slots(type(value))
        if slots:
            return [(name, getattr(value, name)) for name in slots]
        raise TypeError(f"{type(value).__name__} exposes no members")

    def _find_view(self, type_: type) -> Optional[LoggableView]:
        for klass in type_.__mro__:
            if klass in self.views:
                return self.views[klass]
        return None


def _declared_slots(type_: type) -> List[str]:
    names: List[str] = []
    for klass in type_.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(name for name in slots if name not in ("__dict__", "__weakref__"))
    return names


_default_summarizer = ArgumentSummarizer()


def summarize(values: Optional[Sequence[Any]]) -> str:
    """Summarize with the default, view-less summarizer."""
    return _default_summarizer.summarize(values)
