"""
Call event passed from a dispatcher to the call interceptor.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Tuple


@dataclass(frozen=True)
class CallEvent:
    """
    One intercepted invocation of an observed unit.

    Built by the wrapper at call time, consumed synchronously by
    ``CallInterceptor`` and discarded afterwards.

    Attributes:
        target_type: Dotted identity of the owner, ``module.QualifiedName``
            for methods or the module name for free functions
        method_name: Name of the invoked callable
        arguments: Argument values in declaration order, receiver excluded
        proceed: Zero-argument callable running the real invocation. For
            coroutine functions it returns an awaitable.
    """

    target_type: str
    method_name: str
    arguments: Tuple[Any, ...] = field(default_factory=tuple)
    proceed: Callable[[], Any] = field(default=lambda: None, repr=False)

    @property
    def signature(self) -> str:
        """``Type.method`` as used in every log line."""
        return f"{self.target_type}.{self.method_name}"
