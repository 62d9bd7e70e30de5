"""
CommonLogger Interception Module - call entry/exit/failure logging.

Core Components:
    - CallInterceptor: Runs the per-call logging state machine
    - CallEvent: One intercepted invocation
    - ScopeConfig / is_in_scope: Which call targets are logged
    - ArgumentSummarizer / summarize: Redacted INFO argument summaries
    - LoggedProxy: Explicit wrapper around an existing object
"""

from .events import CallEvent
from .interceptor import CallInterceptor, root_cause
from .proxy import LoggedProxy
from .scope import ScopeConfig, is_in_scope
from .summarizer import ArgumentSummarizer, summarize

__all__ = [
    "ArgumentSummarizer",
    "CallEvent",
    "CallInterceptor",
    "LoggedProxy",
    "ScopeConfig",
    "is_in_scope",
    "root_cause",
    "summarize",
]
