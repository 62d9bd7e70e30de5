"""
CommonLogger SQL Module - executed query logging.

Core Components:
    - QueryLoggingListener: Renders ``Query: ...`` lines for completed queries
    - SqlLoggingPolicy: Dev/local-only parameter inlining decision
    - format_sql / normalize: Parameter inlining formatter
    - enable_sql_logging: Attach the listener to a SQLAlchemy engine
"""

from .engine import SqlAlchemyQueryLogger, disable_sql_logging, enable_sql_logging
from .events import QueryEvent, QueryStatement, ResultCursor, RowCount, RowCounts
from .formatter import format_sql, format_value, normalize
from .listener import QueryLoggingListener, extract_row_count
from .policy import SqlLoggingPolicy

__all__ = [
    "QueryEvent",
    "QueryLoggingListener",
    "QueryStatement",
    "ResultCursor",
    "RowCount",
    "RowCounts",
    "SqlAlchemyQueryLogger",
    "SqlLoggingPolicy",
    "disable_sql_logging",
    "enable_sql_logging",
    "extract_row_count",
    "format_sql",
    "format_value",
    "normalize",
]
