"""
Query logging engine.

Turns each completed ``QueryEvent`` into one INFO line::

    Query: <sql> | cols=<n>[ batchSize=<b>] time=<ms>ms
    Query: <sql> | rowsAffected=<n>[ batchSize=<b>] time=<ms>ms

The first form is used when the statement produced a result cursor, the
second for update counts. Reading cursor metadata may fail; the column count
then reads as 0 and the failure never reaches the caller.
"""

import logging
from typing import Any, Optional

from commonlogger.core.exceptions.custom_exceptions import ConfigurationError
from commonlogger.core.logging.logger import get_logger
from commonlogger.sql.events import (
    QueryEvent,
    QueryResult,
    ResultCursor,
    RowCount,
    RowCounts,
)
from commonlogger.sql.formatter import (
    DEFAULT_PARAMSTYLE,
    PLACEHOLDER_PATTERNS,
    format_sql,
)
from commonlogger.sql.policy import SqlLoggingPolicy


def extract_row_count(result: QueryResult, batch_size: int) -> int:
    """
    Number of rows affected by an execution.

    For per-statement counts the batch size wins when known, otherwise the
    positive counts are summed. A single count is used as-is.
    """
    if isinstance(result, RowCounts):
        if batch_size > 0:
            return batch_size
        return sum(count for count in result.counts if count > 0)
    if isinstance(result, RowCount):
        return result.count
    return 0


def column_count(cursor: ResultCursor) -> int:
    try:
        return cursor.column_count()
    except Exception:
        return 0


def batch_suffix(batch_size: int) -> str:
    return f" batchSize={batch_size}" if batch_size > 1 else ""


class QueryLoggingListener:
    """
    Logs executed SQL with timing, counts and optionally inlined values.

    Args:
        policy: Immutable SQL logging policy
        logger: Logger receiving query lines
        paramstyle: DB-API paramstyle of the driver whose SQL is logged

    Raises:
        ConfigurationError: If paramstyle is not a DB-API paramstyle
    """

    def __init__(
        self,
        policy: SqlLoggingPolicy,
        logger: Optional[Any] = None,
        paramstyle: str = DEFAULT_PARAMSTYLE,
    ):
        if paramstyle not in PLACEHOLDER_PATTERNS:
            raise ConfigurationError(
                f"Unsupported paramstyle: {paramstyle}",
                error_code="SQL_LOGGING_UNSUPPORTED_PARAMSTYLE",
                details={"supported": sorted(PLACEHOLDER_PATTERNS)},
            )
        self.policy = policy
        self.logger = logger if logger is not None else get_logger(__name__)
        self.paramstyle = paramstyle

    def render(
        self, event: QueryEvent, policy: Optional[SqlLoggingPolicy] = None
    ) -> str:
        policy = policy or self.policy
        query = format_sql(
            event.raw_sql,
            event.parameter_sets,
            policy.parameter_inlining_enabled,
            paramstyle=self.paramstyle,
        )
        suffix = batch_suffix(event.batch_size)

        if isinstance(event.result, ResultCursor):
            cols = column_count(event.result)
            return (
                f"Query: {query} | cols={cols}{suffix} "
                f"time={event.elapsed_millis}ms"
            )

        rows = extract_row_count(event.result, event.batch_size)
        return (
            f"Query: {query} | rowsAffected={rows}{suffix} "
            f"time={event.elapsed_millis}ms"
        )

    def on_query_completed(
        self, event: QueryEvent, policy: Optional[SqlLoggingPolicy] = None
    ) -> None:
        """Log one completed query; ``policy`` overrides the listener's own."""
        if not self.logger.isEnabledFor(logging.INFO):
            return
        self.logger.info(self.render(event, policy))
