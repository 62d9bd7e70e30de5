"""
Query events delivered to the query logging listener.

A ``QueryEvent`` describes one completed statement or batch: the SQL text of
each statement, the parameter sets bound for every batch entry, the elapsed
time, the batch size and the shape of the result.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple, Union

# (key, value): key is the 1-based position or the parameter name.
ParameterSet = Sequence[Tuple[Union[int, str], Any]]


@dataclass(frozen=True)
class QueryStatement:
    """SQL text of one statement and the parameter sets it ran with."""

    sql: str
    parameter_sets: Tuple[ParameterSet, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RowCount:
    """Update count of a single statement."""

    count: int


@dataclass(frozen=True)
class RowCounts:
    """Per-statement update counts of a batch."""

    counts: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResultCursor:
    """
    Cursor returned by a row-producing statement.

    Only its column count is ever read; ``column_count`` raises when the
    cursor carries no result metadata.
    """

    cursor: Any = field(repr=False)

    def column_count(self) -> int:
        return len(self.cursor.description)


QueryResult = Union[RowCount, RowCounts, ResultCursor, None]


@dataclass(frozen=True)
class QueryEvent:
    """
    One completed statement or batch.

    Attributes:
        statements: Statements executed together, in execution order
        elapsed_millis: Wall time of the execution in milliseconds
        batch_size: Number of batch entries, 0 for a non-batched execution
        result: Shape of the execution result
    """

    statements: Tuple[QueryStatement, ...]
    elapsed_millis: int = 0
    batch_size: int = 0
    result: QueryResult = None

    @property
    def raw_sql(self) -> str:
        return " ; ".join(statement.sql for statement in self.statements)

    @property
    def parameter_sets(self) -> List[ParameterSet]:
        return [
            parameter_set
            for statement in self.statements
            for parameter_set in statement.parameter_sets
        ]
