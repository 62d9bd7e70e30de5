"""
SQL parameter inlining for human-readable query logs.

SQL text is treated as an opaque string: the only lexical knowledge used is
the placeholder marker of the driver's DB-API paramstyle, a leading
``INSERT`` keyword and the ``VALUES`` keyword.

Formatting rules:
    - Inlining disabled, or no placeholder in the SQL: whitespace is
      normalized and nothing else changes.
    - ``INSERT ... VALUES``: the SQL is cut after ``VALUES`` and one tuple is
      rendered per non-empty parameter set, giving a multi-row insert for
      batches: ``INSERT INTO t (a, b) VALUES ('x', 1), ('y', 2);``
    - Anything else: placeholders are filled left-to-right per parameter
      set, the filled statements are joined with `` ; `` and ``;`` is
      appended.

Values: ``None`` renders as ``null``, numbers unquoted, everything else
single-quoted with embedded quotes escaped as ``\\'``.

Example:
    >>> format_sql(
    ...     "INSERT INTO users (name, age) VALUES (?, ?)",
    ...     [[(1, "John"), (2, 30)]],
    ...     inlining_enabled=True,
    ... )
    "INSERT INTO users (name, age) VALUES ('John', 30);"
"""

import numbers
import re
from typing import Any, Dict, Optional, Pattern, Sequence

from commonlogger.sql.events import ParameterSet

DEFAULT_PARAMSTYLE = "qmark"

# Named groups carry the parameter key; an unmatched group means positional.
PLACEHOLDER_PATTERNS: Dict[str, Pattern[str]] = {
    "qmark": re.compile(r"\?"),
    "format": re.compile(r"(?<!%)%s"),
    "numeric": re.compile(r"(?<![:\w]):(\d+)"),
    "named": re.compile(r"(?<![:\w]):([A-Za-z_]\w*)"),
    "pyformat": re.compile(r"(?<!%)%(?:\((\w+)\))?s"),
}

_INSERT = re.compile(r"^\s*insert\b", re.IGNORECASE)
_VALUES = re.compile(r"\bvalues\b", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def normalize(sql: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    return _WHITESPACE.sub(" ", sql).strip()


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, numbers.Number) and not isinstance(value, bool):
        return str(value)
    try:
        text = str(value)
    except Exception:
        text = object.__repr__(value)
    return "'" + text.replace("'", "\\'") + "'"


def placeholder_pattern(paramstyle: Optional[str]) -> Pattern[str]:
    """Placeholder regex for a paramstyle; unknown styles fall back to qmark."""
    default = PLACEHOLDER_PATTERNS[DEFAULT_PARAMSTYLE]
    return PLACEHOLDER_PATTERNS.get(paramstyle or DEFAULT_PARAMSTYLE, default)


def _fill(sql: str, pattern: Pattern[str], parameter_set: ParameterSet) -> str:
    positional = iter([value for _, value in parameter_set])
    by_key = {str(key): value for key, value in parameter_set}

    def replace(match: "re.Match[str]") -> str:
        key = match.group(1) if match.groups() else None
        if key is None:
            try:
                return format_value(next(positional))
            except StopIteration:
                return match.group(0)
        if key in by_key:
            return format_value(by_key[key])
        return match.group(0)

    return pattern.sub(replace, sql)


def _tuple(parameter_set: ParameterSet) -> str:
    return "(" + ", ".join(format_value(value) for _, value in parameter_set) + ")"


def format_sql(
    raw_sql: str,
    parameter_sets: Sequence[ParameterSet],
    inlining_enabled: bool,
    paramstyle: str = DEFAULT_PARAMSTYLE,
) -> str:
    """
    Render SQL for logging, optionally with parameter values inlined.

    Args:
        raw_sql: SQL text as sent to the driver
        parameter_sets: One parameter set per batch entry
        inlining_enabled: Whether values may be written into the log line
        paramstyle: DB-API paramstyle deciding the placeholder marker

    Returns:
        str: Normalized SQL; with inlining, values substituted and a
            trailing ``;``. Never raises on malformed SQL.
    """
    pattern = placeholder_pattern(paramstyle)
    if not inlining_enabled or not pattern.search(raw_sql):
        return normalize(raw_sql)

    non_empty = [parameter_set for parameter_set in parameter_sets if parameter_set]

    if _INSERT.match(raw_sql):
        values = _VALUES.search(raw_sql)
        if values and non_empty:
            prefix = normalize(raw_sql[: values.end()])
            tuples = ", ".join(_tuple(parameter_set) for parameter_set in non_empty)
            return f"{prefix} {tuples};"

    filled = [_fill(raw_sql, pattern, parameter_set) for parameter_set in non_empty]
    if filled:
        return normalize(" ; ".join(filled)) + ";"
    return normalize(raw_sql)
