"""
SQLAlchemy integration for query logging.

Hooks the cursor execution events of an Engine (or a single Connection) so
every statement the driver runs is reported to a ``QueryLoggingListener``
once it completes. The start time is stored on the statement's execution
context, so nested executions on one connection are timed independently and
a failed statement leaves nothing behind.

Example:
    >>> from sqlalchemy import create_engine
    >>> engine = create_engine("sqlite:///app.db")
    >>> enable_sql_logging(engine, Settings(SQL_LOGGING_ENABLED=True))
    >>> with engine.connect() as conn:
    ...     conn.exec_driver_sql("SELECT 1")
    Query: SELECT 1 | cols=1 time=0ms

``AsyncEngine`` instances are supported through their ``sync_engine``.

Row counts:
    DB-API drivers report a single ``rowcount`` even for ``executemany``.
    Batched executions are therefore reported as ``RowCounts`` and the
    logged ``rowsAffected`` is the batch size, whatever the driver counted.
"""

import time
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from sqlalchemy import event
from sqlalchemy.engine import Connection, Engine

from commonlogger.core.config.settings import Settings
from commonlogger.core.config.settings import settings as default_settings
from commonlogger.core.exceptions.custom_exceptions import ConfigurationError
from commonlogger.core.logging.logger import get_logger
from commonlogger.sql.events import (
    ParameterSet,
    QueryEvent,
    QueryResult,
    QueryStatement,
    ResultCursor,
    RowCount,
    RowCounts,
)
from commonlogger.sql.formatter import DEFAULT_PARAMSTYLE, PLACEHOLDER_PATTERNS
from commonlogger.sql.listener import QueryLoggingListener
from commonlogger.sql.policy import SqlLoggingPolicy

START_TIME_ATTR = "_commonlogger_query_start_time"


def to_parameter_set(parameters: Any) -> ParameterSet:
    """Key DB-API parameters by 1-based position, or by name for mappings."""
    if parameters is None:
        return ()
    if isinstance(parameters, Mapping):
        return tuple((str(key), value) for key, value in parameters.items())
    if isinstance(parameters, (list, tuple)):
        return tuple(enumerate(parameters, start=1))
    return ((1, parameters),)


def to_parameter_sets(parameters: Any, executemany: bool) -> Tuple[ParameterSet, ...]:
    if executemany:
        return tuple(to_parameter_set(entry) for entry in parameters or ())
    return (to_parameter_set(parameters),)


def _rowcount(cursor: Any) -> int:
    rowcount = getattr(cursor, "rowcount", -1)
    # DB-API reports -1 when the count is unknown
    return rowcount if isinstance(rowcount, int) and rowcount > 0 else 0


def cursor_result(cursor: Any, executemany: bool = False) -> QueryResult:
    if getattr(cursor, "description", None) is not None:
        return ResultCursor(cursor)
    if executemany:
        return RowCounts((_rowcount(cursor),))
    return RowCount(_rowcount(cursor))


def build_query_event(
    cursor: Any,
    statement: str,
    parameters: Any,
    executemany: bool,
    elapsed_millis: int,
) -> QueryEvent:
    return QueryEvent(
        statements=(
            QueryStatement(statement, to_parameter_sets(parameters, executemany)),
        ),
        elapsed_millis=elapsed_millis,
        batch_size=len(parameters or ()) if executemany else 0,
        result=cursor_result(cursor, executemany),
    )


class SqlAlchemyQueryLogger:
    """
    Cursor execution hooks feeding a ``QueryLoggingListener``.

    Args:
        listener: Query logging engine receiving completed queries
    """

    def __init__(self, listener: QueryLoggingListener):
        self.listener = listener
        self.targets: list = []

    def before_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        if context is not None:
            setattr(context, START_TIME_ATTR, time.perf_counter())

    def after_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        started = getattr(context, START_TIME_ATTR, None)
        elapsed = 0
        if started is not None:
            elapsed = int((time.perf_counter() - started) * 1000)
        try:
            query_event = build_query_event(
                cursor, statement, parameters, executemany, elapsed
            )
            self.listener.on_query_completed(query_event)
        except Exception as e:
            self.listener.logger.warning(f"Query logging failed for statement: {e}")

    def _hooks(self):
        return (
            ("before_cursor_execute", self.before_cursor_execute),
            ("after_cursor_execute", self.after_cursor_execute),
        )

    def attach(self, target: Any) -> None:
        """Listen on ``target``; on failure no hook is left registered."""
        registered = []
        try:
            for name, hook in self._hooks():
                event.listen(target, name, hook)
                registered.append((name, hook))
        except Exception:
            for name, hook in registered:
                event.remove(target, name, hook)
            raise
        self.targets.append(target)

    def detach(self) -> None:
        for target in self.targets:
            for name, hook in self._hooks():
                event.remove(target, name, hook)
        self.targets = []


def resolve_target(target: Any) -> Any:
    """Return the Engine/Connection to listen on, unwrapping AsyncEngine."""
    sync_engine = getattr(target, "sync_engine", None)
    if isinstance(sync_engine, Engine):
        return sync_engine
    if isinstance(target, (Engine, Connection)):
        return target
    raise ConfigurationError(
        "SQL logging requires a SQLAlchemy Engine, AsyncEngine or Connection",
        error_code="SQL_LOGGING_UNSUPPORTED_TARGET",
        details={"target_type": type(target).__name__},
    )


def _engine_label(target: Any) -> str:
    engine = target if isinstance(target, Engine) else target.engine
    return engine.url.render_as_string(hide_password=True)


def _paramstyle(target: Any) -> str:
    paramstyle = getattr(target.dialect, "paramstyle", None)
    if paramstyle in PLACEHOLDER_PATTERNS:
        return paramstyle
    return DEFAULT_PARAMSTYLE


def enable_sql_logging(
    target: Any,
    settings: Optional[Settings] = None,
    logger: Optional[Any] = None,
    profiles: Optional[Sequence[str]] = None,
) -> Optional[SqlAlchemyQueryLogger]:
    """
    Attach query logging to an engine when SQL logging is enabled.

    The policy is derived once here from the active profiles and the
    show-parameters setting, then shared by every query on the engine.

    Args:
        target: Engine, AsyncEngine or Connection to observe
        settings: Settings to read (module settings by default)
        logger: Logger for query lines and policy warnings
        profiles: Overrides ``settings.active_profiles``

    Returns:
        Optional[SqlAlchemyQueryLogger]: The attached hooks, or None when
            SQL_LOGGING_ENABLED is false

    Raises:
        ConfigurationError: If target is not a SQLAlchemy engine or connection
    """
    settings = settings or default_settings
    log = logger if logger is not None else get_logger(__name__)
    if not settings.SQL_LOGGING_ENABLED:
        log.debug("SQL logging is disabled; engine left unchanged")
        return None

    resolved = resolve_target(target)
    active = list(profiles) if profiles is not None else settings.active_profiles
    log.info(
        f"Initializing SQL query logging for engine {_engine_label(resolved)} "
        f"(profiles: {','.join(active)})"
    )
    policy = SqlLoggingPolicy.derive(
        active, settings.SQL_LOGGING_SHOW_PARAMETERS, logger=log
    )
    hooks = SqlAlchemyQueryLogger(
        QueryLoggingListener(policy, logger=log, paramstyle=_paramstyle(resolved))
    )
    hooks.attach(resolved)
    return hooks


def disable_sql_logging(hooks: Optional[SqlAlchemyQueryLogger]) -> None:
    if hooks is not None:
        hooks.detach()
