"""
CommonLogger CLI - Main entry point
"""

import logging
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from commonlogger.core.config.settings import settings
from commonlogger.core.logging.logger import get_logger, setup_logging
from commonlogger.interception.scope import ScopeConfig
from commonlogger.sql.formatter import PLACEHOLDER_PATTERNS, format_sql
from commonlogger.sql.policy import SqlLoggingPolicy

# Initialize CLI app
app = typer.Typer(
    name="commonlogger",
    help="Call interception and SQL query logging toolkit",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# Initialize console
console = Console()


def parse_value(text: str) -> Any:
    """Interpret a command-line parameter literal"""
    if text == "null":
        return None
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return text


def _version_table() -> Table:
    table = Table(title="CommonLogger Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Environment", style="yellow")

    table.add_row(settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    table.add_row("Python", "3.9+", "Required")
    return table


def version_callback(value: bool) -> None:
    """Handle version callback"""
    if value:
        console.print(_version_table())
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show CommonLogger version and exit",
    ),
) -> None:
    """
    CommonLogger CLI - Call interception and SQL query logging toolkit

    Run 'commonlogger --help' for available commands.
    """
    setup_logging()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        get_logger(__name__).info("Verbose logging enabled")


@app.command()
def version() -> None:
    """Show CommonLogger version information"""
    console.print(_version_table())


@app.command()
def config() -> None:
    """Show effective logging configuration"""
    table = Table(title="CommonLogger Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name in (
        "ENVIRONMENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOGGING_ASPECT_ENABLED",
        "LOGGING_ASPECT_BASE_PACKAGE",
        "LOGGING_EXCLUDE_PACKAGES",
        "SQL_LOGGING_ENABLED",
        "SQL_LOGGING_SHOW_PARAMETERS",
        "ACTIVE_PROFILES",
    ):
        value = getattr(settings, name)
        table.add_row(name, "" if value is None else str(value))

    scope = ScopeConfig.from_settings(settings)
    policy = SqlLoggingPolicy.from_settings(settings, logger=get_logger(__name__))
    table.add_row(
        "Call logging scope",
        scope.base_package_prefix if scope.has_base_package else "all observed",
    )
    table.add_row("Parameter inlining", str(policy.parameter_inlining_enabled))
    for warning in policy.warnings:
        table.add_row("SQL policy warning", Text(warning))

    console.print(table)


@app.command(name="format")
def format_command(
    sql: str = typer.Argument(..., help="SQL text with placeholders"),
    param: Optional[List[str]] = typer.Option(
        None, "--param", "-p", help="Parameter value, in placeholder order"
    ),
    row: Optional[List[str]] = typer.Option(
        None, "--row", "-r", help="Comma-separated values of one batched row"
    ),
    inline: bool = typer.Option(
        True, "--inline/--no-inline", help="Inline parameter values"
    ),
    paramstyle: str = typer.Option(
        "qmark", "--paramstyle", help="DB-API paramstyle of the SQL"
    ),
) -> None:
    """Render SQL the way the query logger writes it"""
    if paramstyle not in PLACEHOLDER_PATTERNS:
        console.print(
            f"Unsupported paramstyle: {paramstyle}. "
            f"Choose from: {', '.join(sorted(PLACEHOLDER_PATTERNS))}",
            markup=False,
        )
        raise typer.Exit(1)

    rows = [[parse_value(v.strip()) for v in entry.split(",")] for entry in row or []]
    if param:
        rows.insert(0, [parse_value(v) for v in param])
    parameter_sets = [tuple(enumerate(values, start=1)) for values in rows]

    query = format_sql(sql, parameter_sets, inline, paramstyle=paramstyle)
    console.print(query, markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
