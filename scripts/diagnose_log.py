#!/usr/bin/env python3
"""
TeX Log Diagnostics CLI

Parses a pdfTeX/XeTeX/LuaTeX .log file into errors, warnings and typesetting
notices using the diagnostics context.

Commands:
    show    - List diagnostics, one per line (or as JSON)
    summary - Table of diagnostics with counts by level

Examples:\n

    diagnose_log.py show build/main.log                      # Info and above

    diagnose_log.py show build/main.log --level warning      # Warnings and errors only

    diagnose_log.py show build/main.log --json > diag.json   # Machine-readable output

    diagnose_log.py summary build/main.log --level debug     # Everything, as a table
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from texdiag.contexts.diagnostics import (
    LogInputError,
    LogLevel,
    format_diagnostics_report,
    parse_log_file,
)
from texdiag.contexts.diagnostics.logger import setup_diagnostics_logger
from texdiag.contexts.diagnostics.report import format_diagnostic_line, has_errors
from texdiag.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
DEFAULT_LEVEL = os.getenv("TEXDIAG_MIN_LEVEL", "info")

LEVEL_COLORS = {
    LogLevel.ERROR: typer.colors.RED,
    LogLevel.WARNING: typer.colors.YELLOW,
    LogLevel.TYPESETTING: typer.colors.CYAN,
}


app = typer.Typer(
    help="Extract structured diagnostics from TeX log files",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(log_file: Path, level: str, log_dir: Optional[Path], quiet: bool = False):
    """Resolve level, set up session logging and parse; exits on bad input."""
    try:
        min_level = LogLevel.from_name(level)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    session_dir = log_dir if log_dir is not None else LOGS_PATH / f"diagnose_{now()}"
    setup_diagnostics_logger(session_dir, log_file, quiet=quiet)

    try:
        return parse_log_file(log_file, min_level=min_level)
    except LogInputError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


LogFileArgument = Annotated[Path, typer.Argument(help="TeX .log file to analyze")]
LevelOption = Annotated[
    str,
    typer.Option(
        "--level",
        "-l",
        help="Minimum level: debug, info, typesetting, warning, error",
    ),
]
LogDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--log-dir",
        help="Directory for this session's diag.log (default: LOGS_PATH/diagnose_<timestamp>)",
    ),
]


@app.command("show")
def show_command(
    log_file: LogFileArgument,
    level: LevelOption = DEFAULT_LEVEL,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print diagnostics as a JSON array"),
    ] = False,
    context: Annotated[
        bool,
        typer.Option(
            "--context",
            "-c",
            help="Also print the context TeX reported after each error",
        ),
    ] = False,
    log_dir: LogDirOption = None,
):
    """
    List diagnostics from a TeX log.

    Exits with code 1 if any error is reported, 0 otherwise.

    Examples:\n

        $ diagnose_log.py show main.log                  # Info and above

        $ diagnose_log.py show main.log -l error -c      # Errors with TeX's context
    """
    items = _load(log_file, level, log_dir, quiet=as_json)

    if as_json:
        typer.echo(json.dumps([item.to_dict() for item in items], indent=2))
    else:
        for item in items:
            typer.secho(format_diagnostic_line(item), fg=LEVEL_COLORS.get(item.level))
            if context and item.content and item.content.strip():
                for context_line in item.content.strip("\n").split("\n"):
                    typer.echo(f"    {context_line}")
        if not items:
            typer.secho("No diagnostics at or above this level.", fg=typer.colors.GREEN)

    raise typer.Exit(code=1 if has_errors(items) else 0)


@app.command("summary")
def summary_command(
    log_file: LogFileArgument,
    level: LevelOption = DEFAULT_LEVEL,
    log_dir: LogDirOption = None,
):
    """
    Print a table of diagnostics with counts by level.

    Examples:\n

        $ diagnose_log.py summary main.log               # Info and above

        $ diagnose_log.py summary main.log -l debug      # Everything
    """
    items = _load(log_file, level, log_dir)

    typer.echo(format_diagnostics_report(items, title=f"TeX diagnostics: {log_file.name}"))

    if has_errors(items):
        typer.secho("\n✗ Log contains errors", fg=typer.colors.RED, bold=True)
    else:
        typer.secho("\n✓ No errors", fg=typer.colors.GREEN, bold=True)

    raise typer.Exit(code=1 if has_errors(items) else 0)


if __name__ == "__main__":
    app()
