# Command-line interface definition for sourcedirs.
# This file is responsible only for argument parsing, validation,
# and dispatch into core application logic.
#
# No traversal or matching logic should live here.

from __future__ import annotations

import signal
import threading
from pathlib import Path as FSPath
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from sourcedirs import __version__
from sourcedirs.core import run_resolve
from sourcedirs.errors import InvalidVariable, ResolutionCancelled
from sourcedirs.expand import parse_assignments
from sourcedirs.models import Options, OutputFormat

app = typer.Typer(
    add_completion=False,
    help="Resolve comma-separated source directory patterns into real directories.",
)
console = Console()
_err = Console(stderr=True)

# Conventional exit status for an interrupted process.
EXIT_CANCELLED = 130


@app.command(help="Resolve literal paths and * / ? wildcards into source directories.")
def main(
    patterns: Optional[str] = typer.Argument(
        None,
        help="Comma-separated directories or wildcard patterns, e.g. 'src, gen*'.",
    ),

    # Resolution.
    base: FSPath = typer.Option(
        FSPath("."), "--base", "-b",
        help="Base directory that relative wildcards are walked from.",
        rich_help_panel="Resolution",
    ),
    var: List[str] = typer.Option(
        [], "--var",
        help="NAME=VALUE used when expanding ${NAME} references. Repeatable.",
        rich_help_panel="Resolution",
    ),
    no_env: bool = typer.Option(
        False, "--no-env",
        help="Do not expand variables from the process environment.",
        rich_help_panel="Resolution",
    ),

    # Output.
    output_format: OutputFormat = typer.Option(
        OutputFormat.lines, "--format",
        help="How to print the resolved directories.",
        rich_help_panel="Output",
    ),
    report_path: Optional[FSPath] = typer.Option(
        None, "--report",
        help="Write a CSV report of resolved directories to this path.",
        rich_help_panel="Output",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show pattern classification and a summary on stderr.",
        rich_help_panel="Output",
    ),

    version: bool = typer.Option(
        False, "--version",
        help="Show version and exit.",
    ),
):
    # Handle version early and exit cleanly.
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)

    if not base.is_dir():
        raise typer.BadParameter(f"Base directory does not exist: {base}")

    try:
        variables = parse_assignments(var)
    except InvalidVariable as exc:
        raise typer.BadParameter(str(exc)) from exc

    opts = Options(
        base=base,
        patterns=patterns or "",

        variables=variables,
        inherit_env=not no_env,

        output_format=output_format,
        report_path=report_path,
        verbose=verbose,
    )

    cancel = threading.Event()
    previous = _install_interrupt_handler(cancel)
    try:
        run_resolve(opts, cancel=cancel)
    except ResolutionCancelled:
        _err.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
    except OSError as exc:
        _err.print(f"[red]FAILED:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


def _install_interrupt_handler(cancel: threading.Event):
    # Ctrl+C sets the cancel event so the walk stops at its next listing.
    # Signal handlers can only be installed from the main thread.
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())


if __name__ == "__main__":
    app()
