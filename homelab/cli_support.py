"""Shared utilities for homelab CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands."""
    from homelab.core.logger import set_verbose
    from homelab.core.logger import setup_file_logging as _setup_file_logging

    _setup_file_logging(log_file=log_file, verbose=verbose)
    set_verbose(verbose)


def cli_verbose(ctx: typer.Context) -> bool:
    """Value of the global ``--verbose`` flag."""
    return bool((ctx.obj or {}).get("verbose", False))


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Print ``e`` as a CLI error and exit.

    With ``verbose`` (the global ``--verbose`` flag) the traceback of the
    exception being handled is printed too.
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)
