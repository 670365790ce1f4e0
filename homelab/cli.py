#!/usr/bin/env python3
"""homelab CLI - inspect the service catalog and stack files."""
from typing import Optional

import typer
from rich.console import Console

from homelab.cli_check_commands import register_check_commands
from homelab.cli_service_commands import register_service_commands
from homelab.cli_support import setup_file_logging

app = typer.Typer(
    name="homelab",
    help="""homelab - Pulumi declarations for docker and kubernetes services

Quick start:
  homelab services                    # Browse the catalog
  homelab keys coder                  # Config keys coder needs
  homelab check Pulumi.dev.yaml       # Check a stack before 'pulumi up'
""",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    ctx.obj = {"verbose": verbose}
    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)


# Attach modular subcommands
register_service_commands(app, console)
register_check_commands(app, console)

if __name__ == "__main__":
    app()
