"""Stack file check command."""
from pathlib import Path

import typer
from rich.console import Console

from homelab.cli_support import cli_verbose, handle_cli_error
from homelab.config.stack_file import DEFAULT_PROJECT, check_stack_file
from homelab.core.errors import HomelabError
from homelab.core.logger import get_logger

console: Console = Console()
logger = get_logger(__name__)


def register_check_commands(app: typer.Typer, shared_console: Console) -> None:
    global console
    console = shared_console

    app.command("check")(check)


def check(
    ctx: typer.Context,
    stack_file: Path = typer.Argument(..., help="Pulumi.<stack>.yaml to check"),
    project: str = typer.Option(DEFAULT_PROJECT, "--project", "-p", help="Pulumi project name"),
):
    """Check a stack file sets every key its enabled services require.

    Exits with code 1 when keys are missing.
    """
    try:
        report = check_stack_file(stack_file, project=project)
    except (FileNotFoundError, HomelabError) as e:
        handle_cli_error(e, console, verbose=cli_verbose(ctx))

    services = [*report.docker_services, *(f"kube.{name}" for name in report.kube_services)]
    console.print(f"[cyan]{stack_file}[/cyan]: {', '.join(services) or 'no services'}")

    for scope, missing in report.missing.items():
        for key in missing:
            console.print(f"  [red]✗[/red] {scope}: {project}:{key} is not set")

    if not report.ok:
        logger.debug(f"{stack_file} is missing keys: {report.missing}")
        raise typer.Exit(1)

    console.print("[green]✓ All required keys are set[/green]")
