"""Catalog commands - services, keys."""
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from homelab import catalog
from homelab.cli_support import cli_verbose, handle_cli_error
from homelab.config.stack_file import DEFAULT_PROJECT

# Module-level console instance (will be set by register function)
console: Console = Console()


def register_service_commands(app: typer.Typer, shared_console: Console) -> None:
    """Attach catalog commands to the main Typer app."""
    global console
    console = shared_console

    app.command("services")(services)
    app.command("keys")(keys)


def services(
    ctx: typer.Context,
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Only list docker or kube services"),
):
    """List every service the program can declare.

    Examples:
        homelab services
        homelab services --kind kube
    """
    try:
        entries = catalog.services(kind)
    except ValueError as e:
        handle_cli_error(e, console, verbose=cli_verbose(ctx))

    table = Table(title="Services")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Images")
    table.add_column("Builds")
    table.add_column("Config keys")

    for name, service in entries.items():
        table.add_row(
            name,
            service.TYPE,
            "\n".join(service.IMAGES.values()),
            "\n".join(service.BUILDS),
            "\n".join(key.config_key(service.CONFIG_NAMESPACE) for key in catalog.config_keys(service)),
        )

    console.print(table)


def keys(
    ctx: typer.Context,
    service: str = typer.Argument(..., help="Service name, e.g. coder or kube.registry"),
    project: str = typer.Option(DEFAULT_PROJECT, "--project", "-p", help="Pulumi project name"),
):
    """Print the ``pulumi config set`` commands a service needs."""
    try:
        component = catalog.find_service(service)
    except KeyError:
        handle_cli_error(
            ValueError(f"Unknown service '{service}'. Run 'homelab services' to list them."),
            console,
            verbose=cli_verbose(ctx),
        )

    settings = catalog.config_keys(component)
    if not settings:
        console.print(f"[green]{service} needs no service settings[/green]")
        return

    for key in settings:
        flag = " --secret" if key.secret else ""
        value = "<value>" if key.default is None else key.default
        line = f"pulumi config set{flag} {project}:{key.config_key(component.CONFIG_NAMESPACE)} {value!r}"
        if not key.required:
            line = f"# optional: {line}"
        console.print(line, markup=False, highlight=False)
