"""Service commands.

Lists ``brew services`` entries and starts, stops, restarts or removes
them. After each action the service is re-read from brew and shown.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

import typer

from brewctl.cli.binding import exit_on_failure, load_settings, run_action
from brewctl.core.commands import resolve_brew_path
from brewctl.core.operator import BrewOperator
from brewctl.models.target import Service
from brewctl.scanners.services import ServiceScanner
from brewctl.utils.formatting import (
    console,
    create_service_table,
    format_service_row,
    print_error,
    print_info,
    print_warning,
)

app = typer.Typer(
    help="Manage background services.",
    no_args_is_help=True,
)

NameArgument = Annotated[str, typer.Argument(help="Service (formula) name.")]


def _scan_services(brew_path: str) -> list[Service]:
    """Read all services from brew or exit with an error."""
    scanner = ServiceScanner(brew_path=brew_path)
    try:
        return list(scanner.scan())
    except (RuntimeError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _refresh(name: str, brew_path: str) -> Callable[[bool], None]:
    """Build a callback that re-reads and prints one service."""

    def on_action(_: bool) -> None:
        try:
            service = ServiceScanner(brew_path=brew_path).find(name)
        except (RuntimeError, OSError) as e:
            print_warning(f"Could not refresh {name}: {e}")
            return
        if service is None:
            print_info(f"{name} is not a known service")
            return
        table = create_service_table(title="")
        table.add_row(*format_service_row(service))
        console.print(table)

    return on_action


def _run(name: str, call: Callable[[BrewOperator, Service], Awaitable[bool]]) -> None:
    settings = load_settings()
    service = Service(name=name)
    refresh = _refresh(name, resolve_brew_path(settings.brew_path))
    exit_on_failure(run_action(lambda op: call(op, service), config=settings, on_action=refresh))


@app.command("list")
def list_services() -> None:
    """List services and their status."""
    services = _scan_services(resolve_brew_path(load_settings().brew_path))
    if not services:
        print_info("No services found.")
        return

    table = create_service_table()
    for service in sorted(services, key=lambda s: s.name):
        table.add_row(*format_service_row(service))
    console.print(table)


@app.command()
def start(name: NameArgument) -> None:
    """Start a service and register it to launch at login."""
    _run(name, BrewOperator.start_service)


@app.command()
def stop(name: NameArgument) -> None:
    """Stop a service and unregister it."""
    _run(name, BrewOperator.stop_service)


@app.command()
def restart(name: NameArgument) -> None:
    """Restart a service."""
    _run(name, BrewOperator.restart_service)


@app.command()
def remove(name: NameArgument) -> None:
    """Remove a service registration."""
    _run(name, BrewOperator.remove_service)
