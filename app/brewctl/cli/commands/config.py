"""Config command implementation.

Shows and updates ~/.config/brewctl/config.toml.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from brewctl.cli.binding import load_settings
from brewctl.core.commands import resolve_brew_path
from brewctl.core.config import BrewctlConfig, ConfigError, save_config
from brewctl.core.paths import get_config_path
from brewctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or change brewctl settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    config = load_settings()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")
    table.add_row("greedy_upgrades", str(config.greedy_upgrades).lower())
    table.add_row(
        "brew_path",
        str(config.brew_path) if config.brew_path else f"[muted]{resolve_brew_path()} (auto)[/]",
    )
    table.add_row("terminate_grace_seconds", f"{config.terminate_grace_seconds:g}")
    console.print(table)

    path = get_config_path()
    if not path.exists():
        print_info(f"No config file at {path}; showing defaults.")


@app.command("set")
def set_values(
    greedy: Annotated[
        bool | None,
        typer.Option("--greedy/--no-greedy", help="Greedy upgrades for upgrade --all."),
    ] = None,
    brew_path: Annotated[
        Path | None,
        typer.Option("--brew-path", help="Custom brew executable."),
    ] = None,
    auto_brew_path: Annotated[
        bool,
        typer.Option("--auto-brew-path", help="Forget the custom brew path."),
    ] = False,
    grace: Annotated[
        float | None,
        typer.Option("--grace", help="Seconds between SIGTERM and SIGKILL on cancel."),
    ] = None,
) -> None:
    """Update settings and save them."""
    config = load_settings()
    updates: dict[str, object] = {}

    if greedy is not None:
        updates["greedy_upgrades"] = greedy
    if brew_path is not None:
        updates["brew_path"] = brew_path
    if auto_brew_path:
        updates["brew_path"] = None
    if grace is not None:
        updates["terminate_grace_seconds"] = grace

    if not updates:
        print_info("Nothing to change.")
        return

    try:
        new_config = BrewctlConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        print_error(f"Invalid setting: {e}")
        raise typer.Exit(code=1) from e

    try:
        path = save_config(new_config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Saved settings to {path}")
