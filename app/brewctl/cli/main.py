"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from brewctl import __version__
from brewctl.cli.commands import config, listing, packages, services
from brewctl.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="brewctl",
    help="Install, upgrade, pin and control Homebrew packages and services.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"brewctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich.

    Args:
        verbose: Log DEBUG and up; otherwise only WARNING and up.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """brewctl - cancelable Homebrew operations.

    Every long-running brew call can be aborted with Ctrl+C; the brew
    process is terminated and cleaned up before brewctl exits.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
packages.register(app)
app.add_typer(listing.app, name="list")
app.add_typer(services.app, name="services")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
