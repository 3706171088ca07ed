"""CLI package for brewctl.

This package contains the Typer application and all subcommands.
"""

from brewctl.cli.main import app

__all__ = ["app"]
