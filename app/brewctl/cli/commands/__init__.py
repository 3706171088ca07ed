"""CLI commands for brewctl.

This package contains all subcommand implementations.
"""

from brewctl.cli.commands import config, listing, packages, services

__all__ = ["config", "listing", "packages", "services"]
