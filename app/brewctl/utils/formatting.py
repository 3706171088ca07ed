"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from brewctl.core.theme import get_theme
from brewctl.models.target import OutdatedPackage, ServiceStatus

if TYPE_CHECKING:
    from brewctl.models.target import Package, Service


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_service_table(title: str = "Services") -> Table:
    """Create a pre-configured table for displaying services.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for service display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Service", no_wrap=True)
    table.add_column("Status")
    table.add_column("User", style="muted")
    table.add_column("Error", style="error", overflow="ellipsis")
    return table


def format_service_row(service: Service) -> tuple[str, str, str, str, str]:
    """Format a service as a table row.

    Started services get a play icon, errored ones an exclamation mark,
    everything else an empty circle. Status NONE is shown blank.

    Args:
        service: The service to format.

    Returns:
        Tuple of (icon, name, status, user, error) with Rich markup.
    """
    if service.status == ServiceStatus.STARTED:
        style, icon = "service.started", "▶"
    elif service.status == ServiceStatus.ERROR:
        style, icon = "service.error", "!"
    else:
        style, icon = "service.idle", "○"

    status = "" if service.status == ServiceStatus.NONE else service.status.value
    return (
        f"[{style}]{icon}[/]",
        f"[{style}]{service.name}[/]",
        f"[{style}]{status}[/]",
        escape(service.user or ""),
        escape(service.error or ""),
    )


def create_package_table(title: str = "Installed Packages") -> Table:
    """Create a pre-configured table for displaying packages.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for package display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Kind", style="muted")
    table.add_column("Version", style="muted")
    table.add_column("Pinned", justify="center")
    return table


def format_package_row(pkg: Package) -> tuple[str, str, str, str]:
    """Format a package as a table row.

    Outdated packages show their ``installed -> current`` versions.

    Args:
        pkg: The package to format.

    Returns:
        Tuple of (name, kind, version, pinned) with Rich markup.
    """
    name = f"[package.cask]{pkg.name}[/]" if pkg.cask else f"[text]{pkg.name}[/]"
    if isinstance(pkg, OutdatedPackage):
        version = pkg.upgrade_label
    else:
        version = pkg.version or "-"
    pinned = "[package.pinned]✓[/]" if pkg.pinned else ""
    return (name, pkg.kind, version, pinned)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
