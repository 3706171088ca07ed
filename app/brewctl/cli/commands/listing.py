"""List command implementation.

Shows installed packages, or outdated ones with --outdated.
"""

from typing import Annotated

import typer

from brewctl.cli.binding import load_settings
from brewctl.core.commands import resolve_brew_path
from brewctl.models.target import Package
from brewctl.scanners.base import Scanner
from brewctl.scanners.packages import InstalledScanner, OutdatedScanner
from brewctl.utils.formatting import (
    console,
    create_package_table,
    format_package_row,
    print_error,
    print_success,
)

app = typer.Typer(
    help="List installed or outdated packages.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_packages(
    outdated: Annotated[
        bool,
        typer.Option("--outdated", "-o", help="Only show packages with a pending upgrade."),
    ] = False,
    greedy: Annotated[
        bool | None,
        typer.Option(
            "--greedy/--no-greedy",
            help="Include auto-updating casks when listing outdated (default: from config).",
        ),
    ] = None,
    pinned_only: Annotated[
        bool,
        typer.Option("--pinned", "-p", help="Only show pinned packages."),
    ] = False,
) -> None:
    """List installed or outdated packages."""
    settings = load_settings()
    brew_path = resolve_brew_path(settings.brew_path)
    scanner: Scanner[Package]
    if outdated:
        use_greedy = settings.greedy_upgrades if greedy is None else greedy
        scanner = OutdatedScanner(brew_path=brew_path, greedy=use_greedy)
        title = "Outdated Packages"
    else:
        scanner = InstalledScanner(brew_path=brew_path)
        title = "Installed Packages"

    try:
        packages = list(scanner.scan())
    except (RuntimeError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if pinned_only:
        packages = [p for p in packages if p.pinned]

    if not packages:
        print_success("Everything is up to date." if outdated else "No packages found.")
        return

    table = create_package_table(title=title)
    for package in packages:
        table.add_row(*format_package_row(package))
    console.print(table)
    console.print(f"\n[dim]{len(packages)} package(s)[/dim]")
