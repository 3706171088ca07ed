"""Package commands: install, uninstall, upgrade, pin and unpin.

Each command builds a target from its arguments and hands the matching
operator call to the binding layer.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

import typer

from brewctl.cli.binding import exit_on_failure, load_settings, run_action
from brewctl.core.commands import resolve_brew_path
from brewctl.core.operator import BrewOperator
from brewctl.models.target import Package
from brewctl.scanners.packages import InstalledScanner
from brewctl.utils.formatting import print_error, print_info, print_warning

NameArgument = Annotated[str, typer.Argument(help="Formula name or cask token.")]


def install(
    name: NameArgument,
    cask: Annotated[
        bool,
        typer.Option("--cask", help="Install a cask instead of a formula."),
    ] = False,
) -> None:
    """Install a formula or cask."""
    package = Package(name=name, cask=cask)
    exit_on_failure(run_action(lambda op: op.install(package)))


def uninstall(name: NameArgument) -> None:
    """Uninstall a formula or cask."""
    package = Package(name=name)
    exit_on_failure(run_action(lambda op: op.uninstall(package)))


def upgrade(
    name: Annotated[
        str | None,
        typer.Argument(help="Package to upgrade. Omit with --all."),
    ] = None,
    upgrade_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Upgrade every outdated package."),
    ] = False,
    greedy: Annotated[
        bool | None,
        typer.Option(
            "--greedy/--no-greedy",
            help="Also upgrade auto-updating casks (default: from config).",
        ),
    ] = None,
) -> None:
    """Upgrade one package, or everything with --all."""
    if upgrade_all == (name is not None):
        print_error("Pass either a package name or --all.")
        raise typer.Exit(code=2)

    config = load_settings()

    if name is not None:
        if greedy is not None:
            print_error("--greedy only applies to --all.")
            raise typer.Exit(code=2)
        package = Package(name=name)
        exit_on_failure(run_action(lambda op: op.upgrade(package), config=config))
        return

    use_greedy = config.greedy_upgrades if greedy is None else greedy
    exit_on_failure(run_action(lambda op: op.upgrade_all(greedy=use_greedy), config=config))


def _refresh_pin_state(package: Package, brew_path: str) -> Callable[[bool], None]:
    """Build a callback that re-reads the package and prints its pin state.

    Falls back to the locally patched flag when brew cannot be queried.
    """

    def on_action(_: bool) -> None:
        pinned = package.pinned
        try:
            installed = InstalledScanner(brew_path=brew_path).find(package.name)
        except (RuntimeError, OSError) as e:
            print_warning(f"Could not refresh {package.name}: {e}")
        else:
            if installed is not None:
                pinned = installed.pinned
        print_info(f"{package.name} is {'pinned' if pinned else 'not pinned'}")

    return on_action


def _run_pin(package: Package, call: Callable[[BrewOperator, Package], Awaitable[bool]]) -> None:
    settings = load_settings()
    refresh = _refresh_pin_state(package, resolve_brew_path(settings.brew_path))
    exit_on_failure(run_action(lambda op: call(op, package), config=settings, on_action=refresh))


def pin(name: NameArgument) -> None:
    """Pin a formula so upgrade --all skips it."""
    _run_pin(Package(name=name, pinned=False), BrewOperator.pin)


def unpin(name: NameArgument) -> None:
    """Unpin a formula so upgrade --all includes it again."""
    _run_pin(Package(name=name, pinned=True), BrewOperator.unpin)


def register(app: typer.Typer) -> None:
    """Register the package commands on the main app."""
    app.command()(install)
    app.command()(uninstall)
    app.command()(upgrade)
    app.command()(pin)
    app.command()(unpin)
