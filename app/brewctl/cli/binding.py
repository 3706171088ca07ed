"""Binding between CLI commands and the operation layer.

A command hands :func:`run_action` a coroutine factory; the binding
builds a BrewOperator with a ConsoleReporter, runs the operation on a
fresh event loop, and passes the boolean result to a refresh callback.
"""

import asyncio
from collections.abc import Awaitable, Callable

import typer

from brewctl.core.config import BrewctlConfig, ConfigError, load_config_or_default
from brewctl.core.operator import BrewOperator
from brewctl.reporting.console import ConsoleReporter
from brewctl.utils.formatting import print_error, print_warning

Action = Callable[[BrewOperator], Awaitable[bool]]


def load_settings() -> BrewctlConfig:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the config file exists but is invalid.
    """
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def run_action(
    action: Action,
    *,
    config: BrewctlConfig | None = None,
    on_action: Callable[[bool], None] | None = None,
) -> bool:
    """Run one operation from a CLI command.

    Args:
        action: Receives the operator and returns the operation's coroutine.
        config: Settings to use. If None, loaded from the config file.
        on_action: Refresh callback, called with the result.

    Returns:
        True if the operation succeeded.
    """
    settings = config or load_settings()
    reporter = ConsoleReporter()
    operator = BrewOperator.from_config(settings, reporter=reporter)

    async def _bound() -> bool:
        try:
            return await action(operator)
        finally:
            reporter.close()

    result = asyncio.run(_bound())

    handle = reporter.current_handle
    if handle is not None and reporter.last_cancelled:
        print_warning(f"{handle.title} cancelled")

    if on_action is not None:
        on_action(result)
    return result


def exit_on_failure(result: bool) -> None:
    """Exit with status 1 if the operation did not succeed."""
    if not result:
        raise typer.Exit(code=1)
