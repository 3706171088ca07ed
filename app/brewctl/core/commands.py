"""Command construction for brew operations.

Pure functions: turning an Operation into the exact argv brew expects
has no side effects beyond locating the brew executable.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from brewctl.core.paths import default_brew_path
from brewctl.models.operation import Operation, OperationType
from brewctl.models.target import Package

# Environment added to every brew invocation
BREW_ENV: dict[str, str] = {
    "HOMEBREW_NO_ENV_HINTS": "1",
    "HOMEBREW_COLOR": "0",
}

_PACKAGE_VERBS: dict[OperationType, str] = {
    OperationType.INSTALL: "install",
    OperationType.UNINSTALL: "uninstall",
    OperationType.UPGRADE: "upgrade",
    OperationType.PIN: "pin",
    OperationType.UNPIN: "unpin",
}

_SERVICE_VERBS: dict[OperationType, str] = {
    OperationType.SERVICE_START: "start",
    OperationType.SERVICE_STOP: "stop",
    OperationType.SERVICE_RESTART: "restart",
    OperationType.SERVICE_REMOVE: "remove",
}


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A fully resolved external command.

    Attributes:
        executable: Program to run.
        args: Positional arguments after the executable.
        env: Extra environment variables, merged over the current environment.
    """

    executable: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        """Return the full argument vector."""
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


def resolve_brew_path(configured: Path | None = None) -> str:
    """Locate the brew executable.

    Priority:
    1. Explicitly configured path
    2. ``brew`` on PATH
    3. Standard Homebrew prefix for this platform

    The result is not checked for existence; a wrong path surfaces as a
    launch failure when the command runs.

    Args:
        configured: Path from settings, if any.

    Returns:
        Path to brew as a string.
    """
    if configured is not None:
        return str(configured.expanduser())
    found = shutil.which("brew")
    if found:
        return found
    return str(default_brew_path())


def brew_args(operation: Operation) -> tuple[str, ...]:
    """Build brew's arguments for an operation.

    Args:
        operation: The operation to translate.

    Returns:
        Arguments to pass after the brew executable.
    """
    op = operation.operation_type

    if op == OperationType.UPGRADE_ALL:
        return ("upgrade", "--greedy") if operation.greedy else ("upgrade",)

    name = operation.target_name
    assert name is not None  # guaranteed by Operation validation

    if op.is_service:
        return ("services", _SERVICE_VERBS[op], name)

    if op == OperationType.INSTALL and isinstance(operation.target, Package):
        if operation.target.cask:
            return ("install", "--cask", name)

    return (_PACKAGE_VERBS[op], name)


def build_command(operation: Operation, executable: str) -> CommandSpec:
    """Build the CommandSpec for an operation.

    Args:
        operation: The operation to translate.
        executable: Path to brew, usually from :func:`resolve_brew_path`.

    Returns:
        CommandSpec ready for the runner.
    """
    return CommandSpec(executable=executable, args=brew_args(operation), env=dict(BREW_ENV))
