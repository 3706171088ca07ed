"""Operation façade over brew.

One coroutine per verb. Each announces the operation, runs brew through
the OperationRunner, applies the matching local state change on
success, and returns a plain boolean. Failures and cancellations never
escape as exceptions; they are reported and turned into ``False``.
"""

import logging
from collections.abc import Callable
from typing import NamedTuple

from brewctl.core.cancellation import CancellationToken
from brewctl.core.commands import build_command, resolve_brew_path
from brewctl.core.config import BrewctlConfig
from brewctl.core.errors import OperationError
from brewctl.core.runner import OperationRunner
from brewctl.models.operation import Operation, OperationType, Outcome, failed
from brewctl.models.target import Nameable, Package, Service
from brewctl.reporting.base import ProgressReporter
from brewctl.reporting.log import LoggingReporter

logger = logging.getLogger(__name__)


class Titles(NamedTuple):
    """Reporter titles for one verb. ``{name}`` is the target's name."""

    progress: str
    success: str
    failure: str


TITLES: dict[OperationType, Titles] = {
    OperationType.INSTALL: Titles("Installing {name}", "Installed {name}", "Install failed"),
    OperationType.UNINSTALL: Titles(
        "Uninstalling {name}", "Uninstalled {name}", "Uninstall failed"
    ),
    OperationType.UPGRADE: Titles("Upgrading {name}", "Upgraded {name}", "Upgrade failed"),
    OperationType.UPGRADE_ALL: Titles(
        "Upgrading all formulae", "Upgraded all formulae", "Upgrade all failed"
    ),
    OperationType.PIN: Titles("Pinning {name}", "Pinned {name}", "Pin failed"),
    OperationType.UNPIN: Titles("Unpinning {name}", "Unpinned {name}", "Unpin failed"),
    OperationType.SERVICE_START: Titles("Starting {name}", "Started {name}", "Start failed"),
    OperationType.SERVICE_STOP: Titles("Stopping {name}", "Stopped {name}", "Stop failed"),
    OperationType.SERVICE_RESTART: Titles(
        "Restarting {name}", "Restarted {name}", "Restart failed"
    ),
    OperationType.SERVICE_REMOVE: Titles("Removing {name}", "Removed {name}", "Remove failed"),
}


def _set_pinned(value: bool) -> Callable[[Operation], None]:
    def mutate(operation: Operation) -> None:
        if isinstance(operation.target, Package):
            operation.target.pinned = value

    return mutate


# Local state patches applied after a successful run. Pin state is
# asserted locally and not re-read from brew until the next refresh.
POST_SUCCESS: dict[OperationType, Callable[[Operation], None]] = {
    OperationType.PIN: _set_pinned(True),
    OperationType.UNPIN: _set_pinned(False),
}


class BrewOperator:
    """Runs brew operations and reports their progress.

    Every call creates its own Operation and CancellationToken, so calling
    twice on the same target simply starts two independent operations.

    Attributes:
        reporter: Receives start/success/failure notifications.
        runner: Executes the brew process.

    Example:
        >>> operator = BrewOperator(reporter=ConsoleReporter())
        >>> await operator.install(Package("wget"))
        True
    """

    def __init__(
        self,
        reporter: ProgressReporter | None = None,
        runner: OperationRunner | None = None,
        brew_path: str | None = None,
    ) -> None:
        """Initialize the operator.

        Args:
            reporter: Progress reporter. Defaults to LoggingReporter.
            runner: Process runner. Defaults to a new OperationRunner.
            brew_path: brew executable. If None, resolved on first use.
        """
        self._reporter: ProgressReporter = reporter or LoggingReporter()
        self._runner = runner or OperationRunner()
        self._brew_path = brew_path

    @classmethod
    def from_config(
        cls,
        config: BrewctlConfig,
        reporter: ProgressReporter | None = None,
    ) -> "BrewOperator":
        """Create an operator using brew path and grace period from settings."""
        return cls(
            reporter=reporter,
            runner=OperationRunner(terminate_grace=config.terminate_grace_seconds),
            brew_path=resolve_brew_path(config.brew_path),
        )

    @property
    def reporter(self) -> ProgressReporter:
        """Return the progress reporter."""
        return self._reporter

    @property
    def runner(self) -> OperationRunner:
        """Return the process runner."""
        return self._runner

    @property
    def brew_path(self) -> str:
        """Return the brew executable, resolving it if necessary."""
        if self._brew_path is None:
            self._brew_path = resolve_brew_path()
        return self._brew_path

    # -------------------------------------------------------------------------
    # Packages
    # -------------------------------------------------------------------------

    async def install(self, package: Package, token: CancellationToken | None = None) -> bool:
        """Install a formula, or a cask with ``--cask``."""
        return await self.execute(Operation(OperationType.INSTALL, package), token)

    async def uninstall(self, target: Nameable, token: CancellationToken | None = None) -> bool:
        """Uninstall a formula or cask by name."""
        return await self.execute(Operation(OperationType.UNINSTALL, target), token)

    async def upgrade(self, target: Nameable, token: CancellationToken | None = None) -> bool:
        """Upgrade a single formula or cask."""
        return await self.execute(Operation(OperationType.UPGRADE, target), token)

    async def upgrade_all(
        self, greedy: bool = False, token: CancellationToken | None = None
    ) -> bool:
        """Upgrade everything outdated.

        Args:
            greedy: Also upgrade casks that update themselves (``--greedy``).
            token: Optional caller-owned cancellation token.

        Returns:
            True if brew upgraded successfully.
        """
        return await self.execute(Operation(OperationType.UPGRADE_ALL, greedy=greedy), token)

    async def pin(self, package: Package, token: CancellationToken | None = None) -> bool:
        """Pin a formula; sets ``package.pinned`` on success."""
        return await self.execute(Operation(OperationType.PIN, package), token)

    async def unpin(self, package: Package, token: CancellationToken | None = None) -> bool:
        """Unpin a formula; clears ``package.pinned`` on success."""
        return await self.execute(Operation(OperationType.UNPIN, package), token)

    async def toggle_pin(self, package: Package, token: CancellationToken | None = None) -> bool:
        """Pin an unpinned package or unpin a pinned one."""
        if package.pinned:
            return await self.unpin(package, token)
        return await self.pin(package, token)

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    async def start_service(self, service: Service, token: CancellationToken | None = None) -> bool:
        """Start a service via ``brew services start``."""
        return await self.execute(Operation(OperationType.SERVICE_START, service), token)

    async def stop_service(self, service: Service, token: CancellationToken | None = None) -> bool:
        """Stop a service via ``brew services stop``."""
        return await self.execute(Operation(OperationType.SERVICE_STOP, service), token)

    async def restart_service(
        self, service: Service, token: CancellationToken | None = None
    ) -> bool:
        """Restart a service via ``brew services restart``."""
        return await self.execute(Operation(OperationType.SERVICE_RESTART, service), token)

    async def remove_service(
        self, service: Service, token: CancellationToken | None = None
    ) -> bool:
        """Remove a service registration via ``brew services remove``."""
        return await self.execute(Operation(OperationType.SERVICE_REMOVE, service), token)

    # -------------------------------------------------------------------------
    # Orchestration
    # -------------------------------------------------------------------------

    async def execute(self, operation: Operation, token: CancellationToken | None = None) -> bool:
        """Run an operation and return True only if it succeeded."""
        outcome = await self.perform(operation, token)
        return outcome.success

    async def perform(
        self,
        operation: Operation,
        token: CancellationToken | None = None,
    ) -> Outcome:
        """Run an operation and return its Outcome.

        Steps:
        1. Announce start; the reporter gets a handle wired to the token
        2. Run brew through the runner
        3. SUCCESS: apply the local state patch, announce success
        4. FAILURE: announce the failure with brew's diagnostic text
        5. CANCELLED: announce nothing further

        Args:
            operation: The operation to run.
            token: Caller-owned token. If None, a new one is created.

        Returns:
            Exactly one Outcome for this operation.
        """
        titles = TITLES[operation.operation_type]
        name = operation.target_name or ""
        token = token or CancellationToken(label=f"{operation.operation_type.value} {name}".strip())

        self._reporter.started(titles.progress.format(name=name), token)

        try:
            spec = build_command(operation, self.brew_path)
            outcome = await self._runner.run(spec, token)
        except (OperationError, OSError) as e:
            logger.error("Unexpected error running %s: %s", operation.operation_type.value, e)
            outcome = failed(str(e))

        if outcome.success:
            mutate = POST_SUCCESS.get(operation.operation_type)
            if mutate is not None:
                mutate(operation)
            self._reporter.succeeded(titles.success.format(name=name))
        elif outcome.failed:
            self._reporter.failed(titles.failure.format(name=name), outcome.reason or "")
        else:
            logger.info("%s cancelled", titles.progress.format(name=name))

        return outcome
