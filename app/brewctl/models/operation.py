"""Operation and outcome models.

An Operation is one brew verb applied to zero or one target. Running it
produces exactly one Outcome: success, failure with a reason, or
cancellation by the user.
"""

from dataclasses import dataclass
from enum import Enum

from brewctl.models.target import Nameable, Package, Service


class OperationType(Enum):
    """Verbs the operation layer knows how to run.

    Attributes:
        INSTALL: Install a formula or cask.
        UNINSTALL: Uninstall a formula or cask.
        UPGRADE: Upgrade a single formula or cask.
        UPGRADE_ALL: Upgrade everything outdated (no target).
        PIN: Exclude a formula from ``brew upgrade``.
        UNPIN: Re-include a pinned formula in ``brew upgrade``.
        SERVICE_START: Start a service and register it at login/boot.
        SERVICE_STOP: Stop a service and unregister it.
        SERVICE_RESTART: Stop then start a service.
        SERVICE_REMOVE: Remove a service registration.
    """

    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPGRADE = "upgrade"
    UPGRADE_ALL = "upgrade-all"
    PIN = "pin"
    UNPIN = "unpin"
    SERVICE_START = "service-start"
    SERVICE_STOP = "service-stop"
    SERVICE_RESTART = "service-restart"
    SERVICE_REMOVE = "service-remove"

    @property
    def is_service(self) -> bool:
        """Check if this verb is a ``brew services`` sub-command."""
        return self.value.startswith("service-")

    @property
    def needs_target(self) -> bool:
        """Check if this verb requires exactly one target."""
        return self is not OperationType.UPGRADE_ALL


PACKAGE_ONLY = frozenset({OperationType.INSTALL, OperationType.PIN, OperationType.UNPIN})


@dataclass(frozen=True, slots=True)
class Operation:
    """A single verb applied to zero or one target.

    Attributes:
        operation_type: The verb to run.
        target: The entity acted on; None only for UPGRADE_ALL.
        greedy: Upgrade auto-updating casks too (UPGRADE_ALL only).
    """

    operation_type: OperationType
    target: Nameable | None = None
    greedy: bool = False

    def __post_init__(self) -> None:
        """Validate the verb/target combination."""
        op = self.operation_type
        if not op.needs_target:
            if self.target is not None:
                msg = f"{op.value} does not take a target"
                raise ValueError(msg)
            return

        if self.target is None:
            msg = f"{op.value} requires a target"
            raise ValueError(msg)
        if self.greedy:
            msg = "greedy only applies to upgrade-all"
            raise ValueError(msg)
        if op in PACKAGE_ONLY and not isinstance(self.target, Package):
            msg = f"{op.value} requires a Package, got {type(self.target).__name__}"
            raise ValueError(msg)
        if op.is_service and not isinstance(self.target, Service):
            msg = f"{op.value} requires a Service, got {type(self.target).__name__}"
            raise ValueError(msg)

    @property
    def target_name(self) -> str | None:
        """Return the target's name, if any."""
        return self.target.name if self.target is not None else None


class OutcomeKind(Enum):
    """Terminal state of an operation."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of running one operation.

    Attributes:
        kind: Success, failure or cancellation.
        reason: Diagnostic text for failures (brew's stderr or the launch error).
        returncode: Exit status of the reaped process, None if it never started.
    """

    kind: OutcomeKind
    reason: str | None = None
    returncode: int | None = None

    @property
    def success(self) -> bool:
        """Check if the operation succeeded."""
        return self.kind == OutcomeKind.SUCCESS

    @property
    def failed(self) -> bool:
        """Check if the operation failed (cancellation is not a failure)."""
        return self.kind == OutcomeKind.FAILURE

    @property
    def cancelled(self) -> bool:
        """Check if the operation was cancelled."""
        return self.kind == OutcomeKind.CANCELLED


def succeeded(returncode: int = 0) -> Outcome:
    """Create a SUCCESS outcome."""
    return Outcome(kind=OutcomeKind.SUCCESS, returncode=returncode)


def failed(reason: str, returncode: int | None = None) -> Outcome:
    """Create a FAILURE outcome.

    Args:
        reason: Diagnostic text to show the user.
        returncode: Exit status, None for launch failures.

    Returns:
        Outcome with kind FAILURE.
    """
    return Outcome(kind=OutcomeKind.FAILURE, reason=reason, returncode=returncode)


def cancelled(returncode: int | None = None) -> Outcome:
    """Create a CANCELLED outcome."""
    return Outcome(kind=OutcomeKind.CANCELLED, returncode=returncode)
