"""Target models for Homebrew operations.

This module defines the entities an operation can act on: installed
packages (formulae and casks), packages with a pending upgrade, and
background services managed by ``brew services``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


@runtime_checkable
class Nameable(Protocol):
    """Anything with a display name that brew can address."""

    @property
    def name(self) -> str: ...


class ServiceStatus(str, Enum):
    """Status of a ``brew services`` entry.

    Attributes:
        STARTED: The service is loaded and running.
        STOPPED: The service is registered but not running.
        ERROR: The service failed to start or exited with an error.
        NONE: The service is not registered with launchd/systemd.
    """

    STARTED = "started"
    STOPPED = "stopped"
    ERROR = "error"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | None) -> "ServiceStatus":
        """Map a raw brew status string to a ServiceStatus.

        brew reports a few additional states (``scheduled``, ``other``,
        ``unknown``) which collapse to NONE.

        Args:
            value: Status string as printed by ``brew services list --json``.

        Returns:
            Matching ServiceStatus, NONE for anything unrecognised.
        """
        if not value:
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NONE


@dataclass(slots=True)
class Package:
    """An installable Homebrew formula or cask.

    Mutable on purpose: a successful pin or unpin patches ``pinned`` on
    the instance the caller holds instead of re-querying brew.

    Attributes:
        name: Formula name or cask token (e.g. 'wget', 'firefox').
        cask: True if this is a cask and needs ``--cask`` to install.
        pinned: Whether the package is excluded from ``brew upgrade``.
        version: Installed or available version, if known.
        description: Short description from ``brew info``.
    """

    name: str
    cask: bool = False
    pinned: bool = False
    version: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def kind(self) -> str:
        """Return 'cask' or 'formula'."""
        return "cask" if self.cask else "formula"


@dataclass(slots=True)
class OutdatedPackage(Package):
    """A package known to have a pending upgrade.

    Attributes:
        installed_versions: Versions currently installed.
        current_version: Version the upgrade would install.
    """

    installed_versions: tuple[str, ...] = field(default_factory=tuple)
    current_version: str | None = None

    @property
    def upgrade_label(self) -> str:
        """Return an 'old -> new' label for display."""
        installed = ", ".join(self.installed_versions) or "?"
        return f"{installed} -> {self.current_version or '?'}"


@dataclass(slots=True)
class Service:
    """A background daemon managed by ``brew services``.

    Attributes:
        name: Formula name that provides the service (e.g. 'redis').
        status: Current service status.
        user: User the service runs as, if registered.
        error: Error message or exit description when status is ERROR.
        file: Path to the launchd plist or systemd unit, if registered.
        exit_code: Last exit code reported by brew, if any.
    """

    name: str
    status: ServiceStatus = ServiceStatus.NONE
    user: str | None = None
    error: str | None = None
    file: str | None = None
    exit_code: int | None = None

    def __post_init__(self) -> None:
        """Validate service data after initialization."""
        if not self.name:
            msg = "Service name cannot be empty"
            raise ValueError(msg)

    @property
    def is_running(self) -> bool:
        """Check if the service is started."""
        return self.status == ServiceStatus.STARTED

    @property
    def has_error(self) -> bool:
        """Check if the service is in an error state."""
        return self.status == ServiceStatus.ERROR
