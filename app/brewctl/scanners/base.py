"""Abstract base class for brew scanners.

Scanners query brew's JSON output and yield target model instances.
They are read-only and blocking; results are held in memory only until
the next refresh.
"""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from brewctl.core.commands import BREW_ENV, resolve_brew_path
from brewctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

T = TypeVar("T", covariant=True)


class Scanner(ABC, Generic[T]):
    """Abstract base class for all brew scanners.

    Example:
        >>> scanner = ServiceScanner()
        >>> if scanner.is_available():
        ...     for service in scanner.scan():
        ...         print(f"{service.name}: {service.status.value}")
    """

    # Timeout for brew queries (brew may auto-update on first call)
    _QUERY_TIMEOUT: float = 120.0

    def __init__(self, brew_path: str | None = None) -> None:
        """Initialize the scanner.

        Args:
            brew_path: brew executable. If None, resolved automatically.
        """
        self._brew_path = brew_path or resolve_brew_path()

    @property
    def brew_path(self) -> str:
        """Return the brew executable used for queries."""
        return self._brew_path

    def is_available(self) -> bool:
        """Check if brew can be executed."""
        return command_exists(self._brew_path)

    @abstractmethod
    def scan(self) -> Iterator[T]:
        """Query brew and yield one item per entry.

        Raises:
            RuntimeError: If brew is not available or the query fails.
        """

    def _query_json(self, args: list[str]) -> Any:
        """Run a brew query and decode its JSON output.

        Args:
            args: Arguments after the brew executable.

        Returns:
            Decoded JSON document.

        Raises:
            RuntimeError: If brew is missing, exits non-zero, or prints invalid JSON.
        """
        if not self.is_available():
            msg = f"brew is not available at {self._brew_path}"
            raise RuntimeError(msg)

        command = [self._brew_path, *args]
        logger.debug("Querying %s", " ".join(command))
        try:
            result = run_command(
                command,
                timeout=self._QUERY_TIMEOUT,
                env=BREW_ENV,
            )
        except subprocess.TimeoutExpired as e:
            msg = f"brew {' '.join(args)} timed out after {e.timeout:g}s"
            raise RuntimeError(msg) from e
        except OSError as e:
            msg = f"Could not run {self._brew_path}: {e.strerror or e}"
            raise RuntimeError(msg) from e

        if not result.success:
            msg = f"brew {' '.join(args)} failed: {result.diagnostic}"
            raise RuntimeError(msg)

        try:
            return json.loads(result.stdout or "null")
        except json.JSONDecodeError as e:
            msg = f"brew {' '.join(args)} returned invalid JSON: {e}"
            raise RuntimeError(msg) from e
