"""Service scanner implementation.

Lists services using ``brew services list --json``.
"""

import logging
from collections.abc import Iterator
from typing import Any

from brewctl.models.target import Service, ServiceStatus
from brewctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


class ServiceScanner(Scanner[Service]):
    """Scanner for ``brew services`` entries."""

    def scan(self) -> Iterator[Service]:
        """Yield every service brew knows about.

        Yields:
            Service for each entry; malformed entries are skipped.

        Raises:
            RuntimeError: If the brew query fails.
        """
        data = self._query_json(["services", "list", "--json"])
        if data is None:
            return
        if not isinstance(data, list):
            msg = "brew services list returned unexpected JSON"
            raise RuntimeError(msg)

        for entry in data:
            service = self._parse_entry(entry)
            if service is not None:
                yield service

    def find(self, name: str) -> Service | None:
        """Return the service with the given name, if any."""
        for service in self.scan():
            if service.name == name:
                return service
        return None

    def _parse_entry(self, entry: Any) -> Service | None:
        """Parse one element of ``brew services list --json``.

        Args:
            entry: Decoded JSON object.

        Returns:
            Service if the entry has a name, None otherwise.
        """
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning("Skipping malformed service entry: %r", entry)
            return None

        status = ServiceStatus.parse(entry.get("status"))
        exit_code = entry.get("exit_code")
        if not isinstance(exit_code, int):
            exit_code = None

        error = entry.get("error") or None
        if error is None and status == ServiceStatus.ERROR and exit_code:
            error = f"exited with code {exit_code}"

        return Service(
            name=str(entry["name"]),
            status=status,
            user=entry.get("user") or None,
            error=error,
            file=entry.get("file") or None,
            exit_code=exit_code,
        )
