"""Package scanners.

Installed packages come from ``brew info --json=v2 --installed``,
outdated ones from ``brew outdated --json=v2``. Both documents have a
``formulae`` and a ``casks`` array.
"""

import logging
from collections.abc import Iterator
from typing import Any

from brewctl.models.target import OutdatedPackage, Package
from brewctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


def _sections(data: Any, command: str) -> tuple[list[Any], list[Any]]:
    """Split a brew v2 JSON document into (formulae, casks)."""
    if data is None:
        return [], []
    if not isinstance(data, dict):
        msg = f"brew {command} returned unexpected JSON"
        raise RuntimeError(msg)
    return list(data.get("formulae") or []), list(data.get("casks") or [])


class InstalledScanner(Scanner[Package]):
    """Scanner for installed formulae and casks."""

    def scan(self) -> Iterator[Package]:
        """Yield installed formulae, then installed casks.

        Raises:
            RuntimeError: If the brew query fails.
        """
        data = self._query_json(["info", "--json=v2", "--installed"])
        formulae, casks = _sections(data, "info")

        for entry in formulae:
            package = self._parse_formula(entry)
            if package is not None:
                yield package

        for entry in casks:
            package = self._parse_cask(entry)
            if package is not None:
                yield package

    def find(self, name: str) -> Package | None:
        """Return the installed package with the given name, if any."""
        for package in self.scan():
            if package.name == name:
                return package
        return None

    def _parse_formula(self, entry: Any) -> Package | None:
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning("Skipping malformed formula entry")
            return None

        installed = entry.get("installed") or []
        version = None
        if installed and isinstance(installed[-1], dict):
            version = installed[-1].get("version")

        return Package(
            name=str(entry["name"]),
            pinned=bool(entry.get("pinned", False)),
            version=version,
            description=entry.get("desc") or None,
        )

    def _parse_cask(self, entry: Any) -> Package | None:
        if not isinstance(entry, dict) or not entry.get("token"):
            logger.warning("Skipping malformed cask entry")
            return None

        return Package(
            name=str(entry["token"]),
            cask=True,
            version=entry.get("installed") or entry.get("version") or None,
            description=entry.get("desc") or None,
        )


class OutdatedScanner(Scanner[OutdatedPackage]):
    """Scanner for packages with a pending upgrade.

    Attributes:
        greedy: Include casks that update themselves.
    """

    def __init__(self, brew_path: str | None = None, greedy: bool = False) -> None:
        """Initialize the scanner.

        Args:
            brew_path: brew executable. If None, resolved automatically.
            greedy: Pass ``--greedy`` to ``brew outdated``.
        """
        super().__init__(brew_path)
        self._greedy = greedy

    @property
    def greedy(self) -> bool:
        """Check if auto-updating casks are included."""
        return self._greedy

    def scan(self) -> Iterator[OutdatedPackage]:
        """Yield outdated formulae, then outdated casks.

        Raises:
            RuntimeError: If the brew query fails.
        """
        args = ["outdated", "--json=v2"]
        if self._greedy:
            args.append("--greedy")

        formulae, casks = _sections(self._query_json(args), "outdated")

        for entry in formulae:
            package = self._parse_entry(entry, cask=False)
            if package is not None:
                yield package

        for entry in casks:
            package = self._parse_entry(entry, cask=True)
            if package is not None:
                yield package

    def _parse_entry(self, entry: Any, *, cask: bool) -> OutdatedPackage | None:
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning("Skipping malformed outdated entry")
            return None

        installed = entry.get("installed_versions") or []
        return OutdatedPackage(
            name=str(entry["name"]),
            cask=cask,
            pinned=bool(entry.get("pinned", False)),
            installed_versions=tuple(str(v) for v in installed),
            current_version=entry.get("current_version") or None,
        )
