"""Unit tests for the list command."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from brewctl.cli.main import app
from brewctl.core.config import BrewctlConfig
from brewctl.models.target import OutdatedPackage, Package
from typer.testing import CliRunner

runner = CliRunner()

BREW = "/opt/homebrew/bin/brew"


@pytest.fixture
def settings() -> Iterator[MagicMock]:
    """Serve settings with a fixed brew path instead of reading config.toml."""
    with patch(
        "brewctl.cli.binding.load_config_or_default",
        return_value=BrewctlConfig(brew_path=Path(BREW)),
    ) as mock_load:
        yield mock_load


@pytest.mark.usefixtures("settings")
class TestListInstalled:
    """Tests for brewctl list."""

    @patch("brewctl.cli.commands.listing.InstalledScanner")
    def test_lists_installed(self, mock_scanner_cls: MagicMock) -> None:
        """Installed packages are shown with a count."""
        mock_scanner_cls.return_value.scan.return_value = iter(
            [
                Package(name="wget", version="1.24.5"),
                Package(name="node", version="21.7.1", pinned=True),
            ]
        )

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "wget" in result.output
        assert "1.24.5" in result.output
        assert "2 package(s)" in result.output
        mock_scanner_cls.assert_called_once_with(brew_path=BREW)

    @patch("brewctl.cli.commands.listing.InstalledScanner")
    def test_pinned_only(self, mock_scanner_cls: MagicMock) -> None:
        """--pinned filters to pinned packages."""
        mock_scanner_cls.return_value.scan.return_value = iter(
            [Package(name="wget"), Package(name="node", pinned=True)]
        )

        result = runner.invoke(app, ["list", "--pinned"])

        assert result.exit_code == 0
        assert "node" in result.output
        assert "wget" not in result.output
        assert "1 package(s)" in result.output

    @patch("brewctl.cli.commands.listing.InstalledScanner")
    def test_empty(self, mock_scanner_cls: MagicMock) -> None:
        """No packages prints a notice."""
        mock_scanner_cls.return_value.scan.return_value = iter([])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No packages found." in result.output

    @patch("brewctl.cli.commands.listing.InstalledScanner")
    def test_scan_error(self, mock_scanner_cls: MagicMock) -> None:
        """Scanner errors exit 1."""
        mock_scanner_cls.return_value.scan.side_effect = RuntimeError("brew is not available")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "brew is not available" in result.output


class TestListOutdated:
    """Tests for brewctl list --outdated."""

    def test_outdated_uses_config_greedy(self) -> None:
        """--outdated takes greedy from settings by default."""
        with (
            patch(
                "brewctl.cli.binding.load_config_or_default",
                return_value=BrewctlConfig(greedy_upgrades=True, brew_path=Path(BREW)),
            ),
            patch("brewctl.cli.commands.listing.OutdatedScanner") as mock_scanner_cls,
        ):
            mock_scanner_cls.return_value.scan.return_value = iter(
                [
                    OutdatedPackage(
                        name="git", installed_versions=("2.44.0",), current_version="2.45.0"
                    )
                ]
            )

            result = runner.invoke(app, ["list", "--outdated"])

        assert result.exit_code == 0
        mock_scanner_cls.assert_called_once_with(brew_path=BREW, greedy=True)
        assert "2.44.0 -> 2.45.0" in result.output

    def test_outdated_flag_overrides_config(self) -> None:
        """--no-greedy overrides settings."""
        with (
            patch(
                "brewctl.cli.binding.load_config_or_default",
                return_value=BrewctlConfig(greedy_upgrades=True, brew_path=Path(BREW)),
            ),
            patch("brewctl.cli.commands.listing.OutdatedScanner") as mock_scanner_cls,
        ):
            mock_scanner_cls.return_value.scan.return_value = iter([])

            result = runner.invoke(app, ["list", "-o", "--no-greedy"])

        assert result.exit_code == 0
        mock_scanner_cls.assert_called_once_with(brew_path=BREW, greedy=False)
        assert "Everything is up to date." in result.output


class TestConfiguredBrewPath:
    """The configured brew path reaches the scanners even when brew is not on PATH."""

    @pytest.mark.parametrize(
        ("args", "scanner"),
        [(["list"], "InstalledScanner"), (["list", "--outdated"], "OutdatedScanner")],
    )
    def test_configured_path_used_without_brew_on_path(
        self, args: list[str], scanner: str
    ) -> None:
        """brew_path from settings is passed to the scanner, not the PATH lookup."""
        with (
            patch(
                "brewctl.cli.binding.load_config_or_default",
                return_value=BrewctlConfig(brew_path=Path("/custom/brew")),
            ),
            patch("brewctl.core.commands.shutil.which", return_value=None),
            patch(f"brewctl.cli.commands.listing.{scanner}") as mock_scanner_cls,
        ):
            mock_scanner_cls.return_value.scan.return_value = iter([])

            result = runner.invoke(app, args)

        assert result.exit_code == 0
        assert mock_scanner_cls.call_args.kwargs["brew_path"] == "/custom/brew"
