"""Unit tests for progress reporters."""

import asyncio
import io
import logging
import os
import signal

import pytest
from brewctl.core.cancellation import CancellationToken
from brewctl.core.theme import get_theme
from brewctl.reporting import (
    CancelHandle,
    ConsoleReporter,
    LoggingReporter,
    RecordingReporter,
    Report,
    ReportEvent,
)
from rich.console import Console


def make_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, theme=get_theme(), width=120, color_system=None), buffer


class TestCancelHandle:
    """Tests for CancelHandle."""

    def test_cancel_fires_token(self) -> None:
        """cancel() cancels the underlying token."""
        token = CancellationToken()
        handle = CancelHandle("Installing wget", token)

        assert handle.cancelled is False
        handle.cancel()

        assert token.cancelled is True
        assert handle.cancelled is True
        assert handle.title == "Installing wget"

    def test_repeated_cancel(self) -> None:
        """Cancelling twice is harmless."""
        handle = CancelHandle("Installing wget", CancellationToken())
        handle.cancel()
        handle.cancel()
        assert handle.cancelled is True


class TestRecordingReporter:
    """Tests for RecordingReporter."""

    def test_records_in_order(self) -> None:
        """Notifications are recorded in call order."""
        reporter = RecordingReporter()

        reporter.started("Uninstalling wget", CancellationToken())
        reporter.failed("Uninstall failed", "not installed")

        assert reporter.reports == [
            Report(ReportEvent.STARTED, "Uninstalling wget"),
            Report(ReportEvent.FAILED, "Uninstall failed", "not installed"),
        ]
        assert reporter.failures() == [reporter.reports[1]]

    def test_cancel_on_start(self) -> None:
        """cancel_on_start cancels the token immediately."""
        reporter = RecordingReporter(cancel_on_start=True)
        token = CancellationToken()

        handle = reporter.started("Starting redis", token)

        assert token.cancelled is True
        assert reporter.last_handle is handle

    def test_last_handle_empty(self) -> None:
        """last_handle is None before any operation."""
        assert RecordingReporter().last_handle is None


class TestLoggingReporter:
    """Tests for LoggingReporter."""

    def test_logs_start_and_success(self, caplog: pytest.LogCaptureFixture) -> None:
        """Starts and successes are logged at INFO."""
        caplog.set_level(logging.INFO, logger="brewctl.operations")
        reporter = LoggingReporter()

        handle = reporter.started("Installing wget", CancellationToken())
        reporter.succeeded("Installed wget")

        assert isinstance(handle, CancelHandle)
        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert messages == [
            (logging.INFO, "Installing wget..."),
            (logging.INFO, "Installed wget"),
        ]

    def test_logs_failure_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Failures are logged at WARNING with the reason."""
        caplog.set_level(logging.INFO, logger="brewctl.operations")

        LoggingReporter().failed("Uninstall failed", "Error: No such keg")

        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].getMessage() == "Uninstall failed: Error: No such keg"

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        """A custom logger receives the records."""
        caplog.set_level(logging.INFO, logger="custom")

        LoggingReporter(logging.getLogger("custom")).succeeded("Pinned node")

        assert caplog.records[-1].name == "custom"


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_success_output(self) -> None:
        """succeeded prints a check mark and the title."""
        console, buffer = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)

        reporter.started("Installing wget", CancellationToken())
        reporter.succeeded("Installed wget")
        reporter.close()

        assert "✓ Installed wget" in buffer.getvalue()

    def test_failure_output_includes_reason(self) -> None:
        """failed prints the title and brew's diagnostic."""
        console, buffer = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)

        reporter.started("Uninstalling wget", CancellationToken())
        reporter.failed("Uninstall failed", "Error: [wget] is not installed")
        reporter.close()

        output = buffer.getvalue()
        assert "✗ Uninstall failed" in output
        # Reason is escaped, so brackets survive markup parsing
        assert "Error: [wget] is not installed" in output

    def test_handle_tracks_token(self) -> None:
        """The returned handle cancels the operation's token."""
        console, _ = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)
        token = CancellationToken()

        handle = reporter.started("Starting redis", token)
        handle.cancel()
        reporter.close()

        assert token.cancelled is True
        assert reporter.current_handle is handle

    def test_sigint_cancels_current_operation(self) -> None:
        """Ctrl+C inside the loop cancels the running operation."""
        console, buffer = make_console()
        reporter = ConsoleReporter(console)
        token = CancellationToken()

        async def scenario() -> bool:
            reporter.started("Starting redis", token)
            os.kill(os.getpid(), signal.SIGINT)
            try:
                await asyncio.wait_for(token.wait(), timeout=2.0)
            finally:
                reporter.close()
            return token.cancelled

        assert asyncio.run(scenario()) is True
        assert "Cancelling..." in buffer.getvalue()

    def test_no_sigint_outside_loop(self) -> None:
        """Without a running loop, started() still works."""
        console, _ = make_console()
        reporter = ConsoleReporter(console)

        handle = reporter.started("Installing wget", CancellationToken())
        reporter.close()

        assert handle.cancelled is False

    def test_cancel_then_failure_is_not_cancelled(self) -> None:
        """A cancel that lost the race to a non-zero exit reports as a failure only."""
        console, _ = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)

        handle = reporter.started("Uninstalling wget", CancellationToken())
        handle.cancel()
        reporter.failed("Uninstall failed", "Error: No such keg")
        reporter.close()

        assert handle.cancelled is True
        assert reporter.last_cancelled is False

    def test_cancel_without_terminal_report(self) -> None:
        """A cancelled handle with no success or failure counts as cancelled."""
        console, _ = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)

        reporter.started("Starting redis", CancellationToken()).cancel()
        reporter.close()

        assert reporter.last_cancelled is True

    def test_new_operation_resets_cancelled(self) -> None:
        """last_cancelled follows the most recent operation."""
        console, _ = make_console()
        reporter = ConsoleReporter(console, handle_sigint=False)

        reporter.started("Starting redis", CancellationToken()).cancel()
        reporter.started("Stopping redis", CancellationToken())
        reporter.close()

        assert reporter.last_cancelled is False
