"""Terminal reporter with a spinner and Ctrl+C cancellation.

While an operation runs, Ctrl+C cancels it through its CancelHandle
instead of tearing down the event loop, so brew gets terminated and
reaped cleanly.
"""

import asyncio
import logging
import signal

from rich.console import Console
from rich.markup import escape
from rich.status import Status

from brewctl.core.cancellation import CancellationToken
from brewctl.reporting.base import CancelHandle
from brewctl.utils.formatting import console as default_console

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Reports operation progress on a Rich console.

    Call :meth:`close` once the operation has returned; a cancelled
    operation gets no further notification, so the spinner and the
    SIGINT handler are only torn down there.
    """

    def __init__(self, console: Console | None = None, *, handle_sigint: bool = True) -> None:
        """Initialize the reporter.

        Args:
            console: Console to write to. Defaults to the shared stdout console.
            handle_sigint: Wire Ctrl+C to the current operation's handle.
        """
        self._console = console or default_console
        self._handle_sigint = handle_sigint
        self._status: Status | None = None
        self._handle: CancelHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._settled = False

    @property
    def current_handle(self) -> CancelHandle | None:
        """Return the handle of the most recently started operation."""
        return self._handle

    @property
    def last_cancelled(self) -> bool:
        """Check if the last operation ended cancelled.

        True only when its handle was cancelled and no success or failure
        was reported; a cancel that lost the race to the exit status does
        not count.
        """
        return self._handle is not None and self._handle.cancelled and not self._settled

    def started(self, title: str, token: CancellationToken) -> CancelHandle:
        self._stop_status()
        self._handle = CancelHandle(title, token)
        self._settled = False
        hint = " [muted](Ctrl+C to cancel)[/]" if self._wire_sigint() else ""
        self._status = self._console.status(f"[info]{escape(title)}...[/]{hint}")
        self._status.start()
        return self._handle

    def succeeded(self, title: str) -> None:
        self._stop_status()
        self._settled = True
        self._console.print(f"[success]✓ {escape(title)}[/]")

    def failed(self, title: str, reason: str) -> None:
        self._stop_status()
        self._settled = True
        self._console.print(f"[error]✗ {escape(title)}[/]")
        if reason:
            self._console.print(escape(reason), style="muted", highlight=False)

    def close(self) -> None:
        """Stop the spinner and restore default Ctrl+C handling."""
        self._stop_status()
        if self._loop is not None:
            self._loop.remove_signal_handler(signal.SIGINT)
            self._loop = None

    def _stop_status(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def _wire_sigint(self) -> bool:
        """Route SIGINT to the current handle. Returns True if wired."""
        if not self._handle_sigint:
            return False
        try:
            loop = asyncio.get_running_loop()
            loop.add_signal_handler(signal.SIGINT, self._on_sigint)
        except (RuntimeError, NotImplementedError, ValueError) as e:
            # No running loop, not the main thread, or no signal support
            logger.debug("Ctrl+C cancellation unavailable: %s", e)
            return False
        self._loop = loop
        return True

    def _on_sigint(self) -> None:
        if self._handle is not None and not self._handle.cancelled:
            self._console.print("[warning]Cancelling...[/]")
            self._handle.cancel()
