"""Cancellation tokens for in-flight operations.

A token starts active and can be cancelled exactly once; it never
becomes active again. The runner awaits :meth:`CancellationToken.wait`
alongside the brew process and terminates the process if the token
fires first.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class CancellationToken:
    """Monotonic active -> cancelled flag with an awaitable wait.

    Safe to create outside a running event loop. ``cancel`` may be called
    from signal handlers scheduled on the loop or from plain code; repeated
    calls are no-ops.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self, label: str | None = None) -> None:
        """Initialize an active token.

        Args:
            label: Optional name used in log messages.
        """
        self._label = label
        self._event = asyncio.Event()
        self._timer: asyncio.TimerHandle | None = None

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"CancellationToken({self._label!r}, {state})"

    @property
    def label(self) -> str | None:
        """Return the token's label."""
        return self._label

    @property
    def cancelled(self) -> bool:
        """Check if the token has been cancelled."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the token. Has no effect if already cancelled."""
        if self._event.is_set():
            return
        logger.debug("Cancelling %r", self)
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()

    def cancel_after(self, delay: float) -> None:
        """Cancel the token after ``delay`` seconds on the running loop.

        This is how callers compose a timeout; the runner itself never
        times out.

        Args:
            delay: Seconds to wait before cancelling.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        if self.cancelled:
            return
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self.cancel)
