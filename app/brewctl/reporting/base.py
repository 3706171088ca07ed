"""Progress reporting interface.

A reporter announces when an operation starts, succeeds or fails. It
never influences control flow: the operator calls it and moves on.
The handle returned by :meth:`ProgressReporter.started` is how the
surface that announced an operation lets the user abort it.
"""

from typing import Protocol

from brewctl.core.cancellation import CancellationToken


class CancelHandle:
    """User-facing cancel control wired to an operation's token.

    Attributes:
        title: Title of the operation this handle cancels.
    """

    __slots__ = ("_title", "_token")

    def __init__(self, title: str, token: CancellationToken) -> None:
        self._title = title
        self._token = token

    def __repr__(self) -> str:
        return f"CancelHandle({self._title!r}, cancelled={self.cancelled})"

    @property
    def title(self) -> str:
        """Return the title of the operation."""
        return self._title

    @property
    def cancelled(self) -> bool:
        """Check if the operation has been cancelled."""
        return self._token.cancelled

    def cancel(self) -> None:
        """Request cancellation. No-op once the operation has finished."""
        self._token.cancel()


class ProgressReporter(Protocol):
    """Receives start/success/failure notifications for operations.

    Implementations may log, print or record; they must not raise.
    """

    def started(self, title: str, token: CancellationToken) -> CancelHandle:
        """Announce that an operation started.

        Args:
            title: Progress title, e.g. "Installing wget".
            token: The operation's cancellation token.

        Returns:
            A CancelHandle the reporter's surface can use to abort.
        """
        ...

    def succeeded(self, title: str) -> None:
        """Announce that an operation succeeded."""
        ...

    def failed(self, title: str, reason: str) -> None:
        """Announce that an operation failed.

        Args:
            title: Failure title, e.g. "Install failed".
            reason: brew's diagnostic text or the launch error.
        """
        ...
