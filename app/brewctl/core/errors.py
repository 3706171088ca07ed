"""Exception taxonomy for the operation layer.

Cancellation is deliberately absent: a cancelled operation is an
Outcome, not an error.
"""


class OperationError(Exception):
    """Base exception for operations that did not complete successfully."""


class LaunchFailure(OperationError):
    """Raised when the brew executable cannot be started.

    Covers a missing binary, a non-executable path, or any other OSError
    raised while spawning the process.
    """


class ProcessFailure(OperationError):
    """Raised when brew exits with a non-zero status.

    Attributes:
        returncode: Exit status of the process.
    """

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
