"""Reporter that writes notifications to the logging system."""

import logging

from brewctl.core.cancellation import CancellationToken
from brewctl.reporting.base import CancelHandle

_default_logger = logging.getLogger("brewctl.operations")


class LoggingReporter:
    """Reports operation progress as log records.

    Failures are logged at WARNING with brew's diagnostic text; starts and
    successes at INFO.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the reporter.

        Args:
            logger: Logger to write to. Defaults to ``brewctl.operations``.
        """
        self._logger = logger or _default_logger

    def started(self, title: str, token: CancellationToken) -> CancelHandle:
        self._logger.info("%s...", title)
        return CancelHandle(title, token)

    def succeeded(self, title: str) -> None:
        self._logger.info("%s", title)

    def failed(self, title: str, reason: str) -> None:
        self._logger.warning("%s: %s", title, reason)
