"""In-memory reporter for tests and programmatic callers."""

from dataclasses import dataclass, field
from enum import Enum

from brewctl.core.cancellation import CancellationToken
from brewctl.reporting.base import CancelHandle


class ReportEvent(Enum):
    """Kind of notification a reporter received."""

    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Report:
    """A single recorded notification.

    Attributes:
        event: Which notification this was.
        title: Title passed to the reporter.
        reason: Failure reason, only set for FAILED.
    """

    event: ReportEvent
    title: str
    reason: str | None = None


@dataclass
class RecordingReporter:
    """Reporter that records every notification in order.

    Attributes:
        reports: Notifications received so far.
        handles: Cancel handles issued by ``started``.
        cancel_on_start: Cancel every operation as soon as it starts.
    """

    reports: list[Report] = field(default_factory=list)
    handles: list[CancelHandle] = field(default_factory=list)
    cancel_on_start: bool = False

    def started(self, title: str, token: CancellationToken) -> CancelHandle:
        handle = CancelHandle(title, token)
        self.reports.append(Report(ReportEvent.STARTED, title))
        self.handles.append(handle)
        if self.cancel_on_start:
            handle.cancel()
        return handle

    def succeeded(self, title: str) -> None:
        self.reports.append(Report(ReportEvent.SUCCEEDED, title))

    def failed(self, title: str, reason: str) -> None:
        self.reports.append(Report(ReportEvent.FAILED, title, reason))

    @property
    def events(self) -> list[ReportEvent]:
        """Return the recorded event kinds in order."""
        return [r.event for r in self.reports]

    @property
    def last_handle(self) -> CancelHandle | None:
        """Return the most recently issued handle."""
        return self.handles[-1] if self.handles else None

    def failures(self) -> list[Report]:
        """Return only FAILED reports."""
        return [r for r in self.reports if r.event == ReportEvent.FAILED]
