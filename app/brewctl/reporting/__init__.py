"""Progress reporters for brew operations.

A reporter is swappable without touching the operator: log lines,
terminal output, or an in-memory recorder for tests.
"""

from brewctl.reporting.base import CancelHandle, ProgressReporter
from brewctl.reporting.console import ConsoleReporter
from brewctl.reporting.log import LoggingReporter
from brewctl.reporting.recording import RecordingReporter, Report, ReportEvent

__all__ = [
    "CancelHandle",
    "ConsoleReporter",
    "LoggingReporter",
    "ProgressReporter",
    "RecordingReporter",
    "Report",
    "ReportEvent",
]
