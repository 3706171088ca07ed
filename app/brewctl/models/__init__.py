"""Data models for brewctl.

This module exports the core data structures used throughout the application.
"""

from brewctl.models.operation import Operation, OperationType, Outcome, OutcomeKind
from brewctl.models.target import Nameable, OutdatedPackage, Package, Service, ServiceStatus

__all__ = [
    "Nameable",
    "Operation",
    "OperationType",
    "OutdatedPackage",
    "Outcome",
    "OutcomeKind",
    "Package",
    "Service",
    "ServiceStatus",
]
