"""Scanners that enumerate brew packages and services.

This module provides the read-only queries whose results the operation
layer acts on.
"""

from brewctl.scanners.base import Scanner
from brewctl.scanners.packages import InstalledScanner, OutdatedScanner
from brewctl.scanners.services import ServiceScanner

__all__ = ["InstalledScanner", "OutdatedScanner", "Scanner", "ServiceScanner"]
