"""Drive stats exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class DriveStatsError(Exception):
    """Base exception for all drive stats failures."""


class DriveStatsConfigError(DriveStatsError):
    """Raised for invalid runtime configuration."""


class DriveStatsIngestError(DriveStatsError):
    """Raised for source parsing and ingest failures."""


class MalformedDateError(DriveStatsIngestError):
    """Raised when a date token cannot be parsed."""


class InvalidRecordError(DriveStatsIngestError):
    """Raised for schema, type, or calendar violations in an input row."""


class DriveStatsIOError(DriveStatsError):
    """Raised when an input path is unreadable or output is unwritable."""


class DriveStatsUsageError(DriveStatsError):
    """Raised for bad command-line invocations."""


class DriveStatsStoreError(DriveStatsError):
    """Raised for aggregate store and merge failures."""


class DriveStatsDependencyError(DriveStatsError):
    """Raised when an optional runtime dependency is missing."""
