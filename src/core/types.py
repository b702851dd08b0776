"""Shared typed models.

This module defines immutable data models used by ingest, store,
and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from core.errors import InvalidRecordError


@dataclass(frozen=True)
class DriveRecord:
    """One parsed daily snapshot row.

    Attributes:
        model: Raw model name, not yet canonicalized.
        serial_number: Raw serial number, not yet canonicalized.
        year: Calendar year of the snapshot.
        month: One-based calendar month of the snapshot.
        day: One-based day of month of the snapshot.
        failure: Whether the drive failed on this day.
        capacity_bytes: Reported capacity, if any.
        power_on_hours_raw: Unparsed power-on-hours token, if the column exists.
    """

    model: str
    serial_number: str
    year: int
    month: int
    day: int
    failure: bool
    capacity_bytes: int | None = None
    power_on_hours_raw: str | None = None

    @property
    def date(self) -> date:
        """Calendar date of the snapshot.

        Raises:
            InvalidRecordError: If the components do not form a real date.
        """
        try:
            return date(self.year, self.month, self.day)
        except ValueError as error:
            raise InvalidRecordError(
                f"Invalid calendar date {self.year}-{self.month}-{self.day}: {error}."
            ) from error

    def initial_power_on_hour(self) -> int | None:
        """Parse the power-on-hours token.

        Only called when a drive is first seen, so rows of known drives
        never pay for this parse.

        Returns:
            Non-negative hour count, or ``None`` when absent.

        Raises:
            InvalidRecordError: If the token is not a non-negative number.
        """
        if self.power_on_hours_raw is None:
            return None
        token = self.power_on_hours_raw.strip()
        if not token:
            return None
        try:
            hours = int(token) if token.isascii() and token.isdecimal() else int(float(token))
        except (ValueError, OverflowError) as error:
            raise InvalidRecordError(
                f"Invalid power-on-hours value '{token}' for serial "
                f"'{self.serial_number.strip()}': expected a number."
            ) from error
        if hours < 0:
            raise InvalidRecordError(
                f"Invalid power-on-hours value {hours} for serial "
                f"'{self.serial_number.strip()}': expected value >= 0."
            )
        return hours


@dataclass(frozen=True)
class IngestReport:
    """Row and file counters for one or more ingest workers.

    Attributes:
        files_processed: Files read to completion.
        files_failed: Files abandoned after a file-level error.
        rows_folded: Rows folded into an aggregate.
        rows_rejected: Rows rejected by the fold rule.
    """

    files_processed: int = 0
    files_failed: int = 0
    rows_folded: int = 0
    rows_rejected: int = 0

    def combined_with(self, other: "IngestReport") -> "IngestReport":
        """Return the field-wise sum of two reports."""
        return IngestReport(
            files_processed=self.files_processed + other.files_processed,
            files_failed=self.files_failed + other.files_failed,
            rows_folded=self.rows_folded + other.rows_folded,
            rows_rejected=self.rows_rejected + other.rows_rejected,
        )


@dataclass(frozen=True)
class AggregationRequest:
    """Aggregation command options.

    Attributes:
        input_path: Input CSV file or directory scanned recursively.
        output_path: Output table path with a supported extension.
        worker_count: Optional worker override; config default if omitted.
    """

    input_path: str
    output_path: str
    worker_count: int | None = None


@dataclass(frozen=True)
class AggregationResult:
    """Aggregation command output summary.

    Attributes:
        output_path: Written table path.
        report: Combined ingest counters.
        model_count: Number of distinct models.
        drive_count: Number of distinct (model, serial) pairs.
        max_failure_width: Failure-date column count in the output.
        elapsed_seconds: Wall-clock duration of the run.
    """

    output_path: str
    report: IngestReport
    model_count: int
    drive_count: int
    max_failure_width: int
    elapsed_seconds: float
