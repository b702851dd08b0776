"""Runtime configuration model for drive stats aggregation.

This module owns all environment variable parsing and validation.
Other modules consume typed settings instead of raw env reads or globals.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_FIRST_YEAR,
    DEFAULT_LAST_YEAR,
    DEFAULT_MAX_CAPACITY_BYTES,
    DEFAULT_MIN_CAPACITY_BYTES,
    MONTHS_PER_YEAR,
)
from core.errors import DriveStatsConfigError, InvalidRecordError


@dataclass(frozen=True)
class AggregationSettings:
    """Validity window passed into fold, reduce, and export logic.

    Attributes:
        first_year: First supported calendar year, inclusive.
        last_year: Last supported calendar year, inclusive.
        min_capacity_bytes: Smallest plausible drive capacity.
        max_capacity_bytes: Largest plausible drive capacity.
    """

    first_year: int = DEFAULT_FIRST_YEAR
    last_year: int = DEFAULT_LAST_YEAR
    min_capacity_bytes: int = DEFAULT_MIN_CAPACITY_BYTES
    max_capacity_bytes: int = DEFAULT_MAX_CAPACITY_BYTES

    def __post_init__(self) -> None:
        if self.first_year > self.last_year:
            raise DriveStatsConfigError(
                f"Invalid year window {self.first_year}-{self.last_year}: "
                "first year must not exceed last year."
            )
        if self.min_capacity_bytes > self.max_capacity_bytes:
            raise DriveStatsConfigError(
                f"Invalid capacity bounds {self.min_capacity_bytes}-{self.max_capacity_bytes}: "
                "minimum must not exceed maximum."
            )

    @property
    def counter_count(self) -> int:
        """Number of monthly counter slots in the window."""
        return (self.last_year - self.first_year + 1) * MONTHS_PER_YEAR

    def month_index(self, year: int, month: int, day: int) -> int:
        """Map a calendar date onto its counter slot.

        Args:
            year: Calendar year.
            month: One-based month.
            day: One-based day of month.

        Returns:
            Zero-based counter index.

        Raises:
            InvalidRecordError: If the date is outside the window or calendar.
        """
        if not self.first_year <= year <= self.last_year:
            raise InvalidRecordError(
                f"Year {year} is outside the supported range "
                f"{self.first_year}-{self.last_year}."
            )
        if not 1 <= month <= MONTHS_PER_YEAR:
            raise InvalidRecordError(f"Month {month} is outside the range 1-12.")
        days_in_month = calendar.monthrange(year, month)[1]
        if not 1 <= day <= days_in_month:
            raise InvalidRecordError(
                f"Day {day} is invalid for {year}-{month:02d} (1-{days_in_month})."
            )
        return (year - self.first_year) * MONTHS_PER_YEAR + (month - 1)

    def is_plausible_capacity(self, capacity_bytes: int) -> bool:
        """Return whether a capacity reading falls inside the plausible bounds."""
        return self.min_capacity_bytes <= capacity_bytes <= self.max_capacity_bytes

    def month_labels(self) -> list[str]:
        """Return ``YYYY-MM`` labels for every counter slot in order."""
        return [
            f"{year}-{month:02d}"
            for year in range(self.first_year, self.last_year + 1)
            for month in range(1, MONTHS_PER_YEAR + 1)
        ]


@dataclass(frozen=True)
class DriveStatsConfig:
    """Validated runtime configuration.

    Attributes:
        settings: Year window and capacity bounds.
        worker_count: Number of ingest worker threads.
    """

    settings: AggregationSettings
    worker_count: int

    @classmethod
    def from_env(cls) -> "DriveStatsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            DriveStatsConfigError: If environment values are invalid.
        """
        settings = AggregationSettings(
            first_year=_parse_int_env("DRIVESTATS_FIRST_YEAR", DEFAULT_FIRST_YEAR),
            last_year=_parse_int_env("DRIVESTATS_LAST_YEAR", DEFAULT_LAST_YEAR),
            min_capacity_bytes=_parse_int_env(
                "DRIVESTATS_MIN_CAPACITY_BYTES", DEFAULT_MIN_CAPACITY_BYTES
            ),
            max_capacity_bytes=_parse_int_env(
                "DRIVESTATS_MAX_CAPACITY_BYTES", DEFAULT_MAX_CAPACITY_BYTES
            ),
        )
        worker_count = _parse_int_env("DRIVESTATS_WORKERS", default_worker_count())
        return cls(settings=settings, worker_count=validate_worker_count(worker_count))


def default_worker_count() -> int:
    """Return the available hardware concurrency, at least one."""
    return os.cpu_count() or 1


def validate_worker_count(worker_count: int) -> int:
    """Validate a requested worker count.

    Raises:
        DriveStatsConfigError: If fewer than one worker is requested.
    """
    if worker_count < 1:
        raise DriveStatsConfigError(
            f"Invalid worker count {worker_count}: expected value >= 1. "
            "Set DRIVESTATS_WORKERS or --workers to a positive integer."
        )
    return worker_count


def _parse_int_env(name: str, default: int) -> int:
    """Parse an integer environment value.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or empty.

    Returns:
        Parsed integer.

    Raises:
        DriveStatsConfigError: If value cannot be parsed into int.
    """
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as error:
        raise DriveStatsConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a numeric value."
        ) from error
