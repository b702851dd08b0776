"""Daily snapshot CSV reader.

This module turns rows of a drive stats CSV file into typed records.
Calendar validation is left to the fold rule; this layer only checks
that required fields exist and have the expected shape.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from core.constants import (
    CAPACITY_BYTES_COLUMN,
    DATE_COLUMN,
    FAILURE_COLUMN,
    MODEL_COLUMN,
    POWER_ON_HOURS_COLUMN,
    REQUIRED_INPUT_COLUMNS,
    SERIAL_NUMBER_COLUMN,
)
from core.errors import InvalidRecordError, MalformedDateError
from core.types import DriveRecord


def read_drive_records(file_path: Path) -> Iterator[DriveRecord]:
    """Lazily read drive records from one CSV file.

    Args:
        file_path: Path to a daily snapshot CSV file.

    Yields:
        Parsed records in file order.

    Raises:
        InvalidRecordError: If the header or a required field is invalid.
        MalformedDateError: If a date token cannot be parsed.
        OSError: If the file cannot be read.
    """
    with file_path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        _validate_header(file_path, reader.fieldnames)
        has_power_on_hours = POWER_ON_HOURS_COLUMN in (reader.fieldnames or ())
        for row in reader:
            yield parse_drive_row(row, has_power_on_hours, f"{file_path}:{reader.line_num}")


def parse_drive_row(
    row: Mapping[str, str | None],
    has_power_on_hours: bool,
    location: str,
) -> DriveRecord:
    """Parse one CSV row into a drive record.

    Args:
        row: Column name to raw value mapping.
        has_power_on_hours: Whether the power-on-hours column is present.
        location: ``path:line`` context for error messages.

    Returns:
        Parsed record with raw (untrimmed) model and serial.

    Raises:
        InvalidRecordError: If a required field is missing or mistyped.
        MalformedDateError: If the date token cannot be parsed.
    """
    year, month, day = parse_date_token(_required_field(row, DATE_COLUMN, location), location)
    return DriveRecord(
        model=_required_field(row, MODEL_COLUMN, location),
        serial_number=_required_field(row, SERIAL_NUMBER_COLUMN, location),
        year=year,
        month=month,
        day=day,
        failure=_parse_failure_flag(_required_field(row, FAILURE_COLUMN, location), location),
        capacity_bytes=_parse_capacity(row.get(CAPACITY_BYTES_COLUMN), location),
        power_on_hours_raw=row.get(POWER_ON_HOURS_COLUMN) if has_power_on_hours else None,
    )


def parse_date_token(token: str, location: str = "<row>") -> tuple[int, int, int]:
    """Split a ``YYYY-MM-DD`` token into integer components.

    Month and day ranges are not checked here.

    Raises:
        MalformedDateError: If the token does not have three numeric parts.
    """
    parts = token.strip().split("-")
    if len(parts) != 3 or not all(_is_ascii_number(part) for part in parts):
        raise MalformedDateError(
            f"Malformed date '{token}' at {location}: expected YYYY-MM-DD."
        )
    year, month, day = (int(part) for part in parts)
    return year, month, day


def _is_ascii_number(part: str) -> bool:
    return part.isascii() and part.isdecimal()


def _validate_header(file_path: Path, fieldnames: Sequence[str] | None) -> None:
    """Ensure all required columns are present."""
    present = set(fieldnames or ())
    missing = [column for column in REQUIRED_INPUT_COLUMNS if column not in present]
    if missing:
        raise InvalidRecordError(
            f"Invalid header in {file_path}: missing columns {missing}. "
            f"Required columns: {list(REQUIRED_INPUT_COLUMNS)}."
        )


def _required_field(row: Mapping[str, str | None], column: str, location: str) -> str:
    value = row.get(column)
    if value is None:
        raise InvalidRecordError(f"Missing '{column}' value at {location}: row is truncated.")
    return value


def _parse_failure_flag(token: str, location: str) -> bool:
    value = token.strip()
    if value == "1":
        return True
    if value == "0":
        return False
    raise InvalidRecordError(f"Invalid failure flag '{token}' at {location}: expected 0 or 1.")


def _parse_capacity(token: str | None, location: str) -> int | None:
    if token is None or not token.strip():
        return None
    try:
        return int(token.strip())
    except ValueError as error:
        raise InvalidRecordError(
            f"Invalid capacity '{token}' at {location}: expected an integer byte count."
        ) from error
