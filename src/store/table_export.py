"""Lifetime statistics table export.

This module serializes a final aggregate store into one row per drive.
CSV output uses the standard csv writer; Parquet output uses pyarrow.
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Any, Iterator

from core.config import AggregationSettings
from core.constants import (
    FAILURE_COLUMN_PREFIX,
    OUTPUT_PREFIX_COLUMNS,
    PARQUET_OUTPUT_EXTENSION,
    SUPPORTED_OUTPUT_EXTENSIONS,
)
from core.errors import DriveStatsDependencyError, DriveStatsIOError, DriveStatsUsageError
from core.logging_config import get_logger
from store.aggregate_store import AggregateStore

_LOGGER = get_logger(__name__)

ExportRow = list[object]


def validate_output_path(output_path: str | Path) -> Path:
    """Check that the output path carries a supported table extension.

    Raises:
        DriveStatsUsageError: If the extension is not supported.
        DriveStatsIOError: If the parent directory is missing.
    """
    path = Path(output_path).expanduser()
    if path.suffix.lower() not in SUPPORTED_OUTPUT_EXTENSIONS:
        raise DriveStatsUsageError(
            f"Unsupported output file {path}: expected one of "
            f"{SUPPORTED_OUTPUT_EXTENSIONS}."
        )
    if not path.parent.is_dir():
        raise DriveStatsIOError(
            f"Cannot write output at {path}: directory {path.parent} does not exist. "
            "Create the directory or choose another output path."
        )
    return path


def build_header(store: AggregateStore, settings: AggregationSettings) -> list[str]:
    """Return output column names for a store.

    Args:
        store: Final aggregate store; sizes the failure columns.
        settings: Year window for the monthly columns.

    Returns:
        Ordered column names.
    """
    failure_columns = [
        f"{FAILURE_COLUMN_PREFIX}{index}" for index in range(1, store.max_failure_width + 1)
    ]
    return [*OUTPUT_PREFIX_COLUMNS, *failure_columns, *settings.month_labels()]


def iter_export_rows(store: AggregateStore) -> Iterator[ExportRow]:
    """Yield one row per drive in store iteration order.

    Absent values, padding failure cells, and zero counters are ``None``.
    """
    width = store.max_failure_width
    for model_name, model_stats, serial_number, drive_stats in store.iter_drives():
        failures: list[date | None] = list(drive_stats.failure_dates)
        failures.extend([None] * (width - len(failures)))
        counters = [count or None for count in drive_stats.drive_days]
        yield [
            model_name,
            serial_number,
            model_stats.capacity_bytes,
            drive_stats.initial_power_on_hour,
            *failures,
            *counters,
        ]


def write_stats_table(
    store: AggregateStore,
    output_path: str | Path,
    settings: AggregationSettings,
) -> Path:
    """Write the store to a CSV or Parquet table.

    Args:
        store: Final aggregate store.
        output_path: Destination path; extension selects the format.
        settings: Year window used for counter columns.

    Returns:
        Written output path.

    Raises:
        DriveStatsUsageError: If the extension is unsupported.
        DriveStatsIOError: If the output cannot be written.
    """
    path = validate_output_path(output_path)
    header = build_header(store, settings)
    try:
        if path.suffix.lower() == PARQUET_OUTPUT_EXTENSION:
            _write_parquet(path, header, store)
        else:
            _write_csv(path, header, store)
    except OSError as error:
        raise DriveStatsIOError(
            f"Failed to write output at {path}: {error}. "
            "Check write permissions and available disk space."
        ) from error
    _LOGGER.info(
        "stats_table_written",
        path=str(path),
        drive_count=store.drive_count,
        column_count=len(header),
    )
    return path


def _write_csv(path: Path, header: list[str], store: AggregateStore) -> None:
    """Write rows with empty cells for absent values."""
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        for row in iter_export_rows(store):
            writer.writerow(_render_csv_cell(value) for value in row)


def _render_csv_cell(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return value


def _write_parquet(path: Path, header: list[str], store: AggregateStore) -> None:
    """Write rows as a typed Parquet table."""
    pa, pq = _import_pyarrow()
    columns: list[list[Any]] = [[] for _ in header]
    for row in iter_export_rows(store):
        for column, value in zip(columns, row):
            column.append(value)
    failure_width = store.max_failure_width
    prefix_types = [pa.string(), pa.string(), pa.int64(), pa.int64()]
    column_types = [
        *prefix_types,
        *([pa.date32()] * failure_width),
        *([pa.int64()] * (len(header) - len(prefix_types) - failure_width)),
    ]
    table = pa.table(
        {
            name: pa.array(values, type=column_type)
            for name, values, column_type in zip(header, columns, column_types)
        }
    )
    try:
        pq.write_table(table, str(path))
    except pa.ArrowException as error:
        raise DriveStatsIOError(
            f"Failed to write Parquet output at {path}: {error}. "
            "Validate the destination and retry."
        ) from error


def _import_pyarrow() -> tuple[Any, Any]:
    """Import pyarrow modules used for Parquet export.

    Raises:
        DriveStatsDependencyError: If pyarrow is missing.
    """
    try:
        import pyarrow as pa
        import pyarrow.parquet as pq
    except ImportError as error:
        raise DriveStatsDependencyError(
            "Parquet output requires pyarrow, but it is not installed. "
            "Install pyarrow or write a .csv output instead."
        ) from error
    return pa, pq
