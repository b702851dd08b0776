"""Core constants used across drive stats modules.

This module centralizes default windows, bounds, and schema names.
Keeping values here avoids magic literals in fold and export logic.
"""

from __future__ import annotations

GIGABYTE = 1000 * 1000 * 1000
TERABYTE = GIGABYTE * 1000

DEFAULT_FIRST_YEAR = 2013
DEFAULT_LAST_YEAR = 2023
MONTHS_PER_YEAR = 12

# Very old drives on the low end, HAMR drives on the high end.
DEFAULT_MIN_CAPACITY_BYTES = 40 * GIGABYTE
DEFAULT_MAX_CAPACITY_BYTES = 40 * TERABYTE

SUPPORTED_INPUT_EXTENSIONS = (".csv",)
CSV_OUTPUT_EXTENSION = ".csv"
PARQUET_OUTPUT_EXTENSION = ".parquet"
SUPPORTED_OUTPUT_EXTENSIONS = (CSV_OUTPUT_EXTENSION, PARQUET_OUTPUT_EXTENSION)

DATE_COLUMN = "date"
SERIAL_NUMBER_COLUMN = "serial_number"
MODEL_COLUMN = "model"
CAPACITY_BYTES_COLUMN = "capacity_bytes"
FAILURE_COLUMN = "failure"
POWER_ON_HOURS_COLUMN = "smart_9_raw"
REQUIRED_INPUT_COLUMNS = (
    DATE_COLUMN,
    SERIAL_NUMBER_COLUMN,
    MODEL_COLUMN,
    CAPACITY_BYTES_COLUMN,
    FAILURE_COLUMN,
)

OUTPUT_PREFIX_COLUMNS = (
    MODEL_COLUMN,
    SERIAL_NUMBER_COLUMN,
    CAPACITY_BYTES_COLUMN,
    "initial_power_on_hour",
)
FAILURE_COLUMN_PREFIX = "failure_"
