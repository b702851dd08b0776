"""Record folding rule.

This module incorporates one parsed snapshot row into an aggregate store.
All validation happens before the store is touched, so a rejected row
leaves no partial state behind.
"""

from __future__ import annotations

import bisect

from core.config import AggregationSettings
from core.logging_config import get_logger
from core.types import DriveRecord
from store.aggregate_store import AggregateStore, DriveStats, ModelStats

_LOGGER = get_logger(__name__)


def fold_record(store: AggregateStore, record: DriveRecord, settings: AggregationSettings) -> None:
    """Fold one record into a worker-owned store.

    Args:
        store: Aggregate to update in place.
        record: Parsed snapshot row.
        settings: Year window and capacity bounds.

    Raises:
        InvalidRecordError: If the date falls outside the window or calendar,
            or the power-on-hours token of a new drive is invalid.
    """
    model_name = record.model.strip()
    serial_number = record.serial_number.strip()
    month_index = settings.month_index(record.year, record.month, record.day)
    failure_date = record.date if record.failure else None

    known_model = store.models.get(model_name)
    drive_stats = known_model.drives.get(serial_number) if known_model is not None else None
    initial_power_on_hour = record.initial_power_on_hour() if drive_stats is None else None

    model_stats = store.model(model_name)
    _update_capacity(model_name, model_stats, record.capacity_bytes, settings)
    if drive_stats is None:
        drive_stats = DriveStats.empty(settings.counter_count, initial_power_on_hour)
        model_stats.drives[serial_number] = drive_stats

    drive_stats.drive_days[month_index] += 1
    if failure_date is not None:
        bisect.insort(drive_stats.failure_dates, failure_date)
        store.update_max_failure_width(len(drive_stats.failure_dates))


def _update_capacity(
    model_name: str,
    model_stats: ModelStats,
    capacity_bytes: int | None,
    settings: AggregationSettings,
) -> None:
    """Raise the model capacity when a larger plausible reading arrives."""
    if capacity_bytes is None or capacity_bytes < 0:
        return
    if not settings.is_plausible_capacity(capacity_bytes):
        return
    previous = model_stats.capacity_bytes
    if previous is not None and capacity_bytes <= previous:
        return
    model_stats.capacity_bytes = capacity_bytes
    if previous is not None:
        _LOGGER.info(
            "model_capacity_changed",
            model=model_name,
            previous_capacity_bytes=previous,
            capacity_bytes=capacity_bytes,
        )
