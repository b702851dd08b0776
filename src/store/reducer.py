"""Aggregate store reduction.

This module merges per-worker stores into one final store. The merge
takes the max of capacities, sums counters, and merges failure dates,
so it is associative and commutative on all aggregate state.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from core.errors import DriveStatsStoreError
from core.logging_config import get_logger
from store.aggregate_store import AggregateStore, DriveStats

_LOGGER = get_logger(__name__)


def reduce_stores(stores: Iterable[AggregateStore]) -> AggregateStore:
    """Fold stores sequentially into the first one.

    The first store becomes the accumulator and is mutated; later
    stores are only read.

    Args:
        stores: Per-worker stores, handed over to the reducer.

    Returns:
        Combined store, or an empty store when none are given.
    """
    iterator = iter(stores)
    result = next(iterator, None)
    if result is None:
        return AggregateStore()
    for store in iterator:
        merge_store(result, store)
    return result


def merge_store(acc: AggregateStore, other: AggregateStore) -> None:
    """Merge ``other`` into ``acc`` in place.

    Args:
        acc: Accumulating store, mutated.
        other: Store to merge, read only.

    Raises:
        DriveStatsStoreError: If counter layouts differ between stores.
    """
    for model_name, other_model in other.models.items():
        acc_model = acc.model(model_name)
        acc_model.capacity_bytes = _merge_capacity(
            model_name, acc_model.capacity_bytes, other_model.capacity_bytes
        )
        for serial_number, other_drive in other_model.drives.items():
            acc_drive = acc_model.drives.get(serial_number)
            if acc_drive is None:
                acc_drive = DriveStats.empty(
                    len(other_drive.drive_days), other_drive.initial_power_on_hour
                )
                acc_model.drives[serial_number] = acc_drive
            _merge_drive(model_name, serial_number, acc_drive, other_drive)
            acc.update_max_failure_width(len(acc_drive.failure_dates))
    acc.update_max_failure_width(other.max_failure_width)


def merge_sorted_dates(left: list[date], right: list[date]) -> list[date]:
    """Merge two ascending date lists, keeping duplicates.

    Ties take the left element first.
    """
    merged: list[date] = []
    left_index = 0
    right_index = 0
    while left_index < len(left) and right_index < len(right):
        if right[right_index] < left[left_index]:
            merged.append(right[right_index])
            right_index += 1
        else:
            merged.append(left[left_index])
            left_index += 1
    merged.extend(left[left_index:])
    merged.extend(right[right_index:])
    return merged


def _merge_capacity(model_name: str, current: int | None, other: int | None) -> int | None:
    """Return the larger capacity, logging when both sides disagree."""
    if other is None:
        return current
    if current is None:
        return other
    if current != other:
        _LOGGER.info(
            "model_capacity_merged",
            model=model_name,
            capacity_bytes=current,
            other_capacity_bytes=other,
        )
    return max(current, other)


def _merge_drive(
    model_name: str,
    serial_number: str,
    acc_drive: DriveStats,
    other_drive: DriveStats,
) -> None:
    """Sum counters and merge failure dates of one drive."""
    if len(acc_drive.drive_days) != len(other_drive.drive_days):
        raise DriveStatsStoreError(
            f"Cannot merge drive '{serial_number}' of model '{model_name}': "
            f"counter layouts differ ({len(acc_drive.drive_days)} vs "
            f"{len(other_drive.drive_days)} months). Aggregate every store "
            "with the same year window."
        )
    counters = acc_drive.drive_days
    for index, count in enumerate(other_drive.drive_days):
        if count:
            counters[index] += count
    if other_drive.failure_dates:
        acc_drive.failure_dates = merge_sorted_dates(
            acc_drive.failure_dates, other_drive.failure_dates
        )
