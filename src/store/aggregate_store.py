"""In-memory per-drive aggregate model.

This module defines the model -> serial -> drive stats hierarchy
that each ingest worker builds and the reducer combines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator


@dataclass
class DriveStats:
    """Lifetime statistics for one physical drive.

    Attributes:
        drive_days: Operating-day counters, one slot per supported month.
        initial_power_on_hour: Power-on hours at first sighting, never overwritten.
        failure_dates: Observed failure dates in ascending order.
    """

    drive_days: list[int]
    initial_power_on_hour: int | None = None
    failure_dates: list[date] = field(default_factory=list)

    @classmethod
    def empty(cls, counter_count: int, initial_power_on_hour: int | None = None) -> "DriveStats":
        """Create drive stats with zeroed counters."""
        return cls(drive_days=[0] * counter_count, initial_power_on_hour=initial_power_on_hour)


@dataclass
class ModelStats:
    """Per-model capacity and drive map.

    Attributes:
        capacity_bytes: Largest plausible capacity observed for the model.
        drives: Drive stats keyed by canonical serial number.
    """

    capacity_bytes: int | None = None
    drives: dict[str, DriveStats] = field(default_factory=dict)


@dataclass
class AggregateStore:
    """Model-keyed aggregate plus output schema width.

    Attributes:
        models: Model stats keyed by canonical model name.
        max_failure_width: Longest failure-date list on any drive.
    """

    models: dict[str, ModelStats] = field(default_factory=dict)
    max_failure_width: int = 0

    def model(self, model_name: str) -> ModelStats:
        """Find or create model stats."""
        model_stats = self.models.get(model_name)
        if model_stats is None:
            model_stats = ModelStats()
            self.models[model_name] = model_stats
        return model_stats

    def update_max_failure_width(self, failure_count: int) -> None:
        """Raise the failure width when a drive exceeds it."""
        if failure_count > self.max_failure_width:
            self.max_failure_width = failure_count

    def iter_drives(self) -> Iterator[tuple[str, ModelStats, str, DriveStats]]:
        """Yield ``(model, model_stats, serial, drive_stats)`` in store order."""
        for model_name, model_stats in self.models.items():
            for serial_number, drive_stats in model_stats.drives.items():
                yield model_name, model_stats, serial_number, drive_stats

    @property
    def drive_count(self) -> int:
        """Number of distinct (model, serial) pairs."""
        return sum(len(model_stats.drives) for model_stats in self.models.values())
