"""Integration tests for the parallel aggregation workflow."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

import pytest

from core.config import AggregationSettings, DriveStatsConfig
from core.types import AggregationRequest
from ingest.file_discovery import discover_input_files
from ingest.pipeline import ingest_in_parallel, run_aggregation
from tests.fixture_paths import fixture_path, write_snapshot_csv

SETTINGS = AggregationSettings()


@pytest.mark.parametrize("worker_count", [1, 2, 8])
def test_ingest_in_parallel_is_independent_of_worker_count(worker_count: int) -> None:
    """Counters and failures should not depend on the number of workers."""
    store, report = ingest_in_parallel(
        discover_input_files(fixture_path("snapshots")), SETTINGS, worker_count
    )
    seagate = store.models["ST8000DM002"].drives["ZA10JDYK"]
    hgst = store.models["HGST HMS5C4040BLE640"].drives["PL1331LAHD1T5H"]

    assert (report.files_processed, report.files_failed) == (3, 1)
    assert (report.rows_folded, report.rows_rejected) == (9, 1)
    assert seagate.drive_days[SETTINGS.month_index(2019, 5, 1)] == 2
    assert seagate.drive_days[SETTINGS.month_index(2019, 6, 1)] == 1
    assert seagate.failure_dates == [date(2019, 6, 1)]
    assert hgst.drive_days[SETTINGS.month_index(2019, 6, 1)] == 2
    assert store.models["HGST HMS5C4040BLE640"].capacity_bytes == 4000787030016
    assert store.max_failure_width == 1


def test_ingest_in_parallel_merges_failures_from_many_files(tmp_path: Path) -> None:
    """Failures spread over files should end up sorted after reduction."""
    failure_days = ["2020-01-10", "2020-01-05", "2021-07-04", "2019-02-28"]
    for index, failure_day in enumerate(failure_days):
        write_snapshot_csv(
            tmp_path / f"part-{index}.csv",
            [(failure_day, "Z1F0XYZ", "ST4000DM000", "4000787030016", "1", str(index))],
        )

    store, _report = ingest_in_parallel(discover_input_files(tmp_path), SETTINGS, 4)
    failures = store.models["ST4000DM000"].drives["Z1F0XYZ"].failure_dates

    assert failures == sorted(date.fromisoformat(day) for day in failure_days)
    assert store.max_failure_width == 4


def test_run_aggregation_writes_expected_table(tmp_path: Path) -> None:
    """End-to-end run should emit one row per drive with monthly columns."""
    output_path = tmp_path / "stats.csv"
    config = DriveStatsConfig(settings=SETTINGS, worker_count=3)
    request = AggregationRequest(
        input_path=str(fixture_path("snapshots")), output_path=str(output_path)
    )

    result = run_aggregation(request, config)
    with output_path.open(encoding="utf-8", newline="") as handle:
        rows = {row["serial_number"]: row for row in csv.DictReader(handle)}

    assert (result.model_count, result.drive_count, result.max_failure_width) == (3, 3, 1)
    assert rows["Z1F0XYZ"]["model"] == "ST4000DM000"
    assert rows["Z1F0XYZ"]["failure_1"] == "2019-05-02"
    assert rows["Z1F0XYZ"]["2019-05"] == "2"
    assert rows["Z1F0XYZ"]["2019-06"] == ""
    assert rows["PL1331LAHD1T5H"]["initial_power_on_hour"] in {"18012", "18036", "18756", "18780"}
