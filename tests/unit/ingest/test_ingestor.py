"""Unit tests for per-worker file ingestion."""

from __future__ import annotations

from pathlib import Path

from core.config import AggregationSettings
from ingest.file_discovery import discover_input_files
from ingest.ingestor import ingest_file, run_ingest_worker
from ingest.pipeline import ingest_in_parallel
from ingest.work_queue import WorkQueue
from store.aggregate_store import AggregateStore
from tests.fixture_paths import write_snapshot_csv

SETTINGS = AggregationSettings()


def test_ingest_file_rejects_single_invalid_row(tmp_path: Path) -> None:
    """Month 13 and day 32 rows should be skipped while the file continues."""
    file_path = write_snapshot_csv(
        tmp_path / "day.csv",
        [
            ("2019-05-01", "A", "M", "4000787030016", "0", ""),
            ("2019-13-01", "A", "M", "4000787030016", "0", ""),
            ("2019-05-32", "A", "M", "4000787030016", "0", ""),
            ("2019-05-02", "A", "M", "4000787030016", "0", ""),
        ],
    )
    store = AggregateStore()

    outcome = ingest_file(store, file_path, SETTINGS)

    assert (outcome.rows_folded, outcome.rows_rejected, outcome.error) == (2, 2, None)
    assert sum(store.models["M"].drives["A"].drive_days) == 2


def test_ingest_file_keeps_rows_before_file_failure(tmp_path: Path) -> None:
    """Rows folded before a malformed date should stay in the store."""
    file_path = write_snapshot_csv(
        tmp_path / "day.csv",
        [
            ("2019-05-01", "A", "M", "4000787030016", "0", ""),
            ("not-a-date", "A", "M", "4000787030016", "0", ""),
            ("2019-05-03", "A", "M", "4000787030016", "0", ""),
        ],
    )
    store = AggregateStore()

    outcome = ingest_file(store, file_path, SETTINGS)

    assert outcome.error is not None and outcome.rows_folded == 1
    assert sum(store.models["M"].drives["A"].drive_days) == 1


def test_ingest_file_absorbs_unreadable_file(tmp_path: Path) -> None:
    """A missing file should be reported, not raised."""
    store = AggregateStore()

    outcome = ingest_file(store, tmp_path / "vanished.csv", SETTINGS)

    assert outcome.error is not None and store.models == {}


def test_run_ingest_worker_continues_after_failed_file(tmp_path: Path) -> None:
    """A worker should move on to the next path after a file failure."""
    bad_path = write_snapshot_csv(
        tmp_path / "bad.csv",
        [("2019-05-01",)],
        header=("date",),
    )
    good_path = write_snapshot_csv(
        tmp_path / "good.csv",
        [("2019-05-01", "A", "M", "4000787030016", "1", "10")],
    )
    queue = WorkQueue([bad_path, good_path])

    result = run_ingest_worker(queue, SETTINGS)

    assert (result.report.files_failed, result.report.files_processed) == (1, 1)
    assert result.store.max_failure_width == 1


def test_run_ingest_worker_confines_hostile_tokens_to_their_file(tmp_path: Path) -> None:
    """Odd digits and infinite readings should never escape the file they occur in."""
    superscript_path = write_snapshot_csv(
        tmp_path / "superscript.csv",
        [
            ("2019-05-01", "A", "M", "4000787030016", "0", "10"),
            ("2019-05-0²", "A", "M", "4000787030016", "0", "10"),
        ],
    )
    infinite_path = write_snapshot_csv(
        tmp_path / "infinite.csv",
        [
            ("2019-05-03", "B", "M", "4000787030016", "0", "inf"),
            ("2019-05-03", "C", "M", "4000787030016", "1", "20"),
        ],
    )
    queue = WorkQueue([superscript_path, infinite_path])

    result = run_ingest_worker(queue, SETTINGS)

    assert (result.report.files_failed, result.report.files_processed) == (1, 1)
    assert (result.report.rows_folded, result.report.rows_rejected) == (2, 1)
    assert sorted(result.store.models["M"].drives) == ["A", "C"]


def test_ingest_in_parallel_survives_hostile_date_token(tmp_path: Path) -> None:
    """A bad date token in one file should not abort the parallel run."""
    write_snapshot_csv(
        tmp_path / "bad.csv",
        [("2019-05-0²", "A", "M", "4000787030016", "0", "")],
    )
    write_snapshot_csv(
        tmp_path / "good.csv",
        [("2019-05-02", "B", "M", "4000787030016", "0", "")],
    )

    store, report = ingest_in_parallel(discover_input_files(tmp_path), SETTINGS, 2)

    assert report.files_failed == 1 and list(store.models["M"].drives) == ["B"]
