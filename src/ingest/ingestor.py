"""Per-worker file ingestion.

Each worker drains the shared work queue and folds every record into
its own private aggregate store. Row-level rejections skip the row;
file-level failures skip the remainder of the file.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path

from core.config import AggregationSettings
from core.errors import DriveStatsIngestError, InvalidRecordError
from core.logging_config import get_logger
from core.types import IngestReport
from ingest.record_fold import fold_record
from ingest.record_parser import read_drive_records
from ingest.work_queue import WorkQueue
from store.aggregate_store import AggregateStore

_LOGGER = get_logger(__name__)


@dataclass
class WorkerResult:
    """Store and counters produced by one ingest worker."""

    store: AggregateStore = field(default_factory=AggregateStore)
    report: IngestReport = field(default_factory=IngestReport)


@dataclass(frozen=True)
class FileIngestOutcome:
    """Outcome of ingesting one file.

    Attributes:
        rows_folded: Rows folded before the file finished or failed.
        rows_rejected: Rows rejected by the fold rule.
        error: File-level error message, if the file was abandoned.
    """

    rows_folded: int
    rows_rejected: int
    error: str | None = None


def run_ingest_worker(queue: WorkQueue, settings: AggregationSettings) -> WorkerResult:
    """Drain the queue into a private store.

    Args:
        queue: Shared path dispenser.
        settings: Year window and capacity bounds.

    Returns:
        This worker's store and counters.
    """
    result = WorkerResult()
    while True:
        file_path = queue.next_path()
        if file_path is None:
            return result
        outcome = ingest_file(result.store, file_path, settings)
        result.report = result.report.combined_with(_outcome_report(outcome))


def ingest_file(
    store: AggregateStore,
    file_path: Path,
    settings: AggregationSettings,
) -> FileIngestOutcome:
    """Fold every record of one file into a store.

    Rows folded before a file-level failure stay in the store.

    Args:
        store: Worker-owned store to update.
        file_path: Input CSV path.
        settings: Year window and capacity bounds.

    Returns:
        Row counters and the file-level error, if any.
    """
    rows_folded = 0
    rows_rejected = 0
    try:
        for record in read_drive_records(file_path):
            try:
                fold_record(store, record, settings)
            except InvalidRecordError as error:
                rows_rejected += 1
                _LOGGER.warning(
                    "drive_record_rejected",
                    path=str(file_path),
                    serial_number=record.serial_number.strip(),
                    reason=str(error),
                )
                continue
            rows_folded += 1
    except (DriveStatsIngestError, OSError, csv.Error, ValueError) as error:
        _LOGGER.error(
            "input_file_failed",
            path=str(file_path),
            rows_folded=rows_folded,
            error_type=type(error).__name__,
            reason=str(error),
        )
        return FileIngestOutcome(rows_folded, rows_rejected, error=str(error))
    return FileIngestOutcome(rows_folded, rows_rejected)


def _outcome_report(outcome: FileIngestOutcome) -> IngestReport:
    failed = outcome.error is not None
    return IngestReport(
        files_processed=0 if failed else 1,
        files_failed=1 if failed else 0,
        rows_folded=outcome.rows_folded,
        rows_rejected=outcome.rows_rejected,
    )
