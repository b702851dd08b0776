"""Aggregation orchestration.

This module coordinates file discovery, parallel ingest into
thread-local stores, sequential reduction, and table export.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import time
from pathlib import Path
from typing import Iterable

from core.config import AggregationSettings, DriveStatsConfig, validate_worker_count
from core.logging_config import get_logger
from core.types import AggregationRequest, AggregationResult, IngestReport
from ingest.file_discovery import discover_input_files
from ingest.ingestor import WorkerResult, run_ingest_worker
from ingest.work_queue import WorkQueue
from store.aggregate_store import AggregateStore
from store.reducer import reduce_stores
from store.table_export import validate_output_path, write_stats_table

_LOGGER = get_logger(__name__)


class AggregationPipelineRunner:
    """Runner for one discover -> ingest -> reduce -> export pass."""

    def __init__(self, request: AggregationRequest, config: DriveStatsConfig) -> None:
        self._request = request
        self._settings = config.settings
        worker_count = request.worker_count
        if worker_count is None:
            worker_count = config.worker_count
        self._worker_count = validate_worker_count(worker_count)

    def run(self) -> AggregationResult:
        """Execute the pipeline and return a run summary.

        Raises:
            DriveStatsUsageError: If the output extension is unsupported.
            DriveStatsIOError: If input is missing or output is unwritable.
        """
        started_at = time.monotonic()
        output_path = validate_output_path(self._request.output_path)
        input_files = discover_input_files(self._request.input_path)
        store, report = ingest_in_parallel(input_files, self._settings, self._worker_count)
        write_stats_table(store, output_path, self._settings)
        result = AggregationResult(
            output_path=str(output_path),
            report=report,
            model_count=len(store.models),
            drive_count=store.drive_count,
            max_failure_width=store.max_failure_width,
            elapsed_seconds=time.monotonic() - started_at,
        )
        _log_aggregation_completion(self._request, result)
        return result


def run_aggregation(request: AggregationRequest, config: DriveStatsConfig) -> AggregationResult:
    """Run a full aggregation for one request."""
    return AggregationPipelineRunner(request, config).run()


def ingest_in_parallel(
    input_files: Iterable[Path],
    settings: AggregationSettings,
    worker_count: int,
) -> tuple[AggregateStore, IngestReport]:
    """Ingest files on a thread pool and reduce the per-worker stores.

    Args:
        input_files: Lazy sequence of input paths.
        settings: Year window and capacity bounds.
        worker_count: Number of worker threads.

    Returns:
        Final reduced store and combined ingest counters.
    """
    queue = WorkQueue(input_files)
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="ingest") as executor:
        futures = [
            executor.submit(run_ingest_worker, queue, settings) for _ in range(worker_count)
        ]
        worker_results: list[WorkerResult] = [future.result() for future in futures]
    report = IngestReport()
    for worker_result in worker_results:
        report = report.combined_with(worker_result.report)
    _LOGGER.info(
        "ingest_workers_completed",
        worker_count=worker_count,
        files_dispensed=queue.dispensed_count,
        files_failed=report.files_failed,
        rows_folded=report.rows_folded,
        rows_rejected=report.rows_rejected,
    )
    store = reduce_stores(worker_result.store for worker_result in worker_results)
    return store, report


def _log_aggregation_completion(request: AggregationRequest, result: AggregationResult) -> None:
    _LOGGER.info(
        "aggregation_completed",
        input_path=request.input_path,
        output_path=result.output_path,
        model_count=result.model_count,
        drive_count=result.drive_count,
        max_failure_width=result.max_failure_width,
        elapsed_seconds=round(result.elapsed_seconds, 3),
    )
