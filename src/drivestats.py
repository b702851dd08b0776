"""Public SDK surface for drive stats aggregation.

This module provides a stable import path for library users.
It re-exports the aggregation entry points and typed models.
"""

from __future__ import annotations

from core.config import AggregationSettings, DriveStatsConfig
from core.types import AggregationRequest, AggregationResult, DriveRecord, IngestReport
from ingest.file_discovery import discover_input_files
from ingest.pipeline import ingest_in_parallel, run_aggregation
from ingest.record_fold import fold_record
from store.aggregate_store import AggregateStore, DriveStats, ModelStats
from store.reducer import merge_store, reduce_stores
from store.table_export import write_stats_table

__all__ = [
    "AggregateStore",
    "AggregationRequest",
    "AggregationResult",
    "AggregationSettings",
    "DriveRecord",
    "DriveStats",
    "DriveStatsConfig",
    "IngestReport",
    "ModelStats",
    "discover_input_files",
    "fold_record",
    "ingest_in_parallel",
    "merge_store",
    "reduce_stores",
    "run_aggregation",
    "write_stats_table",
]
