"""Drive stats CLI entry point.

This module maps ``<input_path> <output_path>`` onto one aggregation run.
Every domain error is reported on stderr with exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Sequence

from core.config import DriveStatsConfig
from core.errors import DriveStatsError, DriveStatsUsageError
from core.types import AggregationRequest, AggregationResult
from ingest.pipeline import run_aggregation


class _UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises usage errors instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise DriveStatsUsageError(f"{message}\n{self.format_usage().strip()}")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = _UsageArgumentParser(
        prog="drivestats",
        description="Aggregate daily drive snapshots into per-drive lifetime statistics",
    )
    parser.add_argument("input_path", help="Snapshot CSV file or directory scanned recursively")
    parser.add_argument("output_path", help="Output table path (.csv or .parquet)")
    parser.add_argument(
        "--workers",
        type=int,
        help="Ingest worker threads (default: DRIVESTATS_WORKERS or CPU count)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the drive stats CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    try:
        args = build_parser().parse_args(argv)
        print(f"Input: {args.input_path}")
        print(f"Output: {args.output_path}")
        request = AggregationRequest(
            input_path=args.input_path,
            output_path=args.output_path,
            worker_count=args.workers,
        )
        result = run_aggregation(request, DriveStatsConfig.from_env())
    except DriveStatsError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    _print_result(result)
    return 0


def _print_result(result: AggregationResult) -> None:
    print(f"Finished: {result.elapsed_seconds:.1f} seconds")
    print(f"files_processed={result.report.files_processed}")
    print(f"files_failed={result.report.files_failed}")
    print(f"rows_folded={result.report.rows_folded}")
    print(f"rows_rejected={result.report.rows_rejected}")
    print(f"models={result.model_count}")
    print(f"drives={result.drive_count}")
    print(f"max_failure_width={result.max_failure_width}")
