"""Input file discovery.

This module enumerates daily snapshot files under an input path.
Directory walks are lazy so workers can start before the walk ends.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from core.constants import SUPPORTED_INPUT_EXTENSIONS
from core.errors import DriveStatsIOError, DriveStatsUsageError


def discover_input_files(input_path: str | Path) -> Iterator[Path]:
    """Yield supported input files for a file or directory path.

    Args:
        input_path: Single CSV file, or directory scanned recursively.

    Returns:
        Lazy iterator over matching paths in traversal order.

    Raises:
        DriveStatsIOError: If the path does not exist.
        DriveStatsUsageError: If a single file has an unsupported extension.
    """
    source_path = Path(input_path).expanduser()
    if not source_path.exists():
        raise DriveStatsIOError(
            f"Failed to read input at {source_path}: path does not exist. "
            "Provide an existing CSV file or directory."
        )
    if source_path.is_file():
        if not is_supported_input(source_path):
            raise DriveStatsUsageError(
                f"Unsupported input file {source_path}. "
                f"Supported extensions: {SUPPORTED_INPUT_EXTENSIONS}."
            )
        return iter((source_path,))
    return _walk_directory(source_path)


def is_supported_input(file_path: Path) -> bool:
    """Return whether a file extension is a supported input format."""
    return file_path.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS


def _walk_directory(directory: Path) -> Iterator[Path]:
    """Recursively yield supported files below a directory."""
    for root, _dirs, file_names in os.walk(directory):
        for file_name in file_names:
            file_path = Path(root) / file_name
            if is_supported_input(file_path) and file_path.is_file():
                yield file_path
