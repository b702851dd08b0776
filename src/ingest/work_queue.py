"""Thread-safe input path dispenser.

Workers claim discovered paths one at a time; each path is handed
to exactly one caller and never re-delivered.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Iterator

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class WorkQueue:
    """Lock-guarded wrapper around a lazy path sequence."""

    def __init__(self, paths: Iterable[Path]) -> None:
        self._paths: Iterator[Path] = iter(paths)
        self._lock = threading.Lock()
        self._exhausted = False
        self._dispensed_count = 0

    def next_path(self) -> Path | None:
        """Return the next undelivered path, or ``None`` once exhausted."""
        with self._lock:
            if self._exhausted:
                return None
            file_path = next(self._paths, None)
            if file_path is None:
                self._exhausted = True
                return None
            self._dispensed_count += 1
        _LOGGER.debug("input_file_dispensed", path=str(file_path))
        return file_path

    @property
    def dispensed_count(self) -> int:
        """Number of paths handed out so far."""
        with self._lock:
            return self._dispensed_count
