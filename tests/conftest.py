"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Put ``src`` and the project root on sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolate_drivestats_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear DRIVESTATS_* variables so host settings never leak into tests."""
    for name in (
        "DRIVESTATS_FIRST_YEAR",
        "DRIVESTATS_LAST_YEAR",
        "DRIVESTATS_MIN_CAPACITY_BYTES",
        "DRIVESTATS_MAX_CAPACITY_BYTES",
        "DRIVESTATS_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
