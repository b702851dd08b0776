"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path, write_snapshot_csv


def test_cli_writes_output_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """CLI should aggregate a directory and report success."""
    output_path = tmp_path / "stats.csv"

    exit_code = main([str(fixture_path("snapshots")), str(output_path), "--workers", "2"])
    output = capsys.readouterr().out

    assert exit_code == 0 and output_path.exists() and "drives=3" in output


def test_cli_accepts_single_file(tmp_path: Path) -> None:
    """CLI should accept a single CSV file as input."""
    input_path = write_snapshot_csv(
        tmp_path / "day.csv",
        [("2019-05-02", "Z1F0XYZ", "ST4000DM000", "4000787030016", "0", "")],
    )

    exit_code = main([str(input_path), str(tmp_path / "stats.csv")])

    assert exit_code == 0


def test_cli_rejects_unsupported_output_extension(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """CLI should exit 1 with a message for a wrong output extension."""
    exit_code = main([str(fixture_path("snapshots")), str(tmp_path / "stats.json")])
    error_output = capsys.readouterr().err

    assert exit_code == 1 and "Unsupported output file" in error_output


def test_cli_rejects_missing_input(tmp_path: Path) -> None:
    """CLI should exit 1 for a missing input path."""
    exit_code = main([str(tmp_path / "missing"), str(tmp_path / "stats.csv")])

    assert exit_code == 1 and not (tmp_path / "stats.csv").exists()


def test_cli_rejects_missing_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI should treat a bad invocation as a usage error."""
    exit_code = main(["only-one-argument"])

    assert exit_code == 1 and "usage:" in capsys.readouterr().err


def test_cli_rejects_zero_workers(tmp_path: Path) -> None:
    """CLI should reject a non-positive worker override."""
    exit_code = main([str(fixture_path("snapshots")), str(tmp_path / "stats.csv"), "--workers", "0"])

    assert exit_code == 1
