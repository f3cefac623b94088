"""Unit tests for processed file relocation."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from core.errors import TallyRelocateError
from ingest.relocation import relocate_file


def test_relocate_file_creates_directory_and_moves(tmp_path: Path, write_csv) -> None:
    """Relocation should create the target directory and move by base name."""
    source = write_csv(tmp_path / "unprocessed", "chase1234.csv", "Details\n")
    processed_dir = tmp_path / "processed" / "2024"

    destination = relocate_file(source, processed_dir)

    assert destination == processed_dir / "chase1234.csv"
    assert destination.exists() and not source.exists()


def test_relocate_file_uses_restrictive_permissions(tmp_path: Path, write_csv) -> None:
    """A created processed directory should not be world-accessible."""
    source = write_csv(tmp_path, "chase1234.csv", "Details\n")
    processed_dir = tmp_path / "processed"

    relocate_file(source, processed_dir)

    assert stat.S_IMODE(processed_dir.stat().st_mode) & 0o007 == 0


def test_relocate_file_restricts_created_parent_directories(tmp_path: Path, write_csv) -> None:
    """Every directory created on the way to the target should be restricted."""
    source = write_csv(tmp_path, "chase1234.csv", "Details\n")
    processed_dir = tmp_path / "archive" / "processed" / "2024"

    relocate_file(source, processed_dir)

    for directory in (tmp_path / "archive", tmp_path / "archive" / "processed", processed_dir):
        assert stat.S_IMODE(directory.stat().st_mode) & 0o007 == 0


def test_relocate_file_raises_for_missing_source(tmp_path: Path) -> None:
    """Moving a file that does not exist should raise a relocate error."""
    with pytest.raises(TallyRelocateError):
        relocate_file(tmp_path / "missing.csv", tmp_path / "processed")
