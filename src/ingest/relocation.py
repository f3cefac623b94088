"""Post-ingest file relocation.

This module moves a successfully persisted CSV into the processed
directory. A failed move leaves the file in place; re-ingesting it
upserts the same natural keys again, so retries are safe.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.constants import PROCESSED_DIR_MODE
from core.errors import TallyRelocateError


def relocate_file(file_path: Path, processed_dir: Path) -> Path:
    """Move ``file_path`` into ``processed_dir`` under its base name.

    Args:
        file_path: File that finished ingestion.
        processed_dir: Destination directory, created when missing.

    Returns:
        New location of the file.

    Raises:
        TallyRelocateError: If the directory cannot be created or the move fails.
    """
    try:
        _make_directories(processed_dir)
    except OSError as error:
        raise TallyRelocateError(
            f"Failed to create processed directory {processed_dir}: {error}. "
            "Check write permissions on the parent directory."
        ) from error
    destination = processed_dir / file_path.name
    try:
        os.rename(file_path, destination)
    except OSError as error:
        raise TallyRelocateError(
            f"Failed to move {file_path} to {destination}: {error}. "
            "The file stays in place and can be re-ingested safely."
        ) from error
    return destination


def _make_directories(directory: Path) -> None:
    """Create ``directory`` and every missing parent with the processed mode."""
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent
    for path in reversed(missing):
        path.mkdir(mode=PROCESSED_DIR_MODE, exist_ok=True)
