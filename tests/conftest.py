"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import structlog


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def write_csv() -> Callable[[Path, str, str], Path]:
    """Return a helper writing CSV text into a directory."""

    def _write(directory: Path, filename: str, content: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        file_path = directory / filename
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def logger() -> Any:
    """Return a structured logger for injection into pipeline stages."""
    return structlog.get_logger("tests")
