"""Unit tests for synthetic statement generation."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

import pytest

from core.errors import TallyError
from synthetic.generator import generate_synthetic_transactions, write_synthetic_csv


def test_generate_is_deterministic_for_seed() -> None:
    """Equal seeds should generate equal rows."""
    first = generate_synthetic_transactions(3, seed=11, posting_date=date(2024, 1, 2))
    second = generate_synthetic_transactions(3, seed=11, posting_date=date(2024, 1, 2))

    assert first == second
    assert first[0].posting_date == "01/02/2024"


def test_generate_keeps_values_in_range() -> None:
    """Amounts and balances should stay inside their synthetic bounds."""
    transactions = generate_synthetic_transactions(50, seed=3)

    assert all(0 <= t.amount <= 1000 and 0 <= t.balance <= 10000 for t in transactions)


def test_generate_rejects_negative_rows() -> None:
    """Negative row counts should be rejected."""
    with pytest.raises(TallyError):
        generate_synthetic_transactions(-1)


def test_write_synthetic_csv_writes_recognized_header(tmp_path: Path) -> None:
    """The CSV should use the recognized statement columns."""
    file_path = write_synthetic_csv(4, tmp_path / "synthetic", seed=1)

    with file_path.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))

    assert rows[0][:2] == ["Details", "Posting Date"]
    assert len(rows) == 5
