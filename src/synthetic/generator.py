"""Synthetic statement CSV generation.

This module writes random transactions in the recognized statement
schema so the ingest pipeline can be exercised without real exports.
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
import random

from core.constants import (
    PLACEHOLDER_ACCOUNT_ID,
    PROCESSED_DIR_MODE,
    SYNTHETIC_CSV_HEADER,
    SYNTHETIC_FILE_NAME,
    SYNTHETIC_MAX_AMOUNT,
    SYNTHETIC_MAX_BALANCE,
)
from core.errors import TallyError
from core.types import Transaction


def generate_synthetic_transactions(
    rows: int,
    seed: int | None = None,
    posting_date: date | None = None,
) -> list[Transaction]:
    """Generate random synthetic transactions.

    Args:
        rows: Number of transactions to generate.
        seed: Optional seed for deterministic output.
        posting_date: Date stamped on every row, today when omitted.

    Returns:
        Generated transactions.

    Raises:
        TallyError: If ``rows`` is negative.
    """
    if rows < 0:
        raise TallyError(f"Synthetic row count must be non-negative, got {rows}.")
    rng = random.Random(seed)
    date_text = (posting_date or date.today()).strftime("%m/%d/%Y")
    return [
        Transaction(
            details="SALE",
            posting_date=date_text,
            description=f"Synthetic transaction {index}",
            amount=round(rng.random() * SYNTHETIC_MAX_AMOUNT, 2),
            category="synthetic",
            type="DEBIT",
            balance=round(rng.random() * SYNTHETIC_MAX_BALANCE, 2),
            check_or_slip_num="",
            data_source="synthetic",
            account_id=PLACEHOLDER_ACCOUNT_ID,
        )
        for index in range(rows)
    ]


def write_synthetic_csv(rows: int, output_dir: Path, seed: int | None = None) -> Path:
    """Write a synthetic statement CSV into ``output_dir``.

    Args:
        rows: Number of data rows.
        output_dir: Target directory, created when missing.
        seed: Optional seed for deterministic output.

    Returns:
        Path of the written CSV file.

    Raises:
        TallyError: If the directory or file cannot be written.
    """
    transactions = generate_synthetic_transactions(rows, seed)
    file_path = output_dir / SYNTHETIC_FILE_NAME
    try:
        output_dir.mkdir(mode=PROCESSED_DIR_MODE, parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(SYNTHETIC_CSV_HEADER)
            for transaction in transactions:
                writer.writerow(
                    [
                        transaction.details,
                        transaction.posting_date,
                        transaction.description,
                        transaction.category,
                        f"{transaction.amount:.2f}",
                        transaction.type,
                        f"{transaction.balance:.2f}",
                        transaction.check_or_slip_num,
                    ]
                )
    except OSError as error:
        raise TallyError(
            f"Failed to write synthetic data to {file_path}: {error}. "
            "Check write permissions and available disk space."
        ) from error
    return file_path
