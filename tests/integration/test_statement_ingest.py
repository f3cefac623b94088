"""Integration tests for end-to-end statement ingestion."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import TallyConfig
from core.types import IngestOptions
from store.ledger_sdk import TallyClient

CHASE_CSV = (
    "Details,Posting Date,Description,Amount,Type,Balance,Check or Slip #\n"
    "DEBIT,01/01/2024,Coffee,-4.50,DEBIT_CARD,100.00,\n"
    "CREDIT,01/02/2024,Payroll,1500.00,ACH_CREDIT,1600.00,\n"
    "DEBIT,01/03/2024,Bad amount,abc,DEBIT_CARD,1600.00,\n"
)


def _client(tmp_path: Path, logger) -> TallyClient:
    config = replace(TallyConfig.from_env(), data_root=tmp_path / "store")
    return TallyClient(config, logger=logger)


def test_reingesting_a_file_does_not_duplicate_transactions(
    tmp_path: Path, write_csv, logger
) -> None:
    """Ingesting the same statement twice should keep one row per natural key."""
    client = _client(tmp_path, logger)
    write_csv(tmp_path / "in", "chase1234_jan.csv", CHASE_CSV)
    options = IngestOptions(input_dir=tmp_path / "in", processed_dir=tmp_path / "done")

    first = client.ingest(options)
    second = client.ingest(options)

    transactions = client.transactions("chase")
    assert first.processed_files == second.processed_files == 1
    assert sorted(t.description for t in transactions) == ["Coffee", "Payroll"]
    assert [entry.records_uploaded for entry in client.sync_history()] == [2, 2]


def test_relocated_file_can_be_reingested_safely(tmp_path: Path, write_csv, logger) -> None:
    """Moving a processed file back and re-running should stay idempotent."""
    client = _client(tmp_path, logger)
    source = write_csv(tmp_path / "in", "chase1234_jan.csv", CHASE_CSV)
    options = IngestOptions(
        input_dir=tmp_path / "in",
        processed_dir=tmp_path / "done",
        move_processed_files=True,
    )
    client.ingest(options)
    (tmp_path / "done" / source.name).rename(source)

    stats = client.ingest(options)

    assert stats.processed_files == 1
    assert len(client.transactions("chase")) == 2
