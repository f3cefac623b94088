"""Unit tests for the Lance transaction repository."""

from __future__ import annotations

from dataclasses import replace
from datetime import timezone
from pathlib import Path

import pytest

from core.errors import TallyStoreError
from core.types import Transaction
from store.transaction_repository import (
    LanceTransactionRepository,
    transactions_collection_name,
)


def _transaction(**overrides: object) -> Transaction:
    transaction = Transaction(
        details="DEBIT",
        posting_date="01/01/2024",
        description="Coffee",
        amount=-4.50,
        category="",
        type="DEBIT_CARD",
        balance=100.00,
        check_or_slip_num="",
        data_source="chase",
        account_id="1234",
    )
    return replace(transaction, **overrides)


def test_bulk_upsert_persists_transactions(tmp_path: Path, logger) -> None:
    """Upserted transactions should be readable from the store."""
    repository = LanceTransactionRepository(tmp_path, logger)

    repository.bulk_upsert_transactions([_transaction(), _transaction(description="Tea")])

    stored = repository.load_transactions("chase")
    assert sorted(transaction.description for transaction in stored) == ["Coffee", "Tea"]


def test_bulk_upsert_is_idempotent(tmp_path: Path, logger) -> None:
    """Re-upserting equal natural keys should overwrite rather than duplicate."""
    repository = LanceTransactionRepository(tmp_path, logger)
    repository.bulk_upsert_transactions([_transaction()])

    repository.bulk_upsert_transactions([_transaction(balance=55.0)])

    stored = repository.load_transactions("chase")
    assert len(stored) == 1 and stored[0].balance == 55.0


def test_bulk_upsert_collapses_duplicate_keys_within_batch(tmp_path: Path, logger) -> None:
    """The last row for a natural key in one batch should win."""
    repository = LanceTransactionRepository(tmp_path, logger)

    repository.bulk_upsert_transactions([_transaction(amount=-1.0), _transaction(amount=-2.0)])

    stored = repository.load_transactions("chase")
    assert [transaction.amount for transaction in stored] == [-2.0]


def test_bulk_upsert_keeps_accounts_apart(tmp_path: Path, logger) -> None:
    """Different account ids should be different natural keys."""
    repository = LanceTransactionRepository(tmp_path, logger)
    repository.bulk_upsert_transactions([_transaction()])

    repository.bulk_upsert_transactions([_transaction(account_id="9999")])

    assert len(repository.load_transactions("chase")) == 2


def test_bulk_upsert_appends_one_sync_log_per_batch(tmp_path: Path, logger) -> None:
    """Each successful batch should append one sync log with the attempted count."""
    repository = LanceTransactionRepository(tmp_path, logger)
    repository.bulk_upsert_transactions([_transaction(), _transaction()])
    repository.bulk_upsert_transactions([_transaction()])

    sync_logs = repository.load_sync_logs()

    assert [entry.records_uploaded for entry in sync_logs] == [2, 1]
    assert sync_logs[0].collection_name == transactions_collection_name("chase")
    assert sync_logs[0].sync_timestamp.utcoffset() == timezone.utc.utcoffset(None)


def test_bulk_upsert_empty_batch_is_noop(tmp_path: Path, logger) -> None:
    """An empty batch should write neither transactions nor sync logs."""
    repository = LanceTransactionRepository(tmp_path, logger)

    repository.bulk_upsert_transactions([])

    assert repository.load_sync_logs() == []
    assert repository.load_transactions("chase") == []


def test_bulk_upsert_rejects_mixed_data_sources(tmp_path: Path, logger) -> None:
    """A batch spanning data sources should be rejected."""
    repository = LanceTransactionRepository(tmp_path, logger)

    with pytest.raises(TallyStoreError):
        repository.bulk_upsert_transactions(
            [_transaction(), _transaction(data_source="synthetic")]
        )

    assert repository.load_sync_logs() == []
