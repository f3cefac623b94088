"""Transaction persistence on Apache Lance.

This module upserts normalized transactions keyed by their natural key
and appends one sync log entry per successful batch. Each data source
gets its own collection, stored as a Lance dataset under the data root.
"""

from __future__ import annotations

from dataclasses import astuple, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol, Sequence

import lance
import pyarrow as pa

from core.constants import (
    LANCE_DIR_SUFFIX,
    NATURAL_KEY_COLUMNS,
    SYNC_LOG_COLLECTION,
    TRANSACTIONS_COLLECTION_PREFIX,
)
from core.errors import TallyStoreError
from core.logging_config import get_logger
from core.types import SyncLog, Transaction

TRANSACTION_SCHEMA = pa.schema(
    [
        pa.field("details", pa.string()),
        pa.field("posting_date", pa.string()),
        pa.field("description", pa.string()),
        pa.field("amount", pa.float64()),
        pa.field("category", pa.string()),
        pa.field("type", pa.string()),
        pa.field("balance", pa.float64()),
        pa.field("check_or_slip_num", pa.string()),
        pa.field("data_source", pa.string()),
        pa.field("account_id", pa.string()),
    ]
)
SYNC_LOG_SCHEMA = pa.schema(
    [
        pa.field("collection_name", pa.string()),
        pa.field("sync_timestamp", pa.timestamp("us", tz="UTC")),
        pa.field("records_uploaded", pa.int64()),
    ]
)


class TransactionRepository(Protocol):
    """Protocol for idempotent transaction stores."""

    def bulk_upsert_transactions(self, transactions: Sequence[Transaction]) -> None:
        """Upsert transactions by natural key and append a sync log entry."""
        ...


class LanceTransactionRepository:
    """Lance-backed transaction repository.

    Transactions live in ``transactions_<data_source>`` datasets and sync
    log entries in the append-only ``data_sync`` dataset.
    """

    def __init__(self, data_root: Path, logger: Any | None = None) -> None:
        """Initialize repository storage.

        Args:
            data_root: Directory holding the Lance datasets.
            logger: Optional structured logger.
        """
        self._data_root = data_root
        self._data_root.mkdir(parents=True, exist_ok=True)
        self._logger = logger or get_logger(__name__)

    def bulk_upsert_transactions(self, transactions: Sequence[Transaction]) -> None:
        """Upsert a batch of transactions and record one sync log entry.

        Transactions whose natural key already exists overwrite the stored
        row. Within one batch the last row for a key wins.

        Args:
            transactions: Transactions of a single data source.

        Raises:
            TallyStoreError: If the batch is invalid or a write fails.
        """
        if not transactions:
            return
        collection_name = transactions_collection_name(_single_data_source(transactions))
        table = _transactions_table(_deduplicate_by_natural_key(transactions))
        dataset_uri = self._dataset_uri(collection_name)
        try:
            if self._dataset_exists(collection_name):
                (
                    lance.dataset(dataset_uri)
                    .merge_insert(list(NATURAL_KEY_COLUMNS))
                    .when_matched_update_all()
                    .when_not_matched_insert_all()
                    .execute(table)
                )
            else:
                lance.write_dataset(table, dataset_uri, mode="create")
        except Exception as error:
            raise TallyStoreError(
                f"Failed to upsert {len(transactions)} transactions into "
                f"collection {collection_name}: {error}. "
                "Re-run the ingest; upserts are idempotent."
            ) from error
        self._logger.info(
            "transactions_upserted",
            collection_name=collection_name,
            record_count=len(transactions),
            unique_keys=table.num_rows,
        )
        self._append_sync_log(
            SyncLog(
                collection_name=collection_name,
                sync_timestamp=datetime.now(timezone.utc),
                records_uploaded=len(transactions),
            )
        )

    def load_transactions(self, data_source: str) -> list[Transaction]:
        """Load all stored transactions of one data source.

        Args:
            data_source: Source tag such as ``chase``.

        Returns:
            Stored transactions, empty when the collection does not exist.

        Raises:
            TallyStoreError: If the dataset cannot be read.
        """
        collection_name = transactions_collection_name(data_source)
        rows = self._read_rows(collection_name)
        return [Transaction(**row) for row in rows]

    def load_sync_logs(self) -> list[SyncLog]:
        """Load sync log entries in write order."""
        rows = self._read_rows(SYNC_LOG_COLLECTION)
        return [
            SyncLog(
                collection_name=str(row["collection_name"]),
                sync_timestamp=row["sync_timestamp"],
                records_uploaded=int(row["records_uploaded"]),
            )
            for row in rows
        ]

    def _append_sync_log(self, sync_log: SyncLog) -> None:
        table = pa.Table.from_pylist(
            [
                {
                    "collection_name": sync_log.collection_name,
                    "sync_timestamp": sync_log.sync_timestamp,
                    "records_uploaded": sync_log.records_uploaded,
                }
            ],
            schema=SYNC_LOG_SCHEMA,
        )
        mode = "append" if self._dataset_exists(SYNC_LOG_COLLECTION) else "create"
        try:
            lance.write_dataset(table, self._dataset_uri(SYNC_LOG_COLLECTION), mode=mode)
        except Exception as error:
            raise TallyStoreError(
                f"Failed to append sync log for collection {sync_log.collection_name}: "
                f"{error}. Transactions were stored; re-run to record the sync."
            ) from error

    def _read_rows(self, collection_name: str) -> list[dict[str, Any]]:
        if not self._dataset_exists(collection_name):
            return []
        try:
            return lance.dataset(self._dataset_uri(collection_name)).to_table().to_pylist()
        except Exception as error:
            raise TallyStoreError(
                f"Failed to read collection {collection_name}: {error}. "
                "Validate lance/pyarrow compatibility and the data root."
            ) from error

    def _dataset_uri(self, collection_name: str) -> str:
        return str(self._data_root / f"{collection_name}{LANCE_DIR_SUFFIX}")

    def _dataset_exists(self, collection_name: str) -> bool:
        return Path(self._dataset_uri(collection_name)).exists()


def transactions_collection_name(data_source: str) -> str:
    """Return the collection name holding one data source's transactions."""
    return f"{TRANSACTIONS_COLLECTION_PREFIX}_{data_source}"


def _single_data_source(transactions: Sequence[Transaction]) -> str:
    data_sources = {transaction.data_source for transaction in transactions}
    if len(data_sources) != 1:
        raise TallyStoreError(
            f"Cannot upsert a batch spanning data sources {sorted(data_sources)}. "
            "Upsert each source file separately."
        )
    return data_sources.pop()


def _deduplicate_by_natural_key(transactions: Sequence[Transaction]) -> list[Transaction]:
    latest: dict[tuple[str, ...], Transaction] = {}
    for transaction in transactions:
        latest[transaction.natural_key] = transaction
    return list(latest.values())


def _transactions_table(transactions: Sequence[Transaction]) -> pa.Table:
    columns = [field.name for field in fields(Transaction)]
    rows = [dict(zip(columns, astuple(transaction))) for transaction in transactions]
    return pa.Table.from_pylist(rows, schema=TRANSACTION_SCHEMA)
