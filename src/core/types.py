"""Shared typed models.

This module defines immutable data models used by the extractor,
parser, normalizer, repository and orchestration layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from core.constants import DEFAULT_TIMEOUT_SECONDS

RawRecord = dict[str, str]


@dataclass(frozen=True)
class SourceInfo:
    """Data source tag and account id inferred from a filename.

    Attributes:
        data_source: Source tag such as ``chase``.
        account_id: Account identifier, four digits.
    """

    data_source: str
    account_id: str


@dataclass(frozen=True)
class Transaction:
    """Canonical transaction record.

    Attributes:
        details: Transaction detail code, e.g. ``DEBIT``.
        posting_date: Posting date in ``MM/DD/YYYY`` form.
        description: Free-text description.
        amount: Signed transaction amount.
        category: Optional category label.
        type: Transaction type label.
        balance: Running balance, ``0.0`` when unknown.
        check_or_slip_num: Check or slip number.
        data_source: Source tag from the filename.
        account_id: Account identifier from the filename.
    """

    details: str
    posting_date: str
    description: str
    amount: float
    category: str
    type: str
    balance: float
    check_or_slip_num: str
    data_source: str
    account_id: str

    @property
    def natural_key(self) -> tuple[str, str, str, str, str]:
        """Fields that identify one logical transaction for upserts."""
        return (
            self.details,
            self.posting_date,
            self.description,
            self.data_source,
            self.account_id,
        )


@dataclass(frozen=True)
class SyncLog:
    """Append-only audit entry for one ingested file.

    Attributes:
        collection_name: Collection that received the upsert.
        sync_timestamp: UTC time of the write.
        records_uploaded: Number of transactions attempted.
    """

    collection_name: str
    sync_timestamp: datetime
    records_uploaded: int


@dataclass(frozen=True)
class ParsedFile:
    """Header-keyed rows read from one CSV file.

    Attributes:
        records: Raw records in file order.
        record_count: Number of kept data rows.
    """

    records: tuple[RawRecord, ...]
    record_count: int


@dataclass(frozen=True)
class IngestOptions:
    """Ingest command options.

    Attributes:
        input_dir: Directory scanned for CSV files.
        processed_dir: Destination for relocated files.
        move_processed_files: Relocate files after successful persistence.
        timeout_seconds: Optional run deadline, checked between files.
    """

    input_dir: Path
    processed_dir: Path
    move_processed_files: bool = False
    timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS
