"""Public SDK surface for Tally.

This module provides a stable import path for SDK users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import TallyConfig
from core.types import IngestOptions, SourceInfo, SyncLog, Transaction
from ingest.csv_parser import CsvRecordParser
from ingest.pipeline import CsvIngestSink, ingest_csv_files
from ingest.source_extractor import (
    FallbackSourceExtractor,
    KeywordSourceExtractor,
    PatternSourceExtractor,
    build_source_extractor,
)
from ingest.stats import IngestStats
from store.ledger_sdk import TallyClient
from store.transaction_repository import LanceTransactionRepository

__all__ = [
    "CsvIngestSink",
    "CsvRecordParser",
    "FallbackSourceExtractor",
    "IngestOptions",
    "IngestStats",
    "KeywordSourceExtractor",
    "LanceTransactionRepository",
    "PatternSourceExtractor",
    "SourceInfo",
    "SyncLog",
    "TallyClient",
    "TallyConfig",
    "Transaction",
    "build_source_extractor",
    "ingest_csv_files",
]
