"""Ingest orchestration for statement CSV directories.

This module scans an input directory and drives each entry through
extract, parse, normalize, persist and optional relocate stages.
Failures are isolated per file and recorded in the run statistics;
only an unreadable input directory aborts the run.
"""

from __future__ import annotations

import os
from pathlib import Path
import time
from typing import Any, Callable

from core.constants import CSV_EXTENSION
from core.errors import TallyError, TallyIngestError
from core.logging_config import get_logger
from core.types import IngestOptions
from ingest.csv_parser import CsvParser
from ingest.normalizer import normalize_records
from ingest.relocation import relocate_file
from ingest.source_extractor import SourceExtractor
from ingest.stats import IngestStats
from store.transaction_repository import TransactionRepository

_DEADLINE_EXCEEDED = "deadline exceeded before file was processed"


class CsvIngestSink:
    """Sequential CSV ingestion runner with per-file failure isolation."""

    def __init__(
        self,
        repository: TransactionRepository,
        extractor: SourceExtractor,
        parser: CsvParser,
        logger: Any | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._repository = repository
        self._extractor = extractor
        self._parser = parser
        self._logger = logger or get_logger(__name__)
        self._clock = clock

    def ingest_directory(self, options: IngestOptions) -> IngestStats:
        """Ingest every CSV file of the input directory.

        Args:
            options: Input/processed directories, relocation flag and deadline.

        Returns:
            Statistics of the run.

        Raises:
            TallyIngestError: If the input directory cannot be listed, or the
                deadline already expired before the first file.
        """
        deadline = _build_deadline(self._clock(), options.timeout_seconds)
        self._logger.info("ingest_started", input_dir=str(options.input_dir))
        entries = _list_entries(options.input_dir)
        stats = IngestStats(total_files=len(entries))
        if deadline is not None and self._clock() >= deadline:
            raise TallyIngestError(
                f"Ingest deadline of {options.timeout_seconds}s expired before "
                f"processing {options.input_dir}. Increase TALLY_TIMEOUT_SECONDS."
            )
        for entry in entries:
            if deadline is not None and self._clock() >= deadline:
                stats.add_failure(entry.name, _DEADLINE_EXCEEDED)
                continue
            self._ingest_entry(entry, options, stats)
        self._logger.info(
            "ingest_completed",
            input_dir=str(options.input_dir),
            processed_files=stats.processed_files,
            failed_files=stats.failed_files,
        )
        return stats

    def _ingest_entry(self, entry: os.DirEntry, options: IngestOptions, stats: IngestStats) -> None:
        validation_error = _validate_entry(entry)
        if validation_error:
            self._logger.warning("file_skipped", file=entry.name, reason=validation_error)
            stats.add_failure(entry.name, validation_error)
            return
        try:
            self._ingest_file(Path(entry.path), options)
        except (TallyError, OSError) as error:
            self._logger.error("file_ingest_failed", file=entry.name, error=str(error))
            stats.add_failure(entry.name, str(error))
            return
        stats.increment_processed()

    def _ingest_file(self, file_path: Path, options: IngestOptions) -> None:
        source_info = self._extractor.extract_info(file_path.name)
        parsed = self._parser.parse(file_path, source_info.data_source, source_info.account_id)
        transactions = normalize_records(parsed.records, source_info, self._logger)
        self._repository.bulk_upsert_transactions(transactions)
        self._logger.info(
            "file_ingested",
            file=file_path.name,
            data_source=source_info.data_source,
            account_id=source_info.account_id,
            raw_records=parsed.record_count,
            transactions=len(transactions),
        )
        if options.move_processed_files:
            destination = relocate_file(file_path, options.processed_dir)
            self._logger.info("file_relocated", file=file_path.name, destination=str(destination))


def ingest_csv_files(
    options: IngestOptions,
    repository: TransactionRepository,
    extractor: SourceExtractor,
    parser: CsvParser,
    logger: Any | None = None,
) -> IngestStats:
    """Run one ingestion over ``options.input_dir``.

    Args:
        options: Ingest options.
        repository: Transaction store.
        extractor: Filename source extractor.
        parser: CSV parser.
        logger: Optional structured logger.

    Returns:
        Statistics of the run.

    Raises:
        TallyIngestError: If the input directory cannot be read.
    """
    sink = CsvIngestSink(repository, extractor, parser, logger)
    return sink.ingest_directory(options)


def _list_entries(input_dir: Path) -> list[os.DirEntry]:
    """List directory entries sorted by name.

    Raises:
        TallyIngestError: If the directory is missing or unreadable.
    """
    try:
        with os.scandir(input_dir) as iterator:
            entries = list(iterator)
    except OSError as error:
        raise TallyIngestError(
            f"Failed to read input directory {input_dir}: {error}. "
            "Create it and place your CSV files inside."
        ) from error
    return sorted(entries, key=lambda entry: entry.name)


def _validate_entry(entry: os.DirEntry) -> str | None:
    """Return a rejection reason for ineligible entries, else ``None``."""
    if entry.is_dir():
        return "entry is a directory"
    if not entry.is_file():
        return "entry is not a regular file"
    if not entry.name.lower().endswith(CSV_EXTENSION):
        return f"unsupported file extension, expected {CSV_EXTENSION}"
    return None


def _build_deadline(now: float, timeout_seconds: float | None) -> float | None:
    if timeout_seconds is None:
        return None
    return now + timeout_seconds
