"""Python SDK for transaction ingestion.

This module exposes high-level APIs for ingesting statement directories,
generating synthetic statements and inspecting stored data.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from core.config import TallyConfig
from core.logging_config import get_logger
from core.types import IngestOptions, SyncLog, Transaction
from ingest.csv_parser import CsvRecordParser
from ingest.pipeline import CsvIngestSink
from ingest.source_extractor import SourceExtractor, build_source_extractor
from ingest.stats import IngestStats
from store.transaction_repository import LanceTransactionRepository
from synthetic.generator import write_synthetic_csv


class TallyClient:
    """Primary SDK entry point for ingestion workflows."""

    def __init__(
        self,
        config: TallyConfig | None = None,
        extractor: SourceExtractor | None = None,
        logger: Any | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            extractor: Optional extractor overriding the configured strategy.
            logger: Optional structured logger shared by all stages.
        """
        self._config = config or TallyConfig.from_env()
        self._logger = logger or get_logger(__name__)
        self._extractor = extractor or build_source_extractor(self._config.source_extractor)
        self._repository = LanceTransactionRepository(self._config.data_root, self._logger)

    @property
    def config(self) -> TallyConfig:
        return self._config

    def default_ingest_options(self) -> IngestOptions:
        """Build ingest options from the client configuration."""
        return IngestOptions(
            input_dir=self._config.unprocessed_dir,
            processed_dir=self._config.processed_dir,
            move_processed_files=self._config.move_processed_files,
            timeout_seconds=self._config.timeout_seconds,
        )

    def ingest(self, options: IngestOptions | None = None) -> IngestStats:
        """Ingest a statement directory into the transaction store.

        Args:
            options: Ingest options, configuration defaults when omitted.

        Returns:
            Run statistics.

        Raises:
            TallyIngestError: If the input directory cannot be read.
        """
        sink = CsvIngestSink(
            repository=self._repository,
            extractor=self._extractor,
            parser=CsvRecordParser(self._logger),
            logger=self._logger,
        )
        stats = sink.ingest_directory(options or self.default_ingest_options())
        stats.log(self._logger)
        return stats

    def generate_synthetic_data(self, rows: int, output_dir: Path, seed: int | None = None) -> Path:
        """Write a synthetic statement CSV and return its path."""
        file_path = write_synthetic_csv(rows, output_dir, seed)
        self._logger.info("synthetic_data_generated", file_path=str(file_path), rows=rows)
        return file_path

    def transactions(self, data_source: str) -> list[Transaction]:
        """Load stored transactions of one data source."""
        return self._repository.load_transactions(data_source)

    def sync_history(self) -> list[SyncLog]:
        """Load sync log entries in write order."""
        return self._repository.load_sync_logs()

    def with_data_root(self, data_root: str) -> "TallyClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        updated_config = replace(self._config, data_root=resolved_root)
        return TallyClient(updated_config, self._extractor, self._logger)
