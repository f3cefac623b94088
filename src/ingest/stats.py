"""Per-run ingestion statistics.

This module owns the single mutable accumulator of one ingestion run.
It is created and returned by the orchestrator; nothing else writes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IngestStats:
    """Counts and failure reasons for one ingestion run.

    Attributes:
        total_files: Entries returned by the directory listing.
        processed_files: Files that completed the full pipeline.
        failed_files: Entries recorded as failures.
        failures: Failure reason keyed by entry name.
    """

    total_files: int = 0
    processed_files: int = 0
    failed_files: int = 0
    failures: dict[str, str] = field(default_factory=dict)

    def add_failure(self, filename: str, reason: str) -> None:
        """Record a failed entry and its reason."""
        self.failed_files += 1
        self.failures[filename] = reason

    def increment_processed(self) -> None:
        """Count one fully processed file."""
        self.processed_files += 1

    def to_dict(self) -> dict[str, object]:
        """Serialize stats into a JSON-safe dictionary."""
        return {
            "total_files": self.total_files,
            "processed_files": self.processed_files,
            "failed_files": self.failed_files,
            "failures": dict(self.failures),
        }

    def log(self, logger: Any) -> None:
        """Emit the final stats as one structured event."""
        logger.info("ingest_stats", **self.to_dict())
