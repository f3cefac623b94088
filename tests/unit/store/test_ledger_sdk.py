"""Unit tests for the SDK client."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import TallyConfig
from core.types import IngestOptions
from store.ledger_sdk import TallyClient


def _client(tmp_path: Path, logger) -> TallyClient:
    config = replace(
        TallyConfig.from_env(),
        data_root=tmp_path / "store",
        unprocessed_dir=tmp_path / "unprocessed",
        processed_dir=tmp_path / "processed",
    )
    return TallyClient(config, logger=logger)


def test_client_ingests_synthetic_data(tmp_path: Path, logger) -> None:
    """Generated synthetic files should ingest through the fallback extractor."""
    client = _client(tmp_path, logger)
    client.generate_synthetic_data(5, tmp_path / "unprocessed", seed=7)

    stats = client.ingest()

    assert stats.processed_files == 1
    assert len(client.transactions("synthetic")) == 5


def test_client_ingest_accepts_explicit_options(tmp_path: Path, write_csv, logger) -> None:
    """Explicit options should override configured directories."""
    client = _client(tmp_path, logger)
    write_csv(
        tmp_path / "other",
        "chase1234.csv",
        "Details,Posting Date,Description,Amount\nDEBIT,01/01/2024,Coffee,-4.50\n",
    )
    options = IngestOptions(
        input_dir=tmp_path / "other",
        processed_dir=tmp_path / "done",
        move_processed_files=True,
    )

    stats = client.ingest(options)

    assert stats.processed_files == 1
    assert (tmp_path / "done" / "chase1234.csv").exists()
    assert [entry.records_uploaded for entry in client.sync_history()] == [1]


def test_with_data_root_switches_store(tmp_path: Path, logger) -> None:
    """Cloned clients should point at the new data root."""
    client = _client(tmp_path, logger)

    other = client.with_data_root(str(tmp_path / "elsewhere"))

    assert other.config.data_root == (tmp_path / "elsewhere").resolve()
