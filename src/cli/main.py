"""Tally CLI entry points.
This module exposes commands for ingestion, synthetic data and history.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import TallyConfig
from core.constants import DEFAULT_SYNTHETIC_DIR, DEFAULT_SYNTHETIC_ROWS, SUPPORTED_LOG_LEVELS
from core.errors import TallyError
from core.logging_config import configure_logging, get_logger
from ingest.source_extractor import supported_source_extractors
from store.ledger_sdk import TallyClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tally", description="Tally statement ingestion CLI")
    parser.add_argument("--data-root", help="Override TALLY_DATA_ROOT for this command")
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override TALLY_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_synthetic_command(subparsers)
    _add_history_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tally CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger("tally.cli")
    try:
        config = _build_config(args)
        configure_logging(config.log_level)
        client = TallyClient(config, extractor=None, logger=logger)
        if args.command == "ingest":
            return _run_ingest_command(client, args)
        if args.command == "generate-synthetic-data":
            return _run_synthetic_command(client, args)
        if args.command == "history":
            return _run_history_command(client)
    except TallyError as error:
        logger.error("command_failed", command=args.command, error=str(error))
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> TallyConfig:
    """Build config with optional command-line overrides."""
    config = TallyConfig.from_env()
    if args.data_root:
        config = replace(config, data_root=Path(args.data_root).expanduser().resolve())
    if args.log_level:
        config = replace(config, log_level=args.log_level)
    if args.command == "ingest":
        config = _apply_ingest_overrides(config, args)
    return config


def _apply_ingest_overrides(config: TallyConfig, args: argparse.Namespace) -> TallyConfig:
    if args.input_dir:
        config = replace(config, unprocessed_dir=Path(args.input_dir).expanduser())
    if args.processed_dir:
        config = replace(config, processed_dir=Path(args.processed_dir).expanduser())
    if args.move_processed_files:
        config = replace(config, move_processed_files=True)
    if args.extractor:
        config = replace(config, source_extractor=args.extractor)
    if args.timeout_seconds is not None:
        config = replace(config, timeout_seconds=args.timeout_seconds)
    return config


def _run_ingest_command(client: TallyClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    stats = client.ingest()
    print(json.dumps(stats.to_dict(), indent=2, sort_keys=True))
    return 0


def _run_synthetic_command(client: TallyClient, args: argparse.Namespace) -> int:
    """Handle generate-synthetic-data command."""
    file_path = client.generate_synthetic_data(args.rows, Path(args.dir), seed=args.seed)
    print(file_path)
    return 0


def _run_history_command(client: TallyClient) -> int:
    """Handle history command."""
    for sync_log in client.sync_history():
        print(
            f"{sync_log.sync_timestamp.isoformat()}\t"
            f"{sync_log.collection_name}\t"
            f"{sync_log.records_uploaded}"
        )
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest statement CSV files from a directory")
    parser.add_argument("--input-dir", help="Directory holding unprocessed CSV files")
    parser.add_argument("--processed-dir", help="Directory receiving processed files")
    parser.add_argument(
        "--move-processed-files",
        action="store_true",
        help="Move files into the processed directory after persistence",
    )
    parser.add_argument(
        "--extractor",
        choices=supported_source_extractors(),
        help="Filename source extractor strategy",
    )
    parser.add_argument("--timeout-seconds", type=float, help="Run deadline in seconds")


def _add_synthetic_command(subparsers: Any) -> None:
    """Register generate-synthetic-data subcommand."""
    parser = subparsers.add_parser(
        "generate-synthetic-data",
        help="Write a synthetic statement CSV",
    )
    parser.add_argument(
        "--rows", type=int, default=DEFAULT_SYNTHETIC_ROWS, help="Number of rows to generate"
    )
    parser.add_argument(
        "--dir", default=str(DEFAULT_SYNTHETIC_DIR), help="Directory to write synthetic data to"
    )
    parser.add_argument("--seed", type=int, help="Optional random seed")


def _add_history_command(subparsers: Any) -> None:
    """Register history subcommand."""
    subparsers.add_parser("history", help="List sync log entries")
