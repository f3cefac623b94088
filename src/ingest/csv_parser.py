"""Schema-tolerant CSV reading.

This module turns statement CSV rows into header-keyed raw records.
Columns may appear in any order and header names are case-insensitive.
It performs no type coercion; the normalizer owns field semantics.
Undecodable bytes are replaced rather than failing the whole file.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Protocol, Sequence

from core.errors import TallyParseError
from core.logging_config import get_logger
from core.types import ParsedFile, RawRecord


class CsvParser(Protocol):
    """Protocol for statement CSV parsers."""

    def parse(self, file_path: Path, data_source: str, account_id: str) -> ParsedFile:
        """Read raw records from ``file_path``."""
        ...


class CsvRecordParser:
    """Parser that keys every row by the file's own lowercased header."""

    def __init__(self, logger: Any | None = None, delimiter: str = ",") -> None:
        self._logger = logger or get_logger(__name__)
        self._delimiter = delimiter

    def parse(self, file_path: Path, data_source: str, account_id: str) -> ParsedFile:
        """Parse a CSV file into raw records.

        An empty file yields an empty result rather than an error. Rows
        with fewer fields than the header are skipped and not counted.

        Args:
            file_path: CSV file to read.
            data_source: Source tag, used for log context.
            account_id: Account id, used for log context.

        Returns:
            Parsed raw records and their count.

        Raises:
            TallyParseError: If the file cannot be opened or is malformed.
        """
        self._logger.info(
            "csv_parse_started",
            file_path=str(file_path),
            data_source=data_source,
            account_id=account_id,
        )
        try:
            handle = file_path.open("r", encoding="utf-8-sig", errors="replace", newline="")
        except OSError as error:
            raise TallyParseError(
                f"failed to open file {file_path}: {error}. "
                "Check that the file exists and is readable."
            ) from error
        with handle:
            records = self._read_records(file_path, handle)
        return ParsedFile(records=tuple(records), record_count=len(records))

    def _read_records(self, file_path: Path, handle: Any) -> list[RawRecord]:
        reader = csv.reader(handle, delimiter=self._delimiter)
        try:
            header = next(reader, None)
            if header is None:
                self._logger.info("csv_file_empty", file_path=str(file_path))
                return []
            column_index = build_column_index(header)
            records: list[RawRecord] = []
            for row in reader:
                if len(row) < len(header):
                    self._logger.debug(
                        "csv_row_skipped",
                        file_path=str(file_path),
                        line_number=reader.line_num,
                        reason="fewer fields than header",
                    )
                    continue
                records.append(_build_raw_record(row, column_index))
        except csv.Error as error:
            raise TallyParseError(
                f"failed to read CSV record in file {file_path} "
                f"near line {reader.line_num}: {error}."
            ) from error
        return records


def build_column_index(header: Sequence[str]) -> dict[str, int]:
    """Map lowercased, trimmed header names to their column positions.

    Args:
        header: Raw header tokens.

    Returns:
        Column name to index mapping.
    """
    return {column.strip().lower(): index for index, column in enumerate(header)}


def safe_get(row: Sequence[str], index: int) -> str:
    """Return ``row[index]`` or an empty string when out of range."""
    if 0 <= index < len(row):
        return row[index]
    return ""


def _build_raw_record(row: Sequence[str], column_index: dict[str, int]) -> RawRecord:
    return {column: safe_get(row, index) for column, index in column_index.items()}
