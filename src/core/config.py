"""Runtime configuration model for Tally.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CSV_DIR,
    DEFAULT_DATA_ROOT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MOVE_PROCESSED_FILES,
    DEFAULT_PROCESSED_DIR_NAME,
    DEFAULT_SOURCE_EXTRACTOR,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_UNPROCESSED_DIR_NAME,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import TallyConfigError

_TRUE_VALUES = ("1", "t", "true", "y", "yes", "on")
_FALSE_VALUES = ("0", "f", "false", "n", "no", "off")


@dataclass(frozen=True)
class TallyConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the transaction store.
        unprocessed_dir: Directory scanned for incoming CSV files.
        processed_dir: Directory that receives files after ingestion.
        move_processed_files: Whether ingested files are relocated.
        source_extractor: Filename extractor strategy name.
        timeout_seconds: Deadline for one ingestion run.
        log_level: Minimum structured log level.
    """

    data_root: Path
    unprocessed_dir: Path
    processed_dir: Path
    move_processed_files: bool
    source_extractor: str
    timeout_seconds: float
    log_level: str

    @classmethod
    def from_env(cls) -> "TallyConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TallyConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("TALLY_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        csv_dir = Path(os.getenv("TALLY_CSV_DIR", str(DEFAULT_CSV_DIR))).expanduser()
        unprocessed_name = os.getenv("TALLY_UNPROCESSED_DIR") or DEFAULT_UNPROCESSED_DIR_NAME
        processed_name = os.getenv("TALLY_PROCESSED_DIR") or DEFAULT_PROCESSED_DIR_NAME
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            unprocessed_dir=csv_dir / unprocessed_name,
            processed_dir=csv_dir / processed_name,
            move_processed_files=_parse_bool(
                "TALLY_MOVE_PROCESSED_FILES",
                os.getenv("TALLY_MOVE_PROCESSED_FILES"),
                DEFAULT_MOVE_PROCESSED_FILES,
            ),
            source_extractor=os.getenv("TALLY_SOURCE_EXTRACTOR", DEFAULT_SOURCE_EXTRACTOR),
            timeout_seconds=_parse_timeout(
                os.getenv("TALLY_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
            ),
            log_level=_parse_log_level(os.getenv("TALLY_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _parse_bool(name: str, raw_value: str | None, default: bool) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Environment variable name for error context.
        raw_value: Raw string from environment, if set.
        default: Value used when the variable is unset or blank.

    Returns:
        Parsed boolean.

    Raises:
        TallyConfigError: If value is not a recognized boolean.
    """
    if raw_value is None or not raw_value.strip():
        return default
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise TallyConfigError(
        f"Invalid {name} value: expected a boolean, got '{raw_value}'. "
        f"Use one of {_TRUE_VALUES + _FALSE_VALUES}."
    )


def _parse_timeout(raw_value: str) -> float:
    """Parse the run timeout environment value.

    Raises:
        TallyConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise TallyConfigError(
            "Invalid TALLY_TIMEOUT_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set TALLY_TIMEOUT_SECONDS to a positive number of seconds."
        ) from error
    if timeout <= 0:
        raise TallyConfigError(
            f"Invalid TALLY_TIMEOUT_SECONDS value: expected a positive number, got {timeout}."
        )
    return timeout


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        raise TallyConfigError(
            f"Invalid TALLY_LOG_LEVEL value: '{raw_value}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
