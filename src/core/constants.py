"""Core constants used across Tally modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".tally")
DEFAULT_CSV_DIR = Path("data")
DEFAULT_UNPROCESSED_DIR_NAME = "unprocessed"
DEFAULT_PROCESSED_DIR_NAME = "processed"
DEFAULT_MOVE_PROCESSED_FILES = False
DEFAULT_SOURCE_EXTRACTOR = "fallback"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "info"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
CSV_EXTENSION = ".csv"
PROCESSED_DIR_MODE = 0o750
POSTING_DATE_FORMAT = "%m/%d/%Y"
POSTING_DATE_COLUMNS = ("post date", "posting date")
DETAILS_COLUMN = "details"
DESCRIPTION_COLUMN = "description"
CATEGORY_COLUMN = "category"
AMOUNT_COLUMN = "amount"
TYPE_COLUMN = "type"
BALANCE_COLUMN = "balance"
CHECK_OR_SLIP_COLUMN = "check or slip #"
DEFAULT_BALANCE = 0.0
PATTERN_SOURCE_NAME = "chase"
FALLBACK_SOURCE_KEYWORDS = ("synthetic", "test")
PLACEHOLDER_ACCOUNT_ID = "0000"
TRANSACTIONS_COLLECTION_PREFIX = "transactions"
SYNC_LOG_COLLECTION = "data_sync"
LANCE_DIR_SUFFIX = ".lance"
NATURAL_KEY_COLUMNS = ("details", "posting_date", "description", "data_source", "account_id")
SYNTHETIC_FILE_NAME = "test-synthetic-data.csv"
DEFAULT_SYNTHETIC_DIR = Path("tmp/synthetic")
DEFAULT_SYNTHETIC_ROWS = 100
SYNTHETIC_MAX_AMOUNT = 1000.0
SYNTHETIC_MAX_BALANCE = 10000.0
SYNTHETIC_CSV_HEADER = (
    "Details",
    "Posting Date",
    "Description",
    "Category",
    "Amount",
    "Type",
    "Balance",
    "Check or Slip #",
)
