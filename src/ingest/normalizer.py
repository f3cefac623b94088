"""Raw record normalization.

This module converts header-keyed raw records into typed transactions.
Records without a usable posting date or amount are dropped; a bad
balance degrades to zero. Losing every record of a file is an error.
"""

from __future__ import annotations

from datetime import datetime
import re
from typing import Any, Iterable

from core.constants import (
    AMOUNT_COLUMN,
    BALANCE_COLUMN,
    CATEGORY_COLUMN,
    CHECK_OR_SLIP_COLUMN,
    DEFAULT_BALANCE,
    DESCRIPTION_COLUMN,
    DETAILS_COLUMN,
    POSTING_DATE_COLUMNS,
    POSTING_DATE_FORMAT,
    TYPE_COLUMN,
)
from core.errors import TallyNormalizeError
from core.types import RawRecord, SourceInfo, Transaction

_POSTING_DATE_SHAPE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def normalize_records(
    raw_records: Iterable[RawRecord],
    source_info: SourceInfo,
    logger: Any,
) -> list[Transaction]:
    """Normalize raw records into transactions.

    Args:
        raw_records: Header-keyed records from the CSV parser.
        source_info: Source tag and account id of the file.
        logger: Structured logger for dropped-record events.

    Returns:
        Transactions in input order.

    Raises:
        TallyNormalizeError: If records were given but none survived.
    """
    input_count = 0
    transactions: list[Transaction] = []
    for raw_record in raw_records:
        input_count += 1
        transaction = normalize_record(raw_record, source_info, logger)
        if transaction is not None:
            transactions.append(transaction)
    if input_count and not transactions:
        raise TallyNormalizeError(
            f"All {input_count} records were rejected during normalization for "
            f"data source '{source_info.data_source}' account '{source_info.account_id}'. "
            "Check the posting date and amount columns."
        )
    return transactions


def normalize_record(
    raw_record: RawRecord,
    source_info: SourceInfo,
    logger: Any,
) -> Transaction | None:
    """Normalize one raw record, returning ``None`` when it must be dropped."""
    posting_date = _first_non_empty(raw_record, POSTING_DATE_COLUMNS)
    if not posting_date:
        logger.debug("record_dropped", reason="missing posting date")
        return None
    if not is_valid_posting_date(posting_date):
        logger.debug("record_dropped", reason="invalid posting date", value=posting_date)
        return None
    amount = parse_float(raw_record.get(AMOUNT_COLUMN, ""))
    if amount is None:
        logger.debug(
            "record_dropped",
            reason="invalid amount",
            value=raw_record.get(AMOUNT_COLUMN, ""),
        )
        return None
    return Transaction(
        details=raw_record.get(DETAILS_COLUMN, ""),
        posting_date=posting_date,
        description=raw_record.get(DESCRIPTION_COLUMN, ""),
        amount=amount,
        category=raw_record.get(CATEGORY_COLUMN, ""),
        type=raw_record.get(TYPE_COLUMN, ""),
        balance=_parse_balance(raw_record, logger),
        check_or_slip_num=raw_record.get(CHECK_OR_SLIP_COLUMN, ""),
        data_source=source_info.data_source,
        account_id=source_info.account_id,
    )


def is_valid_posting_date(value: str) -> bool:
    """Return whether ``value`` is a real calendar date in ``MM/DD/YYYY`` form."""
    if not _POSTING_DATE_SHAPE.match(value):
        return False
    try:
        datetime.strptime(value, POSTING_DATE_FORMAT)
    except ValueError:
        return False
    return True


def parse_float(value: str) -> float | None:
    """Parse a float, returning ``None`` for empty or invalid text."""
    if not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_balance(raw_record: RawRecord, logger: Any) -> float:
    raw_balance = raw_record.get(BALANCE_COLUMN, "")
    if not raw_balance:
        return DEFAULT_BALANCE
    balance = parse_float(raw_balance)
    if balance is None:
        # Balance is informational; keep the row.
        logger.debug("balance_defaulted", value=raw_balance, default=DEFAULT_BALANCE)
        return DEFAULT_BALANCE
    return balance


def _first_non_empty(raw_record: RawRecord, columns: Iterable[str]) -> str:
    for column in columns:
        value = raw_record.get(column, "")
        if value:
            return value
    return ""
