"""Unit tests for structured logging setup."""

from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from core.errors import TallyConfigError
from core.logging_config import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


def test_get_logger_emits_structured_events() -> None:
    """Loggers should accept keyword fields."""
    logger = get_logger("tests.logging")

    with capture_logs() as captured:
        logger.info("file_ingested", file="chase1234.csv")

    assert captured[0]["event"] == "file_ingested"
    assert captured[0]["file"] == "chase1234.csv"


def test_configure_logging_filters_below_level() -> None:
    """Events below the configured level should be dropped."""
    configure_logging("warning")
    logger = get_logger("tests.logging")

    with capture_logs() as captured:
        logger.info("quiet")
        logger.warning("loud")

    assert [entry["event"] for entry in captured] == ["loud"]


def test_configure_logging_rejects_unknown_level() -> None:
    """Unsupported level names should raise a config error."""
    with pytest.raises(TallyConfigError):
        configure_logging("chatty")
