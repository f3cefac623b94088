"""Filename-based source identification.

This module infers the data source tag and account id of a statement
export from its filename. Strategies are chosen by the caller.
"""

from __future__ import annotations

import re
from typing import Protocol, Sequence

from core.constants import (
    FALLBACK_SOURCE_KEYWORDS,
    PATTERN_SOURCE_NAME,
    PLACEHOLDER_ACCOUNT_ID,
)
from core.errors import TallyConfigError, TallySourceError
from core.types import SourceInfo


class SourceExtractor(Protocol):
    """Protocol for filename source extractors."""

    def extract_info(self, filename: str) -> SourceInfo:
        """Return source info for ``filename`` or raise TallySourceError."""
        ...


class PatternSourceExtractor:
    """Match a literal source prefix followed by four account digits."""

    def __init__(self, data_source: str = PATTERN_SOURCE_NAME) -> None:
        self._data_source = data_source.lower()
        self._pattern = re.compile(rf"{re.escape(self._data_source)}(\d{{4}})")

    def extract_info(self, filename: str) -> SourceInfo:
        """Extract source info from a filename such as ``chase1234_jan.csv``.

        Args:
            filename: Base name of the candidate file.

        Returns:
            Source info with the literal prefix and the four account digits.

        Raises:
            TallySourceError: If the filename does not contain the pattern.
        """
        match = self._pattern.search(filename.lower())
        if match is None:
            raise _unable_to_extract(filename)
        return SourceInfo(data_source=self._data_source, account_id=match.group(1))


class KeywordSourceExtractor:
    """Match well-known keywords and assign a placeholder account id."""

    def __init__(self, keywords: Sequence[str] = FALLBACK_SOURCE_KEYWORDS) -> None:
        self._keywords = tuple(keyword.lower() for keyword in keywords)

    def extract_info(self, filename: str) -> SourceInfo:
        """Extract source info from the first keyword found in ``filename``.

        Raises:
            TallySourceError: If no keyword occurs in the filename.
        """
        lowered = filename.lower()
        for keyword in self._keywords:
            if keyword in lowered:
                return SourceInfo(data_source=keyword, account_id=PLACEHOLDER_ACCOUNT_ID)
        raise _unable_to_extract(filename)


class FallbackSourceExtractor:
    """Try several extractors in order and return the first match."""

    def __init__(self, extractors: Sequence[SourceExtractor]) -> None:
        self._extractors = tuple(extractors)

    def extract_info(self, filename: str) -> SourceInfo:
        for extractor in self._extractors:
            try:
                return extractor.extract_info(filename)
            except TallySourceError:
                continue
        raise _unable_to_extract(filename)


def build_source_extractor(strategy: str) -> SourceExtractor:
    """Build an extractor from a configured strategy name.

    Args:
        strategy: One of ``pattern``, ``keyword`` or ``fallback``.

    Returns:
        Extractor implementing the strategy.

    Raises:
        TallyConfigError: If strategy is unknown.
    """
    normalized = strategy.strip().lower()
    if normalized == "pattern":
        return PatternSourceExtractor()
    if normalized == "keyword":
        return KeywordSourceExtractor()
    if normalized == "fallback":
        return FallbackSourceExtractor([PatternSourceExtractor(), KeywordSourceExtractor()])
    raise TallyConfigError(
        f"Unsupported source extractor '{strategy}'. "
        f"Supported extractors: {', '.join(supported_source_extractors())}."
    )


def supported_source_extractors() -> tuple[str, ...]:
    """Return supported extractor strategy names."""
    return ("pattern", "keyword", "fallback")


def _unable_to_extract(filename: str) -> TallySourceError:
    return TallySourceError(f"Unable to extract source info from filename '{filename}'.")
