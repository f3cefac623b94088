"""Tally exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all Tally failures."""


class TallyConfigError(TallyError):
    """Raised for invalid runtime configuration."""


class TallyIngestError(TallyError):
    """Raised for run-level ingest failures."""


class TallySourceError(TallyError):
    """Raised when source info cannot be extracted from a filename."""


class TallyParseError(TallyError):
    """Raised for unreadable or malformed CSV files."""


class TallyNormalizeError(TallyError):
    """Raised when normalization loses every record of a file."""


class TallyStoreError(TallyError):
    """Raised for transaction store and sync log failures."""


class TallyRelocateError(TallyError):
    """Raised when a processed file cannot be moved."""
