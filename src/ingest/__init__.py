"""Statement ingestion pipeline.

This package reads statement CSV exports and normalizes their rows.
It hands typed transactions to the store layer.
"""
