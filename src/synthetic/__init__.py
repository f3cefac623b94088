"""Synthetic statement generation package."""
