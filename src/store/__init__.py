"""Storage layer.

This package persists transactions and the sync log on Apache Lance.
It also exposes the SDK client that wires the pipeline together.
"""
