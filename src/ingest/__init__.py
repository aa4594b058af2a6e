"""Report ingestion pipeline.

This module reads exported report text and parses it into typed,
identity-checked snapshots for the store layer.
"""
