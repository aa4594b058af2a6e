"""Storage and versioning layer.

This module persists immutable owner snapshots and their catalogs.
It powers snapshot loading, clearing, and export for the SDK.
"""
