"""OrgDash exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class OrgDashError(Exception):
    """Base exception for all OrgDash failures."""


class OrgDashConfigError(OrgDashError):
    """Raised for invalid runtime configuration."""


class OrgDashIngestError(OrgDashError):
    """Raised when a source report cannot be read."""


class OrgDashFormatError(OrgDashIngestError):
    """Raised when report text cannot produce a snapshot."""


class OrgDashStoreError(OrgDashError):
    """Raised for snapshot persistence and catalog failures."""


class OrgDashDependencyError(OrgDashError):
    """Raised when an optional runtime dependency is missing."""
