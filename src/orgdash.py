"""Public SDK surface for OrgDash.

This module provides a stable import path for SDK users.
It re-exports the client, the parser, and the metrics functions.
"""

from __future__ import annotations

from core.config import OrgDashConfig
from core.errors import OrgDashError, OrgDashFormatError
from core.rank_titles import rank_title
from core.types import (
    AssociateRecord,
    ContributorRanking,
    DashboardReport,
    IngestOptions,
    OrganizationalSummary,
    QualificationStatus,
    RankQualification,
    Snapshot,
    StatusSummary,
)
from ingest.snapshot_parser import parse_snapshot
from metrics.associate_search import filter_associates, find_associate
from metrics.contributors import build_contributor_ranking
from metrics.dashboard_report import build_dashboard_report
from metrics.org_summary import build_organizational_summary
from metrics.qualification import build_qualification_status
from metrics.status_summary import build_status_summary
from store.dashboard_sdk import OrgDashClient, OwnerSnapshots

__all__ = [
    "AssociateRecord",
    "ContributorRanking",
    "DashboardReport",
    "IngestOptions",
    "OrgDashClient",
    "OrgDashConfig",
    "OrgDashError",
    "OrgDashFormatError",
    "OrganizationalSummary",
    "OwnerSnapshots",
    "QualificationStatus",
    "RankQualification",
    "Snapshot",
    "StatusSummary",
    "build_contributor_ranking",
    "build_dashboard_report",
    "build_organizational_summary",
    "build_qualification_status",
    "build_status_summary",
    "filter_associates",
    "find_associate",
    "parse_snapshot",
    "rank_title",
]
