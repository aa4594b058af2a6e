"""Shared typed models.

This module defines immutable data models used by ingest, metrics,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping


@dataclass(frozen=True)
class AssociateRecord:
    """One organization member as of a snapshot.

    Attributes:
        associate_id: Identifier unique within the snapshot.
        name: Display name, possibly empty.
        level: Rank code (1-11 are titled, others render generically).
        depth_level: Distance from the organization root, 0 for the root.
        status: Trimmed status code ("" active, "D" not vested, "H" on hold).
        personal_premium_mtd: Personal premium, month to date.
        personal_premium_pmtd: Personal premium, previous month to date.
        personal_premium_ytd: Personal premium, year to date.
        personal_recruits_mtd: Personal recruit count, month to date.
        personal_recruits_pmtd: Personal recruit count, previous month to date.
        personal_recruits_ytd: Personal recruit count, year to date.
        org_premium_mtd: Organizational premium, month to date.
        org_premium_pmtd: Organizational premium, previous month to date.
        org_recruits_mtd: Organizational recruit count, month to date.
        org_recruits_pmtd: Organizational recruit count, previous month to date.
        extra_fields: Unrecognized report columns kept verbatim. Read-only;
            excluded from the record hash.
    """

    associate_id: str
    name: str = ""
    level: float = 0.0
    depth_level: float = 0.0
    status: str = ""
    personal_premium_mtd: float = 0.0
    personal_premium_pmtd: float = 0.0
    personal_premium_ytd: float = 0.0
    personal_recruits_mtd: float = 0.0
    personal_recruits_pmtd: float = 0.0
    personal_recruits_ytd: float = 0.0
    org_premium_mtd: float = 0.0
    org_premium_pmtd: float = 0.0
    org_recruits_mtd: float = 0.0
    org_recruits_pmtd: float = 0.0
    extra_fields: Mapping[str, float | str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Snapshot:
    """Immutable result of parsing one exported report.

    Attributes:
        source_name: Origin name of the report, usually a file name.
        captured_at: UTC time the snapshot was parsed.
        records: Associate records in report order.
        skipped_rows: One-based line numbers of rows dropped as malformed.
    """

    source_name: str
    captured_at: datetime
    records: tuple[AssociateRecord, ...]
    skipped_rows: tuple[int, ...] = ()


@dataclass(frozen=True)
class SnapshotManifest:
    """Immutable snapshot metadata for an owner's catalog.

    Attributes:
        owner_id: Owner identity supplied by the caller.
        version_id: Immutable snapshot id.
        source_name: Origin name of the report.
        captured_at: UTC capture timestamp.
        record_count: Number of records in snapshot.
        skipped_row_count: Number of malformed rows dropped while parsing.
    """

    owner_id: str
    version_id: str
    source_name: str
    captured_at: datetime
    record_count: int
    skipped_row_count: int


@dataclass(frozen=True)
class IngestOptions:
    """Ingest command options.

    Attributes:
        owner_id: Owner whose snapshot catalog receives the upload.
        source_uri: Input file path or ``s3://bucket/key`` URI.
        output_uri: Optional object-store URI for snapshot export.
    """

    owner_id: str
    source_uri: str
    output_uri: str | None = None


@dataclass(frozen=True)
class SourceText:
    """Raw report text before parsing.

    Attributes:
        source_name: File name or object key the text came from.
        text: Decoded report content.
    """

    source_name: str
    text: str


@dataclass(frozen=True)
class OrganizationalSummary:
    """Organization-wide rollup taken from the root record."""

    org_premium_mtd: float
    org_premium_pmtd: float
    org_recruits_mtd: float
    org_recruits_pmtd: float
    premium_contributors_pmtd: int
    recruits_contributors_pmtd: int


@dataclass(frozen=True)
class RankQualification:
    """Qualification outcome for one rank.

    Attributes:
        rank_name: Display name of the rank.
        threshold: Countable premium required to qualify.
        leg_cap: Maximum premium one leg may contribute.
        effective_leg_premium: Sum of capped leg premiums.
        total_countable_premium: Capped legs plus uncapped personal premium.
        qualified: Whether countable premium reaches the threshold.
        needed: Shortfall to the threshold, 0 when qualified.
    """

    rank_name: str
    threshold: float
    leg_cap: float
    effective_leg_premium: float
    total_countable_premium: float
    qualified: bool
    needed: float


@dataclass(frozen=True)
class QualificationStatus:
    """Senior Director and Executive Director qualification pair."""

    senior_director: RankQualification
    executive_director: RankQualification


@dataclass(frozen=True)
class StatusSummary:
    """Status bucket counts with the on-hold drill-down list."""

    active: int
    not_vested: int
    on_hold: int
    on_hold_records: tuple[AssociateRecord, ...]


@dataclass(frozen=True)
class ContributorRanking:
    """Month-to-date contributors ordered by descending metric."""

    premium: tuple[AssociateRecord, ...]
    recruits: tuple[AssociateRecord, ...]


@dataclass(frozen=True)
class DashboardReport:
    """All derived metrics for one associate list.

    Attributes:
        organizational_summary: Root rollup, ``None`` without a root record.
        qualification_status: Rank outcome, ``None`` without a root record.
        status_summary: Status bucket counts.
        contributors: Ranked contributor lists.
    """

    organizational_summary: OrganizationalSummary | None
    qualification_status: QualificationStatus | None
    status_summary: StatusSummary
    contributors: ContributorRanking
