"""Organizational summary rollup."""

from __future__ import annotations

from typing import Sequence

from core.constants import ROOT_DEPTH_LEVEL
from core.types import AssociateRecord, OrganizationalSummary


def find_root(records: Sequence[AssociateRecord]) -> AssociateRecord | None:
    """Return the first record at root depth, if any."""
    for record in records:
        if record.depth_level == ROOT_DEPTH_LEVEL:
            return record
    return None


def build_organizational_summary(
    records: Sequence[AssociateRecord],
) -> OrganizationalSummary | None:
    """Summarize organization totals from the root record.

    Args:
        records: Associate records of one snapshot.

    Returns:
        Root org totals plus previous-month contributor counts across
        all records, or ``None`` when no root record exists.
    """
    root = find_root(records)
    if root is None:
        return None
    return OrganizationalSummary(
        org_premium_mtd=root.org_premium_mtd,
        org_premium_pmtd=root.org_premium_pmtd,
        org_recruits_mtd=root.org_recruits_mtd,
        org_recruits_pmtd=root.org_recruits_pmtd,
        premium_contributors_pmtd=sum(1 for record in records if record.personal_premium_pmtd > 0),
        recruits_contributors_pmtd=sum(
            1 for record in records if record.personal_recruits_pmtd > 0
        ),
    )
