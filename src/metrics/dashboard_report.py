"""Full dashboard metrics bundle."""

from __future__ import annotations

from typing import Sequence

from core.types import AssociateRecord, DashboardReport
from metrics.contributors import build_contributor_ranking
from metrics.org_summary import build_organizational_summary
from metrics.qualification import build_qualification_status
from metrics.status_summary import build_status_summary


def build_dashboard_report(records: Sequence[AssociateRecord]) -> DashboardReport:
    """Compute every dashboard metric for one associate list.

    Args:
        records: Associate records of the current snapshot.

    Returns:
        Freshly computed report; root-dependent parts are ``None``
        when the list has no root record.
    """
    return DashboardReport(
        organizational_summary=build_organizational_summary(records),
        qualification_status=build_qualification_status(records),
        status_summary=build_status_summary(records),
        contributors=build_contributor_ranking(records),
    )
