"""Month-to-date contributor rankings."""

from __future__ import annotations

from typing import Callable, Sequence

from core.types import AssociateRecord, ContributorRanking


def build_contributor_ranking(records: Sequence[AssociateRecord]) -> ContributorRanking:
    """Rank premium and recruit contributors for the current month.

    Args:
        records: Associate records of one snapshot.

    Returns:
        Both rankings, descending, ties kept in input order.
    """
    return ContributorRanking(
        premium=rank_contributors(records, lambda record: record.personal_premium_mtd),
        recruits=rank_contributors(records, lambda record: record.personal_recruits_mtd),
    )


def rank_contributors(
    records: Sequence[AssociateRecord],
    metric: Callable[[AssociateRecord], float],
) -> tuple[AssociateRecord, ...]:
    """Return records with a positive metric, highest first.

    ``sorted`` is stable, so equal metrics keep their input order.
    """
    contributors = [record for record in records if metric(record) > 0]
    return tuple(sorted(contributors, key=metric, reverse=True))
