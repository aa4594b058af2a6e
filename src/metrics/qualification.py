"""Rank qualification with capped per-leg contributions.

Each direct leg of the root counts at most the rank's leg cap, and the
root's own month-to-date premium is added uncapped before comparing the
total against the rank threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.constants import (
    EXECUTIVE_DIRECTOR_LEG_CAP,
    EXECUTIVE_DIRECTOR_THRESHOLD,
    LEG_DEPTH_LEVEL,
    SENIOR_DIRECTOR_LEG_CAP,
    SENIOR_DIRECTOR_THRESHOLD,
)
from core.types import AssociateRecord, QualificationStatus, RankQualification
from metrics.org_summary import find_root


@dataclass(frozen=True)
class RankRule:
    """Threshold and leg cap for one qualifying rank."""

    rank_name: str
    threshold: float
    leg_cap: float


SENIOR_DIRECTOR_RULE = RankRule(
    rank_name="Senior Director",
    threshold=SENIOR_DIRECTOR_THRESHOLD,
    leg_cap=SENIOR_DIRECTOR_LEG_CAP,
)
EXECUTIVE_DIRECTOR_RULE = RankRule(
    rank_name="Executive Director",
    threshold=EXECUTIVE_DIRECTOR_THRESHOLD,
    leg_cap=EXECUTIVE_DIRECTOR_LEG_CAP,
)


def build_qualification_status(
    records: Sequence[AssociateRecord],
) -> QualificationStatus | None:
    """Evaluate Senior and Executive Director qualification for the root.

    Args:
        records: Associate records of one snapshot.

    Returns:
        Qualification pair, or ``None`` when no root record exists.
    """
    root = find_root(records)
    if root is None:
        return None
    legs = select_legs(records)
    return QualificationStatus(
        senior_director=evaluate_rank(SENIOR_DIRECTOR_RULE, root, legs),
        executive_director=evaluate_rank(EXECUTIVE_DIRECTOR_RULE, root, legs),
    )


def select_legs(records: Sequence[AssociateRecord]) -> list[AssociateRecord]:
    """Return the root's direct legs in input order."""
    return [record for record in records if record.depth_level == LEG_DEPTH_LEVEL]


def capped_leg_premium(leg: AssociateRecord, leg_cap: float) -> float:
    """Return one leg's month-to-date org premium limited to the cap."""
    return min(leg.org_premium_mtd, leg_cap)


def evaluate_rank(
    rule: RankRule,
    root: AssociateRecord,
    legs: Sequence[AssociateRecord],
) -> RankQualification:
    """Evaluate one rank rule.

    Args:
        rule: Rank threshold and leg cap.
        root: Root record supplying uncapped personal premium.
        legs: Depth-one records.

    Returns:
        Qualification outcome with the shortfall when not qualified.
    """
    effective_leg_premium = sum(capped_leg_premium(leg, rule.leg_cap) for leg in legs)
    total_countable_premium = effective_leg_premium + root.personal_premium_mtd
    qualified = total_countable_premium >= rule.threshold
    return RankQualification(
        rank_name=rule.rank_name,
        threshold=rule.threshold,
        leg_cap=rule.leg_cap,
        effective_leg_premium=effective_leg_premium,
        total_countable_premium=total_countable_premium,
        qualified=qualified,
        needed=0.0 if qualified else rule.threshold - total_countable_premium,
    )
