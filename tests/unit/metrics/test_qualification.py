"""Unit tests for rank qualification."""

from __future__ import annotations

from core.types import AssociateRecord
from metrics.qualification import (
    SENIOR_DIRECTOR_RULE,
    build_qualification_status,
    capped_leg_premium,
)


def _root(personal_premium_mtd: float) -> AssociateRecord:
    return AssociateRecord(
        associate_id="root",
        depth_level=0.0,
        personal_premium_mtd=personal_premium_mtd,
    )


def _leg(associate_id: str, org_premium_mtd: float, depth_level: float = 1.0) -> AssociateRecord:
    return AssociateRecord(
        associate_id=associate_id,
        depth_level=depth_level,
        org_premium_mtd=org_premium_mtd,
    )


def test_qualification_caps_each_leg_per_rank() -> None:
    """Legs of 500 and 900 should count 700 toward SD and 1200 toward ED."""
    records = [_root(200.0), _leg("a", 500.0), _leg("b", 900.0)]

    status = build_qualification_status(records)

    assert status is not None
    assert status.senior_director.effective_leg_premium == 700.0
    assert status.executive_director.effective_leg_premium == 1200.0


def test_qualification_counts_boundary_total_as_qualified() -> None:
    """Countable premium equal to the threshold should qualify both ranks."""
    records = [_root(200.0), _leg("a", 500.0), _leg("b", 900.0)]

    status = build_qualification_status(records)

    assert status is not None
    assert status.senior_director.total_countable_premium == 900.0
    assert status.executive_director.total_countable_premium == 1400.0
    assert status.senior_director.qualified and status.executive_director.qualified
    assert status.executive_director.needed == 0.0


def test_qualification_reports_shortfall_when_not_qualified() -> None:
    """Unqualified ranks should report threshold minus countable premium."""
    records = [_root(100.0), _leg("a", 250.0)]

    status = build_qualification_status(records)

    assert status is not None
    assert (status.senior_director.qualified, status.senior_director.needed) == (False, 350.0)
    assert status.executive_director.needed == 1050.0


def test_qualification_does_not_cap_root_personal_premium() -> None:
    """The root's own premium should count in full."""
    status = build_qualification_status([_root(1500.0)])

    assert status is not None and status.executive_director.qualified


def test_qualification_ignores_deeper_levels() -> None:
    """Only depth-one records should count as legs."""
    records = [_root(0.0), _leg("a", 300.0), _leg("deep", 5000.0, depth_level=2.0)]

    status = build_qualification_status(records)

    assert status is not None and status.senior_director.effective_leg_premium == 300.0


def test_qualification_is_absent_without_root() -> None:
    """No depth-zero record means qualification is undefined."""
    assert build_qualification_status([_leg("a", 900.0)]) is None


def test_capped_leg_premium_is_flat_above_cap() -> None:
    """Raising a leg's premium past the cap should not change its contribution."""
    contributions = [
        capped_leg_premium(_leg("a", premium), SENIOR_DIRECTOR_RULE.leg_cap)
        for premium in (100.0, 350.0, 351.0, 10_000.0)
    ]

    assert contributions == [100.0, 350.0, 350.0, 350.0]
