"""Status bucket counts."""

from __future__ import annotations

from typing import Sequence

from core.constants import STATUS_ACTIVE, STATUS_NOT_VESTED, STATUS_ON_HOLD
from core.types import AssociateRecord, StatusSummary


def build_status_summary(records: Sequence[AssociateRecord]) -> StatusSummary:
    """Count records per status code.

    Unrecognized status codes are left out of every bucket.

    Args:
        records: Associate records of one snapshot.

    Returns:
        Active, not-vested, and on-hold counts plus on-hold records.
    """
    active = 0
    not_vested = 0
    on_hold_records: list[AssociateRecord] = []
    for record in records:
        status = record.status.strip()
        if status == STATUS_ACTIVE:
            active += 1
        elif status == STATUS_NOT_VESTED:
            not_vested += 1
        elif status == STATUS_ON_HOLD:
            on_hold_records.append(record)
    return StatusSummary(
        active=active,
        not_vested=not_vested,
        on_hold=len(on_hold_records),
        on_hold_records=tuple(on_hold_records),
    )
