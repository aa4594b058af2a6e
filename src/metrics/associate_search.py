"""Associate search and drill-down lookup."""

from __future__ import annotations

from typing import Sequence

from core.types import AssociateRecord


def filter_associates(
    records: Sequence[AssociateRecord],
    query: str,
) -> list[AssociateRecord]:
    """Filter records by case-insensitive name or id substring.

    Args:
        records: Associate records of one snapshot.
        query: Search text; empty returns every record.

    Returns:
        Matching records in input order.
    """
    if not query:
        return list(records)
    needle = query.lower()
    return [
        record
        for record in records
        if needle in record.name.lower() or needle in record.associate_id.lower()
    ]


def find_associate(
    records: Sequence[AssociateRecord],
    associate_id: str,
) -> AssociateRecord | None:
    """Return the record with the given id, or ``None``."""
    for record in records:
        if record.associate_id == associate_id:
            return record
    return None
