"""Mapping from coerced report rows to typed associate records."""

from __future__ import annotations

from typing import Mapping

from core.constants import (
    COLUMN_ASSOCIATE_ID,
    COLUMN_DEPTH_LEVEL,
    COLUMN_LEVEL,
    COLUMN_NAME,
    COLUMN_ORG_PREMIUM_MTD,
    COLUMN_ORG_PREMIUM_PMTD,
    COLUMN_ORG_RECRUITS_MTD,
    COLUMN_ORG_RECRUITS_PMTD,
    COLUMN_PERSONAL_PREMIUM_MTD,
    COLUMN_PERSONAL_PREMIUM_PMTD,
    COLUMN_PERSONAL_PREMIUM_YTD,
    COLUMN_PERSONAL_RECRUITS_MTD,
    COLUMN_PERSONAL_RECRUITS_PMTD,
    COLUMN_PERSONAL_RECRUITS_YTD,
    COLUMN_STATUS,
)
from core.types import AssociateRecord
from ingest.table_parser import FieldValue, coerce_number

# Report column -> AssociateRecord attribute for numeric metrics.
NUMERIC_COLUMN_FIELDS = {
    COLUMN_LEVEL: "level",
    COLUMN_DEPTH_LEVEL: "depth_level",
    COLUMN_PERSONAL_PREMIUM_MTD: "personal_premium_mtd",
    COLUMN_PERSONAL_PREMIUM_PMTD: "personal_premium_pmtd",
    COLUMN_PERSONAL_PREMIUM_YTD: "personal_premium_ytd",
    COLUMN_PERSONAL_RECRUITS_MTD: "personal_recruits_mtd",
    COLUMN_PERSONAL_RECRUITS_PMTD: "personal_recruits_pmtd",
    COLUMN_PERSONAL_RECRUITS_YTD: "personal_recruits_ytd",
    COLUMN_ORG_PREMIUM_MTD: "org_premium_mtd",
    COLUMN_ORG_PREMIUM_PMTD: "org_premium_pmtd",
    COLUMN_ORG_RECRUITS_MTD: "org_recruits_mtd",
    COLUMN_ORG_RECRUITS_PMTD: "org_recruits_pmtd",
}
KNOWN_COLUMNS = frozenset(
    (COLUMN_ASSOCIATE_ID, COLUMN_NAME, COLUMN_STATUS, *NUMERIC_COLUMN_FIELDS)
)


def associate_from_row(row: Mapping[str, FieldValue]) -> AssociateRecord:
    """Build a typed record from one coerced report row.

    Args:
        row: Header name to coerced value mapping.

    Returns:
        Associate record; absent metrics default to 0.
    """
    metrics = {
        field_name: _number(row.get(column, 0.0))
        for column, field_name in NUMERIC_COLUMN_FIELDS.items()
    }
    extra_fields = {key: value for key, value in row.items() if key not in KNOWN_COLUMNS}
    return AssociateRecord(
        associate_id=str(row.get(COLUMN_ASSOCIATE_ID, "")),
        name=str(row.get(COLUMN_NAME, "")),
        status=str(row.get(COLUMN_STATUS, "")).strip(),
        extra_fields=extra_fields,
        **metrics,
    )


def _number(value: FieldValue) -> float:
    if isinstance(value, str):
        return coerce_number(value.strip())
    return float(value)
