"""Snapshot construction from exported report text.

This module runs the tabular parser and wraps typed associate records
with provenance into one immutable snapshot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from core.logging_config import get_logger
from core.timestamps import to_utc
from core.types import Snapshot
from ingest.associate_rows import associate_from_row
from ingest.table_parser import parse_table

_LOGGER = get_logger(__name__)


def parse_snapshot(
    text: str,
    source_name: str,
    captured_at: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
) -> Snapshot:
    """Parse report text into an immutable snapshot.

    Args:
        text: Raw report text.
        source_name: Origin name recorded on the snapshot.
        captured_at: Optional capture time, normalized to UTC; naive values
            are read as UTC. Defaults to now.
        id_factory: Optional generator for replacement associate ids.

    Returns:
        Snapshot with records in report order.

    Raises:
        OrgDashFormatError: If the text yields no valid data rows.
    """
    table = parse_table(text, id_factory)
    records = tuple(associate_from_row(row) for row in table.rows)
    snapshot = Snapshot(
        source_name=source_name,
        captured_at=to_utc(captured_at) if captured_at else datetime.now(timezone.utc),
        records=records,
        skipped_rows=table.skipped_rows,
    )
    _LOGGER.info(
        "snapshot_parsed",
        source_name=source_name,
        record_count=len(records),
        skipped_row_count=len(table.skipped_rows),
        replaced_id_count=table.replaced_id_count,
    )
    return snapshot
