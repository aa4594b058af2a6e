"""Lance dataset persistence helpers.

This module writes snapshot records to Apache Lance when available.
The JSONL records file stays the source of truth for loading.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path

from core.constants import LANCE_DIR_NAME, RECORDS_FILE_NAME
from core.errors import OrgDashStoreError
from core.types import AssociateRecord
from store.record_payload import (
    associate_record_to_payload,
    read_associate_records_jsonl,
    write_associate_records_jsonl,
)

_SCALAR_COLUMNS = tuple(item.name for item in fields(AssociateRecord) if item.name != "extra_fields")


def write_version_payload(version_dir: Path, records: list[AssociateRecord]) -> bool:
    """Persist snapshot records and attempt Lance conversion.

    Args:
        version_dir: Snapshot version directory.
        records: Records to persist.

    Returns:
        ``True`` when Lance export succeeded, else ``False``.

    Raises:
        OrgDashStoreError: If JSONL persistence fails.
    """
    records_path = version_dir / RECORDS_FILE_NAME
    try:
        write_associate_records_jsonl(records_path, records)
    except OSError as error:
        raise OrgDashStoreError(
            f"Failed to persist snapshot payload at {records_path}: {error}. "
            "Check write permissions and available disk space."
        ) from error
    return _try_write_lance_dataset(version_dir, records)


def read_version_payload(version_dir: Path) -> list[AssociateRecord]:
    """Load snapshot records from the JSONL records file.

    Args:
        version_dir: Snapshot version directory.

    Returns:
        Parsed records in persisted order.

    Raises:
        OrgDashStoreError: If records file is missing or invalid.
    """
    records_path = version_dir / RECORDS_FILE_NAME
    if not records_path.exists():
        raise OrgDashStoreError(
            f"Failed to load snapshot at {version_dir}: missing {RECORDS_FILE_NAME}."
        )
    try:
        return read_associate_records_jsonl(records_path)
    except ValueError as error:
        raise OrgDashStoreError(
            f"Failed to parse snapshot payload at {records_path}: {error}. "
            "Re-ingest the report to recreate the snapshot."
        ) from error


def _try_write_lance_dataset(version_dir: Path, records: list[AssociateRecord]) -> bool:
    """Attempt to write records to Apache Lance.

    Args:
        version_dir: Snapshot version directory.
        records: Snapshot records.

    Returns:
        Whether Lance export succeeded.
    """
    try:
        import lance
        import pyarrow as pa
    except ImportError:
        return False

    payloads = [associate_record_to_payload(record) for record in records]
    columns = {
        column: [payload[column] for payload in payloads] for column in _SCALAR_COLUMNS
    }
    columns["extra_fields"] = [
        json.dumps(payload["extra_fields"], sort_keys=True) for payload in payloads
    ]
    table = pa.table(columns)
    lance_uri = str(version_dir / LANCE_DIR_NAME)
    try:
        lance.write_dataset(table, lance_uri, mode="overwrite")
    except Exception as error:
        raise OrgDashStoreError(
            f"Failed to write Lance dataset at {lance_uri}: {error}. "
            "Validate lance/pyarrow compatibility and retry ingest."
        ) from error
    return True
