"""Shared JSONL serialization for AssociateRecord payloads.

This module centralizes AssociateRecord JSON serialization logic.
It is reused by snapshot persistence and report export flows.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

from core.types import AssociateRecord

_NUMERIC_FIELDS = tuple(
    item.name for item in fields(AssociateRecord) if item.type in ("float", float)
)


def associate_record_to_payload(record: AssociateRecord) -> dict[str, Any]:
    """Serialize AssociateRecord into JSON-safe payload.

    Args:
        record: Associate record instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    payload = asdict(record)
    payload["extra_fields"] = dict(record.extra_fields)
    return payload


def associate_record_from_payload(payload: dict[str, Any]) -> AssociateRecord:
    """Deserialize JSON payload into AssociateRecord.

    Args:
        payload: Serialized record payload.

    Returns:
        Parsed AssociateRecord; missing metrics default to 0.
    """
    extra_payload = payload.get("extra_fields", {})
    extra_dict = extra_payload if isinstance(extra_payload, dict) else {}
    return AssociateRecord(
        associate_id=str(payload.get("associate_id", "")),
        name=str(payload.get("name", "")),
        status=str(payload.get("status", "")),
        extra_fields={
            str(key): value if isinstance(value, (int, float)) else str(value)
            for key, value in extra_dict.items()
        },
        **{name: float(payload.get(name, 0.0)) for name in _NUMERIC_FIELDS},
    )


def write_associate_records_jsonl(records_path: Path, records: list[AssociateRecord]) -> None:
    """Write AssociateRecord list to JSONL file.

    Args:
        records_path: Output JSONL file path.
        records: Records to serialize.
    """
    lines = [
        json.dumps(associate_record_to_payload(record), sort_keys=True) for record in records
    ]
    records_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def read_associate_records_jsonl(records_path: Path) -> list[AssociateRecord]:
    """Read AssociateRecord list from JSONL file.

    Args:
        records_path: Input JSONL file path.

    Returns:
        Parsed records in file order.

    Raises:
        ValueError: If JSONL rows are invalid.
    """
    parsed_records: list[AssociateRecord] = []
    for line_number, line in enumerate(records_path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        payload = _parse_payload_line(line, line_number)
        parsed_records.append(associate_record_from_payload(payload))
    return parsed_records


def _parse_payload_line(line: str, line_number: int) -> dict[str, Any]:
    """Parse and validate one JSONL payload row.

    Args:
        line: Raw JSONL line.
        line_number: One-based line number.

    Returns:
        Parsed payload dictionary.

    Raises:
        ValueError: If JSON row is invalid.
    """
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise ValueError(f"Invalid JSON at line {line_number}: {error.msg}") from error
    if not isinstance(payload, dict):
        raise ValueError(f"Invalid payload at line {line_number}: expected JSON object")
    return payload
