"""Delimited report text parser.

This module turns exported report text into ordered field mappings.
It applies quote-aware field splitting, per-column numeric coercion,
and associate id resolution in a single pass over the data rows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from core.constants import COLUMN_ASSOCIATE_ID, NUMERIC_HEADER_MARKERS
from core.errors import OrgDashFormatError
from core.logging_config import get_logger
from ingest.identity_resolver import IdentityResolver

_LOGGER = get_logger(__name__)
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_BYTE_ORDER_MARK = "\ufeff"

FieldValue = float | str


@dataclass(frozen=True)
class ParsedTable:
    """Coerced report rows.

    Attributes:
        headers: Header names in column order.
        rows: One mapping per surviving data row, in report order.
        skipped_rows: One-based line numbers of rows with a field-count mismatch.
        replaced_id_count: Number of rows whose associate id was substituted.
    """

    headers: tuple[str, ...]
    rows: tuple[dict[str, FieldValue], ...]
    skipped_rows: tuple[int, ...]
    replaced_id_count: int


def parse_table(
    text: str,
    id_factory: Callable[[], str] | None = None,
) -> ParsedTable:
    """Parse report text into coerced row mappings.

    Args:
        text: Raw report text, first non-empty line is the header.
        id_factory: Optional generator for replacement associate ids.

    Returns:
        Parsed header, rows, and skipped-row bookkeeping.

    Raises:
        OrgDashFormatError: If there is no data row or no row survives.
    """
    lines = [line for line in text.split("\n") if _trim(line)]
    if len(lines) < 2:
        raise OrgDashFormatError(
            "Report must have a header and at least one data row. "
            "Export the report again with its data rows included."
        )
    headers = tuple(split_report_line(lines[0]))
    resolver = IdentityResolver(id_factory)
    rows: list[dict[str, FieldValue]] = []
    skipped_rows: list[int] = []
    for line_number, line in enumerate(lines[1:], 2):
        values = split_report_line(line)
        if len(values) != len(headers):
            _LOGGER.info(
                "row_skipped",
                line_number=line_number,
                expected_fields=len(headers),
                actual_fields=len(values),
            )
            skipped_rows.append(line_number)
            continue
        rows.append(_build_row(headers, values, resolver))
    if not rows:
        raise OrgDashFormatError(
            f"No valid data rows parsed from report: all {len(skipped_rows)} rows "
            f"had a field count different from the {len(headers)}-column header."
        )
    return ParsedTable(
        headers=headers,
        rows=tuple(rows),
        skipped_rows=tuple(skipped_rows),
        replaced_id_count=resolver.replaced_count,
    )


def split_report_line(line: str) -> list[str]:
    """Split one report line into trimmed fields.

    A double quote toggles quoted mode and is dropped; commas inside
    quoted mode are kept. Doubled quotes are not treated as escapes.

    Args:
        line: One raw report line.

    Returns:
        Trimmed field values.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_trim("".join(current)))
            current = []
        else:
            current.append(char)
    fields.append(_trim("".join(current)))
    return fields


def is_numeric_header(header: str) -> bool:
    """Return whether a column is coerced to a number."""
    return any(marker in header for marker in NUMERIC_HEADER_MARKERS)


def coerce_number(value: str) -> float:
    """Parse the leading number of a cell, defaulting to 0.

    Args:
        value: Trimmed cell text.

    Returns:
        Parsed float, or 0.0 when no numeric prefix exists.
    """
    match = _NUMERIC_PREFIX.match(value)
    if match is None:
        return 0.0
    return float(match.group()) or 0.0


def _build_row(
    headers: tuple[str, ...],
    values: list[str],
    resolver: IdentityResolver,
) -> dict[str, FieldValue]:
    row: dict[str, FieldValue] = {}
    for header, value in zip(headers, values):
        if is_numeric_header(header):
            row[header] = coerce_number(value)
        elif header == COLUMN_ASSOCIATE_ID:
            row[header] = resolver.resolve(value)
        else:
            row[header] = value
    if COLUMN_ASSOCIATE_ID not in row:
        row[COLUMN_ASSOCIATE_ID] = resolver.resolve("")
    return row


def _trim(value: str) -> str:
    return value.strip().strip(_BYTE_ORDER_MARK).strip()
