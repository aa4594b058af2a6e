"""Catalog and manifest persistence helpers.

This module isolates JSON catalog IO and version id generation.
It keeps snapshot store orchestration focused on business flow.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, cast

from core.constants import MANIFEST_FILE_NAME
from core.errors import OrgDashStoreError
from core.timestamps import to_utc
from core.types import Snapshot, SnapshotManifest


def build_version_id(owner_id: str, snapshot: Snapshot) -> str:
    """Build version id from owner, write time, and snapshot content.

    Args:
        owner_id: Owner identity.
        snapshot: Snapshot being persisted.

    Returns:
        Version id string.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    digest_seed = "|".join(
        [snapshot.source_name, snapshot.captured_at.isoformat()]
        + [record.associate_id for record in snapshot.records]
    )
    digest = hashlib.sha256(digest_seed.encode("utf-8")).hexdigest()[:10]
    return f"{owner_id}-{timestamp}-{digest}"


def manifest_to_dict(manifest: SnapshotManifest) -> dict[str, Any]:
    """Serialize manifest into a JSON-safe dictionary."""
    manifest_dict = asdict(manifest)
    manifest_dict["captured_at"] = manifest.captured_at.isoformat()
    return manifest_dict


def write_manifest_file(
    version_dir: Path,
    manifest: SnapshotManifest,
    skipped_rows: tuple[int, ...],
    lance_written: bool,
) -> None:
    """Write per-version manifest file.

    Args:
        version_dir: Snapshot version directory.
        manifest: Manifest payload.
        skipped_rows: Line numbers of rows dropped while parsing.
        lance_written: Whether Lance dataset was created.
    """
    manifest_dict = manifest_to_dict(manifest)
    manifest_dict["skipped_rows"] = list(skipped_rows)
    manifest_dict["lance_written"] = lance_written
    manifest_path = version_dir / MANIFEST_FILE_NAME
    manifest_path.write_text(json.dumps(manifest_dict, indent=2) + "\n", encoding="utf-8")


def read_skipped_rows(version_dir: Path) -> tuple[int, ...]:
    """Read skipped row numbers from a version manifest.

    Args:
        version_dir: Snapshot version directory.

    Returns:
        Skipped line numbers, empty when the manifest has none.

    Raises:
        OrgDashStoreError: If manifest is missing or invalid.
    """
    manifest_path = version_dir / MANIFEST_FILE_NAME
    payload = _read_json_object(manifest_path, "snapshot manifest")
    return tuple(int(line_number) for line_number in payload.get("skipped_rows", []))


def update_catalog(catalog_path: Path, manifest: SnapshotManifest) -> None:
    """Append manifest entry to owner catalog.

    Args:
        catalog_path: Catalog JSON path.
        manifest: Manifest to append.
    """
    if catalog_path.exists():
        catalog = read_catalog_file(catalog_path)
    else:
        catalog = {"latest_version": None, "versions": []}
    versions = cast(list[dict[str, Any]], catalog["versions"])
    versions.append(manifest_to_dict(manifest))
    catalog["latest_version"] = manifest.version_id
    catalog_path.write_text(json.dumps(catalog, indent=2) + "\n", encoding="utf-8")


def read_catalog_file(catalog_path: Path) -> dict[str, Any]:
    """Read and validate owner catalog payload.

    Args:
        catalog_path: Catalog JSON path.

    Returns:
        Parsed catalog object.

    Raises:
        OrgDashStoreError: If catalog is missing or invalid.
    """
    if not catalog_path.exists():
        raise OrgDashStoreError(
            f"Snapshot catalog not found at {catalog_path}. "
            "Ingest a report before requesting versions."
        )
    return _read_json_object(catalog_path, "snapshot catalog")


def manifest_from_dict(payload: dict[str, Any]) -> SnapshotManifest:
    """Deserialize manifest payload from dictionary.

    Args:
        payload: Manifest dictionary.

    Returns:
        Typed snapshot manifest.
    """
    return SnapshotManifest(
        owner_id=str(payload["owner_id"]),
        version_id=str(payload["version_id"]),
        source_name=str(payload["source_name"]),
        captured_at=to_utc(datetime.fromisoformat(str(payload["captured_at"]))),
        record_count=int(payload["record_count"]),
        skipped_row_count=int(payload.get("skipped_row_count", 0)),
    )


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    if not path.exists():
        raise OrgDashStoreError(
            f"Missing {label} at {path}. Re-ingest the report to recreate it."
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise OrgDashStoreError(
            f"Failed to parse {label} at {path}: {error.msg}. "
            "Clear the owner's snapshots and re-ingest the report."
        ) from error
    if not isinstance(payload, dict):
        raise OrgDashStoreError(
            f"Failed to parse {label} at {path}: "
            "expected JSON object at top level. Recreate the file."
        )
    return payload
