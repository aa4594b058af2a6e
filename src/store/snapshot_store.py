"""Owner-keyed snapshot store.

This module persists immutable report snapshots per owner in an
append-only catalog. It provides create, list, load, clear, and export
operations for the SDK and CLI.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Any, cast

from core.config import OrgDashConfig, build_boto3_session_kwargs
from core.constants import (
    ARTIFACTS_DIR_NAME,
    CATALOG_FILE_NAME,
    SAFE_NAME_PATTERN,
    SNAPSHOTS_DIR_NAME,
    USERS_DIR_NAME,
)
from core.errors import OrgDashDependencyError, OrgDashStoreError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri
from core.timestamps import to_utc
from core.types import Snapshot, SnapshotManifest
from store.catalog_io import (
    build_version_id,
    manifest_from_dict,
    read_catalog_file,
    read_skipped_rows,
    update_catalog,
    write_manifest_file,
)
from store.lance_dataset import read_version_payload, write_version_payload

_LOGGER = get_logger(__name__)


class SnapshotStore:
    """Immutable snapshot store implementation.

    This class owns owner directories, version manifests,
    and catalog updates under ``artifacts/<app_id>/users``.
    """

    def __init__(self, config: OrgDashConfig) -> None:
        """Initialize snapshot store from config.

        Args:
            config: Runtime configuration.
        """
        self._config = config
        self._users_root = config.data_root / ARTIFACTS_DIR_NAME / config.app_id / USERS_DIR_NAME
        self._users_root.mkdir(parents=True, exist_ok=True)

    def create_snapshot(self, owner_id: str, snapshot: Snapshot) -> SnapshotManifest:
        """Persist a new immutable snapshot for an owner.

        Args:
            owner_id: Owner identity supplied by the caller.
            snapshot: Parsed snapshot.

        Returns:
            Persisted snapshot manifest.

        Raises:
            OrgDashStoreError: If owner id is invalid or persistence fails.
        """
        owner_root = self._owner_root(owner_id)
        version_id = build_version_id(owner_id, snapshot)
        version_dir = owner_root / SNAPSHOTS_DIR_NAME / version_id
        try:
            version_dir.mkdir(parents=True, exist_ok=False)
        except FileExistsError as error:
            raise OrgDashStoreError(
                f"Snapshot version {version_id} already exists for owner '{owner_id}'. "
                "Retry the ingest to get a fresh version id."
            ) from error
        manifest = SnapshotManifest(
            owner_id=owner_id,
            version_id=version_id,
            source_name=snapshot.source_name,
            captured_at=to_utc(snapshot.captured_at),
            record_count=len(snapshot.records),
            skipped_row_count=len(snapshot.skipped_rows),
        )
        try:
            lance_written = write_version_payload(version_dir, list(snapshot.records))
            write_manifest_file(version_dir, manifest, snapshot.skipped_rows, lance_written)
        except OrgDashStoreError:
            shutil.rmtree(version_dir, ignore_errors=True)
            raise
        update_catalog(owner_root / CATALOG_FILE_NAME, manifest)
        _LOGGER.info(
            "snapshot_created",
            owner_id=owner_id,
            version_id=version_id,
            record_count=manifest.record_count,
            skipped_row_count=manifest.skipped_row_count,
            lance_written=lance_written,
        )
        return manifest

    def list_versions(self, owner_id: str) -> list[SnapshotManifest]:
        """List an owner's manifests, newest capture first.

        Args:
            owner_id: Owner identity.

        Returns:
            Manifests ordered by ``captured_at`` descending; among equal
            timestamps the most recently written comes first.

        Raises:
            OrgDashStoreError: If the owner has no catalog.
        """
        catalog = read_catalog_file(self._owner_root(owner_id) / CATALOG_FILE_NAME)
        version_payloads = cast(list[dict[str, Any]], catalog["versions"])
        versions = [manifest_from_dict(item) for item in reversed(version_payloads)]
        return sorted(versions, key=lambda item: item.captured_at, reverse=True)

    def load_snapshot(
        self,
        owner_id: str,
        version_id: str | None = None,
    ) -> tuple[SnapshotManifest, Snapshot]:
        """Load one snapshot for an owner.

        Args:
            owner_id: Owner identity.
            version_id: Optional version; latest when omitted.

        Returns:
            Pair of manifest and snapshot.

        Raises:
            OrgDashStoreError: If the owner or version is missing.
        """
        manifest = self._resolve_manifest(owner_id, version_id)
        version_dir = self._version_dir(owner_id, manifest.version_id)
        snapshot = Snapshot(
            source_name=manifest.source_name,
            captured_at=manifest.captured_at,
            records=tuple(read_version_payload(version_dir)),
            skipped_rows=read_skipped_rows(version_dir),
        )
        return manifest, snapshot

    def latest_snapshot(self, owner_id: str) -> Snapshot | None:
        """Return the owner's current snapshot, or ``None`` when none exist."""
        if not self.has_snapshots(owner_id):
            return None
        _, snapshot = self.load_snapshot(owner_id)
        return snapshot

    def has_snapshots(self, owner_id: str) -> bool:
        """Return whether the owner has at least one stored snapshot."""
        catalog_path = self._owner_root(owner_id) / CATALOG_FILE_NAME
        if not catalog_path.exists():
            return False
        return bool(read_catalog_file(catalog_path)["versions"])

    def clear(self, owner_id: str) -> int:
        """Delete every snapshot of an owner.

        Args:
            owner_id: Owner identity.

        Returns:
            Number of snapshot versions removed.
        """
        owner_root = self._owner_root(owner_id)
        catalog_path = owner_root / CATALOG_FILE_NAME
        removed_count = 0
        if catalog_path.exists():
            removed_count = len(read_catalog_file(catalog_path)["versions"])
            catalog_path.unlink()
        shutil.rmtree(owner_root / SNAPSHOTS_DIR_NAME, ignore_errors=True)
        _LOGGER.info("snapshots_cleared", owner_id=owner_id, removed_count=removed_count)
        return removed_count

    def export_version_to_s3(self, owner_id: str, version_id: str, output_uri: str) -> None:
        """Export a version directory to S3.

        Args:
            owner_id: Owner identity.
            version_id: Version to export.
            output_uri: Destination ``s3://bucket/prefix`` URI.

        Raises:
            OrgDashStoreError: If export fails.
        """
        location = parse_s3_uri(output_uri, domain="store")
        version_dir = self._version_dir(owner_id, version_id)
        s3_client = _create_s3_client(self._config)
        _upload_directory(s3_client, version_dir, location.bucket, location.key)
        _LOGGER.info(
            "snapshot_exported",
            owner_id=owner_id,
            version_id=version_id,
            output_uri=output_uri,
        )

    def _owner_root(self, owner_id: str) -> Path:
        """Return owner root path after validating the owner id.

        Args:
            owner_id: Owner identity.

        Returns:
            Owner root path.

        Raises:
            OrgDashStoreError: If owner id is not path-safe.
        """
        if not re.fullmatch(SAFE_NAME_PATTERN, owner_id):
            raise OrgDashStoreError(
                f"Invalid owner id '{owner_id}': expected letters, digits, '.', '_' or '-'. "
                "Use a path-safe owner identity."
            )
        return self._users_root / owner_id

    def _resolve_manifest(self, owner_id: str, version_id: str | None) -> SnapshotManifest:
        """Resolve a target manifest.

        Args:
            owner_id: Owner identity.
            version_id: Optional version id.

        Returns:
            Resolved snapshot manifest.

        Raises:
            OrgDashStoreError: If catalog or target version is missing.
        """
        manifests = self.list_versions(owner_id)
        if not manifests:
            raise OrgDashStoreError(
                f"No snapshots exist for owner '{owner_id}'. "
                "Ingest a report before reading snapshots."
            )
        if version_id is None:
            return manifests[0]
        for manifest in manifests:
            if manifest.version_id == version_id:
                return manifest
        raise OrgDashStoreError(
            f"Version '{version_id}' not found for owner '{owner_id}'. "
            "Use list_versions to discover valid version ids."
        )

    def _version_dir(self, owner_id: str, version_id: str) -> Path:
        """Return snapshot version directory.

        Args:
            owner_id: Owner identity.
            version_id: Snapshot version id.

        Returns:
            Version directory path.

        Raises:
            OrgDashStoreError: If version directory is missing.
        """
        version_dir = self._owner_root(owner_id) / SNAPSHOTS_DIR_NAME / version_id
        if not version_dir.is_dir():
            raise OrgDashStoreError(
                f"Missing snapshot directory for {owner_id}:{version_id} at {version_dir}. "
                "Re-ingest the report before loading or exporting."
            )
        return version_dir


def _create_s3_client(config: OrgDashConfig) -> Any:
    """Create boto3 S3 client for exports.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        OrgDashDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise OrgDashDependencyError(
            "S3 export requires boto3, but it is not installed. "
            "Install boto3 to export snapshots to s3:// destinations."
        ) from error
    session_kwargs = build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _upload_directory(s3_client: Any, version_dir: Path, bucket: str, prefix: str) -> None:
    """Upload all version files to S3.

    Args:
        s3_client: Boto3 S3 client.
        version_dir: Local version directory.
        bucket: Destination bucket.
        prefix: Destination key prefix.

    Raises:
        OrgDashStoreError: If upload fails.
    """
    for local_file in sorted(version_dir.rglob("*")):
        if not local_file.is_file():
            continue
        relative_path = local_file.relative_to(version_dir)
        object_key = f"{prefix.rstrip('/')}/{relative_path.as_posix()}"
        try:
            s3_client.upload_file(str(local_file), bucket, object_key)
        except Exception as error:
            raise OrgDashStoreError(
                f"Failed to export snapshot file {local_file} to s3://{bucket}/{object_key}: {error}. "
                "Check AWS credentials and retry export."
            ) from error
