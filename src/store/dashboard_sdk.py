"""Python SDK for dashboard operations.

This module exposes high-level APIs for report ingest, snapshot
inspection, and metrics backed by the snapshot store.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import OrgDashConfig
from core.types import (
    AssociateRecord,
    DashboardReport,
    IngestOptions,
    Snapshot,
    SnapshotManifest,
)
from ingest.pipeline import ingest_snapshot
from metrics.associate_search import filter_associates, find_associate
from metrics.dashboard_report import build_dashboard_report
from store.snapshot_store import SnapshotStore


class OrgDashClient:
    """Primary SDK entry point for dashboard workflows."""

    def __init__(self, config: OrgDashConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or OrgDashConfig.from_env()
        self._store = SnapshotStore(self._config)

    def ingest(self, options: IngestOptions) -> str:
        """Ingest a report into an owner's snapshot catalog.

        Args:
            options: Ingest options.

        Returns:
            Created version id.

        Raises:
            OrgDashIngestError: If the report cannot be read or parsed.
            OrgDashStoreError: If snapshot persistence fails.
        """
        return ingest_snapshot(options, self._config)

    def owner(self, owner_id: str) -> "OwnerSnapshots":
        """Get snapshot handle for one owner.

        Args:
            owner_id: Owner identity.

        Returns:
            Owner snapshot handle.
        """
        return OwnerSnapshots(owner_id, self._store)

    def with_data_root(self, data_root: str) -> "OrgDashClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return OrgDashClient(replace(self._config, data_root=resolved_root))


class OwnerSnapshots:
    """SDK handle over one owner's snapshots."""

    def __init__(self, owner_id: str, store: SnapshotStore) -> None:
        self._owner_id = owner_id
        self._store = store

    @property
    def owner_id(self) -> str:
        """Return owner identity."""
        return self._owner_id

    def list_versions(self) -> list[SnapshotManifest]:
        """List snapshot manifests, newest first."""
        return self._store.list_versions(self._owner_id)

    def load_snapshot(self, version_id: str | None = None) -> tuple[SnapshotManifest, Snapshot]:
        """Load latest or target snapshot with its manifest."""
        return self._store.load_snapshot(self._owner_id, version_id)

    def current_records(self, version_id: str | None = None) -> tuple[AssociateRecord, ...]:
        """Return associate records of the target snapshot, empty when none exist."""
        if version_id is None:
            snapshot = self._store.latest_snapshot(self._owner_id)
            return snapshot.records if snapshot else ()
        _, snapshot = self.load_snapshot(version_id)
        return snapshot.records

    def report(self, version_id: str | None = None) -> DashboardReport:
        """Compute dashboard metrics for the latest or target snapshot.

        Args:
            version_id: Optional snapshot version id.

        Returns:
            Freshly computed dashboard report.
        """
        return build_dashboard_report(self.current_records(version_id))

    def search(self, query: str) -> list[AssociateRecord]:
        """Filter current associates by name or id substring."""
        return filter_associates(self.current_records(), query)

    def find(self, associate_id: str) -> AssociateRecord | None:
        """Look up one current associate for drill-down."""
        return find_associate(self.current_records(), associate_id)

    def clear(self) -> int:
        """Delete all snapshots for this owner and return the removed count."""
        return self._store.clear(self._owner_id)

    def export(self, version_id: str, output_uri: str) -> None:
        """Export a snapshot version to an S3 destination.

        Args:
            version_id: Snapshot version id.
            output_uri: Destination URI.
        """
        self._store.export_version_to_s3(self._owner_id, version_id, output_uri)
