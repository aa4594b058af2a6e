"""Unit tests for the owner-keyed snapshot store."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

import store.snapshot_store as snapshot_store_module
from core.config import OrgDashConfig
from core.errors import OrgDashStoreError
from core.types import AssociateRecord, Snapshot
from store.snapshot_store import SnapshotStore


def _store(tmp_path: Path) -> SnapshotStore:
    return SnapshotStore(replace(OrgDashConfig.from_env(), data_root=tmp_path))


def _snapshot(source_name: str, day: int, *ids: str) -> Snapshot:
    return Snapshot(
        source_name=source_name,
        captured_at=datetime(2024, 5, day, tzinfo=timezone.utc),
        records=tuple(
            AssociateRecord(associate_id=associate_id, name=f"Associate {associate_id}")
            for associate_id in ids
        ),
        skipped_rows=(4,),
    )


def test_create_and_load_snapshot_round_trip(tmp_path: Path) -> None:
    """Loaded snapshot should match what was created."""
    store = _store(tmp_path)
    snapshot = _snapshot("may.csv", 1, "1", "2")

    manifest = store.create_snapshot("owner-1", snapshot)
    loaded_manifest, loaded = store.load_snapshot("owner-1", manifest.version_id)

    assert loaded_manifest == manifest
    assert loaded.records == snapshot.records
    assert loaded.skipped_rows == (4,)


def test_create_snapshot_writes_under_app_scoped_owner_directory(tmp_path: Path) -> None:
    """Snapshots should live under artifacts/<app_id>/users/<owner>/snapshots."""
    store = _store(tmp_path)

    manifest = store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    version_dir = (
        tmp_path / "artifacts" / "default-app-id" / "users" / "owner-1" / "snapshots"
    ) / manifest.version_id
    manifest_payload = json.loads((version_dir / "manifest.json").read_text(encoding="utf-8"))
    assert manifest_payload["record_count"] == 1
    assert manifest_payload["skipped_rows"] == [4]


def test_list_versions_orders_newest_capture_first(tmp_path: Path) -> None:
    """Versions should be listed by capture time, newest first."""
    store = _store(tmp_path)
    store.create_snapshot("owner-1", _snapshot("early.csv", 1, "1"))
    store.create_snapshot("owner-1", _snapshot("late.csv", 9, "1"))
    store.create_snapshot("owner-1", _snapshot("middle.csv", 5, "1"))

    names = [manifest.source_name for manifest in store.list_versions("owner-1")]

    assert names == ["late.csv", "middle.csv", "early.csv"]


def test_load_snapshot_defaults_to_latest_capture(tmp_path: Path) -> None:
    """Loading without a version should return the newest snapshot."""
    store = _store(tmp_path)
    store.create_snapshot("owner-1", _snapshot("late.csv", 9, "9"))
    store.create_snapshot("owner-1", _snapshot("early.csv", 1, "1"))

    _, snapshot = store.load_snapshot("owner-1")

    assert snapshot.source_name == "late.csv"


def test_owners_are_isolated(tmp_path: Path) -> None:
    """One owner's snapshots should never be visible to another owner."""
    store = _store(tmp_path)
    store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    assert store.latest_snapshot("owner-2") is None
    with pytest.raises(OrgDashStoreError):
        store.list_versions("owner-2")


def test_latest_snapshot_is_none_for_new_owner(tmp_path: Path) -> None:
    """An owner without uploads should have no current snapshot."""
    store = _store(tmp_path)

    assert store.latest_snapshot("owner-1") is None
    assert store.has_snapshots("owner-1") is False


def test_load_snapshot_raises_for_unknown_version(tmp_path: Path) -> None:
    """Unknown version ids should fail with a store error."""
    store = _store(tmp_path)
    store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    with pytest.raises(OrgDashStoreError, match="not found"):
        store.load_snapshot("owner-1", "missing-version")


def test_create_snapshot_rejects_unsafe_owner_id(tmp_path: Path) -> None:
    """Owner ids with path separators should be rejected."""
    store = _store(tmp_path)

    with pytest.raises(OrgDashStoreError, match="Invalid owner id"):
        store.create_snapshot("../escape", _snapshot("may.csv", 1, "1"))


def test_list_versions_handles_naive_and_aware_capture_times(tmp_path: Path) -> None:
    """Naive capture times should be stored as UTC and sort with aware ones."""
    store = _store(tmp_path)
    naive = replace(_snapshot("naive.csv", 1, "1"), captured_at=datetime(2024, 5, 3))
    store.create_snapshot("owner-1", naive)
    store.create_snapshot("owner-1", _snapshot("aware.csv", 2, "1"))

    versions = store.list_versions("owner-1")

    assert [manifest.source_name for manifest in versions] == ["naive.csv", "aware.csv"]
    assert versions[0].captured_at == datetime(2024, 5, 3, tzinfo=timezone.utc)


def test_create_snapshot_removes_version_dir_when_lance_write_fails(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A failed columnar write should leave no partial version behind."""

    def _failing_write_dataset(table: Any, uri: str, mode: str) -> None:
        raise RuntimeError("disk full")

    monkeypatch.setitem(sys.modules, "pyarrow", SimpleNamespace(table=lambda columns: columns))
    monkeypatch.setitem(sys.modules, "lance", SimpleNamespace(write_dataset=_failing_write_dataset))
    store = _store(tmp_path)

    with pytest.raises(OrgDashStoreError, match="Lance"):
        store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    snapshots_dir = tmp_path / "artifacts" / "default-app-id" / "users" / "owner-1" / "snapshots"
    assert list(snapshots_dir.iterdir()) == []
    assert store.has_snapshots("owner-1") is False


def test_clear_removes_all_snapshots_and_reports_count(tmp_path: Path) -> None:
    """Clear should delete every version and return how many were removed."""
    store = _store(tmp_path)
    store.create_snapshot("owner-1", _snapshot("a.csv", 1, "1"))
    store.create_snapshot("owner-1", _snapshot("b.csv", 2, "1"))

    removed_count = store.clear("owner-1")

    assert removed_count == 2
    assert store.latest_snapshot("owner-1") is None


def test_clear_on_empty_owner_returns_zero(tmp_path: Path) -> None:
    """Clearing an owner without snapshots should be a no-op."""
    assert _store(tmp_path).clear("owner-1") == 0


def test_export_version_to_s3_uploads_version_files(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Export should upload every version file under the destination prefix."""
    uploads: list[tuple[str, str]] = []

    class _FakeS3Client:
        def upload_file(self, local_path: str, bucket: str, key: str) -> None:
            uploads.append((bucket, key))

    def _fake_client(config: Any) -> _FakeS3Client:
        return _FakeS3Client()

    monkeypatch.setattr(snapshot_store_module, "_create_s3_client", _fake_client)
    store = _store(tmp_path)
    manifest = store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    store.export_version_to_s3("owner-1", manifest.version_id, "s3://reports/exports/")

    assert ("reports", "exports/manifest.json") in uploads
    assert ("reports", "exports/records.jsonl") in uploads


def test_export_version_to_s3_rejects_non_s3_uri(tmp_path: Path) -> None:
    """Export destinations must be s3:// URIs."""
    store = _store(tmp_path)
    manifest = store.create_snapshot("owner-1", _snapshot("may.csv", 1, "1"))

    with pytest.raises(OrgDashStoreError):
        store.export_version_to_s3("owner-1", manifest.version_id, "/tmp/out")
