"""Ingest orchestration for report uploads.

This module coordinates source loading, snapshot parsing,
snapshot persistence, and optional export for one upload.
"""

from __future__ import annotations

from core.config import OrgDashConfig
from core.logging_config import get_logger
from core.types import IngestOptions, SnapshotManifest
from ingest.input_reader import read_source_text
from ingest.snapshot_parser import parse_snapshot
from store.snapshot_store import SnapshotStore

_LOGGER = get_logger(__name__)


def ingest_snapshot(options: IngestOptions, config: OrgDashConfig) -> str:
    """Read, parse, and persist one report as a new snapshot.

    Nothing is written when the report fails to parse.

    Args:
        options: Ingest request options.
        config: Runtime configuration.

    Returns:
        Created snapshot version id.

    Raises:
        OrgDashIngestError: If the source cannot be read.
        OrgDashFormatError: If the report has no valid data rows.
        OrgDashStoreError: If snapshot persistence fails.
    """
    source = read_source_text(options.source_uri, config)
    snapshot = parse_snapshot(source.text, source.source_name)
    store = SnapshotStore(config)
    manifest = store.create_snapshot(options.owner_id, snapshot)
    if options.output_uri:
        store.export_version_to_s3(options.owner_id, manifest.version_id, options.output_uri)
    _log_ingest_completion(options, manifest)
    return manifest.version_id


def _log_ingest_completion(options: IngestOptions, manifest: SnapshotManifest) -> None:
    """Log pipeline completion with contextual metadata."""
    _LOGGER.info(
        "ingest_completed",
        owner_id=options.owner_id,
        source_uri=options.source_uri,
        record_count=manifest.record_count,
        skipped_row_count=manifest.skipped_row_count,
        version_id=manifest.version_id,
        output_uri=options.output_uri,
    )
