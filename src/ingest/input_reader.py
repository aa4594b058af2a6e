"""Source report readers for ingestion.

This module loads raw report text from a local file or an S3 object.
Parsing is left to the snapshot parser.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.config import OrgDashConfig, build_boto3_session_kwargs
from core.errors import OrgDashDependencyError, OrgDashIngestError
from core.s3_uri import S3Location, parse_s3_uri
from core.types import SourceText


def read_source_text(source_uri: str, config: OrgDashConfig) -> SourceText:
    """Load report text from a local file or S3.

    Args:
        source_uri: Local file path or ``s3://bucket/key`` URI.
        config: Runtime configuration for S3 session defaults.

    Returns:
        Source name and decoded text.

    Raises:
        OrgDashIngestError: If source cannot be read.
    """
    if source_uri.startswith("s3://"):
        return _read_s3_text(source_uri, config)
    return _read_local_text(Path(source_uri).expanduser())


def _read_local_text(source_path: Path) -> SourceText:
    """Read report text from the local file system.

    Args:
        source_path: Input report file.

    Returns:
        Loaded source text.

    Raises:
        OrgDashIngestError: If path is missing, not a file, or not UTF-8.
    """
    if not source_path.exists():
        raise OrgDashIngestError(
            f"Failed to read report at {source_path}: path does not exist. "
            "Provide an existing report file."
        )
    if not source_path.is_file():
        raise OrgDashIngestError(
            f"Failed to read report at {source_path}: not a file. "
            "Provide the exported report file itself, not a directory."
        )
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise OrgDashIngestError(
            f"Failed to decode report at {source_path}: {error.reason}. "
            "Export the report as UTF-8 text and retry ingest."
        ) from error
    return SourceText(source_name=source_path.name, text=text)


def _read_s3_text(source_uri: str, config: OrgDashConfig) -> SourceText:
    """Read report text from one S3 object.

    Args:
        source_uri: S3 object URI.
        config: Runtime configuration for region/profile.

    Returns:
        Loaded source text.

    Raises:
        OrgDashIngestError: If download or decoding fails.
    """
    location = parse_s3_uri(source_uri, domain="ingest")
    s3_client = _create_s3_client(config)
    body = _download_s3_body(s3_client, location)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as error:
        raise OrgDashIngestError(
            f"Failed to decode report at {source_uri}: {error.reason}. "
            "Upload the report as UTF-8 text and retry ingest."
        ) from error
    return SourceText(source_name=Path(location.key).name, text=text)


def _create_s3_client(config: OrgDashConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        OrgDashDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise OrgDashDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to ingest from s3:// sources."
        ) from error
    session_kwargs = build_boto3_session_kwargs(config)
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _download_s3_body(s3_client: Any, location: S3Location) -> bytes:
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
        return response["Body"].read()
    except Exception as error:
        raise OrgDashIngestError(
            f"Failed to download report s3://{location.bucket}/{location.key}: {error}. "
            "Check the object key and AWS credentials, then retry ingest."
        ) from error
