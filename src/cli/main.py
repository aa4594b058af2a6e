"""OrgDash CLI entry points.
This module exposes commands for report ingest and snapshot metrics.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Sequence

from core.config import OrgDashConfig
from core.errors import OrgDashError
from core.rank_titles import rank_title
from core.types import IngestOptions
from store.dashboard_sdk import OrgDashClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="orgdash", description="Sales organization dashboard CLI")
    parser.add_argument("--data-root", help="Override ORGDASH_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_versions_command(subparsers)
    _add_report_command(subparsers)
    _add_search_command(subparsers)
    _add_clear_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the OrgDash CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        return _dispatch(parser, client, args)
    except OrgDashError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: OrgDashClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "ingest":
        return _run_ingest_command(client, args)
    if args.command == "versions":
        return _run_versions_command(client, args)
    if args.command == "report":
        return _run_report_command(client, args)
    if args.command == "search":
        return _run_search_command(client, args)
    if args.command == "clear":
        return _run_clear_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> OrgDashClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = OrgDashConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return OrgDashClient(config)


def _run_ingest_command(client: OrgDashClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = IngestOptions(
        owner_id=args.owner,
        source_uri=args.source,
        output_uri=args.output_uri,
    )
    version_id = client.ingest(options)
    print(version_id)
    return 0


def _run_versions_command(client: OrgDashClient, args: argparse.Namespace) -> int:
    """Handle versions command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for manifest in client.owner(args.owner).list_versions():
        print(
            f"{manifest.version_id}\t"
            f"{manifest.record_count}\t"
            f"{manifest.captured_at.isoformat()}\t"
            f"{manifest.source_name}"
        )
    return 0


def _run_report_command(client: OrgDashClient, args: argparse.Namespace) -> int:
    """Handle report command by printing the metrics as JSON."""
    report = client.owner(args.owner).report(args.version_id)
    print(json.dumps(asdict(report), indent=2, sort_keys=True))
    return 0


def _run_search_command(client: OrgDashClient, args: argparse.Namespace) -> int:
    """Handle search command."""
    for record in client.owner(args.owner).search(args.query):
        print(f"{record.associate_id}\t{record.name}\t{rank_title(record.level)}")
    return 0


def _run_clear_command(client: OrgDashClient, args: argparse.Namespace) -> int:
    """Handle clear command."""
    removed_count = client.owner(args.owner).clear()
    print(removed_count)
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest an exported report file or S3 object")
    parser.add_argument("source", help="Report file path or s3://bucket/key")
    parser.add_argument("--owner", required=True, help="Owner identity")
    parser.add_argument("--output-uri", help="Optional s3:// export destination")


def _add_versions_command(subparsers: Any) -> None:
    """Register versions subcommand."""
    parser = subparsers.add_parser("versions", help="List snapshot versions, newest first")
    parser.add_argument("--owner", required=True, help="Owner identity")


def _add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser("report", help="Print dashboard metrics as JSON")
    parser.add_argument("--owner", required=True, help="Owner identity")
    parser.add_argument("--version-id", help="Optional specific version id")


def _add_search_command(subparsers: Any) -> None:
    """Register search subcommand."""
    parser = subparsers.add_parser("search", help="Search associates by name or id")
    parser.add_argument("query", help="Case-insensitive name or id substring")
    parser.add_argument("--owner", required=True, help="Owner identity")


def _add_clear_command(subparsers: Any) -> None:
    """Register clear subcommand."""
    parser = subparsers.add_parser("clear", help="Delete every snapshot of an owner")
    parser.add_argument("--owner", required=True, help="Owner identity")
