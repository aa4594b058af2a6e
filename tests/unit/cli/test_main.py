"""Unit tests for the OrgDash CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path


def _ingest(tmp_path: Path, report_name: str = "organization.csv") -> int:
    return main(
        [
            "--data-root",
            str(tmp_path),
            "ingest",
            str(fixture_path(f"reports/{report_name}")),
            "--owner",
            "owner-1",
        ]
    )


def test_ingest_prints_version_id(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Ingest should print the created version id."""
    exit_code = _ingest(tmp_path)

    output = capsys.readouterr().out.strip()
    assert exit_code == 0
    assert output.startswith("owner-1-")


def test_ingest_of_header_only_report_fails(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Header-only reports should exit 1 with an error message."""
    exit_code = _ingest(tmp_path, "header_only.csv")

    assert exit_code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_versions_lists_ingested_snapshot(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Versions should print one tab-separated row per snapshot."""
    _ingest(tmp_path)
    capsys.readouterr()

    main(["--data-root", str(tmp_path), "versions", "--owner", "owner-1"])

    columns = capsys.readouterr().out.strip().split("\t")
    assert columns[1] == "5"
    assert columns[3] == "organization.csv"


def test_report_prints_metrics_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Report should print the dashboard metrics as JSON."""
    _ingest(tmp_path)
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "report", "--owner", "owner-1"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["organizational_summary"]["org_premium_mtd"] == 2100.0
    assert payload["qualification_status"]["executive_director"]["qualified"] is True
    assert payload["status_summary"]["on_hold"] == 1


def test_search_prints_rank_titles(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Search should print id, name, and rank title for each match."""
    _ingest(tmp_path)
    capsys.readouterr()

    main(["--data-root", str(tmp_path), "search", "park", "--owner", "owner-1"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].split("\t")[:2] == ["103", "Sam Park"]


def test_clear_prints_removed_count(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Clear should print how many snapshots were deleted."""
    _ingest(tmp_path)
    _ingest(tmp_path)
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "clear", "--owner", "owner-1"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "2"


def test_versions_for_unknown_owner_fails(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Listing versions of an owner without uploads should exit 1."""
    exit_code = main(["--data-root", str(tmp_path), "versions", "--owner", "nobody"])

    assert exit_code == 1
    assert "catalog not found" in capsys.readouterr().err
