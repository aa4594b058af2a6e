"""Integration test for repeated uploads and dashboard reporting."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import OrgDashConfig
from core.types import IngestOptions
from store.dashboard_sdk import OrgDashClient
from tests.fixture_paths import fixture_path

_SECOND_REPORT = "\n".join(
    [
        "Name,Associate ID,Level,Depth Level,Status,Personal Premium MTD,Org Premium MTD",
        "Solo Root,900,4,0,,1500,1500",
    ]
)


def test_second_upload_becomes_current_snapshot(tmp_path: Path) -> None:
    """After two uploads the dashboard should use the newer report."""
    client = OrgDashClient(replace(OrgDashConfig.from_env(), data_root=tmp_path))
    second_report = tmp_path / "second.csv"
    second_report.write_text(_SECOND_REPORT + "\n", encoding="utf-8")

    client.ingest(
        IngestOptions(owner_id="owner-1", source_uri=str(fixture_path("reports/organization.csv")))
    )
    client.ingest(IngestOptions(owner_id="owner-1", source_uri=str(second_report)))
    owner = client.owner("owner-1")
    report = owner.report()

    assert [manifest.source_name for manifest in owner.list_versions()] == [
        "second.csv",
        "organization.csv",
    ]
    assert [record.name for record in owner.current_records()] == ["Solo Root"]
    assert report.qualification_status is not None
    assert report.qualification_status.executive_director.qualified
    assert report.qualification_status.senior_director.effective_leg_premium == 0.0
