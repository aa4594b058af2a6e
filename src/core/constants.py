"""Core constants used across OrgDash modules.

This module centralizes report column names, rank rules, and storage
layout names. Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".orgdash")
DEFAULT_APP_ID = "default-app-id"
ARTIFACTS_DIR_NAME = "artifacts"
USERS_DIR_NAME = "users"
SNAPSHOTS_DIR_NAME = "snapshots"
CATALOG_FILE_NAME = "catalog.json"
MANIFEST_FILE_NAME = "manifest.json"
RECORDS_FILE_NAME = "records.jsonl"
LANCE_DIR_NAME = "data.lance"
SAFE_NAME_PATTERN = r"[A-Za-z0-9._-]+"

COLUMN_ASSOCIATE_ID = "Associate ID"
COLUMN_NAME = "Name"
COLUMN_LEVEL = "Level"
COLUMN_DEPTH_LEVEL = "Depth Level"
COLUMN_STATUS = "Status"
COLUMN_PERSONAL_PREMIUM_MTD = "Personal Premium MTD"
COLUMN_PERSONAL_PREMIUM_PMTD = "Personal Premium PMTD"
COLUMN_PERSONAL_PREMIUM_YTD = "Personal Premium YTD"
COLUMN_PERSONAL_RECRUITS_MTD = "Personal Recruits MTD"
COLUMN_PERSONAL_RECRUITS_PMTD = "Personal Recruits PMTD"
COLUMN_PERSONAL_RECRUITS_YTD = "Personal Recruits YTD"
COLUMN_ORG_PREMIUM_MTD = "Org Premium MTD"
COLUMN_ORG_PREMIUM_PMTD = "Org Premium PMTD"
COLUMN_ORG_RECRUITS_MTD = "Org Recruits MTD"
COLUMN_ORG_RECRUITS_PMTD = "Org Recruits PMTD"

# Header substrings that switch a column to numeric coercion.
NUMERIC_HEADER_MARKERS = ("Premium", "Recruits", "Total", "Level")
INVALID_ASSOCIATE_IDS = ("", "0")
MAX_ID_GENERATION_ATTEMPTS = 1000

STATUS_ACTIVE = ""
STATUS_NOT_VESTED = "D"
STATUS_ON_HOLD = "H"

ROOT_DEPTH_LEVEL = 0
LEG_DEPTH_LEVEL = 1
SENIOR_DIRECTOR_THRESHOLD = 700.0
SENIOR_DIRECTOR_LEG_CAP = 350.0
EXECUTIVE_DIRECTOR_THRESHOLD = 1400.0
EXECUTIVE_DIRECTOR_LEG_CAP = 700.0

RANK_TITLES = {
    1: "Associate",
    2: "Senior Associate",
    3: "Manager",
    4: "Senior Manager",
    5: "Director",
    6: "Senior Director",
    7: "Executive Director",
    8: "Bronze ED",
    9: "Silver ED",
    10: "Gold ED",
    11: "Platinum ED",
}
