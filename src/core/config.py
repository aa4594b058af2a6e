"""Runtime configuration model for OrgDash.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import re

from core.constants import DEFAULT_APP_ID, DEFAULT_DATA_ROOT, SAFE_NAME_PATTERN
from core.errors import OrgDashConfigError


@dataclass(frozen=True)
class OrgDashConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for persisted snapshots.
        app_id: Deployment namespace that groups owner snapshots.
        s3_region: Optional default AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    data_root: Path
    app_id: str
    s3_region: str | None
    s3_profile: str | None

    @classmethod
    def from_env(cls) -> "OrgDashConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            OrgDashConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("ORGDASH_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        app_id = _parse_app_id(os.getenv("ORGDASH_APP_ID", DEFAULT_APP_ID))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            app_id=app_id,
            s3_region=os.getenv("ORGDASH_S3_REGION"),
            s3_profile=os.getenv("ORGDASH_S3_PROFILE"),
        )


def _parse_app_id(raw_value: str) -> str:
    """Validate the deployment namespace value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Stripped app id.

    Raises:
        OrgDashConfigError: If value is empty or not path-safe.
    """
    app_id = raw_value.strip()
    if not re.fullmatch(SAFE_NAME_PATTERN, app_id):
        raise OrgDashConfigError(
            "Invalid ORGDASH_APP_ID value: "
            f"expected letters, digits, '.', '_' or '-', got '{raw_value}'. "
            "Set ORGDASH_APP_ID to a path-safe identifier."
        )
    return app_id


def build_boto3_session_kwargs(config: OrgDashConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {}
    if config.s3_profile:
        kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        kwargs["region_name"] = config.s3_region
    return kwargs
