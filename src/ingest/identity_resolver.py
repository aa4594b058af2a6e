"""Associate identifier resolution.

This module guarantees unique, non-empty associate ids within one parse.
Missing, zero, or repeated source ids are replaced by opaque generated ids.
"""

from __future__ import annotations

import uuid
from typing import Callable

from core.constants import INVALID_ASSOCIATE_IDS, MAX_ID_GENERATION_ATTEMPTS
from core.errors import OrgDashFormatError


def generate_associate_id() -> str:
    """Return a new globally unique opaque identifier."""
    return str(uuid.uuid4())


class IdentityResolver:
    """Per-parse identifier registry.

    One resolver instance must be used for exactly one report so the
    seen-set never leaks between snapshots.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        """Create an empty resolver.

        Args:
            id_factory: Optional generator for replacement ids.
        """
        self._id_factory = id_factory or generate_associate_id
        self._seen_ids: set[str] = set()
        self._replaced_count = 0

    @property
    def replaced_count(self) -> int:
        """Return how many source ids were substituted."""
        return self._replaced_count

    def resolve(self, source_id: str) -> str:
        """Choose the identifier for the next row.

        Args:
            source_id: Trimmed ``Associate ID`` cell value.

        Returns:
            The source id when usable, else a freshly generated id.

        Raises:
            OrgDashFormatError: If the id factory keeps returning used ids.
        """
        associate_id = source_id
        if associate_id in INVALID_ASSOCIATE_IDS or associate_id in self._seen_ids:
            associate_id = self._generate_unused_id()
            self._replaced_count += 1
        self._seen_ids.add(associate_id)
        return associate_id

    def _generate_unused_id(self) -> str:
        for _ in range(MAX_ID_GENERATION_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in INVALID_ASSOCIATE_IDS and candidate not in self._seen_ids:
                return candidate
        raise OrgDashFormatError(
            f"Could not generate an unused associate id after {MAX_ID_GENERATION_ATTEMPTS} "
            "attempts. The id factory must keep returning fresh identifiers."
        )
