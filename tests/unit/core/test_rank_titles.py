"""Unit tests for rank title lookup."""

from __future__ import annotations

from core.rank_titles import rank_title


def test_rank_title_maps_known_codes() -> None:
    """Codes 1 through 11 should map to their titles."""
    titles = [rank_title(float(code)) for code in (1, 6, 7, 11)]

    assert titles == ["Associate", "Senior Director", "Executive Director", "Platinum ED"]


def test_rank_title_falls_back_for_unknown_code() -> None:
    """Codes outside the table should render generically instead of failing."""
    assert rank_title(12.0) == "Level 12"


def test_rank_title_keeps_fractional_codes() -> None:
    """Non-integral codes should round-trip in the generic title."""
    assert rank_title(2.5) == "Level 2.5"


def test_rank_title_handles_zero_default() -> None:
    """A missing level coerced to 0 should still produce a title."""
    assert rank_title(0.0) == "Level 0"
