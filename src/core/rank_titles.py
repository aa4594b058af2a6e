"""Rank code to display title lookup."""

from __future__ import annotations

from core.constants import RANK_TITLES


def rank_title(level: float) -> str:
    """Return the display title for a rank code.

    Args:
        level: Rank code as parsed from the report.

    Returns:
        Mapped title, or ``"Level <n>"`` for unknown codes.
    """
    if float(level).is_integer() and int(level) in RANK_TITLES:
        return RANK_TITLES[int(level)]
    return f"Level {format_level(level)}"


def format_level(level: float) -> str:
    """Render a rank code without a trailing ``.0`` for whole numbers."""
    if float(level).is_integer():
        return str(int(level))
    return str(level)
