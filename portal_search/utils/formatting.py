"""Display formatting for video durations and view counts."""

from __future__ import annotations

from typing import Optional, Union

Number = Union[int, float]


def format_duration(seconds: Optional[Number]) -> str:
    """Format a length in seconds as ``H:MM:SS`` or ``M:SS``; ``"N/A"`` when unknown."""
    if not seconds or seconds <= 0:
        return "N/A"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_count(count: Optional[Number]) -> str:
    """Abbreviate a count: ``500``, ``1.5K``, ``2.5M``."""
    if not count or count <= 0:
        return "0"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(int(count))


def format_views(count: Optional[Number]) -> str:
    """
    Format a view count for display.

    Counts below 1,000 are shown bare (``"500"``); larger counts are
    abbreviated and suffixed (``"1.5K views"``, ``"2.5M views"``).
    """
    if not count or count < 1_000:
        return format_count(count)
    return f"{format_count(count)} views"
