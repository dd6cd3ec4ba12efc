"""Time arithmetic and formatting for the elapsed-time display."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

MS_PER_SECOND = 1000
MS_PER_DAY = 24 * 60 * 60 * MS_PER_SECOND

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_duration(total_ms: float) -> str:
    """Render a millisecond duration as ``HH:MM:SS``.

    Negative (or non-finite) input clamps to zero. Hours keep counting past
    24, so a duration of a day and one hour renders as ``25:00:00``.
    """
    if not math.isfinite(total_ms):
        total_ms = 0
    total_seconds = max(0, math.floor(total_ms / MS_PER_SECOND))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def days_elapsed(elapsed_ms: float) -> int:
    """Whole days contained in a millisecond duration."""
    return max(0, int(elapsed_ms // MS_PER_DAY))


def format_calendar_date(epoch_ms: int | None) -> str:
    """Local calendar date like ``Jan 5, 2024``, or ``""`` if it can't be rendered."""
    try:
        dt = datetime.fromtimestamp(epoch_ms / MS_PER_SECOND)
        return f"{dt:%b} {dt.day}, {dt.year}"
    except (TypeError, ValueError, OverflowError, OSError):
        return ""


def parse_timestamp(text: object) -> int | None:
    """Parse an ISO-8601 timestamp into epoch milliseconds.

    GitHub returns ``2024-01-01T00:00:00Z``; ``fromisoformat`` only accepts
    the ``Z`` suffix on newer interpreters, so it is rewritten first.
    Timestamps without an offset are read as UTC.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // timedelta(milliseconds=1)
