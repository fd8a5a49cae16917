"""Wall-clock arithmetic on a single day's 0..1440 minute axis.

Shifts never cross midnight, so every interval here lives inside one calendar day.
A night window that crosses midnight (e.g. 22:00-05:00) is split into its evening
and early-morning segments on that same axis.
"""

from __future__ import annotations

import re

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import MalformedTimeError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_minutes(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight."""
    match = _HHMM.match((value or "").strip()) if isinstance(value, str) else None
    if not match:
        raise MalformedTimeError(f"Invalid time (expected HH:MM): {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise MalformedTimeError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def format_minutes(total_minutes: int) -> str:
    """Render a minute count as "HH:MM" (hours may exceed 24 for totals)."""
    total_minutes = int(total_minutes)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def duration_minutes(start: str, end: str) -> int:
    return max(0, to_minutes(end) - to_minutes(start))


def overlap_minutes(a1: int, a2: int, b1: int, b2: int) -> int:
    return max(0, min(a2, b2) - max(a1, b1))


def night_overlap_minutes(start: str, end: str, night_start: str, night_end: str) -> int:
    s, e = to_minutes(start), to_minutes(end)
    ns, ne = to_minutes(night_start), to_minutes(night_end)
    if ns <= ne:
        return overlap_minutes(s, e, ns, ne)
    return overlap_minutes(s, e, ns, MINUTES_PER_DAY) + overlap_minutes(s, e, 0, ne)
