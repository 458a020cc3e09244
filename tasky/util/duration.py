# tasky/util/duration.py
from __future__ import annotations

import re
from typing import Optional

_UNIT_RE = re.compile(r"^(min|m|minute|minutes|mins|h|hr|hrs|hour|hours)$", re.IGNORECASE)


def unit_seconds(unit: str) -> Optional[int]:
    """Seconds per unit for the duration words the quick-add grammar accepts."""
    u = unit.strip().lower()
    if not _UNIT_RE.match(u):
        return None
    if u.startswith("m"):
        return 60
    return 3600


def format_duration(seconds: int) -> str:
    """Human text for a duration chip: "30 min", "1 hour", "2 hours", "1h 30m"."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60

    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}m"
    if hours > 0:
        return f"{hours} hour{'s' if hours > 1 else ''}"
    return f"{minutes} min"
