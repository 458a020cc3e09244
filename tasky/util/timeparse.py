# tasky/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

_HOUR_RE = re.compile(r"^(\d{1,2})(?::00)?$")


def parse_hour_window(s: str) -> Tuple[int, int]:
    """Parse a visible-hours window like "06-24" or "06:00-24:00" into (first, last)."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("hours must be like 06-24 or 06:00-24:00")
    bounds = []
    for p in parts:
        m = _HOUR_RE.match(p.strip())
        if not m:
            raise ValueError(f"Invalid hour: {p!r} (whole hours only)")
        bounds.append(int(m.group(1)))
    first, last = bounds
    if not (0 <= first <= 23 and 1 <= last <= 24):
        raise ValueError(f"hours out of range: {s!r}")
    if last <= first:
        raise ValueError("hours end must be after start")
    return first, last


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_iso_datetime(s: str, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Parse an ISO-8601 instant; naive values get `tz` attached when given."""
    raw = s.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    value = dt.datetime.fromisoformat(raw)
    if value.tzinfo is None and tz is not None:
        value = value.replace(tzinfo=tz)
    return value
