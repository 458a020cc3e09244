"""Injected collaborators for date-dependent logic.

The core never reads the wall clock or locale settings directly: a `Clock`
supplies "now" and a `CalendarLocale` supplies names and the first day of the
week. Tests pass a `FixedClock` so relative dates are reproducible.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .tz import normalize_tz_name, resolve_tz


class Clock(Protocol):
    def now(self) -> dt.datetime:
        """Return the current instant."""


class SystemClock:
    """Wall clock in a configured timezone ("local", "UTC", IANA name or offset)."""

    def __init__(self, tz: Optional[str] = "local") -> None:
        self.tz_name = normalize_tz_name(tz)
        self.tzinfo = resolve_tz(self.tz_name)

    def now(self) -> dt.datetime:
        return dt.datetime.now(tz=self.tzinfo)


class FixedClock:
    """Clock frozen at one instant."""

    def __init__(self, instant: dt.datetime) -> None:
        self.instant = instant

    def now(self) -> dt.datetime:
        return self.instant


_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class CalendarLocale:
    """Names and week conventions. Weekday indices follow `date.weekday()` (0=Mon)."""

    first_weekday: int = 6
    use_24h: bool = False
    weekday_names: Tuple[str, ...] = _WEEKDAYS
    month_names: Tuple[str, ...] = _MONTHS

    def __post_init__(self) -> None:
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0..6, got {self.first_weekday}")
        if len(self.weekday_names) != 7 or len(self.month_names) != 12:
            raise ValueError("CalendarLocale needs 7 weekday names and 12 month names")

    def weekday_name(self, weekday: int) -> str:
        return self.weekday_names[weekday]

    def month_abbr(self, month: int) -> str:
        return self.month_names[month - 1][:3]

    def start_of_week(self, d: dt.date) -> dt.date:
        back = (d.weekday() - self.first_weekday) % 7
        return d - dt.timedelta(days=back)

    def format_time(self, t: dt.datetime) -> str:
        if self.use_24h:
            return f"{t.hour:02d}:{t.minute:02d}"
        hour12 = t.hour % 12 or 12
        suffix = "AM" if t.hour < 12 else "PM"
        return f"{hour12}:{t.minute:02d} {suffix}"


EN_US = CalendarLocale(first_weekday=6, use_24h=False)
EN_GB = CalendarLocale(first_weekday=0, use_24h=True)
