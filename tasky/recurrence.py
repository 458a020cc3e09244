# tasky/recurrence.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
YEARLY = "yearly"
WEEKDAYS = "weekdays"  # Mon-Fri
WEEKENDS = "weekends"  # Sat-Sun

FREQUENCIES = (DAILY, WEEKLY, MONTHLY, YEARLY, WEEKDAYS, WEEKENDS)

_DAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def ordinal(n: int) -> str:
    if (n // 10) % 10 == 1:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@dataclass(frozen=True)
class RecurrenceRule:
    """Repeat pattern recognized in quick-add text.

    weekdays use `date.weekday()` numbering (0=Mon .. 6=Sun).
    """

    frequency: str
    interval: int = 1
    weekdays: Tuple[int, ...] = ()
    day_of_month: Optional[int] = None

    def __post_init__(self) -> None:
        if self.frequency not in FREQUENCIES:
            raise ValueError(f"Unknown recurrence frequency: {self.frequency!r}")
        if self.interval < 1:
            raise ValueError("recurrence interval must be >= 1")

    @property
    def display_text(self) -> str:
        f = self.frequency
        n = self.interval
        if f == DAILY:
            return "Daily" if n == 1 else f"Every {n} days"
        if f == WEEKLY:
            if self.weekdays:
                names = ", ".join(_DAY_ABBR[d] for d in self.weekdays if 0 <= d <= 6)
                return f"Weekly on {names}"
            return "Weekly" if n == 1 else f"Every {n} weeks"
        if f == MONTHLY:
            if self.day_of_month is not None:
                return f"Monthly on the {ordinal(self.day_of_month)}"
            return "Monthly" if n == 1 else f"Every {n} months"
        if f == YEARLY:
            return "Yearly" if n == 1 else f"Every {n} years"
        if f == WEEKDAYS:
            return "Every weekday"
        return "Every weekend"
