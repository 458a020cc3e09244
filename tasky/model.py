# tasky/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Hashable, Optional, Tuple

from .recurrence import RecurrenceRule

# Drag modes / edges
CREATING = "creating"
RESIZING = "resizing"
EDGE_START = "start"
EDGE_END = "end"

# Suggestion chip types
SUGGEST_DATE = "date"
SUGGEST_TIME = "time"
SUGGEST_DURATION = "duration"
SUGGEST_PRIORITY = "priority"
SUGGEST_LIST = "list"
SUGGEST_RECURRENCE = "recurrence"

# Priority levels
PRIORITY_NONE = 0
PRIORITY_LOW = 1
PRIORITY_MEDIUM = 2
PRIORITY_HIGH = 3

PRIORITY_NAMES = {
    PRIORITY_NONE: "None",
    PRIORITY_LOW: "Low",
    PRIORITY_MEDIUM: "Medium",
    PRIORITY_HIGH: "High",
}


@dataclass(frozen=True)
class ScheduledItem:
    id: Hashable
    start: Optional[dt.datetime]
    end: Optional[dt.datetime] = None
    completed: bool = False  # rendering only
    title: str = ""


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PlacedEvent:
    item: ScheduledItem
    rect: Rect
    column: int
    total_columns: int
    cluster_id: int

    # effective interval used for overlap math (after defaults/corrections)
    start: dt.datetime
    end: dt.datetime

    @property
    def relative_x(self) -> float:
        return self.column / self.total_columns

    @property
    def relative_width(self) -> float:
        return 1.0 / self.total_columns

    @property
    def overlaps(self) -> bool:
        return self.total_columns > 1


@dataclass(frozen=True)
class OverlapSegment:
    start: dt.datetime
    end: dt.datetime
    ids: Tuple[Any, ...]


@dataclass(frozen=True)
class LayoutConfig:
    """Rendering parameters for one pass over a day's timeline."""

    container_width: float
    hour_height: float
    start_hour: int
    end_hour: int = 24
    gutter: float = 0.0
    min_visual_minutes: int = 30
    default_duration_minutes: int = 60
    min_duration_minutes: int = 15

    def __post_init__(self) -> None:
        if self.container_width < 0:
            raise ValueError("container_width must be >= 0")
        if self.hour_height <= 0:
            raise ValueError("hour_height must be > 0")
        if not 0 <= self.start_hour <= 23:
            raise ValueError(f"start_hour must be 0..23, got {self.start_hour}")
        if not self.start_hour < self.end_hour <= 24:
            raise ValueError(f"end_hour must be in ({self.start_hour}, 24], got {self.end_hour}")
        if self.gutter < 0:
            raise ValueError("gutter must be >= 0")
        if self.min_visual_minutes < 0 or self.default_duration_minutes <= 0 or self.min_duration_minutes <= 0:
            raise ValueError("minute settings must be positive")

    @property
    def pixels_per_minute(self) -> float:
        return self.hour_height / 60.0

    @property
    def min_height(self) -> float:
        return self.min_visual_minutes * self.pixels_per_minute

    @property
    def first_minute(self) -> int:
        return self.start_hour * 60

    @property
    def last_minute(self) -> int:
        # last selectable minute of the visible window
        return self.end_hour * 60 - 1


@dataclass(frozen=True)
class DragSession:
    mode: str
    anchor: dt.datetime
    current: dt.datetime
    start: dt.datetime
    end: dt.datetime
    min_duration: dt.timedelta
    target: Optional[ScheduledItem] = None
    edge: Optional[str] = None

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class DragUpdate:
    start: dt.datetime
    end: dt.datetime
    boundary_crossed: bool


@dataclass(frozen=True)
class DragResult:
    mode: str
    start: dt.datetime
    end: dt.datetime
    target: Optional[ScheduledItem] = None
    edge: Optional[str] = None
    delta: dt.timedelta = dt.timedelta(0)


@dataclass(frozen=True)
class Suggestion:
    type: str
    text: str
    icon: str
    start: int = 0  # source offset of the recognized fragment


DATE_TODAY = "today"
DATE_TOMORROW = "tomorrow"
DATE_CUSTOM = "custom"


@dataclass(frozen=True)
class DateOption:
    """today | tomorrow | custom(date), the shape the date picker uses."""

    kind: str
    date: dt.date

    @classmethod
    def for_date(cls, d: dt.date, today: dt.date) -> "DateOption":
        if d == today:
            return cls(DATE_TODAY, d)
        if d == today + dt.timedelta(days=1):
            return cls(DATE_TOMORROW, d)
        return cls(DATE_CUSTOM, d)


@dataclass(frozen=True)
class ParsedTask:
    clean_title: str
    due_date: Optional[dt.datetime] = None
    date_option: Optional[DateOption] = None
    scheduled_time: Optional[dt.datetime] = None
    scheduled_end_time: Optional[dt.datetime] = None
    duration_seconds: Optional[int] = None
    priority: int = PRIORITY_NONE
    list_hint: Optional[str] = None
    recurrence: Optional[RecurrenceRule] = None
    suggestions: Tuple[Suggestion, ...] = ()

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None

    @property
    def is_deadline_only(self) -> bool:
        return (
            self.scheduled_time is not None
            and self.scheduled_end_time is None
            and self.duration_seconds is None
        )


__all__ = [
    "CREATING",
    "RESIZING",
    "EDGE_START",
    "EDGE_END",
    "ScheduledItem",
    "Rect",
    "PlacedEvent",
    "OverlapSegment",
    "LayoutConfig",
    "DragSession",
    "DragUpdate",
    "DragResult",
    "Suggestion",
    "DateOption",
    "ParsedTask",
]
