# tasky/interval.py
"""Time <-> timeline arithmetic shared by the layout engine and the drag controller.

Everything here is pure. Minute-of-day values are integers from midnight;
pixel offsets are measured from the top of the first visible hour.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Optional, Tuple, Union

from .model import LayoutConfig

MIN_US = 60_000_000

# Absorbs float error in y -> minute conversion (well below one pixel).
_Y_EPSILON = 1e-6

DayLike = Union[dt.date, dt.datetime]


def minute_of_day(ts: dt.datetime) -> int:
    return ts.hour * 60 + ts.minute


def wall_minutes(ts: dt.datetime) -> int:
    """Integer minute key on the wall clock; seconds are dropped.

    Overlap decisions compare these keys so sub-minute noise cannot make two
    adjacent items overlap.
    """
    return ts.toordinal() * 1440 + ts.hour * 60 + ts.minute


def _midnight(ts: dt.datetime) -> dt.datetime:
    return ts.replace(hour=0, minute=0, second=0, microsecond=0)


def at_minute(day: DayLike, minute: int, tzinfo: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Datetime `minute` minutes after midnight of `day` (minute may reach 1440)."""
    if isinstance(day, dt.datetime):
        if tzinfo is None:
            tzinfo = day.tzinfo
        day = day.date()
    base = dt.datetime(day.year, day.month, day.day, tzinfo=tzinfo)
    return base + dt.timedelta(minutes=int(minute))


def round_to_nearest(ts: dt.datetime, minutes: int) -> dt.datetime:
    """Snap to the nearest multiple of `minutes` after midnight; ties round up."""
    if minutes <= 0:
        return ts
    elapsed_us = (ts.hour * 3600 + ts.minute * 60 + ts.second) * 1_000_000 + ts.microsecond
    step_us = int(minutes) * MIN_US
    q, r = divmod(elapsed_us, step_us)
    if r * 2 >= step_us:
        q += 1
    return _midnight(ts) + dt.timedelta(minutes=q * int(minutes))


def clamp_to_visible_range(ts: dt.datetime, first_hour: int, last_hour: int) -> dt.datetime:
    """Constrain the time of day into [first_hour:00, last_hour:00 - 1 minute]."""
    lo = int(first_hour) * 60
    hi = int(last_hour) * 60 - 1
    m = minute_of_day(ts)
    if lo <= m <= hi:
        return ts
    m = max(lo, min(hi, m))
    return _midnight(ts) + dt.timedelta(minutes=m)


def y_offset_for_time(ts: dt.datetime, config: LayoutConfig) -> float:
    """Pixels from the top of the first visible hour; negative before it (caller clips)."""
    minutes = minute_of_day(ts) + ts.second / 60.0 + ts.microsecond / float(MIN_US)
    return (minutes - config.first_minute) * config.pixels_per_minute


def minutes_for_y_offset(y: float, config: LayoutConfig) -> int:
    """Minute of day under pixel offset `y`, clamped to the visible window."""
    rel = math.floor(float(y) / config.pixels_per_minute + _Y_EPSILON)
    total = config.first_minute + rel
    return max(config.first_minute, min(config.last_minute, total))


def time_for_y_offset(
    y: float,
    config: LayoutConfig,
    day: DayLike,
    tzinfo: Optional[dt.tzinfo] = None,
) -> dt.datetime:
    return at_minute(day, minutes_for_y_offset(y, config), tzinfo)


def day_window(
    day: DayLike,
    config: LayoutConfig,
    tzinfo: Optional[dt.tzinfo] = None,
) -> Tuple[dt.datetime, dt.datetime]:
    """(first visible instant, end of the visible window) for `day`."""
    return (
        at_minute(day, config.start_hour * 60, tzinfo),
        at_minute(day, config.end_hour * 60, tzinfo),
    )
