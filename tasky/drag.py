# tasky/drag.py
"""Drag-to-create and drag-to-resize on the day timeline.

The controller is a two-state machine (idle / active). Pointer Y values are
in timeline content coordinates (0 = top of the first visible hour); every
sample is converted to a time and snapped to the grid before use.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Optional, Tuple

from .interval import DayLike, day_window, round_to_nearest, time_for_y_offset
from .model import (
    CREATING,
    EDGE_END,
    EDGE_START,
    RESIZING,
    DragResult,
    DragSession,
    DragUpdate,
    LayoutConfig,
    ScheduledItem,
)

SNAP_MINUTES = 15
MIN_DURATION_MINUTES = 15
DEFAULT_ITEM_MINUTES = 60
TAP_DURATION_MINUTES = 60
DRAG_THRESHOLD_PX = 5.0


class DragStateError(RuntimeError):
    """Controller message received in the wrong state (gesture wiring bug)."""


def exceeds_drag_threshold(start_y: float, y: float, threshold: float = DRAG_THRESHOLD_PX) -> bool:
    """True once the pointer has moved far enough for a drag session to begin."""
    return abs(float(y) - float(start_y)) >= threshold


def slot_for_tap(
    pointer_y: float,
    config: LayoutConfig,
    day: DayLike,
    *,
    snap_minutes: int = SNAP_MINUTES,
    duration_minutes: int = TAP_DURATION_MINUTES,
    tzinfo: Optional[dt.tzinfo] = None,
) -> Tuple[dt.datetime, dt.datetime]:
    """Tap-to-create: snapped start under the pointer plus a default duration."""
    start = round_to_nearest(time_for_y_offset(pointer_y, config, day, tzinfo), snap_minutes)
    return start, start + dt.timedelta(minutes=duration_minutes)


def _item_range(item: ScheduledItem, min_duration: dt.timedelta) -> Tuple[dt.datetime, dt.datetime]:
    start = item.start
    if start is None:
        raise ValueError(f"cannot resize unscheduled item {item.id!r}")
    end = item.end if item.end is not None else start + dt.timedelta(minutes=DEFAULT_ITEM_MINUTES)
    if end < start:
        start, end = end, start
    if end - start < min_duration:
        end = start + min_duration
    return start, end


class DragSessionController:
    def __init__(
        self,
        config: LayoutConfig,
        day: DayLike,
        *,
        snap_minutes: int = SNAP_MINUTES,
        min_duration_minutes: int = MIN_DURATION_MINUTES,
        tzinfo: Optional[dt.tzinfo] = None,
    ) -> None:
        if min_duration_minutes <= 0:
            raise ValueError("min_duration_minutes must be > 0")
        self.config = config
        self.day = day
        self.snap_minutes = int(snap_minutes)
        self.min_duration = dt.timedelta(minutes=int(min_duration_minutes))
        self.tzinfo = tzinfo
        self._window = day_window(day, config, tzinfo)
        self._session: Optional[DragSession] = None
        self._last_snapped: Optional[dt.datetime] = None

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def _snapped(self, pointer_y: float) -> dt.datetime:
        t = round_to_nearest(time_for_y_offset(pointer_y, self.config, self.day, self.tzinfo), self.snap_minutes)
        lo, hi = self._window
        return max(lo, min(hi, t))

    def _require_active(self, op: str) -> DragSession:
        if self._session is None:
            raise DragStateError(f"{op}() called with no active drag session")
        return self._session

    def begin(
        self,
        pointer_y: float,
        mode: str,
        target: Optional[ScheduledItem] = None,
        edge: Optional[str] = None,
    ) -> DragSession:
        if self._session is not None:
            raise DragStateError("begin() called while a drag session is already active")

        t = self._snapped(pointer_y)

        if mode == CREATING:
            lo, hi = self._window
            anchor = min(t, hi - self.min_duration)
            anchor = max(anchor, lo)
            session = DragSession(
                mode=CREATING,
                anchor=anchor,
                current=anchor,
                start=anchor,
                end=anchor + self.min_duration,
                min_duration=self.min_duration,
            )
            self._last_snapped = anchor
        elif mode == RESIZING:
            if target is None:
                raise ValueError("resizing needs a target item")
            if edge not in (EDGE_START, EDGE_END):
                raise ValueError(f"resizing edge must be {EDGE_START!r} or {EDGE_END!r}, got {edge!r}")
            start, end = _item_range(target, self.min_duration)
            session = DragSession(
                mode=RESIZING,
                anchor=start if edge == EDGE_END else end,
                current=t,
                start=start,
                end=end,
                min_duration=self.min_duration,
                target=target,
                edge=edge,
            )
            self._last_snapped = t
        else:
            raise ValueError(f"Unknown drag mode: {mode!r}")

        self._session = session
        return session

    def update(self, pointer_y: float) -> DragUpdate:
        s = self._require_active("update")
        t = self._snapped(pointer_y)
        crossed = t != self._last_snapped
        self._last_snapped = t

        if s.mode == CREATING:
            start, end = self._creating_range(s.anchor, t)
        elif s.edge == EDGE_END:
            start = s.anchor
            end = max(t, s.anchor + self.min_duration)
        else:
            start = min(t, s.anchor - self.min_duration)
            end = s.anchor

        self._session = replace(s, current=t, start=start, end=end)
        return DragUpdate(start=start, end=end, boundary_crossed=crossed)

    def _creating_range(self, anchor: dt.datetime, t: dt.datetime) -> Tuple[dt.datetime, dt.datetime]:
        lo, _hi = self._window
        if t < anchor:
            # dragging upward: the anchor becomes the end
            start, end = t, anchor
            if end - start < self.min_duration:
                start = end - self.min_duration
            if start < lo:
                start, end = lo, lo + self.min_duration
            return start, end
        start, end = anchor, max(t, anchor + self.min_duration)
        return start, end

    def end(self) -> DragResult:
        s = self._require_active("end")
        delta = dt.timedelta(0)
        if s.mode == RESIZING and s.target is not None:
            orig_start, orig_end = _item_range(s.target, self.min_duration)
            delta = (s.end - orig_end) if s.edge == EDGE_END else (s.start - orig_start)

        self._session = None
        self._last_snapped = None
        return DragResult(mode=s.mode, start=s.start, end=s.end, target=s.target, edge=s.edge, delta=delta)

    def cancel(self) -> bool:
        """Drop the session without a result; returns whether one was active."""
        was_active = self._session is not None
        self._session = None
        self._last_snapped = None
        return was_active
