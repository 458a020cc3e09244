# tasky/layout.py
"""Side-by-side layout of one day's scheduled items on a vertical timeline.

Overlapping items are grouped into clusters with a single sweep, then packed
into lanes (columns) greedily: the standard interval-graph colouring used by
calendar day views.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .interval import wall_minutes, y_offset_for_time
from .model import LayoutConfig, OverlapSegment, PlacedEvent, Rect, ScheduledItem


@dataclass(frozen=True)
class _Span:
    item: ScheduledItem
    start: dt.datetime
    end: dt.datetime
    start_key: int
    end_key: int
    has_end: bool


def _effective_span(item: ScheduledItem, cfg: LayoutConfig) -> Optional[_Span]:
    start = item.start
    if start is None:
        return None

    end = item.end
    has_end = end is not None
    if end is None:
        end = start + dt.timedelta(minutes=cfg.default_duration_minutes)

    start_key = wall_minutes(start)
    end_key = wall_minutes(end)
    if end_key < start_key:
        start, end = end, start
        start_key, end_key = end_key, start_key
    if end_key == start_key:
        end = start + dt.timedelta(minutes=cfg.min_duration_minutes)
        end_key = start_key + cfg.min_duration_minutes

    return _Span(item=item, start=start, end=end, start_key=start_key, end_key=end_key, has_end=has_end)


def _sorted_spans(spans: List[_Span]) -> List[_Span]:
    try:
        return sorted(spans, key=lambda s: (s.start_key, s.end_key, s.item.id))
    except TypeError:
        # ids of mixed/incomparable types: order them by their text form instead
        return sorted(spans, key=lambda s: (s.start_key, s.end_key, type(s.item.id).__name__, str(s.item.id)))


def _clusters(spans: List[_Span]) -> List[List[_Span]]:
    groups: List[List[_Span]] = []
    cur: List[_Span] = []
    max_end = 0
    for sp in spans:
        if cur and sp.start_key < max_end:
            cur.append(sp)
            max_end = max(max_end, sp.end_key)
            continue
        if cur:
            groups.append(cur)
        cur = [sp]
        max_end = sp.end_key
    if cur:
        groups.append(cur)
    return groups


def _assign_lanes(group: List[_Span]) -> Tuple[List[int], int]:
    lanes: List[int] = []  # end key of each lane's last occupant
    assigned: List[int] = []
    for sp in group:
        lane_index = -1
        for i, lane_end in enumerate(lanes):
            if lane_end <= sp.start_key:
                lane_index = i
                break
        if lane_index < 0:
            lane_index = len(lanes)
            lanes.append(sp.end_key)
        else:
            lanes[lane_index] = sp.end_key
        assigned.append(lane_index)
    return assigned, max(1, len(lanes))


def _frame(sp: _Span, column: int, total: int, cfg: LayoutConfig) -> Rect:
    y = y_offset_for_time(sp.start, cfg)
    if sp.has_end:
        hours = (sp.end - sp.start).total_seconds() / 3600.0
        height = max(cfg.min_height, hours * cfg.hour_height)
    else:
        height = cfg.min_height

    col_width = cfg.container_width / total
    x = column * col_width + cfg.gutter
    width = max(0.0, col_width - 2 * cfg.gutter)
    return Rect(x=x, y=y, width=width, height=height)


def split_scheduled(items: Iterable[ScheduledItem]) -> Tuple[List[ScheduledItem], List[ScheduledItem]]:
    """(items with a start time, items without one)."""
    scheduled: List[ScheduledItem] = []
    unscheduled: List[ScheduledItem] = []
    for it in items:
        (scheduled if it.start is not None else unscheduled).append(it)
    return scheduled, unscheduled


def items_for_day(items: Iterable[ScheduledItem], day: dt.date) -> List[ScheduledItem]:
    return [it for it in items if it.start is not None and it.start.date() == day]


def layout(items: Iterable[ScheduledItem], config: LayoutConfig) -> List[PlacedEvent]:
    """Place every item that has a start time.

    Returns one PlacedEvent per placed item in (start, end, id) order. Items
    without a start are skipped; use `split_scheduled` to get them back.

    Overlap and geometry both use wall-clock minutes, so aware items are
    compared by their own local time. Convert them to one zone first.
    """
    spans = [sp for sp in (_effective_span(it, config) for it in items) if sp is not None]
    if not spans:
        return []

    out: List[PlacedEvent] = []
    for cluster_id, group in enumerate(_clusters(_sorted_spans(spans))):
        columns, total = _assign_lanes(group)
        for sp, column in zip(group, columns):
            out.append(
                PlacedEvent(
                    item=sp.item,
                    rect=_frame(sp, column, total, config),
                    column=column,
                    total_columns=total,
                    cluster_id=cluster_id,
                    start=sp.start,
                    end=sp.end,
                )
            )
    return out


def overlap_segments(placed: Sequence[PlacedEvent]) -> List[OverlapSegment]:
    """Time segments covered by two or more placed events (sweep line)."""
    pts: List[Tuple[int, int, int, dt.datetime]] = []
    for i, ev in enumerate(placed):
        pts.append((wall_minutes(ev.start), +1, i, ev.start))
        pts.append((wall_minutes(ev.end), -1, i, ev.end))
    # ends before starts at the same minute: touching items do not overlap
    pts.sort(key=lambda p: (p[0], p[1], p[2]))

    segments: List[OverlapSegment] = []
    last_key: Optional[Tuple[int, ...]] = None
    active: set[int] = set()
    prev: Optional[Tuple[int, dt.datetime]] = None

    for key, kind, idx, when in pts:
        if prev is not None and key > prev[0] and len(active) >= 2:
            members = tuple(sorted(active))
            ids: Tuple[Any, ...] = tuple(placed[i].item.id for i in members)
            if segments and last_key == members and wall_minutes(segments[-1].end) == prev[0]:
                segments[-1] = OverlapSegment(start=segments[-1].start, end=when, ids=ids)
            else:
                segments.append(OverlapSegment(start=prev[1], end=when, ids=ids))
            last_key = members

        if kind == +1:
            active.add(idx)
        else:
            active.discard(idx)
        prev = (key, when)

    return segments


class EventLayoutEngine:
    """Layout with a fixed config; build a new one per render pass."""

    def __init__(self, config: LayoutConfig) -> None:
        self.config = config

    def layout(self, items: Iterable[ScheduledItem]) -> List[PlacedEvent]:
        return layout(items, self.config)

    def layout_day(self, items: Iterable[ScheduledItem], day: dt.date) -> List[PlacedEvent]:
        return layout(items_for_day(items, day), self.config)
