"""tasky.api

Stable *library* entrypoint for the Tasky calendar core.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, List, Optional, Union

from .drag import DragSessionController, DragStateError, exceeds_drag_threshold, slot_for_tap
from .interval import clamp_to_visible_range, minutes_for_y_offset, round_to_nearest, time_for_y_offset, y_offset_for_time
from .layout import EventLayoutEngine, layout, overlap_segments, split_scheduled
from .model import (
    CREATING,
    EDGE_END,
    EDGE_START,
    RESIZING,
    DateOption,
    DragResult,
    DragSession,
    DragUpdate,
    LayoutConfig,
    OverlapSegment,
    ParsedTask,
    PlacedEvent,
    Rect,
    ScheduledItem,
    Suggestion,
)
from .parser import NaturalLanguageTaskParser, parse_task
from .recurrence import RecurrenceRule
from .schema import PayloadError, items_from_payload
from .util.clock import EN_GB, EN_US, CalendarLocale, FixedClock, SystemClock
from .util.duration import format_duration

JsonPath = Union[str, Path]


def load_items_from_json(path: JsonPath, *, tz: Optional[dt.tzinfo] = None) -> List[ScheduledItem]:
    """Read an items payload file (list or {"items": [...]}) into ScheduledItems."""
    p = Path(path)
    obj: Any = json.loads(p.read_text(encoding="utf-8"))
    return items_from_payload(obj, tz=tz)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "CREATING",
    "CalendarLocale",
    "DateOption",
    "DragResult",
    "DragSession",
    "DragSessionController",
    "DragStateError",
    "DragUpdate",
    "EDGE_END",
    "EDGE_START",
    "EN_GB",
    "EN_US",
    "EventLayoutEngine",
    "FixedClock",
    "LayoutConfig",
    "NaturalLanguageTaskParser",
    "OverlapSegment",
    "ParsedTask",
    "PayloadError",
    "PlacedEvent",
    "RESIZING",
    "Rect",
    "RecurrenceRule",
    "ScheduledItem",
    "Suggestion",
    "SystemClock",
    "clamp_to_visible_range",
    "exceeds_drag_threshold",
    "format_duration",
    "items_from_payload",
    "layout",
    "load_items_from_json",
    "minutes_for_y_offset",
    "overlap_segments",
    "parse_task",
    "round_to_nearest",
    "slot_for_tap",
    "split_scheduled",
    "time_for_y_offset",
    "y_offset_for_time",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
