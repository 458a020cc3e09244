# tasky/schema.py
"""JSON payload I/O for the command-line tools.

Input items look like:

    {"id": "a", "start": "2025-03-10T09:00", "end": "2025-03-10T10:00",
     "completed": false, "title": "Standup"}

either as a bare list or wrapped as {"items": [...]}. Output helpers turn
core results into plain JSON-ready dicts (ISO-8601 strings for instants).
"""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from .model import DragResult, DragUpdate, OverlapSegment, ParsedTask, PlacedEvent, ScheduledItem
from .util.timeparse import parse_iso_datetime

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


class PayloadError(ValueError):
    """Raised when an items payload fails validation; `errors` lists every problem."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) if self.errors else "invalid payload")


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _instant(raw: Any, label: str, errs: List[str], tz: Optional[dt.tzinfo]) -> Optional[dt.datetime]:
    if raw is None:
        return None
    if not isinstance(raw, str) or not raw.strip():
        errs.append(f"{label} must be an ISO-8601 string or null")
        return None
    try:
        return parse_iso_datetime(raw, tz)
    except ValueError:
        errs.append(f"{label} is not a valid ISO-8601 datetime: {raw!r}")
        return None


def items_from_payload(obj: Any, *, tz: Optional[dt.tzinfo] = None) -> List[ScheduledItem]:
    """Build ScheduledItems from a decoded JSON payload.

    Naive timestamps get `tz` attached. All problems are collected and raised
    together as one PayloadError.
    """
    if isinstance(obj, dict):
        obj = obj.get("items")
    if not isinstance(obj, list):
        raise PayloadError(["payload must be a list of items or an object with an 'items' list"])

    errs: List[str] = []
    out: List[ScheduledItem] = []
    seen: set = set()
    for i, raw in enumerate(obj):
        label = f"items[{i}]"
        if not isinstance(raw, dict):
            errs.append(f"{label} must be an object")
            continue

        item_id = raw.get("id")
        ok_id = isinstance(item_id, (str, int)) and not isinstance(item_id, bool) and item_id != ""
        _require(ok_id, f"{label}.id must be a non-empty string or int", errs)
        if ok_id:
            _require(item_id not in seen, f"{label}.id duplicates an earlier item: {item_id!r}", errs)
            seen.add(item_id)

        start = _instant(raw.get("start"), f"{label}.start", errs, tz)
        end = _instant(raw.get("end"), f"{label}.end", errs, tz)
        if start is not None and end is not None:
            _require(
                (start.tzinfo is None) == (end.tzinfo is None),
                f"{label}: start and end must both be naive or both be aware",
                errs,
            )

        completed = raw.get("completed", False)
        _require(isinstance(completed, bool), f"{label}.completed must be a boolean", errs)
        title = raw.get("title", "")
        _require(isinstance(title, str), f"{label}.title must be a string", errs)

        if ok_id:
            out.append(
                ScheduledItem(
                    id=item_id,
                    start=start,
                    end=end,
                    completed=bool(completed),
                    title=title if isinstance(title, str) else "",
                )
            )

    if errs:
        raise PayloadError(errs)
    return out


def _iso(ts: Optional[dt.datetime]) -> Optional[str]:
    return ts.isoformat() if ts is not None else None


def placed_to_dict(ev: PlacedEvent) -> Dict[str, Any]:
    return {
        "id": ev.item.id,
        "title": ev.item.title,
        "completed": ev.item.completed,
        "start": _iso(ev.start),
        "end": _iso(ev.end),
        "column": ev.column,
        "total_columns": ev.total_columns,
        "cluster_id": ev.cluster_id,
        "relative_x": ev.relative_x,
        "relative_width": ev.relative_width,
        "overlap": ev.overlaps,
        "rect": {"x": ev.rect.x, "y": ev.rect.y, "width": ev.rect.width, "height": ev.rect.height},
    }


def segment_to_dict(seg: OverlapSegment) -> Dict[str, Any]:
    return {"start": _iso(seg.start), "end": _iso(seg.end), "ids": list(seg.ids)}


def parsed_to_dict(p: ParsedTask) -> Dict[str, Any]:
    rec = None
    if p.recurrence is not None:
        rec = {
            "frequency": p.recurrence.frequency,
            "interval": p.recurrence.interval,
            "weekdays": list(p.recurrence.weekdays),
            "day_of_month": p.recurrence.day_of_month,
            "text": p.recurrence.display_text,
        }
    return {
        "clean_title": p.clean_title,
        "due_date": _iso(p.due_date),
        "date_option": p.date_option.kind if p.date_option is not None else None,
        "scheduled_time": _iso(p.scheduled_time),
        "scheduled_end_time": _iso(p.scheduled_end_time),
        "duration_seconds": p.duration_seconds,
        "priority": p.priority,
        "list_hint": p.list_hint,
        "recurrence": rec,
        "suggestions": [{"type": s.type, "text": s.text, "icon": s.icon} for s in p.suggestions],
    }


def drag_update_to_dict(u: DragUpdate) -> Dict[str, Any]:
    return {"start": _iso(u.start), "end": _iso(u.end), "boundary_crossed": u.boundary_crossed}


def drag_result_to_dict(r: DragResult) -> Dict[str, Any]:
    return {
        "mode": r.mode,
        "start": _iso(r.start),
        "end": _iso(r.end),
        "target": r.target.id if r.target is not None else None,
        "edge": r.edge,
        "delta_minutes": int(r.delta.total_seconds() // 60),
    }


def dumps_json(obj: Any, *, pretty: bool = False) -> str:
    if orjson is not None:
        opts = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(obj, option=opts).decode("utf-8")
    if pretty:
        return json.dumps(obj, ensure_ascii=False, indent=2)
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
