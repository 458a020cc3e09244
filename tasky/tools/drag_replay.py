#!/usr/bin/env python3
"""Replay a pointer gesture through the drag controller.

The first Y sample is the press location. If no later sample moves past the
drag threshold the gesture is treated as a tap (default-length slot);
otherwise a session begins at the press and every sample is fed to update().
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from tasky.drag import (
    DRAG_THRESHOLD_PX,
    MIN_DURATION_MINUTES,
    SNAP_MINUTES,
    TAP_DURATION_MINUTES,
    DragSessionController,
    exceeds_drag_threshold,
    slot_for_tap,
)
from tasky.model import CREATING, EDGE_END, EDGE_START, RESIZING, LayoutConfig, ScheduledItem
from tasky.schema import drag_result_to_dict, drag_update_to_dict, dumps_json
from tasky.util.console import setup_logging
from tasky.util.timeparse import parse_date_yyyy_mm_dd, parse_hour_window, parse_iso_datetime
from tasky.util.tz import normalize_tz_name, resolve_tz, today_date

log = logging.getLogger(__name__)


def _die(msg: str, rc: int = 2) -> int:
    print(f"[tasky-drag] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="tasky-drag",
        description="Replay pointer Y samples (timeline px) through drag-to-create / drag-to-resize.",
    )
    ap.add_argument("samples", nargs="+", type=float, help="Pointer Y samples; the first is the press location")
    ap.add_argument("--mode", choices=[CREATING, RESIZING], default=CREATING, help="Drag mode (default: creating)")
    ap.add_argument("--item-start", default=None, help="Resized item start (ISO-8601), required with --mode resizing")
    ap.add_argument("--item-end", default=None, help="Resized item end (ISO-8601; default start + 60 min)")
    ap.add_argument("--edge", choices=[EDGE_START, EDGE_END], default=EDGE_END, help="Edge being resized (default: end)")
    ap.add_argument("--day", default=None, help="Timeline day, YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--hours",
        default=os.getenv("TASKY_HOURS", "06-24"),
        help="Visible hour window, e.g. 06-24 (default: env TASKY_HOURS or 06-24)",
    )
    ap.add_argument(
        "--tz",
        default=os.getenv("TASKY_TZ", "local"),
        help="Timezone for the timeline day (default: env TASKY_TZ or 'local')",
    )
    ap.add_argument("--hour-height", type=float, default=60.0, help="Pixels per hour (default: 60)")
    ap.add_argument("--snap", type=int, default=SNAP_MINUTES, help=f"Snap minutes (default: {SNAP_MINUTES})")
    ap.add_argument(
        "--min-duration",
        type=int,
        default=MIN_DURATION_MINUTES,
        help=f"Minimum duration minutes (default: {MIN_DURATION_MINUTES})",
    )
    ap.add_argument("--cancel", action="store_true", help="Cancel instead of ending the session")
    ap.add_argument("--pretty", action="store_true", help="Indent JSON output")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    ns = ap.parse_args(argv)

    setup_logging(ns.verbose)

    try:
        tz = resolve_tz(normalize_tz_name(ns.tz))
    except ValueError as e:
        return _die(f"Invalid --tz value: {e}")

    try:
        first_hour, last_hour = parse_hour_window(ns.hours)
        day = parse_date_yyyy_mm_dd(ns.day) if ns.day else today_date(tz)
        cfg = LayoutConfig(container_width=0.0, hour_height=ns.hour_height, start_hour=first_hour, end_hour=last_hour)
        ctl = DragSessionController(
            cfg,
            day,
            snap_minutes=ns.snap,
            min_duration_minutes=ns.min_duration,
            tzinfo=tz,
        )
    except ValueError as e:
        return _die(str(e))

    target: Optional[ScheduledItem] = None
    if ns.mode == RESIZING:
        if not ns.item_start:
            return _die("--item-start is required with --mode resizing")
        try:
            start = parse_iso_datetime(ns.item_start, tz)
            end = parse_iso_datetime(ns.item_end, tz) if ns.item_end else None
        except ValueError as e:
            return _die(f"Invalid item time: {e}")
        target = ScheduledItem(id="item", start=start, end=end)

    press, rest = ns.samples[0], ns.samples[1:]
    doc: Dict[str, Any] = {"mode": ns.mode}

    if ns.mode == CREATING and not any(exceeds_drag_threshold(press, y, DRAG_THRESHOLD_PX) for y in rest):
        start, end = slot_for_tap(press, cfg, day, snap_minutes=ns.snap, duration_minutes=TAP_DURATION_MINUTES, tzinfo=tz)
        log.debug("no sample passed the %.0fpx threshold; treating as tap", DRAG_THRESHOLD_PX)
        doc.update({"tap": True, "start": start.isoformat(), "end": end.isoformat()})
        print(dumps_json(doc, pretty=ns.pretty))
        return 0

    try:
        ctl.begin(press, ns.mode, target=target, edge=ns.edge if ns.mode == RESIZING else None)
    except ValueError as e:
        return _die(str(e))

    updates = [ctl.update(y) for y in rest]
    doc["tap"] = False
    doc["updates"] = [drag_update_to_dict(u) for u in updates]
    log.debug("%d update(s), %d boundary crossing(s)", len(updates), sum(1 for u in updates if u.boundary_crossed))

    if ns.cancel:
        ctl.cancel()
        doc["result"] = None
    else:
        doc["result"] = drag_result_to_dict(ctl.end())

    print(dumps_json(doc, pretty=ns.pretty))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
