#!/usr/bin/env python3
"""Lay out one day's items and print placements as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from tasky.layout import EventLayoutEngine, overlap_segments, split_scheduled
from tasky.model import LayoutConfig
from tasky.schema import PayloadError, dumps_json, items_from_payload, placed_to_dict, segment_to_dict
from tasky.util.console import setup_logging
from tasky.util.timeparse import parse_date_yyyy_mm_dd, parse_hour_window
from tasky.util.tz import normalize_tz_name, resolve_tz, today_date

log = logging.getLogger(__name__)


def _die(msg: str, rc: int = 2) -> int:
    print(f"[tasky-layout] ERROR: {msg}", file=sys.stderr)
    return rc


def _read_input(src: str) -> Any:
    if src == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(src).read_text(encoding="utf-8"))


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="tasky-layout",
        description="Compute side-by-side timeline placements for one day's scheduled items.",
    )
    ap.add_argument("--in", dest="in_json", default="-", help="Items JSON path, or - for stdin (default: -)")
    ap.add_argument("--day", default=None, help="Day to lay out, YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--hours",
        default=os.getenv("TASKY_HOURS", "06-24"),
        help="Visible hour window, e.g. 06-24 (default: env TASKY_HOURS or 06-24)",
    )
    ap.add_argument(
        "--tz",
        default=os.getenv("TASKY_TZ", "local"),
        help="Timezone for naive timestamps and 'today' (default: env TASKY_TZ or 'local')",
    )
    ap.add_argument("--width", type=float, default=320.0, help="Container width in px (default: 320)")
    ap.add_argument("--hour-height", type=float, default=60.0, help="Pixels per hour (default: 60)")
    ap.add_argument("--gutter", type=float, default=0.0, help="Horizontal padding per side in px (default: 0)")
    ap.add_argument("--all-days", action="store_true", help="Lay out every scheduled item, not just --day")
    ap.add_argument("--out", default=None, help="Write JSON here instead of stdout")
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
        cfg = LayoutConfig(
            container_width=ns.width,
            hour_height=ns.hour_height,
            start_hour=first_hour,
            end_hour=last_hour,
            gutter=ns.gutter,
        )
    except ValueError as e:
        return _die(str(e))

    try:
        raw = _read_input(ns.in_json)
    except (OSError, json.JSONDecodeError) as e:
        return _die(f"Failed to read items JSON: {ns.in_json} ({e})")

    try:
        items = items_from_payload(raw, tz=tz)
    except PayloadError as e:
        print("[tasky-layout] FAIL", file=sys.stderr)
        for err in e.errors:
            print(f"  - {err}", file=sys.stderr)
        return 3

    scheduled, unscheduled = split_scheduled(items)
    engine = EventLayoutEngine(cfg)
    placed = engine.layout(scheduled) if ns.all_days else engine.layout_day(scheduled, day)
    log.debug("placed %d of %d scheduled items (%d unscheduled)", len(placed), len(scheduled), len(unscheduled))

    doc: Dict[str, Any] = {
        "day": None if ns.all_days else day.isoformat(),
        "hours": [first_hour, last_hour],
        "placed": [placed_to_dict(ev) for ev in placed],
        "overlaps": [segment_to_dict(s) for s in overlap_segments(placed)],
        "unscheduled": [it.id for it in unscheduled],
    }
    text = dumps_json(doc, pretty=ns.pretty)

    if ns.out:
        outp = Path(ns.out)
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_text(text + "\n", encoding="utf-8", newline="\n")
        log.info("wrote %s", outp)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
