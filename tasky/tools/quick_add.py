#!/usr/bin/env python3
"""Parse quick-add text and print the structured task as JSON."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List

from tasky.parser import NaturalLanguageTaskParser
from tasky.schema import dumps_json, parsed_to_dict
from tasky.util.clock import EN_GB, EN_US, FixedClock, SystemClock
from tasky.util.console import setup_logging
from tasky.util.timeparse import parse_iso_datetime
from tasky.util.tz import normalize_tz_name, resolve_tz

log = logging.getLogger(__name__)

_LOCALES = {"en_US": EN_US, "en_GB": EN_GB}


def _die(msg: str, rc: int = 2) -> int:
    print(f"[tasky-parse] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="tasky-parse",
        description="Extract date, time, duration, priority, list and recurrence from quick-add text.",
    )
    ap.add_argument("text", nargs="*", help="Text to parse (default: read lines from stdin)")
    ap.add_argument("--now", default=None, help="Pin 'now' to this ISO-8601 instant (reproducible output)")
    ap.add_argument(
        "--tz",
        default=os.getenv("TASKY_TZ", "local"),
        help="Timezone for 'now' (default: env TASKY_TZ or 'local')",
    )
    ap.add_argument("--locale", choices=sorted(_LOCALES), default="en_US", help="Week/clock conventions (default: en_US)")
    ap.add_argument("--roll-past-times", action="store_true", help="Move already-past times without a date to tomorrow")
    ap.add_argument("--pretty", action="store_true", help="Indent JSON output")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    ns = ap.parse_args(argv)

    setup_logging(ns.verbose)

    try:
        tz_name = normalize_tz_name(ns.tz)
        tz = resolve_tz(tz_name)
    except ValueError as e:
        return _die(f"Invalid --tz value: {e}")

    if ns.now:
        try:
            clock = FixedClock(parse_iso_datetime(ns.now, tz))
        except ValueError as e:
            return _die(f"Invalid --now value: {ns.now!r} ({e})")
    else:
        clock = SystemClock(tz_name)

    parser = NaturalLanguageTaskParser(clock=clock, locale=_LOCALES[ns.locale], roll_past_times=ns.roll_past_times)

    lines = [" ".join(ns.text)] if ns.text else [ln.rstrip("\n") for ln in sys.stdin if ln.strip()]
    if not lines:
        return _die("Provide text as arguments or on stdin")

    for line in lines:
        parsed = parser.parse(line)
        log.debug("%r -> %d suggestion(s)", line, len(parsed.suggestions))
        print(dumps_json(parsed_to_dict(parsed), pretty=ns.pretty))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
