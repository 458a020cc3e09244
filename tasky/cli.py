"""`tasky` command: dispatch to the per-tool entrypoints.

    tasky layout ...   -> tasky.tools.layout_day
    tasky parse ...    -> tasky.tools.quick_add
    tasky drag ...     -> tasky.tools.drag_replay
"""

from __future__ import annotations

import sys
from typing import Callable, Dict, List

from .tools import drag_replay, layout_day, quick_add

_COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "layout": layout_day.main,
    "parse": quick_add.main,
    "drag": drag_replay.main,
}

_USAGE = """usage: tasky <command> [args...]

Commands:
  layout   Lay out one day's items as side-by-side columns (JSON in/out)
  parse    Parse quick-add text into a structured task
  drag     Replay a drag-to-create / drag-to-resize gesture

Run `tasky <command> --help` for command options.
"""


def main(argv: List[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in ("-h", "--help", "help"):
        print(_USAGE, end="")
        return 0

    cmd, rest = args[0], args[1:]
    fn = _COMMANDS.get(cmd)
    if fn is None:
        print(f"[tasky] ERROR: unknown command: {cmd!r}", file=sys.stderr)
        print(_USAGE, end="", file=sys.stderr)
        return 2
    return fn(rest)


if __name__ == "__main__":
    raise SystemExit(main())
