# tasky/parser.py
"""Quick-add text parser.

Pulls dates, times, durations, priority, a #list hint and recurrence out of
free text typed into a quick-add field, and returns the cleaned title plus
one suggestion chip per recognized fragment.

Every rule runs against the same source string and yields candidates with
their spans. Overlapping candidates are resolved longest-first (ties go to
the more specific category), then each category keeps its best-ranked
survivor. Parsing never raises: a fragment that resolves to an impossible
value (Feb 31, 13pm) is simply not recognized.
"""

from __future__ import annotations

import calendar
import datetime as dt
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence, Tuple

from .interval import at_minute
from .model import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_NAMES,
    PRIORITY_NONE,
    SUGGEST_DATE,
    SUGGEST_DURATION,
    SUGGEST_LIST,
    SUGGEST_PRIORITY,
    SUGGEST_RECURRENCE,
    SUGGEST_TIME,
    DateOption,
    ParsedTask,
    Suggestion,
)
from .recurrence import DAILY, MONTHLY, WEEKDAYS, WEEKENDS, WEEKLY, YEARLY, RecurrenceRule
from .util.clock import EN_US, CalendarLocale, Clock, FixedClock, SystemClock
from .util.duration import format_duration, unit_seconds
from .util.tz import local_midnight

# Categories, most specific first (tie-break order for equal-length overlaps).
RECURRENCE = "recurrence"
TIME = "time"
DURATION = "duration"
DATE = "date"
PRIORITY = "priority"
LIST = "list"

_CATEGORY_ORDER = {c: i for i, c in enumerate((RECURRENCE, TIME, DURATION, DATE, PRIORITY, LIST))}

_ICONS = {
    SUGGEST_DATE: "calendar",
    SUGGEST_TIME: "clock",
    SUGGEST_DURATION: "timer",
    SUGGEST_PRIORITY: "flag.fill",
    SUGGEST_LIST: "list.bullet",
    SUGGEST_RECURRENCE: "repeat",
}

_WEEKDAY_NUMS = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

_MONTH_NUMS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Named fallback anchors, used only when no explicit clock time is present.
NAMED_TIMES: Dict[str, Tuple[int, int]] = {
    "midnight": (0, 0),
    "noon": (12, 0),
    "midday": (12, 0),
    "morning": (9, 0),
    "afternoon": (14, 0),
    "evening": (18, 0),
    "tonight": (20, 0),
    "night": (21, 0),
    "eod": (18, 0),
    "cob": (17, 0),
}

_WD_FULL = r"(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
_WD_ANY = r"(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday|mon|tues?|wed|thu(?:rs?)?|fri|sat|sun)"
_MONTHS = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_AMPM = r"(am|pm|a\.m\.|p\.m\.)(?![a-z])"
_H12 = r"(\d{1,2})(?::([0-5]\d))?"
_DUR_UNITS = r"(minutes?|mins?|hours?|hrs?|h)"


def _rx(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class _Candidate:
    category: str
    rank: int
    start: int
    end: int
    value: Any

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class _TimeValue:
    start_min: Optional[int] = None
    end_min: Optional[int] = None  # may exceed 1440 for ranges past midnight
    absolute: Optional[dt.datetime] = None

    @property
    def is_range(self) -> bool:
        return self.end_min is not None


@dataclass(frozen=True)
class _Context:
    now: dt.datetime
    today: dt.date
    locale: CalendarLocale


Handler = Callable[[re.Match, _Context], Any]


# --- value helpers -----------------------------------------------------------

def _to_24h(hour: int, ampm: Optional[str]) -> Optional[int]:
    if ampm is None:
        return hour if 0 <= hour <= 23 else None
    if not 1 <= hour <= 12:
        return None
    pm = ampm.lower().startswith("p")
    if pm and hour != 12:
        return hour + 12
    if not pm and hour == 12:
        return 0
    return hour


def _add_months(d: dt.date, months: int) -> dt.date:
    y, m0 = divmod(d.month - 1 + months, 12)
    year = d.year + y
    month = m0 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return dt.date(year, month, day)


def _next_weekday(today: dt.date, weekday: int) -> dt.date:
    """Next occurrence strictly after today."""
    days = (weekday - today.weekday()) % 7
    return today + dt.timedelta(days=days or 7)


def _month_num(s: str) -> Optional[int]:
    return _MONTH_NUMS.get(s.lower()[:3])


def _weekday_list(s: str) -> Tuple[int, ...]:
    out: List[int] = []
    for tok in re.split(r"\s*(?:,|\band\b|&)\s*", s.strip().lower()):
        num = _WEEKDAY_NUMS.get(tok.strip())
        if num is not None and num not in out:
            out.append(num)
    return tuple(out)


def _month_day(ctx: _Context, month: Optional[int], day: int, year: Optional[int] = None) -> Optional[dt.date]:
    if month is None:
        return None
    try:
        if year is not None:
            if year < 100:
                year += 2000
            return dt.date(year, month, day)
        d = dt.date(ctx.today.year, month, day)
        if d < ctx.today:
            d = dt.date(ctx.today.year + 1, month, day)
        return d
    except ValueError:
        return None


# --- rule handlers -----------------------------------------------------------

def _h_recur_fixed(frequency: str) -> Handler:
    return lambda m, ctx: RecurrenceRule(frequency=frequency)


def _h_recur_every_n(m: re.Match, ctx: _Context) -> Optional[RecurrenceRule]:
    raw = m.group(1).lower()
    n = 2 if raw == "other" else int(raw)
    if n < 1:
        return None
    unit = m.group(2).lower()
    freq = {"d": DAILY, "w": WEEKLY, "m": MONTHLY, "y": YEARLY}[unit[0]]
    return RecurrenceRule(frequency=freq, interval=n)


def _h_recur_weekdays(m: re.Match, ctx: _Context) -> Optional[RecurrenceRule]:
    days = _weekday_list(m.group(1))
    if not days:
        return None
    return RecurrenceRule(frequency=WEEKLY, weekdays=days)


def _h_recur_month_day(m: re.Match, ctx: _Context) -> Optional[RecurrenceRule]:
    day = int(m.group(1))
    if not 1 <= day <= 31:
        return None
    return RecurrenceRule(frequency=MONTHLY, day_of_month=day)


def _h_range(m: re.Match, ctx: _Context) -> Optional[_TimeValue]:
    sh, smin, sap, eh, emin, eap = m.groups()
    end_h = _to_24h(int(eh), eap)
    if end_h is None:
        return None
    end = end_h * 60 + int(emin or 0)

    if sap is not None:
        start_h = _to_24h(int(sh), sap)
    else:
        # start meridiem follows the end unless that puts it after the end
        start_h = _to_24h(int(sh), eap)
        if start_h is not None and start_h * 60 + int(smin or 0) > end:
            other = "am" if eap.lower().startswith("p") else "pm"
            start_h = _to_24h(int(sh), other)
    if start_h is None:
        return None
    start = start_h * 60 + int(smin or 0)
    if end <= start:
        end += 1440
    return _TimeValue(start_min=start, end_min=end)


def _h_range_24h(m: re.Match, ctx: _Context) -> Optional[_TimeValue]:
    sh, sm, eh, em = (int(g) for g in m.groups())
    start = sh * 60 + sm
    end = eh * 60 + em
    if end <= start:
        end += 1440
    return _TimeValue(start_min=start, end_min=end)


def _h_time_12h(m: re.Match, ctx: _Context) -> Optional[_TimeValue]:
    hour = _to_24h(int(m.group(1)), m.group(3))
    if hour is None:
        return None
    return _TimeValue(start_min=hour * 60 + int(m.group(2) or 0))


def _h_time_24h(m: re.Match, ctx: _Context) -> Optional[_TimeValue]:
    hour = int(m.group(1))
    if hour > 23:
        return None
    return _TimeValue(start_min=hour * 60 + int(m.group(2)))


def _h_time_relative(m: re.Match, ctx: _Context) -> Optional[_TimeValue]:
    per = unit_seconds(m.group(2))
    if per is None:
        return None
    base = ctx.now.replace(second=0, microsecond=0)
    return _TimeValue(absolute=base + dt.timedelta(seconds=int(m.group(1)) * per))


def _h_time_named(m: re.Match, ctx: _Context) -> _TimeValue:
    hour, minute = NAMED_TIMES[m.group(1).lower()]
    return _TimeValue(start_min=hour * 60 + minute)


def _h_duration(m: re.Match, ctx: _Context) -> Optional[int]:
    per = unit_seconds(m.group(2))
    if per is None:
        return None
    seconds = int(float(m.group(1)) * per)
    return seconds if seconds > 0 else None


def _h_date_in(m: re.Match, ctx: _Context) -> dt.date:
    n = int(m.group(1))
    unit = m.group(2).lower()
    if unit.startswith("day"):
        return ctx.today + dt.timedelta(days=n)
    if unit.startswith("week"):
        return ctx.today + dt.timedelta(weeks=n)
    return _add_months(ctx.today, n)


def _h_date_month_first(m: re.Match, ctx: _Context) -> Optional[dt.date]:
    return _month_day(ctx, _month_num(m.group(1)), int(m.group(2)))


def _h_date_day_first(m: re.Match, ctx: _Context) -> Optional[dt.date]:
    return _month_day(ctx, _month_num(m.group(2)), int(m.group(1)))


def _h_date_numeric(m: re.Match, ctx: _Context) -> Optional[dt.date]:
    month = int(m.group(1))
    if not 1 <= month <= 12:
        return None
    year = int(m.group(3)) if m.group(3) else None
    return _month_day(ctx, month, int(m.group(2)), year)


def _h_date_next(m: re.Match, ctx: _Context) -> dt.date:
    term = m.group(1).lower()
    if term == "week":
        return ctx.locale.start_of_week(ctx.today) + dt.timedelta(days=7)
    if term == "month":
        return _add_months(ctx.today, 1)
    next_week = ctx.locale.start_of_week(ctx.today) + dt.timedelta(days=7)
    offset = (_WEEKDAY_NUMS[term] - ctx.locale.first_weekday) % 7
    return next_week + dt.timedelta(days=offset)


def _h_date_offset(days: int) -> Handler:
    return lambda m, ctx: ctx.today + dt.timedelta(days=days)


def _h_date_weekend(m: re.Match, ctx: _Context) -> dt.date:
    if ctx.today.weekday() >= 5:
        return ctx.today
    return _next_weekday(ctx.today, 5)


def _h_date_end_of_week(m: re.Match, ctx: _Context) -> dt.date:
    if ctx.today.weekday() == 4:
        return ctx.today
    return _next_weekday(ctx.today, 4)


def _h_date_weekday(m: re.Match, ctx: _Context) -> dt.date:
    return _next_weekday(ctx.today, _WEEKDAY_NUMS[m.group(1).lower()])


def _h_priority(level: int) -> Handler:
    return lambda m, ctx: level


def _h_list(m: re.Match, ctx: _Context) -> str:
    return m.group(1)


# --- rule tables (rank = position within the category) -----------------------

_RULES: Dict[str, Sequence[Tuple[Pattern[str], Handler]]] = {
    RECURRENCE: (
        (_rx(r"\b(?:every\s+weekday|on\s+weekdays|weekdays)\b"), _h_recur_fixed(WEEKDAYS)),
        (_rx(r"\b(?:every\s+weekend|on\s+weekends|weekends)\b"), _h_recur_fixed(WEEKENDS)),
        (_rx(r"\bevery\s+(\d+|other)\s+(days?|weeks?|months?|years?)\b"), _h_recur_every_n),
        (_rx(rf"\bevery\s+({_WD_ANY}(?:\s*(?:,|\band\b|&)\s*{_WD_ANY})*)\b"), _h_recur_weekdays),
        (_rx(rf"\bweekly\s+on\s+({_WD_ANY}(?:\s*(?:,|\band\b|&)\s*{_WD_ANY})*)\b"), _h_recur_weekdays),
        (_rx(r"\b(?:every\s+month|monthly)\s+on\s+the\s+(\d{1,2})(?:st|nd|rd|th)?\b"), _h_recur_month_day),
        (_rx(r"\b(?:daily|every\s+day)\b"), _h_recur_fixed(DAILY)),
        (_rx(r"\b(?:weekly|every\s+week)\b"), _h_recur_fixed(WEEKLY)),
        (_rx(r"\b(?:monthly|every\s+month)\b"), _h_recur_fixed(MONTHLY)),
        (_rx(r"\b(?:yearly|annually|every\s+year)\b"), _h_recur_fixed(YEARLY)),
    ),
    TIME: (
        (_rx(rf"(?:\bat\s+)?(?<![\d:/]){_H12}\s*(am|pm|a\.m\.|p\.m\.)?\s*[-\u2013\u2014]\s*{_H12}\s*{_AMPM}"), _h_range),
        (_rx(rf"\bfrom\s+{_H12}\s*(am|pm|a\.m\.|p\.m\.)?\s+(?:to|until|till)\s+{_H12}\s*{_AMPM}"), _h_range),
        (_rx(rf"\bbetween\s+{_H12}\s*(am|pm|a\.m\.|p\.m\.)?\s+and\s+{_H12}\s*{_AMPM}"), _h_range),
        (
            _rx(
                r"(?:\b(?:at|from)\s+)?(?<![\d:/])([01]?\d|2[0-3]):([0-5]\d)"
                r"\s*(?:-|\u2013|\u2014|\bto\b|\buntil\b)\s*([01]?\d|2[0-3]):([0-5]\d)\b"
            ),
            _h_range_24h,
        ),
        (_rx(rf"(?:\bat\s+|@\s*)?(?<![\d:/]){_H12}\s*{_AMPM}"), _h_time_12h),
        (_rx(r"(?:\bat\s+|@\s*)(\d{1,2}):([0-5]\d)\b"), _h_time_24h),
        (_rx(r"(?<![\d:/])([01]?\d|2[0-3]):([0-5]\d)\b(?!\s*(?:am|pm))"), _h_time_24h),
        (_rx(rf"\bin\s+(\d+)\s*{_DUR_UNITS}\b"), _h_time_relative),
        (_rx(r"(?:\b(?:at|in\s+the|this)\s+)?\b(" + "|".join(NAMED_TIMES) + r")\b"), _h_time_named),
    ),
    DURATION: (
        (_rx(rf"\bfor\s+(\d+(?:\.\d+)?)\s*{_DUR_UNITS}\b"), _h_duration),
        (_rx(rf"(?<![\d.:])(\d+(?:\.\d+)?)\s*{_DUR_UNITS}\b(?:\s+long\b)?"), _h_duration),
    ),
    DATE: (
        (_rx(r"\bin\s+(\d+)\s*(days?|weeks?|months?)\b"), _h_date_in),
        (_rx(r"\b(\d+)\s*(days?|weeks?|months?)\s+from\s+now\b"), _h_date_in),
        (_rx(rf"(?:\bon\s+)?\b({_MONTHS})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?\b"), _h_date_month_first),
        (_rx(rf"(?:\bon\s+)?\b(\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?({_MONTHS})\b"), _h_date_day_first),
        (_rx(r"(?:\bon\s+)?(?<![\d/:])(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?(?![\d/])"), _h_date_numeric),
        (_rx(rf"\bnext\s+({_WD_FULL}|week|month)\b"), _h_date_next),
        (_rx(r"\bday\s+after\s+tomorrow\b"), _h_date_offset(2)),
        (_rx(r"\btoday\b"), _h_date_offset(0)),
        (_rx(r"\b(?:tomorrow|tmrw?)\b"), _h_date_offset(1)),
        (_rx(r"\bthis\s+weekend\b"), _h_date_weekend),
        (_rx(r"\b(?:end\s+of\s+(?:the\s+)?week|eow)\b"), _h_date_end_of_week),
        (_rx(rf"(?:\bon\s+)?\b({_WD_FULL})\b"), _h_date_weekday),
    ),
    PRIORITY: (
        (_rx(r"\b(?:high\s*priority|urgent|critical|asap)\b"), _h_priority(PRIORITY_HIGH)),
        (_rx(r"!{2,}"), _h_priority(PRIORITY_HIGH)),
        (_rx(r"!(?:high|urgent)\b"), _h_priority(PRIORITY_HIGH)),
        (_rx(r"\b(?:medium\s*priority|important)\b"), _h_priority(PRIORITY_MEDIUM)),
        (_rx(r"!medium\b"), _h_priority(PRIORITY_MEDIUM)),
        (_rx(r"\blow\s*priority\b"), _h_priority(PRIORITY_LOW)),
        (_rx(r"!low\b"), _h_priority(PRIORITY_LOW)),
        (_rx(r"(?<!!)!(?![!\w])"), _h_priority(PRIORITY_LOW)),
    ),
    LIST: (
        (re.compile(r"(?<![\w&#])#(\w+)"), _h_list),
    ),
}


def _collect(text: str, ctx: _Context) -> List[_Candidate]:
    out: List[_Candidate] = []
    for category, rules in _RULES.items():
        for rank, (rx, handler) in enumerate(rules):
            for m in rx.finditer(text):
                if m.end() <= m.start():
                    continue
                try:
                    value = handler(m, ctx)
                except (ValueError, OverflowError):
                    value = None
                if value is None:
                    continue
                out.append(_Candidate(category=category, rank=rank, start=m.start(), end=m.end(), value=value))
    return out


def _overlaps(a: _Candidate, b: _Candidate) -> bool:
    return a.start < b.end and b.start < a.end


def _resolve(cands: List[_Candidate]) -> Tuple[Dict[str, _Candidate], List[Tuple[int, int]]]:
    """Pick one candidate per category plus the spans to strip from the title.

    Longest span wins overlaps; each category then keeps its best-ranked
    survivor. A category left empty may still take a candidate that was only
    blocked by a losing span. Every kept span is consumed, chosen or not.
    """
    ordered = sorted(cands, key=lambda c: (-c.length, _CATEGORY_ORDER[c.category], c.rank, c.start))
    kept: List[_Candidate] = []
    for c in ordered:
        if any(_overlaps(c, k) for k in kept):
            continue
        kept.append(c)

    chosen: Dict[str, _Candidate] = {}
    for c in sorted(kept, key=lambda c: (c.rank, c.start)):
        chosen.setdefault(c.category, c)

    spans = [(c.start, c.end) for c in kept]
    for c in sorted(cands, key=lambda c: (c.rank, -c.length, c.start)):
        if c.category in chosen or any(_overlaps(c, w) for w in chosen.values()):
            continue
        chosen[c.category] = c
        spans.append((c.start, c.end))
    return chosen, spans


_SPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.;:!?])")
_EDGE_JUNK = " \t\r\n,;:-\u2013\u2014"


def _clean_title(text: str, spans: List[Tuple[int, int]]) -> str:
    pieces: List[str] = []
    pos = 0
    for s, e in sorted(spans):
        if s > pos:
            pieces.append(text[pos:s])
        pos = max(pos, e)
    pieces.append(text[pos:])
    out = _SPACE_RE.sub(" ", " ".join(pieces))
    out = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", out)
    return out.strip(_EDGE_JUNK)


def _date_text(d: dt.date, today: dt.date, locale: CalendarLocale) -> str:
    delta = (d - today).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if 1 < delta < 7:
        return locale.weekday_name(d.weekday())
    text = f"{locale.month_abbr(d.month)} {d.day}"
    if d.year != today.year:
        text += f", {d.year}"
    return text


class NaturalLanguageTaskParser:
    """Stateless quick-add parser; `clock` and `locale` are injected for reproducibility."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        locale: Optional[CalendarLocale] = None,
        *,
        roll_past_times: bool = False,
    ) -> None:
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.locale = locale if locale is not None else EN_US
        self.roll_past_times = roll_past_times

    def parse(self, text: str) -> ParsedTask:
        if not text or not text.strip():
            return ParsedTask(clean_title=text or "")

        now = self.clock.now()
        ctx = _Context(now=now, today=now.date(), locale=self.locale)
        chosen, spans = _resolve(_collect(text, ctx))

        time_c = chosen.get(TIME)
        dur_c = chosen.get(DURATION)
        if time_c is not None and time_c.value.is_range:
            # the range already fixes the end; the duration text is still consumed
            chosen.pop(DURATION, None)
            dur_c = None

        tz = now.tzinfo
        due_day: Optional[dt.date] = chosen[DATE].value if DATE in chosen else None

        scheduled: Optional[dt.datetime] = None
        scheduled_end: Optional[dt.datetime] = None
        duration_seconds: Optional[int] = None

        if time_c is not None:
            tv: _TimeValue = time_c.value
            if tv.absolute is not None:
                scheduled = tv.absolute
            else:
                day = due_day or ctx.today
                if self.roll_past_times and due_day is None:
                    if at_minute(ctx.today, tv.start_min or 0, tz) < now and ctx.today < dt.date.max:
                        day = ctx.today + dt.timedelta(days=1)
                    due_day = day
                scheduled = at_minute(day, tv.start_min or 0, tz)
                if tv.end_min is not None:
                    try:
                        scheduled_end = at_minute(day, tv.end_min, tz)
                    except OverflowError:
                        # end falls past the last representable day; keep the start only
                        scheduled_end = None
                    else:
                        duration_seconds = int((scheduled_end - scheduled).total_seconds())

        if dur_c is not None:
            try:
                end = scheduled + dt.timedelta(seconds=int(dur_c.value)) if scheduled is not None else None
            except OverflowError:
                chosen.pop(DURATION)
            else:
                duration_seconds = int(dur_c.value)
                scheduled_end = end

        suggestions = [self._suggestion(c, ctx, scheduled, scheduled_end) for c in chosen.values()]
        suggestions.sort(key=lambda s: s.start)

        return ParsedTask(
            clean_title=_clean_title(text, spans),
            due_date=local_midnight(due_day, tz) if due_day is not None else None,
            date_option=DateOption.for_date(due_day, ctx.today) if due_day is not None else None,
            scheduled_time=scheduled,
            scheduled_end_time=scheduled_end,
            duration_seconds=duration_seconds,
            priority=chosen[PRIORITY].value if PRIORITY in chosen else PRIORITY_NONE,
            list_hint=chosen[LIST].value if LIST in chosen else None,
            recurrence=chosen[RECURRENCE].value if RECURRENCE in chosen else None,
            suggestions=tuple(suggestions),
        )

    def _suggestion(
        self,
        c: _Candidate,
        ctx: _Context,
        scheduled: Optional[dt.datetime],
        scheduled_end: Optional[dt.datetime],
    ) -> Suggestion:
        if c.category == DATE:
            kind, text = SUGGEST_DATE, _date_text(c.value, ctx.today, self.locale)
        elif c.category == TIME:
            kind = SUGGEST_TIME
            text = self.locale.format_time(scheduled) if scheduled is not None else ""
            if c.value.is_range and scheduled_end is not None:
                text += " - " + self.locale.format_time(scheduled_end)
        elif c.category == DURATION:
            kind, text = SUGGEST_DURATION, format_duration(c.value)
        elif c.category == PRIORITY:
            kind, text = SUGGEST_PRIORITY, PRIORITY_NAMES[c.value]
        elif c.category == LIST:
            kind, text = SUGGEST_LIST, str(c.value).capitalize()
        else:
            kind, text = SUGGEST_RECURRENCE, c.value.display_text
        return Suggestion(type=kind, text=text, icon=_ICONS[kind], start=c.start)


def parse_task(
    text: str,
    *,
    now: Optional[dt.datetime] = None,
    locale: Optional[CalendarLocale] = None,
) -> ParsedTask:
    """One-shot parse; `now` pins the clock (defaults to the system clock)."""
    clock: Clock = FixedClock(now) if now is not None else SystemClock()
    return NaturalLanguageTaskParser(clock=clock, locale=locale).parse(text)
