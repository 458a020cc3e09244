from __future__ import annotations

import datetime as dt
import unittest

from tasky.util.clock import EN_GB, EN_US, CalendarLocale, FixedClock, SystemClock
from tasky.util.duration import format_duration, unit_seconds
from tasky.util.timeparse import parse_date_yyyy_mm_dd, parse_hour_window, parse_iso_datetime
from tasky.util.tz import local_midnight, normalize_tz_name, resolve_tz


class TestTimezoneResolutionContract(unittest.TestCase):
    def test_valid_timezone_identifiers_resolve(self) -> None:
        self.assertEqual(resolve_tz("UTC"), dt.timezone.utc)
        self.assertEqual(resolve_tz("Z"), dt.timezone.utc)
        self.assertIsNotNone(resolve_tz("local"))
        self.assertEqual(resolve_tz("+02:00").utcoffset(None), dt.timedelta(hours=2))
        self.assertEqual(resolve_tz("-0530").utcoffset(None), dt.timedelta(hours=-5, minutes=-30))

    def test_invalid_timezone_identifiers_raise(self) -> None:
        with self.assertRaises(ValueError):
            resolve_tz("No/Such_Zone")
        with self.assertRaises(ValueError):
            resolve_tz("+25:00")

    def test_normalize(self) -> None:
        self.assertEqual(normalize_tz_name(None), "local")
        self.assertEqual(normalize_tz_name(" system "), "local")
        self.assertEqual(normalize_tz_name("gmt"), "UTC")
        self.assertEqual(normalize_tz_name("Europe/Kyiv"), "Europe/Kyiv")

    def test_local_midnight(self) -> None:
        d = dt.date(2025, 3, 10)
        self.assertEqual(local_midnight(d), dt.datetime(2025, 3, 10))
        self.assertEqual(local_midnight(d, dt.timezone.utc).tzinfo, dt.timezone.utc)


class TestTimeparseContract(unittest.TestCase):
    def test_hour_window(self) -> None:
        self.assertEqual(parse_hour_window("06-24"), (6, 24))
        self.assertEqual(parse_hour_window("06:00-23:00"), (6, 23))
        self.assertEqual(parse_hour_window(" 0 - 24 "), (0, 24))
        for bad in ("24-06", "6:30-20", "abc", "06-25", "10-10"):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    parse_hour_window(bad)

    def test_dates(self) -> None:
        self.assertEqual(parse_date_yyyy_mm_dd("2025-03-10"), dt.date(2025, 3, 10))
        with self.assertRaises(ValueError):
            parse_date_yyyy_mm_dd("10/03/2025")

    def test_iso_datetime(self) -> None:
        self.assertEqual(parse_iso_datetime("2025-03-10T09:00Z"), dt.datetime(2025, 3, 10, 9, tzinfo=dt.timezone.utc))
        self.assertEqual(parse_iso_datetime("2025-03-10T09:00"), dt.datetime(2025, 3, 10, 9))
        tz = dt.timezone(dt.timedelta(hours=2))
        self.assertEqual(parse_iso_datetime("2025-03-10T09:00", tz).tzinfo, tz)
        with self.assertRaises(ValueError):
            parse_iso_datetime("not a date")


class TestDurationContract(unittest.TestCase):
    def test_format_duration(self) -> None:
        self.assertEqual(format_duration(1800), "30 min")
        self.assertEqual(format_duration(3600), "1 hour")
        self.assertEqual(format_duration(7200), "2 hours")
        self.assertEqual(format_duration(5400), "1h 30m")
        self.assertEqual(format_duration(0), "0 min")

    def test_unit_seconds(self) -> None:
        self.assertEqual(unit_seconds("mins"), 60)
        self.assertEqual(unit_seconds("HRS"), 3600)
        self.assertEqual(unit_seconds("h"), 3600)
        self.assertIsNone(unit_seconds("days"))


class TestClockLocaleContract(unittest.TestCase):
    def test_fixed_and_system_clock(self) -> None:
        instant = dt.datetime(2025, 3, 10, 8, 0)
        self.assertEqual(FixedClock(instant).now(), instant)
        now = SystemClock("UTC").now()
        self.assertEqual(now.tzinfo, dt.timezone.utc)
        with self.assertRaises(ValueError):
            SystemClock("No/Such_Zone")

    def test_locale_week_start(self) -> None:
        monday = dt.date(2025, 3, 10)
        self.assertEqual(EN_US.start_of_week(monday), dt.date(2025, 3, 9))
        self.assertEqual(EN_GB.start_of_week(monday), monday)
        self.assertEqual(EN_GB.start_of_week(dt.date(2025, 3, 16)), monday)

    def test_locale_names_and_clock_format(self) -> None:
        self.assertEqual(EN_US.weekday_name(4), "Friday")
        self.assertEqual(EN_US.month_abbr(12), "Dec")
        t = dt.datetime(2025, 3, 10, 15, 5)
        self.assertEqual(EN_US.format_time(t), "3:05 PM")
        self.assertEqual(EN_GB.format_time(t), "15:05")
        self.assertEqual(EN_US.format_time(dt.datetime(2025, 3, 10, 0, 0)), "12:00 AM")
        self.assertEqual(EN_US.format_time(dt.datetime(2025, 3, 10, 12, 0)), "12:00 PM")

    def test_locale_validation(self) -> None:
        with self.assertRaises(ValueError):
            CalendarLocale(first_weekday=7)
        with self.assertRaises(ValueError):
            CalendarLocale(weekday_names=("Mon",))


if __name__ == "__main__":
    unittest.main(verbosity=2)
