from __future__ import annotations

import datetime as dt
import random
import unittest

from tasky.drag import DragSessionController, DragStateError, exceeds_drag_threshold, slot_for_tap
from tasky.model import CREATING, EDGE_END, EDGE_START, RESIZING, LayoutConfig, ScheduledItem

DAY = dt.date(2025, 3, 10)
FIFTEEN = dt.timedelta(minutes=15)


def _t(h: int, m: int = 0) -> dt.datetime:
    return dt.datetime(2025, 3, 10, h, m)


def _y(h: int, m: int = 0) -> float:
    # 60 px per hour starting at 06:00: one pixel per minute
    return float((h - 6) * 60 + m)


class TestDragCreateContract(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = LayoutConfig(container_width=300, hour_height=60, start_hour=6)
        self.ctl = DragSessionController(self.cfg, DAY)

    def test_create_drag_down(self) -> None:
        s = self.ctl.begin(_y(9), CREATING)
        self.assertEqual((s.start, s.end), (_t(9), _t(9, 15)))
        self.assertTrue(self.ctl.is_active)

        u = self.ctl.update(_y(10))
        self.assertEqual((u.start, u.end), (_t(9), _t(10)))
        self.assertTrue(u.boundary_crossed)

        u = self.ctl.update(_y(10, 2))
        self.assertEqual(u.end, _t(10))
        self.assertFalse(u.boundary_crossed)

        r = self.ctl.end()
        self.assertEqual((r.mode, r.start, r.end), (CREATING, _t(9), _t(10)))
        self.assertEqual(r.delta, dt.timedelta(0))
        self.assertFalse(self.ctl.is_active)
        self.assertIsNone(self.ctl.session)

    def test_create_drag_up_flips_anchor_to_end(self) -> None:
        self.ctl.begin(_y(9), CREATING)
        u = self.ctl.update(_y(8))
        self.assertEqual((u.start, u.end), (_t(8), _t(9)))

        u = self.ctl.update(_y(8, 58))
        self.assertEqual((u.start, u.end), (_t(9), _t(9, 15)))

        u = self.ctl.update(_y(8, 50))
        self.assertEqual((u.start, u.end), (_t(8, 45), _t(9)))

    def test_create_is_clamped_to_visible_window(self) -> None:
        s = self.ctl.begin(_y(23, 59), CREATING)
        self.assertEqual((s.start, s.end), (_t(23, 45), dt.datetime(2025, 3, 11)))

        self.ctl.cancel()
        self.ctl.begin(_y(6, 5), CREATING)
        u = self.ctl.update(-50.0)
        self.assertEqual((u.start, u.end), (_t(6), _t(6, 15)))

        u = self.ctl.update(5000.0)
        self.assertEqual(u.end, dt.datetime(2025, 3, 11))

    def test_snapped_times_are_on_grid(self) -> None:
        s = self.ctl.begin(_y(9, 7), CREATING)
        self.assertEqual(s.anchor, _t(9))
        u = self.ctl.update(_y(9, 53))
        self.assertEqual(u.end, _t(10))

    def test_tap_creates_default_slot(self) -> None:
        start, end = slot_for_tap(_y(9, 7), self.cfg, DAY)
        self.assertEqual((start, end), (_t(9), _t(10)))
        self.assertFalse(exceeds_drag_threshold(100.0, 104.0))
        self.assertTrue(exceeds_drag_threshold(100.0, 105.0))
        self.assertTrue(exceeds_drag_threshold(100.0, 90.0))

    def test_aware_timeline(self) -> None:
        ctl = DragSessionController(self.cfg, DAY, tzinfo=dt.timezone.utc)
        s = ctl.begin(_y(9), CREATING)
        self.assertEqual(s.start, dt.datetime(2025, 3, 10, 9, tzinfo=dt.timezone.utc))


class TestDragResizeContract(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = LayoutConfig(container_width=300, hour_height=60, start_hour=6)
        self.ctl = DragSessionController(self.cfg, DAY)
        self.item = ScheduledItem("a", _t(9), _t(10))

    def test_resize_end_respects_minimum_duration(self) -> None:
        s = self.ctl.begin(_y(10), RESIZING, target=self.item, edge=EDGE_END)
        self.assertEqual((s.anchor, s.start, s.end), (_t(9), _t(9), _t(10)))

        u = self.ctl.update(_y(9, 5))
        self.assertEqual((u.start, u.end), (_t(9), _t(9, 15)))

        u = self.ctl.update(_y(8))
        self.assertEqual((u.start, u.end), (_t(9), _t(9, 15)))

        self.ctl.update(_y(11))
        r = self.ctl.end()
        self.assertEqual((r.start, r.end, r.edge), (_t(9), _t(11), EDGE_END))
        self.assertEqual(r.delta, dt.timedelta(hours=1))
        self.assertIs(r.target, self.item)

    def test_resize_start(self) -> None:
        self.ctl.begin(_y(9), RESIZING, target=self.item, edge=EDGE_START)
        u = self.ctl.update(_y(9, 56))
        self.assertEqual((u.start, u.end), (_t(9, 45), _t(10)))

        self.ctl.update(_y(8))
        r = self.ctl.end()
        self.assertEqual((r.start, r.end), (_t(8), _t(10)))
        self.assertEqual(r.delta, dt.timedelta(hours=-1))

    def test_resize_item_without_end_uses_default_hour(self) -> None:
        s = self.ctl.begin(_y(10), RESIZING, target=ScheduledItem("b", _t(9)), edge=EDGE_END)
        self.assertEqual(s.end, _t(10))

    def test_resize_bad_arguments(self) -> None:
        with self.assertRaises(ValueError):
            self.ctl.begin(_y(9), RESIZING, target=None, edge=EDGE_END)
        with self.assertRaises(ValueError):
            self.ctl.begin(_y(9), RESIZING, target=self.item, edge="middle")
        with self.assertRaises(ValueError):
            self.ctl.begin(_y(9), RESIZING, target=ScheduledItem("u", None), edge=EDGE_END)
        with self.assertRaises(ValueError):
            self.ctl.begin(_y(9), "panning")
        self.assertFalse(self.ctl.is_active)


class TestDragStateContract(unittest.TestCase):
    def setUp(self) -> None:
        cfg = LayoutConfig(container_width=300, hour_height=60, start_hour=6)
        self.ctl = DragSessionController(cfg, DAY)

    def test_messages_in_wrong_state_raise(self) -> None:
        with self.assertRaises(DragStateError):
            self.ctl.update(100.0)
        with self.assertRaises(DragStateError):
            self.ctl.end()
        self.ctl.begin(100.0, CREATING)
        with self.assertRaises(DragStateError):
            self.ctl.begin(120.0, CREATING)

    def test_cancel_reports_whether_a_session_was_active(self) -> None:
        self.assertFalse(self.ctl.cancel())
        self.ctl.begin(100.0, CREATING)
        self.assertTrue(self.ctl.cancel())
        self.assertFalse(self.ctl.is_active)
        # a new session may start after cancel
        self.ctl.begin(200.0, CREATING)
        self.assertTrue(self.ctl.is_active)

    def test_min_duration_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            DragSessionController(LayoutConfig(container_width=1, hour_height=60, start_hour=6), DAY, min_duration_minutes=0)


class TestDragPropertiesContract(unittest.TestCase):
    def test_random_gestures_keep_invariants(self) -> None:
        rng = random.Random(2024)
        cfg = LayoutConfig(container_width=300, hour_height=60, start_hour=6)
        lo, hi = _t(6), dt.datetime(2025, 3, 11)
        for _ in range(200):
            ctl = DragSessionController(cfg, DAY)
            ctl.begin(rng.uniform(-100, 1200), CREATING)
            for _ in range(rng.randint(1, 30)):
                u = ctl.update(rng.uniform(-100, 1200))
                self.assertGreaterEqual(u.end - u.start, FIFTEEN)
                self.assertGreaterEqual(u.start, lo)
                self.assertLessEqual(u.end, hi)
                self.assertEqual(u.start.minute % 15, 0)
                self.assertEqual(u.end.minute % 15, 0)
            r = ctl.end()
            self.assertGreaterEqual(r.end - r.start, FIFTEEN)

    def test_random_resizes_keep_minimum_duration(self) -> None:
        rng = random.Random(99)
        cfg = LayoutConfig(container_width=300, hour_height=60, start_hour=6)
        for _ in range(200):
            start = _t(6) + dt.timedelta(minutes=rng.randrange(0, 16 * 60, 15))
            item = ScheduledItem("x", start, start + dt.timedelta(minutes=rng.randrange(15, 180, 15)))
            ctl = DragSessionController(cfg, DAY)
            ctl.begin(rng.uniform(0, 1080), RESIZING, target=item, edge=rng.choice([EDGE_START, EDGE_END]))
            for _ in range(rng.randint(1, 20)):
                u = ctl.update(rng.uniform(-100, 1200))
                self.assertGreaterEqual(u.end - u.start, FIFTEEN)


if __name__ == "__main__":
    unittest.main(verbosity=2)
