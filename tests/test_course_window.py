"""
Unit tests for the course window.

Window rule:
- active on [start, end], both boundaries inclusive
- no end -> open to the right
"""

import unittest
from datetime import datetime, timedelta, timezone

from courseaccess.course_window import course_window_denial, is_active
from courseaccess.model import Course, DenialReason

UTC = timezone.utc


class TestCourseWindow(unittest.TestCase):
    def setUp(self) -> None:
        self.start = datetime(2025, 5, 13, tzinfo=UTC)
        self.end = datetime(2025, 6, 12, 23, 59, 59, tzinfo=UTC)
        self.bounded = Course("BIO101", "Biology", self.start, self.end)
        self.open_ended = Course("HIST200", "History", self.start)

    def test_before_start_is_not_started(self) -> None:
        at = self.start - timedelta(seconds=1)
        self.assertFalse(is_active(self.bounded, at))
        self.assertEqual(course_window_denial(self.bounded, at), DenialReason.COURSE_NOT_STARTED)

    def test_start_boundary_is_active(self) -> None:
        self.assertTrue(is_active(self.bounded, self.start))
        self.assertTrue(is_active(self.open_ended, self.start))

    def test_end_boundary_is_active(self) -> None:
        self.assertTrue(is_active(self.bounded, self.end))

    def test_after_end_is_ended(self) -> None:
        at = self.end + timedelta(microseconds=1)
        self.assertFalse(is_active(self.bounded, at))
        self.assertEqual(course_window_denial(self.bounded, at), DenialReason.COURSE_ENDED)

    def test_no_end_means_open(self) -> None:
        self.assertTrue(is_active(self.open_ended, datetime(2099, 1, 1, tzinfo=UTC)))
        self.assertIsNone(course_window_denial(self.open_ended, datetime(2030, 1, 1, tzinfo=UTC)))

    def test_true_region_is_exactly_the_window(self) -> None:
        # walk day by day across the window: false, then true, then false
        results = []
        day = datetime(2025, 5, 1, 12, tzinfo=UTC)
        while day < datetime(2025, 7, 1, tzinfo=UTC):
            results.append(is_active(self.bounded, day))
            day += timedelta(days=1)
        first = results.index(True)
        last = len(results) - 1 - results[::-1].index(True)
        self.assertTrue(all(results[first : last + 1]))
        self.assertFalse(any(results[:first]))
        self.assertFalse(any(results[last + 1 :]))

    def test_offsets_compare_as_instants(self) -> None:
        # 01:30 at +02:00 is 23:30 UTC on the previous day -> not started yet
        cest = timezone(timedelta(hours=2))
        self.assertFalse(is_active(self.bounded, datetime(2025, 5, 13, 1, 30, tzinfo=cest)))
        self.assertTrue(is_active(self.bounded, datetime(2025, 5, 13, 2, 0, tzinfo=cest)))


if __name__ == "__main__":
    unittest.main()
