"""
Unit tests for the JSON snapshot loader.

Loader contract:
- missing/unreadable file -> SnapshotError (never an empty catalog)
- malformed record -> SnapshotError naming the record
- date-only enrolment/course ends cover the whole end day
"""

import json
import os
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from courseaccess.errors import SnapshotError
from courseaccess.model import ContentKind
from courseaccess.storage import load_snapshot, parse_snapshot

UTC = timezone.utc

SNAPSHOT = {
    "courses": [
        {"course_id": "BIO101", "title": "Biology", "start": "2025-05-13", "end": "2025-06-12"},
        {"course_id": "HIST200", "title": "History", "start": "2025-05-13", "end": None},
    ],
    "contents": [
        {"content_id": "BIO-L1", "course_id": "BIO101", "kind": "lesson", "title": "Cells",
         "scheduled_at": "2025-05-15 10:00:00"},
        {"content_id": "HIST-P1", "course_id": "HIST200", "kind": "prep_material", "title": "Reading"},
    ],
    "learners": [
        {"learner_id": "S1", "name": "Alex", "enrolments": [
            {"course_id": "BIO101", "start": "2025-05-01", "end": "2025-05-30"},
        ]},
    ],
}


class TestStorage(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {"COURSEACCESS_TIMEZONE": "UTC"})
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write(self, d: str, data) -> Path:
        p = Path(d) / "snapshot.json"
        p.write_text(json.dumps(data), encoding="utf-8")
        return p

    def test_load_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            snap = load_snapshot(self._write(d, SNAPSHOT))

        bio = snap.catalog.get_course("BIO101")
        self.assertEqual(bio.start, datetime(2025, 5, 13, tzinfo=UTC))
        self.assertEqual(bio.end, datetime(2025, 6, 12, 23, 59, 59, 999999, tzinfo=UTC))
        self.assertIsNone(snap.catalog.get_course("HIST200").end)
        self.assertEqual(snap.catalog.get_content("BIO-L1").kind, ContentKind.LESSON)

        learner = snap.directory.get_learner("S1")
        self.assertEqual(len(learner.periods_for("BIO101")), 1)
        self.assertTrue(snap.catalog.can_access(learner, "BIO-L1", "2025-05-30 23:59:59"))
        self.assertFalse(snap.catalog.can_access(learner, "BIO-L1", "2025-05-31 00:00:00"))

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(SnapshotError):
                load_snapshot(Path(d) / "missing.json")

    def test_invalid_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "broken.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(SnapshotError):
                load_snapshot(p)

    def test_default_path_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = self._write(d, SNAPSHOT)
            with mock.patch.dict(os.environ, {"COURSEACCESS_SNAPSHOT": str(p)}):
                snap = load_snapshot()
        self.assertIsNotNone(snap.catalog.get_course("BIO101"))

    def test_bundled_snapshot_loads(self) -> None:
        with mock.patch.dict(os.environ, {"COURSEACCESS_SNAPSHOT": ""}):
            snap = load_snapshot()
        self.assertEqual(len(snap.directory.learners()), 2)

    def test_malformed_records(self) -> None:
        cases = {
            "root not object": [],
            "course end before start": {
                "courses": [{"course_id": "X", "start": "2025-06-01", "end": "2025-05-01"}]
            },
            "course without start": {"courses": [{"course_id": "X"}]},
            "unknown kind": {
                "courses": [{"course_id": "X", "start": "2025-05-01"}],
                "contents": [{"content_id": "Q", "course_id": "X", "kind": "quiz"}],
            },
            "lesson without schedule": {
                "courses": [{"course_id": "X", "start": "2025-05-01"}],
                "contents": [{"content_id": "L", "course_id": "X", "kind": "lesson"}],
            },
            "content for unknown course": {
                "contents": [{"content_id": "H", "course_id": "NOPE", "kind": "homework"}],
            },
            "bad enrolment date": {
                "learners": [{"learner_id": "S1", "enrolments": [
                    {"course_id": "X", "start": "soon", "end": "2025-05-01"}]}],
            },
            "enrolments not a list": {"learners": [{"learner_id": "S1", "enrolments": "X"}]},
            "courses not a list": {"courses": {"course_id": "X"}},
        }
        for name, data in cases.items():
            with self.subTest(name):
                with self.assertRaises(SnapshotError):
                    parse_snapshot(data)

    def test_duplicate_records(self) -> None:
        course = {"course_id": "X", "start": "2025-05-01"}
        cases = {
            "course": ({"courses": [course, dict(course, start="2025-09-01")]}, "courses[1]"),
            "content": (
                {
                    "courses": [course],
                    "contents": [
                        {"content_id": "H", "course_id": "X", "kind": "homework"},
                        {"content_id": "H", "course_id": "X", "kind": "prep_material"},
                    ],
                },
                "contents[1]",
            ),
            "learner": (
                {
                    "courses": [course],
                    "learners": [
                        {"learner_id": "S1", "enrolments": [
                            {"course_id": "X", "start": "2025-05-01", "end": "2025-05-31"}]},
                        {"learner_id": "S1", "enrolments": [
                            {"course_id": "X", "start": "2025-07-01", "end": "2025-07-31"}]},
                    ],
                },
                "learners[1]",
            ),
        }
        for name, (data, where) in cases.items():
            with self.subTest(name):
                with self.assertRaises(SnapshotError) as ctx:
                    parse_snapshot(data)
                self.assertIn(where, str(ctx.exception))

    def test_error_names_the_record(self) -> None:
        data = {"courses": [{"course_id": "OK", "start": "2025-05-01"},
                            {"course_id": "BAD", "start": "2025-06-01", "end": "2025-05-01"}]}
        with self.assertRaises(SnapshotError) as ctx:
            parse_snapshot(data)
        self.assertIn("courses[1]", str(ctx.exception))
        self.assertIn("BAD", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
