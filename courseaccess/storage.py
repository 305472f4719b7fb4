"""
Read-only JSON snapshot loader.

A snapshot is what the enrolment and course-authoring systems export for us:

    {
      "courses":  [{"course_id": "BIO101", "title": "...", "start": "2025-05-13", "end": null}],
      "contents": [{"content_id": "L1", "course_id": "BIO101", "kind": "lesson",
                    "title": "...", "scheduled_at": "2025-05-15 10:00:00"}],
      "learners": [{"learner_id": "S1", "name": "...",
                    "enrolments": [{"course_id": "BIO101", "start": "2025-05-01", "end": "2025-05-30"}]}]
    }

This module never writes anything. A missing file or malformed record raises
SnapshotError.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from courseaccess.catalog import Catalog, Directory
from courseaccess.config import default_snapshot_path
from courseaccess.errors import CourseAccessError, SnapshotError
from courseaccess.model import ContentKind, Learner

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    catalog: Catalog
    directory: Directory


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(x, dict) for x in raw):
        raise SnapshotError(f"'{key}' must be a list of objects")
    return raw


def _required(record: dict[str, Any], field: str, where: str) -> str:
    value = record.get(field)
    if value is None or not str(value).strip():
        raise SnapshotError(f"{where}: missing '{field}'")
    return str(value).strip()


def _load_courses(catalog: Catalog, records: list[dict[str, Any]]) -> None:
    for i, rec in enumerate(records):
        where = f"courses[{i}]"
        course_id = _required(rec, "course_id", where)
        try:
            catalog.create_course(
                course_id=course_id,
                title=str(rec.get("title") or ""),
                start=_required(rec, "start", where),
                end=rec.get("end") or None,
            )
        except CourseAccessError as exc:
            raise SnapshotError(f"{where} ({course_id}): {exc}") from exc


def _load_contents(catalog: Catalog, records: list[dict[str, Any]]) -> None:
    for i, rec in enumerate(records):
        where = f"contents[{i}]"
        content_id = _required(rec, "content_id", where)
        course_id = _required(rec, "course_id", where)
        title = str(rec.get("title") or "")
        kind_raw = _required(rec, "kind", where).lower()
        try:
            kind = ContentKind(kind_raw)
        except ValueError as exc:
            raise SnapshotError(f"{where} ({content_id}): unknown kind {kind_raw!r}") from exc

        try:
            if kind is ContentKind.LESSON:
                catalog.add_lesson(course_id, title, _required(rec, "scheduled_at", where), content_id=content_id)
            elif kind is ContentKind.HOMEWORK:
                catalog.add_homework(course_id, title, content_id=content_id)
            elif kind is ContentKind.PREP_MATERIAL:
                catalog.add_prep_material(course_id, title, content_id=content_id)
        except SnapshotError:
            raise
        except CourseAccessError as exc:
            raise SnapshotError(f"{where} ({content_id}): {exc}") from exc


def _load_learners(directory: Directory, records: list[dict[str, Any]]) -> None:
    for i, rec in enumerate(records):
        where = f"learners[{i}]"
        learner = Learner(learner_id=_required(rec, "learner_id", where), name=str(rec.get("name") or ""))
        enrolments = rec.get("enrolments", [])
        if not isinstance(enrolments, list):
            raise SnapshotError(f"{where}: 'enrolments' must be a list")
        for j, e in enumerate(enrolments):
            ewhere = f"{where}.enrolments[{j}]"
            if not isinstance(e, dict):
                raise SnapshotError(f"{ewhere}: must be an object")
            try:
                learner.enrol(
                    _required(e, "course_id", ewhere),
                    _required(e, "start", ewhere),
                    _required(e, "end", ewhere),
                )
            except SnapshotError:
                raise
            except CourseAccessError as exc:
                raise SnapshotError(f"{ewhere}: {exc}") from exc
        try:
            directory.add_learner(learner)
        except CourseAccessError as exc:
            raise SnapshotError(f"{where} ({learner.learner_id}): {exc}") from exc


def parse_snapshot(data: Any) -> Snapshot:
    """
    Build a Snapshot from already-decoded JSON data.
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot root must be a JSON object")

    catalog = Catalog()
    directory = Directory()
    _load_courses(catalog, _records(data, "courses"))
    _load_contents(catalog, _records(data, "contents"))
    _load_learners(directory, _records(data, "learners"))
    return Snapshot(catalog=catalog, directory=directory)


def load_snapshot(path: str | Path | None = None) -> Snapshot:
    """
    Load a snapshot file. Uses COURSEACCESS_SNAPSHOT / the package default
    when no path is given.
    """
    snapshot_path = Path(path) if path is not None else default_snapshot_path()

    try:
        data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot not found: {snapshot_path}") from exc
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc

    snapshot = parse_snapshot(data)
    logger.info(
        "snapshot_loaded",
        extra={
            "path": str(snapshot_path),
            "courses": len(snapshot.catalog.courses()),
            "learners": len(snapshot.directory.learners()),
        },
    )
    return snapshot
