"""
In-memory lookups for courses, content and learners.

The evaluator itself only needs already-resolved objects. Callers that hold
identifiers (the CLI, request handlers) go through a Catalog / Directory to
resolve them first. Both are read-mostly: records are added once by authoring
or enrolment code and then only read.
"""

from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Protocol

from courseaccess.access import can_access, evaluate_access
from courseaccess.availability import is_available
from courseaccess.errors import DuplicateRecordError, UnknownContentError, UnknownCourseError, UnknownLearnerError
from courseaccess.instants import InstantLike, to_instant
from courseaccess.model import AccessDecision, Content, ContentKind, Course, Learner


class ContentLookup(Protocol):
    def get_content(self, content_id: str) -> Content: ...


class LearnerLookup(Protocol):
    def get_learner(self, learner_id: str) -> Learner: ...


def _new_content_id() -> str:
    return f"content_{uuid.uuid4().hex}"


class Catalog:
    """
    Courses and their content, indexed by id.
    """

    def __init__(self) -> None:
        self._courses: Dict[str, Course] = {}
        self._contents: Dict[str, Content] = {}

    def add_course(self, course: Course) -> Course:
        if course.course_id in self._courses:
            raise DuplicateRecordError(f"Course already registered: {course.course_id!r}")
        self._courses[course.course_id] = course
        return course

    def create_course(
        self,
        course_id: str,
        title: str,
        start: InstantLike,
        end: Optional[InstantLike] = None,
    ) -> Course:
        """
        Build and register a course; date-only end dates cover the whole day.
        """
        course = Course(
            course_id=course_id,
            title=title,
            start=to_instant(start),
            end=to_instant(end, end_of_day=True) if end is not None else None,
        )
        return self.add_course(course)

    def get_course(self, course_id: str) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            raise UnknownCourseError(f"Unknown course: {course_id!r}")
        return course

    def courses(self) -> List[Course]:
        return list(self._courses.values())

    def add_content(self, content: Content) -> str:
        if self.get_course(content.course.course_id) != content.course:
            raise UnknownCourseError(f"Content {content.content_id!r} points at a course not held by this catalog")
        if content.content_id in self._contents:
            raise DuplicateRecordError(f"Content already registered: {content.content_id!r}")
        self._contents[content.content_id] = content
        return content.content_id

    def add_lesson(
        self,
        course_id: str,
        title: str,
        scheduled_at: InstantLike,
        content_id: Optional[str] = None,
    ) -> str:
        return self.add_content(
            Content(
                content_id=content_id or _new_content_id(),
                kind=ContentKind.LESSON,
                title=title,
                course=self.get_course(course_id),
                scheduled_at=to_instant(scheduled_at),
            )
        )

    def add_homework(self, course_id: str, title: str, content_id: Optional[str] = None) -> str:
        return self.add_content(
            Content(
                content_id=content_id or _new_content_id(),
                kind=ContentKind.HOMEWORK,
                title=title,
                course=self.get_course(course_id),
            )
        )

    def add_prep_material(self, course_id: str, title: str, content_id: Optional[str] = None) -> str:
        return self.add_content(
            Content(
                content_id=content_id or _new_content_id(),
                kind=ContentKind.PREP_MATERIAL,
                title=title,
                course=self.get_course(course_id),
            )
        )

    def get_content(self, content_id: str) -> Content:
        content = self._contents.get(content_id)
        if content is None:
            raise UnknownContentError(f"Unknown content: {content_id!r}")
        return content

    def contents_for(self, course_id: str) -> List[Content]:
        return [c for c in self._contents.values() if c.course.course_id == course_id]

    def is_content_available(self, content_id: str, instant: InstantLike) -> bool:
        return is_available(self.get_content(content_id), to_instant(instant))

    def evaluate(self, learner: Learner, content_id: str, instant: InstantLike) -> AccessDecision:
        return evaluate_access(learner, self.get_content(content_id), instant)

    def can_access(self, learner: Learner, content_id: str, instant: InstantLike) -> bool:
        return can_access(learner, self.get_content(content_id), instant)


class Directory:
    """
    Learners indexed by id.
    """

    def __init__(self) -> None:
        self._learners: Dict[str, Learner] = {}

    def add_learner(self, learner: Learner) -> Learner:
        if learner.learner_id in self._learners:
            raise DuplicateRecordError(f"Learner already registered: {learner.learner_id!r}")
        self._learners[learner.learner_id] = learner
        return learner

    def get_learner(self, learner_id: str) -> Learner:
        learner = self._learners.get(learner_id)
        if learner is None:
            raise UnknownLearnerError(f"Unknown learner: {learner_id!r}")
        return learner

    def learners(self) -> List[Learner]:
        return list(self._learners.values())


def check_access(
    learners: LearnerLookup,
    contents: ContentLookup,
    learner_id: str,
    content_id: str,
    instant: InstantLike,
) -> AccessDecision:
    """
    Resolve both ids and evaluate access.

    Unknown ids raise UnknownLearnerError / UnknownContentError.
    """
    learner = learners.get_learner(learner_id)
    return evaluate_access(learner, contents.get_content(content_id), instant)
