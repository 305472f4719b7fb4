"""
Central data model definitions used across the project.

This module defines the canonical structure of courses, content items, learners
and their enrolment periods so that:
- the evaluator, the catalog and the snapshot loader share the same field names
- invariants (start <= end, aware datetimes, lessons have a schedule) are
  checked once, when a record is created
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union

from courseaccess.errors import (
    MalformedContentError,
    MalformedCourseError,
    MalformedPeriodError,
    MissingCourseError,
)
from courseaccess.instants import InstantLike, is_aware, to_instant


@dataclass(frozen=True)
class Course:
    """
    A course and its activity window.

    end=None means the course never closes.
    """

    course_id: str
    title: str
    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not is_aware(self.start) or (self.end is not None and not is_aware(self.end)):
            raise MalformedCourseError(f"Course {self.course_id!r} needs timezone-aware start/end")
        if self.end is not None and self.end < self.start:
            raise MalformedCourseError(
                f"Course {self.course_id!r} ends ({self.end.isoformat()}) before it starts ({self.start.isoformat()})"
            )


class ContentKind(Enum):
    LESSON = "lesson"
    HOMEWORK = "homework"
    PREP_MATERIAL = "prep_material"


@dataclass(frozen=True)
class Content:
    """
    One piece of course content.

    scheduled_at is the release instant of a lesson; it is ignored for
    homework and prep material.
    """

    content_id: str
    kind: ContentKind
    title: str
    course: Course
    scheduled_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.course is None:
            raise MissingCourseError(f"Content {self.content_id!r} has no owning course")
        if self.kind is ContentKind.LESSON:
            if self.scheduled_at is None:
                raise MalformedContentError(f"Lesson {self.content_id!r} has no scheduled instant")
            if not is_aware(self.scheduled_at):
                raise MalformedContentError(f"Lesson {self.content_id!r} needs a timezone-aware schedule")


@dataclass(frozen=True)
class EnrolmentPeriod:
    """
    Closed interval [start, end] during which a learner's registration in a
    course is valid.
    """

    learner_id: str
    course_id: str
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not (is_aware(self.start) and is_aware(self.end)):
            raise MalformedPeriodError(
                f"Enrolment of {self.learner_id!r} in {self.course_id!r} needs timezone-aware start/end"
            )
        if self.end < self.start:
            raise MalformedPeriodError(
                f"Enrolment of {self.learner_id!r} in {self.course_id!r} ends before it starts"
            )

    def covers(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def _course_id(course: Union[Course, str]) -> str:
    return course.course_id if isinstance(course, Course) else str(course)


@dataclass
class Learner:
    """
    A learner and the enrolment periods recorded for them.

    Periods are append-only: a renewal or re-enrolment adds a new period,
    existing ones are never edited or removed.
    """

    learner_id: str
    name: str = ""
    enrolments: List[EnrolmentPeriod] = field(default_factory=list)

    def enrol(
        self,
        course: Union[Course, str],
        start: InstantLike,
        end: InstantLike,
    ) -> EnrolmentPeriod:
        """
        Append a new enrolment period and return it.

        Date-only bounds are normalized so that the whole end day is covered.
        """
        period = EnrolmentPeriod(
            learner_id=self.learner_id,
            course_id=_course_id(course),
            start=to_instant(start),
            end=to_instant(end, end_of_day=True),
        )
        self.enrolments.append(period)
        return period

    def periods_for(self, course: Union[Course, str]) -> Tuple[EnrolmentPeriod, ...]:
        cid = _course_id(course)
        return tuple(p for p in self.enrolments if p.course_id == cid)

    def enrolled_course_ids(self) -> List[str]:
        seen: List[str] = []
        for p in self.enrolments:
            if p.course_id not in seen:
                seen.append(p.course_id)
        return seen


class DenialReason(Enum):
    COURSE_NOT_STARTED = "course_not_started"
    COURSE_ENDED = "course_ended"
    NO_ENROLMENT = "no_enrolment"
    ENROLMENT_NOT_ACTIVE = "enrolment_not_active"
    CONTENT_NOT_YET_RELEASED = "content_not_yet_released"


@dataclass(frozen=True)
class AccessDecision:
    """
    Result of an access evaluation. Truthy iff access is allowed;
    reason is only set on denial.
    """

    allowed: bool
    reason: Optional[DenialReason] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)
