"""
Access evaluator.

can_access(learner, content, instant) is a strict conjunction of three checks,
evaluated in this order and stopping at the first failure:

    1. course window   (course_not_started / course_ended)
    2. enrolment       (no_enrolment / enrolment_not_active)
    3. availability    (content_not_yet_released)

The evaluator holds no state and never mutates its inputs, so it can be called
concurrently from any number of threads.
"""

from __future__ import annotations

import logging

from courseaccess.availability import is_available
from courseaccess.course_window import course_window_denial
from courseaccess.enrolment import enrolment_denial
from courseaccess.errors import MissingCourseError
from courseaccess.instants import InstantLike, to_instant
from courseaccess.model import AccessDecision, Content, DenialReason, Learner

logger = logging.getLogger(__name__)


def evaluate_access(learner: Learner, content: Content, instant: InstantLike) -> AccessDecision:
    """
    Decide whether learner may view content at instant and say why not.

    Naive datetimes, dates and strings are normalized with to_instant() first.
    """
    at = to_instant(instant)
    course = content.course
    if course is None:
        raise MissingCourseError(f"Content {content.content_id!r} has no owning course")

    reason = course_window_denial(course, at)
    if reason is None:
        reason = enrolment_denial(learner, course, at)
    if reason is None and not is_available(content, at):
        reason = DenialReason.CONTENT_NOT_YET_RELEASED

    if reason is not None:
        logger.debug(
            "access_denied",
            extra={
                "learner_id": learner.learner_id,
                "content_id": content.content_id,
                "course_id": course.course_id,
                "at": at.isoformat(),
                "reason": reason.value,
            },
        )
        return AccessDecision.deny(reason)

    return AccessDecision.allow()


def can_access(learner: Learner, content: Content, instant: InstantLike) -> bool:
    return evaluate_access(learner, content, instant).allowed
