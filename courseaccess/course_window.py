"""
Course window.

A course is active on the closed interval [start, end]; without an end the
interval is unbounded to the right. Both boundaries count as active.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from courseaccess.model import Course, DenialReason


def course_window_denial(course: Course, instant: datetime) -> Optional[DenialReason]:
    """
    Return why the course is not active at instant, or None if it is.
    """
    if instant < course.start:
        return DenialReason.COURSE_NOT_STARTED
    if course.end is not None and instant > course.end:
        return DenialReason.COURSE_ENDED
    return None


def is_active(course: Course, instant: datetime) -> bool:
    return course_window_denial(course, instant) is None
