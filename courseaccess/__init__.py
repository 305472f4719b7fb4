"""
courseaccess: decide whether a learner may view course content at a given instant.

Access is the conjunction of three temporal windows, checked in order:
course activity, enrolment validity, content release.
"""

from courseaccess.access import can_access, evaluate_access
from courseaccess.availability import is_available
from courseaccess.catalog import Catalog, Directory
from courseaccess.course_window import is_active
from courseaccess.enrolment import has_active_period
from courseaccess.instants import to_instant
from courseaccess.model import (
    AccessDecision,
    Content,
    ContentKind,
    Course,
    DenialReason,
    EnrolmentPeriod,
    Learner,
)

__all__ = [
    "AccessDecision",
    "Catalog",
    "Content",
    "ContentKind",
    "Course",
    "DenialReason",
    "Directory",
    "EnrolmentPeriod",
    "Learner",
    "can_access",
    "evaluate_access",
    "has_active_period",
    "is_active",
    "is_available",
    "to_instant",
]
