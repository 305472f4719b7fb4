"""
Exceptions raised for misconfigured input data.

A denied access is never an exception: the evaluator answers with a boolean
(and a DenialReason). The classes below are for records that should not exist
in the first place, e.g. a course that ends before it starts or a content kind
without an availability rule. Those are surfaced loudly instead of being masked
as "access denied".
"""

from __future__ import annotations


class CourseAccessError(Exception):
    """Base class for all errors raised by courseaccess."""


class ConfigurationError(CourseAccessError, ValueError):
    """Invalid value in the environment / .env configuration."""


class InvalidInstantError(CourseAccessError, ValueError):
    """A timestamp could not be parsed or normalized."""


class MalformedCourseError(CourseAccessError, ValueError):
    """Course window is invalid (end before start, naive datetimes)."""


class MalformedContentError(CourseAccessError, ValueError):
    """Content record is inconsistent with its kind (lesson without schedule)."""


class MalformedPeriodError(CourseAccessError, ValueError):
    """Enrolment period is invalid (end before start, naive datetimes)."""


class MissingCourseError(CourseAccessError, ValueError):
    """Content item has no owning course."""


class UnknownContentKindError(CourseAccessError, ValueError):
    """No availability rule is defined for the content kind."""


class UnknownContentError(CourseAccessError, KeyError):
    """Content id is not present in the catalog."""


class UnknownLearnerError(CourseAccessError, KeyError):
    """Learner id is not present in the directory."""


class SnapshotError(CourseAccessError, ValueError):
    """A JSON snapshot file is missing or contains a malformed record."""


class UnknownCourseError(CourseAccessError, KeyError):
    """Course id is not present in the catalog."""


class DuplicateRecordError(CourseAccessError, ValueError):
    """A course, content or learner id is registered twice."""
