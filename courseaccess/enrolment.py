"""
Enrolment ledger queries.

A learner may hold any number of periods for the same course (withdrawal and
re-enrolment, renewals). Periods may overlap or leave gaps. Access is granted
if ANY period covers the instant:

    period.start <= instant <= period.end
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from courseaccess.model import Course, DenialReason, EnrolmentPeriod, Learner


def active_periods(learner: Learner, course: Course, instant: datetime) -> List[EnrolmentPeriod]:
    """
    All periods of learner for course that cover instant.
    """
    return [p for p in learner.periods_for(course) if p.covers(instant)]


def has_active_period(learner: Learner, course: Course, instant: datetime) -> bool:
    return any(p.covers(instant) for p in learner.periods_for(course))


def enrolment_denial(learner: Learner, course: Course, instant: datetime) -> Optional[DenialReason]:
    """
    no_enrolment         -> no period at all for this course
    enrolment_not_active -> periods exist, none covers instant
    None                 -> at least one period covers instant
    """
    periods = learner.periods_for(course)
    if not periods:
        return DenialReason.NO_ENROLMENT
    if not any(p.covers(instant) for p in periods):
        return DenialReason.ENROLMENT_NOT_ACTIVE
    return None


def merged_coverage(periods: Iterable[EnrolmentPeriod]) -> List[Tuple[datetime, datetime]]:
    """
    Collapse periods into disjoint, sorted (start, end) intervals.

    Periods that overlap or touch (next.start <= current.end) are merged.
    A gap of any size, even one microsecond, keeps intervals separate, so
    "covered by a merged interval" is equivalent to "covered by some period".
    """
    ordered = sorted(periods, key=lambda p: (p.start, p.end))
    merged: List[Tuple[datetime, datetime]] = []
    for p in ordered:
        if merged and p.start <= merged[-1][1]:
            start, end = merged[-1]
            merged[-1] = (start, max(end, p.end))
        else:
            merged.append((p.start, p.end))
    return merged
