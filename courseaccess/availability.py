"""
Content availability rules, one per ContentKind.

- lesson:        available from its scheduled instant onward (inclusive)
- homework:      no rule of its own, governed by the course window
- prep_material: no rule of its own, governed by the course window

A ContentKind without a branch below raises UnknownContentKindError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from courseaccess.errors import UnknownContentKindError
from courseaccess.model import Content, ContentKind


def released_at(content: Content) -> Optional[datetime]:
    """
    Instant from which the content is released, None if it has no own release time.
    """
    if content.kind is ContentKind.LESSON:
        return content.scheduled_at
    return None


def is_available(content: Content, instant: datetime) -> bool:
    kind = content.kind
    if kind is ContentKind.LESSON:
        return instant >= content.scheduled_at
    if kind is ContentKind.HOMEWORK:
        return True
    if kind is ContentKind.PREP_MATERIAL:
        return True
    raise UnknownContentKindError(f"No availability rule for content kind {kind!r}")
