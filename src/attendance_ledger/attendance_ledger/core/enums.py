from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role tag carried by every actor."""

    ADMIN = "ADMIN"
    LEADER = "LEADER"


class AttendanceStatus(str, Enum):
    """Verdict stored for one participant in one meeting."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    NEEDS_REVIEW = "NEEDS_REVIEW"


class MeetingStatus(str, Enum):
    """Meeting lifecycle. DRAFT is never persisted."""

    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    REVISED = "REVISED"
