from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_PRESENT_THRESHOLD
from ..core.enums import AttendanceStatus
from .rules.base import MatchResult


@dataclass(frozen=True)
class StatusPolicy:
    """Turn a match score into an attendance status."""

    present_threshold: int = DEFAULT_PRESENT_THRESHOLD

    def status_for(self, result: MatchResult) -> AttendanceStatus:
        if not result.is_match:
            return AttendanceStatus.ABSENT
        if result.score >= self.present_threshold:
            return AttendanceStatus.PRESENT
        return AttendanceStatus.NEEDS_REVIEW
