from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import AttendanceStatus
from ..roster.model import Participant


@dataclass(frozen=True)
class Verdict:
    """Computed attendance outcome for one participant against one name set."""

    participant: Participant
    status: AttendanceStatus
    confidence: int
    is_manual_override: bool = False
    matched_name: Optional[str] = None

    def with_status(self, status: AttendanceStatus) -> "Verdict":
        return replace(self, status=status, is_manual_override=True)


@dataclass(frozen=True)
class AttendanceRecord:
    """Ledger row: one per (meeting, participant)."""

    attendance_id: str
    meeting_id: str
    participant_id: str
    status: AttendanceStatus
    confidence_score: int
    is_manual_override: bool = False


@dataclass(frozen=True)
class ScanResult:
    """Read-model returned to the operator before confirmation."""

    found_names: list[str]
    verdicts: list[Verdict]
    unmatched_names: list[str]

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for v in self.verdicts if v.status == status)
