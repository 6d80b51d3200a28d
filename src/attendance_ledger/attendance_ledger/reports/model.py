from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..fines.model import Fine
from ..roster.model import Leader, Participant


@dataclass(frozen=True)
class MemberLine:
    participant: Participant
    attendance: AttendanceRecord
    fine: Optional[Fine] = None


@dataclass(frozen=True)
class LeaderNotification:
    """Report payloads for one leader, handed to an external mail/chat composer."""

    leader: Leader
    members: list[MemberLine]
    total_fines: int
    subject: str
    plain_text: str
    emphasized_text: str
