from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MeetingStatus


@dataclass(frozen=True)
class MeetingDraft:
    """Operator input collected before a scan is confirmed."""

    name: str
    held_at: datetime
    fine_amount: int


@dataclass(frozen=True)
class Meeting:
    """Latest edition of a meeting.

    Reopening keeps `meeting_id` and bumps `version`/`status`; earlier editions
    are kept as `MeetingEdition` snapshots.
    """

    meeting_id: str
    name: str
    held_at: datetime
    fine_amount: int
    status: MeetingStatus
    version: int
    created_at: datetime
    parent_meeting_id: Optional[str] = None


@dataclass(frozen=True)
class MeetingEdition:
    meeting_id: str
    version: int
    status: MeetingStatus
    fine_amount: int
    recorded_at: datetime
    parent_meeting_id: Optional[str] = None
