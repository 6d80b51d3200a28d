from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Leader:
    """Owner of a group of participants."""

    leader_id: str
    name: str
    phone: str
    email: str
    group_name: str
    created_at: datetime


@dataclass(frozen=True)
class Participant:
    """Roster entry matched against extracted meeting names.

    `leader_id` is a soft reference: a leader that no longer exists is shown as
    unassigned, never treated as an error.
    """

    participant_id: str
    full_name: str
    phone: str
    leader_id: Optional[str]
    created_at: datetime
    alt_name1: Optional[str] = None
    alt_name2: Optional[str] = None

    @property
    def aliases(self) -> list[str]:
        names = [self.full_name, self.alt_name1, self.alt_name2]
        return [n for n in names if n and n.strip()]
