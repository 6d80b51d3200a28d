from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Fine:
    fine_id: str
    meeting_id: str
    participant_id: str
    amount: int
    is_paid: bool = False
