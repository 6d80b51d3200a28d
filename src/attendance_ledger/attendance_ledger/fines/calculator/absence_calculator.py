from __future__ import annotations

from typing import Callable, Optional, Sequence

from ...attendance.model import Verdict
from ...core.enums import AttendanceStatus
from ...database.mysql_base import new_id
from ..model import Fine
from .base import FineCalculator


class AbsenceFineCalculator(FineCalculator):
    """Standard rule: one unpaid fine of the meeting amount per ABSENT verdict.

    PRESENT and NEEDS_REVIEW are never fined.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._new_id = id_factory or new_id

    def compute_fines(self, *, meeting_id: str, verdicts: Sequence[Verdict], fine_amount: int) -> list[Fine]:
        return [
            Fine(
                fine_id=self._new_id(),
                meeting_id=meeting_id,
                participant_id=v.participant.participant_id,
                amount=int(fine_amount),
                is_paid=False,
            )
            for v in verdicts
            if v.status == AttendanceStatus.ABSENT
        ]
