from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..fines.model import Fine
from .model import Meeting, MeetingEdition


class MeetingRepository(Protocol):
    """Meeting ledger storage.

    Every write method is a single transaction: a meeting is never left with an
    attendance batch but no fine batch (or the reverse).
    """

    def get_by_id(self, meeting_id: str) -> Optional[Meeting]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Meeting]:
        raise NotImplementedError

    def list_editions(self, meeting_id: str) -> Sequence[MeetingEdition]:
        raise NotImplementedError

    def save_confirmed(
        self,
        *,
        meeting: Meeting,
        attendance: Sequence[AttendanceRecord],
        fines: Sequence[Fine],
    ) -> None:
        """Insert the meeting row, its first edition and both batches."""

        raise NotImplementedError

    def save_revision(self, *, meeting: Meeting, expected_version: int, recorded_at: datetime) -> bool:
        """Update the row in place if it still has `expected_version`; record the edition.

        Returns False when another revision already moved the version on.
        """

        raise NotImplementedError

    def replace_batches(
        self,
        *,
        meeting_id: str,
        attendance: Sequence[AttendanceRecord],
        fines: Sequence[Fine],
    ) -> None:
        """Batch supersession: drop all prior attendance and fines of the meeting, insert the new ones."""

        raise NotImplementedError
