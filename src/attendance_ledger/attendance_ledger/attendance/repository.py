from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_meeting(self, meeting_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        attendance_id: str,
        status: AttendanceStatus,
        is_manual_override: bool,
    ) -> bool:
        """Manual override after confirmation. Never touches fines."""

        raise NotImplementedError
