from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import format_date_only
from ..core.constants import CURRENCY_SYMBOL, DEFAULT_REPORT_SIGNATURE, DEFAULT_TIMEZONE
from ..meetings.model import Meeting
from ..roster.model import Leader
from .model import MemberLine


def total_fines(meeting: Meeting, members: Sequence[MemberLine]) -> int:
    return sum(1 for m in members if m.fine is not None) * meeting.fine_amount


class ReportComposer:
    """Deterministic per-leader attendance report.

    `emphasize` only wraps key fields in '*' for chat channels; the fields and
    their order never change. Only the meeting date is shown, never its time.
    """

    def __init__(self, *, signature: str = DEFAULT_REPORT_SIGNATURE, tz_name: str = DEFAULT_TIMEZONE):
        self._signature = signature
        self._tz_name = tz_name

    def compose_report(
        self,
        meeting: Meeting,
        leader: Leader,
        members: Sequence[MemberLine],
        emphasize: bool = False,
    ) -> str:
        star = "*" if emphasize else ""
        meeting_date = format_date_only(meeting.held_at, tz_name=self._tz_name)

        lines = [
            f"Respected {leader.name},",
            "",
            f"Meeting: {star}{meeting.name}{star}",
            f"Date: {meeting_date}",
            f"Group: {star}{leader.group_name}{star}",
            f"Total Fines: {star}{CURRENCY_SYMBOL}{total_fines(meeting, members)}{star}",
            "",
            f"{star}Attendance Summary:{star}",
        ]
        for m in members:
            fine_text = f" (Fine: {CURRENCY_SYMBOL}{m.fine.amount})" if m.fine else ""
            lines.append(f"- {m.participant.full_name}: {m.attendance.status.value}{fine_text}")
        lines += ["", "Regards,", self._signature]
        return "\n".join(lines)

    @staticmethod
    def subject(meeting: Meeting) -> str:
        return f"Sadhana Report: {meeting.name}"
