from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditService
from ..core.exceptions import NotFoundError, ValidationError
from ..fines.repository import FineRepository
from ..meetings.repository import MeetingRepository
from ..roster.repository import LeaderRepository, ParticipantRepository
from ..users.model import Actor
from .composer import ReportComposer, total_fines
from .model import LeaderNotification, MemberLine

CHANNEL_ACTIONS = {
    "email": "Email Prep",
    "chat": "WhatsApp Prep",
}


class NotificationService:
    """Use case: per-leader report payloads for one meeting."""

    def __init__(
        self,
        meetings: MeetingRepository,
        leaders: LeaderRepository,
        participants: ParticipantRepository,
        attendance: AttendanceRepository,
        fines: FineRepository,
        audit: AuditService,
        *,
        composer: Optional[ReportComposer] = None,
    ):
        self._meetings = meetings
        self._leaders = leaders
        self._participants = participants
        self._attendance = attendance
        self._fines = fines
        self._audit = audit
        self._composer = composer or ReportComposer()

    def build_notifications(self, meeting_id: str) -> list[LeaderNotification]:
        """Leaders without any group member recorded for the meeting are left out."""
        meeting = self._meetings.get_by_id(meeting_id)
        if not meeting:
            raise NotFoundError("Meeting not found")

        attendance = {a.participant_id: a for a in self._attendance.list_for_meeting(meeting_id)}
        fines = {f.participant_id: f for f in self._fines.list_for_meeting(meeting_id)}
        participants = list(self._participants.list_all())

        out: list[LeaderNotification] = []
        for leader in self._leaders.list_all():
            members = [
                MemberLine(participant=p, attendance=attendance[p.participant_id], fine=fines.get(p.participant_id))
                for p in participants
                if p.leader_id == leader.leader_id and p.participant_id in attendance
            ]
            if not members:
                continue
            out.append(
                LeaderNotification(
                    leader=leader,
                    members=members,
                    total_fines=total_fines(meeting, members),
                    subject=self._composer.subject(meeting),
                    plain_text=self._composer.compose_report(meeting, leader, members, emphasize=False),
                    emphasized_text=self._composer.compose_report(meeting, leader, members, emphasize=True),
                )
            )
        return out

    def record_handoff(
        self,
        *,
        actor: Actor,
        leader_id: str,
        channel: str,
        now: Optional[datetime] = None,
    ) -> None:
        """Audit that a payload was handed to the mail or chat composer."""
        action = CHANNEL_ACTIONS.get(channel)
        if action is None:
            raise ValidationError(f"Unknown channel: {channel}")
        leader = self._leaders.get_by_id(leader_id)
        if not leader:
            raise NotFoundError("Leader not found")
        target = "email compose" if channel == "email" else "WhatsApp"
        self._audit.log(actor, action, f"Opened {target} for {leader.name}", now=now)
