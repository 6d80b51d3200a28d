from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord, Verdict
from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.validators import require_fine_amount, require_non_empty
from ..core.enums import AttendanceStatus, MeetingStatus
from ..core.exceptions import NotFoundError, StaleRevisionError, ValidationError
from ..database.mysql_base import new_id
from ..fines.calculator.absence_calculator import AbsenceFineCalculator
from ..fines.calculator.base import FineCalculator
from ..fines.model import Fine
from ..fines.repository import FineRepository
from ..users.model import Actor
from ..users.service import require_admin
from .model import Meeting, MeetingDraft, MeetingEdition
from .repository import MeetingRepository

logger = logging.getLogger(__name__)


class MeetingLedgerService:
    """Meeting lifecycle: CONFIRMED on first write, REVISED after a reopen.

    DRAFT only exists as operator input (`MeetingDraft`) and is never stored.
    Attendance and fine batches of a meeting id are always replaced together.
    """

    def __init__(
        self,
        meetings: MeetingRepository,
        attendance: AttendanceRepository,
        fines: FineRepository,
        audit: AuditService,
        *,
        calculator: Optional[FineCalculator] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._meetings = meetings
        self._attendance = attendance
        self._fines = fines
        self._audit = audit
        self._new_id = id_factory or new_id
        self._calculator = calculator or AbsenceFineCalculator(self._new_id)

    # Reads

    def get_meeting(self, meeting_id: str) -> Meeting:
        meeting = self._meetings.get_by_id(meeting_id)
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    def list_meetings(self) -> list[Meeting]:
        return sorted(self._meetings.list_all(), key=lambda m: m.held_at, reverse=True)

    def get_meeting_attendance(self, meeting_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_meeting(meeting_id)

    def get_meeting_fines(self, meeting_id: str) -> Sequence[Fine]:
        return self._fines.list_for_meeting(meeting_id)

    def list_editions(self, meeting_id: str) -> list[MeetingEdition]:
        return sorted(self._meetings.list_editions(meeting_id), key=lambda e: e.version)

    def revision_chain(self, meeting_id: str) -> list[MeetingEdition]:
        """Editions newest first, following `parent_meeting_id` back to version 1."""
        chain: list[MeetingEdition] = []
        seen: set[str] = set()
        current: Optional[str] = meeting_id
        while current and current not in seen:
            seen.add(current)
            editions = sorted(self._meetings.list_editions(current), key=lambda e: e.version, reverse=True)
            if not editions:
                break
            chain.extend(editions)
            # A reopened meeting points at itself; only the first edition ends the walk.
            current = editions[-1].parent_meeting_id
        return chain

    # Transitions

    def confirm(
        self,
        *,
        actor: Actor,
        draft: MeetingDraft,
        verdicts: Sequence[Verdict],
        now: Optional[datetime] = None,
    ) -> Meeting:
        name = require_non_empty(draft.name, "Meeting name")
        fine_amount = require_fine_amount(draft.fine_amount)
        self._require_unique(verdicts)

        meeting = Meeting(
            meeting_id=self._new_id(),
            name=name,
            held_at=draft.held_at,
            fine_amount=fine_amount,
            status=MeetingStatus.CONFIRMED,
            version=1,
            created_at=now or now_local(),
        )
        attendance = self._attendance_batch(meeting.meeting_id, verdicts)
        fines = self._calculator.compute_fines(
            meeting_id=meeting.meeting_id, verdicts=verdicts, fine_amount=fine_amount
        )

        self._meetings.save_confirmed(meeting=meeting, attendance=attendance, fines=fines)
        logger.info(
            "meeting %s confirmed: %d attendance, %d fine(s)", meeting.meeting_id, len(attendance), len(fines)
        )
        self._audit.log(actor, "Meeting Tracked", f"Generated attendance for {meeting.name}", now=meeting.created_at)
        return meeting

    def reopen(
        self,
        *,
        actor: Actor,
        meeting_id: str,
        confirmed: bool,
        now: Optional[datetime] = None,
    ) -> Meeting:
        """CONFIRMED -> REVISED on the same meeting id.

        `confirmed=False` (the admin declined the prompt) changes nothing.
        """
        require_admin(actor, "Only an admin can reopen a meeting")
        meeting = self.get_meeting(meeting_id)
        if not confirmed:
            return meeting
        if meeting.status != MeetingStatus.CONFIRMED:
            raise StaleRevisionError(f"Only a confirmed meeting can be reopened (status is {meeting.status.value})")

        revised = replace(
            meeting,
            status=MeetingStatus.REVISED,
            version=meeting.version + 1,
            parent_meeting_id=meeting.meeting_id,
        )
        if not self._meetings.save_revision(
            meeting=revised, expected_version=meeting.version, recorded_at=now or now_local()
        ):
            raise StaleRevisionError("The meeting was revised by someone else, reload and try again")

        logger.info("meeting %s reopened as version %d", meeting_id, revised.version)
        self._audit.log(actor, "Meeting Reopened", f"Reopened meeting {meeting.name} for revision", now=now)
        return revised

    def revise_attendance(
        self,
        *,
        actor: Actor,
        meeting_id: str,
        verdicts: Sequence[Verdict],
        now: Optional[datetime] = None,
    ) -> Meeting:
        """Write a fresh attendance + fine batch for a reopened meeting."""
        require_admin(actor, "Only an admin can revise attendance")
        meeting = self.get_meeting(meeting_id)
        if meeting.status != MeetingStatus.REVISED:
            raise StaleRevisionError("Reopen the meeting before revising its attendance")
        self._require_unique(verdicts)

        attendance = self._attendance_batch(meeting_id, verdicts)
        fines = self._carry_over_paid(
            meeting_id,
            self._calculator.compute_fines(meeting_id=meeting_id, verdicts=verdicts, fine_amount=meeting.fine_amount),
        )
        self._meetings.replace_batches(meeting_id=meeting_id, attendance=attendance, fines=fines)
        self._audit.log(
            actor,
            "Meeting Revised",
            f"Rewrote attendance for {meeting.name} (v{meeting.version}): {len(fines)} fine(s)",
            now=now,
        )
        return meeting

    def override_attendance(
        self,
        *,
        actor: Actor,
        meeting_id: str,
        participant_id: str,
        status: AttendanceStatus,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Manual status change on a stored record. Fines are left as they are."""
        require_admin(actor, "Only an admin can override attendance")
        record = next(
            (r for r in self._attendance.list_for_meeting(meeting_id) if r.participant_id == participant_id),
            None,
        )
        if record is None:
            raise NotFoundError("No attendance record for this participant in this meeting")

        if not self._attendance.update_status(
            attendance_id=record.attendance_id, status=status, is_manual_override=True
        ):
            raise ValidationError("Updating attendance failed")

        self._audit.log(
            actor,
            "Attendance Overridden",
            f"Set {participant_id} to {status.value} in meeting {meeting_id}",
            now=now,
        )
        return replace(record, status=status, is_manual_override=True)

    def recompute_fines(self, *, actor: Actor, meeting_id: str, now: Optional[datetime] = None) -> list[Fine]:
        """Rebuild the fine batch from the current attendance records.

        Participants who already had a fine keep its id and paid flag.
        """
        require_admin(actor, "Only an admin can recompute fines")
        meeting = self.get_meeting(meeting_id)

        fines = self._carry_over_paid(
            meeting_id,
            [
                Fine(
                    fine_id=self._new_id(),
                    meeting_id=meeting_id,
                    participant_id=record.participant_id,
                    amount=meeting.fine_amount,
                )
                for record in self._attendance.list_for_meeting(meeting_id)
                if record.status == AttendanceStatus.ABSENT
            ],
        )

        self._fines.replace_for_meeting(meeting_id=meeting_id, fines=fines)
        self._audit.log(actor, "Fines Recomputed", f"{len(fines)} fine(s) for {meeting.name}", now=now)
        return fines

    # Helpers

    def _carry_over_paid(self, meeting_id: str, fines: Sequence[Fine]) -> list[Fine]:
        """Keep the id and paid flag of fines a participant already had in this meeting."""
        existing = {f.participant_id: f for f in self._fines.list_for_meeting(meeting_id)}
        carried: list[Fine] = []
        for fine in fines:
            prior = existing.get(fine.participant_id)
            carried.append(replace(fine, fine_id=prior.fine_id, is_paid=prior.is_paid) if prior else fine)
        return carried

    def _attendance_batch(self, meeting_id: str, verdicts: Sequence[Verdict]) -> list[AttendanceRecord]:
        return [
            AttendanceRecord(
                attendance_id=self._new_id(),
                meeting_id=meeting_id,
                participant_id=v.participant.participant_id,
                status=v.status,
                confidence_score=int(v.confidence),
                is_manual_override=v.is_manual_override,
            )
            for v in verdicts
        ]

    @staticmethod
    def _require_unique(verdicts: Sequence[Verdict]) -> None:
        ids = [v.participant.participant_id for v in verdicts]
        if len(ids) != len(set(ids)):
            raise ValidationError("A participant appears more than once in the attendance batch")
