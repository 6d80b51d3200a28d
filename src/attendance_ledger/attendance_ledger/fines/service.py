from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..audit.service import AuditService
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..meetings.repository import MeetingRepository
from ..roster.repository import ParticipantRepository
from ..users.model import Actor
from .model import Fine
from .repository import FineRepository


@dataclass(frozen=True)
class GroupFines:
    """Fines of one leader's group, newest meeting first."""

    fines: list[Fine]
    pending_total: int


class FineService:
    """Use case: track payment of fines. Independent of meeting revision state."""

    def __init__(
        self,
        fines: FineRepository,
        participants: ParticipantRepository,
        meetings: MeetingRepository,
        audit: AuditService,
    ):
        self._fines = fines
        self._participants = participants
        self._meetings = meetings
        self._audit = audit

    def _group_ids(self, leader_id: Optional[str]) -> list[str]:
        return [p.participant_id for p in self._participants.list_all() if leader_id and p.leader_id == leader_id]

    def group_fines(self, leader_id: str) -> GroupFines:
        fines = list(self._fines.list_for_participants(self._group_ids(leader_id)))
        held_at = {m.meeting_id: m.held_at for m in self._meetings.list_all()}
        fines.sort(key=lambda f: held_at.get(f.meeting_id) or datetime.min, reverse=True)
        pending = sum(f.amount for f in fines if not f.is_paid)
        return GroupFines(fines=fines, pending_total=pending)

    def toggle_paid(self, *, actor: Actor, fine_id: str, now: Optional[datetime] = None) -> Fine:
        fine = self._fines.get_by_id(fine_id)
        if not fine:
            raise NotFoundError("Fine not found")
        if not actor.is_admin and fine.participant_id not in self._group_ids(actor.leader_id):
            raise AuthorizationError("You can only update fines of your own group")

        updated = replace(fine, is_paid=not fine.is_paid)
        if not self._fines.set_paid(fine_id=fine_id, is_paid=updated.is_paid):
            raise ValidationError("Updating the fine failed")

        participant = self._participants.get_by_id(fine.participant_id)
        who = participant.full_name if participant else fine.participant_id
        self._audit.log(
            actor,
            "Fine Updated",
            f"Marked fine for {who} as {'PAID' if updated.is_paid else 'UNPAID'}",
            now=now,
        )
        return updated
