from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..audit.service import AuditService
from ..common.datetime_utils import days_between, now_local
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DELETION_LOCK_DAYS, UNASSIGNED_LEADER_LABEL
from ..core.exceptions import NotFoundError, ValidationError
from ..database.mysql_base import new_id
from ..users.model import Actor
from ..users.service import MasterPasswordGate, require_admin
from .model import Leader, Participant
from .repository import LeaderRepository, ParticipantRepository


class RosterService:
    """Use case: maintain leaders and participants (admin)."""

    def __init__(
        self,
        participants: ParticipantRepository,
        leaders: LeaderRepository,
        audit: AuditService,
        gate: MasterPasswordGate,
        *,
        deletion_lock_days: int = DELETION_LOCK_DAYS,
    ):
        self._participants = participants
        self._leaders = leaders
        self._audit = audit
        self._gate = gate
        self._lock_days = int(deletion_lock_days)

    # Leaders

    def list_leaders(self) -> Sequence[Leader]:
        return self._leaders.list_all()

    def add_leader(
        self,
        *,
        actor: Actor,
        name: str,
        group_name: str,
        phone: str = "",
        email: str = "",
        now: Optional[datetime] = None,
    ) -> Leader:
        require_admin(actor)
        leader = Leader(
            leader_id=new_id(),
            name=require_non_empty(name, "Leader name"),
            phone=(phone or "").strip(),
            email=(email or "").strip(),
            group_name=require_non_empty(group_name, "Group name"),
            created_at=now or now_local(),
        )
        self._leaders.add(leader)
        self._audit.log(
            actor,
            "Leader Added",
            f"Added leader {leader.name} for group {leader.group_name}",
            now=leader.created_at,
        )
        return leader

    def delete_leader(self, *, actor: Actor, leader_id: str, master_password: str) -> None:
        """Participants keep their dangling `leader_id` and show as unassigned."""
        require_admin(actor)
        leader = self._leaders.get_by_id(leader_id)
        if not leader:
            raise NotFoundError("Leader not found")

        self._gate.verify(master_password)
        if not self._leaders.delete_by_id(leader_id):
            raise ValidationError("Deleting the leader failed")
        self._audit.log(actor, "Leader Deleted", f"Removed leader {leader.name}")

    # Participants

    def list_participants(self, actor: Optional[Actor] = None) -> Sequence[Participant]:
        """Admins (or internal callers) get the whole roster, leaders their own group."""
        everyone = self._participants.list_all()
        if actor is None or actor.is_admin:
            return everyone
        return [p for p in everyone if p.leader_id is not None and p.leader_id == actor.leader_id]

    def add_participant(
        self,
        *,
        actor: Actor,
        full_name: str,
        leader_id: Optional[str],
        phone: str = "",
        alt_name1: Optional[str] = None,
        alt_name2: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Participant:
        require_admin(actor)
        participant = Participant(
            participant_id=new_id(),
            full_name=require_non_empty(full_name, "Full name"),
            phone=(phone or "").strip(),
            leader_id=optional_text(leader_id),
            created_at=now or now_local(),
            alt_name1=optional_text(alt_name1),
            alt_name2=optional_text(alt_name2),
        )
        self._participants.add(participant)
        self._audit.log(actor, "Participant Added", f"Added {participant.full_name}", now=participant.created_at)
        return participant

    def update_participant(
        self,
        *,
        actor: Actor,
        participant_id: str,
        full_name: str,
        leader_id: Optional[str],
        phone: str = "",
        alt_name1: Optional[str] = None,
        alt_name2: Optional[str] = None,
    ) -> Participant:
        require_admin(actor)
        current = self._participants.get_by_id(participant_id)
        if not current:
            raise NotFoundError("Participant not found")

        updated = replace(
            current,
            full_name=require_non_empty(full_name, "Full name"),
            phone=(phone or "").strip(),
            leader_id=optional_text(leader_id),
            alt_name1=optional_text(alt_name1),
            alt_name2=optional_text(alt_name2),
        )
        if not self._participants.update(updated):
            raise ValidationError("Updating the participant failed")
        self._audit.log(actor, "Participant Updated", f"Updated {updated.full_name}")
        return updated

    def delete_participant(
        self,
        *,
        actor: Actor,
        participant_id: str,
        master_password: str,
        now: Optional[datetime] = None,
    ) -> None:
        require_admin(actor)
        participant = self._participants.get_by_id(participant_id)
        if not participant:
            raise NotFoundError("Participant not found")

        age_days = days_between(participant.created_at, now or now_local())
        if age_days < self._lock_days:
            raise ValidationError(
                f"Deletion blocked. Participants cannot be deleted within first {self._lock_days} days."
            )

        self._gate.verify(master_password)
        if not self._participants.delete_by_id(participant_id):
            raise ValidationError("Deleting the participant failed")
        self._audit.log(actor, "Participant Deleted", f"Hard deleted {participant.full_name}", now=now)

    def leader_label(self, participant: Participant) -> str:
        if not participant.leader_id:
            return UNASSIGNED_LEADER_LABEL
        leader = self._leaders.get_by_id(participant.leader_id)
        return leader.name if leader else UNASSIGNED_LEADER_LABEL
