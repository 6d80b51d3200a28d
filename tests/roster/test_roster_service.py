from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_ledger.attendance_ledger.audit.service import AuditService
from src.attendance_ledger.attendance_ledger.core.enums import Role
from src.attendance_ledger.attendance_ledger.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.attendance_ledger.attendance_ledger.roster.service import RosterService
from src.attendance_ledger.attendance_ledger.users.model import Actor
from src.attendance_ledger.attendance_ledger.users.service import MasterPasswordGate

ADMIN = Actor(username="admin", role=Role.ADMIN)
LEADER = Actor(username="asha", role=Role.LEADER, leader_id="LA")
SECRET = "open-sesame"
T0 = datetime(2026, 1, 1, 9, 0)


class InMemoryRepo:
    def __init__(self, key):
        self._key = key
        self.items = {}

    def list_all(self):
        return list(self.items.values())

    def get_by_id(self, item_id):
        return self.items.get(item_id)

    def add(self, item):
        self.items[getattr(item, self._key)] = item

    def update(self, item):
        if getattr(item, self._key) not in self.items:
            return False
        self.items[getattr(item, self._key)] = item
        return True

    def delete_by_id(self, item_id):
        return self.items.pop(item_id, None) is not None


class InMemoryAudit:
    def __init__(self):
        self.entries = []

    def append(self, entry):
        self.entries.append(entry)


def _service():
    participants = InMemoryRepo("participant_id")
    leaders = InMemoryRepo("leader_id")
    audit = InMemoryAudit()
    service = RosterService(
        participants,
        leaders,
        AuditService(audit),
        MasterPasswordGate(generate_password_hash(SECRET)),
    )
    return service, participants, leaders, audit


def test_add_participant_normalizes_optional_fields():
    service, participants, _, audit = _service()

    p = service.add_participant(
        actor=ADMIN, full_name="  Arjun Singh ", leader_id="", alt_name1=" ", alt_name2="Bittu", now=T0
    )

    assert p.full_name == "Arjun Singh"
    assert p.leader_id is None
    assert p.alt_name1 is None
    assert p.aliases == ["Arjun Singh", "Bittu"]
    assert participants.get_by_id(p.participant_id) == p
    assert audit.entries[-1].action == "Participant Added"


def test_add_participant_requires_full_name():
    service, participants, _, _ = _service()

    with pytest.raises(ValidationError):
        service.add_participant(actor=ADMIN, full_name="  ", leader_id=None)
    assert participants.items == {}


def test_only_admin_edits_roster():
    service, _, _, _ = _service()

    with pytest.raises(AuthorizationError):
        service.add_participant(actor=LEADER, full_name="Arjun", leader_id="LA")


def test_update_participant():
    service, _, _, _ = _service()
    p = service.add_participant(actor=ADMIN, full_name="Arjun", leader_id="LA", now=T0)

    updated = service.update_participant(
        actor=ADMIN, participant_id=p.participant_id, full_name="Arjun Singh", leader_id="LB", alt_name1="AJ"
    )

    assert updated.full_name == "Arjun Singh"
    assert updated.leader_id == "LB"
    assert updated.created_at == T0


def test_update_unknown_participant():
    service, _, _, _ = _service()

    with pytest.raises(NotFoundError):
        service.update_participant(actor=ADMIN, participant_id="nope", full_name="X", leader_id=None)


def test_delete_blocked_within_cool_down_even_with_right_secret():
    service, participants, _, _ = _service()
    p = service.add_participant(actor=ADMIN, full_name="Arjun", leader_id=None, now=T0)

    with pytest.raises(ValidationError, match="within first 60 days"):
        service.delete_participant(
            actor=ADMIN, participant_id=p.participant_id, master_password=SECRET, now=T0 + timedelta(days=59)
        )
    assert p.participant_id in participants.items


def test_delete_after_cool_down_needs_master_secret():
    service, participants, _, audit = _service()
    p = service.add_participant(actor=ADMIN, full_name="Arjun", leader_id=None, now=T0)
    later = T0 + timedelta(days=60)

    with pytest.raises(AuthorizationError):
        service.delete_participant(actor=ADMIN, participant_id=p.participant_id, master_password="wrong", now=later)
    assert p.participant_id in participants.items

    service.delete_participant(actor=ADMIN, participant_id=p.participant_id, master_password=SECRET, now=later)
    assert participants.items == {}
    assert audit.entries[-1].action == "Participant Deleted"


def test_leader_sees_only_own_group():
    service, _, _, _ = _service()
    service.add_participant(actor=ADMIN, full_name="Arjun", leader_id="LA", now=T0)
    service.add_participant(actor=ADMIN, full_name="Meera", leader_id="LB", now=T0)
    service.add_participant(actor=ADMIN, full_name="Loose", leader_id=None, now=T0)

    assert [p.full_name for p in service.list_participants(LEADER)] == ["Arjun"]
    assert len(service.list_participants(ADMIN)) == 3


def test_leader_label_falls_back_to_unassigned():
    service, _, _, _ = _service()
    leader = service.add_leader(actor=ADMIN, name="Asha", group_name="Group A", now=T0)
    mine = service.add_participant(actor=ADMIN, full_name="Arjun", leader_id=leader.leader_id, now=T0)
    dangling = service.add_participant(actor=ADMIN, full_name="Meera", leader_id="gone", now=T0)
    loose = service.add_participant(actor=ADMIN, full_name="Kavya", leader_id=None, now=T0)

    assert service.leader_label(mine) == "Asha"
    assert service.leader_label(dangling) == "Unassigned"
    assert service.leader_label(loose) == "Unassigned"


def test_delete_leader_leaves_participants_unassigned():
    service, _, leaders, audit = _service()
    leader = service.add_leader(actor=ADMIN, name="Asha", group_name="Group A", now=T0)
    p = service.add_participant(actor=ADMIN, full_name="Arjun", leader_id=leader.leader_id, now=T0)

    service.delete_leader(actor=ADMIN, leader_id=leader.leader_id, master_password=SECRET)

    assert leaders.items == {}
    assert service.leader_label(p) == "Unassigned"
    assert [e.action for e in audit.entries][0] == "Leader Added"


def test_add_leader_requires_group_name():
    service, _, _, _ = _service()

    with pytest.raises(ValidationError):
        service.add_leader(actor=ADMIN, name="Asha", group_name=" ")
