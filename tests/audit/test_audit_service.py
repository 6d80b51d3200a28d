from datetime import datetime

from src.attendance_ledger.attendance_ledger.audit.service import AuditService
from src.attendance_ledger.attendance_ledger.core.enums import Role
from src.attendance_ledger.attendance_ledger.users.model import Actor


class InMemoryAudit:
    def __init__(self):
        self.entries = []

    def append(self, entry):
        self.entries.append(entry)

    def list_recent(self, *, actor=None, limit=500):
        return [e for e in reversed(self.entries) if actor is None or e.actor == actor][:limit]


def test_log_appends_entry_with_actor_username():
    repo = InMemoryAudit()
    when = datetime(2026, 10, 17, 8, 0)

    entry = AuditService(repo).log(Actor("admin", Role.ADMIN), "Meeting Tracked", "Generated attendance", now=when)

    assert repo.entries == [entry]
    assert entry.actor == "admin"
    assert entry.created_at == when
    assert entry.log_id


def test_admin_sees_everything_newest_first_and_leader_only_own_entries():
    repo = InMemoryAudit()
    service = AuditService(repo)
    service.log("admin", "Leader Added", "Added Asha")
    service.log("asha", "Fine Updated", "Marked fine for Arjun as PAID")
    service.log("bala", "Fine Updated", "Marked fine for Meera as PAID")

    admin_view = service.list_for(Actor("admin", Role.ADMIN))
    leader_view = service.list_for(Actor("asha", Role.LEADER, "LA"))

    assert [e.actor for e in admin_view] == ["bala", "asha", "admin"]
    assert [e.actor for e in leader_view] == ["asha"]
