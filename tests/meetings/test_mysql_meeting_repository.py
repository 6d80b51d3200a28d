from datetime import datetime

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceRecord
from src.attendance_ledger.attendance_ledger.core.enums import AttendanceStatus, MeetingStatus
from src.attendance_ledger.attendance_ledger.fines.model import Fine
from src.attendance_ledger.attendance_ledger.meetings.model import Meeting
from src.attendance_ledger.attendance_ledger.meetings.mysql_meeting_repository import MySQLMeetingRepository

HELD = datetime(2026, 10, 17, 7, 0)


class RecordingCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=()):
        statement = " ".join(sql.split())
        if self._conn.fail_on and self._conn.fail_on in statement:
            raise RuntimeError("boom")
        self._conn.statements.append((statement, params))
        self.rowcount = self._conn.rowcount

    def executemany(self, sql, rows):
        for row in rows:
            self.execute(sql, row)

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, *, rowcount=1, fail_on=None):
        self.statements = []
        self.rowcount = rowcount
        self.fail_on = fail_on
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return RecordingCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn


def _meeting(**kw) -> Meeting:
    base = dict(
        meeting_id="m1",
        name="Sunday Sadhana",
        held_at=HELD,
        fine_amount=20,
        status=MeetingStatus.CONFIRMED,
        version=1,
        created_at=HELD,
    )
    base.update(kw)
    return Meeting(**base)


def _batches():
    attendance = [
        AttendanceRecord("a1", "m1", "p1", AttendanceStatus.PRESENT, 100),
        AttendanceRecord("a2", "m1", "p2", AttendanceStatus.ABSENT, 0),
    ]
    fines = [Fine("f1", "m1", "p2", 20)]
    return attendance, fines


def test_save_confirmed_writes_everything_in_one_transaction():
    conn = RecordingConnection()
    repo = MySQLMeetingRepository(FakeConnFactory(conn))
    attendance, fines = _batches()

    repo.save_confirmed(meeting=_meeting(), attendance=attendance, fines=fines)

    statements = [s for s, _ in conn.statements]
    assert statements[0].startswith("INSERT INTO meetings(")
    assert statements[1].startswith("INSERT INTO meeting_editions(")
    assert statements[2] == "DELETE FROM attendance_records WHERE meeting_id=%s"
    assert statements[3] == "DELETE FROM fines WHERE meeting_id=%s"
    assert sum(s.startswith("INSERT INTO attendance_records(") for s in statements) == 2
    assert sum(s.startswith("INSERT INTO fines(") for s in statements) == 1
    assert conn.committed and not conn.rolled_back and conn.closed


def test_failed_fine_insert_rolls_back_the_whole_batch():
    conn = RecordingConnection(fail_on="INSERT INTO fines(")
    repo = MySQLMeetingRepository(FakeConnFactory(conn))
    attendance, fines = _batches()

    with pytest.raises(RuntimeError):
        repo.replace_batches(meeting_id="m1", attendance=attendance, fines=fines)

    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_save_revision_checks_expected_version():
    conn = RecordingConnection(rowcount=1)
    repo = MySQLMeetingRepository(FakeConnFactory(conn))
    revised = _meeting(status=MeetingStatus.REVISED, version=2, parent_meeting_id="m1")

    assert repo.save_revision(meeting=revised, expected_version=1, recorded_at=HELD) is True

    update, params = conn.statements[0]
    assert update.startswith("UPDATE meetings SET status=%s, version=%s, parent_meeting_id=%s")
    assert update.endswith("WHERE meeting_id=%s AND version=%s")
    assert params == ("REVISED", 2, "m1", "m1", 1)
    assert conn.statements[1][0].startswith("INSERT INTO meeting_editions(")


def test_save_revision_loses_when_version_moved_on():
    conn = RecordingConnection(rowcount=0)
    repo = MySQLMeetingRepository(FakeConnFactory(conn))
    revised = _meeting(status=MeetingStatus.REVISED, version=2, parent_meeting_id="m1")

    assert repo.save_revision(meeting=revised, expected_version=1, recorded_at=HELD) is False
    assert len(conn.statements) == 1
