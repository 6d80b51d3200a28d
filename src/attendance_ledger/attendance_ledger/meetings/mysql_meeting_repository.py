from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..attendance import mysql_attendance_repository as attendance_sql
from ..attendance.model import AttendanceRecord
from ..core.enums import MeetingStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..fines import mysql_fine_repository as fines_sql
from ..fines.model import Fine
from .model import Meeting, MeetingEdition
from .repository import MeetingRepository

_COLUMNS = "meeting_id, name, held_at, fine_amount, status, version, parent_meeting_id, created_at"


def _to_meeting(r: dict) -> Meeting:
    return Meeting(
        meeting_id=r["meeting_id"],
        name=r["name"],
        held_at=r["held_at"],
        fine_amount=int(r["fine_amount"]),
        status=MeetingStatus(r["status"]),
        version=int(r["version"]),
        created_at=r["created_at"],
        parent_meeting_id=r.get("parent_meeting_id"),
    )


def _to_edition(r: dict) -> MeetingEdition:
    return MeetingEdition(
        meeting_id=r["meeting_id"],
        version=int(r["version"]),
        status=MeetingStatus(r["status"]),
        fine_amount=int(r["fine_amount"]),
        recorded_at=r["recorded_at"],
        parent_meeting_id=r.get("parent_meeting_id"),
    )


def _insert_edition(cur, meeting: Meeting, recorded_at: datetime) -> None:
    cur.execute(
        """
        INSERT INTO meeting_editions(meeting_id, version, status, fine_amount, parent_meeting_id, recorded_at)
        VALUES(%s,%s,%s,%s,%s,%s)
        """,
        (
            meeting.meeting_id,
            meeting.version,
            meeting.status.value,
            meeting.fine_amount,
            meeting.parent_meeting_id,
            recorded_at,
        ),
    )


def _replace_batches(cur, meeting_id: str, attendance: Sequence[AttendanceRecord], fines: Sequence[Fine]) -> None:
    attendance_sql.delete_for_meeting(cur, meeting_id)
    fines_sql.delete_for_meeting(cur, meeting_id)
    attendance_sql.insert_batch(cur, attendance)
    fines_sql.insert_batch(cur, fines)


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, meeting_id: str) -> Optional[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM meetings WHERE meeting_id=%s", (meeting_id,))
            r = fetchone(cur)
            return _to_meeting(r) if r else None

    def list_all(self) -> Sequence[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM meetings ORDER BY held_at DESC")
            return [_to_meeting(r) for r in fetchall(cur)]

    def list_editions(self, meeting_id: str) -> Sequence[MeetingEdition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT meeting_id, version, status, fine_amount, parent_meeting_id, recorded_at
                FROM meeting_editions
                WHERE meeting_id=%s
                ORDER BY version ASC
                """,
                (meeting_id,),
            )
            return [_to_edition(r) for r in fetchall(cur)]

    def save_confirmed(
        self,
        *,
        meeting: Meeting,
        attendance: Sequence[AttendanceRecord],
        fines: Sequence[Fine],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO meetings({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)",
                (
                    meeting.meeting_id,
                    meeting.name,
                    meeting.held_at,
                    meeting.fine_amount,
                    meeting.status.value,
                    meeting.version,
                    meeting.parent_meeting_id,
                    meeting.created_at,
                ),
            )
            _insert_edition(cur, meeting, meeting.created_at)
            _replace_batches(cur, meeting.meeting_id, attendance, fines)

    def save_revision(self, *, meeting: Meeting, expected_version: int, recorded_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE meetings
                SET status=%s, version=%s, parent_meeting_id=%s
                WHERE meeting_id=%s AND version=%s
                """,
                (
                    meeting.status.value,
                    meeting.version,
                    meeting.parent_meeting_id,
                    meeting.meeting_id,
                    int(expected_version),
                ),
            )
            if cur.rowcount == 0:
                return False
            _insert_edition(cur, meeting, recorded_at)
            return True

    def replace_batches(
        self,
        *,
        meeting_id: str,
        attendance: Sequence[AttendanceRecord],
        fines: Sequence[Fine],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            _replace_batches(cur, meeting_id, attendance, fines)
