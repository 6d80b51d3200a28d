from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, meeting_id, participant_id, status, confidence_score, is_manual_override"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=r["attendance_id"],
        meeting_id=r["meeting_id"],
        participant_id=r["participant_id"],
        status=AttendanceStatus(r["status"]),
        confidence_score=int(r.get("confidence_score") or 0),
        is_manual_override=as_bool(r.get("is_manual_override")),
    )


def delete_for_meeting(cur, meeting_id: str) -> None:
    cur.execute("DELETE FROM attendance_records WHERE meeting_id=%s", (meeting_id,))


def insert_batch(cur, records: Sequence[AttendanceRecord]) -> None:
    """Runs on the caller's cursor so it joins the caller's transaction."""
    if not records:
        return
    cur.executemany(
        f"INSERT INTO attendance_records({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
        [
            (
                r.attendance_id,
                r.meeting_id,
                r.participant_id,
                r.status.value,
                int(r.confidence_score),
                1 if r.is_manual_override else 0,
            )
            for r in records
        ],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_meeting(self, meeting_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE meeting_id=%s ORDER BY seq ASC",
                (meeting_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        attendance_id: str,
        status: AttendanceStatus,
        is_manual_override: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, is_manual_override=%s
                WHERE attendance_id=%s
                """,
                (status.value, 1 if is_manual_override else 0, attendance_id),
            )
            return cur.rowcount > 0
