from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Fine
from .repository import FineRepository

_COLUMNS = "fine_id, meeting_id, participant_id, amount, is_paid"


def _to_fine(r: dict) -> Fine:
    return Fine(
        fine_id=r["fine_id"],
        meeting_id=r["meeting_id"],
        participant_id=r["participant_id"],
        amount=int(r["amount"]),
        is_paid=as_bool(r.get("is_paid")),
    )


def delete_for_meeting(cur, meeting_id: str) -> None:
    cur.execute("DELETE FROM fines WHERE meeting_id=%s", (meeting_id,))


def insert_batch(cur, fines: Sequence[Fine]) -> None:
    """Runs on the caller's cursor so it joins the caller's transaction."""
    if not fines:
        return
    cur.executemany(
        f"INSERT INTO fines({_COLUMNS}) VALUES(%s,%s,%s,%s,%s)",
        [(f.fine_id, f.meeting_id, f.participant_id, int(f.amount), 1 if f.is_paid else 0) for f in fines],
    )


class MySQLFineRepository(FineRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_meeting(self, meeting_id: str) -> Sequence[Fine]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM fines WHERE meeting_id=%s ORDER BY seq ASC", (meeting_id,))
            return [_to_fine(r) for r in fetchall(cur)]

    def list_for_participants(self, participant_ids: Sequence[str]) -> Sequence[Fine]:
        ids = list(participant_ids)
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM fines WHERE participant_id IN ({placeholders}) ORDER BY seq ASC",
                tuple(ids),
            )
            return [_to_fine(r) for r in fetchall(cur)]

    def get_by_id(self, fine_id: str) -> Optional[Fine]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM fines WHERE fine_id=%s", (fine_id,))
            r = fetchone(cur)
            return _to_fine(r) if r else None

    def set_paid(self, *, fine_id: str, is_paid: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE fines SET is_paid=%s WHERE fine_id=%s", (1 if is_paid else 0, fine_id))
            return cur.rowcount > 0

    def replace_for_meeting(self, *, meeting_id: str, fines: Sequence[Fine]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            delete_for_meeting(cur, meeting_id)
            insert_batch(cur, fines)
