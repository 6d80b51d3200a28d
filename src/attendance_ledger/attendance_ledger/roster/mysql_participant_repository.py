from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Participant
from .repository import ParticipantRepository

_COLUMNS = "participant_id, full_name, alt_name1, alt_name2, phone, leader_id, created_at"


def _to_participant(r: dict) -> Participant:
    return Participant(
        participant_id=r["participant_id"],
        full_name=r["full_name"],
        phone=r.get("phone") or "",
        leader_id=r.get("leader_id"),
        created_at=r["created_at"],
        alt_name1=r.get("alt_name1"),
        alt_name2=r.get("alt_name2"),
    )


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants ORDER BY seq ASC")
            return [_to_participant(r) for r in fetchall(cur)]

    def get_by_id(self, participant_id: str) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM participants WHERE participant_id=%s", (participant_id,))
            r = fetchone(cur)
            return _to_participant(r) if r else None

    def add(self, participant: Participant) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO participants({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    participant.participant_id,
                    participant.full_name,
                    participant.alt_name1,
                    participant.alt_name2,
                    participant.phone,
                    participant.leader_id,
                    participant.created_at,
                ),
            )

    def update(self, participant: Participant) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE participants
                SET full_name=%s, alt_name1=%s, alt_name2=%s, phone=%s, leader_id=%s
                WHERE participant_id=%s
                """,
                (
                    participant.full_name,
                    participant.alt_name1,
                    participant.alt_name2,
                    participant.phone,
                    participant.leader_id,
                    participant.participant_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, participant_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE participant_id=%s", (participant_id,))
            return cur.rowcount > 0
