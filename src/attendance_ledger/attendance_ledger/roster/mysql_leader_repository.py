from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leader
from .repository import LeaderRepository


def _to_leader(r: dict) -> Leader:
    return Leader(
        leader_id=r["leader_id"],
        name=r["name"],
        phone=r.get("phone") or "",
        email=r.get("email") or "",
        group_name=r["group_name"],
        created_at=r["created_at"],
    )


class MySQLLeaderRepository(LeaderRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Leader]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leader_id, name, phone, email, group_name, created_at FROM leaders ORDER BY seq ASC"
            )
            return [_to_leader(r) for r in fetchall(cur)]

    def get_by_id(self, leader_id: str) -> Optional[Leader]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leader_id, name, phone, email, group_name, created_at FROM leaders WHERE leader_id=%s",
                (leader_id,),
            )
            r = fetchone(cur)
            return _to_leader(r) if r else None

    def add(self, leader: Leader) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaders(leader_id, name, phone, email, group_name, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (leader.leader_id, leader.name, leader.phone, leader.email, leader.group_name, leader.created_at),
            )

    def delete_by_id(self, leader_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leaders WHERE leader_id=%s", (leader_id,))
            return cur.rowcount > 0
