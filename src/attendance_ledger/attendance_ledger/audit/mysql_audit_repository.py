from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditLog
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, entry: AuditLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(log_id, actor, action, created_at, details)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (entry.log_id, entry.actor, entry.action, entry.created_at, entry.details),
            )

    def list_recent(self, *, actor: Optional[str] = None, limit: int = 500) -> Sequence[AuditLog]:
        sql = "SELECT log_id, actor, action, created_at, details FROM audit_logs"
        params: list = []
        if actor is not None:
            sql += " WHERE actor=%s"
            params.append(actor)
        sql += " ORDER BY seq DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                AuditLog(
                    log_id=r["log_id"],
                    actor=r["actor"],
                    action=r["action"],
                    created_at=r["created_at"],
                    details=r.get("details") or "",
                )
                for r in fetchall(cur)
            ]
