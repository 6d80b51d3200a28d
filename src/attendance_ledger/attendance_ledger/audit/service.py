from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.mysql_base import new_id
from ..users.model import Actor
from .model import AuditLog
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    """Use case: append to and read the audit trail."""

    def __init__(self, logs: AuditRepository):
        self._logs = logs

    def log(self, actor: Actor | str, action: str, details: str, *, now: Optional[datetime] = None) -> AuditLog:
        username = actor.username if isinstance(actor, Actor) else str(actor)
        entry = AuditLog(
            log_id=new_id(),
            actor=username,
            action=action,
            created_at=now or now_local(),
            details=details,
        )
        self._logs.append(entry)
        logger.info("audit actor=%s action=%s details=%s", username, action, details)
        return entry

    def list_for(self, actor: Actor, *, limit: int = 500) -> Sequence[AuditLog]:
        """Admins see everything; leaders only their own entries."""
        if actor.is_admin:
            return self._logs.list_recent(limit=limit)
        return self._logs.list_recent(actor=actor.username, limit=limit)
