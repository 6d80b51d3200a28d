from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditLog:
    """Append-only audit entry. Never updated or deleted."""

    log_id: str
    actor: str
    action: str
    created_at: datetime
    details: str
