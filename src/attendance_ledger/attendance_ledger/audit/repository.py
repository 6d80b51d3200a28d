from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuditLog


class AuditRepository(Protocol):
    def append(self, entry: AuditLog) -> None:
        raise NotImplementedError

    def list_recent(self, *, actor: Optional[str] = None, limit: int = 500) -> Sequence[AuditLog]:
        """Newest first, optionally restricted to one actor."""

        raise NotImplementedError
