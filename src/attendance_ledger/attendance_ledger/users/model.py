from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Login account. Leaders are linked to their roster Leader by id."""

    user_id: str
    username: str
    password_hash: str
    role: Role
    leader_id: Optional[str] = None


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation.

    Services branch on `role`, never on which optional fields happen to be set.
    """

    username: str
    role: Role
    leader_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(username=user.username, role=user.role, leader_id=user.leader_id)
