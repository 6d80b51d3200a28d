from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..audit.service import AuditService
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..database.mysql_base import new_id
from .model import Actor, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class MasterPasswordGate:
    """Confirmation secret required by hard deletes and registration."""

    def __init__(self, master_password_hash: str):
        self._hash = master_password_hash

    def verify(self, secret: Optional[str]) -> None:
        try:
            ok = bool(secret) and check_password_hash(self._hash, secret)
        except (TypeError, ValueError):
            # e.g. an unset or malformed hash in settings
            ok = False
        if not ok:
            raise AuthorizationError("Unauthorized: wrong master password")


def require_admin(actor: Actor, message: str = "Only an admin can do this") -> None:
    if not actor.is_admin:
        raise AuthorizationError(message)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> Actor:
        user = self._users.get_by_username((username or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("failed login for %s", user.username)
            raise AuthenticationError("Invalid username or password")
        return Actor.from_user(user)


class UserService:
    """Use case: manage login accounts."""

    def __init__(self, users: UserRepository, gate: MasterPasswordGate, audit: AuditService):
        self._users = users
        self._gate = gate
        self._audit = audit

    def create_account(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        master_password: str,
        leader_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> User:
        self._gate.verify(master_password)

        username = require_non_empty(username, "Username").lower()
        require_non_empty(password, "Password")
        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")
        if role == Role.LEADER and not leader_id:
            raise ValidationError("A leader account must be linked to a leader")

        user = User(
            user_id=new_id(),
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            leader_id=leader_id if role == Role.LEADER else None,
        )
        self._users.add(user)
        self._audit.log(username, "User Created", f"Registered {role.value} account {username}", now=now)
        return user

    def list_accounts(self, actor: Actor) -> Sequence[User]:
        require_admin(actor)
        return self._users.list_all()

    def delete_account(
        self,
        *,
        actor: Actor,
        user_id: str,
        master_password: str,
        now: Optional[datetime] = None,
    ) -> User:
        require_admin(actor)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.username == actor.username:
            raise ValidationError("You cannot delete your own account")

        self._gate.verify(master_password)
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting the account failed")
        self._audit.log(actor, "Account Deleted", f"Deleted account {user.username}", now=now)
        return user
