from __future__ import annotations

from flask import Flask, session

from ..common.web import admin_required, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        actor = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.clear()
        session["username"] = actor.username
        session["role"] = actor.role.value
        session["leader_id"] = actor.leader_id
        return ok(actor)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return ok(current_actor())

    @app.route("/api/register", methods=["POST"], endpoint="register_account")
    def register_account():
        body = json_body()
        try:
            role = Role(str(body.get("role", Role.LEADER.value)).upper())
        except ValueError:
            raise ValidationError("Unknown account role")

        user = container.user_service.create_account(
            username=body.get("username", ""),
            password=body.get("password", ""),
            role=role,
            master_password=body.get("master_password", ""),
            leader_id=body.get("leader_id"),
        )
        return ok({"user_id": user.user_id, "username": user.username, "role": user.role}, 201)

    @app.route("/api/accounts", endpoint="list_accounts")
    @admin_required
    def list_accounts():
        users = container.user_service.list_accounts(current_actor())
        return ok([{"user_id": u.user_id, "username": u.username, "role": u.role, "leader_id": u.leader_id} for u in users])

    @app.route("/api/accounts/<user_id>/delete", methods=["POST"], endpoint="delete_account")
    @admin_required
    def delete_account(user_id: str):
        body = json_body()
        container.user_service.delete_account(
            actor=current_actor(),
            user_id=user_id,
            master_password=body.get("master_password", ""),
        )
        return ok()
