from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/fines", endpoint="group_fines")
    @login_required
    def group_fines():
        """Admins pick a group with ?leader_id=, leaders always get their own."""
        actor = current_actor()
        leader_id = request.args.get("leader_id") if actor.is_admin else actor.leader_id
        if not leader_id:
            raise ValidationError("leader_id is required")
        return ok(container.fine_service.group_fines(leader_id))

    @app.route("/api/fines/<fine_id>/toggle", methods=["POST"], endpoint="toggle_fine")
    @login_required
    def toggle_fine(fine_id: str):
        return ok(container.fine_service.toggle_paid(actor=current_actor(), fine_id=fine_id))
