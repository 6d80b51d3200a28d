from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", endpoint="audit_logs")
    @login_required
    def audit_logs():
        limit = request.args.get("limit", default=500, type=int)
        return ok(container.audit_service.list_for(current_actor(), limit=max(1, min(limit, 500))))
