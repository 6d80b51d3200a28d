from __future__ import annotations

from flask import Flask

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/meetings/<meeting_id>/notifications", endpoint="meeting_notifications")
    @login_required
    def meeting_notifications(meeting_id: str):
        actor = current_actor()
        notifications = container.notification_service.build_notifications(meeting_id)
        if not actor.is_admin:
            notifications = [n for n in notifications if n.leader.leader_id == actor.leader_id]
        return ok(
            [
                {
                    "leader_id": n.leader.leader_id,
                    "leader_name": n.leader.name,
                    "email": n.leader.email,
                    "phone": n.leader.phone,
                    "subject": n.subject,
                    "total_fines": n.total_fines,
                    "plain_text": n.plain_text,
                    "emphasized_text": n.emphasized_text,
                }
                for n in notifications
            ]
        )

    @app.route("/api/notifications/handoff", methods=["POST"], endpoint="notification_handoff")
    @login_required
    def notification_handoff():
        body = json_body()
        container.notification_service.record_handoff(
            actor=current_actor(),
            leader_id=str(body.get("leader_id", "")),
            channel=str(body.get("channel", "")),
        )
        return ok()
