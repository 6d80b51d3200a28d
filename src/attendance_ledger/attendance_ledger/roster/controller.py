from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    def _participant_row(p) -> dict:
        return {
            "participant_id": p.participant_id,
            "full_name": p.full_name,
            "alt_name1": p.alt_name1,
            "alt_name2": p.alt_name2,
            "phone": p.phone,
            "leader_id": p.leader_id,
            "leader_name": roster.leader_label(p),
            "created_at": p.created_at,
        }

    def _uploaded_text() -> str:
        upload = request.files.get("file")
        if upload is not None:
            return upload.read().decode("utf-8-sig")
        text = request.get_data(as_text=True)
        if not text.strip():
            raise ValidationError("Upload a CSV file")
        return text

    @app.route("/api/leaders", endpoint="list_leaders")
    @login_required
    def list_leaders():
        return ok(roster.list_leaders())

    @app.route("/api/leaders", methods=["POST"], endpoint="add_leader")
    @admin_required
    def add_leader():
        body = json_body()
        leader = roster.add_leader(
            actor=current_actor(),
            name=body.get("name", ""),
            group_name=body.get("group_name", ""),
            phone=body.get("phone", ""),
            email=body.get("email", ""),
        )
        return ok(leader, 201)

    @app.route("/api/leaders/<leader_id>/delete", methods=["POST"], endpoint="delete_leader")
    @admin_required
    def delete_leader(leader_id: str):
        body = json_body()
        roster.delete_leader(actor=current_actor(), leader_id=leader_id, master_password=body.get("master_password", ""))
        return ok()

    @app.route("/api/participants", endpoint="list_participants")
    @login_required
    def list_participants():
        return ok([_participant_row(p) for p in roster.list_participants(current_actor())])

    @app.route("/api/participants", methods=["POST"], endpoint="add_participant")
    @admin_required
    def add_participant():
        body = json_body()
        participant = roster.add_participant(
            actor=current_actor(),
            full_name=body.get("full_name", ""),
            leader_id=body.get("leader_id"),
            phone=body.get("phone", ""),
            alt_name1=body.get("alt_name1"),
            alt_name2=body.get("alt_name2"),
        )
        return ok(_participant_row(participant), 201)

    @app.route("/api/participants/<participant_id>", methods=["PUT"], endpoint="update_participant")
    @admin_required
    def update_participant(participant_id: str):
        body = json_body()
        participant = roster.update_participant(
            actor=current_actor(),
            participant_id=participant_id,
            full_name=body.get("full_name", ""),
            leader_id=body.get("leader_id"),
            phone=body.get("phone", ""),
            alt_name1=body.get("alt_name1"),
            alt_name2=body.get("alt_name2"),
        )
        return ok(_participant_row(participant))

    @app.route("/api/participants/<participant_id>/delete", methods=["POST"], endpoint="delete_participant")
    @admin_required
    def delete_participant(participant_id: str):
        body = json_body()
        roster.delete_participant(
            actor=current_actor(),
            participant_id=participant_id,
            master_password=body.get("master_password", ""),
        )
        return ok()

    @app.route("/api/import/leaders", methods=["POST"], endpoint="import_leaders")
    @admin_required
    def import_leaders():
        report = container.roster_importer.import_leaders(actor=current_actor(), text=_uploaded_text())
        return ok({"created": len(report.created), "errors": report.errors})

    @app.route("/api/import/participants", methods=["POST"], endpoint="import_participants")
    @admin_required
    def import_participants():
        report = container.roster_importer.import_participants(actor=current_actor(), text=_uploaded_text())
        return ok({"created": len(report.created), "errors": report.errors})
