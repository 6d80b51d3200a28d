from __future__ import annotations

import csv
import io
import re
from typing import Sequence

from flask import Flask, request

from ..attendance.model import ScanResult, Verdict
from ..common.datetime_utils import parse_iso_datetime
from ..common.web import admin_required, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_FINE_AMOUNT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..ocr.extractor import Screenshot
from .model import MeetingDraft


def _verdict_row(v: Verdict) -> dict:
    return {
        "participant_id": v.participant.participant_id,
        "full_name": v.participant.full_name,
        "status": v.status.value,
        "confidence": v.confidence,
        "is_manual_override": v.is_manual_override,
        "matched_name": v.matched_name,
    }


def _scan_payload(result: ScanResult) -> dict:
    return {
        "found_names": result.found_names,
        "unmatched_names": result.unmatched_names,
        "verdicts": [_verdict_row(v) for v in result.verdicts],
        "counts": {s.value: result.count(s) for s in AttendanceStatus},
    }


def _status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger_service

    def _verdicts_from(items) -> list[Verdict]:
        """Rebuild reviewed verdicts sent back by the client against the current roster."""
        if not isinstance(items, list):
            raise ValidationError("verdicts must be a list")
        roster = {p.participant_id: p for p in container.roster_service.list_participants()}
        verdicts: list[Verdict] = []
        for item in items:
            participant = roster.get(str(item.get("participant_id", "")))
            if participant is None:
                raise ValidationError(f"Unknown participant: {item.get('participant_id')!r}")
            verdicts.append(
                Verdict(
                    participant=participant,
                    status=_status(item.get("status")),
                    confidence=int(item.get("confidence") or 0),
                    is_manual_override=bool(item.get("is_manual_override", False)),
                    matched_name=item.get("matched_name"),
                )
            )
        return verdicts

    def _write_attendance_csv(*, rows: Sequence[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["Participant Name", "Status", "Confidence", "Override"])
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    # Scanning (nothing is stored until confirm)

    @app.route("/api/scan", methods=["POST"], endpoint="scan")
    @admin_required
    def scan():
        images = [
            Screenshot(data=f.read(), mime_type=f.mimetype or "image/png", filename=f.filename or "screenshot.png")
            for f in request.files.getlist("images")
        ]
        if not images:
            raise ValidationError("Upload at least one screenshot")
        return ok(_scan_payload(container.scan_service.scan(images)))

    @app.route("/api/scan/toggle", methods=["POST"], endpoint="scan_toggle")
    @admin_required
    def scan_toggle():
        body = json_body()
        result = ScanResult(
            found_names=list(body.get("found_names") or []),
            verdicts=_verdicts_from(body.get("verdicts")),
            unmatched_names=list(body.get("unmatched_names") or []),
        )
        toggled = container.scan_service.toggle(result, str(body.get("participant_id", "")))
        return ok(_scan_payload(toggled))

    # Ledger

    @app.route("/api/meetings", endpoint="list_meetings")
    @login_required
    def list_meetings():
        return ok(ledger.list_meetings())

    @app.route("/api/meetings", methods=["POST"], endpoint="confirm_meeting")
    @admin_required
    def confirm_meeting():
        body = json_body()
        try:
            held_at = parse_iso_datetime(str(body.get("held_at", "")))
        except ValueError:
            raise ValidationError("held_at must be an ISO date and time")

        draft = MeetingDraft(
            name=str(body.get("name", "")),
            held_at=held_at,
            fine_amount=body.get("fine_amount", DEFAULT_FINE_AMOUNT),
        )
        meeting = ledger.confirm(actor=current_actor(), draft=draft, verdicts=_verdicts_from(body.get("verdicts")))
        return ok(meeting, 201)

    @app.route("/api/meetings/<meeting_id>", endpoint="get_meeting")
    @login_required
    def get_meeting(meeting_id: str):
        return ok(ledger.get_meeting(meeting_id))

    def _visible_to(actor, items):
        """Leaders only see rows of participants in their own group."""
        if actor.is_admin:
            return list(items)
        group = {p.participant_id for p in container.roster_service.list_participants(actor)}
        return [i for i in items if i.participant_id in group]

    @app.route("/api/meetings/<meeting_id>/attendance", endpoint="meeting_attendance")
    @login_required
    def meeting_attendance(meeting_id: str):
        ledger.get_meeting(meeting_id)
        return ok(_visible_to(current_actor(), ledger.get_meeting_attendance(meeting_id)))

    @app.route("/api/meetings/<meeting_id>/fines", endpoint="meeting_fines")
    @login_required
    def meeting_fines(meeting_id: str):
        ledger.get_meeting(meeting_id)
        return ok(_visible_to(current_actor(), ledger.get_meeting_fines(meeting_id)))

    @app.route("/api/meetings/<meeting_id>/editions", endpoint="meeting_editions")
    @login_required
    def meeting_editions(meeting_id: str):
        return ok({"editions": ledger.list_editions(meeting_id), "chain": ledger.revision_chain(meeting_id)})

    @app.route("/api/meetings/<meeting_id>/export", endpoint="export_meeting")
    @login_required
    def export_meeting(meeting_id: str):
        meeting = ledger.get_meeting(meeting_id)
        names = {p.participant_id: p.full_name for p in container.roster_service.list_participants()}
        rows = [
            {
                "Participant Name": names.get(r.participant_id, "Unknown"),
                "Status": r.status.value,
                "Confidence": f"{r.confidence_score}%",
                "Override": "Yes" if r.is_manual_override else "No",
            }
            for r in _visible_to(current_actor(), ledger.get_meeting_attendance(meeting_id))
        ]
        slug = re.sub(r"[^A-Za-z0-9]+", "_", meeting.name).strip("_") or "meeting"
        return _write_attendance_csv(rows=rows, filename=f"{slug}_{meeting.held_at:%Y-%m-%d}.csv")

    @app.route("/api/meetings/<meeting_id>/reopen", methods=["POST"], endpoint="reopen_meeting")
    @login_required
    def reopen_meeting(meeting_id: str):
        body = json_body()
        meeting = ledger.reopen(
            actor=current_actor(),
            meeting_id=meeting_id,
            confirmed=bool(body.get("confirmed", False)),
        )
        return ok(meeting)

    @app.route("/api/meetings/<meeting_id>/attendance", methods=["PUT"], endpoint="revise_attendance")
    @login_required
    def revise_attendance(meeting_id: str):
        body = json_body()
        meeting = ledger.revise_attendance(
            actor=current_actor(),
            meeting_id=meeting_id,
            verdicts=_verdicts_from(body.get("verdicts")),
        )
        return ok(meeting)

    @app.route(
        "/api/meetings/<meeting_id>/attendance/<participant_id>",
        methods=["POST"],
        endpoint="override_attendance",
    )
    @login_required
    def override_attendance(meeting_id: str, participant_id: str):
        body = json_body()
        record = ledger.override_attendance(
            actor=current_actor(),
            meeting_id=meeting_id,
            participant_id=participant_id,
            status=_status(body.get("status")),
        )
        return ok(record)

    @app.route("/api/meetings/<meeting_id>/fines/recompute", methods=["POST"], endpoint="recompute_fines")
    @login_required
    def recompute_fines(meeting_id: str):
        return ok(ledger.recompute_fines(actor=current_actor(), meeting_id=meeting_id))
