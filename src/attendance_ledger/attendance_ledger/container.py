from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import RosterReconciler
from .attendance.service import ScanService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.service import AuditService
from .core.constants import DEFAULT_PRESENT_THRESHOLD, DEFAULT_REPORT_SIGNATURE, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .fines.mysql_fine_repository import MySQLFineRepository
from .fines.service import FineService
from .matching.policy import StatusPolicy
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.service import MeetingLedgerService
from .ocr.extractor import GeminiNameExtractor
from .reports.composer import ReportComposer
from .reports.service import NotificationService
from .roster.importer import RosterImporter
from .roster.mysql_leader_repository import MySQLLeaderRepository
from .roster.mysql_participant_repository import MySQLParticipantRepository
from .roster.service import RosterService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, MasterPasswordGate, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    leaders_repo: MySQLLeaderRepository
    participants_repo: MySQLParticipantRepository
    meetings_repo: MySQLMeetingRepository
    attendance_repo: MySQLAttendanceRepository
    fines_repo: MySQLFineRepository
    audit_repo: MySQLAuditRepository

    audit_service: AuditService
    auth_service: AuthService
    user_service: UserService
    roster_service: RosterService
    roster_importer: RosterImporter
    scan_service: ScanService
    ledger_service: MeetingLedgerService
    fine_service: FineService
    notification_service: NotificationService


def build_container(*, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.DB_CONFIG)))

    users_repo = MySQLUserRepository(conn)
    leaders_repo = MySQLLeaderRepository(conn)
    participants_repo = MySQLParticipantRepository(conn)
    meetings_repo = MySQLMeetingRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    fines_repo = MySQLFineRepository(conn)
    audit_repo = MySQLAuditRepository(conn)

    gate = MasterPasswordGate(getattr(settings, "MASTER_PASSWORD_HASH", ""))
    audit_service = AuditService(audit_repo)
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, gate, audit_service)
    roster_service = RosterService(participants_repo, leaders_repo, audit_service, gate)
    roster_importer = RosterImporter(roster_service)

    extractor = GeminiNameExtractor(
        getattr(settings, "GEMINI_API_KEY", ""),
        model=getattr(settings, "GEMINI_MODEL", None),
        timeout=float(getattr(settings, "OCR_TIMEOUT_SECONDS", 60)),
    )
    policy = StatusPolicy(present_threshold=int(getattr(settings, "PRESENT_THRESHOLD", DEFAULT_PRESENT_THRESHOLD)))
    scan_service = ScanService(extractor, participants_repo, reconciler=RosterReconciler(policy=policy))

    ledger_service = MeetingLedgerService(meetings_repo, attendance_repo, fines_repo, audit_service)
    fine_service = FineService(fines_repo, participants_repo, meetings_repo, audit_service)
    composer = ReportComposer(
        signature=getattr(settings, "REPORT_SIGNATURE", DEFAULT_REPORT_SIGNATURE),
        tz_name=getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE),
    )
    notification_service = NotificationService(
        meetings_repo,
        leaders_repo,
        participants_repo,
        attendance_repo,
        fines_repo,
        audit_service,
        composer=composer,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        leaders_repo=leaders_repo,
        participants_repo=participants_repo,
        meetings_repo=meetings_repo,
        attendance_repo=attendance_repo,
        fines_repo=fines_repo,
        audit_repo=audit_repo,
        audit_service=audit_service,
        auth_service=auth_service,
        user_service=user_service,
        roster_service=roster_service,
        roster_importer=roster_importer,
        scan_service=scan_service,
        ledger_service=ledger_service,
        fine_service=fine_service,
        notification_service=notification_service,
    )
