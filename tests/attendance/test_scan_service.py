from dataclasses import dataclass, field
from datetime import datetime

import pytest

from src.attendance_ledger.attendance_ledger.attendance.service import ScanService
from src.attendance_ledger.attendance_ledger.core.enums import AttendanceStatus
from src.attendance_ledger.attendance_ledger.core.exceptions import NotFoundError, OracleUnavailableError
from src.attendance_ledger.attendance_ledger.ocr.extractor import Screenshot
from src.attendance_ledger.attendance_ledger.roster.model import Participant


@dataclass
class FakeExtractor:
    names: list[str] = field(default_factory=list)
    error: Exception | None = None
    calls: int = 0

    def extract_names(self, images):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.names)


class InMemoryParticipants:
    def __init__(self, participants):
        self._items = list(participants)
        self.reads = 0

    def list_all(self):
        self.reads += 1
        return list(self._items)


def _roster():
    created = datetime(2026, 1, 1)
    return [
        Participant("p1", "Arjun Singh", "", "L1", created),
        Participant("p2", "Meera Devi", "", "L1", created),
        Participant("p3", "Kavya Rao", "", "L1", created, alt_name1="Kavya"),
    ]


def test_scan_reconciles_extracted_names_against_roster():
    service = ScanService(FakeExtractor(["Arjun Singh", "Kavya R", "Guest"]), InMemoryParticipants(_roster()))

    result = service.scan([Screenshot(b"img")])

    assert [v.status for v in result.verdicts] == [
        AttendanceStatus.PRESENT,
        AttendanceStatus.ABSENT,
        AttendanceStatus.NEEDS_REVIEW,
    ]
    assert result.unmatched_names == ["Guest"]
    assert result.count(AttendanceStatus.ABSENT) == 1


def test_oracle_failure_propagates_and_leaves_roster_unread():
    participants = InMemoryParticipants(_roster())
    service = ScanService(FakeExtractor(error=OracleUnavailableError("down")), participants)

    with pytest.raises(OracleUnavailableError):
        service.scan([Screenshot(b"img")])

    assert participants.reads == 0


def test_toggle_cycles_status_and_flags_override():
    service = ScanService(FakeExtractor(["Arjun Singh", "Kavya R"]), InMemoryParticipants(_roster()))
    result = service.scan([Screenshot(b"img")])

    result = ScanService.toggle(result, "p1")
    result = ScanService.toggle(result, "p2")
    result = ScanService.toggle(result, "p3")

    by_id = {v.participant.participant_id: v for v in result.verdicts}
    assert by_id["p1"].status == AttendanceStatus.ABSENT
    assert by_id["p2"].status == AttendanceStatus.PRESENT
    assert by_id["p3"].status == AttendanceStatus.PRESENT
    assert all(v.is_manual_override for v in result.verdicts)


def test_toggle_unknown_participant():
    service = ScanService(FakeExtractor([]), InMemoryParticipants(_roster()))
    result = service.scan([Screenshot(b"img")])

    with pytest.raises(NotFoundError):
        ScanService.toggle(result, "nope")
