from datetime import datetime
from itertools import count

from src.attendance_ledger.attendance_ledger.attendance.model import Verdict
from src.attendance_ledger.attendance_ledger.core.enums import AttendanceStatus
from src.attendance_ledger.attendance_ledger.fines.calculator.absence_calculator import AbsenceFineCalculator
from src.attendance_ledger.attendance_ledger.roster.model import Participant


def _verdict(i: int, status: AttendanceStatus) -> Verdict:
    p = Participant(f"p{i}", f"Member {i}", "", "L1", datetime(2026, 1, 1))
    return Verdict(participant=p, status=status, confidence=0 if status == AttendanceStatus.ABSENT else 100)


def test_one_fine_per_absent_verdict():
    seq = count(1)
    calc = AbsenceFineCalculator(lambda: f"f{next(seq)}")
    statuses = [AttendanceStatus.ABSENT] * 3 + [AttendanceStatus.PRESENT] * 6 + [AttendanceStatus.NEEDS_REVIEW]
    verdicts = [_verdict(i, s) for i, s in enumerate(statuses)]

    fines = calc.compute_fines(meeting_id="m1", verdicts=verdicts, fine_amount=50)

    assert len(fines) == 3
    assert sum(f.amount for f in fines) == 150
    assert [f.participant_id for f in fines] == ["p0", "p1", "p2"]
    assert [f.fine_id for f in fines] == ["f1", "f2", "f3"]
    assert all(f.meeting_id == "m1" and not f.is_paid for f in fines)


def test_present_and_needs_review_are_never_fined():
    verdicts = [_verdict(1, AttendanceStatus.PRESENT), _verdict(2, AttendanceStatus.NEEDS_REVIEW)]

    assert AbsenceFineCalculator().compute_fines(meeting_id="m1", verdicts=verdicts, fine_amount=20) == []
