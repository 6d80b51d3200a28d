from datetime import datetime

from src.attendance_ledger.attendance_ledger.attendance.reconciler import RosterReconciler
from src.attendance_ledger.attendance_ledger.core.enums import AttendanceStatus
from src.attendance_ledger.attendance_ledger.roster.model import Participant

CREATED = datetime(2026, 1, 1, 9, 0)


def _p(pid: str, full_name: str, alt1=None, alt2=None) -> Participant:
    return Participant(
        participant_id=pid,
        full_name=full_name,
        phone="",
        leader_id="L1",
        created_at=CREATED,
        alt_name1=alt1,
        alt_name2=alt2,
    )


def test_exact_match_is_present_with_full_confidence():
    [v] = RosterReconciler().reconcile(["Arjun Singh"], [_p("p1", "Arjun Singh")])

    assert v.status == AttendanceStatus.PRESENT
    assert v.confidence == 100
    assert v.matched_name == "Arjun Singh"


def test_alias_containment_needs_review():
    [v] = RosterReconciler().reconcile(["Arjun S"], [_p("p1", "Arjun Kumar Singh", alt1="Arjun")])

    assert v.status == AttendanceStatus.NEEDS_REVIEW
    assert v.confidence == 85


def test_unmatched_participant_is_absent_with_zero_confidence():
    [v] = RosterReconciler().reconcile(["Arjun Singh"], [_p("p1", "Meera Devi")])

    assert v.status == AttendanceStatus.ABSENT
    assert v.confidence == 0
    assert v.matched_name is None


def test_first_matching_raw_name_wins_even_if_a_later_one_is_exact():
    [v] = RosterReconciler().reconcile(["Arjun S", "Arjun"], [_p("p1", "Arjun")])

    assert v.confidence == 85
    assert v.matched_name == "Arjun S"


def test_one_verdict_per_participant_in_roster_order():
    roster = [_p("p1", "Meera Devi"), _p("p2", "Arjun Singh"), _p("p3", "Kavya")]

    verdicts = RosterReconciler().reconcile(["Kavya", "Arjun Singh", "Unknown Guest"], roster)

    assert [v.participant.participant_id for v in verdicts] == ["p1", "p2", "p3"]
    assert [v.status for v in verdicts] == [
        AttendanceStatus.ABSENT,
        AttendanceStatus.PRESENT,
        AttendanceStatus.PRESENT,
    ]


def test_empty_extraction_marks_everyone_absent():
    roster = [_p("p1", "Meera Devi"), _p("p2", "Arjun Singh")]

    verdicts = RosterReconciler().reconcile([], roster)

    assert all(v.status == AttendanceStatus.ABSENT for v in verdicts)
    assert len(verdicts) == 2


def test_one_raw_name_may_match_several_participants():
    roster = [_p("p1", "Arjun"), _p("p2", "Arjun Singh")]

    verdicts = RosterReconciler().reconcile(["Arjun Singh"], roster)

    assert [v.confidence for v in verdicts] == [85, 100]


def test_unmatched_names_are_reported_separately():
    roster = [_p("p1", "Arjun Singh")]

    unmatched = RosterReconciler().unmatched_names(["Arjun Singh", "Host (Zoom)", ""], roster)

    assert unmatched == ["Host (Zoom)", ""]
