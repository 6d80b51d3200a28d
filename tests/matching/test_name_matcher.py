from src.attendance_ledger.attendance_ledger.core.enums import AttendanceStatus
from src.attendance_ledger.attendance_ledger.matching.matcher import NameMatcher, normalize_name
from src.attendance_ledger.attendance_ledger.matching.policy import StatusPolicy
from src.attendance_ledger.attendance_ledger.matching.rules.base import MatchResult


def test_exact_alias_is_case_insensitive():
    result = NameMatcher().match("ARJUN singh", ["Arjun Singh"])

    assert result == MatchResult(is_match=True, score=100)


def test_containment_either_direction_scores_85():
    matcher = NameMatcher()

    assert matcher.match("Arjun S", ["Arjun"]) == MatchResult(is_match=True, score=85)
    assert matcher.match("Arjun", ["Arjun Singh"]) == MatchResult(is_match=True, score=85)


def test_exact_hit_on_any_alias_beats_containment_on_another():
    result = NameMatcher().match("Bittu", ["Rohit Kumar", "Rohit", "Bittu"])

    assert result.score == 100


def test_no_overlap_is_no_match():
    result = NameMatcher().match("Meera Devi", ["Arjun Singh"])

    assert result == MatchResult(is_match=False, score=0)


def test_blank_raw_name_never_matches():
    matcher = NameMatcher()

    assert not matcher.match("", ["Arjun Singh"]).is_match
    assert not matcher.match("   ", ["Arjun Singh"]).is_match


def test_empty_aliases_are_ignored():
    assert not NameMatcher().match("Arjun", ["", "  "]).is_match


def test_no_diacritic_folding():
    assert not NameMatcher().match("Jose", ["José"]).is_match


def test_normalize_name_only_lowercases():
    assert normalize_name("  Arjun SINGH ") == "  arjun singh "
    assert normalize_name(None) == ""


def test_surrounding_whitespace_demotes_exact_to_containment():
    assert NameMatcher().match("Arjun Singh ", ["Arjun Singh"]) == MatchResult(is_match=True, score=85)


def test_status_policy_thresholds():
    policy = StatusPolicy()

    assert policy.status_for(MatchResult(True, 100)) == AttendanceStatus.PRESENT
    assert policy.status_for(MatchResult(True, 85)) == AttendanceStatus.NEEDS_REVIEW
    assert policy.status_for(MatchResult(False, 0)) == AttendanceStatus.ABSENT


def test_status_policy_threshold_is_configurable():
    assert StatusPolicy(present_threshold=80).status_for(MatchResult(True, 85)) == AttendanceStatus.PRESENT
