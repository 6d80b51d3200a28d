from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import NO_MATCH_SCORE
from .rules.base import MatchResult, MatchRule
from .rules.containment_rule import ContainmentRule
from .rules.exact_rule import ExactRule

NO_MATCH = MatchResult(is_match=False, score=NO_MATCH_SCORE)


def normalize_name(value: Optional[str]) -> str:
    """Case-insensitive comparison key. No trimming, no diacritic folding, no tokenizing."""
    return (value or "").lower()


class NameMatcher:
    """Decide whether a raw extracted name belongs to a participant.

    Rules are tried in priority order and the first rule satisfied by any alias
    wins, so an exact hit on one alias beats a containment hit on another.
    """

    def __init__(self, rules: Optional[Sequence[MatchRule]] = None):
        self._rules: tuple[MatchRule, ...] = tuple(rules or (ExactRule(), ContainmentRule()))

    def match(self, raw_name: str, aliases: Iterable[str]) -> MatchResult:
        raw = normalize_name(raw_name)
        if not raw.strip():
            return NO_MATCH

        candidates = [a for a in (normalize_name(x) for x in aliases) if a.strip()]
        for rule in self._rules:
            if any(rule.matches(raw, alias) for alias in candidates):
                return MatchResult(is_match=True, score=rule.score)
        return NO_MATCH
