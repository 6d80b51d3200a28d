from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import NO_MATCH_SCORE
from ..core.enums import AttendanceStatus
from ..matching.matcher import NameMatcher
from ..matching.policy import StatusPolicy
from ..roster.model import Participant
from .model import Verdict


class RosterReconciler:
    """Roster-driven scan: every participant gets exactly one verdict.

    Pure function over its inputs; nothing is persisted here.
    """

    def __init__(self, *, matcher: Optional[NameMatcher] = None, policy: Optional[StatusPolicy] = None):
        self._matcher = matcher or NameMatcher()
        self._policy = policy or StatusPolicy()

    def reconcile(self, raw_names: Sequence[str], roster: Sequence[Participant]) -> list[Verdict]:
        names = list(raw_names)
        return [self._verdict_for(p, names) for p in roster]

    def _verdict_for(self, participant: Participant, raw_names: Sequence[str]) -> Verdict:
        aliases = participant.aliases
        # First raw name that matches at any tier wins, even if a later one is exact.
        for raw in raw_names:
            result = self._matcher.match(raw, aliases)
            if result.is_match:
                return Verdict(
                    participant=participant,
                    status=self._policy.status_for(result),
                    confidence=result.score,
                    matched_name=raw,
                )
        return Verdict(participant=participant, status=AttendanceStatus.ABSENT, confidence=NO_MATCH_SCORE)

    def unmatched_names(self, raw_names: Sequence[str], roster: Sequence[Participant]) -> list[str]:
        """Raw names that match nobody on the roster; shown to the operator, never persisted."""
        return [
            raw
            for raw in raw_names
            if not any(self._matcher.match(raw, p.aliases).is_match for p in roster)
        ]
