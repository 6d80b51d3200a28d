from __future__ import annotations

from ...core.constants import PARTIAL_MATCH_SCORE
from .base import MatchRule


class ContainmentRule(MatchRule):
    """Either name contains the other ("Arjun" vs "Arjun S")."""

    score = PARTIAL_MATCH_SCORE

    def matches(self, raw_name: str, alias: str) -> bool:
        return alias in raw_name or raw_name in alias
