from __future__ import annotations

from ...core.constants import EXACT_MATCH_SCORE
from .base import MatchRule


class ExactRule(MatchRule):
    """Raw name equals the alias."""

    score = EXACT_MATCH_SCORE

    def matches(self, raw_name: str, alias: str) -> bool:
        return raw_name == alias
