from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchResult:
    is_match: bool
    score: int


class MatchRule(ABC):
    """Strategy Pattern: one tier of the name comparison.

    Both arguments arrive already normalized.
    """

    score: int

    @abstractmethod
    def matches(self, raw_name: str, alias: str) -> bool:
        raise NotImplementedError
