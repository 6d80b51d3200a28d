from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import Verdict
from ..model import Fine


class FineCalculator(ABC):
    """Calculator interface (Strategy Pattern for fines)."""

    @abstractmethod
    def compute_fines(self, *, meeting_id: str, verdicts: Sequence[Verdict], fine_amount: int) -> list[Fine]:
        raise NotImplementedError
