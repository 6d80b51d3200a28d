from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..ocr.extractor import NameExtractor, Screenshot
from ..roster.repository import ParticipantRepository
from .model import ScanResult, Verdict
from .reconciler import RosterReconciler

logger = logging.getLogger(__name__)

# Review-screen toggle before confirmation.
_TOGGLE = {
    AttendanceStatus.PRESENT: AttendanceStatus.ABSENT,
    AttendanceStatus.ABSENT: AttendanceStatus.PRESENT,
    AttendanceStatus.NEEDS_REVIEW: AttendanceStatus.PRESENT,
}


class ScanService:
    """Use case: screenshots -> extracted names -> verdicts for the whole roster.

    The roster is only read after the oracle answered, so a failed or abandoned
    extraction leaves nothing behind.
    """

    def __init__(
        self,
        extractor: NameExtractor,
        participants: ParticipantRepository,
        *,
        reconciler: Optional[RosterReconciler] = None,
    ):
        self._extractor = extractor
        self._participants = participants
        self._reconciler = reconciler or RosterReconciler()

    def scan(self, images: Sequence[Screenshot]) -> ScanResult:
        found_names = list(self._extractor.extract_names(images))
        return self.reconcile_names(found_names)

    def reconcile_names(self, found_names: Sequence[str]) -> ScanResult:
        roster = list(self._participants.list_all())
        verdicts = self._reconciler.reconcile(found_names, roster)
        unmatched = self._reconciler.unmatched_names(found_names, roster)
        logger.info(
            "reconciled %d name(s) against %d participant(s): %d unmatched",
            len(found_names),
            len(roster),
            len(unmatched),
        )
        return ScanResult(found_names=list(found_names), verdicts=verdicts, unmatched_names=unmatched)

    @staticmethod
    def toggle(result: ScanResult, participant_id: str) -> ScanResult:
        verdicts: list[Verdict] = []
        hit = False
        for v in result.verdicts:
            if v.participant.participant_id == participant_id:
                v = v.with_status(_TOGGLE[v.status])
                hit = True
            verdicts.append(v)
        if not hit:
            raise NotFoundError("Participant is not part of this scan")
        return replace(result, verdicts=verdicts)
