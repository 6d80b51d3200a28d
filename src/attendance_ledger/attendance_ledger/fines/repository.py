from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Fine


class FineRepository(Protocol):
    def list_for_meeting(self, meeting_id: str) -> Sequence[Fine]:
        raise NotImplementedError

    def list_for_participants(self, participant_ids: Sequence[str]) -> Sequence[Fine]:
        raise NotImplementedError

    def get_by_id(self, fine_id: str) -> Optional[Fine]:
        raise NotImplementedError

    def set_paid(self, *, fine_id: str, is_paid: bool) -> bool:
        raise NotImplementedError

    def replace_for_meeting(self, *, meeting_id: str, fines: Sequence[Fine]) -> None:
        """Supersede every fine of the meeting with `fines` in one transaction."""

        raise NotImplementedError
