from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Leader, Participant


class ParticipantRepository(Protocol):
    """Repository interface for roster participants.

    Note: `list_all` returns participants in insertion order; reconciliation
    output follows that order.
    """

    def list_all(self) -> Sequence[Participant]:
        raise NotImplementedError

    def get_by_id(self, participant_id: str) -> Optional[Participant]:
        raise NotImplementedError

    def add(self, participant: Participant) -> None:
        raise NotImplementedError

    def update(self, participant: Participant) -> bool:
        raise NotImplementedError

    def delete_by_id(self, participant_id: str) -> bool:
        raise NotImplementedError


class LeaderRepository(Protocol):
    def list_all(self) -> Sequence[Leader]:
        raise NotImplementedError

    def get_by_id(self, leader_id: str) -> Optional[Leader]:
        raise NotImplementedError

    def add(self, leader: Leader) -> None:
        raise NotImplementedError

    def delete_by_id(self, leader_id: str) -> bool:
        raise NotImplementedError
