"""Bulk roster load from CSV text.

Leaders:      name,phone,email,groupName
Participants: fullName,altName1,altName2,phone,leaderName

A header row is optional. Leader names in participant rows are resolved to
leader ids once, at import time.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from ..core.exceptions import ValidationError
from ..users.model import Actor
from .model import Leader
from .service import RosterService

LEADER_COLUMNS = ("name", "phone", "email", "groupName")
PARTICIPANT_COLUMNS = ("fullName", "altName1", "altName2", "phone", "leaderName")


@dataclass
class ImportReport:
    created: list = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _iter_rows(text: str, columns: Sequence[str]) -> Iterator[tuple[int, dict]]:
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    for line_no, cells in enumerate(reader, start=1):
        if not cells or not any(c.strip() for c in cells):
            continue
        if line_no == 1 and cells[0].strip().lower() == columns[0].lower():
            continue
        padded = list(cells) + [""] * (len(columns) - len(cells))
        yield line_no, {col: padded[i].strip() for i, col in enumerate(columns)}


class RosterImporter:
    def __init__(self, roster: RosterService):
        self._roster = roster

    def import_leaders(self, *, actor: Actor, text: str) -> ImportReport:
        report = ImportReport()
        for line_no, row in _iter_rows(text, LEADER_COLUMNS):
            name = row["name"]
            try:
                leader = self._roster.add_leader(
                    actor=actor,
                    name=name,
                    phone=row["phone"],
                    email=row["email"],
                    group_name=row["groupName"] or f"{name}'s Group",
                )
            except ValidationError as e:
                report.errors.append(f"line {line_no}: {e}")
                continue
            report.created.append(leader)
        return report

    def import_participants(self, *, actor: Actor, text: str) -> ImportReport:
        report = ImportReport()
        by_name = self._leaders_by_name(self._roster.list_leaders())

        for line_no, row in _iter_rows(text, PARTICIPANT_COLUMNS):
            leader_name = row["leaderName"].lower()
            leader_id: Optional[str] = by_name.get(leader_name)
            if leader_name and leader_id is None:
                report.errors.append(f"line {line_no}: unknown leader {row['leaderName']!r}, left unassigned")
            try:
                participant = self._roster.add_participant(
                    actor=actor,
                    full_name=row["fullName"],
                    alt_name1=row["altName1"],
                    alt_name2=row["altName2"],
                    phone=row["phone"],
                    leader_id=leader_id,
                )
            except ValidationError as e:
                report.errors.append(f"line {line_no}: {e}")
                continue
            report.created.append(participant)
        return report

    @staticmethod
    def _leaders_by_name(leaders: Sequence[Leader]) -> dict[str, str]:
        # First leader wins when two share a name.
        out: dict[str, str] = {}
        for leader in leaders:
            out.setdefault(leader.name.strip().lower(), leader.leader_id)
        return out
