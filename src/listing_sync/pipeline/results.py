"""Per-target outcomes and the run tallies reported at the end of each job."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Outcome(StrEnum):
    CREATED = "created"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class SyncSummary:
    created: int = 0
    skipped: int = 0
    errors: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.CREATED:
            self.created += 1
        elif outcome is Outcome.SKIPPED:
            self.skipped += 1
        else:
            self.errors += 1

    def __str__(self) -> str:
        return f"created: {self.created}, skipped: {self.skipped}, errors: {self.errors}"


@dataclass
class CleanupSummary:
    archived: int = 0
    errors: int = 0

    def merge(self, other: CleanupSummary) -> None:
        self.archived += other.archived
        self.errors += other.errors

    def __str__(self) -> str:
        return f"archived: {self.archived}, errors: {self.errors}"
