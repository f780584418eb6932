"""Module: outcome.py

Author: Michael Economou
Date: 2026-10-12

Result objects of a rename run: one ProcessingOutcome per file and a
RunReport aggregating them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mediarename.core.errors import ErrorKind


class OutcomeStatus(str, Enum):
    """Terminal state of one file."""

    RENAMED = "renamed"
    CANONICAL = "canonical"  # already carried its canonical name
    PLANNED = "planned"  # dry run, rename not performed
    FAILED = "failed"

    @property
    def is_success(self) -> bool:
        return self is not OutcomeStatus.FAILED


@dataclass(frozen=True)
class FileError:
    """A per-file failure collected for end-of-run reporting."""

    file_name: str
    kind: ErrorKind
    cause: str

    def __str__(self) -> str:
        return f"{self.file_name}: {self.cause}"


@dataclass(frozen=True)
class ProcessingOutcome:
    """Outcome of processing one FileTask."""

    source: str
    status: OutcomeStatus
    target: str | None = None
    error: FileError | None = None

    @classmethod
    def failure(cls, source: str, error: FileError) -> ProcessingOutcome:
        return cls(source=source, status=OutcomeStatus.FAILED, error=error)


@dataclass
class RunReport:
    """Aggregated result of a pipeline run.

    Attributes:
        produced: Paths discovered and queued
        consumed: Paths claimed by workers
        outcomes: Outcomes in completion order
        elapsed: Wall-clock seconds of the run

    """

    produced: int = 0
    consumed: int = 0
    outcomes: list[ProcessingOutcome] = field(default_factory=list)
    elapsed: float = 0.0

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def renamed_count(self) -> int:
        return self.count(OutcomeStatus.RENAMED)

    @property
    def canonical_count(self) -> int:
        return self.count(OutcomeStatus.CANONICAL)

    @property
    def planned_count(self) -> int:
        return self.count(OutcomeStatus.PLANNED)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status.is_success)

    @property
    def errors(self) -> list[FileError]:
        """Per-file errors in completion order."""
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def issue_count(self) -> int:
        return len(self.errors)
