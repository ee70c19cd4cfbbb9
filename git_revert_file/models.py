"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """A working tree root and the path it was discovered from."""

    root: Path
    source: Path


@dataclass(frozen=True, slots=True)
class FileLocation:
    """A single working-tree entry addressed both on disk and inside git."""

    repo: RepositoryRef
    absolute_path: Path
    relative_path: str

    @property
    def root(self) -> Path:
        return self.repo.root


class PresenceState(str, Enum):
    """Where a file exists across HEAD and HEAD's parent."""

    PRESENT_IN_BOTH = "present-in-both"
    PRESENT_ONLY_IN_PREVIOUS = "present-only-in-previous"
    PRESENT_ONLY_IN_CURRENT = "present-only-in-current"
    PRESENT_IN_NEITHER = "present-in-neither"

    @classmethod
    def from_probes(cls, in_current: bool, in_previous: bool) -> "PresenceState":
        if in_current and in_previous:
            return cls.PRESENT_IN_BOTH
        if in_previous:
            return cls.PRESENT_ONLY_IN_PREVIOUS
        if in_current:
            return cls.PRESENT_ONLY_IN_CURRENT
        return cls.PRESENT_IN_NEITHER

    @property
    def in_current(self) -> bool:
        return self in (PresenceState.PRESENT_IN_BOTH, PresenceState.PRESENT_ONLY_IN_CURRENT)

    @property
    def in_previous(self) -> bool:
        return self in (PresenceState.PRESENT_IN_BOTH, PresenceState.PRESENT_ONLY_IN_PREVIOUS)

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


class OutcomeStatus(str, Enum):
    REVERTED = "reverted"
    STASHED = "stashed"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of processing one path in a batch."""

    path: Path
    status: OutcomeStatus
    message: str = ""
    state: PresenceState | None = None

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


@dataclass(slots=True)
class BatchReport:
    """Ordered per-path outcomes for one invocation."""

    outcomes: list[FileOutcome] = field(default_factory=list)

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def processed(self) -> int:
        return sum(
            1
            for outcome in self.outcomes
            if outcome.status in (OutcomeStatus.REVERTED, OutcomeStatus.STASHED)
        )

    @property
    def failures(self) -> list[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def cancelled(self) -> bool:
        return bool(self.outcomes) and all(
            outcome.status is OutcomeStatus.CANCELLED for outcome in self.outcomes
        )

    @property
    def ok(self) -> bool:
        return not self.failures
