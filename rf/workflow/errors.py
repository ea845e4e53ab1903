"""Step failures.

Every error is terminal for the running workflow. Kinds:
- usage: the step is not allowed in the current state
- discovery / rule: see `rf.release.errors`
- external: a collaborator (tracker, prompt, git, manifest write) failed
- command: a templated command exited non-zero
"""

from __future__ import annotations

from dataclasses import dataclass

from rf.release.errors import (
    InvalidManifestVersion,
    ManifestNotFound,
    ManifestWriteFailed,
    RuleNotApplicable,
)
from rf.trackers.errors import TrackerError


@dataclass(frozen=True, slots=True)
class IssueAlreadySelected:
    issue: str


@dataclass(frozen=True, slots=True)
class NoIssueSelected:
    pass


@dataclass(frozen=True, slots=True)
class UnsupportedTrackerOperation:
    tracker: str
    operation: str


@dataclass(frozen=True, slots=True)
class TrackerNotConfigured:
    tracker: str


@dataclass(frozen=True, slots=True)
class ExternalCallFailed:
    operation: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CommandFailed:
    command: str
    returncode: int


UsageError = (
    IssueAlreadySelected | NoIssueSelected | UnsupportedTrackerOperation | TrackerNotConfigured
)

StepError = (
    UsageError
    | ManifestNotFound
    | InvalidManifestVersion
    | RuleNotApplicable
    | ExternalCallFailed
    | CommandFailed
)


def from_tracker(operation: str, error: TrackerError) -> ExternalCallFailed:
    return ExternalCallFailed(operation=operation, message=error.message, hint=error.hint)


def from_manifest_write(error: ManifestWriteFailed) -> ExternalCallFailed:
    return ExternalCallFailed(
        operation=f"write {error.path.name}",
        message=error.reason,
        hint=str(error.path),
    )
