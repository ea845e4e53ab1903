"""Workflow state threaded through every step.

Issue-selection progress is a closed union, `Initial | IssueSelected`: only
`IssueSelected` has an `issue` field, so code that needs the issue must match
on the variant first. Release progress is an orthogonal field that only moves
forward, `ReleaseInitial -> Bumped(version)`.

All variants are frozen. Transitions build a new value; a failed step leaves
the caller's state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TypeVar

from rf.core.config import TrackerConfig
from rf.release.semver import Version
from rf.trackers.github import GitHubNew, GitHubSession
from rf.trackers.issue import Issue

__all__ = [
    "Bumped",
    "Initial",
    "IssueSelected",
    "Release",
    "ReleaseInitial",
    "State",
    "initial_state",
    "with_bumped_version",
]


@dataclass(frozen=True, slots=True)
class ReleaseInitial:
    pass


@dataclass(frozen=True, slots=True)
class Bumped:
    version: Version


Release = ReleaseInitial | Bumped


@dataclass(frozen=True, slots=True)
class Initial:
    trackers: TrackerConfig
    github: GitHubSession = GitHubNew()
    release: Release = ReleaseInitial()


@dataclass(frozen=True, slots=True)
class IssueSelected:
    trackers: TrackerConfig
    issue: Issue
    github: GitHubSession = GitHubNew()
    release: Release = ReleaseInitial()


State = Initial | IssueSelected


def initial_state(trackers: TrackerConfig) -> Initial:
    return Initial(trackers=trackers)


S = TypeVar("S", Initial, IssueSelected)


def with_bumped_version(state: S, version: Version) -> S:
    """Record a bump. A later bump in the same run replaces the version but
    never returns the release to `ReleaseInitial`."""
    return replace(state, release=Bumped(version=version))
