"""Selection prompt contract.

The terminal implementation lives in `rf.cli.selector`; workflow code only
sees this protocol so tests can script the user's choice.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from rf.core.result import Err, Ok, Result
from rf.trackers.errors import TrackerError

__all__ = ["MockPrompt", "Prompt"]

T = TypeVar("T")


class Prompt(Protocol):
    def select(self, candidates: Sequence[T], title: str) -> Result[T, TrackerError]:
        """Return exactly one of `candidates`, or an error if the user cancels."""
        ...


class MockPrompt:
    """Prompt that picks the candidate at `index`, or cancels when `index` is None.

    Every call is recorded in `seen` as (candidates, title).
    """

    def __init__(self, index: int | None = 0) -> None:
        self.index = index
        self.seen: list[tuple[list[object], str]] = []

    def select(self, candidates: Sequence[T], title: str) -> Result[T, TrackerError]:
        self.seen.append((list(candidates), title))
        if self.index is None:
            return Err(TrackerError(message="selection cancelled"))
        return Ok(candidates[self.index])
