"""Execution mode threaded through every step."""

from __future__ import annotations

from dataclasses import dataclass

from rf.output.console import ConsoleProtocol

__all__ = ["DryRun", "Real", "RunMode"]


@dataclass(frozen=True, slots=True)
class DryRun:
    """Preview side effects on `sink` instead of performing them."""

    sink: ConsoleProtocol


@dataclass(frozen=True, slots=True)
class Real:
    pass


RunMode = DryRun | Real
