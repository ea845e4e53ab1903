"""Arrow-key list picker for workflow and issue selection."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from rich.console import Console
from rich.text import Text

from rf.core.result import Err, Ok, Result
from rf.trackers.errors import TrackerError

T = TypeVar("T")

Key = Literal["up", "down", "enter", "cancel", "other"]

_WINDOWS_ARROWS: dict[str, Key] = {"H": "up", "P": "down"}
_ANSI_ARROWS: dict[str, Key] = {"A": "up", "B": "down"}


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _read_key_windows() -> Key:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\r", "\n"):
        return "enter"
    if ch in ("q", "Q", "\x1b", "\x03"):
        return "cancel"
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "other")
    return "other"


def _read_key_posix() -> Key:
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("q", "Q", "\x03"):
            return "cancel"
        if ch != "\x1b":
            return "other"
        # Arrow keys arrive as ESC [ A / ESC [ B; a lone ESC cancels.
        if sys.stdin.read(1) != "[":
            return "cancel"
        return _ANSI_ARROWS.get(sys.stdin.read(1), "other")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_key() -> Key:
    return _read_key_windows() if os.name == "nt" else _read_key_posix()


def _render(console: Console, title: str, labels: Sequence[str], index: int) -> None:
    console.clear()
    console.print(Text(title, style="bold cyan"))
    console.print()
    for i, label in enumerate(labels):
        if i == index:
            console.print(Text(f">> {label}", style="bold black on cyan"), overflow="ellipsis")
        else:
            console.print(Text(f"   {label}"), overflow="ellipsis", no_wrap=True)
    console.print()
    keys = Text.assemble(("Up/Down", "bold"), " + Enter to choose, ", ("q", "bold"), " to cancel")
    console.print(keys)


def select_one(
    *,
    title: str,
    options: Sequence[SelectorOption[T]],
    initial_index: int = 0,
) -> SelectorResult[T]:
    """Let the user pick one option. Requires a TTY and at least one option."""
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    console = Console(highlight=False)
    labels = [o.label.strip() for o in options]
    idx = max(0, min(initial_index, len(options) - 1))

    while True:
        _render(console, title, labels, idx)
        match _read_key():
            case "up":
                idx = (idx - 1) % len(options)
            case "down":
                idx = (idx + 1) % len(options)
            case "enter":
                console.clear()
                return SelectorResult(action="select", value=options[idx].value, index=idx)
            case "cancel":
                console.clear()
                return SelectorResult(action="cancel", value=None, index=idx)
            case _:
                pass


class TerminalPrompt:
    """`Prompt` backed by `select_one`."""

    def select(self, candidates: Sequence[T], title: str) -> Result[T, TrackerError]:
        if not candidates:
            return Err(TrackerError(message="nothing to select from"))
        if not is_interactive_terminal():
            return Err(
                TrackerError(
                    message="interactive selection requires a TTY",
                    hint="Run rf from a terminal",
                )
            )

        options = [SelectorOption(value=c, label=str(c)) for c in candidates]
        result = select_one(title=title, options=options)
        if result.action == "cancel":
            return Err(TrackerError(message="selection cancelled"))
        return Ok(candidates[result.index])
