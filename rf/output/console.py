"""Console output.

Steps report progress and dry-run previews through `ConsoleProtocol`, so the
workflow layer never imports Rich. `RichConsole` renders to the terminal;
`MockConsole` records plain lines for tests. Both use the same prefixes, so a
test asserting on "error: ..." sees what the user sees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()
    PREVIEW = auto()  # dry-run "Would ..." lines

    def __str__(self) -> str:
        return self.name.lower()


_PREFIXES: dict[Style, str] = {
    Style.SUCCESS: "OK ",
    Style.ERROR: "error: ",
    Style.WARNING: "warning: ",
    Style.INFO: "info: ",
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
    Style.PREVIEW: "magenta",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None:
        """Section title; the driver prints one per workflow step."""
        ...

    def preview(self, message: str) -> None:
        """Report a side effect that dry-run mode skipped."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Terminal console backed by `rich`. Messages are never parsed as markup."""

    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def _emit(self, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text()
        prefix = _PREFIXES.get(style)
        if prefix:
            line.append(prefix, style=_RICH_STYLES[style])
            line.append(message)
        else:
            line.append(message, style=_RICH_STYLES.get(style, ""))
        self._console.print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._emit(style, message)

    def success(self, message: str) -> None:
        self._emit(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._emit(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._emit(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._emit(Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self._emit(Style.HEADER, message)

    def preview(self, message: str) -> None:
        self._emit(Style.PREVIEW, message)

    def newline(self) -> None:
        self._console.print()


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records every line; `print` with a prefixed style is stored unprefixed."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def _record(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(_PREFIXES.get(style, "") + message, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def header(self, message: str) -> None:
        self._record(Style.HEADER, message)

    def preview(self, message: str) -> None:
        self._record(Style.PREVIEW, message)

    def newline(self) -> None:
        self._record(Style.DEFAULT, "")

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def previews(self) -> list[str]:
        return [o.message for o in self.outputs if o.style is Style.PREVIEW]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
