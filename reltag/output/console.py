"""Console output abstraction.

Services report progress and diagnostics through `ConsoleProtocol` instead of
printing directly. `RichConsole` is used by the CLI; `MockConsole` records
everything for assertions in tests.

Diagnostics never share a stream with machine-readable output: `error` and
`warning` write to stderr, and commands that emit data (`reltag tags`) write
it with `typer.echo` rather than through the console.
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
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Prefix shown before leveled messages, and whether the level goes to stderr.
_LEVELS: dict[Style, tuple[str, bool]] = {
    Style.SUCCESS: ("OK", False),
    Style.ERROR: ("error:", True),
    Style.WARNING: ("warning:", True),
    Style.INFO: ("info:", False),
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Rich-backed console; markup and emoji codes in messages are never interpreted."""

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(highlight=False, emoji=False)
        self._err = Console(stderr=True, highlight=False, emoji=False)

    def _leveled(self, level: Style, message: str) -> None:
        from rich.text import Text

        prefix, to_stderr = _LEVELS[level]
        line = Text.assemble((prefix, _RICH_STYLES[level]), " ", message)
        (self._err if to_stderr else self._out).print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=_RICH_STYLES.get(style), markup=False)

    def success(self, message: str) -> None:
        self._leveled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._leveled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._leveled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._leveled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._out.print()
        self._out.print(message, style=_RICH_STYLES[Style.HEADER], markup=False)

    def newline(self) -> None:
        self._out.print()


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


def _no_records() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records output; leveled messages keep the prefix RichConsole shows."""

    outputs: list[OutputRecord] = field(default_factory=_no_records)

    def _record(self, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _leveled(self, level: Style, message: str) -> None:
        prefix, _ = _LEVELS[level]
        self._record(f"{prefix} {message}", level)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._record(message, style)

    def success(self, message: str) -> None:
        self._leveled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._leveled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._leveled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._leveled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    def newline(self) -> None:
        self._record("", Style.DEFAULT)

    # Assertion helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style is style)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def has_warning(self) -> bool:
        return self.count(Style.WARNING) > 0

    def has_success(self) -> bool:
        return self.count(Style.SUCCESS) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
