"""Console output abstraction.

Services report through ``ConsoleProtocol`` so they never touch sys.stdout
directly. That matters for ``gvm use``: its stdout is evaluated by the
calling shell and must contain nothing but the PATH statement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Styled output sink.

    ``error``, ``warning`` and ``debug`` always go to stderr. The other
    methods go to stdout unless the implementation was told otherwise.
    """

    @property
    def verbose(self) -> bool: ...

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def hint(self, message: str) -> None:
        """Print a dimmed "hint: ..." line under an error (stderr)."""
        ...

    def debug(self, message: str) -> None:
        """Print a diagnostic line, only when verbose."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Console backed by Rich.

    Args:
        stdout: When False, every message goes to stderr. ``gvm use`` relies
            on this to keep stdout clean for shell evaluation.
        verbose: Show ``debug`` messages.
    """

    def __init__(self, *, stdout: bool = True, verbose: bool = False) -> None:
        # Import Rich lazily to keep `import gvm` light
        from rich.console import Console

        self._err = Console(stderr=True, highlight=False)
        self._out = Console(highlight=False) if stdout else self._err
        self._verbose = verbose
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
        }

    @property
    def verbose(self) -> bool:
        return self._verbose

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        target = self._err if style in (Style.ERROR, Style.WARNING) else self._out
        rich_style = self._style_map.get(style, "")
        if rich_style:
            target.print(message, style=rich_style, markup=False)
        else:
            target.print(message, markup=False)

    def success(self, message: str) -> None:
        self._out.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[red bold]Error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._out.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def hint(self, message: str) -> None:
        self._err.print(f"hint: {message}", style="dim", markup=False)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._err.print(message, style="dim", markup=False)

    def newline(self) -> None:
        self._out.print()


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single message captured by MockConsole."""

    message: str
    style: Style
    stderr: bool = False


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    verbose: bool = False

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style, style in (Style.ERROR, Style.WARNING)))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"Error: {message}", Style.ERROR, stderr=True))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING, stderr=True))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def hint(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"hint: {message}", Style.DIM, stderr=True))

    def debug(self, message: str) -> None:
        if self.verbose:
            self.outputs.append(OutputRecord(message, Style.DIM, stderr=True))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def stdout_messages(self) -> list[str]:
        return [o.message for o in self.outputs if not o.stderr]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
