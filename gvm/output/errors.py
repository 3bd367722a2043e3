"""Error presentation.

Every failure is reported the same way: ``Error: <message>`` on stderr,
an optional dimmed hint below it, and exit code 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gvm.core.errors import ErrorCode

if TYPE_CHECKING:
    from gvm.core.errors import GvmError
    from gvm.output.console import ConsoleProtocol

__all__ = ["print_error", "error_exit_code"]


def print_error(error: GvmError, console: ConsoleProtocol) -> None:
    """Print an error (and its hint) to the console's stderr."""
    console.error(error.message)
    if error.hint:
        console.hint(error.hint)


def error_exit_code(error: GvmError) -> int:
    """Exit code for an error; all command failures share one code."""
    return int(ErrorCode.ERROR)
