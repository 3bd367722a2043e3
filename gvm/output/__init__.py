"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .errors import error_exit_code, print_error
from .progress import DownloadProgress, NullProgress, ProgressReporter

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "error_exit_code",
    "print_error",
    "DownloadProgress",
    "NullProgress",
    "ProgressReporter",
]
