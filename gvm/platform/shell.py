"""Shell statements that set PATH in the calling shell.

A child process cannot change its parent's environment, so ``gvm use``
prints one statement for the shell to evaluate:

    eval "$(gvm use go 1.22.3)"                 # bash/zsh/sh
    gvm use go 1.22.3 --shell fish | source     # fish
    gvm use go 1.22.3 | iex                     # PowerShell
    for /f "tokens=*" %i in ('gvm use go 1.22.3 --shell cmd') do %i
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from .detection import Platform

__all__ = [
    "Shell",
    "default_shell",
    "render_path_assignment",
    "usage_hint",
]


class Shell(str, Enum):
    """Supported shell dialects."""

    POSIX = "posix"
    FISH = "fish"
    POWERSHELL = "powershell"
    CMD = "cmd"

    def __str__(self) -> str:
        return self.value


def default_shell(platform: Platform) -> Shell:
    """PowerShell on Windows, POSIX sh everywhere else."""
    return Shell.POWERSHELL if platform == Platform.WINDOWS else Shell.POSIX


def _posix_quote(value: str) -> str:
    for ch in ("\\", '"', "$", "`"):
        value = value.replace(ch, f"\\{ch}")
    return f'"{value}"'


def _powershell_quote(value: str) -> str:
    for ch in ("`", '"', "$"):
        value = value.replace(ch, f"`{ch}")
    return f'"{value}"'


def render_path_assignment(shell: Shell, segments: Sequence[str], separator: str) -> str:
    """Render a single-line statement assigning PATH.

    Args:
        shell: Target shell dialect
        segments: PATH entries, highest priority first
        separator: PATH list separator of the host (os.pathsep)

    Returns:
        Statement text without a trailing newline
    """
    if shell == Shell.FISH:
        # fish keeps PATH as a list variable
        return "set -gx PATH " + " ".join(_posix_quote(s) for s in segments)

    value = separator.join(segments)
    if shell == Shell.POWERSHELL:
        return f"$env:PATH = {_powershell_quote(value)}"
    if shell == Shell.CMD:
        return f'set "PATH={value}"'
    return f"export PATH={_posix_quote(value)}"


def usage_hint(shell: Shell) -> str:
    """How to evaluate the output of ``gvm use`` in ``shell``."""
    return {
        Shell.POSIX: 'eval "$(gvm use <language> <version>)"',
        Shell.FISH: "gvm use <language> <version> --shell fish | source",
        Shell.POWERSHELL: "gvm use <language> <version> | iex",
        Shell.CMD: "for /f \"tokens=*\" %i in ('gvm use <language> <version> --shell cmd') do %i",
    }[shell]
