"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from gvm.core.result import Err, Ok, Result
from gvm.output.errors import error_exit_code, print_error

if TYPE_CHECKING:
    from gvm.cli.context import CLIContext
    from gvm.core.errors import GvmError

T = TypeVar("T")


def exit_on_error(result: Result[T, GvmError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit non-zero.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_error(e, ctx.console)
                raise typer.Exit(code=1)
            case Ok(value):
                ...
    """
    match result:
        case Err(error):
            fail(error, ctx)
        case Ok(value):
            return value


def fail(error: GvmError, ctx: CLIContext) -> NoReturn:
    """Print ``error`` to stderr and exit with its code."""
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))
