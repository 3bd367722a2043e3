"""Use command - print a statement that puts a version first on PATH."""

from __future__ import annotations

import os

import typer

from gvm.cli.commands._helpers import exit_on_error
from gvm.cli.context import build_context
from gvm.platform.shell import Shell, default_shell, usage_hint
from gvm.versions.use import compose_use_command


def use(
    language: str = typer.Argument(..., help="Language to switch (e.g. go)."),
    version: str = typer.Argument(..., help="Installed version to use."),
    shell: Shell | None = typer.Option(
        None,
        "--shell",
        case_sensitive=False,
        help="Shell dialect of the output (default: powershell on Windows, posix elsewhere).",
    ),
) -> None:
    """Print a shell statement that switches PATH to an installed version.

    The output must be evaluated by your shell to take effect:

      bash/zsh:    eval "$(gvm use go 1.22.3)"

      fish:        gvm use go 1.22.3 --shell fish | source

      PowerShell:  gvm use go 1.22.3 | iex

      cmd:         for /f "tokens=*" %i in ('gvm use go 1.22.3 --shell cmd') do %i
    """
    # stdout carries only the statement; diagnostics go to stderr
    ctx = build_context(stdout=False)
    dialect = shell or default_shell(ctx.platform.platform)

    statement = exit_on_error(
        compose_use_command(
            ctx.store,
            language,
            version,
            path=os.environ.get("PATH", ""),
            shell=dialect,
        ),
        ctx,
    )
    ctx.console.debug(f"switching PATH to {language} {version} ({dialect})")
    ctx.console.debug(f"evaluate with: {usage_hint(dialect)}")
    typer.echo(statement)
