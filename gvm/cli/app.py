from __future__ import annotations

import os
from pathlib import Path

import typer

from gvm import __version__
from gvm.cli.commands.install import install
from gvm.cli.commands.list_cmd import list_versions
from gvm.cli.commands.search import search
from gvm.cli.commands.use import use
from gvm.core.config import ENV_BASE_DIR, ENV_VERBOSE


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="gvm (Generic Version Manager) - install and switch language toolchain versions.",
)


# Commands
app.command()(install)
app.command("list")(list_versions)
app.command()(search)
app.command()(use)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_dir: Path | None = typer.Option(
        None,
        "--dir",
        help="Base directory for installed versions (overrides GVM_DIR, default ~/.gvm).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print diagnostics to stderr."),
) -> None:
    if base_dir is not None:
        os.environ[ENV_BASE_DIR] = str(base_dir.expanduser())
    if verbose:
        os.environ[ENV_VERBOSE] = "1"


def main() -> None:
    app()
