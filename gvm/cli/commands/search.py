"""Search command - list installable versions from the vendor index."""

from __future__ import annotations

import typer

from gvm.cli.commands._helpers import exit_on_error
from gvm.cli.context import build_context
from gvm.versions.search import list_available


def search(
    language: str = typer.Argument(..., help="Language to search (go, python)."),
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Show only the N newest versions.",
    ),
) -> None:
    """List versions available online, newest first."""
    ctx = build_context()
    ctx.console.debug(f"fetching available {language} versions")

    versions = exit_on_error(list_available(ctx.http, language), ctx)
    if limit is not None:
        versions = versions[:limit]

    for v in versions:
        ctx.console.print(v)
