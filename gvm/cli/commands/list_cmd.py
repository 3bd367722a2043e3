"""List command - show installed versions of a language."""

from __future__ import annotations

import typer

from gvm.cli.commands._helpers import fail
from gvm.cli.context import build_context
from gvm.core.errors import FilesystemError


def list_versions(
    language: str = typer.Argument(..., help="Language whose installed versions to show."),
) -> None:
    """Show installed versions of a language, one per line."""
    ctx = build_context()

    try:
        versions = ctx.store.list(language)
    except OSError as e:
        lang_dir = ctx.store.language_dir(language)
        fail(FilesystemError(path=lang_dir, reason=e.strerror or str(e)), ctx)

    if not versions:
        ctx.console.info(f"No {language} versions installed yet.")
        return

    for v in versions:
        ctx.console.print(v)
