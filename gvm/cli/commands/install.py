"""Install command - download and unpack a language version."""

from __future__ import annotations

import typer

from gvm.cli.commands._helpers import exit_on_error
from gvm.cli.context import build_context
from gvm.output.progress import DownloadProgress
from gvm.versions.install import InstallService
from gvm.versions.sources import ResolvedSource


def _progress_bar(source: ResolvedSource) -> DownloadProgress:
    return DownloadProgress(source.filename)


def install(
    language: str = typer.Argument(..., help="Language to install (e.g. go, python)."),
    version: str = typer.Argument(..., help="Version to install (e.g. 1.22.3)."),
) -> None:
    """Install a specific version of a programming language."""
    ctx = build_context()
    service = InstallService(
        store=ctx.store,
        http=ctx.http,
        platform=ctx.platform,
        console=ctx.console,
        progress=_progress_bar,
    )

    outcome = exit_on_error(service.install(language, version), ctx)
    installed = outcome.installed
    if outcome.already_installed:
        ctx.console.info(f"{language} {version} is already installed at {installed.path}")
        return
    ctx.console.success(f"Installed {language} {version} to {installed.path}")
