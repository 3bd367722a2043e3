from __future__ import annotations

from dataclasses import dataclass

import typer

from gvm.core.config import Settings, load_settings
from gvm.core.errors import ErrorCode
from gvm.core.result import Err
from gvm.output.console import ConsoleProtocol, RichConsole
from gvm.platform.detection import PlatformInfo, detect
from gvm.versions.http import HttpClient, RealHttpClient
from gvm.versions.store import VersionStore


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    platform: PlatformInfo
    store: VersionStore
    http: HttpClient
    console: ConsoleProtocol


def build_context(*, stdout: bool = True) -> CLIContext:
    """Load settings and wire services for one command.

    Args:
        stdout: False routes all console output to stderr (``gvm use``).
    """
    settings_result = load_settings()
    if isinstance(settings_result, Err):
        typer.echo(f"Error: {settings_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ERROR))

    settings = settings_result.value
    return CLIContext(
        settings=settings,
        platform=detect(),
        store=VersionStore(settings.base_dir),
        http=RealHttpClient(timeout=settings.http_timeout),
        console=RichConsole(stdout=stdout, verbose=settings.verbose),
    )
