"""Download progress bars.

Progress is always drawn on stderr so it never mixes with command output.
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console
    from rich.progress import Progress, TaskID

__all__ = ["ProgressReporter", "DownloadProgress", "NullProgress"]


class ProgressReporter(Protocol):
    """Receives ``(downloaded, total)`` byte counts; ``total`` is 0 when unknown."""

    def __call__(self, downloaded: int, total: int) -> None: ...


class DownloadProgress:
    """Rich progress bar for a single download.

    Usage:
        with DownloadProgress("go1.22.3.linux-amd64.tar.gz") as progress:
            http.download(url, dest, progress=progress)
    """

    def __init__(self, description: str, *, console: Console | None = None) -> None:
        self._description = description
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> DownloadProgress:
        from rich.console import Console
        from rich.progress import (
            BarColumn,
            DownloadColumn,
            Progress,
            TextColumn,
            TransferSpeedColumn,
        )

        console = self._console or Console(stderr=True)
        self._progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(bar_width=None),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
            transient=False,
        )
        self._progress.start()
        # total=None renders a pulsing bar until Content-Length is known
        self._task = self._progress.add_task(self._description, total=None)
        return self

    def __call__(self, downloaded: int, total: int) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(
            self._task,
            completed=downloaded,
            total=total if total > 0 else None,
        )

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None


class NullProgress:
    """Reporter that records calls and draws nothing."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def __enter__(self) -> NullProgress:
        return self

    def __call__(self, downloaded: int, total: int) -> None:
        self.calls.append((downloaded, total))

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None
