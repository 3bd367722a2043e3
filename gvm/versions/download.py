"""Scoped downloads into temporary files.

Downloads are never cached: each install streams the archive into a fresh
temporary file which is deleted when the ``with`` block exits, whether the
install succeeded, failed, or raised.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gvm.core.errors import DownloadError, FilesystemError
from gvm.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable

    from gvm.versions.http import HttpClient

__all__ = ["Downloader", "DownloadResult"]


@dataclass(frozen=True, slots=True)
class DownloadResult:
    """A completed download.

    Attributes:
        path: Temporary file holding the body (valid inside the with block)
        size: Bytes written
    """

    path: Path
    size: int


class Downloader:
    """Streams URLs into temporary files.

    Usage:
        downloader = Downloader(http)
        with downloader.temporary(url, suffix=".tar.gz") as result:
            if is_ok(result):
                extract(result.value.path)
        # the temporary file is gone here
    """

    def __init__(self, http: HttpClient, temp_dir: Path | None = None) -> None:
        """Initialize downloader.

        Args:
            http: HTTP client for downloads
            temp_dir: Directory for temporary files (system default if None)
        """
        self._http = http
        self._temp_dir = temp_dir

    @contextlib.contextmanager
    def temporary(
        self,
        url: str,
        *,
        suffix: str = ".tmp",
        progress: Callable[[int, int], None] | None = None,
    ) -> Iterator[Result[DownloadResult, DownloadError]]:
        """Download ``url`` into a temporary file removed on exit.

        Args:
            url: URL to download
            suffix: Temporary file suffix (keeps the archive extension visible)
            progress: Optional callback(downloaded_bytes, total_bytes)

        Yields:
            Ok with DownloadResult, or Err with the download failure
        """
        try:
            fd, name = tempfile.mkstemp(
                prefix="gvm-",
                suffix=suffix,
                dir=str(self._temp_dir) if self._temp_dir else None,
            )
        except OSError as e:
            location = self._temp_dir or Path(tempfile.gettempdir())
            yield Err(FilesystemError(path=location, reason=e.strerror or str(e)))
            return

        os.close(fd)
        path = Path(name)
        try:
            result = self._http.download(url, path, progress=progress)
            if isinstance(result, Err):
                yield result
            else:
                yield Ok(DownloadResult(path=path, size=path.stat().st_size))
        finally:
            path.unlink(missing_ok=True)
