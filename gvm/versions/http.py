"""HTTP client abstraction for version downloads and index pages.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses for tests
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from gvm import __version__
from gvm.core.config import DEFAULT_HTTP_TIMEOUT
from gvm.core.errors import DownloadError, FilesystemError, HttpStatusError, NetworkError
from gvm.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable
    from http.client import HTTPResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "RealHttpClient",
    "MockHttpClient",
    "CHUNK_SIZE",
]

HttpError = NetworkError | HttpStatusError

CHUNK_SIZE = 64 * 1024


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations.

    Implementations report transport failures as NetworkError and any final
    status other than 200 as HttpStatusError.
    """

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL and decode the body as UTF-8."""
        ...

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, DownloadError]:
        """Stream URL into ``dest``.

        Args:
            url: URL to download
            dest: File to write (created or truncated)
            progress: Optional callback(downloaded, total); total is 0 when
                the server sends no Content-Length

        Returns:
            Ok with dest, or Err with the failure (FilesystemError when
            writing dest fails)
        """
        ...


def _status_error(url: str, response: HTTPResponse) -> HttpStatusError:
    return HttpStatusError(url=url, status=response.status, reason=response.reason)


def _filesystem_error(path: Path, e: OSError) -> FilesystemError:
    return FilesystemError(path=path, reason=e.strerror or str(e))


def _content_length(value: str | None) -> int:
    try:
        return max(int(value or 0), 0)
    except ValueError:
        return 0


class RealHttpClient:
    """urllib-based client.

    Redirects are followed; system certificates are used for HTTPS.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = f"gvm/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _open(self, url: str) -> HTTPResponse:
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        return urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context)

    def get_text(self, url: str) -> Result[str, HttpError]:
        try:
            with self._open(url) as response:
                if response.status != HTTPStatus.OK:
                    return Err(_status_error(url, response))
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpStatusError(url=url, status=e.code, reason=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(NetworkError(url=url, reason=str(e.reason)))
        except TimeoutError:
            return Err(NetworkError(url=url, reason="request timed out"))
        except (ValueError, OSError) as e:
            return Err(NetworkError(url=url, reason=str(e)))

        try:
            return Ok(body.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(NetworkError(url=url, reason=f"decode error: {e}"))

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, DownloadError]:
        try:
            with self._open(url) as response:
                if response.status != HTTPStatus.OK:
                    return Err(_status_error(url, response))

                total = _content_length(response.headers.get("Content-Length"))
                downloaded = 0
                if progress:
                    progress(0, total)

                try:
                    f = open(dest, "wb")
                except OSError as e:
                    return Err(_filesystem_error(dest, e))

                with f:
                    while True:
                        chunk = response.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        try:
                            f.write(chunk)
                        except OSError as e:
                            return Err(_filesystem_error(dest, e))
                        downloaded += len(chunk)
                        if progress:
                            progress(downloaded, total)

                return Ok(dest)

        except urllib.error.HTTPError as e:
            return Err(HttpStatusError(url=url, status=e.code, reason=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(NetworkError(url=url, reason=str(e.reason)))
        except TimeoutError:
            return Err(NetworkError(url=url, reason="download timed out"))
        except (ValueError, OSError) as e:
            return Err(NetworkError(url=url, reason=str(e)))


@dataclass(frozen=True, slots=True)
class _CannedDownload:
    content: bytes
    content_length: int


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_text("https://example.com/index", "<a href=...>")
        client.set_download("https://example.com/go.tar.gz", archive_bytes)
    """

    def __init__(self) -> None:
        self._text_responses: dict[str, str | HttpError] = {}
        self._download_responses: dict[str, _CannedDownload | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._text_responses[url] = response

    def set_download(
        self,
        url: str,
        response: bytes | HttpError,
        *,
        content_length: int | None = None,
    ) -> None:
        """Register download content; content_length=0 simulates a missing header."""
        if isinstance(response, bytes):
            length = len(response) if content_length is None else content_length
            self._download_responses[url] = _CannedDownload(response, length)
        else:
            self._download_responses[url] = response

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(("get_text", url))

        response = self._text_responses.get(url)
        if response is None:
            return Err(HttpStatusError(url=url, status=404, reason="Not Found (mock)"))
        if isinstance(response, str):
            return Ok(response)
        return Err(response)

    def download(
        self,
        url: str,
        dest: Path,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[Path, DownloadError]:
        self.calls.append(("download", url))

        response = self._download_responses.get(url)
        if response is None:
            return Err(HttpStatusError(url=url, status=404, reason="Not Found (mock)"))
        if not isinstance(response, _CannedDownload):
            return Err(response)

        dest.write_bytes(response.content)
        if progress:
            progress(len(response.content), response.content_length)
        return Ok(dest)
