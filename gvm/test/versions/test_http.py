"""Tests for versions/http.py - HTTP client abstraction."""

import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from gvm.core.errors import HttpStatusError, NetworkError
from gvm.core.result import Err, Ok
from gvm.versions.http import HttpClient, MockHttpClient, RealHttpClient

_PAYLOAD = b"x" * 150_000


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:
        if self.path == "/index":
            body = b'<a href="1.2.3/">1.2.3/</a>'
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        elif self.path == "/archive.tar.gz":
            self.send_response(200)
            self.send_header("Content-Length", str(len(_PAYLOAD)))
            self.end_headers()
            self.wfile.write(_PAYLOAD)
        else:
            self.send_error(404, "Not Found")

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def server() -> Iterator[str]:
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
    finally:
        httpd.shutdown()
        httpd.server_close()


class TestRealHttpClient:
    """RealHttpClient against a local HTTP server."""

    def test_is_http_client(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_get_text(self, server: str) -> None:
        result = RealHttpClient(timeout=5).get_text(f"{server}/index")
        assert result == Ok('<a href="1.2.3/">1.2.3/</a>')

    def test_get_text_status_error(self, server: str) -> None:
        result = RealHttpClient(timeout=5).get_text(f"{server}/missing")
        assert isinstance(result, Err)
        assert isinstance(result.error, HttpStatusError)
        assert result.error.status == 404

    def test_download_streams_with_progress(self, server: str, tmp_path: Path) -> None:
        dest = tmp_path / "archive.tar.gz"
        calls: list[tuple[int, int]] = []

        result = RealHttpClient(timeout=5).download(
            f"{server}/archive.tar.gz", dest, progress=lambda d, t: calls.append((d, t))
        )

        assert result == Ok(dest)
        assert dest.read_bytes() == _PAYLOAD
        assert calls[0] == (0, len(_PAYLOAD))
        assert calls[-1] == (len(_PAYLOAD), len(_PAYLOAD))

    def test_download_status_error(self, server: str, tmp_path: Path) -> None:
        result = RealHttpClient(timeout=5).download(f"{server}/nope.zip", tmp_path / "f")
        assert isinstance(result, Err)
        assert isinstance(result.error, HttpStatusError)
        assert result.error.status == 404

    def test_connection_refused(self, tmp_path: Path) -> None:
        # port 9 (discard) is closed on test machines
        result = RealHttpClient(timeout=2).get_text("http://127.0.0.1:9/")
        assert isinstance(result, Err)
        assert isinstance(result.error, NetworkError)

    def test_user_agent(self) -> None:
        assert RealHttpClient().user_agent.startswith("gvm/")


class TestMockHttpClient:
    """Tests for MockHttpClient."""

    def test_is_http_client(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_text_response(self) -> None:
        client = MockHttpClient()
        client.set_text("https://example.com", "hello")
        assert client.get_text("https://example.com") == Ok("hello")
        assert client.calls == [("get_text", "https://example.com")]

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().get_text("https://example.com/missing")
        assert isinstance(result, Err)
        assert isinstance(result.error, HttpStatusError)
        assert result.error.status == 404

    def test_error_response(self) -> None:
        client = MockHttpClient()
        error = NetworkError(url="https://example.com", reason="refused")
        client.set_text("https://example.com", error)
        assert client.get_text("https://example.com") == Err(error)

    def test_download_writes_and_reports(self, tmp_path: Path) -> None:
        client = MockHttpClient()
        client.set_download("https://example.com/a.zip", b"data", content_length=0)
        calls: list[tuple[int, int]] = []

        dest = tmp_path / "a.zip"
        result = client.download(
            "https://example.com/a.zip", dest, lambda d, t: calls.append((d, t))
        )

        assert result == Ok(dest)
        assert dest.read_bytes() == b"data"
        assert calls == [(4, 0)]
