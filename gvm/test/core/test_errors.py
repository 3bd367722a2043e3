"""Tests for gvm.core.errors module."""

from pathlib import Path

import pytest

from gvm.core.errors import (
    BadStatus,
    ErrorCode,
    HttpStatusError,
    IllegalPath,
    NetworkError,
    NotInstalled,
    SearchUnsupported,
    UnsupportedLanguage,
    UnsupportedOS,
)


class TestErrorCode:
    def test_values(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.ERROR == 1
        assert ErrorCode.USAGE == 2

    def test_str(self) -> None:
        assert str(ErrorCode.ERROR) == "error"


class TestMessages:
    """Each error renders a readable message and optional hint."""

    def test_unsupported_language(self) -> None:
        error = UnsupportedLanguage(language="rust", supported=("go", "python"))
        assert error.message == "automatic install of 'rust' is not supported"
        assert error.hint == "supported languages: go, python"

    def test_unsupported_language_without_list(self) -> None:
        assert UnsupportedLanguage(language="rust").hint is None

    def test_unsupported_os(self) -> None:
        assert "linux" in UnsupportedOS(language="python", os="linux").message
        assert "linux/unknown" in UnsupportedOS(language="go", os="linux", arch="unknown").message

    def test_network_error(self) -> None:
        error = NetworkError(url="https://x/y", reason="timed out")
        assert "timed out" in error.message
        assert "https://x/y" in error.message

    def test_http_status_hint_on_404(self) -> None:
        assert HttpStatusError(url="u", status=404).hint is not None
        assert HttpStatusError(url="u", status=500).hint is None
        assert "status code 404" in HttpStatusError(url="u", status=404).message

    def test_illegal_path(self) -> None:
        error = IllegalPath(entry="../../evil", dest=Path("/tmp/dest"))
        assert "illegal file path" in error.message
        assert "../../evil" in error.message

    def test_not_installed(self) -> None:
        error = NotInstalled(language="go", version="1.22.3")
        assert error.message == "go 1.22.3 is not installed"
        assert error.hint == "Run: gvm install go 1.22.3"

    def test_bad_status(self) -> None:
        error = BadStatus(url="https://x", status=503, reason="Service Unavailable")
        assert error.message == "unexpected status 503 Service Unavailable from https://x"

    def test_search_unsupported(self) -> None:
        error = SearchUnsupported(language="rust", supported=("go", "python"))
        assert "rust" in error.message
        assert error.hint == "searchable languages: go, python"

    def test_errors_are_frozen(self) -> None:
        error = NotInstalled(language="go", version="1.22.3")
        with pytest.raises(AttributeError):
            error.version = "1.0"  # type: ignore[misc]
