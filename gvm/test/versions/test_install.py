"""Tests for versions/install.py - the install pipeline."""

import stat
import sys
from contextlib import AbstractContextManager
from pathlib import Path

import pytest

from gvm.core.errors import (
    BadArchive,
    HttpStatusError,
    IllegalPath,
    NetworkError,
    UnsupportedLanguage,
    UnsupportedOS,
)
from gvm.core.result import Err, Ok
from gvm.output.console import MockConsole
from gvm.output.progress import NullProgress
from gvm.platform.detection import Arch, Platform, PlatformInfo
from gvm.test._archives import tar_gz_bytes, zip_bytes
from gvm.versions.http import MockHttpClient
from gvm.versions.install import InstallService, extract_archive
from gvm.versions.sources import ArchiveKind, ResolvedSource
from gvm.versions.store import VersionStore

LINUX = PlatformInfo(Platform.LINUX, Arch.X64)
WINDOWS = PlatformInfo(Platform.WINDOWS, Arch.X64)
GO_URL = "https://go.dev/dl/go1.22.3.linux-amd64.tar.gz"
GO_TREE = {"go/bin/go": b"#!/bin/sh\n", "go/VERSION": b"go1.22.3\n"}


def _service(
    tmp_path: Path,
    http: MockHttpClient,
    platform: PlatformInfo = LINUX,
    console: MockConsole | None = None,
) -> InstallService:
    return InstallService(
        store=VersionStore(tmp_path / "base"),
        http=http,
        platform=platform,
        console=console or MockConsole(),
    )


def _leftovers(tmp_path: Path, language: str) -> list[str]:
    lang_dir = tmp_path / "base" / "versions" / language
    if not lang_dir.exists():
        return []
    return [p.name for p in lang_dir.iterdir()]


class TestInstall:
    """Tests for InstallService.install()."""

    def test_installs_go(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(GO_URL, tar_gz_bytes(GO_TREE))
        console = MockConsole()

        result = _service(tmp_path, http, console=console).install("go", "1.22.3")

        assert isinstance(result, Ok)
        outcome = result.value
        root = tmp_path / "base" / "versions" / "go" / "1.22.3"
        assert outcome.already_installed is False
        assert outcome.installed.path == root
        assert outcome.source is not None
        assert outcome.source.url == GO_URL
        assert (root / "go" / "bin" / "go").read_bytes() == b"#!/bin/sh\n"
        assert console.find(f"Downloading go 1.22.3 from {GO_URL}")
        assert console.find("Download complete. Extracting...")

    def test_second_install_skips_network(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(GO_URL, tar_gz_bytes(GO_TREE))
        service = _service(tmp_path, http)

        service.install("go", "1.22.3")
        calls_after_first = len(http.calls)
        result = service.install("go", "1.22.3")

        assert isinstance(result, Ok)
        assert result.value.already_installed is True
        assert result.value.source is None
        assert len(http.calls) == calls_after_first

    def test_existing_directory_is_trusted(self, tmp_path: Path) -> None:
        """Any existing version directory counts as installed."""
        (tmp_path / "base" / "versions" / "go" / "1.22.3").mkdir(parents=True)
        http = MockHttpClient()

        result = _service(tmp_path, http).install("go", "1.22.3")

        assert isinstance(result, Ok)
        assert result.value.already_installed is True
        assert http.calls == []

    def test_windows_zip(self, tmp_path: Path) -> None:
        url = "https://www.python.org/ftp/python/3.12.4/python-3.12.4-embed-amd64.zip"
        http = MockHttpClient()
        http.set_download(url, zip_bytes({"python.exe": b"MZ", "python312.zip": b"PK"}))

        result = _service(tmp_path, http, platform=WINDOWS).install("python", "3.12.4")

        assert isinstance(result, Ok)
        root = result.value.installed.path
        assert (root / "python.exe").read_bytes() == b"MZ"

    def test_unsupported_language_writes_nothing(self, tmp_path: Path) -> None:
        http = MockHttpClient()

        result = _service(tmp_path, http).install("rust", "1.0")

        assert isinstance(result, Err)
        assert isinstance(result.error, UnsupportedLanguage)
        assert http.calls == []
        assert not (tmp_path / "base" / "versions").exists()

    def test_unsupported_os(self, tmp_path: Path) -> None:
        result = _service(tmp_path, MockHttpClient()).install("python", "3.12.4")
        assert isinstance(result, Err)
        assert isinstance(result.error, UnsupportedOS)

    def test_http_404_leaves_nothing(self, tmp_path: Path) -> None:
        result = _service(tmp_path, MockHttpClient()).install("go", "9.9.9")

        assert isinstance(result, Err)
        assert isinstance(result.error, HttpStatusError)
        assert result.error.status == 404
        assert _leftovers(tmp_path, "go") == []

    def test_network_error(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(GO_URL, NetworkError(url=GO_URL, reason="connection reset"))

        result = _service(tmp_path, http).install("go", "1.22.3")

        assert isinstance(result, Err)
        assert isinstance(result.error, NetworkError)
        assert _leftovers(tmp_path, "go") == []

    def test_illegal_path_leaves_no_version_dir(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(GO_URL, tar_gz_bytes({"go/ok": b"ok", "../../../evil": b"x"}))

        result = _service(tmp_path, http).install("go", "1.22.3")

        assert isinstance(result, Err)
        assert isinstance(result.error, IllegalPath)
        assert _leftovers(tmp_path, "go") == []
        assert not (tmp_path / "evil").exists()

    def test_corrupt_archive(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        http.set_download(GO_URL, b"<html>oops</html>")

        result = _service(tmp_path, http).install("go", "1.22.3")

        assert isinstance(result, Err)
        assert isinstance(result.error, BadArchive)
        assert _leftovers(tmp_path, "go") == []

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_version_root_mode(self, tmp_path: Path) -> None:
        """The installed version directory is 0o755, not the staging 0o700."""
        http = MockHttpClient()
        http.set_download(GO_URL, tar_gz_bytes(GO_TREE))

        result = _service(tmp_path, http).install("go", "1.22.3")

        assert isinstance(result, Ok)
        mode = stat.S_IMODE(result.value.installed.path.stat().st_mode)
        assert mode == 0o755

    def test_progress_factory(self, tmp_path: Path) -> None:
        http = MockHttpClient()
        data = tar_gz_bytes(GO_TREE)
        http.set_download(GO_URL, data)
        seen: list[ResolvedSource] = []
        progress = NullProgress()

        def factory(source: ResolvedSource) -> AbstractContextManager[NullProgress]:
            seen.append(source)
            return progress

        service = InstallService(
            store=VersionStore(tmp_path / "base"),
            http=http,
            platform=LINUX,
            console=MockConsole(),
            progress=factory,
        )
        service.install("go", "1.22.3")

        assert [s.url for s in seen] == [GO_URL]
        assert progress.calls == [(len(data), len(data))]


class TestExtractArchive:
    """Tests for extract_archive() dispatch."""

    def test_opaque_uses_tar_reader(self, tmp_path: Path) -> None:
        archive = tmp_path / "body.tmp"
        archive.write_bytes(tar_gz_bytes({"a.txt": b"a"}))

        result = extract_archive(ArchiveKind.OPAQUE, archive, tmp_path / "out")

        assert isinstance(result, Ok)
        assert (tmp_path / "out" / "a.txt").read_bytes() == b"a"

    def test_opaque_non_gzip_rejected(self, tmp_path: Path) -> None:
        archive = tmp_path / "setup.exe"
        archive.write_bytes(b"MZ\x90\x00")

        result = extract_archive(ArchiveKind.OPAQUE, archive, tmp_path / "out")

        assert isinstance(result, Err)
        assert isinstance(result.error, BadArchive)

    def test_zip(self, tmp_path: Path) -> None:
        archive = tmp_path / "a.zip"
        archive.write_bytes(zip_bytes({"x": b"1"}))
        result = extract_archive(ArchiveKind.ZIP, archive, tmp_path / "out")
        assert isinstance(result, Ok)
        assert result.value.files == 1
