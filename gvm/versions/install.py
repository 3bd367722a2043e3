"""Install pipeline: resolve -> download -> extract -> move into place.

The version directory only appears once extraction has fully succeeded:
archives are unpacked into a hidden sibling staging directory that is
renamed to ``<language>/<version>`` at the end and deleted on any failure.
An existing version directory therefore means a complete install.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gvm.core.errors import FilesystemError, GvmError
from gvm.core.result import Err, Ok, Result
from gvm.output.console import ConsoleProtocol
from gvm.versions.download import Downloader
from gvm.versions.extract import ExtractResult, extract_tar, extract_zip
from gvm.versions.sources import ArchiveKind, ResolvedSource, resolve
from gvm.versions.store import InstalledVersion, VersionStore

if TYPE_CHECKING:
    from gvm.core.errors import ExtractError
    from gvm.output.progress import ProgressReporter
    from gvm.platform.detection import PlatformInfo
    from gvm.versions.http import HttpClient

__all__ = ["InstallOutcome", "InstallService", "extract_archive"]

ProgressFactory = Callable[[ResolvedSource], AbstractContextManager["ProgressReporter | None"]]


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """Result of ``InstallService.install``.

    Attributes:
        installed: The version on disk
        already_installed: True when nothing was downloaded
        source: Where it was downloaded from (None when already installed)
    """

    installed: InstalledVersion
    already_installed: bool
    source: ResolvedSource | None = None


def extract_archive(
    kind: ArchiveKind, archive: Path, dest: Path
) -> Result[ExtractResult, ExtractError]:
    """Dispatch to the extractor for ``kind``.

    OPAQUE bodies go through the tar+gzip reader, which rejects anything
    that is not gzip data with BadArchive.
    """
    if kind == ArchiveKind.ZIP:
        return extract_zip(archive, dest)
    try:
        stream = open(archive, "rb")
    except OSError as e:
        return Err(FilesystemError(path=archive, reason=e.strerror or str(e)))
    with stream:
        return extract_tar(stream, dest)


def _no_progress(source: ResolvedSource) -> AbstractContextManager[ProgressReporter | None]:
    return nullcontext(None)


class InstallService:
    """Installs language versions into a VersionStore.

    Usage:
        service = InstallService(store=store, http=RealHttpClient(), platform=detect(),
                                 console=RichConsole())
        result = service.install("go", "1.22.3")
    """

    def __init__(
        self,
        *,
        store: VersionStore,
        http: HttpClient,
        platform: PlatformInfo,
        console: ConsoleProtocol,
        progress: ProgressFactory = _no_progress,
    ) -> None:
        self._store = store
        self._http = http
        self._platform = platform
        self._console = console
        self._progress = progress

    def install(self, language: str, version: str) -> Result[InstallOutcome, GvmError]:
        """Install ``language`` ``version`` unless its directory already exists.

        No step is retried; a failure aborts the install and leaves no
        version directory behind.
        """
        existing = self._store.get(language, version)
        if existing is not None:
            return Ok(InstallOutcome(installed=existing, already_installed=True))

        resolved = resolve(language, version, self._platform.platform, self._platform.arch)
        if isinstance(resolved, Err):
            return resolved
        source = resolved.value

        self._console.info(f"Downloading {language} {version} from {source.url}")

        downloader = Downloader(self._http)
        with self._progress(source) as progress:
            with downloader.temporary(
                source.url, suffix=source.kind.suffix, progress=progress
            ) as download:
                if isinstance(download, Err):
                    return download
                self._console.debug(f"downloaded {download.value.size} bytes")
                self._console.info("Download complete. Extracting...")

                placed = self._extract_into_place(source, download.value.path)

        if isinstance(placed, Err):
            return placed

        return Ok(
            InstallOutcome(
                installed=placed.value,
                already_installed=False,
                source=source,
            )
        )

    def _extract_into_place(
        self, source: ResolvedSource, archive: Path
    ) -> Result[InstalledVersion, GvmError]:
        final = self._store.install_path(source.language, source.version)
        lang_dir = final.parent

        try:
            lang_dir.mkdir(parents=True, exist_ok=True)
            staging = Path(
                tempfile.mkdtemp(prefix=f".{source.version}.partial-", dir=str(lang_dir))
            )
        except OSError as e:
            return Err(FilesystemError(path=lang_dir, reason=e.strerror or str(e)))

        try:
            # mkdtemp uses 0o700; the version root is a plain 0o755 directory
            try:
                os.chmod(staging, 0o755)
            except OSError as e:
                return Err(FilesystemError(path=staging, reason=e.strerror or str(e)))

            extracted = extract_archive(source.kind, archive, staging)
            if isinstance(extracted, Err):
                return extracted

            result = extracted.value
            self._console.debug(
                f"extracted {result.files} files, {result.directories} directories"
            )
            if result.skipped:
                self._console.warning(
                    f"skipped {result.skipped} link or special entries (not supported)"
                )

            try:
                os.replace(staging, final)
            except OSError as e:
                return Err(FilesystemError(path=final, reason=e.strerror or str(e)))
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        return Ok(
            InstalledVersion(language=source.language, version=source.version, path=final)
        )
