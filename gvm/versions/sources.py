"""Download sources: (language, OS) -> archive URL.

The table is fixed at import time. Each language fills its template with
its own arguments:

    go      version, GOOS, GOARCH   go1.22.3.linux-amd64.tar.gz
    python  version, version        3.12.4/python-3.12.4-embed-amd64.zip
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from gvm.core.errors import UnsupportedLanguage, UnsupportedOS
from gvm.core.result import Err, Ok, Result
from gvm.platform.detection import Arch, Platform

__all__ = [
    "ArchiveKind",
    "ResolvedSource",
    "DOWNLOAD_SOURCES",
    "supported_languages",
    "resolve",
]


class ArchiveKind(Enum):
    """How a downloaded body is unpacked, chosen from the URL suffix."""

    TAR_GZ = ".tar.gz"
    ZIP = ".zip"
    OPAQUE = ".tmp"

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def suffix(self) -> str:
        """Suffix for the temporary download file."""
        return self.value

    @classmethod
    def from_url(cls, url: str) -> ArchiveKind:
        path = url.split("?", 1)[0].split("#", 1)[0].lower()
        if path.endswith(".zip"):
            return cls.ZIP
        if path.endswith(".tar.gz"):
            return cls.TAR_GZ
        return cls.OPAQUE


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """Concrete download for one (language, version, platform, arch)."""

    language: str
    version: str
    url: str
    kind: ArchiveKind

    @property
    def filename(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[-1]


DOWNLOAD_SOURCES: Mapping[str, Mapping[Platform, str]] = MappingProxyType(
    {
        "go": MappingProxyType(
            {
                Platform.LINUX: "https://go.dev/dl/go{version}.{os}-{arch}.tar.gz",
                Platform.MACOS: "https://go.dev/dl/go{version}.{os}-{arch}.tar.gz",
                Platform.WINDOWS: "https://go.dev/dl/go{version}.{os}-{arch}.zip",
            }
        ),
        "python": MappingProxyType(
            {
                Platform.WINDOWS: (
                    "https://www.python.org/ftp/python/{version}/python-{version}-embed-amd64.zip"
                ),
            }
        ),
    }
)


def _format_go(
    template: str, version: str, platform: Platform, arch: Arch
) -> Result[str, UnsupportedOS]:
    goarch = arch.goarch
    if goarch is None:
        return Err(UnsupportedOS(language="go", os=platform.goos, arch=str(arch)))
    return Ok(template.format(version=version, os=platform.goos, arch=goarch))


def _format_python(
    template: str, version: str, platform: Platform, arch: Arch
) -> Result[str, UnsupportedOS]:
    # Only the version is interpolated (twice); the embed build is amd64-only
    return Ok(template.format(version=version))


_FORMATTERS: Mapping[str, Callable[[str, str, Platform, Arch], Result[str, UnsupportedOS]]] = (
    MappingProxyType({"go": _format_go, "python": _format_python})
)


def supported_languages() -> tuple[str, ...]:
    return tuple(sorted(DOWNLOAD_SOURCES))


def resolve(
    language: str,
    version: str,
    platform: Platform,
    arch: Arch,
) -> Result[ResolvedSource, UnsupportedLanguage | UnsupportedOS]:
    """Resolve the download URL and archive kind.

    Args:
        language: Language key (e.g. "go")
        version: Version string as typed by the user (e.g. "1.22.3")
        platform: Target operating system
        arch: Target CPU architecture

    Returns:
        Ok(ResolvedSource), Err(UnsupportedLanguage) when the language has no
        templates, Err(UnsupportedOS) when it has none for this platform
    """
    by_os = DOWNLOAD_SOURCES.get(language)
    if by_os is None:
        return Err(UnsupportedLanguage(language=language, supported=supported_languages()))

    template = by_os.get(platform)
    if template is None:
        return Err(UnsupportedOS(language=language, os=platform.goos))

    url_result = _FORMATTERS[language](template, version, platform, arch)
    if isinstance(url_result, Err):
        return url_result

    url = url_result.value
    return Ok(
        ResolvedSource(
            language=language,
            version=version,
            url=url,
            kind=ArchiveKind.from_url(url),
        )
    )
