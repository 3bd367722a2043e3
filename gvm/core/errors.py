"""Exit codes and error values.

Errors are frozen dataclasses carried inside ``Err``. Each one renders its
own ``message``; some add a ``hint`` shown underneath it by the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

__all__ = [
    "ErrorCode",
    "UnsupportedLanguage",
    "UnsupportedOS",
    "NetworkError",
    "HttpStatusError",
    "IllegalPath",
    "BadArchive",
    "FilesystemError",
    "NotInstalled",
    "UnrecognizedLanguage",
    "NoVersionsFound",
    "FetchError",
    "BadStatus",
    "SearchUnsupported",
    "ConfigError",
    "DownloadError",
    "ExtractError",
    "SearchError",
    "GvmError",
]


class ErrorCode(IntEnum):
    """Process exit codes.

    Every command failure exits with ERROR; USAGE matches the code click
    uses for bad arguments.
    """

    OK = 0
    ERROR = 1
    USAGE = 2

    def __str__(self) -> str:
        return self.name.lower()


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnsupportedLanguage:
    language: str
    supported: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"automatic install of '{self.language}' is not supported"

    @property
    def hint(self) -> str | None:
        if self.supported:
            return f"supported languages: {', '.join(self.supported)}"
        return None


@dataclass(frozen=True, slots=True)
class UnsupportedOS:
    language: str
    os: str
    arch: str | None = None

    @property
    def message(self) -> str:
        target = f"{self.os}/{self.arch}" if self.arch else self.os
        return f"'{target}' is not supported for automatic {self.language} installs"

    @property
    def hint(self) -> str | None:
        return None


# -----------------------------------------------------------------------------
# Download
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NetworkError:
    """Transport failure: DNS, refused connection, timeout, TLS."""

    url: str
    reason: str

    @property
    def message(self) -> str:
        return f"download failed: {self.reason} ({self.url})"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class HttpStatusError:
    """The server answered with something other than 200."""

    url: str
    status: int
    reason: str = ""

    @property
    def message(self) -> str:
        reason = f" {self.reason}" if self.reason else ""
        return f"download failed: status code {self.status}{reason} ({self.url})"

    @property
    def hint(self) -> str | None:
        if self.status == 404:
            return "check that the version exists for this platform (try: gvm search)"
        return None


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IllegalPath:
    """An archive entry would land outside the destination directory."""

    entry: str
    dest: Path

    @property
    def message(self) -> str:
        return f"illegal file path in archive: {self.entry!r} escapes {self.dest}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class BadArchive:
    archive: str
    reason: str

    @property
    def message(self) -> str:
        return f"cannot read archive {self.archive}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class FilesystemError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"{self.reason}: {self.path}"

    @property
    def hint(self) -> str | None:
        return None


# -----------------------------------------------------------------------------
# Use
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NotInstalled:
    language: str
    version: str

    @property
    def message(self) -> str:
        return f"{self.language} {self.version} is not installed"

    @property
    def hint(self) -> str | None:
        return f"Run: gvm install {self.language} {self.version}"


@dataclass(frozen=True, slots=True)
class UnrecognizedLanguage:
    language: str

    @property
    def message(self) -> str:
        return f"language '{self.language}' is not recognized by 'use'"

    @property
    def hint(self) -> str | None:
        return None


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NoVersionsFound:
    language: str
    url: str

    @property
    def message(self) -> str:
        return f"no {self.language} versions found at {self.url}"

    @property
    def hint(self) -> str | None:
        return "the index page format may have changed"


@dataclass(frozen=True, slots=True)
class FetchError:
    url: str
    reason: str

    @property
    def message(self) -> str:
        return f"failed to fetch {self.url}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class BadStatus:
    url: str
    status: int
    reason: str = ""

    @property
    def message(self) -> str:
        reason = f" {self.reason}" if self.reason else ""
        return f"unexpected status {self.status}{reason} from {self.url}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class SearchUnsupported:
    language: str
    supported: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"online version search for '{self.language}' is not supported"

    @property
    def hint(self) -> str | None:
        if self.supported:
            return f"searchable languages: {', '.join(self.supported)}"
        return None


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ConfigError:
    variable: str
    reason: str

    @property
    def message(self) -> str:
        return f"invalid {self.variable}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


DownloadError = NetworkError | HttpStatusError | FilesystemError
ExtractError = IllegalPath | BadArchive | FilesystemError
SearchError = NoVersionsFound | FetchError | BadStatus | SearchUnsupported

GvmError = (
    UnsupportedLanguage
    | UnsupportedOS
    | NetworkError
    | HttpStatusError
    | IllegalPath
    | BadArchive
    | FilesystemError
    | NotInstalled
    | UnrecognizedLanguage
    | NoVersionsFound
    | FetchError
    | BadStatus
    | SearchUnsupported
    | ConfigError
)
