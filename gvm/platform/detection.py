"""Host operating system and CPU architecture detection.

Detection is cached; tests that fake the host should build ``PlatformInfo``
directly instead of patching these functions.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "PlatformInfo",
    "detect",
    "detect_arch",
    "detect_platform",
    "is_windows",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def goos(self) -> str:
        """Name used by Go-style download URLs (``linux``, ``darwin``, ``windows``)."""
        return {
            Platform.LINUX: "linux",
            Platform.MACOS: "darwin",
            Platform.WINDOWS: "windows",
            Platform.UNKNOWN: "unknown",
        }[self]


class Arch(Enum):
    """CPU architecture."""

    X64 = auto()
    ARM64 = auto()
    X86 = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def goarch(self) -> str | None:
        """Name used by Go-style download URLs, None when there is no build."""
        return {
            Arch.X64: "amd64",
            Arch.ARM64: "arm64",
            Arch.X86: "386",
            Arch.UNKNOWN: None,
        }[self]


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """Detected host. Use ``detect()`` to get an instance."""

    platform: Platform
    arch: Arch

    @property
    def is_windows(self) -> bool:
        return self.platform == Platform.WINDOWS

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: platform.system() may query WMI on Windows, sys.platform never does.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the current CPU architecture (cached)."""
    if detect_platform() == Platform.WINDOWS:
        machine = (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or ""
        ).lower()
    else:
        machine = _platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        return Arch.X64
    if machine in ("aarch64", "arm64"):
        return Arch.ARM64
    if machine in ("i386", "i686", "x86"):
        return Arch.X86
    return Arch.UNKNOWN


@lru_cache(maxsize=1)
def detect() -> PlatformInfo:
    """Detect platform and architecture (cached)."""
    return PlatformInfo(platform=detect_platform(), arch=detect_arch())


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS
