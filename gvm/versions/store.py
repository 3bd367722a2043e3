"""On-disk layout of installed versions.

    <base>/versions/<language>/<version>/...

A version counts as installed when its directory exists; there is no
manifest. Hidden entries (``.1.22.3.partial-xyz`` staging directories left
by an interrupted install, dotfiles) are never reported as versions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = ["InstalledVersion", "VersionStore"]


@dataclass(frozen=True, slots=True)
class InstalledVersion:
    language: str
    version: str
    path: Path


class VersionStore:
    """Filesystem view of ``<base>/versions``.

    The store is stateless: every call looks at the disk.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def versions_dir(self) -> Path:
        return self._base_dir / "versions"

    def language_dir(self, language: str) -> Path:
        return self.versions_dir / language

    def install_path(self, language: str, version: str) -> Path:
        return self.language_dir(language) / version

    def exists(self, language: str, version: str) -> bool:
        return self.install_path(language, version).exists()

    def list(self, language: str) -> list[str]:
        """Installed version names, sorted; empty when nothing is installed.

        Raises:
            OSError: The language directory exists but cannot be read.
        """
        lang_dir = self.language_dir(language)
        try:
            entries = list(lang_dir.iterdir())
        except (FileNotFoundError, NotADirectoryError):
            return []
        return sorted(p.name for p in entries if p.is_dir() and not p.name.startswith("."))

    def get(self, language: str, version: str) -> InstalledVersion | None:
        """The installed version, or None when its directory is missing."""
        path = self.install_path(language, version)
        if not path.exists():
            return None
        return InstalledVersion(language=language, version=version, path=path)
