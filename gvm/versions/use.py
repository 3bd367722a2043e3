"""PATH composition for ``gvm use``.

The new PATH puts the selected version's binary directory first and drops
every existing segment that mentions the gvm base directory, which removes
earlier ``gvm use`` entries for any language in one pass. The match is a
plain substring test, not a parse of earlier output.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from gvm.core.errors import GvmError, NotInstalled, UnrecognizedLanguage
from gvm.core.result import Err, Ok, Result
from gvm.platform.shell import Shell, render_path_assignment
from gvm.versions.store import VersionStore

__all__ = [
    "BIN_SUBDIRS",
    "bin_dir_for",
    "compose_path",
    "compose_use_command",
]

# Binary directory relative to the version root, keyed by language only
BIN_SUBDIRS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "go": ("go", "bin"),
        "python": (),
    }
)


def bin_dir_for(language: str, version_root: Path) -> Result[Path, UnrecognizedLanguage]:
    parts = BIN_SUBDIRS.get(language)
    if parts is None:
        return Err(UnrecognizedLanguage(language=language))
    return Ok(version_root.joinpath(*parts))


def compose_path(
    original: str,
    bin_dir: Path,
    base_dir: Path,
    separator: str = os.pathsep,
) -> list[str]:
    """New PATH segments: ``bin_dir`` first, then unmanaged originals.

    Args:
        original: Current PATH value
        bin_dir: Directory to put first
        base_dir: gvm base directory; segments containing it are dropped
        separator: PATH list separator

    Returns:
        Segments in priority order (empty segments removed)
    """
    managed = str(base_dir)
    segments = [str(bin_dir)]
    for part in original.split(separator):
        if part and managed not in part:
            segments.append(part)
    return segments


def compose_use_command(
    store: VersionStore,
    language: str,
    version: str,
    *,
    path: str,
    shell: Shell,
    separator: str = os.pathsep,
) -> Result[str, GvmError]:
    """Build the statement that switches PATH to ``language`` ``version``.

    Nothing in the current process environment is modified.

    Args:
        store: Version store (its base_dir identifies managed segments)
        language: Language key
        version: Installed version name
        path: Current PATH value
        shell: Dialect of the emitted statement
        separator: PATH list separator

    Returns:
        Ok(statement), Err(NotInstalled) or Err(UnrecognizedLanguage)
    """
    installed = store.get(language, version)
    if installed is None:
        return Err(NotInstalled(language=language, version=version))

    bin_dir = bin_dir_for(language, installed.path)
    if isinstance(bin_dir, Err):
        return bin_dir

    segments = compose_path(path, bin_dir.value, store.base_dir, separator)
    return Ok(render_path_assignment(shell, segments, separator))
