"""Archive extraction for tar+gzip and zip downloads.

Both extractors share one contract:
- ``dest`` (and parents) is created if missing
- directory entries become directories with the recorded mode
- regular files are written with the recorded permission bits
- every entry name must resolve inside ``dest``; a single ``..`` escape or
  absolute name fails the whole extraction with IllegalPath
- symlinks, hard links, devices and FIFOs are skipped and counted

Extraction is not transactional. A failure part way leaves whatever was
already written; the installer extracts into a staging directory for that
reason.
"""

from __future__ import annotations

import os
import shutil
import stat
import tarfile
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from gvm.core.errors import BadArchive, ExtractError, FilesystemError, IllegalPath
from gvm.core.result import Err, Ok, Result

__all__ = ["ExtractResult", "extract_tar", "extract_zip"]

_DEFAULT_DIR_MODE = 0o755
_DEFAULT_FILE_MODE = 0o644


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """Summary of an extraction.

    Attributes:
        dest: Directory the archive was extracted into
        files: Regular files written
        directories: Directory entries created
        skipped: Special entries ignored (symlinks, devices, ...)
    """

    dest: Path
    files: int
    directories: int
    skipped: int = 0


class _Unsafe(Exception):
    """Internal: an entry escapes the destination."""

    def __init__(self, entry: str) -> None:
        super().__init__(entry)
        self.entry = entry


class _Target:
    """Maps entry names to paths under a destination root."""

    def __init__(self, dest: Path) -> None:
        self.root = os.path.normpath(os.path.abspath(dest))
        self._prefix = self.root if self.root.endswith(os.sep) else self.root + os.sep

    def path_for(self, name: str, *, is_dir: bool) -> str:
        """Cleaned absolute path for ``name``; raises _Unsafe outside the root."""
        target = os.path.normpath(os.path.join(self.root, name.replace("\\", "/")))
        if target == self.root and is_dir:
            return target
        if not target.startswith(self._prefix):
            raise _Unsafe(name)
        return target


def _make_dir(path: str, mode: int) -> None:
    os.makedirs(path, exist_ok=True)
    # owner rwx is kept so later entries can still be written below it
    os.chmod(path, (mode or _DEFAULT_DIR_MODE) | 0o700)


def _write_file(path: str, src: IO[bytes], mode: int) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.chmod(path, mode or _DEFAULT_FILE_MODE)


def _filesystem_error(e: OSError, dest: Path) -> FilesystemError:
    path = Path(e.filename) if e.filename else dest
    return FilesystemError(path=path, reason=e.strerror or str(e))


def extract_tar(stream: IO[bytes], dest: Path) -> Result[ExtractResult, ExtractError]:
    """Extract a gzip-compressed tar stream into ``dest``.

    The stream is read sequentially, so it can be a file or a socket-like
    object; it is not closed.

    Args:
        stream: Binary stream positioned at the start of the .tar.gz data
        dest: Destination directory

    Returns:
        Ok(ExtractResult), or Err(IllegalPath | BadArchive | FilesystemError)
    """
    files = directories = skipped = 0
    try:
        dest.mkdir(parents=True, exist_ok=True)
        target = _Target(dest)

        with tarfile.open(fileobj=stream, mode="r|gz") as tar:
            for member in tar:
                path = target.path_for(member.name, is_dir=member.isdir())

                if member.isdir():
                    _make_dir(path, member.mode & 0o777)
                    directories += 1
                elif member.isreg():
                    src = tar.extractfile(member)
                    if src is None:
                        skipped += 1
                        continue
                    with src:
                        _write_file(path, src, member.mode & 0o777)
                    files += 1
                else:
                    skipped += 1

    except _Unsafe as e:
        return Err(IllegalPath(entry=e.entry, dest=dest))
    except (tarfile.TarError, EOFError, zlib.error) as e:
        return Err(BadArchive(archive="tar.gz stream", reason=str(e) or type(e).__name__))
    except OSError as e:
        return Err(_filesystem_error(e, dest))

    return Ok(ExtractResult(dest=dest, files=files, directories=directories, skipped=skipped))


def _zip_mode(info: zipfile.ZipInfo) -> int:
    """Unix mode from the high 16 bits of external_attr (0 when absent)."""
    return (info.external_attr >> 16) & 0xFFFF


def extract_zip(source: Path, dest: Path) -> Result[ExtractResult, ExtractError]:
    """Extract a zip file into ``dest``.

    Args:
        source: Path to the .zip file
        dest: Destination directory

    Returns:
        Ok(ExtractResult), or Err(IllegalPath | BadArchive | FilesystemError)
    """
    files = directories = skipped = 0
    try:
        dest.mkdir(parents=True, exist_ok=True)
        target = _Target(dest)

        with zipfile.ZipFile(source, "r") as zf:
            for info in zf.infolist():
                path = target.path_for(info.filename, is_dir=info.is_dir())
                unix_mode = _zip_mode(info)

                if info.is_dir():
                    _make_dir(path, unix_mode & 0o777)
                    directories += 1
                elif stat.S_IFMT(unix_mode) not in (0, stat.S_IFREG):
                    # symlink or other special entry recorded by a Unix zipper
                    skipped += 1
                else:
                    with zf.open(info) as src:
                        _write_file(path, src, unix_mode & 0o777)
                    files += 1

    except _Unsafe as e:
        return Err(IllegalPath(entry=e.entry, dest=dest))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, EOFError) as e:
        return Err(BadArchive(archive=str(source), reason=str(e) or type(e).__name__))
    except OSError as e:
        return Err(_filesystem_error(e, dest))

    return Ok(ExtractResult(dest=dest, files=files, directories=directories, skipped=skipped))
