"""Online listing of installable versions.

Best effort: each language scrapes or queries its download index, keeps
what parses as a version, and returns the list newest first.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from packaging.version import InvalidVersion, Version

from gvm.core.errors import (
    BadStatus,
    FetchError,
    HttpStatusError,
    NetworkError,
    NoVersionsFound,
    SearchError,
    SearchUnsupported,
)
from gvm.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from gvm.versions.http import HttpClient

__all__ = [
    "PYTHON_INDEX_URL",
    "GO_INDEX_URL",
    "sort_versions",
    "list_python_versions",
    "list_go_versions",
    "searchable_languages",
    "list_available",
]

PYTHON_INDEX_URL = "https://www.python.org/ftp/python/"
GO_INDEX_URL = "https://go.dev/dl/?mode=json&include=all"

_PYTHON_HREF = re.compile(r'href="([0-9]+\.[0-9]+\.[0-9]+)/"')


def _fetch_error(error: NetworkError | HttpStatusError) -> FetchError | BadStatus:
    if isinstance(error, HttpStatusError):
        return BadStatus(url=error.url, status=error.status, reason=error.reason)
    return FetchError(url=error.url, reason=error.reason)


def sort_versions(candidates: Iterable[str]) -> list[str]:
    """Parse, drop unparseable and duplicate entries, sort newest first.

    The original spelling of each version is kept in the output.
    """
    parsed: dict[Version, str] = {}
    for raw in candidates:
        try:
            v = Version(raw)
        except InvalidVersion:
            continue
        parsed.setdefault(v, raw)
    return [parsed[v] for v in sorted(parsed, reverse=True)]


def list_python_versions(http: HttpClient) -> Result[list[str], SearchError]:
    """Versions linked from the python.org FTP index (``href="3.12.4/"``)."""
    page = http.get_text(PYTHON_INDEX_URL).map_err(_fetch_error)
    if isinstance(page, Err):
        return page

    versions = sort_versions(_PYTHON_HREF.findall(page.value))
    if not versions:
        return Err(NoVersionsFound(language="python", url=PYTHON_INDEX_URL))
    return Ok(versions)


def list_go_versions(http: HttpClient) -> Result[list[str], SearchError]:
    """Versions from the go.dev JSON release index (``"version": "go1.22.3"``)."""
    page = http.get_text(GO_INDEX_URL).map_err(_fetch_error)
    if isinstance(page, Err):
        return page

    try:
        data: object = json.loads(page.value)
    except json.JSONDecodeError as e:
        return Err(FetchError(url=GO_INDEX_URL, reason=f"JSON parse error: {e}"))

    candidates: list[str] = []
    if isinstance(data, list):
        for release in cast(list[Any], data):
            if not isinstance(release, dict):
                continue
            tag = cast(dict[str, Any], release).get("version")
            if isinstance(tag, str) and tag.startswith("go"):
                candidates.append(tag.removeprefix("go"))

    versions = sort_versions(candidates)
    if not versions:
        return Err(NoVersionsFound(language="go", url=GO_INDEX_URL))
    return Ok(versions)


_LISTERS: Mapping[str, Callable[[HttpClient], Result[list[str], SearchError]]] = (
    MappingProxyType({"go": list_go_versions, "python": list_python_versions})
)


def searchable_languages() -> tuple[str, ...]:
    return tuple(sorted(_LISTERS))


def list_available(http: HttpClient, language: str) -> Result[list[str], SearchError]:
    """Installable versions of ``language``, newest first.

    Returns:
        Ok(versions), or Err(SearchUnsupported | FetchError | BadStatus |
        NoVersionsFound)
    """
    lister = _LISTERS.get(language)
    if lister is None:
        return Err(SearchUnsupported(language=language, supported=searchable_languages()))
    return lister(http)
