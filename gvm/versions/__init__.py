"""Version management: sources, downloads, extraction, store, PATH.

Usage:
    from gvm.versions import InstallService, VersionStore

    store = VersionStore(settings.base_dir)
    service = InstallService(store=store, http=RealHttpClient(), platform=detect(),
                             console=RichConsole())
    result = service.install("go", "1.22.3")
"""

from .download import Downloader, DownloadResult
from .extract import ExtractResult, extract_tar, extract_zip
from .http import HttpClient, MockHttpClient, RealHttpClient
from .install import InstallOutcome, InstallService, extract_archive
from .search import list_available, searchable_languages
from .sources import ArchiveKind, ResolvedSource, resolve, supported_languages
from .store import InstalledVersion, VersionStore
from .use import bin_dir_for, compose_path, compose_use_command

__all__ = [
    # download
    "Downloader",
    "DownloadResult",
    # extract
    "ExtractResult",
    "extract_tar",
    "extract_zip",
    # http
    "HttpClient",
    "MockHttpClient",
    "RealHttpClient",
    # install
    "InstallOutcome",
    "InstallService",
    "extract_archive",
    # search
    "list_available",
    "searchable_languages",
    # sources
    "ArchiveKind",
    "ResolvedSource",
    "resolve",
    "supported_languages",
    # store
    "InstalledVersion",
    "VersionStore",
    # use
    "bin_dir_for",
    "compose_path",
    "compose_use_command",
]
