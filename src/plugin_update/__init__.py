"""plugin repository catalogs and artifact downloads."""
from .domain.errors import (
    PluginUpdateError,
    DownloadError,
    AuthRequiredError,
    ConnectError,
    RepositoryConfigError,
)
from .domain.models import PluginInfo, PluginRelease, RepositorySpec
from .download.downloader import FileDownloader, SimpleFileDownloader
from .registry.client import UpdateRepository
from .registry.repository import DefaultUpdateRepository

__all__ = [
    "PluginUpdateError",
    "DownloadError",
    "AuthRequiredError",
    "ConnectError",
    "RepositoryConfigError",
    "PluginInfo",
    "PluginRelease",
    "RepositorySpec",
    "FileDownloader",
    "SimpleFileDownloader",
    "UpdateRepository",
    "DefaultUpdateRepository",
]
