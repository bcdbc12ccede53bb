from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..domain.models import PluginInfo
from ..download.downloader import FileDownloader


class UpdateRepository(ABC):
    @property
    @abstractmethod
    def id(self) -> str:
        """Repository id, unique per host configuration."""
        pass

    @property
    @abstractmethod
    def url(self) -> str:
        """Repository base url, always ending with '/'."""
        pass

    @abstractmethod
    def get_plugins(self) -> Dict[str, PluginInfo]:
        """Get all plugins of the repository keyed by plugin id."""
        pass

    @abstractmethod
    def get_plugin(self, plugin_id: str) -> Optional[PluginInfo]:
        """Get a single plugin, or None if the repository doesn't list it."""
        pass

    @abstractmethod
    def refresh(self) -> None:
        """Drop cached plugin metadata so the next access fetches it again."""
        pass

    @abstractmethod
    def get_file_downloader(self) -> FileDownloader:
        """Get a downloader for the artifacts of this repository."""
        pass

    def get_id(self) -> str:
        return self.id

    def get_url(self) -> str:
        return self.url
