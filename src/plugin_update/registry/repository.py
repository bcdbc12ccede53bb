import json
import logging
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urljoin, urlsplit
from urllib.request import url2pathname

import httpx
from pydantic import ValidationError

from ..domain.models import PluginInfo, PluginRelease
from ..download.downloader import FileDownloader, SimpleFileDownloader
from .cache import CatalogCache
from .client import UpdateRepository

logger = logging.getLogger(__name__)

PLUGINS_JSON = "plugins.json"


class DefaultUpdateRepository(UpdateRepository):
    """
    a repository backed by a plugins.json document under its base url.

    the catalog is fetched lazily on first access and kept until refresh().
    fetch or parse failures are logged and yield an empty catalog, so an
    empty mapping can mean either "no plugins" or "repository unreachable".
    """

    def __init__(self, id: str, url: str, client: Optional[httpx.Client] = None):
        self._id = id
        if not url.endswith("/"):
            url += "/"
        self._url = url
        self.client = client or httpx.Client(follow_redirects=True)
        self._cache = CatalogCache()

    @property
    def id(self) -> str:
        return self._id

    @property
    def url(self) -> str:
        return self._url

    def get_plugins(self) -> Dict[str, PluginInfo]:
        return self._cache.get(self._load_plugins)

    def get_plugin(self, plugin_id: str) -> Optional[PluginInfo]:
        return self.get_plugins().get(plugin_id)

    def refresh(self) -> None:
        """causes plugins.json to be read again on next access."""
        self._cache.invalidate()

    def get_file_downloader(self) -> FileDownloader:
        return SimpleFileDownloader(client=self.client)

    def _load_plugins(self) -> Dict[str, PluginInfo]:
        try:
            plugins_url = urljoin(self._url, PLUGINS_JSON)
            logger.debug(f"Read plugins of '{self._id}' repository from '{plugins_url}'")
            items = self._read_catalog(plugins_url)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as e:
            logger.error(f"Failed to read plugins of '{self._id}' repository: {e}", exc_info=True)
            return {}

        plugins: Dict[str, PluginInfo] = {}
        for index, item in enumerate(items):
            plugin = self._parse_plugin(index, item)
            if plugin is None:
                continue
            for release in plugin.releases:
                try:
                    release.url = urljoin(self._url, release.url)
                except ValueError as e:
                    logger.warning(
                        f"Failed to build absolute url for release {release.version} of plugin "
                        f"{plugin.id}, keeping '{release.url}' (base {self._url}): {e}"
                    )
            # duplicate ids: the last entry in the document wins
            plugins[plugin.id] = plugin

        logger.debug(f"Found {len(plugins)} plugins in repository '{self._id}'")
        return plugins

    def _parse_plugin(self, index: int, item) -> Optional[PluginInfo]:
        """validate one catalog entry; invalid releases are dropped, an invalid plugin is skipped."""
        if not isinstance(item, dict):
            logger.warning(f"Skipping entry {index} of '{self._id}' repository: not an object")
            return None

        raw_releases = item.get("releases") or []
        try:
            plugin = PluginInfo.model_validate({**item, "releases": []})
            if not isinstance(raw_releases, list):
                raise ValueError(f"releases must be an array, got {type(raw_releases).__name__}")
        except ValueError as e:
            logger.warning(f"Skipping entry {index} of '{self._id}' repository: {e}")
            return None

        for raw in raw_releases:
            try:
                plugin.releases.append(PluginRelease.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping a release of plugin {plugin.id} in '{self._id}' repository: {e}")
        return plugin

    def _read_catalog(self, plugins_url: str):
        parts = urlsplit(plugins_url)
        if parts.scheme == "file":
            path = Path(url2pathname(parts.path))
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)

        response = self.client.get(plugins_url)
        response.raise_for_status()
        return response.json()

    def __repr__(self) -> str:
        return f"DefaultUpdateRepository(id={self._id!r}, url={self._url!r})"
