import threading
from typing import Callable, Dict, Optional

from ..domain.models import PluginInfo


class CatalogCache:
    """in-memory catalog of one repository; empty until first access."""

    def __init__(self):
        self._plugins: Optional[Dict[str, PluginInfo]] = None
        self._lock = threading.Lock()

    @property
    def is_populated(self) -> bool:
        return self._plugins is not None

    def get(self, loader: Callable[[], Dict[str, PluginInfo]]) -> Dict[str, PluginInfo]:
        """return the cached mapping, calling loader first if the cache is empty."""
        with self._lock:
            if self._plugins is None:
                self._plugins = loader()
            return self._plugins

    def invalidate(self):
        with self._lock:
            self._plugins = None
