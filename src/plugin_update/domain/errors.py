from typing import Optional


class PluginUpdateError(Exception):
    """base class for exceptions in plugin-update."""
    pass


class DownloadError(PluginUpdateError):
    """raised when an artifact cannot be downloaded."""
    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        super().__init__(message or f"Failed to download '{url}'")


class AuthRequiredError(DownloadError):
    """raised when the server answers 401; never retried."""
    def __init__(self, url: str):
        super().__init__(url, f"HTTP Authorization failure for '{url}'")


class ConnectError(DownloadError):
    """raised when the response stream could not be opened after all attempts."""
    def __init__(self, url: str, destination):
        self.destination = destination
        super().__init__(url, f"Can't get '{url}' to '{destination}'")


class RepositoryConfigError(PluginUpdateError):
    """raised when the repositories file cannot be read or is invalid."""
    pass
