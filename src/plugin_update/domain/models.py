from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from packaging.version import Version, InvalidVersion


class PluginRelease(BaseModel):
    """one installable version of a plugin."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    version: str
    url: str
    date: Optional[str] = None
    requires: Optional[str] = None

    @property
    def parsed_version(self) -> Optional[Version]:
        try:
            return Version(self.version)
        except InvalidVersion:
            return None


class PluginInfo(BaseModel):
    """represents a plugin entry of a repository catalog (plugins.json)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    provider: Optional[str] = None
    project_url: Optional[str] = Field(default=None, alias="projectUrl")
    releases: List[PluginRelease] = Field(default_factory=list)

    def get_release(self, version: str) -> Optional[PluginRelease]:
        for release in self.releases:
            if release.version == version:
                return release
        return None

    def latest_release(self) -> Optional[PluginRelease]:
        """
        return the release with the highest version.

        releases whose version can't be parsed are ignored; if none parse,
        the last listed release wins.
        """
        if not self.releases:
            return None
        parsed = [r for r in self.releases if r.parsed_version is not None]
        if not parsed:
            return self.releases[-1]
        return max(parsed, key=lambda r: r.parsed_version)


class RepositorySpec(BaseModel):
    """one entry of the repositories file."""
    id: str
    url: str
