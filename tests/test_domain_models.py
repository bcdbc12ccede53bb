"""test suite for domain models."""
import pytest
from packaging.version import Version

from plugin_update.domain.models import PluginInfo, PluginRelease, RepositorySpec


class TestPluginRelease:
    def test_release_creation(self):
        release = PluginRelease(version="1.0.0", url="https://example.com/a-1.0.0.zip")
        assert release.version == "1.0.0"
        assert release.date is None
        assert release.requires is None

    def test_unknown_fields_ignored(self):
        release = PluginRelease(version="1.0.0", url="a.zip", sha512sum="abc", color="blue")
        assert not hasattr(release, "color")

    def test_parsed_version(self):
        release = PluginRelease(version="1.2.3", url="a.zip")
        assert isinstance(release.parsed_version, Version)
        assert str(release.parsed_version) == "1.2.3"

    def test_numeric_version_coerced(self):
        release = PluginRelease(version=2, url="a.zip")
        assert release.version == "2"
        assert release.parsed_version == Version("2")

    def test_parsed_version_invalid(self):
        release = PluginRelease(version="1.0-SNAPSHOT-x", url="a.zip")
        assert release.parsed_version is None


class TestPluginInfo:
    def test_from_catalog_entry(self, catalog):
        plugin = PluginInfo(**catalog[0])
        assert plugin.id == "welcome-plugin"
        assert plugin.project_url == "https://github.com/pf4j/pf4j"
        assert len(plugin.releases) == 2
        assert plugin.releases[0].date == "2014-06-08"

    def test_populate_by_name(self):
        plugin = PluginInfo(id="p", project_url="https://example.com")
        assert plugin.project_url == "https://example.com"

    def test_releases_default_empty(self):
        plugin = PluginInfo(id="p")
        assert plugin.releases == []
        assert plugin.latest_release() is None

    def test_latest_release_by_version(self):
        plugin = PluginInfo(id="p", releases=[
            PluginRelease(version="1.10.0", url="c.zip"),
            PluginRelease(version="1.2.0", url="a.zip"),
            PluginRelease(version="1.9.1", url="b.zip"),
        ])
        assert plugin.latest_release().version == "1.10.0"

    def test_latest_release_skips_unparsable(self):
        plugin = PluginInfo(id="p", releases=[
            PluginRelease(version="2.0.0", url="a.zip"),
            PluginRelease(version="nightly build", url="b.zip"),
        ])
        assert plugin.latest_release().version == "2.0.0"

    def test_latest_release_falls_back_to_last(self):
        plugin = PluginInfo(id="p", releases=[
            PluginRelease(version="first", url="a.zip"),
            PluginRelease(version="second", url="b.zip"),
        ])
        assert plugin.latest_release().version == "second"

    def test_get_release(self, catalog):
        plugin = PluginInfo(**catalog[0])
        assert plugin.get_release("0.9.0").url == "welcome/0.9.0/welcome-0.9.0.zip"
        assert plugin.get_release("9.9.9") is None

    def test_id_required(self):
        with pytest.raises(ValueError):
            PluginInfo(releases=[])


class TestRepositorySpec:
    def test_spec_creation(self):
        spec = RepositorySpec(id="main", url="https://example.com/plugins")
        assert spec.model_dump() == {"id": "main", "url": "https://example.com/plugins"}
