"""test suite for InfoService."""
from io import StringIO

import httpx
import pytest
from rich.console import Console

from plugin_update.registry.repository import DefaultUpdateRepository
from plugin_update.services.info import InfoService


class TestInfoService:
    @pytest.fixture
    def output(self):
        return StringIO()

    @pytest.fixture
    def repo(self, catalog, make_client):
        client = make_client(lambda request: httpx.Response(200, json=catalog))
        return DefaultUpdateRepository("main", "https://plugins.example.com/repo", client=client)

    @pytest.fixture
    def service(self, repo, output):
        return InfoService([repo], Console(file=output, width=200))

    def test_list_plugins(self, service, output):
        service.list_plugins()
        text = output.getvalue()
        assert "welcome-plugin" in text
        assert "hello-plugin" in text
        assert "1.0.0" in text

    def test_list_plugins_empty(self, output, make_client):
        client = make_client(lambda request: httpx.Response(503))
        repo = DefaultUpdateRepository("down", "https://down.example.com", client=client)
        InfoService([repo], Console(file=output, width=200)).list_plugins()
        assert "No plugins found" in output.getvalue()

    def test_show_info(self, service, output):
        assert service.show_info("welcome-plugin") is True
        text = output.getvalue()
        assert "Decebal Suiu" in text
        assert "https://plugins.example.com/repo/welcome/0.9.0/welcome-0.9.0.zip" in text
        assert "Latest:" in text

    def test_show_info_missing(self, service, output):
        assert service.show_info("nope") is False
        assert "not found" in output.getvalue()
