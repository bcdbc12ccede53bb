import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


CATALOG = [
    {
        "id": "welcome-plugin",
        "description": "Welcome plugin",
        "provider": "Decebal Suiu",
        "projectUrl": "https://github.com/pf4j/pf4j",
        "releases": [
            {"version": "0.9.0", "date": "2014-06-08", "url": "welcome/0.9.0/welcome-0.9.0.zip"},
            {"version": "1.0.0", "date": "2015-02-10", "url": "https://cdn.example.com/welcome-1.0.0.zip"},
        ],
    },
    {
        "id": "hello-plugin",
        "description": "Hello plugin",
        "releases": [
            {"version": "0.1.0", "url": "/shared/hello-0.1.0.zip", "requires": ">=1.0"},
        ],
    },
]


@pytest.fixture
def make_client():
    """build an httpx client whose requests are answered by handler."""
    def _make(handler) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def catalog():
    """a fresh copy of the sample catalog."""
    import copy
    return copy.deepcopy(CATALOG)
