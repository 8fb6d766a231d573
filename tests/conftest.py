"""
Pytest configuration and fixtures for nebpy tests.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from nebpy import ...` to work without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from nebpy.config import ConnectionConfig  # noqa: E402
from nebpy.connection import NebConnection  # noqa: E402

TEST_SERVER = "https://ucapi.example.test"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def queries(self) -> list[str]:
        """The GraphQL text of every request sent to the query endpoint."""
        return [
            json.loads(request.content)["query"]
            for request in self.requests
            if request.url.path == "/query"
        ]


def _graphql_reply(name: str, value, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"data": {name: value}})


@pytest.fixture
def graphql_reply():
    """Builder for a GraphQL envelope carrying ``value`` as ``data.<name>``."""
    return _graphql_reply


@pytest.fixture
def recording_transport():
    """The transport class that records every request it served."""
    return RecordingTransport


@pytest.fixture
def ucapi_host(config):
    """Host name of the UCAPI endpoint, to tell it apart from SPU endpoints."""
    return httpx.URL(config.server).host


@pytest.fixture
def config():
    """Configuration with short timeouts against a test server."""
    return ConnectionConfig(
        server=TEST_SERVER,
        graphql_timeout=1.0,
        token_timeout=0.2,
    )


@pytest.fixture
def make_connection(config):
    """Factory for a connection whose HTTP exchanges are answered by ``handler``."""
    def factory(handler, **kwargs):
        transport = RecordingTransport(handler)
        connection = NebConnection(config, transport=transport, **kwargs)
        connection.transport = transport
        return connection

    return factory


@pytest.fixture
def volume_json():
    """A volume as returned by getVolumes."""
    return {
        "uuid": "6b1c8d55-7d1e-4c43-9a55-0ef4e1fa2d10",
        "name": "db-data",
        "wwn": "600b342ad1f3b9e1",
        "sizeBytes": 1099511627776,
        "boot": False,
        "creationTime": "2021-06-01T12:30:00.000Z",
        "nPod": {"uuid": "0d7a5b3c-0a4b-4b7a-8a3b-59d1f2a4e8c1"},
        "naturalOwnerSPU": {"serial": "01234567890ABCDEF"},
        "accessibleByHosts": [
            {"uuid": "9a1f0d2e-2b7c-4f3a-b0a8-6c1e4d5f7a90"},
            {"uuid": "1c2d3e4f-5a6b-4c7d-8e9f-0a1b2c3d4e5f"},
        ],
        "luns": [],
        "syncState": "InSync",
    }


@pytest.fixture
def token_json():
    """A token payload as returned by hardware mutations."""
    return {
        "token": "opaque-token",
        "mustSendTargetDNS": [
            {
                "controlPortDNS": "spu1-ctrl.example.test",
                "dataPortDNS": ["spu1-data1.example.test", "spu1-data2.example.test"],
            },
        ],
        "targetIPs": ["10.0.0.1", "10.0.0.2"],
        "dataTargetIPs": ["10.1.0.1"],
        "waitOn": "3f0b2f43-33a6-4f2c-a1e2-77d1d0c0b6a5",
        "issues": None,
    }
