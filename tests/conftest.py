import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from megaport_client.client import MegaportClient  # noqa: E402
from megaport_client.config.settings import Settings  # noqa: E402

TEST_BASE_URL = "https://api.test.megaport.com/"


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    config.addinivalue_line("markers", "unit: mark test as a unit test")


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Keep tests independent of the developer's MEGAPORT_* environment."""
    for name in (
        "MEGAPORT_URL",
        "MEGAPORT_ENVIRONMENT",
        "MEGAPORT_ACCESS_KEY",
        "MEGAPORT_SECRET_KEY",
        "MEGAPORT_LOG_LEVEL",
        "MEGAPORT_PROVISIONING_POLL_INTERVAL",
        "MEGAPORT_PROVISIONING_MAX_ATTEMPTS",
        "MEGAPORT_PROVISIONING_DEADLINE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    yield


CannedResponse = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


def product_payload(
    uid: str = "port-uid-1",
    product_type: str = "MEGAPORT",
    status: str = "LIVE",
    locked: bool = False,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a product element the way the API returns it."""
    payload: Dict[str, Any] = {
        "productUid": uid,
        "productId": 1234,
        "productName": f"{product_type.lower()}-{uid}",
        "productType": product_type,
        "provisioningStatus": status,
        "locked": locked,
        "adminLocked": False,
        "locationId": 19,
        "contractTermMonths": 12,
        "marketplaceVisibility": True,
    }
    tag = product_type.upper()
    if tag == "MEGAPORT" or tag == "MCR2":
        payload["portSpeed"] = 10000
    if tag == "VXC":
        payload["rateLimit"] = 500
    payload.update(extra)
    return payload


class FakeMegaportAPI:
    """In-memory stand-in for the API behind an ``httpx.MockTransport``.

    Routes map ``(method, path)`` to a queue of responses; the last queued
    response repeats once the queue is drained. Unrouted requests get 404.
    """

    def __init__(self):
        self._routes: Dict[Tuple[str, str], List[CannedResponse]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, *responses: CannedResponse) -> None:
        self._routes[(method.upper(), path)] = list(responses)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method.upper())
            and (path is None or r.url.path == path)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(entry):
            return entry(request)
        status, payload = entry
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    @staticmethod
    def json_body(request: httpx.Request) -> Any:
        return json.loads(request.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeMegaportAPI:
    return FakeMegaportAPI()


@pytest.fixture
def make_product():
    return product_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        url=TEST_BASE_URL,
        provisioning_poll_interval=0,
        provisioning_max_attempts=30,
    )


@pytest.fixture
def client(fake_api, settings) -> MegaportClient:
    """Client logged in with a test token, talking to the fake API."""
    http_client = httpx.AsyncClient(transport=fake_api.transport)
    return MegaportClient(settings=settings, http_client=http_client, token="test-token")
