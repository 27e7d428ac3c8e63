"""Unit tests for the request executor.

The executor sends exactly one request per call, attaches the session
credential, and hands every HTTP status back unjudged.
"""

import httpx
import pytest

from megaport_client.auth.credential import CredentialHolder
from megaport_client.exceptions import TransportError
from megaport_client.utils.http import RequestExecutor, create_http_client, create_timeout


def _executor(handler, token="tok-123"):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RequestExecutor(http, CredentialHolder(token), user_agent="megaport-tests")


class TestHeaders:
    def test_headers_without_body(self):
        executor = _executor(lambda r: httpx.Response(200))
        headers = executor.build_headers(has_body=False)
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == "megaport-tests"
        assert headers["Authorization"] == "Bearer tok-123"
        assert "Content-Type" not in headers

    def test_headers_with_body(self):
        executor = _executor(lambda r: httpx.Response(200))
        assert executor.build_headers(has_body=True)["Content-Type"] == "application/json"

    def test_empty_credential_still_sends_scheme(self):
        executor = _executor(lambda r: httpx.Response(200), token=None)
        assert executor.build_headers(has_body=False)["Authorization"] == "Bearer"


class TestExecute:
    @pytest.mark.asyncio
    async def test_sends_one_request_with_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"message": "ok"})

        executor = _executor(handler)
        response = await executor.execute(
            "post", "https://api.test.megaport.com/v3/networkdesign/buy", b'[{"a": 1}]'
        )

        assert response.status_code == 200
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert seen[0].content == b'[{"a": 1}]'
        assert seen[0].headers["content-type"] == "application/json"
        assert seen[0].headers["authorization"] == "Bearer tok-123"

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        calls = {"n": 0}

        def handler(request):
            calls["n"] += 1
            return httpx.Response(503, json={"message": "unavailable"})

        executor = _executor(handler)
        response = await executor.execute("GET", "https://api.test.megaport.com/v2/products")

        assert response.status_code == 503
        assert calls["n"] == 1

    @pytest.mark.asyncio
    async def test_relative_url_rejected(self):
        executor = _executor(lambda r: httpx.Response(200))
        with pytest.raises(ValueError):
            await executor.execute("GET", "/v2/products")

    @pytest.mark.asyncio
    async def test_transport_failure_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        executor = _executor(handler)
        with pytest.raises(TransportError) as exc_info:
            await executor.execute("GET", "https://api.test.megaport.com/v2/products")

        err = exc_info.value
        assert "connection refused" in err.message
        assert err.method == "GET"
        assert err.url == "https://api.test.megaport.com/v2/products"
        assert isinstance(err.original_error, httpx.ConnectError)
        assert err.details["error_type"] == "ConnectError"


def test_create_timeout_defaults():
    timeout = create_timeout()
    assert timeout.connect == 5.0
    assert timeout.read == 30.0
    assert timeout.write == 10.0
    assert timeout.pool == 5.0


@pytest.mark.asyncio
async def test_create_http_client_uses_read_timeout():
    client = create_http_client(timeout=12.5)
    try:
        assert client.timeout.read == 12.5
        assert client.follow_redirects is False
    finally:
        await client.aclose()
