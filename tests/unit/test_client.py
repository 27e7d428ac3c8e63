"""Unit tests for the client facade and exception payloads."""

import json

import httpx
import pytest

from megaport_client import APIError, MegaportClient, ProvisioningTimeoutError, Settings
from megaport_client.exceptions import FieldError, TransportError


class TestResolve:
    def test_joins_onto_base_url(self, client):
        assert client.resolve("/v2/products") == "https://api.test.megaport.com/v2/products"

    def test_keeps_base_path_prefix(self):
        client = MegaportClient(
            settings=Settings(url="https://proxy.example.net/megaport"),
            http_client=httpx.AsyncClient(),
        )
        assert client.resolve("/v2/product/p-1") == "https://proxy.example.net/megaport/v2/product/p-1"


class TestRequest:
    @pytest.mark.asyncio
    async def test_success_returns_response(self, client, fake_api):
        fake_api.add("GET", "/v2/products", (200, {"message": "ok", "data": []}))
        response = await client.request("GET", "/v2/products")
        assert response.status_code == 200
        assert fake_api.requests[0].headers["user-agent"] == "megaport-client"

    @pytest.mark.asyncio
    async def test_unexpected_status_raises_classified_error(self, client, fake_api):
        fake_api.add("GET", "/v2/products", (500, {"message": "Internal error", "trace_id": "tr-9"}))
        with pytest.raises(APIError) as exc_info:
            await client.request("GET", "/v2/products")
        assert exc_info.value.trace_id == "tr-9"
        assert len(fake_api.requests) == 1

    def test_watcher_uses_settings_cadence(self, client):
        async def read(product_id):
            return None

        watcher = client.create_watcher(read, "port")
        assert watcher.interval == 0
        assert watcher.max_attempts == 30
        assert watcher.deadline is None


@pytest.mark.asyncio
async def test_owned_http_client_closed_on_exit():
    async with MegaportClient(settings=Settings()) as client:
        http = client._http
    assert http.is_closed


@pytest.mark.asyncio
async def test_borrowed_http_client_left_open():
    http = httpx.AsyncClient()
    async with MegaportClient(settings=Settings(), http_client=http):
        pass
    assert not http.is_closed
    await http.aclose()


class TestExceptionPayloads:
    def test_api_error_to_json(self):
        error = APIError(
            "bad",
            status_code=400,
            response_body="{}",
            errors=[FieldError("term", "invalid")],
            trace_id="t",
        )
        payload = json.loads(error.to_json())
        assert payload["error"] == "API_ERROR"
        assert payload["details"]["status_code"] == 400
        assert payload["details"]["errors"] == [{"field": "term", "message": "invalid"}]

    def test_timeout_error_details(self):
        error = ProvisioningTimeoutError("MCR", product_id="m-1", attempts=30, last_status="DEPLOYABLE")
        assert error.message == "the MCR took too long to provision"
        assert error.to_dict()["details"] == {
            "attempts": 30,
            "product_id": "m-1",
            "last_status": "DEPLOYABLE",
        }

    def test_transport_error_code(self):
        assert TransportError("down").code == "TRANSPORT_ERROR"
