"""Tests for the catalog HTTP adapter."""

from __future__ import annotations

import json

import httpx
import pytest

from pricesync.core.config import SyncSettings
from pricesync.core.http_adapter import CatalogClient, CatalogCredentials, HttpConfig, error_detail
from pricesync.core.models import EndpointLayout


class TestHttpConfig:
    """Test HttpConfig data class."""

    def test_trailing_slashes_are_trimmed(self) -> None:
        config = HttpConfig(catalog_base_url="https://a.example/api/", pricing_base_url="https://b.example/")

        assert config.catalog_base_url == "https://a.example/api"
        assert config.pricing_base_url == "https://b.example"
        assert config.timeout == 30.0

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValueError, match="timeout"):
            HttpConfig(catalog_base_url="https://a", pricing_base_url="https://b", timeout=timeout)

    def test_base_urls_required(self) -> None:
        with pytest.raises(ValueError, match="base urls"):
            HttpConfig(catalog_base_url="", pricing_base_url="https://b")


def test_credentials_headers() -> None:
    headers = CatalogCredentials(app_key="k", app_token="t").get_auth_headers()

    assert headers == {"X-VTEX-API-AppKey": "k", "X-VTEX-API-AppToken": "t"}


@pytest.mark.asyncio
async def test_put_price_sends_credentials_and_json(settings: SyncSettings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async with CatalogClient.from_settings(settings, transport=httpx.MockTransport(handler)) as client:
        response = await client.put_price("42", {"itemId": "42", "basePrice": 1000})

    assert response.status_code == 200
    request = seen[0]
    assert request.method == "PUT"
    assert str(request.url) == "https://acme.vtexcommercestable.com.br/api/pricing/prices/42"
    assert request.headers["X-VTEX-API-AppKey"] == "key-123"
    assert request.headers["X-VTEX-API-AppToken"] == "token-456"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"itemId": "42", "basePrice": 1000}


@pytest.mark.asyncio
async def test_split_layout_targets_pricing_host(settings: SyncSettings) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200)

    split = settings.model_copy(update={"endpoint_layout": EndpointLayout.SPLIT})
    async with CatalogClient.from_settings(split, transport=httpx.MockTransport(handler)) as client:
        await client.put_price("7", {})

    assert seen == ["https://api.vtex.com/acme/pricing/prices/7"]


@pytest.mark.asyncio
async def test_search_by_reference_filters_by_ref_id(settings: SyncSettings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"productId": "1", "items": [{"itemId": "11"}]}])

    async with CatalogClient.from_settings(settings, transport=httpx.MockTransport(handler)) as client:
        products = await client.search_by_reference("REF 1")

    assert products == [{"productId": "1", "items": [{"itemId": "11"}]}]
    assert seen[0].url.path == "/api/catalog_system/pub/products/search"
    assert seen[0].url.params["fq"] == "alternateIds_RefId:REF 1"


@pytest.mark.asyncio
async def test_error_status_raises(settings: SyncSettings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"error": "missing"}))

    async with CatalogClient.from_settings(settings, transport=transport) as client:
        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            await client.put_price("1", {})

    assert error_detail(excinfo.value) == {"error": "missing"}


def test_error_detail_falls_back_to_text_and_description() -> None:
    request = httpx.Request("PUT", "https://example/pricing/prices/1")
    text_error = httpx.HTTPStatusError("bad", request=request, response=httpx.Response(502, text="Bad gateway"))

    assert error_detail(text_error) == "Bad gateway"
    assert error_detail(httpx.ConnectError("connection refused", request=request)) == "connection refused"
    assert error_detail(httpx.ReadTimeout("", request=request)) == "ReadTimeout"
