"""Tests for the catalog lookup client"""
from decimal import Decimal

import httpx
import pytest

from storefront.cart import TransportError
from storefront.services.catalog import CatalogClient


def _client(handler) -> CatalogClient:
    transport = httpx.MockTransport(handler)
    return CatalogClient(base_url="http://catalog.test", http_client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_get_product_parses_record():
    seen = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200,
            json={
                "success": True,
                "message": "Single Product Fetched",
                "product": {"_id": "123", "slug": "sku1", "price": 100, "quantity": 10},
            },
        )

    product = await _client(handler).get_product("sku1")

    assert seen == ["http://catalog.test/api/v1/product/get-product/sku1"]
    assert product.product_id == "123"
    assert product.price == Decimal("100")
    assert product.quantity == 10


@pytest.mark.asyncio
async def test_slug_is_url_encoded():
    seen = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(200, json={"product": None})

    await _client(handler).get_product("a b/c")

    assert seen == [b"/api/v1/product/get-product/a%20b%2Fc"]


@pytest.mark.asyncio
async def test_null_product_returns_none():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"product": None})

    assert await _client(handler).get_product("ghost") is None


@pytest.mark.asyncio
async def test_error_status_raises_transport_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"success": False})

    with pytest.raises(TransportError, match="Request failed with status code 500"):
        await _client(handler).get_product("sku1")


@pytest.mark.asyncio
async def test_network_failure_keeps_raw_message():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Network timeout", request=request)

    with pytest.raises(TransportError, match="Network timeout"):
        await _client(handler).get_product("sku1")


@pytest.mark.asyncio
async def test_invalid_json_raises_transport_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(TransportError, match="Invalid catalog response"):
        await _client(handler).get_product("sku1")


@pytest.mark.asyncio
async def test_record_without_id_raises_transport_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"product": {"price": 1, "quantity": 1}})

    with pytest.raises(TransportError):
        await _client(handler).get_product("sku1")
