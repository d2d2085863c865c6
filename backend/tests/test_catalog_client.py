"""Tests for the storefront API client envelope handling."""

import json

import httpx
import pytest

from catalog_admin.services.catalog_client import CatalogClient


def _client(handler) -> CatalogClient:
    http = httpx.AsyncClient(
        base_url="http://storefront.test", transport=httpx.MockTransport(handler)
    )
    return CatalogClient(http)


class TestEnvelope:
    """Test the {data?, error?} mapping of responses."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self):
        client = _client(lambda request: httpx.Response(200, json=[{"_id": "c1"}]))

        result = await client.list_categories()

        assert result.ok
        assert result.data == [{"_id": "c1"}]
        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_error_message_from_body(self):
        client = _client(
            lambda request: httpx.Response(400, json={"message": "Category already exists"})
        )

        result = await client.create_category({"name": "Tops"})

        assert result.error == "Category already exists"
        assert result.status_code == 400

    @pytest.mark.asyncio
    async def test_error_field_used_when_no_message(self):
        client = _client(lambda request: httpx.Response(404, json={"error": "Product not found"}))

        result = await client.get_product("p1")

        assert result.error == "Product not found"

    @pytest.mark.asyncio
    async def test_generic_error_for_unreadable_body(self):
        client = _client(lambda request: httpx.Response(500, text="<html>oops</html>"))

        result = await client.list_orders()

        assert result.error == "An error occurred"
        assert result.data is None

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        result = await _client(handler).list_products()

        assert not result.ok
        assert result.error == "connection refused"

    @pytest.mark.asyncio
    async def test_empty_success_body(self):
        client = _client(lambda request: httpx.Response(204))

        result = await client.delete_product("p1")

        assert result.ok
        assert result.data is None


class TestRequests:
    """Test paths and bodies sent to the storefront API."""

    @pytest.mark.asyncio
    async def test_update_product_puts_whole_payload(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"_id": "p1"})

        await _client(handler).update_product("p1", {"title": "Tee", "variants": []})

        assert seen == {
            "method": "PUT",
            "path": "/api/products/p1",
            "body": {"title": "Tee", "variants": []},
        }

    @pytest.mark.asyncio
    async def test_list_products_skips_empty_filters(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[])

        await _client(handler).list_products(category="Tops", status=None, search="")

        assert seen["params"] == {"category": "Tops"}

    @pytest.mark.asyncio
    async def test_order_status_update(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        await _client(handler).update_order_status("o1", "Shipped")

        assert seen == {"path": "/api/orders/o1/status", "body": {"status": "Shipped"}}


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_returns_stored_path(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(
                200, json={"file": {"path": "/uploads/products/front.jpg", "size": 4}}
            )

        result = await _client(handler).upload("front.jpg", b"\xff\xd8", "image/jpeg", folder="products")

        assert result.data == "/uploads/products/front.jpg"
        assert seen["path"] == "/api/upload"
        assert b'filename="front.jpg"' in seen["body"]
        assert b"products" in seen["body"]

    @pytest.mark.asyncio
    async def test_upload_without_path(self):
        client = _client(lambda request: httpx.Response(200, json={"file": {}}))

        result = await client.upload("front.jpg", b"1")

        assert not result.ok

    @pytest.mark.asyncio
    async def test_upload_rejected(self):
        client = _client(lambda request: httpx.Response(413, json={"message": "File too large"}))

        result = await client.upload("walk.mp4", b"1", "video/mp4")

        assert result.error == "File too large"
