"""Client for the storefront REST API."""

import logging
import time
from typing import Any

import httpx

from catalog_admin.middleware.metrics import record_upstream_call
from catalog_admin.schemas.envelope import ApiResponse

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Please check your connection."


class CatalogClient:
    """Thin wrapper over the storefront API returning ``{data?, error?}`` envelopes.

    Nothing here raises for a failed call: non-2xx responses and transport
    failures both come back as ``ApiResponse(error=...)``.
    """

    PRODUCTS = "/api/products"
    CATEGORIES = "/api/categories"
    ORDERS = "/api/orders"
    UPLOAD = "/api/upload"

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        **kwargs: Any,
    ) -> ApiResponse[Any]:
        start = time.perf_counter()
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            record_upstream_call(operation, "error", time.perf_counter() - start)
            logger.error(f"{method} {path} failed: {e!r}")
            return ApiResponse(error=str(e) or NETWORK_ERROR)

        outcome = "success" if response.is_success else "failed"
        record_upstream_call(operation, outcome, time.perf_counter() - start)

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        if not response.is_success:
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            return ApiResponse(
                error=message or "An error occurred",
                status_code=response.status_code,
            )

        return ApiResponse(data=body, status_code=response.status_code)

    # ==================== Products ====================

    async def list_products(
        self,
        category: str | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> ApiResponse[Any]:
        params = {
            key: value
            for key, value in (("category", category), ("status", status), ("search", search))
            if value
        }
        return await self._request("GET", self.PRODUCTS, "list_products", params=params)

    async def get_product(self, product_id: str) -> ApiResponse[Any]:
        return await self._request("GET", f"{self.PRODUCTS}/{product_id}", "get_product")

    async def create_product(self, payload: dict) -> ApiResponse[Any]:
        return await self._request("POST", self.PRODUCTS, "create_product", json=payload)

    async def update_product(self, product_id: str, payload: dict) -> ApiResponse[Any]:
        return await self._request(
            "PUT", f"{self.PRODUCTS}/{product_id}", "update_product", json=payload
        )

    async def delete_product(self, product_id: str) -> ApiResponse[Any]:
        return await self._request("DELETE", f"{self.PRODUCTS}/{product_id}", "delete_product")

    async def toggle_product_status(self, product_id: str) -> ApiResponse[Any]:
        return await self._request(
            "PUT", f"{self.PRODUCTS}/{product_id}/status", "toggle_product_status"
        )

    # ==================== Categories ====================

    async def list_categories(self) -> ApiResponse[Any]:
        return await self._request("GET", self.CATEGORIES, "list_categories")

    async def create_category(self, body: dict) -> ApiResponse[Any]:
        return await self._request("POST", self.CATEGORIES, "create_category", json=body)

    async def update_category(self, category_id: str, body: dict) -> ApiResponse[Any]:
        return await self._request(
            "PUT", f"{self.CATEGORIES}/{category_id}", "update_category", json=body
        )

    async def delete_category(self, category_id: str) -> ApiResponse[Any]:
        return await self._request(
            "DELETE", f"{self.CATEGORIES}/{category_id}", "delete_category"
        )

    async def add_subcategory(self, category_id: str, body: dict) -> ApiResponse[Any]:
        return await self._request(
            "POST",
            f"{self.CATEGORIES}/{category_id}/subcategories",
            "add_subcategory",
            json=body,
        )

    async def update_subcategory(
        self, category_id: str, subcategory_id: str, body: dict
    ) -> ApiResponse[Any]:
        return await self._request(
            "PUT",
            f"{self.CATEGORIES}/{category_id}/subcategories/{subcategory_id}",
            "update_subcategory",
            json=body,
        )

    async def delete_subcategory(self, category_id: str, subcategory_id: str) -> ApiResponse[Any]:
        return await self._request(
            "DELETE",
            f"{self.CATEGORIES}/{category_id}/subcategories/{subcategory_id}",
            "delete_subcategory",
        )

    # ==================== Orders ====================

    async def list_orders(self) -> ApiResponse[Any]:
        return await self._request("GET", self.ORDERS, "list_orders")

    async def update_order_status(self, order_id: str, status: str) -> ApiResponse[Any]:
        return await self._request(
            "PUT",
            f"{self.ORDERS}/{order_id}/status",
            "update_order_status",
            json={"status": status},
        )

    # ==================== Upload ====================

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
        folder: str | None = None,
    ) -> ApiResponse[str]:
        """Upload one file; ``data`` is the server-relative path of the stored file."""
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        data = {"folder": folder} if folder else None
        result = await self._request("POST", self.UPLOAD, "upload", files=files, data=data)
        if not result.ok:
            return result

        body = result.data if isinstance(result.data, dict) else {}
        path = (body.get("file") or {}).get("path")
        if not path:
            return ApiResponse(error="Upload response did not include a file path")
        return ApiResponse(data=path, status_code=result.status_code)
