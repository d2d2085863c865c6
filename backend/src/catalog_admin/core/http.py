from typing import Optional

import httpx

from catalog_admin.core.config import settings

http_client: Optional[httpx.AsyncClient] = None


def _default_headers() -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if settings.CATALOG_API_TOKEN:
        headers["Authorization"] = f"Bearer {settings.CATALOG_API_TOKEN}"
    return headers


async def get_http_client() -> httpx.AsyncClient:
    """Get the shared HTTP client for the storefront API."""
    global http_client
    if http_client is None:
        http_client = httpx.AsyncClient(
            base_url=settings.CATALOG_API_URL,
            headers=_default_headers(),
            timeout=httpx.Timeout(settings.CATALOG_API_TIMEOUT),
        )
    return http_client


async def close_http_client() -> None:
    """Close the shared HTTP client."""
    global http_client
    if http_client is not None:
        await http_client.aclose()
        http_client = None
