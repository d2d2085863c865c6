from catalog_admin.core.config import settings
from catalog_admin.core.http import close_http_client, get_http_client
from catalog_admin.core.redis import close_redis, get_redis

__all__ = [
    "settings",
    "get_redis",
    "close_redis",
    "get_http_client",
    "close_http_client",
]
