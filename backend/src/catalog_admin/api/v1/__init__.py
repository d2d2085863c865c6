"""API v1 routers."""

from catalog_admin.api.v1 import categories, drafts, options, orders, products

__all__ = ["categories", "drafts", "options", "orders", "products"]
