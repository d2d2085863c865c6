"""Business logic services."""

from catalog_admin.services.catalog_client import CatalogClient
from catalog_admin.services.category_service import CategoryService
from catalog_admin.services.draft_service import DraftService
from catalog_admin.services.draft_store import DraftStore

__all__ = [
    "CatalogClient",
    "CategoryService",
    "DraftService",
    "DraftStore",
]
