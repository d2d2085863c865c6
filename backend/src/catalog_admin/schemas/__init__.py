"""Pydantic schemas for drafts, categories and storefront payloads."""

from catalog_admin.schemas.category import (
    Category,
    CategoryCreate,
    CategoryStatus,
    CategoryTreeResponse,
    CategoryUpdate,
    DeletePreview,
    Subcategory,
)
from catalog_admin.schemas.envelope import ApiResponse
from catalog_admin.schemas.media import (
    CombinedMediaItem,
    MediaKind,
    MediaRef,
    PersistedMedia,
    UploadedMedia,
)
from catalog_admin.schemas.order import OrderStatus, OrderStatusUpdate
from catalog_admin.schemas.product import (
    DraftCreate,
    DraftFieldsUpdate,
    PersistedProduct,
    ProductDraft,
    ProductPayload,
    ProductStatus,
    SubmitResult,
    VariantPayload,
)
from catalog_admin.schemas.variant import (
    CUSTOM_OPTION,
    CatalogOption,
    Variant,
    VariantInput,
    VariantInputUpdate,
)

__all__ = [
    "ApiResponse",
    "Category",
    "CategoryCreate",
    "CategoryStatus",
    "CategoryTreeResponse",
    "CategoryUpdate",
    "DeletePreview",
    "Subcategory",
    "CombinedMediaItem",
    "MediaKind",
    "MediaRef",
    "PersistedMedia",
    "UploadedMedia",
    "OrderStatus",
    "OrderStatusUpdate",
    "DraftCreate",
    "DraftFieldsUpdate",
    "PersistedProduct",
    "ProductDraft",
    "ProductPayload",
    "ProductStatus",
    "SubmitResult",
    "VariantPayload",
    "CUSTOM_OPTION",
    "CatalogOption",
    "Variant",
    "VariantInput",
    "VariantInputUpdate",
]
