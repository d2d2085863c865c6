"""Product draft and storefront payload schemas."""

from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from catalog_admin.schemas.variant import Variant, VariantInput


class ProductStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProductDraft(BaseModel):
    """Unsaved state of a product being created or edited."""

    draft_id: str = Field(default_factory=lambda: uuid4().hex)
    product_id: str | None = None
    is_editing: bool = False

    title: str = ""
    description: str = ""
    category: str = ""
    subcategory: str = ""
    style_number: str = ""
    fabric: str = ""
    status: ProductStatus = ProductStatus.ACTIVE
    variants: list[Variant] = Field(default_factory=list)

    composing: VariantInput = Field(default_factory=VariantInput)
    editing_variant_id: str | None = None
    edit_buffer: VariantInput | None = None


class DraftCreate(BaseModel):
    """Open a new draft, optionally seeded from a persisted product."""

    product_id: str | None = None


class DraftFieldsUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    subcategory: str | None = None
    style_number: str | None = None
    fabric: str | None = None


# =============================================================================
# Storefront wire format
# =============================================================================

class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VariantPayload(_WireModel):
    server_id: str | None = Field(None, alias="_id")
    size: str
    color: str
    images: list[str] = Field(default_factory=list)
    videos: list[str] = Field(default_factory=list)
    price: Decimal
    stock: int
    style_number: str | None = None
    fabric: str | None = None

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class ProductPayload(_WireModel):
    """Whole-product body sent to ``POST``/``PUT /api/products``."""

    id: str
    title: str
    description: str = ""
    category: str
    subcategory: str = ""
    style_number: str = ""
    fabric: str = ""
    status: ProductStatus
    variants: list[VariantPayload]

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PersistedVariant(_WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    server_id: str | None = Field(None, alias="_id")
    size: str = ""
    color: str = ""
    images: list[str] = Field(default_factory=list)
    videos: list[str] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    stock: int = 0
    style_number: str | None = None
    fabric: str | None = None


class PersistedProduct(_WireModel):
    """Product as returned by the storefront API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id")
    title: str = ""
    description: str | None = None
    category: str = ""
    subcategory: str | None = None
    variants: list[PersistedVariant] = Field(default_factory=list)
    status: ProductStatus = ProductStatus.ACTIVE
    style_number: str | None = None
    fabric: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _category_name(cls, value):
        # Populated category references come back as objects
        if isinstance(value, dict):
            return value.get("name", "")
        return value or ""


class SubmitResult(BaseModel):
    product_id: str
    created: bool
    variant_count: int


class ProductStatusResponse(BaseModel):
    product_id: str
    status: ProductStatus
