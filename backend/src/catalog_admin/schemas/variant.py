"""Variant schemas for draft editing."""

from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, Field, field_serializer

from catalog_admin.schemas.media import MediaRef

CUSTOM_OPTION = "custom"


def new_variant_id() -> str:
    """Local token identifying a variant inside one draft."""
    return uuid4().hex


class CatalogOption(BaseModel):
    """A selectable size or color."""

    id: str
    name: str
    hex: str | None = None


class VariantInput(BaseModel):
    """Staging buffer for the variant being composed or edited.

    ``size``/``color`` hold the raw selection: a catalog option id or
    ``"custom"``. No constraints are applied here so that invalid input
    survives until the user fixes it.
    """

    size: str = ""
    custom_size: str = ""
    color: str = ""
    custom_color: str = ""
    images: list[MediaRef] = Field(default_factory=list)
    videos: list[MediaRef] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    stock: int = 0
    style_number: str = ""
    fabric: str = ""

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class VariantInputUpdate(BaseModel):
    """Partial update of a staging buffer. Media is managed separately."""

    size: str | None = None
    custom_size: str | None = None
    color: str | None = None
    custom_color: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    style_number: str | None = None
    fabric: str | None = None


class Variant(BaseModel):
    """A listed variant of a product draft."""

    id: str = Field(default_factory=new_variant_id)
    server_id: str | None = None
    size: str
    color: str
    custom_size: str | None = None
    custom_color: str | None = None
    images: list[MediaRef] = Field(default_factory=list)
    videos: list[MediaRef] = Field(default_factory=list)
    price: Decimal
    stock: int
    style_number: str | None = None
    fabric: str | None = None

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the variant within its product."""
        return (self.size.strip().casefold(), self.color.strip().casefold())


class CatalogOptionsResponse(BaseModel):
    sizes: list[CatalogOption]
    colors: list[CatalogOption]
