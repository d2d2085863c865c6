"""Size and color option endpoints."""

from fastapi import APIRouter

from catalog_admin.schemas.variant import CUSTOM_OPTION, CatalogOption, CatalogOptionsResponse
from catalog_admin.services.variant_rules import COLOR_OPTIONS, SIZE_OPTIONS

router = APIRouter()


@router.get("", response_model=CatalogOptionsResponse)
async def get_options():
    """Selectable sizes and colors, each list ending with the custom option."""
    return CatalogOptionsResponse(
        sizes=[*SIZE_OPTIONS, CatalogOption(id=CUSTOM_OPTION, name="Custom Size")],
        colors=[*COLOR_OPTIONS, CatalogOption(id=CUSTOM_OPTION, name="Custom Color")],
    )
