"""Stored product API endpoints (list, delete, status toggle)."""

from typing import Any

from fastapi import APIRouter, Query, Response, status

from catalog_admin.api.deps import CatalogClientDep, http_error
from catalog_admin.core.exceptions import CatalogAdminError
from catalog_admin.schemas.product import ProductStatus

router = APIRouter()


@router.get("")
async def list_products(
    client: CatalogClientDep,
    category: str | None = Query(None),
    product_status: ProductStatus | None = Query(None, alias="status"),
    search: str | None = Query(None),
) -> Any:
    """Products as stored by the storefront API."""
    try:
        return (
            await client.list_products(
                category=category,
                status=product_status.value if product_status else None,
                search=search,
            )
        ).unwrap()
    except CatalogAdminError as e:
        raise http_error(e)


@router.put("/{product_id}/status")
async def toggle_status(product_id: str, client: CatalogClientDep) -> Any:
    """Flip a product between Active and Inactive."""
    try:
        return (await client.toggle_product_status(product_id)).unwrap()
    except CatalogAdminError as e:
        raise http_error(e)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, client: CatalogClientDep):
    try:
        (await client.delete_product(product_id)).unwrap()
    except CatalogAdminError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
