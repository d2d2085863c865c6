"""Order list and status API endpoints."""

from typing import Any

from fastapi import APIRouter

from catalog_admin.api.deps import CatalogClientDep, http_error
from catalog_admin.core.exceptions import CatalogAdminError
from catalog_admin.schemas.order import OrderStatusUpdate

router = APIRouter()


@router.get("")
async def list_orders(client: CatalogClientDep) -> Any:
    try:
        return (await client.list_orders()).unwrap()
    except CatalogAdminError as e:
        raise http_error(e)


@router.put("/{order_id}/status")
async def update_order_status(order_id: str, data: OrderStatusUpdate, client: CatalogClientDep) -> Any:
    try:
        return (await client.update_order_status(order_id, data.status.value)).unwrap()
    except CatalogAdminError as e:
        raise http_error(e)
