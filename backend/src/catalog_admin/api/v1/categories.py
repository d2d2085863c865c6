"""Category tree management API endpoints."""

from fastapi import APIRouter, Query, status

from catalog_admin.api.deps import CategoryServiceDep, http_error
from catalog_admin.core.exceptions import CatalogAdminError
from catalog_admin.schemas.category import (
    Category,
    CategoryCreate,
    CategoryTreeResponse,
    CategoryUpdate,
    DeletePreview,
)

router = APIRouter()


def _tree_response(tree: list[Category]) -> CategoryTreeResponse:
    return CategoryTreeResponse(
        categories=tree,
        total=len(tree),
        subcategory_total=sum(len(c.subcategories) for c in tree),
    )


@router.get("", response_model=CategoryTreeResponse)
async def get_tree(service: CategoryServiceDep):
    """Current category tree as held by the storefront API."""
    try:
        return _tree_response(await service.get_tree())
    except CatalogAdminError as e:
        raise http_error(e)


@router.post("", response_model=CategoryTreeResponse, status_code=status.HTTP_201_CREATED)
async def add_category(data: CategoryCreate, service: CategoryServiceDep):
    try:
        return _tree_response(await service.add_category(data))
    except CatalogAdminError as e:
        raise http_error(e)


@router.put("/{category_id}", response_model=CategoryTreeResponse)
async def update_category(category_id: str, data: CategoryUpdate, service: CategoryServiceDep):
    try:
        return _tree_response(await service.update_category(category_id, data))
    except CatalogAdminError as e:
        raise http_error(e)


@router.get("/{category_id}/delete-preview", response_model=DeletePreview)
async def preview_delete(category_id: str, service: CategoryServiceDep):
    """What deleting this category also removes."""
    try:
        return await service.preview_delete(category_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.delete("/{category_id}", response_model=CategoryTreeResponse)
async def delete_category(
    category_id: str,
    service: CategoryServiceDep,
    confirm: bool = Query(False),
):
    """Delete a category. Required ``confirm=true`` when it has subcategories."""
    try:
        return _tree_response(await service.delete_category(category_id, confirm=confirm))
    except CatalogAdminError as e:
        raise http_error(e)


@router.post(
    "/{category_id}/subcategories",
    response_model=CategoryTreeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_subcategory(category_id: str, data: CategoryCreate, service: CategoryServiceDep):
    try:
        return _tree_response(await service.add_subcategory(category_id, data))
    except CatalogAdminError as e:
        raise http_error(e)


@router.put("/{category_id}/subcategories/{subcategory_id}", response_model=CategoryTreeResponse)
async def update_subcategory(
    category_id: str,
    subcategory_id: str,
    data: CategoryUpdate,
    service: CategoryServiceDep,
):
    try:
        return _tree_response(
            await service.update_subcategory(category_id, subcategory_id, data)
        )
    except CatalogAdminError as e:
        raise http_error(e)


@router.delete(
    "/{category_id}/subcategories/{subcategory_id}", response_model=CategoryTreeResponse
)
async def delete_subcategory(category_id: str, subcategory_id: str, service: CategoryServiceDep):
    try:
        return _tree_response(await service.delete_subcategory(category_id, subcategory_id))
    except CatalogAdminError as e:
        raise http_error(e)
