"""API dependencies for the draft store, storefront client and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from catalog_admin.core.config import settings
from catalog_admin.core.exceptions import (
    CatalogAdminError,
    CategoryNotFoundError,
    CollaboratorError,
    DraftNotFoundError,
    DuplicateNameError,
    EditorStateError,
    SubmissionInProgressError,
    UnclassifiedMediaError,
    ValidationError,
    VariantNotFoundError,
)
from catalog_admin.core.http import get_http_client
from catalog_admin.core.redis import get_redis
from catalog_admin.services.catalog_client import CatalogClient
from catalog_admin.services.category_service import CategoryService
from catalog_admin.services.draft_service import DraftService
from catalog_admin.services.draft_store import DraftStore
from catalog_admin.services.media_service import UnclassifiedMediaPolicy


async def get_draft_store() -> DraftStore:
    """Get DraftStore instance with shared Redis connection pool."""
    redis = await get_redis()
    return DraftStore(redis, ttl=settings.DRAFT_TTL_SECONDS)


async def get_catalog_client() -> CatalogClient:
    """Get CatalogClient instance with the shared HTTP client."""
    http = await get_http_client()
    return CatalogClient(http)


async def get_draft_service(
    store: Annotated[DraftStore, Depends(get_draft_store)],
    client: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> DraftService:
    """Get DraftService instance with injected dependencies."""
    return DraftService(
        store,
        client,
        enforce_unique_variants=settings.ENFORCE_UNIQUE_VARIANTS,
        media_policy=UnclassifiedMediaPolicy(settings.UNCLASSIFIED_MEDIA_POLICY),
        submit_lock_ttl=settings.SUBMIT_LOCK_TTL_SECONDS,
    )


async def get_category_service(
    client: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> CategoryService:
    return CategoryService(client)


# Type aliases for cleaner dependency injection
CatalogClientDep = Annotated[CatalogClient, Depends(get_catalog_client)]
DraftServiceDep = Annotated[DraftService, Depends(get_draft_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


# =============================================================================
# Error mapping
# =============================================================================

_STATUS_BY_ERROR: list[tuple[type[CatalogAdminError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DuplicateNameError, status.HTTP_409_CONFLICT),
    (EditorStateError, status.HTTP_409_CONFLICT),
    (SubmissionInProgressError, status.HTTP_409_CONFLICT),
    (UnclassifiedMediaError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (DraftNotFoundError, status.HTTP_404_NOT_FOUND),
    (VariantNotFoundError, status.HTTP_404_NOT_FOUND),
    (CategoryNotFoundError, status.HTTP_404_NOT_FOUND),
    (CollaboratorError, status.HTTP_502_BAD_GATEWAY),
]


def http_error(exc: CatalogAdminError) -> HTTPException:
    """Convert a catalog error into the HTTPException shown to the admin UI."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break

    detail: dict = {"code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError):
        detail["reason"] = exc.reason
        if exc.problems:
            detail["problems"] = exc.problems
    if isinstance(exc, UnclassifiedMediaError):
        detail["files"] = exc.filenames
    return HTTPException(status_code=status_code, detail=detail)
