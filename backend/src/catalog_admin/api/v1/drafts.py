"""Product draft editing API endpoints."""

from fastapi import APIRouter, File, Response, UploadFile, status

from catalog_admin.api.deps import DraftServiceDep, http_error
from catalog_admin.core.config import settings
from catalog_admin.core.exceptions import CatalogAdminError, ValidationError
from catalog_admin.schemas.media import (
    CombinedMediaEntry,
    CombinedMediaItem,
    CombinedMediaResponse,
    MediaMoveRequest,
    MediaUploadResponse,
    media_name,
)
from catalog_admin.schemas.product import (
    DraftCreate,
    DraftFieldsUpdate,
    ProductDraft,
    SubmitResult,
)
from catalog_admin.schemas.variant import Variant, VariantInput, VariantInputUpdate
from catalog_admin.services.draft_service import UploadedFile
from catalog_admin.services.variant_editor import MediaTarget

router = APIRouter()


def _media_response(items: list[CombinedMediaItem]) -> CombinedMediaResponse:
    return CombinedMediaResponse(
        items=[
            CombinedMediaEntry(
                index=item.index,
                kind=item.kind,
                source=item.source,
                position=item.position,
                name=media_name(item.media),
                label=item.label,
                is_primary=item.is_primary,
                media=item.media,
            )
            for item in items
        ],
        total=len(items),
    )


# ==================== Drafts ====================

@router.post("", response_model=ProductDraft, status_code=status.HTTP_201_CREATED)
async def open_draft(data: DraftCreate, service: DraftServiceDep):
    """Open a blank draft, or an edit draft seeded from a stored product."""
    try:
        return await service.open_draft(data.product_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.get("/{draft_id}", response_model=ProductDraft)
async def get_draft(draft_id: str, service: DraftServiceDep):
    try:
        return await service.get_draft(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.patch("/{draft_id}", response_model=ProductDraft)
async def update_draft_fields(draft_id: str, data: DraftFieldsUpdate, service: DraftServiceDep):
    """Edit product-level fields (title, category, defaults...)."""
    try:
        return await service.update_fields(draft_id, data)
    except CatalogAdminError as e:
        raise http_error(e)


@router.delete("/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(draft_id: str, service: DraftServiceDep):
    """Close the form and drop all unsaved state."""
    try:
        await service.discard_draft(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{draft_id}/submit", response_model=SubmitResult)
async def submit_draft(draft_id: str, service: DraftServiceDep):
    """Send the whole product to the storefront API."""
    try:
        return await service.submit(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)


# ==================== Variants ====================

@router.patch("/{draft_id}/composing", response_model=VariantInput)
async def update_composing(draft_id: str, data: VariantInputUpdate, service: DraftServiceDep):
    try:
        return await service.update_composing(draft_id, data)
    except CatalogAdminError as e:
        raise http_error(e)


@router.post("/{draft_id}/variants", response_model=Variant, status_code=status.HTTP_201_CREATED)
async def add_variant(draft_id: str, service: DraftServiceDep):
    """Add the variant being composed to the product."""
    try:
        return await service.add_variant(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.delete("/{draft_id}/variants/{variant_id}", response_model=Variant)
async def remove_variant(draft_id: str, variant_id: str, service: DraftServiceDep):
    try:
        return await service.remove_variant(draft_id, variant_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.post("/{draft_id}/variants/{variant_id}/edit", response_model=VariantInput)
async def start_edit(draft_id: str, variant_id: str, service: DraftServiceDep):
    """Open a listed variant for editing, closing any other open edit."""
    try:
        return await service.start_edit(draft_id, variant_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.patch("/{draft_id}/editing", response_model=VariantInput)
async def update_edit(draft_id: str, data: VariantInputUpdate, service: DraftServiceDep):
    try:
        return await service.update_edit(draft_id, data)
    except CatalogAdminError as e:
        raise http_error(e)


@router.post("/{draft_id}/editing/save", response_model=Variant)
async def save_edit(draft_id: str, service: DraftServiceDep):
    try:
        return await service.save_edit(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)


@router.post("/{draft_id}/editing/cancel", response_model=ProductDraft)
async def cancel_edit(draft_id: str, service: DraftServiceDep):
    try:
        return await service.cancel_edit(draft_id)
    except CatalogAdminError as e:
        raise http_error(e)


# ==================== Media ====================

@router.get("/{draft_id}/{target}/media", response_model=CombinedMediaResponse)
async def list_media(draft_id: str, target: MediaTarget, service: DraftServiceDep):
    """Combined image/video list of the composing or edited variant."""
    try:
        return _media_response(await service.list_media(draft_id, target))
    except CatalogAdminError as e:
        raise http_error(e)


@router.post(
    "/{draft_id}/{target}/media",
    response_model=MediaUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_media(
    draft_id: str,
    target: MediaTarget,
    service: DraftServiceDep,
    files: list[UploadFile] = File(...),
):
    """Attach image/video files to the composing or edited variant."""
    received = []
    for upload in files:
        content = await upload.read()
        if len(content) > settings.MAX_UPLOAD_BYTES:
            raise http_error(
                ValidationError(
                    "file_too_large",
                    f"{upload.filename} exceeds {settings.MAX_UPLOAD_BYTES} bytes",
                )
            )
        received.append(
            UploadedFile(
                filename=upload.filename or "upload",
                content_type=upload.content_type,
                content=content,
            )
        )

    try:
        result = await service.add_media(draft_id, target, received)
    except CatalogAdminError as e:
        raise http_error(e)

    return MediaUploadResponse(
        accepted=result.accepted,
        dropped=result.dropped,
        images=len(result.images),
        videos=len(result.videos),
    )


@router.post("/{draft_id}/{target}/media/move", response_model=CombinedMediaResponse)
async def move_media(
    draft_id: str, target: MediaTarget, data: MediaMoveRequest, service: DraftServiceDep
):
    try:
        items = await service.move_media(draft_id, target, data.from_index, data.to_index)
    except CatalogAdminError as e:
        raise http_error(e)
    return _media_response(items)


@router.delete("/{draft_id}/{target}/media/{index}", response_model=CombinedMediaResponse)
async def remove_media(draft_id: str, target: MediaTarget, index: int, service: DraftServiceDep):
    try:
        items = await service.remove_media(draft_id, target, index)
    except CatalogAdminError as e:
        raise http_error(e)
    return _media_response(items)
