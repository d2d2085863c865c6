"""Product draft assembly and submission."""

import logging
from dataclasses import dataclass
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from catalog_admin.core.exceptions import (
    CollaboratorError,
    DraftNotFoundError,
    SubmissionInProgressError,
    ValidationError,
)
from catalog_admin.middleware.metrics import record_draft_submission, record_media_files
from catalog_admin.schemas.media import (
    CombinedMediaItem,
    MediaRef,
    PersistedMedia,
    UploadedMedia,
)
from catalog_admin.schemas.product import (
    DraftFieldsUpdate,
    PersistedProduct,
    ProductDraft,
    ProductPayload,
    ProductStatus,
    SubmitResult,
    VariantPayload,
)
from catalog_admin.schemas.variant import (
    CatalogOption,
    Variant,
    VariantInput,
    VariantInputUpdate,
)
from catalog_admin.services import media_service
from catalog_admin.services.catalog_client import CatalogClient
from catalog_admin.services.draft_store import DraftStore, upload_handles
from catalog_admin.services.media_service import (
    AppendResult,
    IncomingFile,
    UnclassifiedMediaPolicy,
)
from catalog_admin.services.variant_editor import MediaTarget, VariantEditor
from catalog_admin.services.variant_rules import COLOR_OPTIONS, SIZE_OPTIONS, is_custom

logger = logging.getLogger(__name__)


def can_submit(draft: ProductDraft) -> None:
    """Check that a draft is complete enough to submit.

    Raises:
        ValidationError: Lists every missing requirement
    """
    problems = []
    if not draft.title.strip():
        problems.append("title is required")
    if not draft.category.strip():
        problems.append("category is required")
    if len(draft.variants) < 1:
        problems.append("at least one variant is required")

    if problems:
        raise ValidationError(
            "incomplete",
            "Please fill in all required fields and add at least one variant",
            problems=problems,
        )


def temporary_product_id() -> str:
    """Placeholder id for a product the storefront API has not stored yet."""
    return f"tmp-{uuid4().hex}"


def build_payload(draft: ProductDraft, is_editing: bool | None = None) -> ProductPayload:
    """Assemble the whole-product body for the storefront API.

    Editing carries the persisted id and status forward; a new product gets
    a temporary id and ``Active`` status. All media must already be persisted.
    """
    if is_editing is None:
        is_editing = draft.is_editing

    if is_editing:
        if not draft.product_id:
            raise ValidationError("missing_product_id", "Edited product has no persisted id")
        product_id = draft.product_id
        status = draft.status
    else:
        product_id = temporary_product_id()
        status = ProductStatus.ACTIVE

    return ProductPayload(
        id=product_id,
        title=draft.title.strip(),
        description=draft.description,
        category=draft.category,
        subcategory=draft.subcategory,
        style_number=draft.style_number,
        fabric=draft.fabric,
        status=status,
        variants=[_variant_payload(v) for v in draft.variants],
    )


def seed_draft(product: PersistedProduct) -> ProductDraft:
    """Open an edit draft from a product stored by the storefront API."""
    variants = []
    for persisted in product.variants:
        variants.append(
            Variant(
                server_id=persisted.server_id,
                size=persisted.size,
                color=persisted.color,
                custom_size=persisted.size if is_custom(persisted.size, SIZE_OPTIONS) else None,
                custom_color=persisted.color if is_custom(persisted.color, COLOR_OPTIONS) else None,
                images=[PersistedMedia(url=url) for url in persisted.images],
                videos=[PersistedMedia(url=url) for url in persisted.videos],
                price=persisted.price,
                stock=persisted.stock,
                style_number=persisted.style_number,
                fabric=persisted.fabric,
            )
        )

    return ProductDraft(
        product_id=product.id,
        is_editing=True,
        title=product.title,
        description=product.description or "",
        category=product.category,
        subcategory=product.subcategory or "",
        style_number=product.style_number or "",
        fabric=product.fabric or "",
        status=product.status,
        variants=variants,
    )


def _variant_payload(variant: Variant) -> VariantPayload:
    return VariantPayload(
        server_id=variant.server_id,
        size=variant.size,
        color=variant.color,
        images=[_media_url(m) for m in variant.images],
        videos=[_media_url(m) for m in variant.videos],
        price=variant.price,
        stock=variant.stock,
        style_number=variant.style_number,
        fabric=variant.fabric,
    )


def _media_url(media: MediaRef) -> str:
    if isinstance(media, PersistedMedia):
        return media.url
    raise ValidationError(
        "unpersisted_media", f"Media file {media.filename} has not been uploaded"
    )


@dataclass
class UploadedFile:
    """Raw file received from the admin UI."""

    filename: str
    content_type: str | None
    content: bytes


class DraftService:
    """Service class for draft editing sessions."""

    def __init__(
        self,
        store: DraftStore,
        client: CatalogClient,
        enforce_unique_variants: bool = False,
        media_policy: UnclassifiedMediaPolicy = UnclassifiedMediaPolicy.DROP,
        submit_lock_ttl: int = 30,
        sizes: list[CatalogOption] = SIZE_OPTIONS,
        colors: list[CatalogOption] = COLOR_OPTIONS,
    ):
        self.store = store
        self.client = client
        self.enforce_unique_variants = enforce_unique_variants
        self.media_policy = media_policy
        self.submit_lock_ttl = submit_lock_ttl
        self.sizes = sizes
        self.colors = colors

    def _editor(self, draft: ProductDraft) -> VariantEditor:
        return VariantEditor(
            draft,
            enforce_unique=self.enforce_unique_variants,
            sizes=self.sizes,
            colors=self.colors,
        )

    # ==================== Session ====================

    async def open_draft(self, product_id: str | None = None) -> ProductDraft:
        """Start an editing session, blank or seeded from a persisted product.

        Raises:
            CollaboratorError: Product could not be fetched or parsed
        """
        if product_id is None:
            draft = ProductDraft()
        else:
            data = (await self.client.get_product(product_id)).unwrap()
            try:
                product = PersistedProduct.model_validate(data)
            except PydanticValidationError as e:
                logger.warning(f"Unreadable product {product_id} from storefront API: {e}")
                raise CollaboratorError(f"Product {product_id} could not be read") from e
            draft = seed_draft(product)

        await self.store.save(draft)
        logger.info(f"Opened draft {draft.draft_id} (product={product_id})")
        return draft

    async def get_draft(self, draft_id: str) -> ProductDraft:
        draft = await self.store.load(draft_id)
        if draft is None:
            raise DraftNotFoundError(f"Draft {draft_id} not found")
        return draft

    async def discard_draft(self, draft_id: str) -> None:
        draft = await self.get_draft(draft_id)
        await self.store.delete(draft)
        logger.info(f"Discarded draft {draft_id}")

    async def update_fields(self, draft_id: str, update: DraftFieldsUpdate) -> ProductDraft:
        draft = await self.get_draft(draft_id)
        for name, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(draft, name, value)
        await self.store.save(draft)
        return draft

    # ==================== Variants ====================

    async def update_composing(self, draft_id: str, update: VariantInputUpdate) -> VariantInput:
        draft = await self.get_draft(draft_id)
        buffer = self._editor(draft).update_composing(update)
        await self.store.save(draft)
        return buffer

    async def add_variant(self, draft_id: str) -> Variant:
        draft = await self.get_draft(draft_id)
        variant = self._editor(draft).add_variant()
        await self.store.save(draft)
        return variant

    async def start_edit(self, draft_id: str, variant_id: str) -> VariantInput:
        draft = await self.get_draft(draft_id)
        before = upload_handles(draft)
        buffer = self._editor(draft).start_edit(variant_id)
        await self._save_and_release_orphans(draft, before)
        return buffer

    async def update_edit(self, draft_id: str, update: VariantInputUpdate) -> VariantInput:
        draft = await self.get_draft(draft_id)
        buffer = self._editor(draft).update_edit(update)
        await self.store.save(draft)
        return buffer

    async def save_edit(self, draft_id: str) -> Variant:
        draft = await self.get_draft(draft_id)
        before = upload_handles(draft)
        variant = self._editor(draft).save_edit()
        await self._save_and_release_orphans(draft, before)
        return variant

    async def cancel_edit(self, draft_id: str) -> ProductDraft:
        draft = await self.get_draft(draft_id)
        before = upload_handles(draft)
        self._editor(draft).cancel_edit()
        await self._save_and_release_orphans(draft, before)
        return draft

    async def remove_variant(self, draft_id: str, variant_id: str) -> Variant:
        draft = await self.get_draft(draft_id)
        before = upload_handles(draft)
        variant = self._editor(draft).remove_variant(variant_id)
        await self._save_and_release_orphans(draft, before)
        return variant

    # ==================== Media ====================

    async def list_media(
        self, draft_id: str, target: MediaTarget
    ) -> list[CombinedMediaItem]:
        draft = await self.get_draft(draft_id)
        images, videos = self._editor(draft).media_of(target)
        return media_service.project(images, videos)

    async def add_media(
        self, draft_id: str, target: MediaTarget, files: list[UploadedFile]
    ) -> AppendResult:
        """Store incoming files and append them to the target's media lists.

        Raises:
            UnclassifiedMediaError: Under the reject policy; nothing is stored
        """
        draft = await self.get_draft(draft_id)
        editor = self._editor(draft)
        images, videos = editor.media_of(target)

        # Classify before storing anything so a rejection leaves no orphans
        incoming = [
            IncomingFile(
                filename=f.filename,
                content_type=f.content_type,
                media=UploadedMedia(
                    handle="",
                    filename=f.filename,
                    content_type=f.content_type,
                    size=len(f.content),
                ),
            )
            for f in files
        ]
        result = media_service.append_uploads(images, videos, incoming, policy=self.media_policy)

        for f, entry in zip(files, incoming):
            if media_service.classify_media(f.filename, f.content_type) is None:
                continue
            entry.media.handle = await self.store.put_upload(draft_id, f.content)

        editor.set_media(target, result.images, result.videos)
        await self.store.save(draft)
        record_media_files(len(result.accepted), len(result.dropped))
        return result

    async def move_media(
        self, draft_id: str, target: MediaTarget, from_index: int, to_index: int
    ) -> list[CombinedMediaItem]:
        draft = await self.get_draft(draft_id)
        editor = self._editor(draft)
        images, videos = media_service.reorder(
            *editor.media_of(target), from_index=from_index, to_index=to_index
        )
        editor.set_media(target, images, videos)
        await self.store.save(draft)
        return media_service.project(images, videos)

    async def remove_media(
        self, draft_id: str, target: MediaTarget, index: int
    ) -> list[CombinedMediaItem]:
        draft = await self.get_draft(draft_id)
        before = upload_handles(draft)
        editor = self._editor(draft)
        images, videos, _ = media_service.remove(*editor.media_of(target), index=index)
        editor.set_media(target, images, videos)
        await self._save_and_release_orphans(draft, before)
        return media_service.project(images, videos)

    async def _save_and_release_orphans(self, draft: ProductDraft, before: set[str]) -> None:
        await self.store.save(draft)
        for handle in before - upload_handles(draft):
            await self.store.delete_upload(draft.draft_id, handle)

    # ==================== Submission ====================

    async def submit(self, draft_id: str) -> SubmitResult:
        """Send the whole draft to the storefront API.

        Unpersisted media is uploaded first. On success the draft and its
        uploads are discarded; on any failure the stored draft is untouched.

        Raises:
            SubmissionInProgressError: Another submit of this draft is running
            ValidationError: Draft is incomplete
            CollaboratorError: Upload or save failed
        """
        acquired, owner_id = await self.store.acquire_submit_lock(
            draft_id, ttl=self.submit_lock_ttl
        )
        if not acquired:
            raise SubmissionInProgressError(f"Draft {draft_id} is already being submitted")

        try:
            draft = await self.get_draft(draft_id)
            can_submit(draft)

            resolved = await self._persist_media(draft, owner_id)
            payload = build_payload(resolved).to_wire()

            if resolved.is_editing:
                data = (await self.client.update_product(resolved.product_id, payload)).unwrap()
            else:
                data = (await self.client.create_product(payload)).unwrap()

            product_id = _returned_id(data) or resolved.product_id or payload["id"]
            await self.store.delete(draft)
            record_draft_submission("success")
            logger.info(f"Submitted draft {draft_id} as product {product_id}")

            return SubmitResult(
                product_id=product_id,
                created=not resolved.is_editing,
                variant_count=len(resolved.variants),
            )
        except (ValidationError, CollaboratorError, SubmissionInProgressError):
            record_draft_submission("failed")
            raise
        finally:
            await self.store.release_submit_lock(draft_id, owner_id)

    async def _persist_media(self, draft: ProductDraft, owner_id: str) -> ProductDraft:
        """Copy of ``draft`` whose variant media all point at stored files.

        The submit lock is renewed before every upload so it outlives slow
        multi-file submissions.
        """
        resolved = draft.model_copy(deep=True)
        uploaded: dict[str, PersistedMedia] = {}

        for variant in resolved.variants:
            variant.images = [
                await self._persist(draft.draft_id, owner_id, m, uploaded) for m in variant.images
            ]
            variant.videos = [
                await self._persist(draft.draft_id, owner_id, m, uploaded) for m in variant.videos
            ]
        return resolved

    async def _persist(
        self,
        draft_id: str,
        owner_id: str,
        media: MediaRef,
        uploaded: dict[str, PersistedMedia],
    ) -> PersistedMedia:
        if isinstance(media, PersistedMedia):
            return media
        if media.handle in uploaded:
            return uploaded[media.handle]

        content = await self.store.get_upload(draft_id, media.handle)
        if content is None:
            raise ValidationError(
                "upload_expired", f"Media file {media.filename} is no longer available"
            )

        if not await self.store.extend_submit_lock(draft_id, owner_id, self.submit_lock_ttl):
            raise SubmissionInProgressError(f"Submit lock on draft {draft_id} expired during upload")
        path = (
            await self.client.upload(media.filename, content, media.content_type, folder="products")
        ).unwrap()
        uploaded[media.handle] = PersistedMedia(url=path)
        return uploaded[media.handle]


def _returned_id(data) -> str | None:
    if isinstance(data, dict):
        value = data.get("_id") or data.get("id")
        return str(value) if value is not None else None
    return None
