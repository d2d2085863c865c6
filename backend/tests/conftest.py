"""Pytest configuration and fixtures for testing."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_admin.schemas.envelope import ApiResponse
from catalog_admin.schemas.media import PersistedMedia, UploadedMedia
from catalog_admin.schemas.product import ProductDraft
from catalog_admin.schemas.variant import Variant
from catalog_admin.services.draft_store import upload_handles


class InMemoryDraftStore:
    """DraftStore stand-in keeping drafts and uploads in dicts."""

    def __init__(self):
        self.drafts: dict[str, str] = {}
        self.uploads: dict[tuple[str, str], bytes] = {}
        self.locks: dict[str, str] = {}
        self.lock_extensions: list[str] = []
        self._counter = 0

    async def save(self, draft: ProductDraft) -> None:
        self.drafts[draft.draft_id] = draft.model_dump_json()

    async def load(self, draft_id: str) -> ProductDraft | None:
        raw = self.drafts.get(draft_id)
        return ProductDraft.model_validate_json(raw) if raw else None

    async def delete(self, draft: ProductDraft) -> None:
        self.drafts.pop(draft.draft_id, None)
        for handle in upload_handles(draft):
            self.uploads.pop((draft.draft_id, handle), None)

    async def put_upload(self, draft_id: str, content: bytes) -> str:
        self._counter += 1
        handle = f"h{self._counter}"
        self.uploads[(draft_id, handle)] = content
        return handle

    async def get_upload(self, draft_id: str, handle: str) -> bytes | None:
        return self.uploads.get((draft_id, handle))

    async def delete_upload(self, draft_id: str, handle: str) -> None:
        self.uploads.pop((draft_id, handle), None)

    async def acquire_submit_lock(self, draft_id: str, owner_id: str | None = None, ttl: int = 30):
        if draft_id in self.locks:
            return (False, owner_id or "other")
        owner_id = owner_id or "owner"
        self.locks[draft_id] = owner_id
        return (True, owner_id)

    async def extend_submit_lock(self, draft_id: str, owner_id: str, ttl: int = 30) -> bool:
        self.lock_extensions.append(draft_id)
        return self.locks.get(draft_id) == owner_id

    async def release_submit_lock(self, draft_id: str, owner_id: str) -> bool:
        if self.locks.get(draft_id) == owner_id:
            del self.locks[draft_id]
            return True
        return False


# Mock Redis client fixture
@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.expire = AsyncMock(return_value=True)
    return redis


@pytest.fixture
def draft_store() -> InMemoryDraftStore:
    return InMemoryDraftStore()


# Mock storefront client fixture
@pytest.fixture
def mock_client() -> MagicMock:
    """CatalogClient mock whose calls succeed with empty data by default."""
    client = MagicMock()
    ok = ApiResponse(data={})
    for name in (
        "get_product",
        "create_product",
        "update_product",
        "delete_product",
        "toggle_product_status",
        "list_categories",
        "create_category",
        "update_category",
        "delete_category",
        "add_subcategory",
        "update_subcategory",
        "delete_subcategory",
        "list_products",
        "list_orders",
        "update_order_status",
        "upload",
    ):
        setattr(client, name, AsyncMock(return_value=ok))
    return client


@pytest.fixture
def image_a() -> PersistedMedia:
    return PersistedMedia(url="/uploads/products/a.jpg")


@pytest.fixture
def image_b() -> PersistedMedia:
    return PersistedMedia(url="/uploads/products/b.png")


@pytest.fixture
def video_a() -> PersistedMedia:
    return PersistedMedia(url="/uploads/products/a.mp4")


@pytest.fixture
def video_b() -> PersistedMedia:
    return PersistedMedia(url="/uploads/products/b.webm")


@pytest.fixture
def uploaded_image() -> UploadedMedia:
    return UploadedMedia(handle="h-front", filename="front.jpg", content_type="image/jpeg", size=4)


@pytest.fixture
def red_m() -> Variant:
    return Variant(size="M", color="Red", price=Decimal("499"), stock=10)


@pytest.fixture
def red_l() -> Variant:
    return Variant(size="L", color="Red", price=Decimal("549"), stock=5)


@pytest.fixture
def complete_draft(red_m: Variant) -> ProductDraft:
    """A new-product draft that passes the submission gate."""
    return ProductDraft(title="Linen Tee", category="Tops", variants=[red_m])
