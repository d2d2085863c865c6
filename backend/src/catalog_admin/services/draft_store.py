"""Redis-backed storage for product drafts and their pending uploads."""

import base64
import uuid

from redis.asyncio import Redis

from catalog_admin.schemas.product import ProductDraft


class DraftStore:
    """Keeps one JSON document per draft plus the bytes of files not yet uploaded.

    Key patterns:
        draft:{draft_id}                     draft JSON
        draft_upload:{draft_id}:{handle}     base64 file content
        draft_submit_lock:{draft_id}         owner id of an outstanding submit
    """

    # Lua script for safe lock release (only delete own lock)
    RELEASE_LOCK_SCRIPT = """
    if redis.call("GET", KEYS[1]) == ARGV[1] then
        return redis.call("DEL", KEYS[1])
    else
        return 0
    end
    """

    # Lua script for renewing a lock only while still holding it
    EXTEND_LOCK_SCRIPT = """
    if redis.call("GET", KEYS[1]) == ARGV[1] then
        return redis.call("EXPIRE", KEYS[1], ARGV[2])
    else
        return 0
    end
    """

    def __init__(self, redis: Redis, ttl: int = 6 * 3600):
        """Initialize the draft store.

        Args:
            redis: Async Redis client instance
            ttl: Seconds an untouched draft is kept
        """
        self.redis = redis
        self.ttl = ttl
        self._release_lock_script = None
        self._extend_lock_script = None

    async def _get_release_lock_script(self):
        """Get or register the release lock Lua script."""
        if self._release_lock_script is None:
            self._release_lock_script = self.redis.register_script(self.RELEASE_LOCK_SCRIPT)
        return self._release_lock_script

    async def _get_extend_lock_script(self):
        if self._extend_lock_script is None:
            self._extend_lock_script = self.redis.register_script(self.EXTEND_LOCK_SCRIPT)
        return self._extend_lock_script

    # ==================== Drafts ====================

    async def save(self, draft: ProductDraft) -> None:
        """Write a draft and refresh its TTL (and that of its uploads)."""
        await self.redis.set(f"draft:{draft.draft_id}", draft.model_dump_json(), ex=self.ttl)
        for handle in upload_handles(draft):
            await self.redis.expire(f"draft_upload:{draft.draft_id}:{handle}", self.ttl)

    async def load(self, draft_id: str) -> ProductDraft | None:
        raw = await self.redis.get(f"draft:{draft_id}")
        if raw is None:
            return None
        return ProductDraft.model_validate_json(raw)

    async def delete(self, draft: ProductDraft) -> None:
        """Remove a draft together with every upload it still references."""
        keys = [f"draft:{draft.draft_id}"]
        keys.extend(
            f"draft_upload:{draft.draft_id}:{handle}" for handle in upload_handles(draft)
        )
        await self.redis.delete(*keys)

    # ==================== Uploads ====================

    async def put_upload(self, draft_id: str, content: bytes) -> str:
        """Store file content for a draft and return its handle."""
        handle = uuid.uuid4().hex
        encoded = base64.b64encode(content).decode("ascii")
        await self.redis.set(f"draft_upload:{draft_id}:{handle}", encoded, ex=self.ttl)
        return handle

    async def get_upload(self, draft_id: str, handle: str) -> bytes | None:
        encoded = await self.redis.get(f"draft_upload:{draft_id}:{handle}")
        if encoded is None:
            return None
        return base64.b64decode(encoded)

    async def delete_upload(self, draft_id: str, handle: str) -> None:
        await self.redis.delete(f"draft_upload:{draft_id}:{handle}")

    # ==================== Submit lock ====================

    async def acquire_submit_lock(
        self, draft_id: str, owner_id: str | None = None, ttl: int = 30
    ) -> tuple[bool, str]:
        """Mark a draft as having a submission in flight.

        Uses SET NX EX so only one submission per draft is outstanding.

        Returns:
            Tuple of (acquired, owner_id)
        """
        if owner_id is None:
            owner_id = uuid.uuid4().hex
        acquired = await self.redis.set(
            f"draft_submit_lock:{draft_id}", owner_id, nx=True, ex=ttl
        )
        return (bool(acquired), owner_id)

    async def release_submit_lock(self, draft_id: str, owner_id: str) -> bool:
        """Release the submit lock if ``owner_id`` still holds it."""
        script = await self._get_release_lock_script()
        result = await script(keys=[f"draft_submit_lock:{draft_id}"], args=[owner_id])
        return result == 1

    async def extend_submit_lock(self, draft_id: str, owner_id: str, ttl: int = 30) -> bool:
        """Reset the submit lock TTL; False when ``owner_id`` no longer holds it."""
        script = await self._get_extend_lock_script()
        result = await script(keys=[f"draft_submit_lock:{draft_id}"], args=[owner_id, ttl])
        return result == 1


def upload_handles(draft: ProductDraft) -> set[str]:
    """Handles of every uploaded-but-unpersisted file the draft references."""
    buffers = [draft.composing, *draft.variants]
    if draft.edit_buffer is not None:
        buffers.append(draft.edit_buffer)

    handles = set()
    for buffer in buffers:
        for media in [*buffer.images, *buffer.videos]:
            if media.kind == "uploaded":
                handles.add(media.handle)
    return handles
