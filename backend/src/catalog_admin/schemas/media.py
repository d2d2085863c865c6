"""Media reference schemas."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class UploadedMedia(BaseModel):
    """A file received by the service but not yet sent to the storefront API.

    The bytes live in the draft store under ``handle``.
    """

    kind: Literal["uploaded"] = "uploaded"
    handle: str
    filename: str
    content_type: str | None = None
    size: int = 0


class PersistedMedia(BaseModel):
    """A media file already stored by the storefront API."""

    kind: Literal["persisted"] = "persisted"
    url: str


MediaRef = Annotated[Union[UploadedMedia, PersistedMedia], Field(discriminator="kind")]


def media_name(media: UploadedMedia | PersistedMedia) -> str:
    """Display name for a media reference."""
    if isinstance(media, UploadedMedia):
        return media.filename
    return media.url.rsplit("/", 1)[-1] or media.url


class CombinedMediaItem(BaseModel):
    """One entry of the interleaved image/video list used for reordering.

    Derived from a variant's ``images`` and ``videos`` on every read.
    """

    media: MediaRef
    kind: MediaKind
    position: int = Field(..., ge=0, description="Index within its own list")
    source: Literal["images", "videos"]
    index: int = Field(0, ge=0, description="Index within the combined list")

    @property
    def is_primary(self) -> bool:
        return self.index == 0

    @property
    def label(self) -> str:
        if self.is_primary:
            return f"Primary {self.kind.value}"
        return f"{self.kind.value.capitalize()} {self.index + 1}"


class CombinedMediaEntry(BaseModel):
    index: int
    kind: MediaKind
    source: Literal["images", "videos"]
    position: int
    name: str
    label: str
    is_primary: bool
    media: MediaRef


class CombinedMediaResponse(BaseModel):
    """Combined media list as returned to the admin UI."""

    items: list[CombinedMediaEntry]
    total: int


class MediaMoveRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class MediaUploadResponse(BaseModel):
    accepted: list[str]
    dropped: list[str]
    images: int
    videos: int
