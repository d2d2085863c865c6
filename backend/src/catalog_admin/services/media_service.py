"""Media ordering for a single variant.

A variant keeps two typed lists, ``images`` and ``videos``, which are what
the storefront API stores. For display and drag-reordering the two are
projected into one combined list (images first, then videos). After a
reorder the combined list is partitioned back into the two typed lists;
the combined list itself is never stored.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from catalog_admin.core.exceptions import UnclassifiedMediaError, ValidationError
from catalog_admin.schemas.media import CombinedMediaItem, MediaKind, MediaRef

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mov", "avi", "mkv", "webm"})


class UnclassifiedMediaPolicy(str, Enum):
    DROP = "drop"
    REJECT = "reject"


@dataclass
class IncomingFile:
    """A file handed to ``append_uploads`` before it is stored."""

    filename: str
    content_type: str | None
    media: MediaRef


@dataclass
class AppendResult:
    images: list[MediaRef]
    videos: list[MediaRef]
    accepted: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)


def classify_media(filename: str, content_type: str | None = None) -> MediaKind | None:
    """Classify a file as image or video.

    The declared MIME type wins; the filename extension is the fallback.
    Returns None when neither identifies the file.
    """
    if content_type:
        if content_type.startswith("image/"):
            return MediaKind.IMAGE
        if content_type.startswith("video/"):
            return MediaKind.VIDEO

    extension = os.path.splitext(filename)[1].lstrip(".").lower()
    if extension in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if extension in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    return None


def project(images: list[MediaRef], videos: list[MediaRef]) -> list[CombinedMediaItem]:
    """Build the combined list: every image, then every video."""
    combined = [
        CombinedMediaItem(media=media, kind=MediaKind.IMAGE, position=i, source="images")
        for i, media in enumerate(images)
    ]
    combined.extend(
        CombinedMediaItem(media=media, kind=MediaKind.VIDEO, position=i, source="videos")
        for i, media in enumerate(videos)
    )
    return _reindex(combined)


def move(
    combined: list[CombinedMediaItem], from_index: int, to_index: int
) -> list[CombinedMediaItem]:
    """Move one entry to a new position, splice style.

    The entry is removed first and then inserted at ``to_index`` of the
    shortened list, so dragging forward lands exactly on the target slot.
    """
    _check_index(combined, from_index)
    _check_index(combined, to_index)
    if from_index == to_index:
        return list(combined)

    reordered = list(combined)
    item = reordered.pop(from_index)
    reordered.insert(to_index, item)
    return _reindex(reordered)


def rebuild(combined: list[CombinedMediaItem]) -> tuple[list[MediaRef], list[MediaRef]]:
    """Partition a combined list back into ``(images, videos)``.

    Relative order within each kind follows the combined order.
    """
    images = [item.media for item in combined if item.kind == MediaKind.IMAGE]
    videos = [item.media for item in combined if item.kind == MediaKind.VIDEO]
    return images, videos


def reorder(
    images: list[MediaRef], videos: list[MediaRef], from_index: int, to_index: int
) -> tuple[list[MediaRef], list[MediaRef]]:
    """Project, move and rebuild in one step."""
    return rebuild(move(project(images, videos), from_index, to_index))


def remove(
    images: list[MediaRef], videos: list[MediaRef], index: int
) -> tuple[list[MediaRef], list[MediaRef], MediaRef]:
    """Remove the combined entry at ``index`` from its own typed list.

    Returns the new ``(images, videos)`` and the removed reference.
    """
    combined = project(images, videos)
    _check_index(combined, index)
    item = combined[index]

    images = list(images)
    videos = list(videos)
    if item.source == "images":
        removed = images.pop(item.position)
    else:
        removed = videos.pop(item.position)
    return images, videos, removed


def append_uploads(
    images: list[MediaRef],
    videos: list[MediaRef],
    files: list[IncomingFile],
    policy: UnclassifiedMediaPolicy = UnclassifiedMediaPolicy.DROP,
) -> AppendResult:
    """Append new files to the typed list that matches their kind.

    Files that are neither image nor video are dropped, or raise
    UnclassifiedMediaError under the reject policy. Under reject nothing is
    appended when any file is unclassified.
    """
    result = AppendResult(images=list(images), videos=list(videos))

    for incoming in files:
        kind = classify_media(incoming.filename, incoming.content_type)
        if kind is None:
            result.dropped.append(incoming.filename)
            continue
        if kind == MediaKind.IMAGE:
            result.images.append(incoming.media)
        else:
            result.videos.append(incoming.media)
        result.accepted.append(incoming.filename)

    if result.dropped:
        if policy == UnclassifiedMediaPolicy.REJECT:
            raise UnclassifiedMediaError(result.dropped)
        logger.debug(f"Dropped unclassified media files: {result.dropped}")

    return result


def _reindex(combined: list[CombinedMediaItem]) -> list[CombinedMediaItem]:
    return [item.model_copy(update={"index": i}) for i, item in enumerate(combined)]


def _check_index(combined: list[CombinedMediaItem], index: int) -> None:
    if not 0 <= index < len(combined):
        raise ValidationError(
            "invalid_media_index",
            f"Media index {index} is out of range for {len(combined)} item(s)",
        )
