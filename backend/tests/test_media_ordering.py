"""Tests for the combined image/video ordering of a variant."""

import pytest

from catalog_admin.core.exceptions import UnclassifiedMediaError, ValidationError
from catalog_admin.schemas.media import MediaKind, PersistedMedia, UploadedMedia
from catalog_admin.services import media_service
from catalog_admin.services.media_service import (
    IncomingFile,
    UnclassifiedMediaPolicy,
    classify_media,
)


def _incoming(filename: str, content_type: str | None = None) -> IncomingFile:
    return IncomingFile(
        filename=filename,
        content_type=content_type,
        media=UploadedMedia(handle=filename, filename=filename, content_type=content_type),
    )


class TestProjection:
    """Test building the combined list."""

    def test_images_come_before_videos(self, image_a, image_b, video_a):
        combined = media_service.project([image_a, image_b], [video_a])

        assert [item.kind for item in combined] == [
            MediaKind.IMAGE,
            MediaKind.IMAGE,
            MediaKind.VIDEO,
        ]
        assert [item.position for item in combined] == [0, 1, 0]
        assert [item.index for item in combined] == [0, 1, 2]

    def test_primary_label_follows_first_entry(self, image_a, video_a):
        combined = media_service.project([image_a], [video_a])

        assert combined[0].is_primary
        assert combined[0].label == "Primary image"
        assert not combined[1].is_primary

        videos_only = media_service.project([], [video_a])
        assert videos_only[0].label == "Primary video"

    def test_round_trip_without_changes(self, image_a, image_b, video_a, video_b):
        """Rebuild(Project(v)) gives back the same lists."""
        images, videos = media_service.rebuild(
            media_service.project([image_a, image_b], [video_a, video_b])
        )

        assert images == [image_a, image_b]
        assert videos == [video_a, video_b]

    def test_empty_variant(self):
        assert media_service.project([], []) == []
        assert media_service.rebuild([]) == ([], [])


class TestMove:
    """Test splice-style moves."""

    def test_move_keeps_every_item(self, image_a, image_b, video_a, video_b):
        combined = media_service.project([image_a, image_b], [video_a, video_b])

        for from_index in range(len(combined)):
            for to_index in range(len(combined)):
                moved = media_service.move(combined, from_index, to_index)
                assert len(moved) == len(combined)
                assert sorted(m.media.url for m in moved) == sorted(
                    m.media.url for m in combined
                )

    def test_move_forward_lands_on_target(self, image_a, image_b, video_a):
        combined = media_service.project([image_a, image_b], [video_a])

        moved = media_service.move(combined, 0, 2)

        assert [m.media for m in moved] == [image_b, video_a, image_a]
        assert [m.index for m in moved] == [0, 1, 2]

    def test_same_index_is_noop(self, image_a, video_a):
        combined = media_service.project([image_a], [video_a])

        assert media_service.move(combined, 1, 1) == combined

    def test_video_moved_to_front(self, image_a, image_b, video_a):
        """Moving the video ahead of both images keeps image order."""
        combined = media_service.project([image_a, image_b], [video_a])

        images, videos = media_service.rebuild(media_service.move(combined, 2, 0))

        assert videos[0] == video_a
        assert images == [image_a, image_b]

    def test_out_of_range_index(self, image_a):
        combined = media_service.project([image_a], [])

        with pytest.raises(ValidationError) as exc:
            media_service.move(combined, 0, 3)
        assert exc.value.reason == "invalid_media_index"

    def test_reorder_swaps_images(self, image_a, image_b):
        images, videos = media_service.reorder([image_a, image_b], [], 1, 0)

        assert images == [image_b, image_a]
        assert videos == []


class TestRemove:
    """Test removing through the combined index."""

    def test_remove_video_by_combined_index(self, image_a, video_a, video_b):
        images, videos, removed = media_service.remove([image_a], [video_a, video_b], 2)

        assert removed == video_b
        assert images == [image_a]
        assert videos == [video_a]

    def test_remove_image(self, image_a, image_b, video_a):
        images, videos, removed = media_service.remove([image_a, image_b], [video_a], 0)

        assert removed == image_a
        assert images == [image_b]
        assert videos == [video_a]

    def test_remove_does_not_touch_inputs(self, image_a, video_a):
        images = [image_a]
        videos = [video_a]

        media_service.remove(images, videos, 0)

        assert images == [image_a]

    def test_remove_from_empty(self):
        with pytest.raises(ValidationError):
            media_service.remove([], [], 0)


class TestClassification:
    """Test image/video detection for incoming files."""

    @pytest.mark.parametrize(
        "filename,content_type,expected",
        [
            ("front.JPG", None, MediaKind.IMAGE),
            ("swatch.webp", None, MediaKind.IMAGE),
            ("walk.mov", None, MediaKind.VIDEO),
            ("walk.mkv", None, MediaKind.VIDEO),
            ("blob", "image/heic", MediaKind.IMAGE),
            ("clip.bin", "video/quicktime", MediaKind.VIDEO),
            ("sizes.pdf", "application/pdf", None),
            ("notes.txt", None, None),
        ],
    )
    def test_classify(self, filename, content_type, expected):
        assert classify_media(filename, content_type) == expected

    def test_declared_type_wins_over_extension(self):
        assert classify_media("clip.mp4", "image/png") == MediaKind.IMAGE


class TestAppendUploads:
    """Test appending new files to the typed lists."""

    def test_files_split_by_kind(self, image_a):
        result = media_service.append_uploads(
            [image_a],
            [],
            [_incoming("back.png"), _incoming("walk.mp4"), _incoming("detail", "image/jpeg")],
        )

        assert len(result.images) == 3
        assert len(result.videos) == 1
        assert result.images[0] == image_a
        assert result.accepted == ["back.png", "walk.mp4", "detail"]
        assert result.dropped == []

    def test_unclassified_dropped_silently(self):
        result = media_service.append_uploads([], [], [_incoming("a.jpg"), _incoming("care.pdf")])

        assert len(result.images) == 1
        assert result.dropped == ["care.pdf"]

    def test_unclassified_rejected_under_reject_policy(self):
        with pytest.raises(UnclassifiedMediaError) as exc:
            media_service.append_uploads(
                [],
                [],
                [_incoming("a.jpg"), _incoming("care.pdf")],
                policy=UnclassifiedMediaPolicy.REJECT,
            )
        assert exc.value.filenames == ["care.pdf"]

    def test_inputs_are_not_mutated(self):
        images: list = []
        media_service.append_uploads(images, [], [_incoming("a.jpg")])

        assert images == []


def test_persisted_and_uploaded_mix(image_a, uploaded_image, video_a):
    """Both reference kinds move through the engine unchanged."""
    combined = media_service.project([image_a, uploaded_image], [video_a])
    images, videos = media_service.rebuild(media_service.move(combined, 1, 0))

    assert images == [uploaded_image, image_a]
    assert isinstance(images[0], UploadedMedia)
    assert isinstance(images[1], PersistedMedia)
