"""Variant lifecycle within one product draft.

A variant is Composing (in the staging area), Listed (on the product) or
Editing (one listed variant open in the edit buffer). Only one variant is
ever under edit; opening a second edit session cancels the first.
"""

import logging
from enum import Enum

from catalog_admin.core.exceptions import EditorStateError, VariantNotFoundError
from catalog_admin.schemas.media import MediaRef
from catalog_admin.schemas.product import ProductDraft
from catalog_admin.schemas.variant import (
    CUSTOM_OPTION,
    CatalogOption,
    Variant,
    VariantInput,
    VariantInputUpdate,
)
from catalog_admin.services.variant_rules import (
    COLOR_OPTIONS,
    SIZE_OPTIONS,
    selection_for,
    validate_variant,
)

logger = logging.getLogger(__name__)


class VariantState(str, Enum):
    LISTED = "listed"
    EDITING = "editing"


class MediaTarget(str, Enum):
    COMPOSING = "composing"
    EDITING = "editing"


class VariantEditor:
    """Applies variant transitions to a draft in place."""

    def __init__(
        self,
        draft: ProductDraft,
        enforce_unique: bool = False,
        sizes: list[CatalogOption] = SIZE_OPTIONS,
        colors: list[CatalogOption] = COLOR_OPTIONS,
    ):
        self.draft = draft
        self.enforce_unique = enforce_unique
        self.sizes = sizes
        self.colors = colors

    # ==================== Composing ====================

    def update_composing(self, update: VariantInputUpdate) -> VariantInput:
        """Merge field changes into the staging buffer."""
        self.draft.composing = _apply_update(self.draft.composing, update)
        return self.draft.composing

    def add_variant(self) -> Variant:
        """Validate the staging buffer and append it to the product.

        Raises:
            ValidationError: Buffer is incomplete; it is left as is
        """
        buffer = self.draft.composing
        size, color = validate_variant(
            buffer,
            self.draft.variants,
            sizes=self.sizes,
            colors=self.colors,
            enforce_unique=self.enforce_unique,
        )

        variant = Variant(
            size=size,
            color=color,
            custom_size=buffer.custom_size.strip() if buffer.size == CUSTOM_OPTION else None,
            custom_color=buffer.custom_color.strip() if buffer.color == CUSTOM_OPTION else None,
            images=list(buffer.images),
            videos=list(buffer.videos),
            price=buffer.price,
            stock=buffer.stock,
            style_number=buffer.style_number or None,
            fabric=buffer.fabric or None,
        )
        self.draft.variants.append(variant)
        self.draft.composing = VariantInput()

        logger.info(
            f"Draft {self.draft.draft_id}: added variant {variant.id} ({size}/{color})"
        )
        return variant

    # ==================== Editing ====================

    def start_edit(self, variant_id: str) -> VariantInput:
        """Open the edit buffer for a listed variant.

        Any edit session already open on another variant is discarded first;
        re-opening the variant already being edited keeps its buffer.
        """
        variant = self._get_variant(variant_id)

        if self.draft.editing_variant_id == variant_id and self.draft.edit_buffer is not None:
            return self.draft.edit_buffer

        if self.draft.editing_variant_id not in (None, variant_id):
            logger.info(
                f"Draft {self.draft.draft_id}: cancelling edit of "
                f"{self.draft.editing_variant_id} to edit {variant_id}"
            )
            self.cancel_edit()

        size, custom_size = selection_for(variant.size, self.sizes)
        color, custom_color = selection_for(variant.color, self.colors)

        self.draft.editing_variant_id = variant.id
        self.draft.edit_buffer = VariantInput(
            size=size,
            custom_size=custom_size,
            color=color,
            custom_color=custom_color,
            images=list(variant.images),
            videos=list(variant.videos),
            price=variant.price,
            stock=variant.stock,
            style_number=variant.style_number or "",
            fabric=variant.fabric or "",
        )
        return self.draft.edit_buffer

    def update_edit(self, update: VariantInputUpdate) -> VariantInput:
        buffer = self._require_edit_buffer()
        self.draft.edit_buffer = _apply_update(buffer, update)
        return self.draft.edit_buffer

    def save_edit(self) -> Variant:
        """Validate the edit buffer and replace the listed variant in place.

        Raises:
            EditorStateError: No edit session is open
            ValidationError: Buffer is invalid; the session stays open
        """
        buffer = self._require_edit_buffer()
        original = self._get_variant(self.draft.editing_variant_id)

        size, color = validate_variant(
            buffer,
            self.draft.variants,
            sizes=self.sizes,
            colors=self.colors,
            enforce_unique=self.enforce_unique,
            exclude_id=original.id,
        )

        updated = original.model_copy(
            update={
                "size": size,
                "color": color,
                "custom_size": buffer.custom_size.strip() if buffer.size == CUSTOM_OPTION else None,
                "custom_color": buffer.custom_color.strip() if buffer.color == CUSTOM_OPTION else None,
                "images": list(buffer.images),
                "videos": list(buffer.videos),
                "price": buffer.price,
                "stock": buffer.stock,
                "style_number": buffer.style_number or None,
                "fabric": buffer.fabric or None,
            }
        )
        self.draft.variants = [
            updated if v.id == original.id else v for v in self.draft.variants
        ]
        self.draft.editing_variant_id = None
        self.draft.edit_buffer = None
        return updated

    def cancel_edit(self) -> None:
        """Discard the edit buffer; the listed variant is unchanged."""
        self.draft.editing_variant_id = None
        self.draft.edit_buffer = None

    # ==================== Listing ====================

    def remove_variant(self, variant_id: str) -> Variant:
        """Remove a listed variant from the draft."""
        variant = self._get_variant(variant_id)
        if self.draft.editing_variant_id == variant_id:
            self.cancel_edit()
        self.draft.variants = [v for v in self.draft.variants if v.id != variant_id]
        return variant

    def state_of(self, variant_id: str) -> VariantState:
        self._get_variant(variant_id)
        if self.draft.editing_variant_id == variant_id:
            return VariantState.EDITING
        return VariantState.LISTED

    # ==================== Media targets ====================

    def media_of(self, target: MediaTarget) -> tuple[list[MediaRef], list[MediaRef]]:
        buffer = self._buffer_for(target)
        return buffer.images, buffer.videos

    def set_media(
        self, target: MediaTarget, images: list[MediaRef], videos: list[MediaRef]
    ) -> None:
        buffer = self._buffer_for(target)
        buffer.images = images
        buffer.videos = videos

    def _buffer_for(self, target: MediaTarget) -> VariantInput:
        if target == MediaTarget.EDITING:
            return self._require_edit_buffer()
        return self.draft.composing

    def _require_edit_buffer(self) -> VariantInput:
        if self.draft.edit_buffer is None or self.draft.editing_variant_id is None:
            raise EditorStateError("No variant is being edited")
        return self.draft.edit_buffer

    def _get_variant(self, variant_id: str) -> Variant:
        for variant in self.draft.variants:
            if variant.id == variant_id:
                return variant
        raise VariantNotFoundError(f"Variant {variant_id} not found")


def _apply_update(buffer: VariantInput, update: VariantInputUpdate) -> VariantInput:
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    # Switching away from "custom" clears the free text
    if "size" in changes and changes["size"] != CUSTOM_OPTION and "custom_size" not in changes:
        changes["custom_size"] = ""
    if "color" in changes and changes["color"] != CUSTOM_OPTION and "custom_color" not in changes:
        changes["custom_color"] = ""
    return buffer.model_copy(update=changes)
