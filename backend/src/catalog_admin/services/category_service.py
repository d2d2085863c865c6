"""Category tree consistency rules and mutations.

The storefront API owns the tree. Every mutation validates against a fresh
snapshot, sends one request, and refetches the whole tree on success; the
local copy is never patched.
"""

import logging

from catalog_admin.core.exceptions import (
    CategoryNotFoundError,
    DuplicateNameError,
    ValidationError,
)
from catalog_admin.schemas.category import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    DeletePreview,
    Subcategory,
)
from catalog_admin.services.catalog_client import CatalogClient

logger = logging.getLogger(__name__)


def validate_name(
    name: str,
    tree: list[Category],
    parent_id: str | None = None,
    exclude_id: str | None = None,
) -> str:
    """Check a category or subcategory name against its siblings.

    Args:
        name: Proposed name
        tree: Current category snapshot
        parent_id: Parent category for a subcategory, None for top level
        exclude_id: Node being renamed, ignored in the comparison

    Returns:
        The trimmed name

    Raises:
        ValidationError: Name is blank
        CategoryNotFoundError: ``parent_id`` is not in the tree
        DuplicateNameError: A sibling already uses the name (case-insensitive)
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("name_required", "Name is required")

    if parent_id is None:
        siblings: list[Category | Subcategory] = list(tree)
        message = "A category with this name already exists"
    else:
        siblings = list(find_category(tree, parent_id).subcategories)
        message = "A subcategory with this name already exists in this category"

    folded = trimmed.casefold()
    for node in siblings:
        if node.id != exclude_id and node.name.strip().casefold() == folded:
            raise DuplicateNameError(message)
    return trimmed


def find_category(tree: list[Category], category_id: str) -> Category:
    for category in tree:
        if category.id == category_id:
            return category
    raise CategoryNotFoundError(f"Category {category_id} not found")


def find_subcategory(tree: list[Category], category_id: str, subcategory_id: str) -> Subcategory:
    for sub in find_category(tree, category_id).subcategories:
        if sub.id == subcategory_id:
            return sub
    raise CategoryNotFoundError(f"Subcategory {subcategory_id} not found")


def delete_preview(tree: list[Category], category_id: str) -> DeletePreview:
    """Describe what deleting a top-level category also removes."""
    category = find_category(tree, category_id)
    count = len(category.subcategories)
    warning = None
    if count:
        warning = f"This will also delete all {count} subcategories."
    return DeletePreview(
        category_id=category.id,
        name=category.name,
        subcategory_count=count,
        requires_confirmation=count > 0,
        warning=warning,
    )


class CategoryService:
    """Service class for category tree operations."""

    def __init__(self, client: CatalogClient):
        self.client = client

    async def get_tree(self) -> list[Category]:
        """Fetch the current category tree.

        Raises:
            CollaboratorError: Storefront API call failed
        """
        data = (await self.client.list_categories()).unwrap() or []
        return [Category.model_validate(item) for item in data]

    async def preview_delete(self, category_id: str) -> DeletePreview:
        return delete_preview(await self.get_tree(), category_id)

    # ==================== Categories ====================

    async def add_category(self, data: CategoryCreate) -> list[Category]:
        tree = await self.get_tree()
        name = validate_name(data.name, tree)

        (await self.client.create_category({"name": name, "status": data.status.value})).unwrap()
        logger.info(f"Created category {name!r}")
        return await self.get_tree()

    async def update_category(self, category_id: str, data: CategoryUpdate) -> list[Category]:
        tree = await self.get_tree()
        category = find_category(tree, category_id)
        body = {"name": category.name, "status": (data.status or category.status).value}
        if data.name is not None:
            body["name"] = validate_name(data.name, tree, exclude_id=category_id)

        (await self.client.update_category(category_id, body)).unwrap()
        logger.info(f"Updated category {category_id}")
        return await self.get_tree()

    async def delete_category(self, category_id: str, confirm: bool = False) -> list[Category]:
        """Delete a category; its subcategories go with it on the server.

        Raises:
            ValidationError: Category has subcategories and ``confirm`` is False
        """
        preview = delete_preview(await self.get_tree(), category_id)
        if preview.requires_confirmation and not confirm:
            raise ValidationError(
                "confirmation_required",
                preview.warning or "Deletion must be confirmed",
            )

        (await self.client.delete_category(category_id)).unwrap()
        logger.info(
            f"Deleted category {category_id} with {preview.subcategory_count} subcategories"
        )
        return await self.get_tree()

    # ==================== Subcategories ====================

    async def add_subcategory(self, category_id: str, data: CategoryCreate) -> list[Category]:
        tree = await self.get_tree()
        name = validate_name(data.name, tree, parent_id=category_id)

        (
            await self.client.add_subcategory(
                category_id, {"name": name, "status": data.status.value}
            )
        ).unwrap()
        logger.info(f"Created subcategory {name!r} under {category_id}")
        return await self.get_tree()

    async def update_subcategory(
        self, category_id: str, subcategory_id: str, data: CategoryUpdate
    ) -> list[Category]:
        tree = await self.get_tree()
        sub = find_subcategory(tree, category_id, subcategory_id)
        body = {"name": sub.name, "status": (data.status or sub.status).value}
        if data.name is not None:
            body["name"] = validate_name(
                data.name, tree, parent_id=category_id, exclude_id=subcategory_id
            )

        (await self.client.update_subcategory(category_id, subcategory_id, body)).unwrap()
        logger.info(f"Updated subcategory {subcategory_id} under {category_id}")
        return await self.get_tree()

    async def delete_subcategory(self, category_id: str, subcategory_id: str) -> list[Category]:
        find_subcategory(await self.get_tree(), category_id, subcategory_id)

        (await self.client.delete_subcategory(category_id, subcategory_id)).unwrap()
        logger.info(f"Deleted subcategory {subcategory_id} under {category_id}")
        return await self.get_tree()
