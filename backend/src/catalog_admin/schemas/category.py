"""Category tree schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CategoryStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class _TreeNode(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., alias="_id")
    name: str
    status: CategoryStatus = CategoryStatus.ACTIVE
    product_count: int = 0


class Subcategory(_TreeNode):
    parent_id: str | None = None


class Category(_TreeNode):
    subcategories: list[Subcategory] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        # The storefront API nests subcategories without a back-reference
        for sub in self.subcategories:
            if sub.parent_id is None:
                sub.parent_id = self.id


class CategoryCreate(BaseModel):
    name: str = Field(..., max_length=100)
    status: CategoryStatus = CategoryStatus.ACTIVE


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    status: CategoryStatus | None = None


class CategoryTreeResponse(BaseModel):
    categories: list[Category]
    total: int
    subcategory_total: int


class DeletePreview(BaseModel):
    category_id: str
    name: str
    subcategory_count: int
    requires_confirmation: bool
    warning: str | None = None
