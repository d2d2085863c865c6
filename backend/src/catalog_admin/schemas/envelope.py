"""Storefront API response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from catalog_admin.core.exceptions import CollaboratorError

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{data?, error?}`` result of one storefront API call."""

    data: T | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return ``data`` or raise the error as a CollaboratorError."""
        if self.error is not None:
            raise CollaboratorError(self.error)
        return self.data
