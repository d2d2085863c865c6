"""Error taxonomy for catalog editing operations."""


class CatalogAdminError(Exception):
    """Base class for errors surfaced to the admin UI."""

    code = "CATALOG_ADMIN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogAdminError):
    """Raised when local validation blocks a transition.

    The input that failed is never discarded; the caller keeps it so the
    user can correct it.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, reason: str, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.reason = reason
        self.problems = problems or []


class DuplicateNameError(CatalogAdminError):
    """Raised when a category or subcategory name collides with a sibling."""

    code = "DUPLICATE_NAME"


class CollaboratorError(CatalogAdminError):
    """Raised when a call to the storefront API fails."""

    code = "COLLABORATOR_ERROR"


class UnclassifiedMediaError(CatalogAdminError):
    """Raised for uploads that are neither image nor video under the reject policy."""

    code = "UNCLASSIFIED_MEDIA"

    def __init__(self, filenames: list[str]):
        super().__init__(f"Unsupported media file(s): {', '.join(filenames)}")
        self.filenames = filenames


class DraftNotFoundError(CatalogAdminError):
    code = "DRAFT_NOT_FOUND"


class VariantNotFoundError(CatalogAdminError):
    code = "VARIANT_NOT_FOUND"


class CategoryNotFoundError(CatalogAdminError):
    code = "CATEGORY_NOT_FOUND"


class EditorStateError(CatalogAdminError):
    """Raised when an operation needs an edit session that is not open."""

    code = "EDITOR_STATE"


class SubmissionInProgressError(CatalogAdminError):
    """Raised when a draft already has a submission outstanding."""

    code = "SUBMISSION_IN_PROGRESS"
