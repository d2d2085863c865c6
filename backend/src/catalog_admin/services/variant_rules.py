"""Size/color resolution and variant validation."""

from catalog_admin.core.exceptions import ValidationError
from catalog_admin.schemas.variant import CUSTOM_OPTION, CatalogOption, Variant, VariantInput

SIZE_OPTIONS: list[CatalogOption] = [
    CatalogOption(id="xs", name="XS"),
    CatalogOption(id="s", name="S"),
    CatalogOption(id="m", name="M"),
    CatalogOption(id="l", name="L"),
    CatalogOption(id="xl", name="XL"),
    CatalogOption(id="xxl", name="XXL"),
    CatalogOption(id="free", name="Free Size"),
]

COLOR_OPTIONS: list[CatalogOption] = [
    CatalogOption(id="red", name="Red", hex="#EF4444"),
    CatalogOption(id="blue", name="Blue", hex="#3B82F6"),
    CatalogOption(id="green", name="Green", hex="#10B981"),
    CatalogOption(id="black", name="Black", hex="#000000"),
    CatalogOption(id="white", name="White", hex="#FFFFFF"),
    CatalogOption(id="yellow", name="Yellow", hex="#FBBF24"),
    CatalogOption(id="pink", name="Pink", hex="#EC4899"),
    CatalogOption(id="purple", name="Purple", hex="#8B5CF6"),
    CatalogOption(id="orange", name="Orange", hex="#F97316"),
    CatalogOption(id="brown", name="Brown", hex="#92400E"),
]


def resolve_size_or_color(
    selection: str, custom_text: str, catalog: list[CatalogOption]
) -> str:
    """Turn a size/color selection into the stored display string.

    ``"custom"`` resolves to the trimmed free text; a catalog id resolves to
    the option's name; anything else is kept as given.
    """
    if selection == CUSTOM_OPTION:
        return (custom_text or "").strip()
    for option in catalog:
        if option.id == selection:
            return option.name
    return selection


def is_custom(value: str, catalog: list[CatalogOption]) -> bool:
    """True when no catalog option's name equals ``value`` exactly."""
    return not any(option.name == value for option in catalog)


def selection_for(value: str, catalog: list[CatalogOption]) -> tuple[str, str]:
    """Map a stored display string back to ``(selection, custom_text)``."""
    for option in catalog:
        if option.name == value:
            return option.id, ""
    return CUSTOM_OPTION, value


def validate_variant(
    variant: VariantInput,
    existing: list[Variant],
    sizes: list[CatalogOption] = SIZE_OPTIONS,
    colors: list[CatalogOption] = COLOR_OPTIONS,
    enforce_unique: bool = False,
    exclude_id: str | None = None,
) -> tuple[str, str]:
    """Validate a staging buffer before it is added or saved.

    Args:
        variant: Buffer being added or saved
        existing: Variants already listed on the product
        sizes: Size catalog
        colors: Color catalog
        enforce_unique: Reject a (size, color) pair already listed
        exclude_id: Listed variant being edited, ignored for uniqueness

    Returns:
        Resolved ``(size, color)``

    Raises:
        ValidationError: First rule the buffer breaks
    """
    if not variant.size.strip() or not variant.color.strip():
        raise ValidationError("missing_size_color", "Please select both size and color")

    if (variant.size == CUSTOM_OPTION and not variant.custom_size.strip()) or (
        variant.color == CUSTOM_OPTION and not variant.custom_color.strip()
    ):
        raise ValidationError("missing_custom_text", "Please enter custom size/color values")

    if variant.price <= 0:
        raise ValidationError("non_positive_price", "Please enter a valid price")

    if variant.stock < 0:
        raise ValidationError("negative_stock", "Please enter a valid stock quantity")

    size = resolve_size_or_color(variant.size, variant.custom_size, sizes)
    color = resolve_size_or_color(variant.color, variant.custom_color, colors)

    if enforce_unique:
        duplicate = find_duplicate(size, color, existing, exclude_id=exclude_id)
        if duplicate is not None:
            raise ValidationError(
                "duplicate_variant",
                f"A variant with size {size} and color {color} already exists",
            )

    return size, color


def find_duplicate(
    size: str, color: str, existing: list[Variant], exclude_id: str | None = None
) -> Variant | None:
    """Return the listed variant with the same (size, color), if any."""
    key = (size.strip().casefold(), color.strip().casefold())
    for variant in existing:
        if variant.id != exclude_id and variant.key == key:
            return variant
    return None
