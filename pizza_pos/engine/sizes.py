"""
Size tier resolution.

Pricing rules switch on a coarse size tier rather than on display strings.
The tier is resolved once per size record when the catalog is loaded.
"""

from enum import Enum


class SizeTier(str, Enum):
    """Coarse size bucket used to pick surcharge rates."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    GLUTEN_FREE = "gluten_free"


def resolve_size_tier(size_name: str | None) -> SizeTier:
    """
    Map a size display name to its tier.

    Examples:
        'Small 10"'        -> SMALL
        'Medium 12"'       -> MEDIUM
        'Large 14"'        -> LARGE
        'Gluten Free 12"'  -> GLUTEN_FREE

    Names that match nothing fall through to LARGE, which is the rate the
    store charges for anything that isn't small or medium.
    """
    name = size_name or ""
    if "gluten" in name.lower():
        return SizeTier.GLUTEN_FREE
    if "Small" in name or '10"' in name:
        return SizeTier.SMALL
    if "Medium" in name or '12"' in name:
        return SizeTier.MEDIUM
    return SizeTier.LARGE
