"""Canonical category definitions for wardrobe items.

The category list doubles as the display order for every grouped view, so new
categories must be appended where they should appear on screen.
"""

from typing import List

TOP = "Top"
BOTTOM = "Bottom"
OUTERWEAR = "Outerwear"
ACCESSORY = "Accessory"

ITEM_CATEGORIES: List[str] = [TOP, BOTTOM, OUTERWEAR, ACCESSORY]


def validate_category(value: str) -> str:
    """Validate a category value written by the application.

    Raises a :class:`ValueError` if the category is not one of the canonical
    values. Matching is exact; stored records are not run through this.
    """

    if value not in ITEM_CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {ITEM_CATEGORIES}")
    return value


__all__ = [
    "TOP",
    "BOTTOM",
    "OUTERWEAR",
    "ACCESSORY",
    "ITEM_CATEGORIES",
    "validate_category",
]
