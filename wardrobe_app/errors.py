"""Exception types shared across the wardrobe packages."""

from __future__ import annotations


class WardrobeError(Exception):
    """Base class for wardrobe failures."""


class StorageError(WardrobeError):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{message} (key={key!r})")
        self.key = key


class ImageIngestionError(WardrobeError, ValueError):
    """Raised when an uploaded file cannot be decoded as an image."""


class MissingCategoryError(WardrobeError):
    """Raised when the generator lacks a Top or a Bottom to draw from."""

    default_message = "Please add at least one 'Top' and one 'Bottom' to use the generator."

    def __init__(self, missing: tuple[str, ...] = ()) -> None:
        super().__init__(self.default_message)
        self.missing = missing


__all__ = ["WardrobeError", "StorageError", "ImageIngestionError", "MissingCategoryError"]
