"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Item:
    """A single catalogued clothing photo.

    ``image_url`` holds the embedded data URL produced by ingestion, not a
    remote address. Items are never edited once created.
    """

    id: str
    name: str
    image_url: str
    category: str

    def to_record(self) -> Dict[str, Any]:
        """Serialise with the storage field names."""

        return {
            "id": self.id,
            "name": self.name,
            "imageUrl": self.image_url,
            "category": self.category,
        }


def from_record(record: Mapping[str, Any]) -> Item:
    """Factory to build an :class:`Item` from a stored record.

    Only ``id`` is required; category values outside the canonical list are
    kept as stored.
    """

    if not isinstance(record, Mapping):
        raise ValueError(f"Item record must be a mapping, got {type(record).__name__}")
    if not record.get("id"):
        raise ValueError("Missing required field for Item: ['id']")

    return Item(
        id=str(record["id"]),
        name=str(record.get("name") or ""),
        image_url=str(record.get("imageUrl") or ""),
        category=str(record.get("category") or ""),
    )


__all__ = ["Item", "from_record"]
