"""Outfit records and the derived shapes built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.taxonomy import BOTTOM, TOP
from models.wardrobe_item import Item


@dataclass(frozen=True)
class Outfit:
    """A named, ordered set of item references.

    ``item_ids`` may point at items deleted since the outfit was saved.
    """

    id: str
    name: str
    item_ids: Tuple[str, ...] = ()

    def to_record(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "itemIds": list(self.item_ids)}


def outfit_from_record(record: Mapping[str, Any]) -> Outfit:
    """Build an :class:`Outfit` from a stored record."""

    if not isinstance(record, Mapping):
        raise ValueError(f"Outfit record must be a mapping, got {type(record).__name__}")
    if not record.get("id"):
        raise ValueError("Missing required field for Outfit: ['id']")
    raw_ids = record.get("itemIds") or []
    if isinstance(raw_ids, (str, bytes)) or not isinstance(raw_ids, (list, tuple)):
        raise ValueError("Outfit itemIds must be a list")

    return Outfit(
        id=str(record["id"]),
        name=str(record.get("name") or ""),
        item_ids=tuple(str(item_id) for item_id in raw_ids),
    )


@dataclass(frozen=True)
class ResolvedOutfit:
    """An outfit together with the items that still exist."""

    outfit: Outfit
    items: Tuple[Item, ...]

    @property
    def id(self) -> str:
        return self.outfit.id

    @property
    def name(self) -> str:
        return self.outfit.name

    @property
    def item_ids(self) -> Tuple[str, ...]:
        return self.outfit.item_ids


@dataclass(frozen=True)
class GeneratedOutfit:
    top: Item
    bottom: Item
    outerwear: Optional[Item] = None

    def as_dict(self) -> Dict[str, Item]:
        """Slot name to item; the outerwear key is absent when not drawn."""

        slots = {"top": self.top, "bottom": self.bottom}
        if self.outerwear is not None:
            slots["outerwear"] = self.outerwear
        return slots


@dataclass(frozen=True)
class PairingSuggestions:
    tops: List[Item] = field(default_factory=list)
    bottoms: List[Item] = field(default_factory=list)
    outerwear: List[Item] = field(default_factory=list)

    def for_anchor(self, anchor_category: str) -> List[Tuple[str, List[Item]]]:
        """Return the suggestion groups relevant to the anchor's category."""

        if anchor_category == TOP:
            return [("Bottoms", self.bottoms), ("Outerwear", self.outerwear)]
        if anchor_category == BOTTOM:
            return [("Tops", self.tops), ("Outerwear", self.outerwear)]
        return []

    def is_empty(self) -> bool:
        return not (self.tops or self.bottoms or self.outerwear)


__all__ = [
    "Outfit",
    "outfit_from_record",
    "ResolvedOutfit",
    "GeneratedOutfit",
    "PairingSuggestions",
]
