"""Derived views over the catalog: grouping, outfit resolution and pairings.

Everything here is a pure function of its inputs. :class:`CatalogViews` caches
results against the catalog version so unrelated UI state changes do not
recompute them.
"""
from __future__ import annotations

import unicodedata
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.outfit import Outfit, PairingSuggestions, ResolvedOutfit
from models.taxonomy import BOTTOM, ITEM_CATEGORIES, OUTERWEAR, TOP
from models.wardrobe_item import Item
from tools.catalog_store import CatalogStore

CategoryGroup = Tuple[str, List[Item]]


def group_by_category(items: Iterable[Item]) -> List[CategoryGroup]:
    """Partition items by category in canonical display order.

    Categories with no items are left out. Items carrying a category outside
    the canonical list are grouped after the known ones, in first-seen order.
    """

    grouped: Dict[str, List[Item]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    known = [(category, grouped[category]) for category in ITEM_CATEGORIES if category in grouped]
    unknown = [(category, values) for category, values in grouped.items() if category not in ITEM_CATEGORIES]
    return known + unknown


def items_in_category(items: Iterable[Item], category: str) -> List[Item]:
    return [item for item in items if item.category == category]


def collation_key(value: str) -> Tuple[str, str, str]:
    """Sort key approximating locale-aware comparison.

    Primary strength ignores accents and case, secondary keeps accents,
    tertiary puts lowercase before uppercase.
    """

    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), value.swapcase()


def resolve_outfits(outfits: Iterable[Outfit], items: Iterable[Item]) -> List[ResolvedOutfit]:
    """Attach existing items to each outfit and sort the outfits by name."""

    by_id = {item.id: item for item in items}
    resolved = [
        ResolvedOutfit(
            outfit=outfit,
            items=tuple(by_id[item_id] for item_id in outfit.item_ids if item_id in by_id),
        )
        for outfit in outfits
    ]
    return sorted(resolved, key=lambda entry: (collation_key(entry.name), entry.id))


def mine_pairings(anchor_id: Optional[str], resolved_outfits: Sequence[ResolvedOutfit]) -> PairingSuggestions:
    """Collect items worn alongside the anchor in saved outfits.

    Each co-occurring item is listed once, in the order first met while
    walking ``resolved_outfits``. Outfits match on their stored ids, so an
    anchor that has since been deleted still finds its old pairings.
    """

    if not anchor_id:
        return PairingSuggestions()

    relevant = [outfit for outfit in resolved_outfits if anchor_id in outfit.item_ids]
    buckets: Dict[str, Dict[str, Item]] = {TOP: {}, BOTTOM: {}, OUTERWEAR: {}}
    for outfit in relevant:
        for item in outfit.items:
            if item.id == anchor_id or item.category not in buckets:
                continue
            buckets[item.category].setdefault(item.id, item)

    return PairingSuggestions(
        tops=list(buckets[TOP].values()),
        bottoms=list(buckets[BOTTOM].values()),
        outerwear=list(buckets[OUTERWEAR].values()),
    )


class CatalogViews:
    """Memoised derived views keyed on the catalog version."""

    def __init__(self, catalog: CatalogStore) -> None:
        self.catalog = catalog
        self._cache: Dict[Tuple[str, object], object] = {}
        self._cache_version = -1

    def _cached(self, name: str, key: object, compute):
        if self._cache_version != self.catalog.version:
            self._cache.clear()
            self._cache_version = self.catalog.version
        cache_key = (name, key)
        if cache_key not in self._cache:
            self._cache[cache_key] = compute()
        return self._cache[cache_key]

    def items_by_category(self) -> List[CategoryGroup]:
        return self._cached("items_by_category", None, lambda: group_by_category(self.catalog.items))

    def outfits_with_items(self) -> List[ResolvedOutfit]:
        return self._cached(
            "outfits_with_items",
            None,
            lambda: resolve_outfits(self.catalog.outfits, self.catalog.items),
        )

    def category(self, category: str) -> List[Item]:
        return self._cached("category", category, lambda: items_in_category(self.catalog.items, category))

    def pairings(self, anchor_id: Optional[str]) -> PairingSuggestions:
        return self._cached(
            "pairings",
            anchor_id,
            lambda: mine_pairings(anchor_id, self.outfits_with_items()),
        )


__all__ = [
    "CategoryGroup",
    "group_by_category",
    "items_in_category",
    "collation_key",
    "resolve_outfits",
    "mine_pairings",
    "CatalogViews",
]
