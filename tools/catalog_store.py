"""In-memory item and outfit collections mirrored to a key-value store."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Sequence

from models.outfit import Outfit, outfit_from_record
from models.wardrobe_item import Item, from_record
from tools.kv_store import KeyValueStore
from tools.observability import instrument_operation, reject_silently
from logic.validation import AddItemRequest, AddOutfitRequest
from wardrobe_app.logging_config import get_logger, log_event

logger = get_logger(__name__)

ITEMS_KEY = "wardrobeItems"
OUTFITS_KEY = "wardrobeOutfits"


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _coerce(raw: Any, factory: Callable[[Any], Any], key: str) -> List[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring stored %s: expected a list, got %s", key, type(raw).__name__)
        return []
    records = []
    for entry in raw:
        try:
            records.append(factory(entry))
        except ValueError as exc:
            logger.warning("Skipping stored %s entry due to validation error: %s", key, exc)
    return records


class CatalogStore:
    """Owns the item and outfit collections.

    Every mutation updates memory first and then rewrites the whole affected
    collection to storage. A failed write is logged and otherwise ignored, so
    memory stays authoritative until the next successful write.
    """

    def __init__(self, kv_store: KeyValueStore, clock: Callable[[], int] = _epoch_millis) -> None:
        self.kv_store = kv_store
        self._clock = clock
        self._items: List[Item] = []
        self._outfits: List[Outfit] = []
        self.version = 0
        self.loaded = False

    @property
    def items(self) -> List[Item]:
        return list(self._items)

    @property
    def outfits(self) -> List[Outfit]:
        return list(self._outfits)

    def get_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self._items if item.id == item_id), None)

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        return next((outfit for outfit in self._outfits if outfit.id == outfit_id), None)

    async def load(self) -> None:
        """Replace memory with whatever storage holds; absent keys mean empty."""

        try:
            raw_items = await self.kv_store.get_item(ITEMS_KEY)
            raw_outfits = await self.kv_store.get_item(OUTFITS_KEY)
        except Exception as exc:  # noqa: BLE001
            log_event(logger, logging.ERROR, "catalog_load_failed", error=str(exc), exc_info=True)
            raw_items, raw_outfits = None, None
        self._items = _coerce(raw_items, from_record, ITEMS_KEY)
        self._outfits = _coerce(raw_outfits, outfit_from_record, OUTFITS_KEY)
        self.version += 1
        self.loaded = True
        log_event(
            logger,
            logging.INFO,
            "catalog_loaded",
            items=len(self._items),
            outfits=len(self._outfits),
        )

    def _new_id(self, prefix: str, existing: Iterable[str]) -> str:
        taken = set(existing)
        stamp = self._clock()
        while f"{prefix}_{stamp}" in taken:
            stamp += 1
        return f"{prefix}_{stamp}"

    async def _persist(self, key: str, records: Sequence[Any], operation: str) -> bool:
        try:
            await self.kv_store.set_item(key, [record.to_record() for record in records])
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                logging.ERROR,
                "catalog_persist_failed",
                operation=operation,
                key=key,
                error=str(exc),
                exc_info=True,
            )
            return False
        return True

    @instrument_operation("add_item", input_model=AddItemRequest, on_validation_error=reject_silently)
    async def add_item(self, name: str, category: str, image_data: str) -> Optional[Item]:
        item = Item(
            id=self._new_id("item", (existing.id for existing in self._items)),
            name=name,
            image_url=image_data,
            category=category,
        )
        self._items = [*self._items, item]
        self.version += 1
        await self._persist(ITEMS_KEY, self._items, "add_item")
        return item

    @instrument_operation("delete_item")
    async def delete_item(self, item_id: str) -> None:
        # Outfits keep their references; resolution drops them at read time.
        self._items = [item for item in self._items if item.id != item_id]
        self.version += 1
        await self._persist(ITEMS_KEY, self._items, "delete_item")

    @instrument_operation("add_outfit", input_model=AddOutfitRequest, on_validation_error=reject_silently)
    async def add_outfit(self, name: str, item_ids: Sequence[str]) -> Optional[Outfit]:
        outfit = Outfit(
            id=self._new_id("outfit", (existing.id for existing in self._outfits)),
            name=name,
            item_ids=tuple(item_ids),
        )
        self._outfits = [*self._outfits, outfit]
        self.version += 1
        await self._persist(OUTFITS_KEY, self._outfits, "add_outfit")
        return outfit

    @instrument_operation("delete_outfit")
    async def delete_outfit(self, outfit_id: str) -> None:
        self._outfits = [outfit for outfit in self._outfits if outfit.id != outfit_id]
        self.version += 1
        await self._persist(OUTFITS_KEY, self._outfits, "delete_outfit")


__all__ = ["CatalogStore", "ITEMS_KEY", "OUTFITS_KEY"]
