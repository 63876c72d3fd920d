"""Virtual wardrobe session bootstrap."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from logic import navigation
from logic.navigation import NavigationState
from logic.outfit_generator import generate
from logic.presentation import (
    GeneratorScreen,
    OutfitsScreen,
    PairingsScreen,
    Tab,
    WardrobeScreen,
    generator_screen,
    outfits_screen,
    pairings_screen,
    tabs,
    wardrobe_screen,
)
from logic.views import CatalogViews
from models.outfit import GeneratedOutfit, Outfit
from models.taxonomy import BOTTOM, TOP
from models.wardrobe_item import Item
from tools.catalog_store import CatalogStore
from tools.image_ingestion import ingest_async
from tools.kv_store import KeyValueStore, SQLiteKeyValueStore
from wardrobe_app.config import WardrobeConfig
from wardrobe_app.errors import ImageIngestionError, MissingCategoryError
from wardrobe_app.logging_config import configure_logging, get_logger, log_event, operation_context

LOGGER = get_logger(__name__)


class VirtualWardrobeApp:
    """Wires storage, catalog, views and navigation for one user session.

    Handlers mirror the user actions available on screen. Invalid input makes
    a handler a no-op rather than raising.
    """

    def __init__(
        self,
        config: WardrobeConfig | None = None,
        kv_store: KeyValueStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or WardrobeConfig.from_env()
        configure_logging(self.config.log_level)

        self.kv_store = kv_store or SQLiteKeyValueStore(
            self.config.resolved_database_path, table_name=self.config.table_name
        )
        self.catalog = CatalogStore(self.kv_store)
        self.views = CatalogViews(self.catalog)
        self.state = NavigationState()
        self.rng = rng or random.Random()

        self.loading = True
        self.is_uploading = False
        self.generated_outfit: Optional[GeneratedOutfit] = None
        self.generator_error: Optional[str] = None

    async def start(self) -> None:
        """Load persisted items and outfits once at session start."""

        with operation_context("app.start"):
            self.loading = True
            try:
                await self.catalog.load()
            finally:
                self.loading = False

    # Catalog mutations

    async def add_item(self, name: str, category: str, file_bytes: Optional[bytes]) -> Optional[Item]:
        """Ingest an uploaded photo and add it as a new item.

        Ignored while another upload is pending, when the name is blank or when
        no file was chosen. A file that cannot be decoded is logged and dropped.
        """

        if self.is_uploading or not (name or "").strip() or not file_bytes:
            return None
        with operation_context("app.add_item") as correlation_id:
            self.is_uploading = True
            try:
                image_data = await ingest_async(
                    file_bytes,
                    max_height=self.config.max_image_height,
                    quality=self.config.image_quality,
                )
                return await self.catalog.add_item(name=name, category=category, image_data=image_data)
            except ImageIngestionError as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "add_item_failed",
                    correlation_id=correlation_id,
                    error=str(exc),
                )
                return None
            finally:
                self.is_uploading = False

    async def delete_item(self, item_id: str) -> None:
        with operation_context("app.delete_item"):
            await self.catalog.delete_item(item_id)

    async def save_outfit(self, name: str) -> Optional[Outfit]:
        """Save the current multi-selection as an outfit and clear the selection."""

        with operation_context("app.save_outfit"):
            outfit = await self.catalog.add_outfit(name=name, item_ids=list(self.state.multi_select))
            if outfit is not None:
                self.state = navigation.clear_item_selection(self.state)
            return outfit

    async def delete_outfit(self, outfit_id: str) -> None:
        with operation_context("app.delete_outfit"):
            await self.catalog.delete_outfit(outfit_id)

    def generate_outfit(self) -> Optional[GeneratedOutfit]:
        """Replace the previous suggestion with a fresh random outfit.

        On failure the previous suggestion stays cleared and the warning text
        is kept in ``generator_error``.
        """

        self.generator_error = None
        self.generated_outfit = None
        try:
            self.generated_outfit = generate(self.catalog.items, rng=self.rng)
        except MissingCategoryError as exc:
            self.generator_error = str(exc)
        return self.generated_outfit

    # Navigation and selection

    def change_screen(self, screen: str) -> None:
        self.state = navigation.change_screen(self.state, screen)

    def toggle_item_selection(self, item_id: str) -> None:
        self.state = navigation.toggle_item_selection(self.state, item_id)

    def select_top(self, item_id: str) -> None:
        self.state = navigation.select_top(self.state, item_id)

    def select_bottom(self, item_id: str) -> None:
        self.state = navigation.select_bottom(self.state, item_id)

    def clear_pairing_selection(self) -> None:
        self.state = navigation.clear_pairing_selection(self.state)

    def toggle_category(self, category: str) -> None:
        self.state = navigation.toggle_category(self.state, category)

    def toggle_outfit(self, outfit_id: str) -> None:
        self.state = navigation.toggle_outfit(self.state, outfit_id)

    def toggle_pairing_group(self, group: str) -> None:
        self.state = navigation.toggle_pairing_group(self.state, group)

    # Screens

    def tabs(self) -> List[Tab]:
        """Return the navigation bar with the active screen marked."""

        return tabs(self.state)

    def wardrobe_screen(self) -> WardrobeScreen:
        return wardrobe_screen(self.views.items_by_category(), self.state, is_uploading=self.is_uploading)

    def outfits_screen(self) -> OutfitsScreen:
        return outfits_screen(self.views.items_by_category(), self.views.outfits_with_items(), self.state)

    def pairings_screen(self) -> PairingsScreen:
        anchor_id = self.state.pairing_anchor_id
        anchor = self.catalog.get_item(anchor_id) if anchor_id else None
        return pairings_screen(
            tops=self.views.category(TOP),
            bottoms=self.views.category(BOTTOM),
            anchor=anchor,
            suggestions=self.views.pairings(anchor_id),
            state=self.state,
        )

    def generator_screen(self) -> GeneratorScreen:
        return generator_screen(self.generated_outfit, self.generator_error, self.state)

    def render(self) -> WardrobeScreen | OutfitsScreen | PairingsScreen | GeneratorScreen:
        """Return the view model for the active screen."""

        screens = {
            navigation.WARDROBE: self.wardrobe_screen,
            navigation.OUTFITS: self.outfits_screen,
            navigation.PAIRINGS: self.pairings_screen,
            navigation.GENERATOR: self.generator_screen,
        }
        return screens[self.state.active_screen]()


__all__ = ["VirtualWardrobeApp"]
