"""Render-ready view models for each screen.

These functions take the navigation state and derived views explicitly and
return plain dataclasses; a renderer only has to draw them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from logic.navigation import BOTTOMS_GROUP, SCREEN_LABELS, TOPS_GROUP, NavigationState
from logic.views import CategoryGroup
from models.outfit import GeneratedOutfit, PairingSuggestions, ResolvedOutfit
from models.wardrobe_item import Item

# Anything shorter cannot be a real embedded photo.
MIN_IMAGE_SOURCE_LENGTH = 100

EMPTY_WARDROBE_MESSAGE = "Your wardrobe is empty. Add some items above!"
NO_ITEMS_FOR_OUTFITS_MESSAGE = "You need to add items to your 'Wardrobe' first!"
NO_OUTFITS_MESSAGE = "You haven't saved any outfits yet."
OUTFIT_ITEMS_DELETED_MESSAGE = "Items for this outfit were deleted."
EMPTY_CATEGORY_MESSAGE = "No items found in this category. Add some in the 'Wardrobe' tab!"
NO_PAIRINGS_MESSAGE = "No saved pairings found for this item."


def image_or_placeholder(src: Optional[str]) -> Optional[str]:
    """Return the image source, or None when a placeholder glyph should be drawn."""

    if not src or not isinstance(src, str) or len(src) < MIN_IMAGE_SOURCE_LENGTH:
        return None
    return src


@dataclass(frozen=True)
class ItemCard:
    item_id: str
    name: str
    image_src: Optional[str]
    is_selected: bool = False
    deletable: bool = False
    caption: Optional[str] = None

    @property
    def show_placeholder(self) -> bool:
        return self.image_src is None


def item_card(item: Item, state: NavigationState, deletable: bool = False, caption: Optional[str] = None) -> ItemCard:
    return ItemCard(
        item_id=item.id,
        name=item.name,
        image_src=image_or_placeholder(item.image_url),
        is_selected=state.is_selected(item.id),
        deletable=deletable,
        caption=caption,
    )


@dataclass(frozen=True)
class CategoryPanel:
    category: str
    count: int
    is_open: bool
    cards: List[ItemCard] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"{self.category} ({self.count})"


@dataclass(frozen=True)
class OutfitPanel:
    outfit_id: str
    name: str
    is_open: bool
    cards: List[ItemCard] = field(default_factory=list)
    empty_message: Optional[str] = None


@dataclass(frozen=True)
class ItemGrid:
    title: Optional[str]
    cards: List[ItemCard]
    empty_message: Optional[str] = None


@dataclass(frozen=True)
class Tab:
    screen: str
    label: str
    is_active: bool


@dataclass(frozen=True)
class WardrobeScreen:
    panels: List[CategoryPanel]
    empty_message: Optional[str]
    is_uploading: bool = False


@dataclass(frozen=True)
class OutfitsScreen:
    picker_panels: List[CategoryPanel]
    outfits: List[OutfitPanel]
    can_save: bool
    picker_empty_message: Optional[str] = None
    outfits_empty_message: Optional[str] = None


@dataclass(frozen=True)
class PairingsScreen:
    tops: Optional[ItemGrid]
    bottoms: Optional[ItemGrid]
    anchor: Optional[ItemCard]
    suggestions: List[ItemGrid] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratorScreen:
    warning: Optional[str]
    slots: List[ItemCard] = field(default_factory=list)


def tabs(state: NavigationState) -> List[Tab]:
    return [
        Tab(screen=screen, label=label, is_active=screen == state.active_screen)
        for screen, label in SCREEN_LABELS.items()
    ]


def _category_panels(groups: Sequence[CategoryGroup], state: NavigationState, deletable: bool) -> List[CategoryPanel]:
    panels = []
    for category, items in groups:
        is_open = state.is_category_open(category)
        cards = [item_card(item, state, deletable=deletable) for item in items] if is_open else []
        panels.append(CategoryPanel(category=category, count=len(items), is_open=is_open, cards=cards))
    return panels


def wardrobe_screen(groups: Sequence[CategoryGroup], state: NavigationState, is_uploading: bool = False) -> WardrobeScreen:
    return WardrobeScreen(
        panels=_category_panels(groups, state, deletable=True),
        empty_message=None if groups else EMPTY_WARDROBE_MESSAGE,
        is_uploading=is_uploading,
    )


def outfits_screen(
    groups: Sequence[CategoryGroup], outfits: Sequence[ResolvedOutfit], state: NavigationState
) -> OutfitsScreen:
    panels = []
    for outfit in outfits:
        is_open = state.open_outfit_id == outfit.id
        cards = [item_card(item, state) for item in outfit.items] if is_open else []
        empty_message = OUTFIT_ITEMS_DELETED_MESSAGE if is_open and not outfit.items else None
        panels.append(
            OutfitPanel(outfit_id=outfit.id, name=outfit.name, is_open=is_open, cards=cards, empty_message=empty_message)
        )
    return OutfitsScreen(
        picker_panels=_category_panels(groups, state, deletable=False),
        outfits=panels,
        can_save=bool(state.multi_select),
        picker_empty_message=None if groups else NO_ITEMS_FOR_OUTFITS_MESSAGE,
        outfits_empty_message=None if outfits else NO_OUTFITS_MESSAGE,
    )


def _grid(title: Optional[str], items: Sequence[Item], state: NavigationState, empty_message: str) -> ItemGrid:
    return ItemGrid(
        title=title,
        cards=[item_card(item, state) for item in items],
        empty_message=None if items else empty_message,
    )


def pairings_screen(
    tops: Sequence[Item],
    bottoms: Sequence[Item],
    anchor: Optional[Item],
    suggestions: PairingSuggestions,
    state: NavigationState,
) -> PairingsScreen:
    """Build the pairing lookup screen.

    The anchor card is omitted when the selected item no longer exists.
    """

    tops_grid = _grid(None, tops, state, EMPTY_CATEGORY_MESSAGE) if state.open_pairing_group == TOPS_GROUP else None
    bottoms_grid = (
        _grid(None, bottoms, state, EMPTY_CATEGORY_MESSAGE) if state.open_pairing_group == BOTTOMS_GROUP else None
    )
    suggestion_grids: List[ItemGrid] = []
    if anchor is not None:
        for label, items in suggestions.for_anchor(anchor.category):
            suggestion_grids.append(_grid(f"Suggested {label}:", items, state, NO_PAIRINGS_MESSAGE))
    return PairingsScreen(
        tops=tops_grid,
        bottoms=bottoms_grid,
        anchor=item_card(anchor, state) if anchor is not None else None,
        suggestions=suggestion_grids,
    )


def generator_screen(
    generated: Optional[GeneratedOutfit], warning: Optional[str], state: NavigationState
) -> GeneratorScreen:
    slots = []
    if generated is not None:
        slots = [item_card(item, state, caption=slot) for slot, item in generated.as_dict().items()]
    return GeneratorScreen(warning=warning, slots=slots)


__all__ = [
    "MIN_IMAGE_SOURCE_LENGTH",
    "EMPTY_WARDROBE_MESSAGE",
    "NO_ITEMS_FOR_OUTFITS_MESSAGE",
    "NO_OUTFITS_MESSAGE",
    "OUTFIT_ITEMS_DELETED_MESSAGE",
    "EMPTY_CATEGORY_MESSAGE",
    "NO_PAIRINGS_MESSAGE",
    "image_or_placeholder",
    "ItemCard",
    "item_card",
    "CategoryPanel",
    "OutfitPanel",
    "ItemGrid",
    "Tab",
    "WardrobeScreen",
    "OutfitsScreen",
    "PairingsScreen",
    "GeneratorScreen",
    "tabs",
    "wardrobe_screen",
    "outfits_screen",
    "pairings_screen",
    "generator_screen",
]
