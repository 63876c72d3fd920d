"""Screen navigation and selection state with pure transition functions.

:class:`NavigationState` is immutable; every reducer returns a new state and
leaves its input untouched, so transitions can be tested without rendering.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

WARDROBE = "wardrobe"
OUTFITS = "outfits"
PAIRINGS = "pairings"
GENERATOR = "generate"
SCREENS = (WARDROBE, OUTFITS, PAIRINGS, GENERATOR)

SCREEN_LABELS = {
    WARDROBE: "Wardrobe",
    OUTFITS: "Outfits",
    PAIRINGS: "Find Pairings",
    GENERATOR: "Generator",
}

TOPS_GROUP = "tops"
BOTTOMS_GROUP = "bottoms"
PAIRING_GROUPS = (TOPS_GROUP, BOTTOMS_GROUP)


@dataclass(frozen=True)
class NavigationState:
    active_screen: str = WARDROBE
    multi_select: Tuple[str, ...] = ()
    selected_top_id: Optional[str] = None
    selected_bottom_id: Optional[str] = None
    open_categories: Tuple[str, ...] = ()
    open_outfit_id: Optional[str] = None
    open_pairing_group: Optional[str] = None

    @property
    def pairing_anchor_id(self) -> Optional[str]:
        return self.selected_top_id or self.selected_bottom_id

    def is_selected(self, item_id: str) -> bool:
        return item_id in self.multi_select

    def is_category_open(self, category: str) -> bool:
        return category in self.open_categories


def clear_pairing_selection(state: NavigationState) -> NavigationState:
    return replace(state, selected_top_id=None, selected_bottom_id=None, open_pairing_group=None)


def change_screen(state: NavigationState, screen: str) -> NavigationState:
    """Switch screens, dropping the pairing lookup but keeping selections."""

    if screen not in SCREENS:
        raise ValueError(f"Unknown screen '{screen}'. Allowed: {list(SCREENS)}")
    return clear_pairing_selection(replace(state, active_screen=screen))


def select_top(state: NavigationState, item_id: str) -> NavigationState:
    return replace(state, selected_top_id=item_id, selected_bottom_id=None, open_pairing_group=None)


def select_bottom(state: NavigationState, item_id: str) -> NavigationState:
    return replace(state, selected_bottom_id=item_id, selected_top_id=None, open_pairing_group=None)


def toggle_category(state: NavigationState, category: str) -> NavigationState:
    """Open or close one category; other categories are unaffected."""

    if category in state.open_categories:
        remaining = tuple(name for name in state.open_categories if name != category)
        return replace(state, open_categories=remaining)
    return replace(state, open_categories=(*state.open_categories, category))


def toggle_outfit(state: NavigationState, outfit_id: str) -> NavigationState:
    """Expand an outfit, collapsing any other; a second toggle collapses it."""

    if state.open_outfit_id == outfit_id:
        return replace(state, open_outfit_id=None)
    return replace(state, open_outfit_id=outfit_id)


def toggle_pairing_group(state: NavigationState, group: str) -> NavigationState:
    """Expand the tops or bottoms picker.

    Opening one group clears the selection made from the other; closing an
    open group leaves selections alone.
    """

    if group not in PAIRING_GROUPS:
        raise ValueError(f"Unknown pairing group '{group}'. Allowed: {list(PAIRING_GROUPS)}")
    if state.open_pairing_group == group:
        return replace(state, open_pairing_group=None)
    if group == TOPS_GROUP:
        return replace(state, open_pairing_group=group, selected_bottom_id=None)
    return replace(state, open_pairing_group=group, selected_top_id=None)


def toggle_item_selection(state: NavigationState, item_id: str) -> NavigationState:
    if item_id in state.multi_select:
        remaining = tuple(selected for selected in state.multi_select if selected != item_id)
        return replace(state, multi_select=remaining)
    return replace(state, multi_select=(*state.multi_select, item_id))


def clear_item_selection(state: NavigationState) -> NavigationState:
    return replace(state, multi_select=())


__all__ = [
    "NavigationState",
    "WARDROBE",
    "OUTFITS",
    "PAIRINGS",
    "GENERATOR",
    "SCREENS",
    "SCREEN_LABELS",
    "TOPS_GROUP",
    "BOTTOMS_GROUP",
    "PAIRING_GROUPS",
    "change_screen",
    "select_top",
    "select_bottom",
    "clear_pairing_selection",
    "toggle_category",
    "toggle_outfit",
    "toggle_pairing_group",
    "toggle_item_selection",
    "clear_item_selection",
]
