"""Screen view model tests."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic import navigation
from logic.navigation import NavigationState
from logic.presentation import (
    NO_ITEMS_FOR_OUTFITS_MESSAGE,
    image_or_placeholder,
    item_card,
    outfits_screen,
    tabs,
    wardrobe_screen,
)
from logic.views import group_by_category, resolve_outfits
from models.outfit import Outfit
from models.wardrobe_item import Item

IMAGE = "data:image/png;base64," + "A" * 120


def test_image_or_placeholder() -> None:
    assert image_or_placeholder(IMAGE) == IMAGE
    assert image_or_placeholder("") is None
    assert image_or_placeholder(None) is None
    assert image_or_placeholder("data:image/png;base64,AAAA") is None


def test_item_card_marks_selection_and_placeholder() -> None:
    state = navigation.toggle_item_selection(NavigationState(), "t1")

    card = item_card(Item(id="t1", name="Tee", image_url="broken", category="Top"), state)

    assert card.is_selected is True
    assert card.show_placeholder is True


def test_wardrobe_screen_only_expands_open_categories() -> None:
    items = [
        Item(id="b1", name="Jeans", image_url=IMAGE, category="Bottom"),
        Item(id="t1", name="Tee", image_url=IMAGE, category="Top"),
    ]
    state = navigation.toggle_category(NavigationState(), "Bottom")

    screen = wardrobe_screen(group_by_category(items), state)

    assert [(panel.title, panel.is_open, len(panel.cards)) for panel in screen.panels] == [
        ("Top (1)", False, 0),
        ("Bottom (1)", True, 1),
    ]
    assert screen.empty_message is None


def test_outfits_screen_empty_picker_and_save_flag() -> None:
    outfits = resolve_outfits([Outfit(id="o1", name="Gone", item_ids=("x",))], [])

    screen = outfits_screen([], outfits, NavigationState())

    assert screen.picker_empty_message == NO_ITEMS_FOR_OUTFITS_MESSAGE
    assert screen.can_save is False
    assert screen.outfits[0].is_open is False
    assert screen.outfits[0].empty_message is None


def test_tabs_follow_active_screen() -> None:
    state = navigation.change_screen(NavigationState(), navigation.PAIRINGS)

    assert [(tab.label, tab.is_active) for tab in tabs(state)] == [
        ("Wardrobe", False),
        ("Outfits", False),
        ("Find Pairings", True),
        ("Generator", False),
    ]
