"""Navigation and selection reducer tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic import navigation
from logic.navigation import NavigationState


def test_change_screen_clears_pairing_but_keeps_selections() -> None:
    state = NavigationState(
        multi_select=("i1", "i2"),
        open_categories=("Top",),
        selected_top_id="t1",
        open_pairing_group="tops",
    )

    moved = navigation.change_screen(state, navigation.OUTFITS)

    assert moved.active_screen == "outfits"
    assert moved.pairing_anchor_id is None
    assert moved.open_pairing_group is None
    assert moved.multi_select == ("i1", "i2")
    assert moved.open_categories == ("Top",)
    assert state.active_screen == "wardrobe"


def test_change_screen_rejects_unknown_screen() -> None:
    with pytest.raises(ValueError):
        navigation.change_screen(NavigationState(), "settings")


def test_top_and_bottom_selection_are_exclusive() -> None:
    state = NavigationState(open_pairing_group="tops")

    state = navigation.select_top(state, "t1")
    assert (state.selected_top_id, state.selected_bottom_id, state.open_pairing_group) == ("t1", None, None)

    state = navigation.select_bottom(state, "b1")
    assert (state.selected_top_id, state.selected_bottom_id) == (None, "b1")
    assert state.pairing_anchor_id == "b1"


def test_categories_toggle_independently() -> None:
    state = navigation.toggle_category(NavigationState(), "Top")
    state = navigation.toggle_category(state, "Bottom")
    assert state.open_categories == ("Top", "Bottom")

    state = navigation.toggle_category(state, "Top")
    assert state.open_categories == ("Bottom",)


def test_only_one_outfit_open_at_a_time() -> None:
    state = navigation.toggle_outfit(NavigationState(), "o1")
    assert state.open_outfit_id == "o1"

    state = navigation.toggle_outfit(state, "o2")
    assert state.open_outfit_id == "o2"

    state = navigation.toggle_outfit(state, "o2")
    assert state.open_outfit_id is None


def test_opening_a_pairing_group_clears_the_opposite_selection() -> None:
    state = navigation.select_bottom(NavigationState(), "b1")
    state = navigation.toggle_pairing_group(state, navigation.TOPS_GROUP)
    assert state.open_pairing_group == "tops"
    assert state.selected_bottom_id is None

    state = navigation.select_top(state, "t1")
    state = navigation.toggle_pairing_group(state, navigation.BOTTOMS_GROUP)
    assert state.open_pairing_group == "bottoms"
    assert state.selected_top_id is None


def test_closing_an_open_pairing_group_keeps_selection() -> None:
    state = NavigationState(selected_top_id="t1", open_pairing_group="bottoms")

    closed = navigation.toggle_pairing_group(state, navigation.BOTTOMS_GROUP)

    assert closed.open_pairing_group is None
    assert closed.selected_top_id == "t1"


def test_toggle_pairing_group_rejects_unknown_group() -> None:
    with pytest.raises(ValueError):
        navigation.toggle_pairing_group(NavigationState(), "outerwear")


def test_item_selection_preserves_order() -> None:
    state = NavigationState()
    for item_id in ("a", "b", "c"):
        state = navigation.toggle_item_selection(state, item_id)
    state = navigation.toggle_item_selection(state, "b")

    assert state.multi_select == ("a", "c")
    assert state.is_selected("c")
    assert navigation.clear_item_selection(state).multi_select == ()
