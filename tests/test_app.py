"""End-to-end session tests for the wardrobe app facade."""

from __future__ import annotations

import asyncio
import random
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic import navigation
from logic.presentation import (
    EMPTY_WARDROBE_MESSAGE,
    NO_OUTFITS_MESSAGE,
    NO_PAIRINGS_MESSAGE,
    OUTFIT_ITEMS_DELETED_MESSAGE,
    GeneratorScreen,
    OutfitsScreen,
    PairingsScreen,
    WardrobeScreen,
)
from tools.catalog_store import ITEMS_KEY, OUTFITS_KEY
from tools.kv_store import InMemoryKeyValueStore
from wardrobe_app.app import VirtualWardrobeApp
from wardrobe_app.config import WardrobeConfig


def _photo(size: tuple[int, int] = (40, 80)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color="blue").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def app(tmp_path: Path, kv: InMemoryKeyValueStore) -> VirtualWardrobeApp:
    config = WardrobeConfig(data_dir=str(tmp_path), log_level="WARNING")
    return VirtualWardrobeApp(config=config, kv_store=kv, rng=random.Random(3))


@pytest.mark.asyncio
async def test_start_loads_and_shows_empty_wardrobe(app: VirtualWardrobeApp) -> None:
    assert app.loading is True

    await app.start()

    assert app.loading is False
    screen = app.render()
    assert isinstance(screen, WardrobeScreen)
    assert screen.panels == []
    assert [tab.is_active for tab in app.tabs()] == [True, False, False, False]
    assert screen.empty_message == EMPTY_WARDROBE_MESSAGE


@pytest.mark.asyncio
async def test_add_item_ingests_and_persists(app: VirtualWardrobeApp, kv: InMemoryKeyValueStore) -> None:
    await app.start()

    item = await app.add_item("Blue Shirt", "Top", _photo())

    assert item is not None
    assert item.image_url.startswith("data:image/png;base64,")
    assert kv.snapshot()[ITEMS_KEY] == [item.to_record()]
    assert app.is_uploading is False

    app.toggle_category("Top")
    panel = app.wardrobe_screen().panels[0]
    assert panel.title == "Top (1)"
    assert panel.cards[0].image_src == item.image_url
    assert panel.cards[0].deletable is True


@pytest.mark.asyncio
async def test_add_item_ignores_blank_name_missing_file_and_bad_image(app: VirtualWardrobeApp) -> None:
    await app.start()

    assert await app.add_item("  ", "Top", _photo()) is None
    assert await app.add_item("Shirt", "Top", None) is None
    assert await app.add_item("Shirt", "Top", b"not an image") is None

    assert app.catalog.items == []
    assert app.is_uploading is False


@pytest.mark.asyncio
async def test_add_item_drops_photo_over_pixel_limit(
    app: VirtualWardrobeApp, monkeypatch: pytest.MonkeyPatch
) -> None:
    await app.start()
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    assert await app.add_item("Shirt", "Top", _photo((100, 1000))) is None

    assert app.catalog.items == []
    assert app.is_uploading is False


@pytest.mark.asyncio
async def test_second_upload_while_pending_is_ignored(app: VirtualWardrobeApp) -> None:
    await app.start()

    first, second = await asyncio.gather(
        app.add_item("Shirt", "Top", _photo()),
        app.add_item("Jeans", "Bottom", _photo()),
    )

    assert first is not None
    assert second is None
    assert [item.name for item in app.catalog.items] == ["Shirt"]


@pytest.mark.asyncio
async def test_save_outfit_from_selection_then_delete_item(app: VirtualWardrobeApp, kv: InMemoryKeyValueStore) -> None:
    await app.start()
    top = await app.add_item("Shirt", "Top", _photo())
    bottom = await app.add_item("Jeans", "Bottom", _photo())

    assert await app.save_outfit("Office") is None

    app.toggle_item_selection(top.id)
    app.toggle_item_selection(bottom.id)
    outfit = await app.save_outfit("Office")

    assert outfit.item_ids == (top.id, bottom.id)
    assert app.state.multi_select == ()
    assert kv.snapshot()[OUTFITS_KEY] == [outfit.to_record()]

    await app.delete_item(top.id)
    await app.delete_item(bottom.id)
    app.change_screen(navigation.OUTFITS)
    assert [tab.screen for tab in app.tabs() if tab.is_active] == [navigation.OUTFITS]
    app.toggle_outfit(outfit.id)
    screen = app.render()
    assert isinstance(screen, OutfitsScreen)
    assert screen.outfits[0].is_open is True
    assert screen.outfits[0].cards == []
    assert screen.outfits[0].empty_message == OUTFIT_ITEMS_DELETED_MESSAGE

    await app.delete_outfit(outfit.id)
    assert app.outfits_screen().outfits_empty_message == NO_OUTFITS_MESSAGE


@pytest.mark.asyncio
async def test_pairings_screen_shows_suggestions_for_selected_top(app: VirtualWardrobeApp) -> None:
    await app.start()
    top = await app.add_item("Shirt", "Top", _photo())
    jeans = await app.add_item("Jeans", "Bottom", _photo())
    chinos = await app.add_item("Chinos", "Bottom", _photo())
    for item_id in (top.id, jeans.id):
        app.toggle_item_selection(item_id)
    await app.save_outfit("Weekend")
    for item_id in (top.id, jeans.id):
        app.toggle_item_selection(item_id)
    await app.save_outfit("Errands")

    app.change_screen(navigation.PAIRINGS)
    app.toggle_pairing_group(navigation.TOPS_GROUP)
    screen = app.render()
    assert isinstance(screen, PairingsScreen)
    assert [card.item_id for card in screen.tops.cards] == [top.id]
    assert screen.bottoms is None

    app.select_top(top.id)
    screen = app.pairings_screen()
    assert screen.tops is None
    assert screen.anchor.item_id == top.id
    bottoms, outerwear = screen.suggestions
    assert bottoms.title == "Suggested Bottoms:"
    assert [card.item_id for card in bottoms.cards] == [jeans.id]
    assert outerwear.empty_message == NO_PAIRINGS_MESSAGE

    app.select_bottom(chinos.id)
    screen = app.pairings_screen()
    assert [grid.empty_message for grid in screen.suggestions] == [NO_PAIRINGS_MESSAGE, NO_PAIRINGS_MESSAGE]

    app.change_screen(navigation.WARDROBE)
    assert app.state.pairing_anchor_id is None


@pytest.mark.asyncio
async def test_generator_warning_clears_previous_result(app: VirtualWardrobeApp) -> None:
    await app.start()
    top = await app.add_item("Shirt", "Top", _photo())
    bottom = await app.add_item("Jeans", "Bottom", _photo())

    generated = app.generate_outfit()
    assert generated is not None
    assert app.generator_error is None

    await app.delete_item(top.id)
    assert app.generate_outfit() is None
    assert app.generated_outfit is None
    assert "'Top'" in app.generator_error

    app.change_screen(navigation.GENERATOR)
    screen = app.render()
    assert isinstance(screen, GeneratorScreen)
    assert screen.warning == app.generator_error
    assert screen.slots == []

    await app.add_item("Tee", "Top", _photo())
    app.generate_outfit()
    slots = app.generator_screen().slots
    assert [card.caption for card in slots] == ["top", "bottom"]
    assert slots[1].item_id == bottom.id


@pytest.mark.asyncio
async def test_state_survives_reload_through_sqlite(tmp_path: Path) -> None:
    config = WardrobeConfig(data_dir=str(tmp_path), log_level="WARNING")
    first_session = VirtualWardrobeApp(config=config)
    await first_session.start()
    item = await first_session.add_item("Coat", "Outerwear", _photo((20, 700)))

    second_session = VirtualWardrobeApp(config=config)
    await second_session.start()

    assert (tmp_path / "virtualWardrobe.db").exists()
    assert second_session.catalog.items == [item]
    assert item.image_url.startswith("data:image/jpeg;base64,")
