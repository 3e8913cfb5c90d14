"""Tests for preset persistence."""

from __future__ import annotations

import json

import pytest

from slotcanvas.exceptions import PresetError
from slotcanvas.layout import Page
from slotcanvas.presets import LocalPresetStore, Preset, validate_page_for_save
from slotcanvas.slots import ContentSlotManager


@pytest.fixture
def store(tmp_path) -> LocalPresetStore:
    return LocalPresetStore(tmp_path / "presets")


class TestValidatePageForSave:
    """Save-time checks on a page."""

    def test_valid_page(self, manager: ContentSlotManager, page: Page):
        record = validate_page_for_save(page)
        assert record == page.serialize()

    def test_requires_name(self, manager, page: Page):
        page.page_name = "   "
        with pytest.raises(PresetError, match="name"):
            validate_page_for_save(page)

    def test_page_number_range(self, manager, page: Page):
        page.page_number = 6
        with pytest.raises(PresetError, match="between 1 and 5"):
            validate_page_for_save(page)

    def test_requires_background(self, manager, page: Page):
        page.background = None
        with pytest.raises(PresetError, match="Background"):
            validate_page_for_save(page)

    def test_requires_a_slot(self, page: Page):
        with pytest.raises(PresetError, match="content slot"):
            validate_page_for_save(page)

    def test_size_limit(self, manager, page: Page):
        page.find_cell_by_id("cell-1").content.text = "x" * 61_000
        with pytest.raises(PresetError, match="maximum size"):
            validate_page_for_save(page)


class TestPreset:
    def test_set_and_load_page(self, manager, page: Page):
        preset = Preset(preset_name="Spring Sale")
        preset.set_page(page)

        restored, orphans = preset.load_page(1)

        assert preset.page_numbers == [1]
        assert orphans == []
        assert restored.serialize() == page.serialize()

    def test_missing_page(self):
        with pytest.raises(PresetError):
            Preset(preset_name="Empty").load_page(3)


class TestLocalPresetStore:
    """Tests for the JSON file store."""

    def test_save_page_round_trip(self, store: LocalPresetStore, manager, page: Page):
        preset = store.save_page(page, preset_name="Spring Sale")

        loaded = store.load(preset.preset_id)

        assert loaded.preset_name == "Spring Sale"
        assert loaded.page_numbers == [1]
        assert loaded.load_pages()[0].serialize() == page.serialize()

    def test_file_uses_camel_case(self, store: LocalPresetStore, manager, page: Page):
        preset = store.save_page(page)
        data = json.loads((store.presets_dir / f"{preset.preset_id}.json").read_text())
        assert data["presetName"] == "Spring"
        assert "contentSlots" in data["pages"]["1"]

    def test_adds_page_to_existing_preset(self, store: LocalPresetStore, manager, page: Page):
        preset = store.save_page(page, preset_name="Campaign")
        page.page_number = 2
        store.save_page(page, preset_id=preset.preset_id)

        assert store.load(preset.preset_id).page_numbers == [1, 2]

    def test_orphans_survive_storage(self, store: LocalPresetStore, manager, page: Page):
        page.remove_cell(page.find_cell_by_id("cell-2").content_id)
        preset = store.save_page(page)

        _, orphans = store.load(preset.preset_id).load_page(1)

        assert [o.slot_id for o in orphans] == ["cell-2-slot"]

    def test_rejects_more_than_five_pages(self, store: LocalPresetStore, manager, page: Page):
        preset = Preset(preset_name="Big")
        record = validate_page_for_save(page)
        preset.pages = {number: record for number in range(1, 7)}
        with pytest.raises(PresetError):
            store.save(preset)

    def test_load_missing(self, store: LocalPresetStore):
        with pytest.raises(PresetError, match="not found"):
            store.load("does-not-exist")

    def test_invalid_id(self, store: LocalPresetStore):
        with pytest.raises(PresetError):
            store.load("../escape")

    def test_list_skips_unreadable(self, store: LocalPresetStore, manager, page: Page):
        store.save_page(page)
        (store.presets_dir / "broken.json").write_text("{not json")

        presets = store.list()

        assert [p.preset_name for p in presets] == ["Spring"]

    def test_delete(self, store: LocalPresetStore, manager, page: Page):
        preset = store.save_page(page)
        assert store.delete(preset.preset_id)
        assert not store.delete(preset.preset_id)
        assert store.list() == []
