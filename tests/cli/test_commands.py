"""Tests for the command line, driven through Typer's CliRunner."""

from __future__ import annotations

import json
from io import BytesIO

import pytest
from PIL import Image
from typer.testing import CliRunner

from slotcanvas.cli import app
from slotcanvas.layout import Page
from slotcanvas.slots import ContentSlotManager

runner = CliRunner()


@pytest.fixture(autouse=True)
def builtin_fonts(monkeypatch):
    monkeypatch.setenv("SLOTCANVAS_USE_SYSTEM_FONTS", "false")


@pytest.fixture
def page_file(tmp_path, manager: ContentSlotManager, page: Page):
    path = tmp_path / "page.json"
    path.write_text(json.dumps(page.serialize()))
    return path


def invoke(tmp_path, *args):
    return runner.invoke(app, ["--log-dir", str(tmp_path / "logs"), *args])


class TestPageCommands:
    """slots / render / fill."""

    def test_slots_lists_fields(self, tmp_path, page_file):
        result = invoke(tmp_path, "slots", str(page_file))
        assert result.exit_code == 0
        assert "headline" in result.output
        assert "companyLogo" in result.output

    def test_render_writes_image(self, tmp_path, page_file):
        output = tmp_path / "out" / "page.png"
        result = invoke(tmp_path, "render", str(page_file), "-o", str(output))

        assert result.exit_code == 0
        image = Image.open(BytesIO(output.read_bytes()))
        assert image.size == (480, 320)
        assert (tmp_path / "logs" / "slotcanvas.log").exists()

    def test_render_missing_file(self, tmp_path):
        result = invoke(tmp_path, "render", str(tmp_path / "nope.json"))
        assert result.exit_code == 1

    def test_render_missing_config(self, tmp_path, page_file):
        output = tmp_path / "page.png"
        result = invoke(tmp_path, "render", str(page_file), "-o", str(output), "-c", str(tmp_path / "absent.yaml"))

        assert result.exit_code == 2
        assert not output.exists()

    def test_fill_with_relative_image(self, tmp_path, page_file, image_file):
        image_file("logo.png", color="#ff0000")
        output = tmp_path / "filled.jpg"

        result = invoke(
            tmp_path,
            "fill",
            str(page_file),
            "-v", "headline=Spring Sale",
            "-v", "companyLogo=logo.png",
            "-o", str(output),
        )

        assert result.exit_code == 0
        image = Image.open(BytesIO(output.read_bytes()))
        assert image.format == "JPEG"
        red, green, blue = image.getpixel((350, 90))
        assert red > 200 and green < 60 and blue < 60

    def test_fill_reports_rejection(self, tmp_path, page_file):
        result = invoke(
            tmp_path, "fill", str(page_file), "-v", "headline=" + "x" * 30, "-o", str(tmp_path / "f.png")
        )
        assert result.exit_code == 0
        assert "text_too_long" in result.output

    def test_fill_bad_assignment(self, tmp_path, page_file):
        result = invoke(tmp_path, "fill", str(page_file), "-v", "headline")
        assert result.exit_code == 1


class TestPresetCommands:
    """save / presets / export."""

    def test_save_list_export(self, tmp_path, page_file):
        store = tmp_path / "store"

        saved = invoke(tmp_path, "save", str(page_file), "-s", str(store), "-n", "Spring Sale")
        assert saved.exit_code == 0

        preset_id = next(store.glob("*.json")).stem
        listed = invoke(tmp_path, "presets", "-s", str(store))
        assert listed.exit_code == 0
        assert "Spring" in listed.output

        out_dir = tmp_path / "export"
        exported = invoke(
            tmp_path, "export", preset_id, "-s", str(store), "-o", str(out_dir), "-v", "headline=Hi"
        )
        assert exported.exit_code == 0
        assert (out_dir / "spring-sale-page-1.png").exists()

    def test_save_page_without_slots(self, tmp_path, page: Page):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps(page.serialize()))
        result = invoke(tmp_path, "save", str(path), "-s", str(tmp_path / "store"))
        assert result.exit_code == 1

    def test_export_unknown_preset(self, tmp_path):
        result = invoke(tmp_path, "export", "missing", "-s", str(tmp_path / "store"))
        assert result.exit_code == 1
