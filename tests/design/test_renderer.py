"""Tests for PageRenderer."""

from __future__ import annotations

import pytest
from PIL import Image

from slotcanvas.constants import FitMode
from slotcanvas.constraints import compute_image_fit
from slotcanvas.design import PageRenderer, hex_to_rgba
from slotcanvas.exceptions import PageStructureError
from slotcanvas.layout import Bounds, Cell, Page

WHITE = (255, 255, 255, 255)


class TestRender:
    """Tests for PageRenderer.render."""

    def test_output_matches_canvas(self, renderer: PageRenderer, page: Page):
        image = renderer.render(page)
        assert image.mode == "RGBA"
        assert image.size == (480, 320)

    def test_same_page_renders_identically(self, renderer: PageRenderer, page: Page):
        before = page.serialize()
        first = renderer.render(page).tobytes()
        second = renderer.render(page).tobytes()
        assert first == second
        assert page.serialize() == before

    def test_background_color(self, renderer: PageRenderer, page: Page):
        assert renderer.render(page).getpixel((5, 5)) == WHITE

    def test_hidden_overlay_not_painted(self, renderer: PageRenderer, page: Page):
        image = renderer.render(page)
        assert image.getpixel((10, 310)) == WHITE

    def test_visible_overlay_painted(self, renderer: PageRenderer, page: Page):
        page.find_cell_by_id("guide").visible = True
        image = renderer.render(page)
        assert image.getpixel((10, 310)) == hex_to_rgba("#ff00ff")

    def test_higher_layer_paints_on_top(self, renderer: PageRenderer, page: Page):
        bounds = Bounds(x=0, y=200, width=50, height=50)
        page.cells.append(Cell(cell_id="top", bounds=bounds, layer=5, fill_color="#0000ff"))
        page.cells.append(Cell(cell_id="under", bounds=bounds, layer=4, fill_color="#00ff00"))
        assert renderer.render(page).getpixel((25, 225)) == (0, 0, 255, 255)

    def test_empty_media_cell_shows_placeholder(self, renderer: PageRenderer, page: Page):
        image = renderer.render(page)
        assert image.getpixel((300, 40)) == (100, 149, 237, 255)

    def test_loaded_media_cell(self, renderer: PageRenderer, page: Page):
        cell = page.find_cell_by_id("cell-2")
        red = Image.new("RGBA", (200, 50), "red")
        cell.content.image = red
        cell.content.fit = compute_image_fit(red.size, cell.bounds.to_rect(), FitMode.COVER)
        image = renderer.render(page)
        assert image.getpixel((350, 90)) == (255, 0, 0, 255)
        assert image.getpixel((300, 40)) == (255, 0, 0, 255)

    def test_text_is_drawn_inside_cell(self, renderer: PageRenderer, page: Page):
        image = renderer.render(page)
        region = image.crop((40, 40, 240, 100))
        assert any(pixel != WHITE for pixel in region.getdata())

    def test_overflowing_text_spills_past_cell(self, renderer: PageRenderer, page: Page):
        content = page.find_cell_by_id("cell-1").content
        content.text = " ".join(["WWWW"] * 60)
        content.font_size = 12
        content.overflow = True

        image = renderer.render(page)

        # Middle-aligned text runs past both the top and bottom edges
        above = image.crop((40, 0, 240, 38))
        below = image.crop((40, 102, 240, 140))
        assert any(pixel != WHITE for pixel in above.getdata())
        assert any(pixel != WHITE for pixel in below.getdata())

    def test_cell_partly_off_canvas(self, renderer: PageRenderer, page: Page):
        page.cells.append(
            Cell(cell_id="edge", bounds=Bounds(x=-20, y=-20, width=40, height=40), fill_color="#000000")
        )
        image = renderer.render(page)
        assert image.getpixel((0, 0)) == (0, 0, 0, 255)
        assert image.getpixel((25, 25)) == WHITE

    def test_rotated_cell_stays_centred(self, renderer: PageRenderer, page: Page):
        page.cells.append(
            Cell(
                cell_id="rotated",
                bounds=Bounds(x=100, y=200, width=60, height=20, rotation=90),
                fill_color="#000000",
            )
        )
        image = renderer.render(page)
        # Rotated a quarter turn the bar is vertical through the centre (130, 210)
        assert image.getpixel((130, 190)) == (0, 0, 0, 255)
        assert image.getpixel((105, 210)) == WHITE


class TestSurface:
    """Rendering onto a caller-owned surface."""

    def test_reuses_surface(self, renderer: PageRenderer, page: Page):
        surface = Image.new("RGBA", (480, 320), (9, 9, 9, 255))
        result = renderer.render(page, surface)
        assert result is surface
        assert surface.getpixel((5, 5)) == WHITE

    def test_wrong_size(self, renderer: PageRenderer, page: Page):
        with pytest.raises(ValueError):
            renderer.render(page, Image.new("RGBA", (10, 10)))

    def test_wrong_mode(self, renderer: PageRenderer, page: Page):
        with pytest.raises(ValueError):
            renderer.render(page, Image.new("RGB", (480, 320)))


class TestStructure:
    def test_no_background(self, renderer: PageRenderer, page: Page):
        page.background = None
        with pytest.raises(PageStructureError):
            renderer.render(page)

    def test_no_cells(self, renderer: PageRenderer, page: Page):
        page.cells = []
        with pytest.raises(PageStructureError):
            renderer.render(page)


def test_hex_to_rgba():
    assert hex_to_rgba("#ff0000") == (255, 0, 0, 255)
    assert hex_to_rgba("#00ff0080") == (0, 255, 0, 128)
