"""Shared test fixtures and configuration.

Provides a small two-slot page (a headline text cell and a logo image cell)
plus the engine pieces wired the way the CLI wires them. Fonts come from
Pillow's built-in scalable font so measurements do not depend on the host.
"""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from slotcanvas.assets import AssetLoader
from slotcanvas.binding import ContentBinder
from slotcanvas.constants import CellRole, SlotType
from slotcanvas.design import FontRegistry, PageRenderer
from slotcanvas.layout import (
    Background,
    Bounds,
    CanvasSize,
    Cell,
    MediaContent,
    Page,
    TextConstraints,
    TextContent,
)
from slotcanvas.slots import ContentSlotManager
from slotcanvas.utils import TextFitter

HEADLINE_BOUNDS = Bounds(x=40, y=40, width=200, height=60)
LOGO_BOUNDS = Bounds(x=300, y=40, width=100, height=100)


def encode_image(color: str, size: tuple[int, int] = (40, 40), fmt: str = "PNG") -> bytes:
    """Solid-color image bytes."""
    output = BytesIO()
    mode = "RGB" if fmt == "JPEG" else "RGBA"
    Image.new(mode, size, color).save(output, format=fmt)
    return output.getvalue()


def build_page() -> Page:
    """Designer page: headline text, empty logo, hidden overlay guide."""
    headline = Cell(
        cell_id="cell-1",
        bounds=HEADLINE_BOUNDS.model_copy(),
        layer=1,
        content=TextContent(text="Hello", font_size=24, color="#111111"),
    )
    logo = Cell(
        cell_id="cell-2",
        bounds=LOGO_BOUNDS.model_copy(),
        layer=2,
        content=MediaContent(),
    )
    guide = Cell(
        cell_id="guide",
        bounds=Bounds(x=0, y=300, width=480, height=20),
        layer=9,
        role=CellRole.OVERLAY,
        visible=False,
        fill_color="#ff00ff",
    )
    return Page(
        page_name="Spring",
        canvas=CanvasSize(width=480, height=320),
        background=Background(color="#ffffff"),
        cells=[headline, logo, guide],
    )


@pytest.fixture
def fonts() -> FontRegistry:
    return FontRegistry(use_system_fonts=False)


@pytest.fixture
def fitter(fonts: FontRegistry) -> TextFitter:
    return TextFitter(fonts)


@pytest.fixture
def renderer(fonts: FontRegistry, fitter: TextFitter) -> PageRenderer:
    return PageRenderer(fonts, fitter)


@pytest.fixture
def page() -> Page:
    return build_page()


@pytest.fixture
def manager(page: Page) -> ContentSlotManager:
    """Page with a 'headline' text slot ([12, 48] px, 20 chars) and a 'companyLogo' image slot."""
    manager = ContentSlotManager(page)
    manager.define_slot(
        page.find_cell_by_id("cell-1"),
        "Headline",
        SlotType.TEXT,
        TextConstraints(max_characters=20, min_font_size=12, max_font_size=48),
    )
    manager.define_slot(page.find_cell_by_id("cell-2"), "Company Logo", SlotType.IMAGE)
    return manager


@pytest.fixture
def loader() -> AssetLoader:
    return AssetLoader()


@pytest.fixture
def binder(renderer: PageRenderer, loader: AssetLoader) -> ContentBinder:
    return ContentBinder(renderer, loader)


@pytest.fixture
def data_url() -> Callable[..., str]:
    """Factory for solid-color image data URLs."""

    def _make(color: str = "#ff0000", size: tuple[int, int] = (40, 40), fmt: str = "PNG") -> str:
        mime = "image/jpeg" if fmt == "JPEG" else f"image/{fmt.lower()}"
        payload = base64.b64encode(encode_image(color, size, fmt)).decode("ascii")
        return f"data:{mime};base64,{payload}"

    return _make


@pytest.fixture
def image_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory for solid-color image files on disk."""

    def _make(name: str = "image.png", color: str = "#00ff00", size: tuple[int, int] = (40, 40)) -> Path:
        fmt = "JPEG" if name.endswith((".jpg", ".jpeg")) else "PNG"
        path = tmp_path / name
        path.write_bytes(encode_image(color, size, fmt))
        return path

    return _make


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory for encoded solid-color images."""
    return encode_image
