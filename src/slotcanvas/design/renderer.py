"""Page renderer: paints a page onto a Pillow surface.

The renderer is a pure function of the page it is handed. It performs no I/O
and keeps no state between calls other than the shared font registry, so the
same page always produces the same pixels. Media must already be decoded
(see ``slotcanvas.assets.prepare_page_assets``); undecoded media cells show
a placeholder.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from PIL import Image, ImageColor, ImageDraw

from ..constants import PLACEHOLDER_COLOR, HorizontalAlign, VerticalAlign
from ..constraints.image_fit import compute_image_fit
from ..exceptions import PageStructureError
from ..layout.models import Background, Cell, ImageFit, MediaContent, Rect, TextContent
from ..layout.page import Page
from ..utils.text_fitting import TextFitter, TextStyle
from .fonts import FontRegistry

logger = logging.getLogger("slotcanvas.render")

RGBA = tuple[int, int, int, int]


def hex_to_rgba(color: str) -> RGBA:
    """Convert a CSS color ("#rgb", "#rrggbb", "#rrggbbaa", names) to RGBA."""
    return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]


def _pixels(image: Any) -> Optional[Image.Image]:
    """Pillow image behind a decoded handle (or the image itself)."""
    if image is None:
        return None
    return getattr(image, "image", image)


class PageRenderer:
    """Paint pages: background, then visible cells in layer order.

    Usage:
        renderer = PageRenderer(FontRegistry())
        image = renderer.render(page)
        image.save("page.png")
    """

    def __init__(self, fonts: FontRegistry | None = None, fitter: TextFitter | None = None):
        """Initialize the renderer.

        Args:
            fonts: Font registry shared with the text fitter.
            fitter: Text fitter used to lay text out; built from ``fonts``
                when omitted.
        """
        self.fonts = fonts or FontRegistry()
        self.fitter = fitter or TextFitter(self.fonts)

    def _check_structure(self, page: Page) -> None:
        if page.background is None or page.background.is_empty:
            raise PageStructureError(f"Page '{page.page_id}' has no background")
        if not page.cells:
            raise PageStructureError(f"Page '{page.page_id}' has no cells")

    def _paint_image(
        self,
        base: Image.Image,
        image: Image.Image,
        fit: ImageFit,
        origin: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        """Copy fit.source of image onto base at fit.dest (offset by origin)."""
        dest = fit.dest
        size = (max(1, round(dest.width)), max(1, round(dest.height)))
        src = fit.source
        placed = image.convert("RGBA").resize(
            size,
            Image.Resampling.LANCZOS,
            box=(src.x, src.y, src.right, src.bottom),
        )
        position = (round(dest.x - origin[0]), round(dest.y - origin[1]))
        _paste_clipped(base, placed, position)

    def _paint_background(self, canvas: Image.Image, background: Background) -> None:
        if background.color:
            canvas.paste(hex_to_rgba(background.color), (0, 0, canvas.width, canvas.height))
        image = _pixels(background.image)
        if image is not None:
            box = Rect(x=0, y=0, width=canvas.width, height=canvas.height)
            fit = compute_image_fit(image.size, box, background.fit_mode)
            self._paint_image(canvas, image, fit)

    def _place_text(
        self,
        content: TextContent,
        width: float,
        height: float,
    ) -> list[tuple[float, float, str]]:
        """Line origins relative to the cell's top-left corner.

        Overflowing text gets negative or out-of-box coordinates; it is
        never clipped to the cell.
        """
        if not content.text:
            return []
        style = TextStyle(
            font_family=content.font_family,
            font_weight=content.font_weight,
            line_height=content.line_height,
            word_wrap=content.word_wrap,
        )
        layout = self.fitter.layout(content.text, style, content.font_size, width)
        font = self.fonts.get_font(content.font_family, content.font_weight, content.font_size)

        # Calculate starting Y position for vertical alignment
        if content.align_v == VerticalAlign.TOP:
            y = 0.0
        elif content.align_v == VerticalAlign.BOTTOM:
            y = height - layout.height
        else:
            y = (height - layout.height) / 2

        placed = []
        for line in layout.lines:
            line_width = font.getlength(line) if line else 0.0
            if content.align_h == HorizontalAlign.LEFT:
                x = 0.0
            elif content.align_h == HorizontalAlign.RIGHT:
                x = width - line_width
            else:
                x = (width - line_width) / 2
            placed.append((x, y, line))
            y += layout.line_advance
        return placed

    def _text_extent(
        self,
        content: TextContent,
        lines: list[tuple[float, float, str]],
        width: float,
        height: float,
    ) -> tuple[float, float]:
        """Half extents, about the cell centre, covering the cell and its text."""
        half_w, half_h = width / 2, height / 2
        if not lines:
            return half_w, half_h
        font = self.fonts.get_font(content.font_family, content.font_weight, content.font_size)
        advance = content.font_size * content.line_height
        for x, y, line in lines:
            right = x + (font.getlength(line) if line else 0.0)
            half_w = max(half_w, width / 2 - x, right - width / 2)
            half_h = max(half_h, height / 2 - y, y + advance - height / 2)
        return half_w, half_h

    def _paint_placeholder(self, layer: Image.Image, box: tuple[int, int, int, int]) -> None:
        draw = ImageDraw.Draw(layer)
        color = hex_to_rgba(PLACEHOLDER_COLOR)
        x0, y0, x1, y1 = box
        draw.rectangle((x0, y0, x1, y1), outline=color, width=2)
        draw.line((x0, y0, x1, y1), fill=color, width=2)
        draw.line((x0, y1, x1, y0), fill=color, width=2)

    def _paint_cell(self, canvas: Image.Image, cell: Cell) -> None:
        bounds = cell.bounds
        content = cell.content
        cell_w, cell_h = max(1, round(bounds.width)), max(1, round(bounds.height))

        lines: list[tuple[float, float, str]] = []
        half_w, half_h = cell_w / 2, cell_h / 2
        if isinstance(content, TextContent):
            lines = self._place_text(content, bounds.width, bounds.height)
            half_w, half_h = self._text_extent(content, lines, cell_w, cell_h)

        # Layer centred on the cell centre, grown to hold overflowing text
        size = (max(cell_w, math.ceil(2 * half_w)), max(cell_h, math.ceil(2 * half_h)))
        ox, oy = (size[0] - cell_w) // 2, (size[1] - cell_h) // 2
        layer = Image.new("RGBA", size, (0, 0, 0, 0))

        if cell.fill_color:
            layer.paste(hex_to_rgba(cell.fill_color), (ox, oy, ox + cell_w, oy + cell_h))

        if isinstance(content, TextContent):
            draw = ImageDraw.Draw(layer)
            font = self.fonts.get_font(content.font_family, content.font_weight, content.font_size)
            fill = hex_to_rgba(content.color)
            for x, y, line in lines:
                draw.text((ox + x, oy + y), line, font=font, fill=fill)
        elif isinstance(content, MediaContent):
            image = _pixels(content.image)
            if image is not None and content.fit is not None:
                self._paint_image(layer, image, content.fit, origin=(bounds.x - ox, bounds.y - oy))
            else:
                self._paint_placeholder(layer, (ox, oy, ox + cell_w - 1, oy + cell_h - 1))

        if bounds.rotation:
            # Clockwise about the cell centre
            layer = layer.rotate(-bounds.rotation, resample=Image.Resampling.BICUBIC, expand=True)
            cx = bounds.x + bounds.width / 2
            cy = bounds.y + bounds.height / 2
            position = (round(cx - layer.width / 2), round(cy - layer.height / 2))
        else:
            position = (round(bounds.x) - ox, round(bounds.y) - oy)

        _paste_clipped(canvas, layer, position)

    def render(self, page: Page, surface: Image.Image | None = None) -> Image.Image:
        """Render a page.

        Args:
            page: Page to paint. Text cells carry their final font size;
                media cells carry decoded images and fits.
            surface: Optional RGBA surface of the page's canvas size to
                paint on (it is cleared first).

        Returns:
            The painted RGBA image.

        Raises:
            PageStructureError: If the page has no background or no cells.
            ValueError: If the surface is not an RGBA image of the canvas size.
        """
        self._check_structure(page)

        size = page.canvas.size
        if surface is None:
            canvas = Image.new("RGBA", size, (0, 0, 0, 0))
        else:
            if surface.size != size:
                raise ValueError(f"Surface is {surface.size}, page canvas is {size}")
            if surface.mode != "RGBA":
                raise ValueError(f"Surface mode is {surface.mode}, expected RGBA")
            canvas = surface
            canvas.paste((0, 0, 0, 0), (0, 0, size[0], size[1]))

        self._paint_background(canvas, page.background)

        for cell in page.ordered_cells():
            if not cell.visible:
                continue
            self._paint_cell(canvas, cell)

        logger.debug(f"Rendered page {page.page_number} ({len(page.cells)} cells)")
        return canvas


def _paste_clipped(base: Image.Image, layer: Image.Image, position: tuple[int, int]) -> None:
    """Alpha-composite layer onto base, clipping whatever falls outside."""
    x, y = position
    left, top = max(0, -x), max(0, -y)
    if left >= layer.width or top >= layer.height:
        return
    if left or top:
        layer = layer.crop((left, top, layer.width, layer.height))
    base.alpha_composite(layer, dest=(x + left, y + top))
