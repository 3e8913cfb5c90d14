"""Text fitting utilities for content slots.

Provides functions to auto-fit text within a cell's bounds:
- Wrap text into lines that fit a width
- Measure a wrapped layout at a given font size
- Find the largest font size in a range that fits a box (binary search)

The renderer lays text out with the same ``TextFitter.layout`` call the
enforcer used to pick the size, so what fits during the search is exactly
what gets painted.

Usage:
    from slotcanvas.utils.text_fitting import TextFitter, TextStyle

    fitter = TextFitter(fonts)
    result = fitter.fit_text(
        "Short headline",
        TextStyle(font_family="Inter", font_weight="bold"),
        box_width=200,
        box_height=60,
        min_font_size=12,
        max_font_size=48,
    )

    # result.font_size = largest size that fits (or min_font_size)
    # result.overflow  = True when even min_font_size overflows
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import AUTOFIT_MAX_ITERATIONS, AUTOFIT_TOLERANCE, TEXT_LINE_HEIGHT

if TYPE_CHECKING:
    from ..design.fonts import FontObject, FontRegistry

logger = logging.getLogger("slotcanvas.autofit")


@dataclass(frozen=True)
class TextStyle:
    """Typography inputs that affect text measurement."""

    font_family: str
    font_weight: str = "normal"
    line_height: float = TEXT_LINE_HEIGHT
    word_wrap: bool = True


@dataclass
class TextLayout:
    """Wrapped text at one font size."""

    lines: list[str]
    font_size: float
    line_advance: float
    width: float
    height: float


@dataclass
class FitResult:
    """Result of text fitting operation."""

    font_size: float
    layout: TextLayout
    fits: bool
    iterations: int = 0
    sizes_tried: list[float] = field(default_factory=list)

    @property
    def overflow(self) -> bool:
        return not self.fits


class TextFitter:
    """Fits text within a box by searching font sizes.

    Rendered size is monotonic in the space text consumes, so the largest
    fitting size is found with a binary search over the closed interval
    [min_font_size, max_font_size] that stops once the interval is narrower
    than ``tolerance``.
    """

    def __init__(
        self,
        fonts: FontRegistry,
        tolerance: float = AUTOFIT_TOLERANCE,
        max_iterations: int = AUTOFIT_MAX_ITERATIONS,
    ):
        """Initialize text fitter.

        Args:
            fonts: Registry shared with the renderer.
            tolerance: Stop when hi - lo drops below this (pixels).
            max_iterations: Hard cap on search steps.
        """
        self.fonts = fonts
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def _font(self, style: TextStyle, size: float) -> FontObject:
        return self.fonts.get_font(style.font_family, style.font_weight, size)

    @staticmethod
    def _line_width(line: str, font: FontObject) -> float:
        return float(font.getlength(line)) if line else 0.0

    def wrap_text(
        self,
        text: str,
        font: FontObject,
        max_width: float,
        word_wrap: bool = True,
    ) -> list[str]:
        """Wrap text to fit within max_width.

        Explicit newlines always break. A single word wider than max_width
        stays on its own line and overflows.
        """
        lines: list[str] = []
        for paragraph in text.split("\n"):
            if not word_wrap:
                lines.append(paragraph)
                continue

            words = paragraph.split()
            current_line: list[str] = []
            for word in words:
                test_line = " ".join(current_line + [word])
                if self._line_width(test_line, font) <= max_width:
                    current_line.append(word)
                else:
                    if current_line:
                        lines.append(" ".join(current_line))
                    current_line = [word]

            lines.append(" ".join(current_line))

        return lines

    def layout(self, text: str, style: TextStyle, size: float, max_width: float) -> TextLayout:
        """Wrap and measure text at a font size."""
        font = self._font(style, size)
        lines = self.wrap_text(text, font, max_width, style.word_wrap) if text else []
        advance = size * style.line_height
        width = max((self._line_width(line, font) for line in lines), default=0.0)
        return TextLayout(
            lines=lines,
            font_size=size,
            line_advance=advance,
            width=width,
            height=advance * len(lines),
        )

    def fits(
        self,
        text: str,
        style: TextStyle,
        size: float,
        box_width: float,
        box_height: float,
    ) -> tuple[bool, TextLayout]:
        layout = self.layout(text, style, size, box_width)
        return layout.width <= box_width and layout.height <= box_height, layout

    def fit_text(
        self,
        text: str,
        style: TextStyle,
        box_width: float,
        box_height: float,
        min_font_size: float,
        max_font_size: float,
    ) -> FitResult:
        """Largest font size in [min_font_size, max_font_size] that fits the box.

        If even min_font_size overflows, min_font_size is returned with
        ``fits=False``; the text is never truncated.

        Args:
            text: Text to fit.
            style: Font family/weight, line height and wrapping.
            box_width: Available width in pixels.
            box_height: Available height in pixels.
            min_font_size: Lower end of the range (inclusive).
            max_font_size: Upper end of the range (inclusive).

        Returns:
            FitResult with the chosen size and its layout.
        """
        tried: list[float] = []

        fits_max, layout_max = self.fits(text, style, max_font_size, box_width, box_height)
        tried.append(max_font_size)
        if fits_max:
            return FitResult(max_font_size, layout_max, fits=True, iterations=1, sizes_tried=tried)

        fits_min, layout_min = self.fits(text, style, min_font_size, box_width, box_height)
        tried.append(min_font_size)
        if not fits_min:
            logger.debug(
                f"Text overflows {box_width:.0f}x{box_height:.0f} even at {min_font_size}px"
            )
            return FitResult(min_font_size, layout_min, fits=False, iterations=2, sizes_tried=tried)

        # Invariant: lo fits, hi does not
        lo, hi = min_font_size, max_font_size
        best = layout_min
        iterations = 2
        while hi - lo >= self.tolerance and iterations < self.max_iterations:
            mid = (lo + hi) / 2
            tried.append(mid)
            iterations += 1
            ok, layout = self.fits(text, style, mid, box_width, box_height)
            if ok:
                lo, best = mid, layout
            else:
                hi = mid

        logger.debug(f"Auto-fit picked {lo:.2f}px after {iterations} steps")
        return FitResult(lo, best, fits=True, iterations=iterations, sizes_tried=tried)
