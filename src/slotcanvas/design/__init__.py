"""Design module for painting pages with Pillow."""

from .fonts import FontObject, FontRegistry
from .renderer import PageRenderer, hex_to_rgba

__all__ = [
    "FontObject",
    "FontRegistry",
    "PageRenderer",
    "hex_to_rgba",
]
