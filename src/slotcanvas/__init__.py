"""SlotCanvas: content-slot templating and shared page rendering.

A designer lays out a page of cells, marks some of them as content slots,
and end users later fill those slots. One renderer paints the designer
canvas, the end-user preview and the export, so they always match.

Usage:
    from slotcanvas import ContentSlotManager, PageRenderer, SlotType

    manager = ContentSlotManager(page)
    manager.define_slot(headline_cell, "Headline", SlotType.TEXT)
    image = PageRenderer().render(page)
"""

from .constants import SlotType
from .design import FontRegistry, PageRenderer
from .layout import Page
from .slots import ContentSlotManager

__version__ = "0.1.0"

__all__ = [
    "ContentSlotManager",
    "FontRegistry",
    "Page",
    "PageRenderer",
    "SlotType",
    "__version__",
]
