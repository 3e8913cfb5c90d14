"""Page, cell and content slot models."""

from .models import (
    Background,
    Bounds,
    CanvasSize,
    Cell,
    ExportConfig,
    ImageFit,
    MediaContent,
    Rect,
    TextContent,
    new_content_id,
)
from .page import Page
from .slots import (
    ContentSlot,
    ContentSlotSet,
    ImageConstraints,
    SlotStyling,
    TextConstraints,
    derive_field_name,
)

__all__ = [
    "Background",
    "Bounds",
    "CanvasSize",
    "Cell",
    "ContentSlot",
    "ContentSlotSet",
    "ExportConfig",
    "ImageConstraints",
    "ImageFit",
    "MediaContent",
    "Page",
    "Rect",
    "SlotStyling",
    "TextConstraints",
    "TextContent",
    "derive_field_name",
    "new_content_id",
]
