"""Apply slot constraints to user-supplied values.

Each call either returns a placement (font size and layout for text, source
and destination rectangles for images) or a ``ContentRejection`` naming why
the value was not applied. Nothing here raises for bad user content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from ..constants import FontSizeMode, RejectionReason, SlotType
from ..exceptions import ContentRejection
from ..layout.models import Cell, ImageFit, TextContent
from ..layout.slots import ContentSlot, ImageConstraints, TextConstraints
from ..utils.text_fitting import TextFitter, TextLayout, TextStyle
from .image_fit import compute_image_fit

if TYPE_CHECKING:
    from ..assets.loader import DecodedImage

logger = logging.getLogger("slotcanvas.constraints")

_FORMAT_EQUIVALENTS = {"jpeg": "jpg"}


@dataclass
class TextFit:
    """An accepted text value and where it lands."""

    slot_id: str
    text: str
    font_size: float
    layout: TextLayout
    overflow: bool = False


def _normalize_format(fmt: str) -> str:
    fmt = fmt.lower().lstrip(".")
    return _FORMAT_EQUIVALENTS.get(fmt, fmt)


class ConstraintEnforcer:
    """Validates values against a slot and computes their placement."""

    def __init__(self, fitter: TextFitter):
        self.fitter = fitter

    def text_style(self, slot: ContentSlot, cell: Optional[Cell] = None) -> TextStyle:
        """Typography for a text slot: designer styling plus cell metrics."""
        constraints = slot.constraints
        content = cell.content if cell is not None else None
        base = content if isinstance(content, TextContent) else TextContent()
        styling = slot.styling
        return TextStyle(
            font_family=styling.font_family if styling else base.font_family,
            font_weight=styling.font_weight if styling else base.font_weight,
            line_height=base.line_height,
            word_wrap=constraints.word_wrap if isinstance(constraints, TextConstraints) else True,
        )

    def enforce_text(
        self,
        slot: ContentSlot,
        value: str,
        cell: Optional[Cell] = None,
    ) -> Union[TextFit, ContentRejection]:
        """Check a text value and choose its font size.

        Args:
            slot: Target text slot.
            value: User-supplied text.
            cell: Source cell, for its designed font size and line height.

        Returns:
            TextFit on success, ContentRejection otherwise.
        """
        constraints = slot.constraints
        if slot.type != SlotType.TEXT or not isinstance(constraints, TextConstraints):
            return ContentRejection(
                slot.slot_id,
                RejectionReason.TYPE_MISMATCH,
                f"Slot '{slot.field_name}' does not accept text",
            )

        if len(value) > constraints.max_characters:
            return ContentRejection(
                slot.slot_id,
                RejectionReason.TEXT_TOO_LONG,
                f"{len(value)} characters exceeds the limit of {constraints.max_characters}",
            )

        return self.place_text(slot, value, cell)

    def place_text(
        self,
        slot: ContentSlot,
        value: str,
        cell: Optional[Cell] = None,
    ) -> Union[TextFit, ContentRejection]:
        """Choose the font size for a text value without the length check."""
        constraints = slot.constraints
        if not isinstance(constraints, TextConstraints):
            return ContentRejection(
                slot.slot_id,
                RejectionReason.TYPE_MISMATCH,
                f"Slot '{slot.field_name}' does not accept text",
            )

        style = self.text_style(slot, cell)
        box = slot.bounds

        if constraints.font_size_mode == FontSizeMode.FIXED:
            designed = (
                cell.content.font_size
                if cell is not None and isinstance(cell.content, TextContent)
                else constraints.max_font_size
            )
            size = min(max(designed, constraints.min_font_size), constraints.max_font_size)
            fits, layout = self.fitter.fits(value, style, size, box.width, box.height)
            return TextFit(slot.slot_id, value, size, layout, overflow=not fits)

        result = self.fitter.fit_text(
            value,
            style,
            box_width=box.width,
            box_height=box.height,
            min_font_size=constraints.min_font_size,
            max_font_size=constraints.max_font_size,
        )
        if result.overflow:
            logger.info(
                f"Slot '{slot.field_name}' overflows at minimum size {result.font_size}px"
            )
        return TextFit(slot.slot_id, value, result.font_size, result.layout, result.overflow)

    def enforce_image(
        self,
        slot: ContentSlot,
        decoded: "DecodedImage",
    ) -> Union[ImageFit, ContentRejection]:
        """Check a decoded image and compute its crop and placement.

        Args:
            slot: Target image slot.
            decoded: Image produced by the asset loader.

        Returns:
            ImageFit on success, ContentRejection otherwise.
        """
        constraints = slot.constraints
        if slot.type != SlotType.IMAGE or not isinstance(constraints, ImageConstraints):
            return ContentRejection(
                slot.slot_id,
                RejectionReason.TYPE_MISMATCH,
                f"Slot '{slot.field_name}' does not accept images",
            )

        allowed = {_normalize_format(fmt) for fmt in constraints.allowed_formats}
        if _normalize_format(decoded.format) not in allowed:
            return ContentRejection(
                slot.slot_id,
                RejectionReason.MEDIA_FORMAT_NOT_ALLOWED,
                f"Format '{decoded.format}' is not one of {sorted(allowed)}",
            )

        if decoded.byte_size > constraints.max_file_size:
            return ContentRejection(
                slot.slot_id,
                RejectionReason.MEDIA_TOO_LARGE,
                f"{decoded.byte_size} bytes exceeds the limit of {constraints.max_file_size}",
            )

        try:
            return compute_image_fit(
                decoded.size,
                slot.bounds.to_rect(),
                constraints.effective_fit_mode,
                constraints.focal_point,
            )
        except ValueError as e:
            return ContentRejection(slot.slot_id, RejectionReason.MEDIA_LOAD_FAILED, str(e))
