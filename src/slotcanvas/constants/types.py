"""Enums shared by the page model, the enforcer and the renderer.

Every enum subclasses ``str`` so values serialize as plain strings in page
records and compare equal to their wire values.
"""

from enum import Enum


class SlotType(str, Enum):
    """Kind of content a slot accepts."""

    TEXT = "text"
    IMAGE = "image"


class CellRole(str, Enum):
    """What a cell is for.

    Overlay cells carry designer-only guides. Whether they show up is decided
    by their ``visible`` flag, never by who is rendering.
    """

    CONTENT = "content"
    OVERLAY = "overlay"


class FitMode(str, Enum):
    """How an image is placed inside its bounds."""

    COVER = "cover"
    """Uniform scale to fill the bounds, cropping overflow."""

    CONTAIN = "contain"
    """Uniform scale to fit inside the bounds, leaving padding."""

    FILL = "fill"
    """Non-uniform stretch to the bounds."""


class FocalPoint(str, Enum):
    """Crop anchor used by cover fitting."""

    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class FontSizeMode(str, Enum):
    """Text slot sizing strategy."""

    AUTO_FIT = "auto-fit"
    FIXED = "fixed"


class HorizontalAlign(str, Enum):
    """Horizontal text alignment options."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(str, Enum):
    """Vertical text alignment options."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class ExportFormat(str, Enum):
    """Default export kind stored with a page."""

    IMAGE = "image"
    VIDEO = "video"


class ImageFormat(str, Enum):
    """Encoded still formats."""

    PNG = "png"
    JPG = "jpg"


class RejectionReason(str, Enum):
    """Why a user value was not applied to its slot."""

    TEXT_TOO_LONG = "text_too_long"
    MEDIA_LOAD_FAILED = "media_load_failed"
    MEDIA_TOO_LARGE = "media_too_large"
    MEDIA_FORMAT_NOT_ALLOWED = "media_format_not_allowed"
    TYPE_MISMATCH = "type_mismatch"
