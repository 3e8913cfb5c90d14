"""Global constants package for SlotCanvas.

This package centralizes constants, enums and default values used across the
model, the enforcer, the renderer and export. Import from here for
consistency.

PACKAGE STRUCTURE:
-----------------
- types.py    : Enums (slot types, fit modes, alignment, rejection reasons)
- defaults.py : Default constraint, styling, canvas and export values
- limits.py   : Preset/media limits, auto-fit bounds, retry and timeout settings

USAGE EXAMPLES:
--------------
    from slotcanvas.constants import FitMode, SlotType
    from slotcanvas.constants import PRESET_MAX_PAGES, AUTOFIT_TOLERANCE
"""

# =============================================================================
# ENUMS
# =============================================================================
from .types import (
    CellRole,
    ExportFormat,
    FitMode,
    FocalPoint,
    FontSizeMode,
    HorizontalAlign,
    ImageFormat,
    RejectionReason,
    SlotType,
    VerticalAlign,
)

# =============================================================================
# DEFAULTS
# =============================================================================
from .defaults import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    EXPORT_VIDEO_DURATION,
    EXPORT_VIDEO_FPS,
    JPEG_QUALITY,
    PLACEHOLDER_COLOR,
    TEXT_COLOR,
    TEXT_FONT_FAMILY,
    TEXT_FONT_SIZE,
    TEXT_FONT_WEIGHT,
    TEXT_LINE_HEIGHT,
    TEXT_MAX_CHARACTERS,
    TEXT_MAX_FONT_SIZE,
    TEXT_MIN_FONT_SIZE,
)

# =============================================================================
# LIMITS
# =============================================================================
from .limits import (
    AUTOFIT_MAX_ITERATIONS,
    AUTOFIT_TOLERANCE,
    DEBOUNCE_SECONDS,
    HTTP_MAX_RETRIES,
    HTTP_TIMEOUT_SECONDS,
    MEDIA_ALLOWED_FORMATS,
    MEDIA_MAX_FILE_SIZE,
    PRESET_MAX_PAGE_SIZE,
    PRESET_MAX_PAGES,
)

__all__ = [
    # Enums
    "CellRole",
    "ExportFormat",
    "FitMode",
    "FocalPoint",
    "FontSizeMode",
    "HorizontalAlign",
    "ImageFormat",
    "RejectionReason",
    "SlotType",
    "VerticalAlign",
    # Defaults
    "BACKGROUND_COLOR",
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "EXPORT_VIDEO_DURATION",
    "EXPORT_VIDEO_FPS",
    "JPEG_QUALITY",
    "PLACEHOLDER_COLOR",
    "TEXT_COLOR",
    "TEXT_FONT_FAMILY",
    "TEXT_FONT_SIZE",
    "TEXT_FONT_WEIGHT",
    "TEXT_LINE_HEIGHT",
    "TEXT_MAX_CHARACTERS",
    "TEXT_MAX_FONT_SIZE",
    "TEXT_MIN_FONT_SIZE",
    # Limits
    "AUTOFIT_MAX_ITERATIONS",
    "AUTOFIT_TOLERANCE",
    "DEBOUNCE_SECONDS",
    "HTTP_MAX_RETRIES",
    "HTTP_TIMEOUT_SECONDS",
    "MEDIA_ALLOWED_FORMATS",
    "MEDIA_MAX_FILE_SIZE",
    "PRESET_MAX_PAGE_SIZE",
    "PRESET_MAX_PAGES",
]
