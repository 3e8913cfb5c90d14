"""Default values for slot constraints, styling and export.

These are the values a designer gets when a slot is defined without explicit
configuration.
"""

from typing import Final

# =============================================================================
# TEXT SLOTS
# =============================================================================

TEXT_MAX_CHARACTERS: Final[int] = 100
TEXT_MIN_FONT_SIZE: Final[float] = 16.0
TEXT_MAX_FONT_SIZE: Final[float] = 72.0
TEXT_LINE_HEIGHT: Final[float] = 1.2
"""Line advance as a multiple of the font size."""

TEXT_FONT_FAMILY: Final[str] = "Inter"
TEXT_FONT_WEIGHT: Final[str] = "normal"
TEXT_COLOR: Final[str] = "#000000"
TEXT_FONT_SIZE: Final[float] = 48.0
"""Font size assumed for text cells that do not carry one."""

# =============================================================================
# CANVAS
# =============================================================================

CANVAS_WIDTH: Final[int] = 1080
CANVAS_HEIGHT: Final[int] = 1080
BACKGROUND_COLOR: Final[str] = "#ffffff"

PLACEHOLDER_COLOR: Final[str] = "#6495ED"
"""Stroke color of the cross drawn for media cells without a decoded image."""

# =============================================================================
# EXPORT
# =============================================================================

EXPORT_VIDEO_DURATION: Final[float] = 5.0
EXPORT_VIDEO_FPS: Final[int] = 60
JPEG_QUALITY: Final[int] = 98
