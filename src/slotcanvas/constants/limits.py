"""Limit constants for SlotCanvas.

This module contains all limits and constraints:
- Preset and page size limits
- Media upload limits
- Auto-fit search bounds
- Retry and timeout settings

MODIFICATION GUIDE:
------------------
- PRESET_* limits: Mirror what the preset store accepts per record
- MEDIA_* limits: Defaults for image slots, overridable per slot
- AUTOFIT_* settings: Change with care, tests assert on the search bounds
"""

from typing import Final

# =============================================================================
# PRESET LIMITS
# =============================================================================

PRESET_MAX_PAGES: Final[int] = 5
"""Maximum pages stored in one preset (page numbers 1..5)."""

PRESET_MAX_PAGE_SIZE: Final[int] = 60_000
"""Maximum serialized page size in characters (store record limit is 64KB)."""

# =============================================================================
# MEDIA LIMITS
# =============================================================================

MEDIA_MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024
"""Default maximum encoded image size in bytes for image slots (10MB)."""

MEDIA_ALLOWED_FORMATS: Final[tuple[str, ...]] = ("jpg", "png", "webp", "gif")
"""Default image formats accepted by image slots."""

# =============================================================================
# AUTO-FIT
# =============================================================================

AUTOFIT_TOLERANCE: Final[float] = 0.5
"""Binary search stops once the font size interval is narrower than this (px)."""

AUTOFIT_MAX_ITERATIONS: Final[int] = 32
"""Hard cap on binary search iterations regardless of tolerance."""

# =============================================================================
# RETRY / TIMEOUTS
# =============================================================================

HTTP_TIMEOUT_SECONDS: Final[float] = 30.0
"""Timeout for fetching remote media."""

HTTP_MAX_RETRIES: Final[int] = 3
"""Attempts for fetching remote media before giving up."""

DEBOUNCE_SECONDS: Final[float] = 0.3
"""Delay that coalesces bursts of content edits into one render."""
