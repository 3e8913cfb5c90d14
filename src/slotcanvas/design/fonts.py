"""Font resolution and caching for measurement and painting.

Measurement (auto-fit) and painting must resolve the exact same font object
for a given family, weight and size, otherwise a size that "fits" during the
search could overflow on the canvas. Both go through ``FontRegistry``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import ImageFont

logger = logging.getLogger("slotcanvas.fonts")

FontObject = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontRegistry:
    """Resolve (family, weight, size) to a Pillow font, with caching.

    Lookup order:
    1. ``<fonts_dir>/<Family>-Bold.ttf`` / ``-Regular.ttf`` / ``<Family>.ttf``
    2. The family name itself (may be a path to a font file)
    3. System fonts from FONT_PATHS
    4. Pillow's built-in scalable default font
    """

    # Default font paths - will try these in order
    FONT_PATHS = [
        # Linux
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        # Windows
        "C:/Windows/Fonts/arial.ttf",
        # macOS
        "/Library/Fonts/Arial.ttf",
    ]
    BOLD_FONT_PATHS = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "C:/Windows/Fonts/arialbd.ttf",
        "/Library/Fonts/Arial Bold.ttf",
    ]

    MAX_CACHE_ENTRIES = 512

    def __init__(self, fonts_dir: Path | None = None, use_system_fonts: bool = True):
        """Initialize the registry.

        Args:
            fonts_dir: Directory containing custom fonts.
            use_system_fonts: Try FONT_PATHS before the built-in font. Tests
                turn this off so measurements do not depend on the host.
        """
        self.fonts_dir = fonts_dir
        self.use_system_fonts = use_system_fonts
        self._font_cache: dict[tuple[str, str, float], FontObject] = {}
        self._path_cache: dict[tuple[str, str], Optional[str]] = {}

    @staticmethod
    def _is_bold(weight: str) -> bool:
        weight = str(weight).lower()
        if weight.isdigit():
            return int(weight) >= 600
        return weight in ("bold", "bolder", "semibold", "extrabold", "black")

    def _candidate_files(self, family: str, bold: bool) -> list[Path]:
        if not self.fonts_dir:
            return []
        style = "Bold" if bold else "Regular"
        return [
            self.fonts_dir / f"{family}-{style}.ttf",
            self.fonts_dir / f"{family}-{style}.otf",
            self.fonts_dir / f"{family}.ttf",
            self.fonts_dir / f"{family}.otf",
        ]

    def _resolve_path(self, family: str, weight: str) -> Optional[str]:
        key = (family, weight)
        if key in self._path_cache:
            return self._path_cache[key]

        bold = self._is_bold(weight)
        candidates: list[str] = [str(p) for p in self._candidate_files(family, bold) if p.exists()]
        if self.use_system_fonts:
            candidates.append(family)
            candidates.extend(self.BOLD_FONT_PATHS if bold else [])
            candidates.extend(self.FONT_PATHS)

        resolved = None
        for path in candidates:
            try:
                ImageFont.truetype(path, 10)
            except OSError:
                continue
            resolved = path
            break

        if resolved is None:
            logger.debug(f"No font file for {family}/{weight}, using built-in font")
        self._path_cache[key] = resolved
        return resolved

    def get_font(self, family: str, weight: str, size: float) -> FontObject:
        """Get a font, with caching."""
        cache_key = (family, str(weight), float(size))
        font = self._font_cache.get(cache_key)
        if font is not None:
            return font

        path = self._resolve_path(family, str(weight))
        if path is not None:
            font = ImageFont.truetype(path, size)
        else:
            font = ImageFont.load_default(size=size)

        if len(self._font_cache) >= self.MAX_CACHE_ENTRIES:
            self._font_cache.clear()
        self._font_cache[cache_key] = font
        return font

    def clear(self) -> None:
        """Drop cached fonts (call when the fonts directory changes)."""
        self._font_cache.clear()
        self._path_cache.clear()
