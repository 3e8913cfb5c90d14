"""Tests for font resolution and caching."""

from __future__ import annotations

from slotcanvas.design import FontRegistry


class TestFontRegistry:
    """Tests for FontRegistry."""

    def test_same_key_returns_cached_font(self, fonts: FontRegistry):
        assert fonts.get_font("Inter", "bold", 20) is fonts.get_font("Inter", "bold", 20)

    def test_built_in_font_scales(self, fonts: FontRegistry):
        small = fonts.get_font("Inter", "normal", 12)
        large = fonts.get_font("Inter", "normal", 48)
        assert large.getlength("Hello") > small.getlength("Hello")

    def test_bold_detection(self):
        assert FontRegistry._is_bold("bold")
        assert FontRegistry._is_bold("700")
        assert not FontRegistry._is_bold("normal")
        assert not FontRegistry._is_bold("400")

    def test_fonts_dir_candidates(self, tmp_path):
        registry = FontRegistry(tmp_path, use_system_fonts=False)
        names = [p.name for p in registry._candidate_files("Inter", bold=True)]
        assert names[0] == "Inter-Bold.ttf"

    def test_clear(self, fonts: FontRegistry):
        first = fonts.get_font("Inter", "normal", 20)
        fonts.clear()
        assert fonts.get_font("Inter", "normal", 20) is not first
