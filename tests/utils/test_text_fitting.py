"""Tests for text wrapping, measurement and auto-fit."""

from __future__ import annotations

import pytest

from slotcanvas.utils import TextFitter, TextStyle

STYLE = TextStyle(font_family="Inter")


class TestWrapText:
    """Tests for TextFitter.wrap_text."""

    def test_explicit_newlines_always_break(self, fitter: TextFitter, fonts):
        font = fonts.get_font("Inter", "normal", 20)
        assert fitter.wrap_text("one\ntwo", font, 1000) == ["one", "two"]

    def test_wraps_on_width(self, fitter: TextFitter, fonts):
        font = fonts.get_font("Inter", "normal", 20)
        lines = fitter.wrap_text("alpha beta gamma delta", font, font.getlength("alpha beta") + 1)
        assert lines[0] == "alpha beta"
        assert len(lines) >= 2
        assert " ".join(lines) == "alpha beta gamma delta"

    def test_long_word_stays_on_own_line(self, fitter: TextFitter, fonts):
        font = fonts.get_font("Inter", "normal", 20)
        lines = fitter.wrap_text("a supercalifragilistic b", font, 30)
        assert "supercalifragilistic" in lines

    def test_no_wrap_keeps_paragraphs(self, fitter: TextFitter, fonts):
        font = fonts.get_font("Inter", "normal", 20)
        assert fitter.wrap_text("alpha beta gamma", font, 10, word_wrap=False) == ["alpha beta gamma"]


class TestLayout:
    """Tests for TextFitter.layout."""

    def test_height_is_lines_times_advance(self, fitter: TextFitter):
        layout = fitter.layout("one\ntwo\nthree", STYLE, 20, 1000)
        assert len(layout.lines) == 3
        assert layout.line_advance == pytest.approx(24.0)
        assert layout.height == pytest.approx(72.0)

    def test_empty_text(self, fitter: TextFitter):
        layout = fitter.layout("", STYLE, 20, 100)
        assert layout.lines == []
        assert layout.height == 0


class TestFitText:
    """Tests for TextFitter.fit_text."""

    def test_returns_max_when_it_fits(self, fitter: TextFitter):
        result = fitter.fit_text("Hi", STYLE, 400, 200, 12, 48)
        assert result.font_size == 48
        assert result.fits
        assert result.iterations == 1

    def test_overflow_at_min_returns_min(self, fitter: TextFitter):
        """Text is never truncated; it renders at the minimum size and is flagged."""
        text = "W" * 30
        result = fitter.fit_text(text, STYLE, 20, 10, 12, 48)
        assert result.font_size == 12
        assert result.overflow
        assert "".join(result.layout.lines) == text

    def test_headline_in_200x60(self, fitter: TextFitter):
        """Twenty characters in a 200x60 box fit somewhere in [12, 48]."""
        text = "Spring Sale Today!!!"
        assert len(text) == 20

        result = fitter.fit_text(text, STYLE, 200, 60, 12, 48)

        assert 12 <= result.font_size <= 48
        assert result.fits
        assert result.layout.width <= 200
        assert result.layout.height <= 60
        if result.font_size < 44:
            fits_larger, _ = fitter.fits(text, STYLE, result.font_size + 4, 200, 60)
            assert not fits_larger

    def test_search_stays_in_range(self, fitter: TextFitter):
        result = fitter.fit_text("Some medium length text here", STYLE, 150, 80, 10, 60)
        assert all(10 <= size <= 60 for size in result.sizes_tried)
        assert result.iterations <= fitter.max_iterations

    def test_deterministic(self, fitter: TextFitter):
        a = fitter.fit_text("Repeatable result", STYLE, 180, 50, 8, 40)
        b = fitter.fit_text("Repeatable result", STYLE, 180, 50, 8, 40)
        assert a.font_size == b.font_size
        assert a.layout.lines == b.layout.lines
