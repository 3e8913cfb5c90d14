"""Unit tests for CLI core parsers."""

from __future__ import annotations

import pytest

from slotcanvas.cli.core.parsers import parse_assignments


class TestParseAssignments:
    """Tests for parse_assignments function."""

    def test_simple_pairs(self):
        assert parse_assignments(["headline=Spring Sale", "companyLogo=./logo.png"]) == {
            "headline": "Spring Sale",
            "companyLogo": "./logo.png",
        }

    def test_splits_on_first_equals(self):
        """Data URLs and query strings keep their '='."""
        result = parse_assignments(["logo=data:image/png;base64,AAA=", "img=https://x.io/a?b=c"])
        assert result["logo"] == "data:image/png;base64,AAA="
        assert result["img"] == "https://x.io/a?b=c"

    def test_empty_value_allowed(self):
        assert parse_assignments(["headline="]) == {"headline": ""}

    def test_key_is_stripped(self):
        assert parse_assignments([" headline =Hi"]) == {"headline": "Hi"}

    def test_later_duplicate_wins(self):
        assert parse_assignments(["a=1", "a=2"]) == {"a": "2"}

    def test_empty_input(self):
        assert parse_assignments([]) == {}

    @pytest.mark.parametrize("bad", ["headline", "=value", "   =x"])
    def test_invalid_entries(self, bad):
        with pytest.raises(ValueError, match="field=value"):
            parse_assignments([bad])
