"""Pure parsing functions for CLI arguments."""

from __future__ import annotations

from typing import Iterable


def parse_assignments(values: Iterable[str]) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a content map.

    Pure function - no side effects. Only the first ``=`` splits, so values
    may contain ``=`` themselves (data URLs, query strings).

    Args:
        values: Strings like 'headline=Spring Sale' or 'logo-slot=./logo.png'

    Returns:
        Mapping of key to value; later duplicates win

    Raises:
        ValueError: If an entry has no '=' or an empty key
    """
    content: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid value '{item}'. Use format field=value")
        content[key] = value
    return content
