"""Command line interface.

Feature-based layout:
- core/: Shared utilities (console, result types, parsers)
- page/: Inspect, render and fill single pages
- preset/: List, save and export presets

Usage:
    python -m slotcanvas.cli --help
    python -m slotcanvas.cli fill page.json -v headline="Spring Sale" -o out.png
"""

from .app import app, main

__all__ = ["app", "main"]
