"""Page CLI commands - thin wrappers orchestrating display and service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from ...config import load_settings
from ..core.console import console, print_error
from ..core.parsers import parse_assignments
from ..core.types import Failure
from .display import (
    show_bind_report,
    show_media_failures,
    show_orphans,
    show_render_result,
    show_slots_table,
)
from .service import fill_page, load_page_file, output_format, render_page


def _load(page_file: Path):
    result = load_page_file(page_file)
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)
    return result.value


def slots(
    page_file: Path = typer.Argument(..., help="Page JSON file"),
) -> None:
    """List the content slots of a page."""
    loaded = _load(page_file)
    show_slots_table(console, loaded.page)
    show_orphans(console, loaded.orphans)


def render(
    page_file: Path = typer.Argument(..., help="Page JSON file"),
    output: Path = typer.Option(Path("page.png"), "--output", "-o", help="Output image (.png or .jpg)"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML file"
    ),
) -> None:
    """Render a page with its designer content."""
    settings = load_settings(config)
    loaded = _load(page_file)

    result = asyncio.run(render_page(loaded, settings, output_format(output)))
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_media_failures(console, result.value.media_failures)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.value.data)
    show_render_result(console, output, len(result.value.data))


def fill(
    page_file: Path = typer.Argument(..., help="Page JSON file"),
    values: List[str] = typer.Option([], "--value", "-v", help="Slot content as field=value (repeatable)"),
    output: Path = typer.Option(Path("filled.png"), "--output", "-o", help="Output image (.png or .jpg)"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML file"
    ),
) -> None:
    """Fill a page's content slots and render the result.

    Keys may be field names (headline) or slot ids (cell-3-slot). Images
    are given as file paths, file:// URLs, http(s) URLs or data URLs.
    """
    settings = load_settings(config)
    try:
        content = parse_assignments(values)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    loaded = _load(page_file)
    result = asyncio.run(fill_page(loaded, content, settings, output_format(output)))
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    outcome = result.value
    show_media_failures(console, outcome.media_failures)
    if outcome.report is not None:
        show_bind_report(console, outcome.report)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(outcome.data)
    show_render_result(console, output, len(outcome.data))
