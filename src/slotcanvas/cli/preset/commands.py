"""Preset CLI commands - thin wrappers orchestrating display and service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from ...config import load_settings
from ..core.console import console, print_error
from ..core.parsers import parse_assignments
from ..core.types import Failure
from ..page.service import load_page_file
from .display import show_export_results, show_presets_table, show_saved
from .service import export_preset_files, list_presets, save_page


def presets(
    store: Optional[Path] = typer.Option(None, "--store", "-s", help="Preset store directory"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML file"
    ),
) -> None:
    """List stored presets."""
    settings = load_settings(config)
    show_presets_table(console, list_presets(store or settings.presets_dir))


def save(
    page_file: Path = typer.Argument(..., help="Page JSON file"),
    store: Optional[Path] = typer.Option(None, "--store", "-s", help="Preset store directory"),
    preset_id: Optional[str] = typer.Option(None, "--preset", "-p", help="Add to this preset instead of creating one"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name for a new preset"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML file"
    ),
) -> None:
    """Save a page into a preset."""
    settings = load_settings(config)
    loaded = load_page_file(page_file)
    if isinstance(loaded, Failure):
        print_error(loaded.error, loaded.details)
        raise typer.Exit(1)

    result = save_page(loaded.value, store or settings.presets_dir, preset_id, name)
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_saved(console, result.value, loaded.value.page.page_number)


def export(
    preset_id: str = typer.Argument(..., help="Preset ID"),
    store: Optional[Path] = typer.Option(None, "--store", "-s", help="Preset store directory"),
    output_dir: Path = typer.Option(Path("export"), "--output", "-o", help="Output directory"),
    values: List[str] = typer.Option([], "--value", "-v", help="Slot content as field=value (repeatable)"),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Settings YAML file"
    ),
) -> None:
    """Export every page of a preset, optionally filled with content."""
    settings = load_settings(config)
    try:
        content = parse_assignments(values)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    result = asyncio.run(
        export_preset_files(store or settings.presets_dir, preset_id, content, settings, output_dir)
    )
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_export_results(console, result.value)
    if any(not upload.success for upload in result.value.uploads):
        raise typer.Exit(1)
