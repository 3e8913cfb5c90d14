"""Stateless service for preset operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from ...assets import AssetLoader, prepare_page_assets
from ...binding import BindReport, ContentBinder, EditingSession
from ...config import SlotCanvasSettings
from ...exceptions import OrphanedSlot, PresetError, SlotCanvasError
from ...export import DirectoryUploader, UploadResult, export_preset
from ...presets import LocalPresetStore, Preset
from ..core.types import Failure, Result, Success
from ..page.service import LoadedPage, create_renderer


@dataclass
class ExportOutcome:
    """Files written by a preset export, plus per-page binding outcomes."""

    preset: Preset
    uploads: list[UploadResult] = field(default_factory=list)
    reports: dict[int, BindReport] = field(default_factory=dict)
    orphans: list[OrphanedSlot] = field(default_factory=list)


def list_presets(store_dir: Path) -> list[Preset]:
    """All readable presets in a store directory."""
    if not store_dir.exists():
        return []
    return LocalPresetStore(store_dir).list()


def save_page(
    loaded: LoadedPage,
    store_dir: Path,
    preset_id: str | None = None,
    preset_name: str | None = None,
) -> Result[Preset]:
    """Validate a page and store it in a new or existing preset."""
    store = LocalPresetStore(store_dir)
    try:
        preset = store.save_page(loaded.page, preset_id=preset_id, preset_name=preset_name)
    except PresetError as e:
        return Failure(str(e), {"page": loaded.page.page_name})
    return Success(preset)


async def export_preset_files(
    store_dir: Path,
    preset_id: str,
    content: Mapping[str, str],
    settings: SlotCanvasSettings,
    output_dir: Path,
) -> Result[ExportOutcome]:
    """Fill every page of a preset with the same content map and export it.

    Args:
        store_dir: Preset store directory
        preset_id: Preset to export
        content: Field name or slot id -> value, applied to every page
        settings: Engine settings
        output_dir: Directory receiving ``<preset>-page-<n>.<ext>`` files

    Returns:
        Result containing the export outcome or failure
    """
    try:
        preset = LocalPresetStore(store_dir).load(preset_id)
    except PresetError as e:
        return Failure(str(e), {"store": str(store_dir)})

    if not preset.pages:
        return Failure(f"Preset '{preset.preset_name}' has no pages")

    outcome = ExportOutcome(preset=preset)
    renderer = create_renderer(settings)
    uploader = DirectoryUploader(output_dir)

    async with AssetLoader(timeout=settings.http_timeout, base_dir=store_dir) as loader:
        binder = ContentBinder(renderer, loader)
        sessions = []
        try:
            for number in preset.page_numbers:
                page, orphans = preset.load_page(number)
                outcome.orphans.extend(orphans)
                await prepare_page_assets(page, loader)
                session = EditingSession(page, binder, debounce_seconds=settings.debounce_seconds)
                if content:
                    outcome.reports[number] = await session.apply_now(content)
                sessions.append(session)

            outcome.uploads = await export_preset(preset.preset_name, sessions, uploader)
        except SlotCanvasError as e:
            return Failure(str(e), {"preset": preset.preset_name})

    return Success(outcome)
