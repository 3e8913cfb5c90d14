"""Stateless service for single-page operations."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from ...assets import AssetLoader, prepare_page_assets
from ...binding import BindReport, ContentBinder, EditingSession
from ...config import SlotCanvasSettings
from ...constants import ImageFormat
from ...design import FontRegistry, PageRenderer
from ...exceptions import MediaLoadFailed, OrphanedSlot, SlotCanvasError
from ...export import export_session_still, export_still
from ...layout import Page
from ...slots import ContentSlotManager
from ...utils import TextFitter
from ..core.types import Failure, Result, Success


@dataclass
class LoadedPage:
    """A page read from disk plus what went wrong restoring its slots."""

    page: Page
    path: Path
    orphans: list[OrphanedSlot] = field(default_factory=list)


@dataclass
class RenderOutcome:
    """Encoded output of a render or fill."""

    data: bytes
    media_failures: list[MediaLoadFailed] = field(default_factory=list)
    report: Optional[BindReport] = None


def create_renderer(settings: SlotCanvasSettings) -> PageRenderer:
    """Renderer whose fitter and painter share one font registry."""
    fonts = FontRegistry(settings.fonts_dir, use_system_fonts=settings.use_system_fonts)
    fitter = TextFitter(fonts, tolerance=settings.autofit_tolerance)
    return PageRenderer(fonts, fitter)


def load_page_file(path: Path) -> Result[LoadedPage]:
    """Read a page record from a JSON file.

    Args:
        path: Page JSON as written by ``Page.serialize``

    Returns:
        Result containing the loaded page or failure
    """
    if not path.exists():
        return Failure(f"Page file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        page, orphans = ContentSlotManager.load_page(data)
    except json.JSONDecodeError as e:
        return Failure(f"Page file is not valid JSON: {path}", {"error": str(e)})
    except ValidationError as e:
        return Failure(f"Page file is not a valid page: {path}", {"errors": e.error_count()})

    return Success(LoadedPage(page=page, path=path, orphans=orphans))


def output_format(output: Path) -> ImageFormat:
    """Image format implied by an output file extension."""
    if output.suffix.lower() in (".jpg", ".jpeg"):
        return ImageFormat.JPG
    return ImageFormat.PNG


async def render_page(
    loaded: LoadedPage,
    settings: SlotCanvasSettings,
    image_format: ImageFormat,
) -> Result[RenderOutcome]:
    """Render the designer page with its default content."""
    renderer = create_renderer(settings)
    async with AssetLoader(timeout=settings.http_timeout, base_dir=loaded.path.parent) as loader:
        failures = await prepare_page_assets(loaded.page, loader)
    try:
        data = export_still(loaded.page, renderer, image_format)
    except SlotCanvasError as e:
        return Failure(str(e))
    return Success(RenderOutcome(data=data, media_failures=failures))


async def fill_page(
    loaded: LoadedPage,
    content: Mapping[str, str],
    settings: SlotCanvasSettings,
    image_format: ImageFormat,
) -> Result[RenderOutcome]:
    """Bind end-user values onto the page, then render it."""
    renderer = create_renderer(settings)
    async with AssetLoader(timeout=settings.http_timeout, base_dir=loaded.path.parent) as loader:
        failures = await prepare_page_assets(loaded.page, loader)
        binder = ContentBinder(renderer, loader)
        session = EditingSession(loaded.page, binder, debounce_seconds=settings.debounce_seconds)
        try:
            report = await session.apply_now(content)
            data = await export_session_still(session, image_format)
        except SlotCanvasError as e:
            return Failure(str(e))
    return Success(RenderOutcome(data=data, media_failures=failures, report=report))
