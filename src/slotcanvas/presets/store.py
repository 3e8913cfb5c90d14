"""Preset persistence.

A preset is a named set of up to five page records. The store persists
records verbatim; turning a record back into a page (and marking slots
whose cell is gone as orphaned) happens in
``ContentSlotManager.load_page``.
"""

from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, ValidationError

from ..constants import PRESET_MAX_PAGE_SIZE, PRESET_MAX_PAGES
from ..exceptions import OrphanedSlot, PresetError
from ..layout.models import LayoutModel
from ..layout.page import Page
from ..slots.manager import ContentSlotManager

logger = logging.getLogger("slotcanvas.presets")


class Preset(LayoutModel):
    """Named collection of page records keyed by page number (1..5)."""

    preset_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    preset_name: str
    description: str = ""
    pages: dict[int, dict[str, Any]] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def page_numbers(self) -> list[int]:
        return sorted(self.pages)

    def set_page(self, page: Page) -> None:
        """Validate a page and store its record under its page number."""
        record = validate_page_for_save(page)
        self.pages[page.page_number] = record
        self.updated_at = datetime.now()

    def load_page(self, page_number: int) -> tuple[Page, list[OrphanedSlot]]:
        """Rebuild one page, reporting slots whose cell no longer exists."""
        record = self.pages.get(page_number)
        if record is None:
            raise PresetError(
                f"Page {page_number} does not exist in preset '{self.preset_name}'"
            )
        return ContentSlotManager.load_page(record)

    def load_pages(self) -> list[Page]:
        return [self.load_page(number)[0] for number in self.page_numbers]


def validate_page_for_save(page: Page) -> dict[str, Any]:
    """Check a page against the store's limits.

    Returns:
        The serialized page record.

    Raises:
        PresetError: Missing name or background, page number out of range,
            no content slots, or a record over the size limit.
    """
    if not page.page_name.strip():
        raise PresetError("Page name is required")
    if not 1 <= page.page_number <= PRESET_MAX_PAGES:
        raise PresetError(f"Page number must be between 1 and {PRESET_MAX_PAGES}")
    if page.background is None or page.background.is_empty:
        raise PresetError("Background data is required")
    if len(page.content_slots) == 0:
        raise PresetError("At least one content slot is required before saving")

    record = page.serialize()
    size = len(json.dumps(record, separators=(",", ":")))
    if size > PRESET_MAX_PAGE_SIZE:
        raise PresetError(
            f"Page data exceeds maximum size ({PRESET_MAX_PAGE_SIZE / 1000:.0f}KB). "
            f"Current: {size / 1000:.1f}KB"
        )
    return record


class PresetStore(ABC):
    """Abstract persistence for presets."""

    @abstractmethod
    def save(self, preset: Preset) -> str:
        """Persist a preset, returning its id."""
        ...

    @abstractmethod
    def load(self, preset_id: str) -> Preset:
        """Load a preset.

        Raises:
            PresetError: If the preset does not exist or is unreadable.
        """
        ...

    @abstractmethod
    def list(self) -> list[Preset]:
        ...

    @abstractmethod
    def delete(self, preset_id: str) -> bool:
        ...

    def save_page(
        self,
        page: Page,
        preset_id: Optional[str] = None,
        preset_name: Optional[str] = None,
    ) -> Preset:
        """Add a page to an existing preset, or start a new one.

        Args:
            page: Page to store under its page number.
            preset_id: Existing preset; a new preset is created when omitted.
            preset_name: Name for a new preset (defaults to the page name).
        """
        if preset_id is not None:
            preset = self.load(preset_id)
        else:
            preset = Preset(preset_name=preset_name or page.page_name)
        preset.set_page(page)
        self.save(preset)
        logger.info(f"Saved page {page.page_number} to preset '{preset.preset_name}'")
        return preset


class LocalPresetStore(PresetStore):
    """Stores each preset as ``<preset_id>.json`` in a directory."""

    def __init__(self, presets_dir: Path):
        self.presets_dir = Path(presets_dir)
        self.presets_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, preset_id: str) -> Path:
        if not preset_id or "/" in preset_id or "\\" in preset_id or preset_id.startswith("."):
            raise PresetError(f"Invalid preset id: {preset_id!r}")
        return self.presets_dir / f"{preset_id}.json"

    def save(self, preset: Preset) -> str:
        path = self._path(preset.preset_id)
        if len(preset.pages) > PRESET_MAX_PAGES:
            raise PresetError(f"A preset holds at most {PRESET_MAX_PAGES} pages")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(preset.model_dump(mode="json", by_alias=True), f, indent=2)
        return preset.preset_id

    def load(self, preset_id: str) -> Preset:
        path = self._path(preset_id)
        if not path.exists():
            raise PresetError(f"Preset not found: {preset_id}")
        try:
            with open(path, encoding="utf-8") as f:
                return Preset.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            raise PresetError(f"Preset '{preset_id}' is unreadable: {e}") from e

    def list(self) -> list[Preset]:
        presets = []
        for path in sorted(self.presets_dir.glob("*.json")):
            try:
                presets.append(self.load(path.stem))
            except PresetError as e:
                logger.warning(f"Skipping {path.name}: {e}")
        return presets

    def delete(self, preset_id: str) -> bool:
        path = self._path(preset_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted preset {preset_id}")
        return True
