"""Page model: cells, background and the page's content slot set."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import Field, model_validator

from .models import Background, CanvasSize, Cell, ExportConfig, LayoutModel
from .slots import ContentSlotSet


class Page(LayoutModel):
    """One designed layout: ordered cells plus metadata.

    Usage:
        page = Page(
            canvas=CanvasSize(width=1080, height=1080),
            background=Background(color="#101014"),
            cells=[headline_cell, logo_cell],
        )
        record = page.serialize()
        restored = Page.deserialize(record)
    """

    page_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    page_number: int = Field(default=1, ge=1)
    page_name: str = "Untitled Page"
    canvas: CanvasSize = Field(default_factory=CanvasSize)
    background: Optional[Background] = Field(default_factory=Background)
    cells: list[Cell] = Field(default_factory=list)
    content_slots: ContentSlotSet = Field(default_factory=ContentSlotSet)
    export_config: ExportConfig = Field(default_factory=ExportConfig)

    @model_validator(mode="after")
    def _content_ids_unique(self) -> "Page":
        seen: set[str] = set()
        for cell in self.cells:
            if cell.content_id in seen:
                raise ValueError(f"Duplicate cell contentId '{cell.content_id}'")
            seen.add(cell.content_id)
        return self

    def find_cell(self, content_id: str) -> Optional[Cell]:
        """Resolve a cell by its stable content id."""
        return next((c for c in self.cells if c.content_id == content_id), None)

    def find_cell_by_id(self, cell_id: str) -> Optional[Cell]:
        return next((c for c in self.cells if c.cell_id == cell_id), None)

    def ordered_cells(self) -> list[Cell]:
        """Cells in paint order: ascending layer, list order within a layer."""
        return sorted(self.cells, key=lambda cell: cell.layer)

    def remove_cell(self, content_id: str) -> Optional[Cell]:
        """Delete a cell. Slots pointing at it become orphaned, not removed."""
        cell = self.find_cell(content_id)
        if cell is not None:
            self.cells.remove(cell)
        return cell

    def serialize(self) -> dict[str, Any]:
        """Plain record for the persistence collaborator."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def deserialize(cls, data: dict[str, Any]) -> "Page":
        """Rebuild a page from a record.

        Slots are restored through the slot manager, so a slot whose cell is
        gone is marked orphaned instead of failing the load.
        """
        from ..slots.manager import ContentSlotManager

        page, _ = ContentSlotManager.load_page(data)
        return page
