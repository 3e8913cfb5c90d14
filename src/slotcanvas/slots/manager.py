"""Content slot manager.

Owns one page's ContentSlotSet: defines slots from cells, removes them,
looks them up, and round-trips them through plain records. It is the only
place that locks and unlocks cells, and the only place that decides a slot
is orphaned.

Usage:
    manager = ContentSlotManager(page)
    slot = manager.define_slot(cell, "Company Logo", SlotType.IMAGE)
    records = manager.serialize()
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Protocol

from pydantic import ValidationError

from ..constants import SlotType
from ..exceptions import (
    DuplicateFieldNameError,
    InvalidConstraintError,
    OrphanedSlot,
    SlotDefinitionError,
)
from ..layout.models import Cell, MediaContent, TextContent
from ..layout.page import Page
from ..layout.slots import (
    ContentSlot,
    ContentSlotSet,
    ImageConstraints,
    SlotConstraints,
    SlotStyling,
    TextConstraints,
    derive_field_name,
)

logger = logging.getLogger("slotcanvas.slots")


class SlotObserver(Protocol):
    """UI hooks for slot changes."""

    def on_slot_defined(self, slot: ContentSlot) -> None: ...

    def on_slot_removed(self, slot: ContentSlot) -> None: ...

    def on_lock_changed(self, cell: Cell, locked: bool) -> None: ...


def slot_id_for(cell: Cell) -> str:
    """Slot id derived from the designer-visible cell id."""
    return f"{cell.cell_id}-slot"


def _default_constraints(slot_type: SlotType, cell: Cell) -> SlotConstraints:
    if slot_type == SlotType.TEXT:
        if isinstance(cell.content, TextContent):
            return TextConstraints(
                word_wrap=cell.content.word_wrap,
                vertical_align=cell.content.align_v,
                horizontal_align=cell.content.align_h,
            )
        return TextConstraints()
    if isinstance(cell.content, MediaContent):
        return ImageConstraints(fit_mode=cell.content.fit_mode, focal_point=cell.content.focal_point)
    return ImageConstraints()


class ContentSlotManager:
    """Create, remove, look up and persist the content slots of a page."""

    def __init__(self, page: Page, observers: Iterable[SlotObserver] = ()):
        self.page = page
        self.observers: list[SlotObserver] = list(observers)

    @property
    def slots(self) -> ContentSlotSet:
        return self.page.content_slots

    # =========================================================================
    # Observers
    # =========================================================================

    def add_observer(self, observer: SlotObserver) -> None:
        self.observers.append(observer)

    def _notify(self, event: str, *args: Any) -> None:
        for observer in self.observers:
            getattr(observer, event)(*args)

    # =========================================================================
    # Definition
    # =========================================================================

    def define_slot(
        self,
        cell: Cell,
        field_label: str,
        slot_type: SlotType,
        constraints: Optional[SlotConstraints] = None,
        *,
        field_description: str = "",
        required: bool = False,
    ) -> ContentSlot:
        """Mark a cell as a content slot.

        Captures the cell's bounds and current content as the slot's fixed
        geometry and designer default, then locks the cell.

        Args:
            cell: A cell on this manager's page.
            field_label: Human label shown to end users.
            slot_type: text or image.
            constraints: Constraints matching slot_type; defaults if omitted.
            field_description: Optional help text for the form field.
            required: Whether end users must fill the field.

        Returns:
            The new slot, already appended to the page's slot set.

        Raises:
            SlotDefinitionError: Unknown cell, second slot on a cell, content
                type mismatch, or a label with no usable characters.
            InvalidConstraintError: Constraint values out of range.
            DuplicateFieldNameError: Field name already used on the page.
        """
        if self.page.find_cell(cell.content_id) is not cell:
            raise SlotDefinitionError(f"Cell '{cell.cell_id}' is not on page '{self.page.page_id}'")

        existing = self.slots.find_by_source_content_id(cell.content_id)
        if existing is not None:
            raise SlotDefinitionError(
                f"Cell '{cell.cell_id}' already backs slot '{existing.slot_id}'"
            )

        if slot_type == SlotType.TEXT and isinstance(cell.content, MediaContent):
            raise SlotDefinitionError(f"Cell '{cell.cell_id}' holds media, not text")
        if slot_type == SlotType.IMAGE and isinstance(cell.content, TextContent):
            raise SlotDefinitionError(f"Cell '{cell.cell_id}' holds text, not media")

        constraints = constraints if constraints is not None else _default_constraints(slot_type, cell)
        if constraints.kind != slot_type.value:
            raise InvalidConstraintError(
                f"{constraints.kind} constraints cannot be used on a {slot_type.value} slot"
            )
        constraints.check()

        field_name = derive_field_name(field_label)
        clash = self.slots.find_by_field_name(field_name)
        if clash is not None:
            raise DuplicateFieldNameError(field_name, clash.slot_id)

        slot_id = slot_id_for(cell)
        if slot_id in self.slots:
            raise SlotDefinitionError(f"Slot id '{slot_id}' is already in use")

        content = cell.content
        styling = None
        default_content = ""
        if isinstance(content, TextContent):
            default_content = content.text
            styling = SlotStyling(
                font_family=content.font_family,
                font_weight=content.font_weight,
                color=content.color,
            )
        elif isinstance(content, MediaContent):
            default_content = content.url

        slot = ContentSlot(
            slot_id=slot_id,
            source_content_id=cell.content_id,
            source_cell_id=cell.cell_id,
            type=slot_type,
            field_name=field_name,
            field_label=field_label,
            field_description=field_description,
            required=required,
            default_content=default_content,
            styling=styling,
            bounds=cell.bounds.model_copy(),
            constraints=constraints,
        )

        self.slots.add(slot)
        cell.locked = True
        logger.info(f"Defined {slot_type.value} slot '{field_name}' on cell '{cell.cell_id}'")

        self._notify("on_lock_changed", cell, True)
        self._notify("on_slot_defined", slot)
        return slot

    def remove_slot(self, slot_id: str) -> bool:
        """Remove a slot and unlock its cell. Cell content is left as is."""
        slot = self.slots.remove(slot_id)
        if slot is None:
            return False

        cell = self.page.find_cell(slot.source_content_id)
        if cell is not None:
            cell.locked = False
            self._notify("on_lock_changed", cell, False)

        logger.info(f"Removed slot '{slot.field_name}'")
        self._notify("on_slot_removed", slot)
        return True

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_slot(self, slot_id: str) -> Optional[ContentSlot]:
        return self.slots.get(slot_id)

    def find_by_source_content_id(self, content_id: str) -> Optional[ContentSlot]:
        return self.slots.find_by_source_content_id(content_id)

    def find_by_field_name(self, field_name: str) -> Optional[ContentSlot]:
        return self.slots.find_by_field_name(field_name)

    def resolve_key(self, key: str) -> Optional[ContentSlot]:
        """Slot for a user content key: slot id first, then field name."""
        return self.slots.get(key) or self.slots.find_by_field_name(key)

    def source_cell(self, slot: ContentSlot) -> Optional[Cell]:
        return self.page.find_cell(slot.source_content_id)

    def orphaned_slots(self) -> list[ContentSlot]:
        return [slot for slot in self.slots if slot.orphaned]

    def refresh_orphans(self) -> list[OrphanedSlot]:
        """Re-check every slot against the page's cells.

        Slots whose source cell is gone are marked orphaned (and logged);
        slots whose cell is back are un-orphaned and their cell re-locked.
        """
        orphans: list[OrphanedSlot] = []
        for slot in self.slots:
            cell = self.page.find_cell(slot.source_content_id)
            if cell is None:
                if not slot.orphaned:
                    logger.warning(
                        f"Slot '{slot.slot_id}' is orphaned: cell "
                        f"'{slot.source_content_id}' is not on the page"
                    )
                slot.orphaned = True
                orphans.append(OrphanedSlot(slot.slot_id, slot.source_content_id, slot.field_name))
            else:
                slot.orphaned = False
                cell.locked = True
        return orphans

    # =========================================================================
    # Persistence
    # =========================================================================

    def serialize(self) -> list[dict[str, Any]]:
        """Slot records in definition order, orphans included."""
        return [slot.model_dump(mode="json", by_alias=True) for slot in self.slots]

    @classmethod
    def deserialize(
        cls,
        page: Page,
        data: Iterable[Any],
        observers: Iterable[SlotObserver] = (),
    ) -> tuple["ContentSlotManager", list[OrphanedSlot]]:
        """Restore slot records onto a page.

        Malformed records and records that would break id or field name
        uniqueness are skipped with a warning. Records whose source cell is
        missing are kept and marked orphaned.

        Returns:
            The manager and the orphaned slots found.
        """
        slot_set = ContentSlotSet()
        for index, record in enumerate(data):
            try:
                slot = ContentSlot.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping malformed slot record #{index}: {e.error_count()} errors")
                continue

            if slot.slot_id in slot_set:
                logger.warning(f"Skipping slot record #{index}: duplicate slot id '{slot.slot_id}'")
                continue
            if slot_set.find_by_field_name(slot.field_name) is not None:
                logger.warning(
                    f"Skipping slot record #{index}: duplicate field name '{slot.field_name}'"
                )
                continue
            slot_set.add(slot)

        page.content_slots = slot_set
        manager = cls(page, observers)
        orphans = manager.refresh_orphans()
        return manager, orphans

    @classmethod
    def load_page(cls, data: dict[str, Any]) -> tuple[Page, list[OrphanedSlot]]:
        """Rebuild a page record and restore its slots tolerantly."""
        data = dict(data)
        slot_records = data.pop("contentSlots", None)
        if slot_records is None:
            slot_records = data.pop("content_slots", None) or []
        page = Page.model_validate(data)
        _, orphans = cls.deserialize(page, slot_records)
        return page, orphans
