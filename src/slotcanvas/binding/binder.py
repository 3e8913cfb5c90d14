"""End-user content binder.

Applies a user content map (slot id or field name -> value) onto a page:
each accepted value replaces only the content payload of the slot's source
cell. Geometry is never touched. Per-slot problems become rejection or
orphan records and never stop sibling slots from applying.

Render policy:
    1. Apply text values and images already in the loader cache
    2. Render once
    3. Every image that finishes loading afterwards triggers one more render
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol

from PIL import Image

from ..assets.loader import AssetLoader, DecodedImage
from ..constants import RejectionReason, SlotType
from ..constraints.enforcer import ConstraintEnforcer, TextFit
from ..design.renderer import PageRenderer
from ..exceptions import ContentRejection, MediaLoadFailed, OrphanedSlot
from ..layout.models import Cell, ImageFit, MediaContent, TextContent
from ..layout.page import Page
from ..layout.slots import ContentSlot, ContentSlotSet, ImageConstraints, TextConstraints

logger = logging.getLogger("slotcanvas.binding")


class BindListener(Protocol):
    """UI hooks for per-slot binding outcomes."""

    def on_rejection(self, rejection: ContentRejection) -> None: ...

    def on_orphan(self, orphan: OrphanedSlot) -> None: ...


@dataclass
class BindReport:
    """What one apply pass did."""

    applied: list[str] = field(default_factory=list)
    rejections: list[ContentRejection] = field(default_factory=list)
    orphans: list[OrphanedSlot] = field(default_factory=list)
    renders: int = 0
    surface: Optional[Image.Image] = None

    @property
    def ok(self) -> bool:
        return not self.rejections and not self.orphans


def resolve_content_map(slot_set: ContentSlotSet, content_map: Mapping[str, Any]) -> dict[str, str]:
    """Normalize a user content map to ``{slot_id: value}``.

    Keys may be slot ids or field names; a slot id key wins over a field
    name key for the same slot. Blank values count as no entry.
    """
    by_field: dict[str, str] = {}
    by_id: dict[str, str] = {}
    for key, value in content_map.items():
        if value is None or not str(value).strip():
            continue
        slot = slot_set.get(key)
        if slot is not None:
            by_id[slot.slot_id] = str(value)
            continue
        slot = slot_set.find_by_field_name(key)
        if slot is not None:
            by_field[slot.slot_id] = str(value)
        else:
            logger.debug(f"Ignoring content for unknown key '{key}'")
    return {**by_field, **by_id}


class ContentBinder:
    """Binds user values onto a page and re-renders it."""

    def __init__(
        self,
        renderer: PageRenderer,
        loader: AssetLoader,
        enforcer: ConstraintEnforcer | None = None,
        listeners: Iterable[BindListener] = (),
    ):
        """Initialize the binder.

        Args:
            renderer: Shared renderer (the same one designer and export use).
            loader: Asset loader for image values.
            enforcer: Constraint enforcer; built on the renderer's text
                fitter when omitted so measurement matches painting.
            listeners: Receivers of rejection / orphan notifications.
        """
        self.renderer = renderer
        self.loader = loader
        self.enforcer = enforcer or ConstraintEnforcer(renderer.fitter)
        self.listeners: list[BindListener] = list(listeners)

    # =========================================================================
    # Reporting
    # =========================================================================

    def _reject(self, report: BindReport, rejection: ContentRejection) -> None:
        logger.warning(
            f"Rejected content for '{rejection.slot_id}': "
            f"{rejection.reason.value} {rejection.message}"
        )
        report.rejections.append(rejection)
        for listener in self.listeners:
            listener.on_rejection(rejection)

    def _orphan(self, report: BindReport, slot: ContentSlot) -> None:
        orphan = OrphanedSlot(slot.slot_id, slot.source_content_id, slot.field_name)
        logger.warning(f"Skipping orphaned slot '{slot.slot_id}'")
        report.orphans.append(orphan)
        for listener in self.listeners:
            listener.on_orphan(orphan)

    def _render(self, page: Page, report: BindReport) -> None:
        report.surface = self.renderer.render(page)
        report.renders += 1

    # =========================================================================
    # Payload mutation
    # =========================================================================

    @staticmethod
    def _set_text(cell: Cell, slot: ContentSlot, placed: TextFit) -> None:
        constraints = slot.constraints
        content = cell.content if isinstance(cell.content, TextContent) else TextContent()
        update: dict[str, Any] = {
            "text": placed.text,
            "font_size": placed.font_size,
            "overflow": placed.overflow,
        }
        if isinstance(constraints, TextConstraints):
            update.update(
                align_h=constraints.horizontal_align,
                align_v=constraints.vertical_align,
                word_wrap=constraints.word_wrap,
            )
        if slot.styling is not None:
            update.update(
                font_family=slot.styling.font_family,
                font_weight=slot.styling.font_weight,
                color=slot.styling.color,
            )
        cell.content = content.model_copy(update=update)

    @staticmethod
    def _set_image(
        cell: Cell,
        slot: ContentSlot,
        url: str,
        decoded: Optional[DecodedImage],
        fit: Optional[ImageFit],
    ) -> None:
        content = cell.content if isinstance(cell.content, MediaContent) else MediaContent()
        update: dict[str, Any] = {"url": url, "image": decoded, "fit": fit}
        if isinstance(slot.constraints, ImageConstraints):
            update.update(
                fit_mode=slot.constraints.effective_fit_mode,
                focal_point=slot.constraints.focal_point,
            )
        cell.content = content.model_copy(update=update)

    def _clear_image(self, cell: Cell, slot: ContentSlot, url: str) -> None:
        """Show the placeholder for a default that cannot be displayed."""
        logger.warning(f"Default media for '{slot.slot_id}' is unavailable, showing placeholder")
        self._set_image(cell, slot, url, None, None)

    def _bind_text(
        self,
        report: BindReport,
        cell: Cell,
        slot: ContentSlot,
        value: str,
        enforce_limits: bool,
    ) -> None:
        if enforce_limits:
            result = self.enforcer.enforce_text(slot, value, cell)
        else:
            result = self.enforcer.place_text(slot, value, cell)
        if isinstance(result, ContentRejection):
            self._reject(report, result)
            return
        self._set_text(cell, slot, result)
        report.applied.append(slot.slot_id)

    def _bind_image(
        self,
        report: BindReport,
        cell: Cell,
        slot: ContentSlot,
        decoded: DecodedImage,
        restoring: bool = False,
    ) -> bool:
        result = self.enforcer.enforce_image(slot, decoded)
        if isinstance(result, ContentRejection):
            self._reject(report, result)
            if restoring:
                self._clear_image(cell, slot, decoded.url)
            return False
        self._set_image(cell, slot, decoded.url, decoded, result)
        report.applied.append(slot.slot_id)
        return True

    # =========================================================================
    # Public API
    # =========================================================================

    async def _bind(
        self,
        page: Page,
        slot_set: ContentSlotSet,
        values: Mapping[str, str],
        *,
        enforce_limits: bool,
        render: bool,
    ) -> BindReport:
        report = BindReport()
        pending: list[tuple[Cell, ContentSlot, str]] = []

        for slot in slot_set:
            if slot.slot_id not in values:
                continue
            value = values[slot.slot_id]

            cell = page.find_cell(slot.source_content_id)
            if slot.orphaned or cell is None:
                self._orphan(report, slot)
                continue

            if slot.type == SlotType.TEXT:
                self._bind_text(report, cell, slot, value, enforce_limits)
            elif not value:
                self._set_image(cell, slot, "", None, None)
                report.applied.append(slot.slot_id)
            else:
                decoded = self.loader.cached(value)
                if decoded is not None:
                    self._bind_image(report, cell, slot, decoded, restoring=not enforce_limits)
                else:
                    pending.append((cell, slot, value))

        if render:
            self._render(page, report)

        if pending:
            await self._resolve_pending(page, report, pending, render, restoring=not enforce_limits)

        return report

    async def _resolve_pending(
        self,
        page: Page,
        report: BindReport,
        pending: list[tuple[Cell, ContentSlot, str]],
        render: bool,
        restoring: bool = False,
    ) -> None:
        async def load(cell: Cell, slot: ContentSlot, url: str):
            try:
                return cell, slot, await self.loader.load(url)
            except MediaLoadFailed as e:
                return cell, slot, e

        for next_done in asyncio.as_completed([load(*item) for item in pending]):
            cell, slot, outcome = await next_done
            if isinstance(outcome, MediaLoadFailed):
                self._reject(
                    report,
                    ContentRejection(slot.slot_id, RejectionReason.MEDIA_LOAD_FAILED, outcome.reason),
                )
                if restoring:
                    self._clear_image(cell, slot, outcome.url)
                continue
            if self._bind_image(report, cell, slot, outcome, restoring) and render:
                self._render(page, report)

    async def apply_content(
        self,
        page: Page,
        slot_set: ContentSlotSet,
        content_map: Mapping[str, Any],
    ) -> BindReport:
        """Apply a user content map to a page and render it.

        Args:
            page: Page whose cells receive the content.
            slot_set: The page's content slots.
            content_map: Slot id or field name -> text or media URL.

        Returns:
            BindReport with applied slot ids, rejections, orphans and the
            latest rendered surface.
        """
        values = resolve_content_map(slot_set, content_map)
        return await self._bind(page, slot_set, values, enforce_limits=True, render=True)

    async def restore_defaults(
        self,
        page: Page,
        slot_set: ContentSlotSet,
        slot_ids: Iterable[str],
    ) -> BindReport:
        """Put the designer's default content back into the given slots.

        Defaults were authored on the canvas, so character limits are not
        re-checked. A default image that cannot be loaded or is rejected
        leaves the cell showing its placeholder, never the replaced value.
        Does not render.
        """
        wanted = set(slot_ids)
        values = {
            slot.slot_id: slot.default_content
            for slot in slot_set
            if slot.slot_id in wanted
        }
        return await self._bind(page, slot_set, values, enforce_limits=False, render=False)
