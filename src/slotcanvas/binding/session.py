"""Editing session: one end user filling one page.

Combines the page, its slot manager, the binder and a debouncer. Each
``update()`` replaces the pending content snapshot; only the snapshot that
is current when the debounce timer expires is applied. Application and
export share one lock, so an export never samples a half-applied page.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Optional

from PIL import Image

from ..constants import DEBOUNCE_SECONDS
from ..layout.page import Page
from ..slots.manager import ContentSlotManager
from .binder import BindReport, ContentBinder
from .debounce import Debouncer

logger = logging.getLogger("slotcanvas.binding")


class EditingSession:
    """Debounced content application for one page.

    Usage:
        session = EditingSession(page, binder)
        session.update({"headline": "Spring Sale"})
        session.update({"headline": "Spring Sale!"})  # supersedes the first
        report = await session.flush()

        async with session.read_only() as page:
            data = export_still(page, renderer)
    """

    def __init__(
        self,
        page: Page,
        binder: ContentBinder,
        manager: ContentSlotManager | None = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ):
        self.page = page
        self.binder = binder
        self.manager = manager or ContentSlotManager(page)
        self.debouncer = Debouncer(debounce_seconds, self._apply_latest)
        self._lock = asyncio.Lock()
        self._latest: Optional[dict[str, Any]] = None
        self._applied: list[str] = []
        self.last_report: Optional[BindReport] = None

    @property
    def surface(self) -> Optional[Image.Image]:
        """Most recently rendered image, if any."""
        return self.last_report.surface if self.last_report else None

    def update(self, content_map: Mapping[str, Any]) -> None:
        """Store the latest content snapshot and re-arm the debounce timer."""
        self._latest = dict(content_map)
        self.debouncer.trigger()

    async def _apply(self, snapshot: Mapping[str, Any]) -> BindReport:
        """Apply one snapshot. Caller holds the lock."""
        slots = self.manager.slots
        restored = None
        if self._applied:
            # Values from the previous snapshot give way to the designer
            # defaults unless this snapshot supplies them again
            restored = await self.binder.restore_defaults(self.page, slots, self._applied)

        report = await self.binder.apply_content(self.page, slots, snapshot)
        if restored is not None:
            # Defaults that failed and were not overridden by this snapshot
            report.rejections[:0] = [
                r for r in restored.rejections if r.slot_id not in report.applied
            ]
        self._applied = list(report.applied)
        self.last_report = report
        logger.debug(
            f"Applied {len(report.applied)} values to page {self.page.page_number} "
            f"({len(report.rejections)} rejected, {report.renders} renders)"
        )
        return report

    async def _apply_latest(self) -> None:
        async with self._lock:
            snapshot, self._latest = self._latest, None
            if snapshot is not None:
                await self._apply(snapshot)

    async def apply_now(self, content_map: Mapping[str, Any]) -> BindReport:
        """Apply a snapshot immediately, bypassing the debounce delay."""
        self.debouncer.cancel()
        async with self._lock:
            self._latest = None
            return await self._apply(dict(content_map))

    async def flush(self) -> Optional[BindReport]:
        """Apply any pending snapshot now and wait for it."""
        await self.debouncer.flush()
        return self.last_report

    @asynccontextmanager
    async def read_only(self) -> AsyncIterator[Page]:
        """Hold the session lock so no content is applied while reading."""
        async with self._lock:
            yield self.page
