"""Exceptions and per-slot outcome records.

Exceptions are raised for conditions the caller must handle before anything
changes (bad slot definitions, structurally broken pages, failed media).
Conditions that only affect one slot during binding are reported as
``ContentRejection`` / ``OrphanedSlot`` records instead, so sibling slots
keep applying.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import RejectionReason


# =============================================================================
# Exceptions
# =============================================================================


class SlotCanvasError(Exception):
    """Base exception for SlotCanvas errors."""

    pass


class SlotDefinitionError(SlotCanvasError):
    """A slot definition was rejected; the page is left unchanged."""

    pass


class DuplicateFieldNameError(SlotDefinitionError):
    """The derived field name is already used by another slot on the page."""

    def __init__(self, field_name: str, existing_slot_id: str):
        self.field_name = field_name
        self.existing_slot_id = existing_slot_id
        super().__init__(
            f"Field name '{field_name}' is already used by slot '{existing_slot_id}'"
        )


class InvalidConstraintError(SlotDefinitionError):
    """Constraint values are out of range (for example min > max font size)."""

    pass


class CellLockedError(SlotCanvasError):
    """Geometry change attempted on a cell referenced by a content slot."""

    pass


class PageStructureError(SlotCanvasError):
    """The page itself is corrupt (no background, no cells). Fatal to render."""

    pass


class MediaLoadFailed(SlotCanvasError):
    """A media asset could not be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load media '{_short(url)}': {reason}")


class PresetError(SlotCanvasError):
    """A page or preset failed store validation."""

    pass


# =============================================================================
# Per-slot outcomes
# =============================================================================


@dataclass(frozen=True)
class ContentRejection:
    """A user value that was not applied; the designer default stays visible."""

    slot_id: str
    reason: RejectionReason
    message: str = ""


@dataclass(frozen=True)
class OrphanedSlot:
    """A slot whose source cell is no longer on the page."""

    slot_id: str
    source_content_id: str
    field_name: str = ""


def _short(url: str, limit: int = 80) -> str:
    """Keep data URLs out of log lines."""
    if len(url) <= limit:
        return url
    return url[:limit] + "..."
