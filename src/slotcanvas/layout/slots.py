"""Content slot records and field name derivation."""

from __future__ import annotations

import re
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import Field, RootModel, model_validator

from ..constants import (
    MEDIA_ALLOWED_FORMATS,
    MEDIA_MAX_FILE_SIZE,
    TEXT_MAX_CHARACTERS,
    TEXT_MAX_FONT_SIZE,
    TEXT_MIN_FONT_SIZE,
    FitMode,
    FocalPoint,
    FontSizeMode,
    HorizontalAlign,
    SlotType,
    VerticalAlign,
)
from ..exceptions import InvalidConstraintError, SlotDefinitionError
from .models import Bounds, LayoutModel

# Upper-case runs (acronyms), capitalised/lower words, or digit runs.
_TOKEN_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def derive_field_name(label: str) -> str:
    """Derive the machine key for a field label.

    Lower camel case with everything but ASCII letters and digits stripped.
    camelCase boundaries split tokens too, so deriving from a derived name
    returns it unchanged.

    Examples:
        >>> derive_field_name("Company Logo")
        'companyLogo'
        >>> derive_field_name("Call-to-Action Button!")
        'callToActionButton'
        >>> derive_field_name("Hero Image 1")
        'heroImage1'

    Raises:
        SlotDefinitionError: If the label has no letters or digits.
    """
    tokens = _TOKEN_RE.findall(label or "")
    if not tokens:
        raise SlotDefinitionError(f"Field label {label!r} yields an empty field name")
    head, *rest = tokens
    return head.lower() + "".join(token[0].upper() + token[1:].lower() for token in rest)


# =============================================================================
# Constraints
# =============================================================================


class TextConstraints(LayoutModel):
    """Limits for a text slot."""

    kind: Literal["text"] = "text"
    max_characters: int = Field(default=TEXT_MAX_CHARACTERS, ge=1)
    min_font_size: float = Field(default=TEXT_MIN_FONT_SIZE, gt=0)
    max_font_size: float = Field(default=TEXT_MAX_FONT_SIZE, gt=0)
    font_size_mode: FontSizeMode = FontSizeMode.AUTO_FIT
    word_wrap: bool = True
    vertical_align: VerticalAlign = VerticalAlign.MIDDLE
    horizontal_align: HorizontalAlign = HorizontalAlign.CENTER

    def check(self) -> None:
        """Raise InvalidConstraintError if the font range is inverted."""
        if self.max_font_size < self.min_font_size:
            raise InvalidConstraintError(
                f"maxFontSize ({self.max_font_size}) is smaller than "
                f"minFontSize ({self.min_font_size})"
            )


class ImageConstraints(LayoutModel):
    """Limits for an image slot."""

    kind: Literal["image"] = "image"
    fit_mode: FitMode = FitMode.COVER
    aspect_lock: bool = False
    focal_point: FocalPoint = FocalPoint.CENTER
    max_file_size: int = Field(default=MEDIA_MAX_FILE_SIZE, gt=0)
    allowed_formats: list[str] = Field(default_factory=lambda: list(MEDIA_ALLOWED_FORMATS))

    @property
    def effective_fit_mode(self) -> FitMode:
        """Aspect lock always wins over the requested mode."""
        return FitMode.CONTAIN if self.aspect_lock else self.fit_mode

    def check(self) -> None:
        if not self.allowed_formats:
            raise InvalidConstraintError("allowedFormats must list at least one format")


SlotConstraints = Annotated[
    Union[TextConstraints, ImageConstraints], Field(discriminator="kind")
]


class SlotStyling(LayoutModel):
    """Typography locked in by the designer for a text slot."""

    font_family: str
    font_weight: str
    color: str


# =============================================================================
# Slots
# =============================================================================


class ContentSlot(LayoutModel):
    """A designer-authored binding from a cell to an end-user form field."""

    slot_id: str
    source_content_id: str
    source_cell_id: str = ""
    type: SlotType
    field_name: str
    field_label: str
    field_description: str = ""
    required: bool = False
    default_content: str = ""
    styling: Optional[SlotStyling] = None
    bounds: Bounds
    constraints: SlotConstraints
    orphaned: bool = False

    @model_validator(mode="after")
    def _constraints_match_type(self) -> "ContentSlot":
        if self.constraints.kind != self.type.value:
            raise ValueError(
                f"Slot '{self.slot_id}' is {self.type.value} but has "
                f"{self.constraints.kind} constraints"
            )
        return self


class ContentSlotSet(RootModel[list[ContentSlot]]):
    """All content slots of one page, in definition order."""

    root: list[ContentSlot] = Field(default_factory=list)

    def __iter__(self) -> Iterator[ContentSlot]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, slot_id: object) -> bool:
        return any(slot.slot_id == slot_id for slot in self.root)

    def get(self, slot_id: str) -> Optional[ContentSlot]:
        return next((s for s in self.root if s.slot_id == slot_id), None)

    def find_by_source_content_id(self, content_id: str) -> Optional[ContentSlot]:
        return next((s for s in self.root if s.source_content_id == content_id), None)

    def find_by_field_name(self, field_name: str) -> Optional[ContentSlot]:
        return next((s for s in self.root if s.field_name == field_name), None)

    def add(self, slot: ContentSlot) -> None:
        self.root.append(slot)

    def remove(self, slot_id: str) -> Optional[ContentSlot]:
        slot = self.get(slot_id)
        if slot is not None:
            self.root.remove(slot)
        return slot
