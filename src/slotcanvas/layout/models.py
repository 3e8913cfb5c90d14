"""Geometry, cell and content models for pages.

Cells are mutable in their content payload only. Geometry goes through
``Cell.set_bounds`` which refuses to move a cell that a content slot
references.

Runtime-only attributes (decoded images, computed fits) are excluded from
serialization, so a page record only ever carries references.
"""

from __future__ import annotations

import uuid
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..constants import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    EXPORT_VIDEO_DURATION,
    EXPORT_VIDEO_FPS,
    TEXT_COLOR,
    TEXT_FONT_FAMILY,
    TEXT_FONT_SIZE,
    TEXT_FONT_WEIGHT,
    TEXT_LINE_HEIGHT,
    CellRole,
    ExportFormat,
    FitMode,
    FocalPoint,
    HorizontalAlign,
    ImageFormat,
    VerticalAlign,
)
from ..exceptions import CellLockedError


class LayoutModel(BaseModel):
    """Base for page records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def new_content_id() -> str:
    """Stable content identifier, assigned once per cell."""
    return str(uuid.uuid4())


# =============================================================================
# Geometry
# =============================================================================


class Rect(LayoutModel):
    """Plain rectangle in canvas pixels."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 0.0

    def as_box(self) -> tuple[int, int, int, int]:
        """Integer (left, top, right, bottom) box, rounded consistently."""
        return (
            round(self.x),
            round(self.y),
            round(self.x + self.width),
            round(self.y + self.height),
        )


class Bounds(Rect):
    """Cell geometry: a rectangle plus a clockwise rotation about its centre."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: float = 0.0

    def to_rect(self) -> Rect:
        return Rect(x=self.x, y=self.y, width=self.width, height=self.height)


class ImageFit(LayoutModel):
    """Where a source image region is drawn.

    ``source`` is in image pixels, ``dest`` in canvas pixels. Both are
    computed by the enforcer; the renderer only copies one onto the other.
    """

    fit_mode: FitMode
    source: Rect
    dest: Rect


# =============================================================================
# Content payloads
# =============================================================================


class TextContent(LayoutModel):
    """A text run with its styling."""

    kind: Literal["text"] = "text"
    text: str = ""
    font_family: str = TEXT_FONT_FAMILY
    font_weight: str = TEXT_FONT_WEIGHT
    font_size: float = Field(default=TEXT_FONT_SIZE, gt=0)
    color: str = TEXT_COLOR
    align_h: HorizontalAlign = HorizontalAlign.CENTER
    align_v: VerticalAlign = VerticalAlign.MIDDLE
    line_height: float = Field(default=TEXT_LINE_HEIGHT, gt=0)
    word_wrap: bool = True
    overflow: bool = False


class MediaContent(LayoutModel):
    """A media reference and how it fills its cell."""

    kind: Literal["media"] = "media"
    url: str = ""
    fit_mode: FitMode = FitMode.COVER
    focal_point: FocalPoint = FocalPoint.CENTER

    # Runtime only
    image: Any = Field(default=None, exclude=True)
    fit: Optional[ImageFit] = Field(default=None, exclude=True)

    @property
    def is_loaded(self) -> bool:
        return self.image is not None and self.fit is not None


CellContent = Annotated[Union[TextContent, MediaContent], Field(discriminator="kind")]


# =============================================================================
# Cells and page metadata
# =============================================================================


class Cell(LayoutModel):
    """A positioned, bounded renderable unit."""

    cell_id: str
    content_id: str = Field(default_factory=new_content_id)
    bounds: Bounds
    layer: int = 0
    role: CellRole = CellRole.CONTENT
    visible: bool = True
    locked: bool = False
    fill_color: Optional[str] = None
    content: Optional[CellContent] = None

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, TextContent)

    @property
    def is_media(self) -> bool:
        return isinstance(self.content, MediaContent)

    def set_bounds(self, bounds: Bounds) -> None:
        """Move or resize the cell.

        Raises:
            CellLockedError: If a content slot references this cell.
        """
        if self.locked:
            raise CellLockedError(
                f"Cell '{self.cell_id}' is referenced by a content slot; "
                "remove the slot before changing its geometry"
            )
        self.bounds = bounds


class CanvasSize(LayoutModel):
    width: int = Field(default=CANVAS_WIDTH, gt=0)
    height: int = Field(default=CANVAS_HEIGHT, gt=0)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


class Background(LayoutModel):
    """Page background: a color, an image, or an image over a color."""

    color: Optional[str] = BACKGROUND_COLOR
    image_url: Optional[str] = None
    fit_mode: FitMode = FitMode.COVER

    # Runtime only
    image: Any = Field(default=None, exclude=True)

    @property
    def is_empty(self) -> bool:
        return not self.color and not self.image_url


class ExportConfig(LayoutModel):
    default_format: ExportFormat = ExportFormat.IMAGE
    video_duration: float = Field(default=EXPORT_VIDEO_DURATION, gt=0)
    video_fps: int = Field(default=EXPORT_VIDEO_FPS, gt=0)
    image_format: ImageFormat = ImageFormat.PNG
