"""Source/destination rectangles for placing an image in fixed bounds."""

from __future__ import annotations

from ..constants import FitMode, FocalPoint
from ..layout.models import ImageFit, Rect


def _cover(image_w: float, image_h: float, box: Rect, focal: FocalPoint) -> tuple[Rect, Rect]:
    img_ratio = image_w / image_h
    box_ratio = box.width / box.height

    if img_ratio > box_ratio:
        # Image wider than box - crop sides
        src_w = image_h * box_ratio
        if focal == FocalPoint.LEFT:
            src_x = 0.0
        elif focal == FocalPoint.RIGHT:
            src_x = image_w - src_w
        else:
            src_x = (image_w - src_w) / 2
        source = Rect(x=src_x, y=0.0, width=src_w, height=image_h)
    else:
        # Image taller than box - crop top/bottom
        src_h = image_w / box_ratio
        if focal == FocalPoint.TOP:
            src_y = 0.0
        elif focal == FocalPoint.BOTTOM:
            src_y = image_h - src_h
        else:
            src_y = (image_h - src_h) / 2
        source = Rect(x=0.0, y=src_y, width=image_w, height=src_h)

    return source, box


def _contain(image_w: float, image_h: float, box: Rect) -> tuple[Rect, Rect]:
    scale = min(box.width / image_w, box.height / image_h)
    draw_w = image_w * scale
    draw_h = image_h * scale
    dest = Rect(
        x=box.x + (box.width - draw_w) / 2,
        y=box.y + (box.height - draw_h) / 2,
        width=draw_w,
        height=draw_h,
    )
    return Rect(x=0.0, y=0.0, width=image_w, height=image_h), dest


def compute_image_fit(
    image_size: tuple[int, int],
    box: Rect,
    fit_mode: FitMode,
    focal_point: FocalPoint = FocalPoint.CENTER,
) -> ImageFit:
    """Compute where an image of ``image_size`` lands inside ``box``.

    Args:
        image_size: Decoded image (width, height) in pixels.
        box: Fixed destination bounds in canvas pixels.
        fit_mode: cover (crop to fill), contain (fit inside) or fill (stretch).
        focal_point: Crop anchor for cover.

    Returns:
        ImageFit with the source crop and destination rectangle.
    """
    image_w, image_h = float(image_size[0]), float(image_size[1])
    if image_w <= 0 or image_h <= 0:
        raise ValueError(f"Image has no area: {image_size}")

    box = Rect(x=box.x, y=box.y, width=box.width, height=box.height)

    if fit_mode == FitMode.COVER:
        source, dest = _cover(image_w, image_h, box, focal_point)
    elif fit_mode == FitMode.CONTAIN:
        source, dest = _contain(image_w, image_h, box)
    else:
        source, dest = Rect(x=0.0, y=0.0, width=image_w, height=image_h), box

    return ImageFit(fit_mode=fit_mode, source=source, dest=dest)
