"""Export driver: still images and frame sequences from the shared renderer.

Export renders through the same ``PageRenderer`` the designer and the end
user see, so an exported page is pixel-identical to the on-screen one.
Encoding to video is out of scope; video pages are exported as a numbered
PNG frame sequence for an external encoder.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Iterator, Optional, Sequence

from PIL import Image

from ..binding.session import EditingSession
from ..constants import JPEG_QUALITY, ExportFormat, ImageFormat
from ..design.renderer import PageRenderer
from ..layout.page import Page
from .uploaders import UploadResult, Uploader

logger = logging.getLogger("slotcanvas.export")

# Called before each frame is painted with (page, timestamp_seconds)
FrameHook = Callable[[Page, float], None]

_CONTENT_TYPES = {
    ImageFormat.PNG: "image/png",
    ImageFormat.JPG: "image/jpeg",
}


@dataclass(frozen=True)
class Frame:
    """One sampled frame of a page."""

    index: int
    timestamp: float
    image: Image.Image

    @property
    def data(self) -> bytes:
        """Raw RGBA pixel bytes."""
        return self.image.tobytes()


def encode_image(image: Image.Image, image_format: ImageFormat = ImageFormat.PNG) -> bytes:
    """Encode a rendered surface as PNG or high quality JPEG."""
    output = BytesIO()
    if image_format == ImageFormat.JPG:
        image.convert("RGB").save(output, format="JPEG", quality=JPEG_QUALITY, subsampling=0, optimize=True)
    else:
        image.save(output, format="PNG")
    return output.getvalue()


def create_slug(name: str) -> str:
    """Create file-name-friendly slug from a preset name."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"[\s-]+", "-", slug)
    return slug[:50].strip("-") or "preset"


def export_filename(preset_name: str, page_number: int, image_format: ImageFormat = ImageFormat.PNG) -> str:
    """``<preset>-page-<n>.<ext>``"""
    return f"{create_slug(preset_name)}-page-{page_number}.{image_format.value}"


def export_still(
    page: Page,
    renderer: PageRenderer,
    image_format: Optional[ImageFormat] = None,
) -> bytes:
    """Render a page once and encode it.

    Args:
        page: Page with content already bound.
        renderer: The shared renderer.
        image_format: png or jpg; the page's export config when omitted.

    Returns:
        Encoded image bytes.
    """
    fmt = image_format or page.export_config.image_format
    return encode_image(renderer.render(page), fmt)


async def export_session_still(
    session: EditingSession,
    image_format: Optional[ImageFormat] = None,
) -> bytes:
    """Export a session's page while holding its lock."""
    async with session.read_only() as page:
        return export_still(page, session.binder.renderer, image_format)


def iter_frames(
    page: Page,
    renderer: PageRenderer,
    duration: Optional[float] = None,
    fps: Optional[int] = None,
    frame_hook: Optional[FrameHook] = None,
) -> Iterator[Frame]:
    """Sample the rendered page at a fixed frame rate.

    Without a frame hook the page is static, so it is rendered once and that
    surface is reused for every frame. With a hook, the hook is called with
    each frame's timestamp and the page is re-rendered. The hook mutates the
    page it is given; ``export_preset`` hands it a copy.

    Args:
        page: Page to sample.
        renderer: The shared renderer.
        duration: Seconds; the page's export config when omitted.
        fps: Frames per second; the page's export config when omitted.
        frame_hook: Optional callback that advances animated state.

    Yields:
        Frame objects in timestamp order.
    """
    config = page.export_config
    duration = duration if duration is not None else config.video_duration
    fps = fps if fps is not None else config.video_fps
    if duration <= 0 or fps <= 0:
        raise ValueError(f"duration and fps must be positive (got {duration}, {fps})")

    count = max(1, round(duration * fps))
    still: Optional[Image.Image] = None
    for index in range(count):
        timestamp = index / fps
        if frame_hook is not None:
            frame_hook(page, timestamp)
            image = renderer.render(page)
        else:
            if still is None:
                still = renderer.render(page)
            image = still
        yield Frame(index=index, timestamp=timestamp, image=image)


async def export_preset(
    preset_name: str,
    sessions: Sequence[EditingSession],
    uploader: Uploader,
    frame_hook: Optional[FrameHook] = None,
) -> list[UploadResult]:
    """Export every page of a preset and hand the files to an uploader.

    Each page uses its own export config. Pages are exported in page number
    order, each under its session's read-only lock.

    Returns:
        One UploadResult per uploaded file.
    """
    results: list[UploadResult] = []
    for session in sorted(sessions, key=lambda s: s.page.page_number):
        async with session.read_only() as page:
            renderer = session.binder.renderer
            config = page.export_config

            if config.default_format == ExportFormat.VIDEO:
                stem = export_filename(preset_name, page.page_number).rsplit(".", 1)[0]
                # Hooks animate a copy; the session page stays untouched
                source = page.model_copy(deep=True) if frame_hook is not None else page
                files = []
                encoded: Optional[bytes] = None
                for frame in iter_frames(source, renderer, frame_hook=frame_hook):
                    # A static page reuses one surface, so one encode serves every frame
                    if encoded is None or frame_hook is not None:
                        encoded = encode_image(frame.image)
                    files.append((f"{stem}-frame-{frame.index:05d}.png", encoded))
                content_type = _CONTENT_TYPES[ImageFormat.PNG]
            else:
                fmt = config.image_format
                files = [
                    (export_filename(preset_name, page.page_number, fmt), export_still(page, renderer, fmt))
                ]
                content_type = _CONTENT_TYPES[fmt]

        # Upload outside the lock; the bytes are already final
        for name, data in files:
            results.append(await uploader.upload(name, data, content_type))

        logger.info(f"Exported page {page.page_number} of '{preset_name}' ({len(files)} files)")

    return results
