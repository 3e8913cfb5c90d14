"""Media loading and decoding.

Loads images from data URLs, local files and http(s) URLs. Decoding is the
only suspending operation in the engine; everything downstream (enforcer,
renderer) works on already-decoded ``DecodedImage`` handles.

Usage:
    async with AssetLoader() as loader:
        decoded = await loader.load("https://example.com/logo.png")
        failures = await prepare_page_assets(page, loader)
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, unquote_to_bytes, urlparse

import httpx
from PIL import Image
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..constants import HTTP_MAX_RETRIES, HTTP_TIMEOUT_SECONDS
from ..constraints.image_fit import compute_image_fit
from ..exceptions import MediaLoadFailed
from ..layout.models import MediaContent
from ..layout.page import Page

logger = logging.getLogger("slotcanvas.assets")

# Pillow format names -> the short names used in slot constraints
_FORMAT_ALIASES = {"jpeg": "jpg", "mpo": "jpg"}


@dataclass(frozen=True)
class DecodedImage:
    """A decoded image plus what is known about its encoded form."""

    url: str
    image: Image.Image
    format: str
    byte_size: int

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


class AssetLoader:
    """Fetch and decode media, caching decoded images per URL."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        base_dir: Path | None = None,
    ):
        """Initialize the loader.

        Args:
            timeout: HTTP timeout in seconds for remote media.
            base_dir: Directory relative file paths are resolved against.
        """
        self.timeout = timeout
        self.base_dir = base_dir
        self._client: Optional[httpx.AsyncClient] = None
        self._cache: dict[str, DecodedImage] = {}

    async def __aenter__(self) -> "AssetLoader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def cached(self, url: str) -> Optional[DecodedImage]:
        """Decoded image for url if it was loaded before."""
        return self._cache.get(url)

    @retry(
        stop=stop_after_attempt(HTTP_MAX_RETRIES),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _fetch(self, url: str) -> bytes:
        client = await self._get_client()
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    def _read_data_url(self, url: str) -> bytes:
        header, _, payload = url.partition(",")
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=True)
        return unquote_to_bytes(payload)

    def _resolve_path(self, url: str) -> Path:
        parsed = urlparse(url)
        path = Path(unquote(parsed.path)) if parsed.scheme == "file" else Path(url)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    async def read_bytes(self, url: str) -> bytes:
        """Raw encoded bytes for a media reference."""
        if url.startswith("data:"):
            return self._read_data_url(url)
        if urlparse(url).scheme in ("http", "https"):
            return await self._fetch(url)
        return await asyncio.to_thread(self._resolve_path(url).read_bytes)

    @staticmethod
    def decode(url: str, data: bytes) -> DecodedImage:
        """Decode encoded bytes into an RGBA image."""
        with Image.open(BytesIO(data)) as img:
            img.load()
            fmt = (img.format or "").lower()
            image = img.convert("RGBA")
        return DecodedImage(
            url=url,
            image=image,
            format=_FORMAT_ALIASES.get(fmt, fmt),
            byte_size=len(data),
        )

    async def load(self, url: str) -> DecodedImage:
        """Load and decode an image.

        Args:
            url: data URL, file path / file:// URL, or http(s) URL.

        Returns:
            DecodedImage handle.

        Raises:
            MediaLoadFailed: If the asset cannot be read or decoded.
        """
        if not url:
            raise MediaLoadFailed(url, "empty media reference")

        cached = self._cache.get(url)
        if cached is not None:
            return cached

        try:
            data = await self.read_bytes(url)
            decoded = self.decode(url, data)
        except httpx.HTTPError as e:
            raise MediaLoadFailed(url, f"HTTP error: {e}") from e
        except (binascii.Error, ValueError) as e:
            raise MediaLoadFailed(url, f"malformed data: {e}") from e
        except OSError as e:
            # Missing files and undecodable images (UnidentifiedImageError)
            raise MediaLoadFailed(url, str(e) or type(e).__name__) from e

        logger.debug(f"Decoded {decoded.format} {decoded.size} ({decoded.byte_size} bytes)")
        self._cache[url] = decoded
        return decoded


async def prepare_page_assets(page: Page, loader: AssetLoader) -> list[MediaLoadFailed]:
    """Decode the background and designer-default media of a page.

    The renderer never performs I/O, so every media reference on a page is
    decoded here first. Failures leave the cell showing its placeholder.

    Returns:
        One MediaLoadFailed per reference that could not be loaded.
    """
    failures: list[MediaLoadFailed] = []

    if page.background is not None and page.background.image_url:
        try:
            decoded = await loader.load(page.background.image_url)
            page.background.image = decoded
        except MediaLoadFailed as e:
            logger.warning(f"Background image unavailable: {e}")
            failures.append(e)

    media_cells = [
        cell for cell in page.cells
        if isinstance(cell.content, MediaContent) and cell.content.url
    ]
    results = await asyncio.gather(
        *(loader.load(cell.content.url) for cell in media_cells),
        return_exceptions=True,
    )

    for cell, result in zip(media_cells, results):
        content = cell.content
        if isinstance(result, MediaLoadFailed):
            logger.warning(f"Media for cell '{cell.cell_id}' unavailable: {result}")
            failures.append(result)
            continue
        if isinstance(result, BaseException):
            raise result
        content.image = result
        content.fit = compute_image_fit(
            result.size, cell.bounds.to_rect(), content.fit_mode, content.focal_point
        )

    return failures
