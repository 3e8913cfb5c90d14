"""Destinations for exported bytes.

The export driver never decides where bytes go; it hands each encoded
file to an ``Uploader``.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger("slotcanvas.export")


@dataclass
class UploadResult:
    """Outcome of handing one exported file to an uploader."""

    success: bool
    name: str
    location: Optional[str] = None
    error: Optional[str] = None
    size: int = 0

    def __str__(self) -> str:
        if self.success:
            return f"{self.name}: {self.location}"
        return f"{self.name}: failed ({self.error})"


class Uploader(ABC):
    """Abstract destination for exported files."""

    @abstractmethod
    async def upload(self, name: str, data: bytes, content_type: str) -> UploadResult:
        """Store one exported file.

        Args:
            name: File name, e.g. ``spring-sale-page-1.png``.
            data: Encoded bytes.
            content_type: MIME type of data.

        Returns:
            UploadResult describing where the bytes went.
        """
        ...


class DirectoryUploader(Uploader):
    """Writes exported files into a local directory."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    async def upload(self, name: str, data: bytes, content_type: str) -> UploadResult:
        path = self.output_dir / name
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            return UploadResult(success=False, name=name, error=str(e))

        logger.info(f"Exported {name} ({len(data)} bytes)")
        return UploadResult(success=True, name=name, location=str(path), size=len(data))

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
