"""Tests for the export driver."""

from __future__ import annotations

import asyncio
from io import BytesIO

import pytest
from PIL import Image

from slotcanvas.binding import EditingSession
from slotcanvas.constants import ExportFormat, ImageFormat
from slotcanvas.export import driver
from slotcanvas.export import (
    DirectoryUploader,
    create_slug,
    export_filename,
    export_preset,
    export_session_still,
    export_still,
    iter_frames,
)
from slotcanvas.layout import Page


def decode(data: bytes) -> Image.Image:
    return Image.open(BytesIO(data))


@pytest.fixture
def session(page, binder, manager) -> EditingSession:
    return EditingSession(page, binder, manager, debounce_seconds=0.01)


class TestNames:
    def test_create_slug(self):
        assert create_slug("Spring Sale!") == "spring-sale"
        assert create_slug("  Multi   word -- name ") == "multi-word-name"
        assert create_slug("???") == "preset"

    def test_export_filename(self):
        assert export_filename("Spring Sale", 2) == "spring-sale-page-2.png"
        assert export_filename("Spring Sale", 1, ImageFormat.JPG) == "spring-sale-page-1.jpg"


class TestExportStill:
    """Still image export."""

    def test_png_matches_render(self, page: Page, renderer):
        data = export_still(page, renderer)
        image = decode(data)
        assert image.format == "PNG"
        assert image.convert("RGBA").tobytes() == renderer.render(page).tobytes()

    def test_jpg(self, page: Page, renderer):
        image = decode(export_still(page, renderer, ImageFormat.JPG))
        assert image.format == "JPEG"
        assert image.size == (480, 320)

    def test_uses_page_config(self, page: Page, renderer):
        page.export_config.image_format = ImageFormat.JPG
        assert decode(export_still(page, renderer)).format == "JPEG"

    @pytest.mark.asyncio
    async def test_session_still_sees_applied_content(self, session: EditingSession, renderer):
        await session.apply_now({"headline": "Exported"})
        data = await export_session_still(session)
        assert decode(data).convert("RGBA").tobytes() == session.surface.tobytes()


class TestIterFrames:
    """Frame sampling."""

    def test_frame_count_and_timestamps(self, page: Page, renderer):
        frames = list(iter_frames(page, renderer, duration=1.0, fps=4))
        assert [f.index for f in frames] == [0, 1, 2, 3]
        assert [f.timestamp for f in frames] == [0.0, 0.25, 0.5, 0.75]

    def test_static_page_reuses_surface(self, page: Page, renderer):
        frames = list(iter_frames(page, renderer, duration=0.5, fps=4))
        assert frames[0].image is frames[1].image

    def test_hook_rerenders(self, page: Page, renderer):
        def hook(page_: Page, timestamp: float) -> None:
            page_.find_cell_by_id("cell-1").content.text = f"t={timestamp}"

        frames = list(iter_frames(page, renderer, duration=0.5, fps=4, frame_hook=hook))
        assert frames[0].data != frames[1].data

    def test_defaults_from_config(self, page: Page, renderer):
        page.export_config.video_duration = 0.5
        page.export_config.video_fps = 10
        assert len(list(iter_frames(page, renderer))) == 5

    def test_at_least_one_frame(self, page: Page, renderer):
        assert len(list(iter_frames(page, renderer, duration=0.01, fps=1))) == 1

    def test_rejects_non_positive(self, page: Page, renderer):
        with pytest.raises(ValueError):
            list(iter_frames(page, renderer, duration=0, fps=10))


class TestExportPreset:
    """Whole-preset export through an uploader."""

    @pytest.mark.asyncio
    async def test_still_pages(self, session: EditingSession, tmp_path):
        results = await export_preset("Spring Sale", [session], DirectoryUploader(tmp_path))

        assert [r.name for r in results] == ["spring-sale-page-1.png"]
        assert results[0].success
        assert (tmp_path / "spring-sale-page-1.png").exists()

    @pytest.mark.asyncio
    async def test_pages_in_number_order(self, page, binder, manager, tmp_path):
        second = Page.deserialize(page.serialize())
        second.page_number = 2
        sessions = [
            EditingSession(second, binder),
            EditingSession(page, binder, manager),
        ]

        results = await export_preset("Spring Sale", sessions, DirectoryUploader(tmp_path))

        assert [r.name for r in results] == ["spring-sale-page-1.png", "spring-sale-page-2.png"]

    @pytest.mark.asyncio
    async def test_video_page_frames(self, session: EditingSession, tmp_path):
        config = session.page.export_config
        config.default_format = ExportFormat.VIDEO
        config.video_duration = 0.5
        config.video_fps = 4

        results = await export_preset("Promo", [session], DirectoryUploader(tmp_path))

        assert [r.name for r in results] == [
            "promo-page-1-frame-00000.png",
            "promo-page-1-frame-00001.png",
        ]

    @pytest.mark.asyncio
    async def test_static_video_encodes_once(self, session: EditingSession, tmp_path, monkeypatch):
        """A page without a frame hook is encoded once and shared by every frame."""
        config = session.page.export_config
        config.default_format = ExportFormat.VIDEO
        config.video_duration = 1.0
        config.video_fps = 4
        calls = []
        real_encode = driver.encode_image

        def counting_encode(image, image_format=ImageFormat.PNG):
            calls.append(image)
            return real_encode(image, image_format)

        monkeypatch.setattr(driver, "encode_image", counting_encode)

        results = await export_preset("Promo", [session], DirectoryUploader(tmp_path))

        assert len(results) == 4
        assert len(calls) == 1
        contents = {(tmp_path / r.name).read_bytes() for r in results}
        assert len(contents) == 1

    @pytest.mark.asyncio
    async def test_frame_hook_leaves_session_page_alone(self, session: EditingSession, tmp_path):
        config = session.page.export_config
        config.default_format = ExportFormat.VIDEO
        config.video_duration = 0.5
        config.video_fps = 4

        def hook(page_: Page, timestamp: float) -> None:
            page_.find_cell_by_id("cell-1").content.text = f"t={timestamp}"

        results = await export_preset("Promo", [session], DirectoryUploader(tmp_path), frame_hook=hook)

        assert all(r.success for r in results)
        assert session.page.find_cell_by_id("cell-1").content.text == "Hello"
        first, second = ((tmp_path / r.name).read_bytes() for r in results)
        assert first != second

    @pytest.mark.asyncio
    async def test_waits_for_session_lock(self, session: EditingSession, tmp_path):
        async with session.read_only():
            task = asyncio.create_task(
                export_preset("Spring Sale", [session], DirectoryUploader(tmp_path))
            )
            await asyncio.sleep(0.01)
            assert not task.done()

        results = await task
        assert results[0].success

    @pytest.mark.asyncio
    async def test_failed_upload_reported(self, session: EditingSession, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        results = await export_preset("Spring Sale", [session], DirectoryUploader(blocker))

        assert not results[0].success
        assert "failed" in str(results[0])
